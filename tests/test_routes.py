import pytest

from app.client.drafts import CREATE_DRAFT_KEY, DraftStore
from app.client.forms import BoardFormData
from app.client.route_watcher import RouteWatcher
from app.client.routes import Navigator, match_route, resolve
from app.client.storage import LocalStorage

PROTECTED = ["/", "/profile", "/game-boards", "/game-boards/create", "/game-boards/42/edit", "/game-boards/42/play"]


@pytest.mark.parametrize("path", PROTECTED)
def test_protected_routes_redirect_to_login(path):
    resolution = resolve(path, is_authenticated=False)
    assert resolution.path == "/login"
    assert resolution.route.name == "login"
    assert resolution.redirected_from == path


@pytest.mark.parametrize("path", PROTECTED)
def test_protected_routes_open_when_signed_in(path):
    resolution = resolve(path, is_authenticated=True)
    assert resolution.path == path
    assert resolution.redirected_from is None


@pytest.mark.parametrize("path", ["/login", "/register"])
def test_auth_routes_redirect_home_when_signed_in(path):
    assert resolve(path, is_authenticated=True).path == "/"
    assert resolve(path, is_authenticated=False).path == path


def test_route_params():
    route, params = match_route("/game-boards/abc/play")
    assert route.name == "play_game"
    assert params == {"id": "abc"}

    route, params = match_route("/game-boards/create")
    assert route.name == "create_game_board"
    assert params == {}


def test_unknown_path_has_no_route():
    resolution = resolve("/nowhere", is_authenticated=True)
    assert resolution.route is None


def test_navigator_notifies_route_watcher(clock):
    storage = LocalStorage()
    drafts = DraftStore(storage)
    navigator = Navigator(lambda: True, watcher=RouteWatcher(drafts), clock=clock)

    navigator.navigate("/game-boards/create")
    drafts.save_create(BoardFormData(title="Draft"))
    navigator.navigate("/game-boards")

    assert CREATE_DRAFT_KEY not in storage
    assert navigator.history == ["/game-boards/create", "/game-boards"]


def test_delayed_navigation(clock):
    navigator = Navigator(lambda: False, clock=clock)
    navigator.navigate("/register")
    navigator.navigate_later("/login", 3.0)

    clock.advance(2.9)
    assert navigator.tick() is None
    assert navigator.path == "/register"

    clock.advance(0.2)
    assert navigator.tick().path == "/login"
    assert navigator.pending_path is None


def test_explicit_navigation_cancels_pending_redirect(clock):
    navigator = Navigator(lambda: False, clock=clock)
    navigator.navigate_later("/login", 3.0)
    navigator.navigate("/register")
    clock.advance(5)
    assert navigator.tick() is None
