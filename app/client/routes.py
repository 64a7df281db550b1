"""
➡️ But : Table des routes de l'application et gardes d'accès.

    /                        protégée
    /login, /register        invités seulement (connecté -> /)
    /profile                 protégée
    /game-boards             protégée
    /game-boards/create      protégée
    /game-boards/:id/edit    protégée
    /game-boards/:id/play    protégée

Protégée + non connecté -> /login.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from app.client.route_watcher import RouteWatcher, normalize_path

logger = logging.getLogger(__name__)


class Access(str, Enum):
    PROTECTED = "protected"
    GUEST = "guest"


@dataclass(frozen=True)
class Route:
    name: str
    pattern: str
    access: Access

    def match(self, path: str) -> Optional[Dict[str, str]]:
        expected = [part for part in self.pattern.split("/") if part]
        actual = [part for part in path.split("/") if part]
        if len(expected) != len(actual):
            return None
        params: Dict[str, str] = {}
        for want, got in zip(expected, actual):
            if want.startswith(":"):
                params[want[1:]] = got
            elif want != got:
                return None
        return params


HOME_PATH = "/"
LOGIN_PATH = "/login"

ROUTES: List[Route] = [
    Route("home", "/", Access.PROTECTED),
    Route("login", "/login", Access.GUEST),
    Route("register", "/register", Access.GUEST),
    Route("profile", "/profile", Access.PROTECTED),
    Route("game_boards", "/game-boards", Access.PROTECTED),
    Route("create_game_board", "/game-boards/create", Access.PROTECTED),
    Route("edit_game_board", "/game-boards/:id/edit", Access.PROTECTED),
    Route("play_game", "/game-boards/:id/play", Access.PROTECTED),
]


@dataclass
class Resolution:
    path: str
    route: Optional[Route]
    params: Dict[str, str] = field(default_factory=dict)
    redirected_from: Optional[str] = None


def match_route(path: str) -> Tuple[Optional[Route], Dict[str, str]]:
    path = normalize_path(path)
    for route in ROUTES:
        params = route.match(path)
        if params is not None:
            return route, params
    return None, {}


def resolve(path: str, *, is_authenticated: bool) -> Resolution:
    """Applique les gardes ; une redirection n'est suivie qu'une fois."""
    path = normalize_path(path)
    route, params = match_route(path)
    if route is None:
        return Resolution(path=path, route=None)

    target = None
    if route.access is Access.PROTECTED and not is_authenticated:
        target = LOGIN_PATH
    elif route.access is Access.GUEST and is_authenticated:
        target = HOME_PATH

    if target is None:
        return Resolution(path=path, route=route, params=params)
    redirected, _ = match_route(target)
    return Resolution(path=target, route=redirected, redirected_from=path)


class Navigator:
    """
    Navigation de l'application : gardes, route courante, historique,
    notification du RouteWatcher. Les redirections différées (ex: après inscription)
    sont exécutées par tick() une fois l'échéance passée.
    """

    def __init__(
        self,
        is_authenticated: Callable[[], bool],
        watcher: Optional[RouteWatcher] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.is_authenticated = is_authenticated
        self.watcher = watcher
        self.clock = clock
        self.current: Optional[Resolution] = None
        self.history: List[str] = []
        self._pending: Optional[Tuple[float, str]] = None

    @property
    def path(self) -> Optional[str]:
        return self.current.path if self.current else None

    def navigate(self, path: str) -> Resolution:
        self._pending = None
        resolution = resolve(path, is_authenticated=self.is_authenticated())
        if resolution.redirected_from:
            logger.debug("Redirecting %s -> %s", resolution.redirected_from, resolution.path)
        self.current = resolution
        self.history.append(resolution.path)
        if self.watcher is not None:
            self.watcher.on_navigate(resolution.path)
        return resolution

    def navigate_later(self, path: str, delay: float) -> None:
        self._pending = (self.clock() + delay, path)

    @property
    def pending_path(self) -> Optional[str]:
        return self._pending[1] if self._pending else None

    def tick(self) -> Optional[Resolution]:
        if self._pending is None or self.clock() < self._pending[0]:
            return None
        _, path = self._pending
        return self.navigate(path)
