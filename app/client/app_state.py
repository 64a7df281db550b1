"""
➡️ But : Conteneur explicite de l'état applicatif (pas de singleton global).

create_app_state() assemble :
settings -> stockage local -> client backend -> stores -> brouillons -> RouteWatcher -> Navigator

start() initialise l'auth (abonnement unique), close() le résilie et ferme le client HTTP.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from app.client.auth_store import AuthStore
from app.client.backend import BackendClient, create_backend_client
from app.client.config import ClientSettings
from app.client.drafts import DraftStore
from app.client.game_board_store import GameBoardStore
from app.client.results import Result
from app.client.route_watcher import RouteWatcher
from app.client.routes import Navigator
from app.client.storage import LocalStorage
from app.core.logging import configure_logging



@dataclass
class AppState:
    settings: ClientSettings
    storage: LocalStorage
    client: Optional[BackendClient]
    auth: AuthStore
    boards: GameBoardStore
    drafts: DraftStore
    watcher: RouteWatcher
    navigator: Navigator
    clock: Callable[[], float] = time.monotonic

    def start(self) -> Result:
        return self.auth.initialize_auth()

    def close(self) -> None:
        self.auth.dispose()
        if self.client is not None:
            self.client.close()


def create_app_state(
    settings: Optional[ClientSettings] = None,
    *,
    http: Optional[httpx.Client] = None,
    storage: Optional[LocalStorage] = None,
    clock: Callable[[], float] = time.monotonic,
) -> AppState:
    """
    `http` permet d'injecter un client httpx déjà construit
    (ex: TestClient FastAPI) à la place de BACKEND_URL.
    """
    settings = settings or ClientSettings()
    configure_logging(settings.LOG_LEVEL)
    if storage is None:
        storage = LocalStorage(settings.LOCAL_STORAGE_PATH)

    if http is not None:
        client = BackendClient(http, api_prefix=settings.API_PREFIX, storage=storage)
    else:
        client = create_backend_client(settings, storage)

    auth = AuthStore(client)
    drafts = DraftStore(storage)
    watcher = RouteWatcher(drafts)
    navigator = Navigator(lambda: auth.is_authenticated, watcher=watcher, clock=clock)

    return AppState(
        settings=settings,
        storage=storage,
        client=client,
        auth=auth,
        boards=GameBoardStore(client),
        drafts=drafts,
        watcher=watcher,
        navigator=navigator,
        clock=clock,
    )
