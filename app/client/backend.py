"""
➡️ But : Client HTTP du backend, vu depuis l'application.

BackendClient.table("game_boards") : constructeur de requêtes fluide
    .select() / .insert() / .update() / .delete() + .eq() / .order() / .single() puis .execute()

BackendClient.auth : fournisseur d'identité (inscription, connexion, session persistée,
rafraîchissement des tokens, abonnement aux changements d'état).

Toutes les erreurs remontent en exceptions (BackendError / AuthApiError) ;
c'est aux stores de les convertir en Result.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

import httpx
from pydantic import BaseModel, Field, ValidationError

from app.client.config import ClientSettings
from app.client.errors import AuthApiError, BackendError
from app.client.storage import LocalStorage

logger = logging.getLogger(__name__)

TABLE_PATHS = {
    "game_boards": "/game-boards",
    "game_sessions": "/game-sessions",
}

SESSION_STORAGE_KEY = "quiz-board:auth-token"

# on rafraîchit l'access token un peu avant son expiration
REFRESH_MARGIN_SECONDS = 30


# ==========================================================
# 🔐 Session & évènements d'auth
# ==========================================================

class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    USER_UPDATED = "USER_UPDATED"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


class AuthSession(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    # epoch (secondes) : persisté, donc horloge murale
    expires_at: float
    user: Dict[str, Any] = Field(default_factory=dict)


AuthListener = Callable[[AuthEvent, Optional[AuthSession]], None]


class Subscription:
    """Handle renvoyé par on_auth_state_change ; unsubscribe() est idempotent."""

    def __init__(self, listeners: List[AuthListener], callback: AuthListener):
        self._listeners = listeners
        self.callback = callback
        self.active = True
        listeners.append(callback)

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        if self.callback in self._listeners:
            self._listeners.remove(self.callback)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, list):
        # erreurs de validation FastAPI/pydantic
        return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
    return str(detail or body)


# ==========================================================
# 🌐 Client
# ==========================================================

class BackendClient:
    def __init__(
        self,
        http: httpx.Client,
        *,
        api_prefix: str = "/api/v1",
        storage: Optional[LocalStorage] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.http = http
        self.api_prefix = api_prefix.rstrip("/")
        self.auth = AuthClient(self, storage if storage is not None else LocalStorage(), clock=clock)

    def table(self, name: str) -> "TableQuery":
        return TableQuery(self, name)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Any = None,
        authorized: bool = True,
        error_cls: Type[BackendError] = BackendError,
    ) -> Any:
        headers: Dict[str, str] = {}
        if authorized:
            token = self.auth.access_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.http.request(
                method,
                f"{self.api_prefix}{path}",
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise error_cls(f"Network error: {e}") from e

        if response.status_code >= 400:
            raise error_cls(_error_message(response), response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def close(self) -> None:
        self.http.close()


def create_backend_client(settings: ClientSettings, storage: Optional[LocalStorage] = None) -> Optional[BackendClient]:
    """None si BACKEND_URL n'est pas configuré (les stores le signalent explicitement)."""
    if not settings.BACKEND_URL:
        logger.warning("QUIZ_BOARD_BACKEND_URL is not set: backend client disabled")
        return None
    http = httpx.Client(base_url=settings.BACKEND_URL, timeout=settings.REQUEST_TIMEOUT_SECONDS)
    return BackendClient(http, api_prefix=settings.API_PREFIX, storage=storage)


# ==========================================================
# 🧮 Requêtes sur les tables
# ==========================================================

class TableQuery:
    """
    Constructeur de requête :

        client.table("game_boards").select().eq("user_id", uid).order("created_at", desc=True).execute()
        client.table("game_boards").insert(row).select().single().execute()

    Le backend renvoie toujours les lignes complètes : select() ne fait que marquer l'intention.
    """

    def __init__(self, client: BackendClient, table: str):
        if table not in TABLE_PATHS:
            raise ValueError(f"Unknown table: {table}")
        self._client = client
        self.table = table
        self._method = "GET"
        self._body: Any = None
        self._filters: List[Tuple[str, str]] = []
        self._order: Optional[str] = None
        self._limit: Optional[int] = None
        self._single = False

    # ---------- opérations ----------

    def select(self) -> "TableQuery":
        return self

    def insert(self, rows: Any) -> "TableQuery":
        self._method = "POST"
        self._body = rows if isinstance(rows, list) else [rows]
        return self

    def update(self, changes: Dict[str, Any]) -> "TableQuery":
        self._method = "PATCH"
        self._body = changes
        return self

    def delete(self) -> "TableQuery":
        self._method = "DELETE"
        return self

    # ---------- modificateurs ----------

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, f"eq.{value}"))
        return self

    def order(self, column: str, *, desc: bool = False) -> "TableQuery":
        self._order = f"{column}.{'desc' if desc else 'asc'}"
        return self

    def limit(self, count: int) -> "TableQuery":
        self._limit = count
        return self

    def single(self) -> "TableQuery":
        """Exige exactement une ligne dans la réponse, renvoyée seule."""
        self._single = True
        return self

    # ---------- exécution ----------

    def build_params(self) -> List[Tuple[str, str]]:
        params = list(self._filters)
        if self._order:
            params.append(("order", self._order))
        if self._limit is not None:
            params.append(("limit", str(self._limit)))
        return params

    def execute(self) -> Any:
        data = self._client.request(
            self._method,
            TABLE_PATHS[self.table],
            params=self.build_params() or None,
            json=self._body,
        )
        if not self._single:
            return data
        rows = data or []
        if len(rows) != 1:
            raise BackendError("JSON object requested, multiple (or no) rows returned", 406)
        return rows[0]


# ==========================================================
# 🪪 Fournisseur d'identité
# ==========================================================

class AuthClient:
    def __init__(self, client: BackendClient, storage: LocalStorage, *, clock: Callable[[], float] = time.time):
        self._client = client
        self._storage = storage
        self._clock = clock
        self._listeners: List[AuthListener] = []
        self._session: Optional[AuthSession] = self._restore()

    # ---------- Helpers ----------

    def _restore(self) -> Optional[AuthSession]:
        raw = self._storage.get_item(SESSION_STORAGE_KEY)
        if not raw:
            return None
        try:
            return AuthSession.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable stored auth session")
            self._storage.remove_item(SESSION_STORAGE_KEY)
            return None

    def _save(self, session: Optional[AuthSession]) -> None:
        self._session = session
        if session is None:
            self._storage.remove_item(SESSION_STORAGE_KEY)
        else:
            self._storage.set_item(SESSION_STORAGE_KEY, session.model_dump_json())

    def _emit(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        for listener in list(self._listeners):
            listener(event, session)

    def _session_from(self, payload: Dict[str, Any]) -> AuthSession:
        return AuthSession(
            access_token=payload["access_token"],
            refresh_token=payload["refresh_token"],
            token_type=payload.get("token_type", "bearer"),
            expires_in=payload["expires_in"],
            expires_at=self._clock() + payload["expires_in"],
            user=payload.get("user") or {},
        )

    def _call(self, method: str, path: str, *, json: Any = None, authorized: bool = False) -> Any:
        return self._client.request(
            method,
            f"/auth{path}",
            json=json,
            authorized=authorized,
            error_cls=AuthApiError,
        )

    def _require_session(self) -> AuthSession:
        if self._session is None:
            raise AuthApiError("Auth session missing!", 401)
        return self._session

    # ---------- Comptes ----------

    def sign_up(self, *, email: str, password: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._call("POST", "/sign-up", json={"email": email, "password": password, "data": data or {}})

    def sign_in_with_password(self, *, email: str, password: str) -> AuthSession:
        payload = self._call("POST", "/sign-in", json={"email": email, "password": password})
        session = self._session_from(payload)
        self._save(session)
        self._emit(AuthEvent.SIGNED_IN, session)
        return session

    def sign_out(self) -> None:
        """La session locale est toujours effacée ; l'erreur serveur éventuelle est relevée ensuite."""
        session = self._session
        error: Optional[AuthApiError] = None
        if session is not None:
            try:
                self._call("POST", "/logout", json={"refresh_token": session.refresh_token})
            except AuthApiError as e:
                error = e
        self._save(None)
        self._emit(AuthEvent.SIGNED_OUT, None)
        if error is not None:
            raise error

    def reset_password_for_email(self, email: str) -> None:
        self._call("POST", "/recover", json={"email": email})

    def verify_recovery(self, token: str) -> AuthSession:
        payload = self._call("POST", "/verify", json={"token": token})
        session = self._session_from(payload)
        self._save(session)
        self._emit(AuthEvent.PASSWORD_RECOVERY, session)
        return session

    # ---------- Session ----------

    def _expires_soon(self, session: AuthSession) -> bool:
        return session.expires_at - REFRESH_MARGIN_SECONDS <= self._clock()

    def refresh_session(self) -> AuthSession:
        current = self._require_session()
        try:
            payload = self._call("POST", "/refresh", json={"refresh_token": current.refresh_token})
        except AuthApiError as e:
            if e.status_code in (401, 404):
                # refresh révoqué/expiré : la session locale ne vaut plus rien
                self._save(None)
                self._emit(AuthEvent.SIGNED_OUT, None)
            raise
        session = self._session_from(payload)
        self._save(session)
        self._emit(AuthEvent.TOKEN_REFRESHED, session)
        return session

    def get_session(self) -> Optional[AuthSession]:
        """Session courante, rafraîchie si l'access token est (presque) expiré."""
        session = self._session
        if session is None:
            return None
        if not self._expires_soon(session):
            return session
        try:
            return self.refresh_session()
        except AuthApiError as e:
            if e.status_code in (401, 404):
                return None
            raise

    def access_token(self) -> Optional[str]:
        session = self.get_session()
        return session.access_token if session else None

    # ---------- Profil ----------

    def get_user(self) -> Dict[str, Any]:
        self._require_session()
        return self._call("GET", "/user", authorized=True)

    def update_user(
        self,
        *,
        email: Optional[str] = None,
        password: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        self._require_session()
        body = {
            key: value
            for key, value in (("email", email), ("password", password), ("data", data))
            if value is not None
        }
        user = self._call("PUT", "/user", json=body, authorized=True)
        # le token a pu être rafraîchi pendant l'appel : on repart de la session courante
        session = self._require_session().model_copy(update={"user": user})
        self._save(session)
        self._emit(AuthEvent.USER_UPDATED, session)
        return user

    # ---------- Abonnements ----------

    def on_auth_state_change(self, callback: AuthListener) -> Subscription:
        return Subscription(self._listeners, callback)
