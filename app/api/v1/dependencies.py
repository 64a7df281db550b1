"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_auth_service() : crée un AuthService à partir d’une session DB.

get_current_user() : résout l'utilisateur depuis le header Bearer.

get_query_filters() : lit les filtres `colonne=eq.valeur` / `order=colonne.desc`.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()) et à surcharger en test.
"""

from typing import Optional
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, Request, status, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.db.session import get_session
from app.db.models.users import User

from app.db.repositories.users import UserRepository
from app.db.repositories.refresh_tokens import RefreshTokenRepository
from app.features.authentication.services import AuthService

from app.db.repositories.game_boards import GameBoardRepository
from app.db.repositories.game_sessions import GameSessionRepository
from app.features.game_boards import services as game_board_services
from app.features.game_boards.services import GameBoardService
from app.features.game_sessions import services as game_session_services
from app.features.game_sessions.services import GameSessionService

from app.features.themes.services import ThemeService

from app.security.tokens import JWTSettings
from app.core.config import jwt_settings
from app.utils.filters import QueryFilters, parse_query


# -----------------------------
# Auth
# -----------------------------
def get_jwt_settings() -> JWTSettings:
    return jwt_settings


def get_auth_service(
    session: Session = Depends(get_session),
    jwt: JWTSettings = Depends(get_jwt_settings),
) -> AuthService:
    return AuthService(
        user_repo=UserRepository(session),
        refresh_repo=RefreshTokenRepository(session),
        jwt_settings=jwt,
    )


# -----------------------------
# Repositories
# -----------------------------
def get_game_board_repository(session: Session = Depends(get_session)) -> GameBoardRepository:
    return GameBoardRepository(session)

def get_game_session_repository(session: Session = Depends(get_session)) -> GameSessionRepository:
    return GameSessionRepository(session)


# -----------------------------
# Services
# -----------------------------
def get_game_board_service(
    session: Session = Depends(get_session),
    repo: GameBoardRepository = Depends(get_game_board_repository),
) -> GameBoardService:
    return GameBoardService(session=session, repo=repo)

def get_game_session_service(
    session: Session = Depends(get_session),
    repo: GameSessionRepository = Depends(get_game_session_repository),
    board_repo: GameBoardRepository = Depends(get_game_board_repository),
) -> GameSessionService:
    return GameSessionService(session=session, repo=repo, board_repo=board_repo)

def get_theme_service() -> ThemeService:
    return ThemeService()


# -----------------------------
# Filtres de requête
# -----------------------------
def _query_filters(request: Request, *, filterable, orderable) -> QueryFilters:
    try:
        return parse_query(
            request.query_params,
            filterable=filterable,
            orderable=orderable,
            default_order="created_at.desc",
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

def get_game_board_filters(request: Request) -> QueryFilters:
    return _query_filters(
        request,
        filterable=game_board_services.FILTERABLE_COLUMNS,
        orderable=game_board_services.ORDERABLE_COLUMNS,
    )

def get_game_session_filters(request: Request) -> QueryFilters:
    return _query_filters(
        request,
        filterable=game_session_services.FILTERABLE_COLUMNS,
        orderable=game_session_services.ORDERABLE_COLUMNS,
    )


# -----------------------------
# Authentication data
# -----------------------------
bearer_scheme = HTTPBearer(auto_error=True)

def get_access_token_from_bearer(
    credentials: HTTPAuthorizationCredentials = Security(bearer_scheme),
) -> str:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid auth scheme")
    return credentials.credentials


def get_current_user(
    access_token: str = Depends(get_access_token_from_bearer),
    auth_svc: AuthService = Depends(get_auth_service),
) -> User:
    return auth_svc.get_current_user(access_token=access_token)


@dataclass
class ClientContext:
    ip: Optional[str]
    user_agent: Optional[str]

def get_client_ip_and_ua(
    x_forwarded_for: Optional[str] = Header(default=None, alias="X-Forwarded-For"),
    x_real_ip: Optional[str] = Header(default=None, alias="X-Real-IP"),
    user_agent: Optional[str] = Header(default=None, alias="User-Agent"),
) -> ClientContext:
    """
    Récupère l'IP depuis X-Forwarded-For > X-Real-IP (si derrière un proxy),
    et le User-Agent (utile pour audit des refresh tokens).
    """
    ip = None
    if x_forwarded_for:
        ip = x_forwarded_for.split(",")[0].strip()
    elif x_real_ip:
        ip = x_real_ip
    return ClientContext(ip=ip, user_agent=user_agent)
