from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.v1.dependencies import (
    get_current_user,
    get_game_session_filters,
    get_game_session_service,
)
from app.db.models.users import User
from app.features.game_sessions.schemas import (
    GameSessionCreateIn,
    GameSessionOut,
    GameSessionUpdateIn,
)
from app.features.game_sessions.services import GameSessionService
from app.utils.filters import QueryFilters


router = APIRouter(
    prefix="/game-sessions",
    tags=["game_sessions"],
    responses={401: {"description": "Non authentifié"}},
)

@router.get(
    "",
    summary="Lister les parties jouées sur mes plateaux",
    response_model=List[GameSessionOut],
)
def list_game_sessions(
    query: QueryFilters = Depends(get_game_session_filters),
    user: User = Depends(get_current_user),
    svc: GameSessionService = Depends(get_game_session_service),
):
    return svc.list(user.id, query)

@router.post(
    "",
    summary="Démarrer une ou plusieurs parties",
    status_code=status.HTTP_201_CREATED,
    response_model=List[GameSessionOut],
    responses={404: {"description": "Plateau introuvable"}},
)
def create_game_sessions(
    payload: List[GameSessionCreateIn],
    user: User = Depends(get_current_user),
    svc: GameSessionService = Depends(get_game_session_service),
):
    try:
        return svc.create(payload, owner_id=user.id)
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game board not found")

@router.patch(
    "",
    summary="Mettre à jour score / questions jouées des parties filtrées",
    response_model=List[GameSessionOut],
    responses={400: {"description": "Filtre manquant ou invalide"}},
)
def update_game_sessions(
    payload: GameSessionUpdateIn,
    query: QueryFilters = Depends(get_game_session_filters),
    user: User = Depends(get_current_user),
    svc: GameSessionService = Depends(get_game_session_service),
):
    try:
        return svc.update(payload, query, owner_id=user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
