from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.v1.dependencies import (
    get_current_user,
    get_game_board_filters,
    get_game_board_service,
)
from app.db.models.users import User
from app.features.game_boards.schemas import (
    GameBoardCreateIn,
    GameBoardOut,
    GameBoardUpdateIn,
)
from app.features.game_boards.services import GameBoardService, PermissionError
from app.utils.filters import QueryFilters


router = APIRouter(
    prefix="/game-boards",
    tags=["game_boards"],
    responses={401: {"description": "Non authentifié"}},
)

# -----------------------------
# Lecture (filtres eq + tri)
# -----------------------------
@router.get(
    "",
    summary="Lister mes plateaux (filtres `colonne=eq.valeur`, `order=colonne.desc`)",
    response_model=List[GameBoardOut],
)
def list_game_boards(
    query: QueryFilters = Depends(get_game_board_filters),
    user: User = Depends(get_current_user),
    svc: GameBoardService = Depends(get_game_board_service),
):
    return svc.list(user.id, query)

# -----------------------------
# Insertion (une ou plusieurs lignes)
# -----------------------------
@router.post(
    "",
    summary="Créer un ou plusieurs plateaux",
    status_code=status.HTTP_201_CREATED,
    response_model=List[GameBoardOut],
    responses={403: {"description": "Forbidden"}},
)
def create_game_boards(
    payload: List[GameBoardCreateIn],
    user: User = Depends(get_current_user),
    svc: GameBoardService = Depends(get_game_board_service),
):
    try:
        return svc.create(payload, owner_id=user.id)
    except PermissionError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

# -----------------------------
# Mise à jour (lignes filtrées)
# -----------------------------
@router.patch(
    "",
    summary="Mettre à jour les plateaux filtrés",
    response_model=List[GameBoardOut],
    responses={400: {"description": "Filtre manquant ou invalide"}},
)
def update_game_boards(
    payload: GameBoardUpdateIn,
    query: QueryFilters = Depends(get_game_board_filters),
    user: User = Depends(get_current_user),
    svc: GameBoardService = Depends(get_game_board_service),
):
    try:
        return svc.update(payload, query, owner_id=user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# -----------------------------
# Suppression (lignes filtrées)
# -----------------------------
@router.delete(
    "",
    summary="Supprimer les plateaux filtrés",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"description": "Filtre manquant ou invalide"}},
)
def delete_game_boards(
    query: QueryFilters = Depends(get_game_board_filters),
    user: User = Depends(get_current_user),
    svc: GameBoardService = Depends(get_game_board_service),
):
    try:
        svc.delete(query, owner_id=user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
