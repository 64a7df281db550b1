from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from app.api.v1.dependencies import get_theme_service
from app.features.themes.schemas import GameTheme
from app.features.themes.services import ThemeService

router = APIRouter(
    prefix="/themes",
    tags=["themes"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Public
# -----------------------------
@router.get(
    "",
    summary="Lister les thèmes intégrés",
    response_model=List[GameTheme],
)
def list_builtin_themes(svc: ThemeService = Depends(get_theme_service)):
    return svc.list_builtin()

@router.get(
    "/{name}",
    summary="Récupérer un thème intégré par son nom",
    response_model=GameTheme,
)
def get_builtin_theme(
    name: str = Path(..., min_length=1, max_length=80),
    svc: ThemeService = Depends(get_theme_service),
):
    try:
        return svc.get_builtin(name)
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Theme not found")
