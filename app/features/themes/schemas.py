from typing import Optional
from pydantic import BaseModel, Field as PydField

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"

BORDER_RADIUS_MIN = 0
BORDER_RADIUS_MAX = 20


class GameTheme(BaseModel):
    """
    Palette couleurs/formes appliquée à un plateau.
    Copiée par valeur dans le plateau (un thème intégré modifié reste propre au plateau).
    """
    name: str = PydField(..., min_length=1, description="Nom du thème")
    background_color: str = PydField(..., pattern=HEX_COLOR)
    background_image: Optional[str] = PydField(default=None, description="URL d'image de fond")
    card_color: str = PydField(..., pattern=HEX_COLOR)
    card_text_color: str = PydField(..., pattern=HEX_COLOR)
    header_color: str = PydField(..., pattern=HEX_COLOR)
    header_text_color: str = PydField(..., pattern=HEX_COLOR)
    title_color: str = PydField(..., pattern=HEX_COLOR)
    border_radius: int = PydField(8, ge=BORDER_RADIUS_MIN, le=BORDER_RADIUS_MAX)
