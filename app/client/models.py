"""
➡️ But : Types manipulés par les stores côté application.

Les plateaux et parties reprennent les schémas de sortie de l'API
(une seule définition de la forme des données) ; User et QuestionState
n'existent que côté application.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from app.features.game_boards.schemas import Category, GameBoardOut, Question
from app.features.game_sessions.schemas import GameSessionOut
from app.features.themes.schemas import GameTheme

GameBoard = GameBoardOut
GameSession = GameSessionOut

__all__ = [
    "Category",
    "GameBoard",
    "GameSession",
    "GameTheme",
    "Question",
    "QuestionState",
    "User",
]


class User(BaseModel):
    """Copie locale de l'utilisateur du fournisseur d'identité (lecture surtout)."""
    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_provider(cls, payload: Dict[str, Any]) -> "User":
        # nom et avatar vivent dans les métadonnées libres du compte
        metadata = payload.get("user_metadata") or {}
        return cls(
            id=payload["id"],
            email=payload.get("email") or "",
            full_name=metadata.get("full_name"),
            avatar_url=metadata.get("avatar_url"),
            created_at=payload.get("created_at"),
        )


class QuestionState(BaseModel):
    """
    État éphémère d'une question pendant une partie :
    unrevealed -> revealed -> answered (correct / incorrect), terminal une fois répondu.
    """
    id: str
    revealed: bool = False
    answered: bool = False
    correct: Optional[bool] = None
