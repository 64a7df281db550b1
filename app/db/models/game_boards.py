from typing import Any, Dict, List, Optional
from sqlmodel import Field
from sqlalchemy import Column, JSON

from app.db.models.base import BaseModelDB


class GameBoard(BaseModelDB, table=True):
    """
    Plateau de quiz d'un utilisateur.
    Catégories, questions et thème sont stockés par valeur (JSON) :
    ils appartiennent exclusivement au plateau.
    """
    __tablename__ = "game_boards"

    user_id: str = Field(foreign_key="user.id", index=True)

    title: str = Field(nullable=False)
    description: Optional[str] = Field(default=None)

    # [{id, name, questions: [{id, points, question, answer}]}]
    categories: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
    theme: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
    )
