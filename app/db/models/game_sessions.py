from datetime import datetime
from typing import List, Optional
from sqlmodel import Field
from sqlalchemy import Column, JSON

from app.db.models.base import BaseModelDB


class GameSession(BaseModelDB, table=True):
    """Une partie jouée sur un plateau par un joueur nommé."""
    __tablename__ = "game_sessions"

    game_board_id: str = Field(foreign_key="game_boards.id", index=True)

    player_name: str = Field(nullable=False)
    score: int = Field(default=0, nullable=False)

    # ids des questions déjà jouées, dans l'ordre
    completed_questions: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
    completed_at: Optional[datetime] = Field(default=None)
