from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class GameSessionCreateIn(BaseModel):
    game_board_id: str = Field(min_length=1)
    player_name: str = Field(min_length=1, max_length=80)
    score: int = Field(default=0, ge=0)
    completed_questions: List[str] = Field(default_factory=list)

    @field_validator("player_name")
    @classmethod
    def strip_player_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("player_name cannot be blank")
        return value


class GameSessionUpdateIn(BaseModel):
    """Mise à jour après chaque question jouée (score recalculé côté client)."""
    score: Optional[int] = Field(default=None, ge=0)
    completed_questions: Optional[List[str]] = None
    completed_at: Optional[datetime] = None


class GameSessionOut(BaseModel):
    id: str
    game_board_id: str
    player_name: str
    score: int
    completed_questions: List[str]
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
