from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.features.themes.schemas import GameTheme
from app.utils.ids import generate_id


# -----------------------------
# Contenu d'un plateau
# -----------------------------

class Question(BaseModel):
    id: str = Field(default_factory=generate_id)
    points: int = Field(ge=0, examples=[100])
    question: str = ""
    answer: str = ""


class Category(BaseModel):
    id: str = Field(default_factory=generate_id)
    name: str = ""
    # ordre = ordre d'affichage (points croissants)
    questions: List[Question] = Field(default_factory=list)


# -----------------------------
# Entrées
# -----------------------------

class GameBoardCreateIn(BaseModel):
    """
    La règle 5-6 catégories x 4 questions est portée par le formulaire,
    pas par le stockage : ici on ne valide que la forme des données.
    """
    # optionnel : si fourni, doit être l'utilisateur courant
    user_id: Optional[str] = None
    title: str = Field(min_length=1, max_length=200, examples=["Soirée quiz"])
    description: Optional[str] = None
    categories: List[Category] = Field(default_factory=list)
    theme: GameTheme


class GameBoardUpdateIn(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    categories: Optional[List[Category]] = None
    theme: Optional[GameTheme] = None
    # envoyé par certains clients ; la base recalcule updated_at elle-même
    updated_at: Optional[datetime] = None


# -----------------------------
# Sortie
# -----------------------------

class GameBoardOut(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    categories: List[Category]
    theme: GameTheme
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    def iter_questions(self):
        for category in self.categories:
            yield from category.questions

    @property
    def question_count(self) -> int:
        return sum(len(category.questions) for category in self.categories)
