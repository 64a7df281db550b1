"""
➡️ But : Formulaire de création / édition d'un plateau (sans rendu).

BoardForm garde la copie de travail (BoardFormData), expose les actions de l'écran
(titre, catégories, questions, thème) et valide avant soumission :
5 à 6 catégories nommées, 4 questions par catégorie, textes non vides.

Chaque modification appelle `on_change` (utilisé pour la sauvegarde du brouillon).
"""

from typing import Any, Callable, List, Optional

from pydantic import BaseModel, Field

from app.features.game_boards.schemas import Category, Question
from app.features.themes.catalog import default_theme, find_theme
from app.features.themes.schemas import GameTheme

MIN_CATEGORIES = 5
MAX_CATEGORIES = 6
QUESTIONS_PER_CATEGORY = 4
DEFAULT_POINTS = (100, 200, 300, 400)

QUESTION_FIELDS = ("question", "answer")


def new_category() -> Category:
    return Category(questions=[Question(points=points) for points in DEFAULT_POINTS])


def default_categories() -> List[Category]:
    return [new_category() for _ in range(MIN_CATEGORIES)]


class BoardFormData(BaseModel):
    title: str = ""
    description: str = ""
    categories: List[Category] = Field(default_factory=default_categories)
    theme: GameTheme = Field(default_factory=default_theme)


class FormValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors
        self.message = errors[0] if errors else "Invalid form"


def validate_board(data: BoardFormData) -> List[str]:
    """Liste des erreurs bloquantes (vide = soumission possible)."""
    errors: List[str] = []
    if not data.title.strip():
        errors.append("Title is required")

    count = len(data.categories)
    if not MIN_CATEGORIES <= count <= MAX_CATEGORIES:
        errors.append(f"A game board needs between {MIN_CATEGORIES} and {MAX_CATEGORIES} categories")

    for c_idx, category in enumerate(data.categories, start=1):
        if not category.name.strip():
            errors.append(f"Category {c_idx} needs a name")
        if len(category.questions) != QUESTIONS_PER_CATEGORY:
            errors.append(f"Category {c_idx} must have exactly {QUESTIONS_PER_CATEGORY} questions")
        for q_idx, question in enumerate(category.questions, start=1):
            if not question.question.strip():
                errors.append(f"Category {c_idx}, question {q_idx}: question text is required")
            if not question.answer.strip():
                errors.append(f"Category {c_idx}, question {q_idx}: answer is required")
    return errors


class BoardForm:
    def __init__(
        self,
        initial: Optional[BoardFormData] = None,
        *,
        on_change: Optional[Callable[[BoardFormData], None]] = None,
    ):
        self.data = initial.model_copy(deep=True) if initial else BoardFormData()
        self.on_change = on_change

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self.data)

    def load(self, data: BoardFormData) -> None:
        self.data = data.model_copy(deep=True)
        self._changed()

    # -------- Infos générales --------

    def set_title(self, title: str) -> None:
        self.data.title = title
        self._changed()

    def set_description(self, description: str) -> None:
        self.data.description = description
        self._changed()

    # -------- Catégories --------

    def add_category(self) -> bool:
        if len(self.data.categories) >= MAX_CATEGORIES:
            return False
        self.data.categories = [*self.data.categories, new_category()]
        self._changed()
        return True

    def remove_category(self, index: int) -> bool:
        if len(self.data.categories) <= MIN_CATEGORIES:
            return False
        self.data.categories = [c for i, c in enumerate(self.data.categories) if i != index]
        self._changed()
        return True

    def rename_category(self, index: int, name: str) -> None:
        self.data.categories[index].name = name
        self._changed()

    # -------- Questions --------

    def update_question(self, category_index: int, question_index: int, field: str, value: str) -> None:
        if field not in QUESTION_FIELDS:
            raise ValueError(f"Unknown question field: {field}")
        question = self.data.categories[category_index].questions[question_index]
        setattr(question, field, value)
        self._changed()

    def set_points(self, category_index: int, question_index: int, points: int) -> None:
        if points < 0:
            raise ValueError("points must be >= 0")
        self.data.categories[category_index].questions[question_index].points = points
        self._changed()

    # -------- Thème --------

    def select_theme(self, name: str) -> bool:
        """Copie par valeur d'un thème intégré ; False si le nom est inconnu."""
        theme = find_theme(name)
        if theme is None:
            return False
        self.data.theme = theme
        self._changed()
        return True

    def update_theme(self, **fields: Any) -> None:
        # revalide la palette entière (couleurs hex, border_radius borné)
        self.data.theme = GameTheme.model_validate({**self.data.theme.model_dump(), **fields})
        self._changed()

    # -------- Soumission --------

    def validate(self) -> List[str]:
        return validate_board(self.data)

    @property
    def is_valid(self) -> bool:
        return not self.validate()

    def submit(self) -> BoardFormData:
        errors = self.validate()
        if errors:
            raise FormValidationError(errors)
        return self.data.model_copy(deep=True)
