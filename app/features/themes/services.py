from typing import List

from app.features.themes.catalog import DEFAULT_THEMES, find_theme
from app.features.themes.schemas import GameTheme


class ThemeService:
    """Lecture du catalogue de thèmes intégrés (public, sans base)."""

    def list_builtin(self) -> List[GameTheme]:
        return [theme.model_copy(deep=True) for theme in DEFAULT_THEMES]

    def get_builtin(self, name: str) -> GameTheme:
        theme = find_theme(name)
        if not theme:
            raise LookupError("Theme not found.")
        return theme
