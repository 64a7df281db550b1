"""Palette de thèmes intégrés proposés par le formulaire de création."""

from typing import List, Optional

from app.features.themes.schemas import GameTheme

DEFAULT_THEMES: List[GameTheme] = [
    GameTheme(
        name="Classic Blue",
        background_color="#0f1419",
        card_color="#1e40af",
        card_text_color="#ffffff",
        header_color="#3b82f6",
        header_text_color="#ffffff",
        title_color="#60a5fa",
        border_radius=8,
    ),
    GameTheme(
        name="Royal Purple",
        background_color="#1e1b4b",
        card_color="#7c3aed",
        card_text_color="#ffffff",
        header_color="#8b5cf6",
        header_text_color="#ffffff",
        title_color="#a78bfa",
        border_radius=12,
    ),
    GameTheme(
        name="Emerald Green",
        background_color="#064e3b",
        card_color="#059669",
        card_text_color="#ffffff",
        header_color="#10b981",
        header_text_color="#ffffff",
        title_color="#34d399",
        border_radius=6,
    ),
    GameTheme(
        name="Sunset Orange",
        background_color="#7c2d12",
        card_color="#ea580c",
        card_text_color="#ffffff",
        header_color="#f97316",
        header_text_color="#ffffff",
        title_color="#fb923c",
        border_radius=10,
    ),
]


def default_theme() -> GameTheme:
    """Copie du premier thème : le plateau garde son thème par valeur."""
    return DEFAULT_THEMES[0].model_copy(deep=True)


def find_theme(name: str) -> Optional[GameTheme]:
    for theme in DEFAULT_THEMES:
        if theme.name.lower() == name.lower():
            return theme.model_copy(deep=True)
    return None
