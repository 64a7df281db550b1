import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlmodel import Session, select

from app.db.models.users import User
from app.db.models.game_boards import GameBoard
from app.features.game_boards.schemas import Category
from app.features.themes.catalog import find_theme, default_theme
from app.security.password import hash_password

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Helpers
# -----------------------------
def _build_user_key_maps(data: Dict[str, Any]) -> Dict[str, str]:
    """owner_key -> User.email (car User.key n'existe pas en DB)."""
    users_yaml: List[Dict[str, Any]] = data.get("users", [])
    return {u["key"]: u["email"].lower() for u in users_yaml}


def _build_categories(board_yaml: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Dans le YAML, une catégorie liste ses questions dans l'ordre ;
    les points valent 100, 200, 300, 400 sauf si précisés.
    """
    categories = []
    for cat in board_yaml.get("categories", []):
        questions = [
            {
                "points": q.get("points", (index + 1) * 100),
                "question": q["question"],
                "answer": q["answer"],
            }
            for index, q in enumerate(cat.get("questions", []))
        ]
        categories.append(Category(name=cat["name"], questions=questions).model_dump(mode="json"))
    return categories


# -----------------------------
# Seeds
# -----------------------------
def seed_users(session: Session, data: Dict[str, Any]) -> int:
    created = 0
    for u in data.get("users", []):
        email = u["email"].lower()
        if session.exec(select(User).where(User.email == email)).first():
            continue
        session.add(
            User(
                email=email,
                hashed_password=hash_password(u["password"]),
                user_metadata={"full_name": u.get("full_name")} if u.get("full_name") else {},
            )
        )
        created += 1
    session.commit()
    return created


def seed_game_boards(session: Session, data: Dict[str, Any]) -> int:
    user_emails = _build_user_key_maps(data)
    created = 0
    for b in data.get("game_boards", []):
        email = user_emails.get(b["owner_key"])
        owner = session.exec(select(User).where(User.email == email)).first() if email else None
        if not owner:
            raise ValueError(f"owner_key inconnu pour le plateau '{b['title']}': {b['owner_key']}")

        exists = session.exec(
            select(GameBoard).where(GameBoard.user_id == owner.id, GameBoard.title == b["title"])
        ).first()
        if exists:
            continue

        theme = find_theme(b["theme"]) if b.get("theme") else default_theme()
        if theme is None:
            raise ValueError(f"Thème inconnu: {b['theme']}")

        session.add(
            GameBoard(
                user_id=owner.id,
                title=b["title"],
                description=b.get("description"),
                categories=_build_categories(b),
                theme=theme.model_dump(mode="json"),
            )
        )
        created += 1
    session.commit()
    return created


def seed_all(*, session: Session, seed_path: str | Path) -> Dict[str, int]:
    data = load_seed_yaml(seed_path)
    counts = {
        "users": seed_users(session, data),
        "game_boards": seed_game_boards(session, data),
    }
    logger.info("Seed terminé: %s", counts)
    return counts
