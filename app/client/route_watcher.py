"""
➡️ But : Nettoyer les brouillons quand la navigation quitte leur écran.

- hors de /game-boards/create : le brouillon de création est supprimé ;
- hors de /game-boards/<id>/edit : tous les brouillons d'édition sont supprimés,
  sauf celui du plateau en cours d'édition.
"""

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

from app.client.drafts import DraftStore

logger = logging.getLogger(__name__)

CREATE_PATH = "/game-boards/create"
EDIT_PATH = re.compile(r"^/game-boards/(?P<board_id>[^/]+)/edit$")


def normalize_path(path: str) -> str:
    path = urlsplit(path).path or "/"
    return path.rstrip("/") or "/"


def edited_board_id(path: str) -> Optional[str]:
    match = EDIT_PATH.match(normalize_path(path))
    return match.group("board_id") if match else None


class RouteWatcher:
    def __init__(self, drafts: DraftStore):
        self.drafts = drafts
        self.current_path: Optional[str] = None

    def on_navigate(self, path: str) -> None:
        path = normalize_path(path)
        if path != CREATE_PATH:
            self.drafts.clear_create()
        self.drafts.clear_edits(except_board_id=edited_board_id(path))
        if path != self.current_path:
            logger.debug("Route changed: %s -> %s", self.current_path, path)
        self.current_path = path
