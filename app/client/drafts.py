"""
Brouillons des formulaires de plateau, gardés dans le stockage local
pour survivre à un rechargement.

    quiz-board:draft:create            formulaire de création
    quiz-board:draft:edit:<board_id>   formulaire d'édition, un par plateau
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from app.client.forms import BoardFormData
from app.client.storage import LocalStorage

logger = logging.getLogger(__name__)

CREATE_DRAFT_KEY = "quiz-board:draft:create"
EDIT_DRAFT_PREFIX = "quiz-board:draft:edit:"


def edit_draft_key(board_id: str) -> str:
    return f"{EDIT_DRAFT_PREFIX}{board_id}"


class DraftStore:
    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _load(self, key: str) -> Optional[BoardFormData]:
        raw = self.storage.get_item(key)
        if not raw:
            return None
        try:
            return BoardFormData.model_validate_json(raw)
        except ValidationError:
            # brouillon illisible = pas de brouillon
            logger.warning("Dropping unreadable draft %s", key)
            self.storage.remove_item(key)
            return None

    def _save(self, key: str, data: BoardFormData) -> None:
        self.storage.set_item(key, data.model_dump_json())

    # ---------- Création ----------

    def save_create(self, data: BoardFormData) -> None:
        self._save(CREATE_DRAFT_KEY, data)

    def load_create(self) -> Optional[BoardFormData]:
        return self._load(CREATE_DRAFT_KEY)

    def clear_create(self) -> None:
        self.storage.remove_item(CREATE_DRAFT_KEY)

    # ---------- Édition ----------

    def save_edit(self, board_id: str, data: BoardFormData) -> None:
        self._save(edit_draft_key(board_id), data)

    def load_edit(self, board_id: str) -> Optional[BoardFormData]:
        return self._load(edit_draft_key(board_id))

    def clear_edit(self, board_id: str) -> None:
        self.storage.remove_item(edit_draft_key(board_id))

    def edit_board_ids(self) -> List[str]:
        return [key[len(EDIT_DRAFT_PREFIX):] for key in self.storage.keys() if key.startswith(EDIT_DRAFT_PREFIX)]

    def clear_edits(self, except_board_id: Optional[str] = None) -> None:
        for board_id in self.edit_board_ids():
            if board_id != except_board_id:
                self.clear_edit(board_id)
