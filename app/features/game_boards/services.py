import logging
from typing import List, Sequence

from sqlmodel import Session

from app.db.models.game_boards import GameBoard
from app.db.repositories.game_boards import GameBoardRepository
from app.features.game_boards.schemas import GameBoardCreateIn, GameBoardUpdateIn
from app.utils.filters import QueryFilters

logger = logging.getLogger(__name__)

FILTERABLE_COLUMNS = {"id", "user_id"}
ORDERABLE_COLUMNS = {"created_at", "updated_at", "title"}


class PermissionError(Exception):
    """Accès interdit (plateau d'un autre utilisateur)."""
    pass


class GameBoardService:
    """
    Table `game_boards` vue par un utilisateur authentifié.

    Chaque requête est restreinte aux plateaux du demandeur : un filtre sur un autre
    user_id renvoie simplement une liste vide (comme une policy de lignes).
    Les écritures groupées (update/delete) exigent au moins un filtre.
    """

    def __init__(self, session: Session, repo: GameBoardRepository):
        self.session = session
        self.repo = repo

    # -------- Helpers --------

    def _select(self, owner_id: str, query: QueryFilters) -> Sequence[GameBoard]:
        return self.repo.list_by_owner(
            owner_id,
            filters=query.filters,
            order_by=query.order_by,
            descending=query.descending,
            offset=query.offset,
            limit=query.limit,
        )

    @staticmethod
    def _require_filter(query: QueryFilters) -> None:
        if not query.filters:
            raise ValueError("A filter is required for bulk writes")

    # -------- Reads --------

    def list(self, owner_id: str, query: QueryFilters) -> Sequence[GameBoard]:
        return self._select(owner_id, query)

    # -------- Writes --------

    def create(self, payloads: List[GameBoardCreateIn], *, owner_id: str) -> List[GameBoard]:
        created: List[GameBoard] = []
        # Transaction globale
        for payload in payloads:
            if payload.user_id is not None and payload.user_id != owner_id:
                raise PermissionError("Cannot create a game board for another user")
            data = payload.model_dump(mode="json", exclude={"user_id"})
            created.append(self.repo.create(commit=False, user_id=owner_id, **data))

        self.session.commit()
        for board in created:
            self.session.refresh(board)
        logger.info("User %s created %d game board(s)", owner_id, len(created))
        return created

    def update(self, payload: GameBoardUpdateIn, query: QueryFilters, *, owner_id: str) -> List[GameBoard]:
        self._require_filter(query)
        changes = payload.model_dump(mode="json", exclude_unset=True)
        # la base garde la main sur updated_at
        changes.pop("updated_at", None)
        if changes.get("title", "") is None:
            raise ValueError("title cannot be null")

        rows = list(self._select(owner_id, query))
        for board in rows:
            self.repo.update(board, commit=False, **changes)
        self.session.commit()
        for board in rows:
            self.session.refresh(board)
        return rows

    def delete(self, query: QueryFilters, *, owner_id: str) -> int:
        self._require_filter(query)
        rows = list(self._select(owner_id, query))
        for board in rows:
            self.repo.delete(board, commit=False)
        self.session.commit()
        if rows:
            logger.info("User %s deleted %d game board(s)", owner_id, len(rows))
        return len(rows)
