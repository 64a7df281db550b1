from typing import List, Sequence

from sqlmodel import Session

from app.db.models.game_sessions import GameSession
from app.db.repositories.game_boards import GameBoardRepository
from app.db.repositories.game_sessions import GameSessionRepository
from app.features.game_sessions.schemas import GameSessionCreateIn, GameSessionUpdateIn
from app.utils.filters import QueryFilters

FILTERABLE_COLUMNS = {"id", "game_board_id"}
ORDERABLE_COLUMNS = {"created_at", "updated_at", "score"}


class GameSessionService:
    """
    Table `game_sessions` : une ligne par partie jouée.
    Visibilité = propriétaire du plateau joué.
    """

    def __init__(self, session: Session, repo: GameSessionRepository, board_repo: GameBoardRepository):
        self.session = session
        self.repo = repo
        self.boards = board_repo

    def _select(self, owner_id: str, query: QueryFilters) -> Sequence[GameSession]:
        return self.repo.list_by_board_owner(
            owner_id,
            filters=query.filters,
            order_by=query.order_by,
            descending=query.descending,
            offset=query.offset,
            limit=query.limit,
        )

    def list(self, owner_id: str, query: QueryFilters) -> Sequence[GameSession]:
        return self._select(owner_id, query)

    def create(self, payloads: List[GameSessionCreateIn], *, owner_id: str) -> List[GameSession]:
        created: List[GameSession] = []
        for payload in payloads:
            board = self.boards.get(payload.game_board_id)
            if not board or board.user_id != owner_id:
                raise LookupError("GAME_BOARD_NOT_FOUND")
            created.append(self.repo.create(commit=False, **payload.model_dump()))

        self.session.commit()
        for game_session in created:
            self.session.refresh(game_session)
        return created

    def update(self, payload: GameSessionUpdateIn, query: QueryFilters, *, owner_id: str) -> List[GameSession]:
        if not query.filters:
            raise ValueError("A filter is required for bulk writes")
        changes = payload.model_dump(exclude_unset=True)
        if "score" in changes and changes["score"] is None:
            raise ValueError("score cannot be null")
        if "completed_questions" in changes and changes["completed_questions"] is None:
            raise ValueError("completed_questions cannot be null")

        rows = list(self._select(owner_id, query))
        for game_session in rows:
            self.repo.update(game_session, commit=False, **changes)
        self.session.commit()
        for game_session in rows:
            self.session.refresh(game_session)
        return rows
