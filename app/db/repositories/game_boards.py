from typing import Any, Dict, Optional, Sequence

from sqlmodel import select

from app.db.repositories.base import BaseRepository

from app.db.models.game_boards import GameBoard

class GameBoardRepository(BaseRepository[GameBoard]):
    model = GameBoard

    def list_by_owner(
        self,
        owner_id: str,
        *,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[GameBoard]:
        """
        Plateaux d'un propriétaire, filtres d'égalité optionnels.
        Par défaut : les plus récents d'abord.
        """
        stmt = select(GameBoard).where(GameBoard.user_id == owner_id)
        stmt = self.apply_filters(stmt, filters or {})
        stmt = self.apply_order(stmt, order_by, descending)
        stmt = self.apply_page(stmt, offset, limit)
        return self.session.exec(stmt).all()
