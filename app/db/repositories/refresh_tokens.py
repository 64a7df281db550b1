from datetime import datetime
from typing import Optional

from sqlmodel import select

from app.db.models.refresh_tokens import RefreshToken
from app.db.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    model = RefreshToken

    def get_by_jti(self, jti: str) -> Optional[RefreshToken]:
        return self.session.exec(select(self.model).where(self.model.jti == jti)).first()

    def revoke(self, jti: str, *, at: datetime) -> bool:
        """Idempotent : False si le jeton est inconnu ou déjà révoqué."""
        token = self.get_by_jti(jti)
        if token is None or token.revoked_at is not None:
            return False
        self.update(token, revoked_at=at)
        return True

    def revoke_all_for_user(self, user_id: str, *, at: datetime, commit: bool = True) -> int:
        tokens = self.session.exec(
            select(self.model).where(
                self.model.user_id == user_id,
                self.model.revoked_at.is_(None),
            )
        ).all()
        for token in tokens:
            token.revoked_at = at
            self.session.add(token)
        if commit:
            self.session.commit()
        return len(tokens)
