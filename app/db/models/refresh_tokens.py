"""
➡️ But : Jetons de rafraîchissement émis par le fournisseur d'identité.

Un jeton par session ouverte (identifié par son `jti`). La rotation révoque
l'ancien jeton, un changement de mot de passe révoque toutes les sessions.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB


class RefreshToken(BaseModelDB, table=True):
    __tablename__ = "refresh_token"

    jti: str = Field(index=True, unique=True)
    user_id: str = Field(index=True, foreign_key="user.id")
    expires_at: datetime
    revoked_at: Optional[datetime] = Field(default=None)
    # contexte client au moment de l'émission
    user_agent: Optional[str] = None
    ip: Optional[str] = None
