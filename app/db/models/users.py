"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les comptes gérés par le fournisseur d'identité.

Le profil libre (nom complet, avatar...) est stocké tel quel dans `user_metadata` (JSON),
le front y lit `full_name` et `avatar_url`.
"""

from typing import Any, Dict, Optional

from sqlmodel import Field
from sqlalchemy import Column, JSON

from .base import BaseModelDB

class User(BaseModelDB, table=True):
    email: str = Field(index=True, unique=True)
    hashed_password: str
    user_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
    )
    # JTI du dernier lien de récupération encore utilisable
    recovery_jti: Optional[str] = Field(default=None)
