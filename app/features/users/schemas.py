"""
➡️ But : Définir les formats de sortie de l’API pour les utilisateurs.

Sépare les modèles "de stockage" (ORM) de ceux "de transfert" (I/O API).
Empêche d’exposer par erreur des infos sensibles (ex: hash de mot de passe).
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field

class UserOut(BaseModel):
    id: str
    email: str
    # profil libre : full_name, avatar_url...
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
