"""
➡️ But : Paramètres côté application (ce que le navigateur recevait en variables d'environnement).

BACKEND_URL absent = backend non configuré : les stores échouent alors explicitement
au lieu de planter sur un client inexistant.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    BACKEND_URL: Optional[str] = None        # ex: http://localhost:8080
    API_PREFIX: str = "/api/v1"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # Fichier JSON qui joue le rôle du localStorage du navigateur
    LOCAL_STORAGE_PATH: str = ".quiz-board/local_storage.json"

    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_prefix": "QUIZ_BOARD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }
