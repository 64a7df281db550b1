"""
Livraison du lien "mot de passe oublié".

Pas d'envoi d'email ici : le lien est journalisé (en dev uniquement),
un vrai transport se branche en remplaçant le notifier injecté dans AuthService.
"""

import logging
from typing import Callable
from urllib.parse import urlencode

from app.core.config import settings

logger = logging.getLogger(__name__)

RecoveryNotifier = Callable[[str, str], None]


def build_recovery_link(token: str) -> str:
    return f"{settings.RECOVERY_REDIRECT_URL}?{urlencode({'type': 'recovery', 'token': token})}"


def log_recovery_link(email: str, token: str) -> None:
    if settings.ENV == "dev":
        logger.info("Password recovery link for %s: %s", email, build_recovery_link(token))
    else:
        logger.info("Password recovery requested for %s", email)
