"""
➡️ But : Configurer les logs une seule fois au démarrage (serveur, scripts, client).

Chaque module déclare son propre logger :

import logging
logger = logging.getLogger(__name__)
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """
    Installe le handler racine. Les appels suivants ne changent que le niveau.
    """
    global _configured
    resolved = (level or "INFO").upper()

    if not _configured:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
        _configured = True
    else:
        logging.getLogger().setLevel(resolved)

    # uvicorn garde ses propres handlers ; on aligne seulement le niveau
    logging.getLogger("uvicorn").setLevel(resolved)
