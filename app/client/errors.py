from typing import Optional


class BackendError(Exception):
    """Erreur renvoyée par le backend (HTTP >= 400) ou par le transport."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthApiError(BackendError):
    """Erreur du fournisseur d'identité (identifiants invalides, session expirée...)."""
    pass


class BackendNotConfiguredError(RuntimeError):
    """Aucun client backend : la configuration d'environnement est incomplète."""

    def __init__(self, message: str = "Backend client not initialized. Please check your environment variables."):
        super().__init__(message)
        self.message = message
