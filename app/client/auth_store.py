"""
➡️ But : État d'authentification de l'application (utilisateur courant + drapeau).

Chaque opération délègue au fournisseur d'identité et renvoie un Result :
les erreurs du fournisseur ne remontent jamais jusqu'à la vue.

initialize_auth() s'abonne une seule fois aux évènements du fournisseur ;
dispose() résilie cet abonnement (une seule fois aussi).
"""

import logging
from typing import Any, Dict, Optional

from app.client.backend import AuthEvent, AuthSession, BackendClient, Subscription
from app.client.errors import BackendError, BackendNotConfiguredError
from app.client.models import User
from app.client.results import Result

logger = logging.getLogger(__name__)

# erreurs qu'un appel au fournisseur peut légitimement produire
PROVIDER_ERRORS = (BackendError, BackendNotConfiguredError)


class AuthStore:
    def __init__(self, client: Optional[BackendClient]):
        self.client = client
        self.user: Optional[User] = None
        self.is_authenticated = False
        self.loading = False
        self._subscription: Optional[Subscription] = None

    # ---------- Helpers ----------

    def _require_client(self) -> BackendClient:
        if self.client is None:
            raise BackendNotConfiguredError()
        return self.client

    def _set_user(self, payload: Optional[Dict[str, Any]]) -> None:
        if payload:
            self.user = User.from_provider(payload)
            self.is_authenticated = True
        else:
            self.user = None
            self.is_authenticated = False

    def _on_auth_event(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        logger.debug("Auth event: %s", event.value)
        self._set_user(session.user if session else None)

    # ---------- Comptes ----------

    def register(self, email: str, password: str, full_name: Optional[str] = None) -> Result:
        self.loading = True
        try:
            data = {"full_name": full_name} if full_name else {}
            user = self._require_client().auth.sign_up(email=email, password=password, data=data)
            return Result.success(user)
        except PROVIDER_ERRORS as e:
            logger.info("Registration failed for %s: %s", email, e)
            return Result.failure(e)
        finally:
            self.loading = False

    def sign_in(self, email: str, password: str) -> Result:
        self.loading = True
        try:
            session = self._require_client().auth.sign_in_with_password(email=email, password=password)
            self._set_user(session.user)
            return Result.success(session)
        except PROVIDER_ERRORS as e:
            logger.info("Sign-in failed for %s: %s", email, e)
            return Result.failure(e)
        finally:
            self.loading = False

    def sign_out(self) -> Result:
        """L'état local est toujours effacé, même si le fournisseur échoue."""
        self.loading = True
        try:
            self._require_client().auth.sign_out()
        except PROVIDER_ERRORS as e:
            logger.error("Error signing out: %s", e)
        finally:
            self._set_user(None)
            self.loading = False
        return Result.success()

    def reset_password(self, email: str) -> Result:
        self.loading = True
        try:
            self._require_client().auth.reset_password_for_email(email)
            return Result.success()
        except PROVIDER_ERRORS as e:
            return Result.failure(e)
        finally:
            self.loading = False

    def update_profile(self, **fields: Any) -> Result:
        """Champs de profil (full_name, avatar_url...) stockés dans les métadonnées du compte."""
        self.loading = True
        try:
            user = self._require_client().auth.update_user(data=fields)
            self._set_user(user)
            return Result.success(self.user)
        except PROVIDER_ERRORS as e:
            return Result.failure(e)
        finally:
            self.loading = False

    # ---------- Cycle de vie ----------

    def initialize_auth(self) -> Result:
        self.loading = True
        try:
            client = self._require_client()
            session = client.auth.get_session()
            self._set_user(session.user if session else None)
            if self._subscription is None:
                self._subscription = client.auth.on_auth_state_change(self._on_auth_event)
            return Result.success(self.user)
        except PROVIDER_ERRORS as e:
            logger.error("Error initializing auth: %s", e)
            return Result.failure(e)
        finally:
            self.loading = False

    def dispose(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
