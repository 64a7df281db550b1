import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import HTTPException, status

from app.db.models.base import as_utc
from app.db.models.users import User
from app.db.repositories.users import UserRepository
from app.db.repositories.refresh_tokens import RefreshTokenRepository
from app.security.password import verify_password, hash_password
from app.security.tokens import (
    JWTError,
    JWTSettings,
    create_access_token,
    create_recovery_token,
    create_refresh_token,
    decode_token,
    new_jti,
)
from app.features.authentication.notifications import RecoveryNotifier, log_recovery_link
from app.features.authentication.schemas import (
    SignUpIn,
    SignInIn,
    SessionOut,
    RefreshIn,
    LogoutIn,
    RecoverIn,
    VerifyRecoveryIn,
    UserUpdateIn,
)
from app.features.users.schemas import UserOut

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """
    Fournisseur d'identité : comptes, sessions (access/refresh), récupération de mot de passe,
    profil libre (user_metadata).
    Ne contient pas d'accès SQL direct et lève des HTTPException propres.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        refresh_repo: RefreshTokenRepository,
        jwt_settings: JWTSettings,
        notify_recovery: RecoveryNotifier = log_recovery_link,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.user_repo = user_repo
        self.refresh_repo = refresh_repo
        self.jwt = jwt_settings
        self.notify_recovery = notify_recovery
        self.now_fn = now_fn

    # ---------- Helpers ----------
    def _decode(self, token: str, *, expected_typ: str) -> dict:
        try:
            decoded = decode_token(token, self.jwt)
        except JWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

        if decoded.get("typ") != expected_typ:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
        return decoded

    def _issue_session(self, user: User, *, ip: Optional[str], user_agent: Optional[str]) -> SessionOut:
        access = create_access_token(user_id=user.id, email=user.email, settings=self.jwt)
        jti = new_jti()
        refresh = create_refresh_token(user_id=user.id, email=user.email, jti=jti, settings=self.jwt)

        # Persist refresh (révocable)
        self.refresh_repo.create(
            jti=jti,
            user_id=user.id,
            expires_at=self.now_fn() + self.jwt.refresh_ttl,
            user_agent=user_agent,
            ip=ip,
        )

        return SessionOut(
            access_token=access,
            refresh_token=refresh,
            token_type="bearer",
            expires_in=int(self.jwt.access_ttl.total_seconds()),
            user=UserOut.model_validate(user),
        )

    # ---------- Sign up ----------
    def sign_up(self, payload: SignUpIn) -> User:
        email = _normalize_email(payload.email)
        if self.user_repo.get_by_email(email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User already registered",
            )
        user = self.user_repo.create(
            email=email,
            hashed_password=hash_password(payload.password),
            user_metadata=dict(payload.data),
        )
        logger.info("User %s signed up", user.id)
        return user

    # ---------- Sign in ----------
    def sign_in(self, payload: SignInIn, *, ip: Optional[str] = None, user_agent: Optional[str] = None) -> SessionOut:
        user = self.user_repo.get_by_email(_normalize_email(payload.email))
        if not user or not verify_password(payload.password, user.hashed_password):
            # Ne pas révéler si l'utilisateur existe
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid login credentials",
            )
        return self._issue_session(user, ip=ip, user_agent=user_agent)

    # ---------- Refresh (rotation) ----------
    def refresh(self, payload: RefreshIn, *, ip: Optional[str] = None, user_agent: Optional[str] = None) -> SessionOut:
        # 1) Décoder et valider type
        decoded = self._decode(payload.refresh_token, expected_typ="refresh")

        jti = decoded.get("jti")
        if not jti:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

        # 2) Vérifier en base (existe, non révoqué, non expiré)
        rec = self.refresh_repo.get_by_jti(jti)
        if not rec or rec.revoked_at is not None or as_utc(rec.expires_at) <= self.now_fn():
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token invalid")

        # 3) Vérifier l'utilisateur
        user = self.user_repo.get(decoded["sub"])
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        # 4) Rotation : révoquer l'ancien et émettre un nouveau couple
        self.refresh_repo.revoke(jti, at=self.now_fn())
        return self._issue_session(user, ip=ip, user_agent=user_agent)

    # ---------- Logout ----------
    def log_out(self, payload: LogoutIn) -> None:
        try:
            decoded = decode_token(payload.refresh_token, self.jwt)
        except JWTError:
            # Logout idempotent : silencieux si token illisible
            return

        if decoded.get("typ") != "refresh":
            return

        jti = decoded.get("jti")
        if not jti:
            return

        self.refresh_repo.revoke(jti, at=self.now_fn())

    # ---------- Mot de passe oublié ----------
    def request_recovery(self, payload: RecoverIn) -> None:
        """Toujours silencieux : on ne révèle pas si l'email existe."""
        user = self.user_repo.get_by_email(_normalize_email(payload.email))
        if not user:
            logger.info("Password recovery requested for unknown email")
            return
        jti = new_jti()
        # un nouveau lien invalide le précédent
        self.user_repo.update(user, recovery_jti=jti)
        token = create_recovery_token(user_id=user.id, email=user.email, jti=jti, settings=self.jwt)
        self.notify_recovery(user.email, token)

    def verify_recovery(self, payload: VerifyRecoveryIn, *, ip: Optional[str] = None, user_agent: Optional[str] = None) -> SessionOut:
        decoded = self._decode(payload.token, expected_typ="recovery")
        user = self.user_repo.get(decoded["sub"])
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        if not decoded.get("jti") or decoded["jti"] != user.recovery_jti:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Recovery link already used or superseded")
        # consommé avant d'émettre la session
        self.user_repo.update(user, commit=False, recovery_jti=None)
        # le lien de récupération ferme les sessions ouvertes ailleurs
        revoked = self.refresh_repo.revoke_all_for_user(user.id, at=self.now_fn())
        logger.info("Recovery for user %s revoked %d session(s)", user.id, revoked)
        return self._issue_session(user, ip=ip, user_agent=user_agent)

    # ---------- Current user depuis access token ----------
    def get_current_user(self, *, access_token: str) -> User:
        decoded = self._decode(access_token, expected_typ="access")
        user = self.user_repo.get(decoded["sub"])
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    # ---------- Mise à jour email / mot de passe / profil ----------
    def update_user(self, *, user_id: str, payload: UserUpdateIn) -> User:
        user = self.user_repo.get(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        changes = {}
        if payload.email is not None:
            email = _normalize_email(payload.email)
            other = self.user_repo.get_by_email(email)
            if other and other.id != user.id:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")
            changes["email"] = email

        if payload.password is not None:
            changes["hashed_password"] = hash_password(payload.password)

        if payload.data is not None:
            metadata = dict(user.user_metadata or {})
            for key, value in payload.data.items():
                if value is None:
                    metadata.pop(key, None)
                else:
                    metadata[key] = value
            # nouvel objet : SQLAlchemy ne suit pas les mutations internes du JSON
            changes["user_metadata"] = metadata

        if not changes:
            return user
        return self.user_repo.update(user, updated_at=self.now_fn(), **changes)
