import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict

from jose import jwt, JWTError

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration des tokens JWT.

    - `secret` : clé secrète pour signer/valider les tokens
    - `issuer` : émetteur (utilisé dans le payload)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `access_ttl` : durée de vie d’un access token
    - `refresh_ttl` : durée de vie d’un refresh token
    - `recovery_ttl` : durée de vie d’un lien de réinitialisation de mot de passe
    """
    secret: str
    issuer: str = "quiz-board"
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=30)
    recovery_ttl: timedelta = timedelta(hours=1)


# ==========================================================
# 🧱 Types
# ==========================================================

class TokenPair(TypedDict):
    access_token: str
    refresh_token: str
    token_type: str     # "bearer"
    expires_in: int     # durée de vie de l'access token (en secondes)

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # identifiant utilisateur (uuid)
    email: str
    typ: str            # "access" | "refresh" | "recovery"
    jti: str
    iat: int
    exp: int


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique pour un token."""
    return str(uuid.uuid4())


def _encode(*, user_id: str, email: str, typ: str, jti: str, ttl: timedelta, settings: JWTSettings) -> str:
    now = _now()
    payload: DecodedToken = {
        "iss": settings.issuer,
        "sub": user_id,
        "email": email,
        "typ": typ,
        "jti": jti,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


# ==========================================================
# 🎟️ Génération des tokens
# ==========================================================

def create_access_token(*, user_id: str, email: str, settings: JWTSettings) -> str:
    """
    Crée un access token JWT court (par défaut 15 min).
    """
    return _encode(
        user_id=user_id, email=email, typ="access",
        jti=new_jti(), ttl=settings.access_ttl, settings=settings,
    )


def create_refresh_token(*, user_id: str, email: str, jti: str, settings: JWTSettings) -> str:
    """
    Crée un refresh token JWT long (par défaut 30 jours).
    Le JTI est fourni pour être stocké côté serveur.
    """
    return _encode(
        user_id=user_id, email=email, typ="refresh",
        jti=jti, ttl=settings.refresh_ttl, settings=settings,
    )


def create_recovery_token(*, user_id: str, email: str, jti: str, settings: JWTSettings) -> str:
    """
    Token à usage unique "mot de passe oublié" : échangé contre une session via /auth/verify.
    Le JTI est mémorisé sur l'utilisateur, seul le dernier lien émis est valable.
    """
    return _encode(
        user_id=user_id, email=email, typ="recovery",
        jti=jti, ttl=settings.recovery_ttl, settings=settings,
    )


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, settings: JWTSettings) -> DecodedToken:
    """
    Décode et valide un token JWT (signature + expiration + émetteur).
    Lève JWTError en cas de signature invalide ou expirée.
    """
    decoded = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        options={"verify_aud": False},
    )
    return decoded  # type: ignore[return-value]


__all__ = [
    "JWTError",
    "JWTSettings",
    "TokenPair",
    "DecodedToken",
    "new_jti",
    "create_access_token",
    "create_refresh_token",
    "create_recovery_token",
    "decode_token",
]
