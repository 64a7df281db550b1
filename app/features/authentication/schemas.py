from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from app.features.users.schemas import UserOut
from app.security.password import MAX_PASSWORD_BYTES

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _check_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value

# ---------- Inputs ----------

class SignUpIn(BaseModel):
    email: str = Field(min_length=3, max_length=254, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=MAX_PASSWORD_BYTES)
    # métadonnées libres du profil (full_name, avatar_url)
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return _check_password_bytes(value)

class SignInIn(BaseModel):
    email: str
    password: str

class RefreshIn(BaseModel):
    refresh_token: str

class LogoutIn(BaseModel):
    refresh_token: str

class RecoverIn(BaseModel):
    email: str = Field(min_length=3, max_length=254, pattern=EMAIL_PATTERN)

class VerifyRecoveryIn(BaseModel):
    token: str

class UserUpdateIn(BaseModel):
    email: Optional[str] = Field(default=None, min_length=3, max_length=254, pattern=EMAIL_PATTERN)
    password: Optional[str] = Field(default=None, min_length=6, max_length=MAX_PASSWORD_BYTES)
    # fusionné dans user_metadata (une clé à None la supprime)
    data: Optional[Dict[str, Any]] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return _check_password_bytes(value)


# ---------- Outputs ----------

class TokenPairOut(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # secondes (durée de l'access token)

class SessionOut(TokenPairOut):
    user: UserOut
