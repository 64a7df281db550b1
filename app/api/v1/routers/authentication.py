from fastapi import APIRouter, Depends, Response, status

from app.api.v1.dependencies import (
    get_auth_service,
    get_current_user,
    get_client_ip_and_ua,
)
from app.db.models.users import User
from app.features.authentication.services import AuthService
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

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Sign-up
# -----------------------------
@router.post(
    "/sign-up",
    summary="Créer un compte",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={409: {"description": "Email déjà utilisé"}},
)
def sign_up(payload: SignUpIn, svc: AuthService = Depends(get_auth_service)):
    return svc.sign_up(payload)

# -----------------------------
# Sign-in
# -----------------------------
@router.post(
    "/sign-in",
    summary="Se connecter",
    description="Retourne un couple access/refresh et l'utilisateur.",
    response_model=SessionOut,
    responses={401: {"description": "Identifiants invalides"}},
)
def sign_in(
    payload: SignInIn,
    svc: AuthService = Depends(get_auth_service),
    client_ctx=Depends(get_client_ip_and_ua),
):
    return svc.sign_in(payload, ip=client_ctx.ip, user_agent=client_ctx.user_agent)

# -----------------------------
# Refresh (rotation)
# -----------------------------
@router.post(
    "/refresh",
    summary="Renouveler les tokens (rotation)",
    response_model=SessionOut,
    responses={401: {"description": "Refresh token invalide, révoqué ou expiré"}},
)
def refresh(
    payload: RefreshIn,
    svc: AuthService = Depends(get_auth_service),
    client_ctx=Depends(get_client_ip_and_ua),
):
    return svc.refresh(payload, ip=client_ctx.ip, user_agent=client_ctx.user_agent)

# -----------------------------
# Logout
# -----------------------------
@router.post(
    "/logout",
    summary="Se déconnecter (révocation du refresh)",
    status_code=status.HTTP_204_NO_CONTENT,
)
def logout(payload: LogoutIn, svc: AuthService = Depends(get_auth_service)):
    svc.log_out(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# -----------------------------
# Mot de passe oublié
# -----------------------------
@router.post(
    "/recover",
    summary="Demander un lien de réinitialisation du mot de passe",
    description="Répond toujours 204, que l'email existe ou non.",
    status_code=status.HTTP_204_NO_CONTENT,
)
def recover(payload: RecoverIn, svc: AuthService = Depends(get_auth_service)):
    svc.request_recovery(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post(
    "/verify",
    summary="Échanger un token de récupération contre une session",
    response_model=SessionOut,
    responses={401: {"description": "Token invalide ou expiré"}},
)
def verify(
    payload: VerifyRecoveryIn,
    svc: AuthService = Depends(get_auth_service),
    client_ctx=Depends(get_client_ip_and_ua),
):
    return svc.verify_recovery(payload, ip=client_ctx.ip, user_agent=client_ctx.user_agent)

# -----------------------------
# User (profil courant)
# -----------------------------
@router.get(
    "/user",
    summary="Récupérer l'utilisateur courant",
    response_model=UserOut,
    responses={
        200: {"description": "Utilisateur courant"},
        401: {"description": "Token invalide ou expiré"},
        404: {"description": "Utilisateur introuvable"},
    },
)
def get_user(user: User = Depends(get_current_user)):
    return user

@router.put(
    "/user",
    summary="Mettre à jour email, mot de passe ou profil (user_metadata)",
    response_model=UserOut,
    responses={
        401: {"description": "Token invalide ou expiré"},
        409: {"description": "Email déjà utilisé"},
    },
)
def update_user(
    payload: UserUpdateIn,
    user: User = Depends(get_current_user),
    svc: AuthService = Depends(get_auth_service),
):
    return svc.update_user(user_id=user.id, payload=payload)
