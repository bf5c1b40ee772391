from fastapi import APIRouter, Depends

from assetdesk.api.v1.dependencies import get_auth_service, get_current_principal
from assetdesk.core.schemas import MessageOut
from assetdesk.features.authentication.services import AuthService
from assetdesk.features.authentication.schemas import (
    CurrentUserEnvelope,
    LoginIn,
    LoginOut,
    ProfileUpdateIn,
)
from assetdesk.security.principals import Principal

router = APIRouter(
    tags=["auth"],
    responses={401: {"description": "Unauthenticated"}},
)

# -----------------------------
# Login
# -----------------------------
@router.post(
    "/login",
    summary="Se connecter",
    description="Retourne un Bearer token. 422 si identifiants invalides, 403 si compte employé désactivé.",
    response_model=LoginOut,
)
def login(payload: LoginIn, svc: AuthService = Depends(get_auth_service)):
    return svc.login(payload)

# -----------------------------
# Logout
# -----------------------------
@router.post(
    "/logout",
    summary="Se déconnecter",
    description="Révoque uniquement le token présenté.",
    response_model=MessageOut,
)
def logout(
    principal: Principal = Depends(get_current_principal),
    svc: AuthService = Depends(get_auth_service),
):
    svc.logout(principal)
    return MessageOut(message="Logged out successfully")

# -----------------------------
# Current user
# -----------------------------
@router.get(
    "/user",
    summary="Utilisateur courant",
    description="Les employés reçoivent en plus un bloc `profile`.",
    response_model=CurrentUserEnvelope,
    response_model_exclude_none=True,
)
def current_user(
    principal: Principal = Depends(get_current_principal),
    svc: AuthService = Depends(get_auth_service),
):
    return svc.current_user(principal)


@router.put(
    "/profile",
    summary="Modifier mon profil",
    response_model=CurrentUserEnvelope,
    response_model_exclude_none=True,
)
def update_profile(
    payload: ProfileUpdateIn,
    principal: Principal = Depends(get_current_principal),
    svc: AuthService = Depends(get_auth_service),
):
    return svc.update_profile(principal, payload)
