"""
Router de session : connexion, déconnexion et utilisateur courant.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from tuitiondesk.config import settings
from tuitiondesk.database import get_db
from tuitiondesk.errors import Unauthorized
from tuitiondesk.models.user import User
from tuitiondesk.schemas.user import LoginRequest, UserResponse
from tuitiondesk.security import create_access_token, get_current_user
from tuitiondesk.services import user_service

router = APIRouter(prefix="/api/v1/auth", tags=["Session"])


@router.post("/login", response_model=UserResponse, summary="Se connecter")
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Vérifie les identifiants et dépose le jeton de session dans un cookie HTTP-only."""
    user = user_service.authenticate(db, str(data.email), data.password)
    if user is None:
        raise Unauthorized("Email ou mot de passe incorrect.")

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_access_token(user.id),
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.ENV == "production",
    )
    return user


@router.post("/logout", status_code=204, summary="Se déconnecter")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)


@router.get("/me", response_model=UserResponse, summary="Utilisateur connecté")
def me(user: User = Depends(get_current_user)):
    return user
