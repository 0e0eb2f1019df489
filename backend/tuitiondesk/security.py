"""
Session du tableau de bord : jeton JWT signé HS256, transporté dans un cookie HTTP-only
(ou dans l'en-tête Authorization pour les clients non navigateurs).
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from tuitiondesk.config import settings
from tuitiondesk.database import get_db
from tuitiondesk.errors import Unauthorized
from tuitiondesk.models.user import User


def create_access_token(user_id: uuid.UUID, expires_minutes: Optional[int] = None) -> str:
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    now = datetime.now(timezone.utc)
    payload = {"sub": str(user_id), "iat": now, "exp": now + timedelta(minutes=minutes)}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> uuid.UUID:
    """Identifiant de l'utilisateur porté par le jeton. Lève Unauthorized si invalide ou expiré."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return uuid.UUID(payload["sub"])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Session expirée.")
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise Unauthorized("Session invalide.")


def _token_from_request(request: Request) -> Optional[str]:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Dépendance FastAPI : utilisateur connecté, sinon Unauthorized (401)."""
    token = _token_from_request(request)
    if not token:
        raise Unauthorized("Authentification requise.")
    user = db.get(User, decode_access_token(token))
    if user is None:
        raise Unauthorized("Session invalide.")
    return user
