"""
Router d'administration des comptes utilisateurs.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tuitiondesk.database import get_db
from tuitiondesk.schemas.user import PasswordUpdate, UserCreate, UserPage, UserResponse, UserUpdate
from tuitiondesk.security import get_current_user
from tuitiondesk.services import user_service

router = APIRouter(
    prefix="/api/v1/users",
    tags=["Utilisateurs"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=UserPage, summary="Lister les comptes")
def list_users(
    page: Optional[int] = None,
    page_size: Optional[int] = Query(None, alias="pageSize"),
    keyword: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return user_service.list_users(db, page=page, page_size=page_size, keyword=keyword)


@router.post("", response_model=UserResponse, status_code=201, summary="Créer un compte")
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    """Crée un compte (mot de passe de 8 caractères minimum). Email déjà utilisé → 409."""
    return user_service.create_user(db, data)


@router.patch("/{user_id}", response_model=UserResponse, summary="Modifier un compte")
def update_user(user_id: uuid.UUID, data: UserUpdate, db: Session = Depends(get_db)):
    return user_service.update_user(db, user_id, data)


@router.patch("/{user_id}/password", status_code=204, summary="Changer le mot de passe")
def update_password(user_id: uuid.UUID, data: PasswordUpdate, db: Session = Depends(get_db)):
    user_service.update_password(db, user_id, data)
