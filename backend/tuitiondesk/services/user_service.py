"""
Service métier des comptes utilisateurs.
Les mots de passe sont hachés avec werkzeug, jamais stockés en clair.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from tuitiondesk.errors import Conflict, NotFound, ValidationFailed
from tuitiondesk.models.user import User
from tuitiondesk.schemas.user import PasswordUpdate, UserCreate, UserPage, UserResponse, UserUpdate
from tuitiondesk.services.student_service import clamp_page

logger = logging.getLogger(__name__)


def list_users(db: Session, page: Optional[int] = None, page_size: Optional[int] = None,
               keyword: Optional[str] = None) -> UserPage:
    """Liste paginée des comptes, plus récents d'abord, filtrable sur le nom et l'email."""
    page, page_size = clamp_page(page, page_size)

    conditions = []
    keyword = (keyword or "").strip()
    if keyword:
        pattern = f"%{keyword}%"
        conditions.append(or_(User.name.ilike(pattern), User.email.ilike(pattern)))

    total = db.execute(
        select(func.count()).select_from(User).where(*conditions)
    ).scalar() or 0

    users = db.execute(
        select(User)
        .where(*conditions)
        .order_by(User.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).scalars().all()

    return UserPage(
        users=[UserResponse.model_validate(u) for u in users],
        total_count=total,
        page=page,
        page_size=page_size,
    )


def create_user(db: Session, data: UserCreate) -> UserResponse:
    """Crée un compte. Lève Conflict si l'email est déjà utilisé."""
    user = User(
        name=data.name,
        email=str(data.email).lower(),
        role=data.role,
        password_hash=generate_password_hash(data.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(f"Un compte avec l'email '{data.email}' existe déjà.")
    db.refresh(user)
    logger.info("Compte créé : %s (%s)", user.email, user.role)
    return UserResponse.model_validate(user)


def update_user(db: Session, user_id: uuid.UUID, data: UserUpdate) -> UserResponse:
    if data.id is not None and data.id != user_id:
        raise ValidationFailed("Identifiant d'utilisateur invalide.")

    user = db.get(User, user_id)
    if user is None:
        raise NotFound("Utilisateur introuvable.")

    user.name = data.name
    user.email = str(data.email).lower()
    user.role = data.role
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(f"Un compte avec l'email '{data.email}' existe déjà.")
    db.refresh(user)
    return UserResponse.model_validate(user)


def update_password(db: Session, user_id: uuid.UUID, data: PasswordUpdate) -> None:
    if data.id is not None and data.id != user_id:
        raise ValidationFailed("Identifiant d'utilisateur invalide.")

    user = db.get(User, user_id)
    if user is None:
        raise NotFound("Utilisateur introuvable.")

    user.password_hash = generate_password_hash(data.password)
    db.commit()
    logger.info("Mot de passe modifié pour %s", user.email)


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Retourne l'utilisateur si le couple email / mot de passe est valide, sinon None."""
    user = db.execute(
        select(User).where(User.email == email.strip().lower())
    ).scalar_one_or_none()
    if user is None or not user.password_hash:
        return None
    if not check_password_hash(user.password_hash, password):
        return None
    return user
