"""
Schémas Pydantic pour les comptes utilisateurs et la session.
"""

import uuid
from typing import List, Optional

from pydantic import EmailStr, field_validator

from tuitiondesk.schemas.base import CamelModel

MIN_PASSWORD_LENGTH = 8


def normalize_role(v: Optional[str]) -> str:
    return "admin" if (v or "").strip().lower() == "admin" else "staff"


class UserCreate(CamelModel):
    name: str
    email: EmailStr
    role: str = "staff"
    password: str

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom ne peut pas être vide.")
        return v.strip()

    @field_validator("role", mode="before")
    @classmethod
    def valid_role(cls, v: Optional[str]) -> str:
        return normalize_role(v)

    @field_validator("password")
    @classmethod
    def long_enough(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Le mot de passe doit contenir au moins {MIN_PASSWORD_LENGTH} caractères.")
        return v


class UserUpdate(CamelModel):
    """L'id du corps, s'il est fourni, doit correspondre à celui de l'URL."""
    id: Optional[uuid.UUID] = None
    name: str
    email: EmailStr
    role: str = "staff"

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom ne peut pas être vide.")
        return v.strip()

    @field_validator("role", mode="before")
    @classmethod
    def valid_role(cls, v: Optional[str]) -> str:
        return normalize_role(v)


class PasswordUpdate(CamelModel):
    id: Optional[uuid.UUID] = None
    password: str

    @field_validator("password")
    @classmethod
    def long_enough(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Le mot de passe doit contenir au moins {MIN_PASSWORD_LENGTH} caractères.")
        return v


class UserResponse(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    role: str


class UserPage(CamelModel):
    users: List[UserResponse]
    total_count: int
    page: int
    page_size: int


class LoginRequest(CamelModel):
    email: EmailStr
    password: str
