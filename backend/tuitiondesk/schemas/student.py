"""
Schémas Pydantic pour les élèves.
"""

import uuid
from datetime import date
from typing import List, Optional

from pydantic import EmailStr, field_validator

from tuitiondesk.schemas.base import CamelModel

STATUSES = ("active", "pending", "trial", "inactive", "removed")
MODES = ("NORMAL", "1 TO 1", "OTHERS")
ONE_TO_ONE_MODE = "1 TO 1"


def normalize_status(v: str) -> str:
    v = v.strip().lower()
    if v not in STATUSES:
        raise ValueError(f"Statut invalide : {v}.")
    return v


def normalize_modes(v: List[str]) -> List[str]:
    modes = []
    for mode in v:
        m = " ".join(mode.strip().upper().split())
        if m not in MODES:
            raise ValueError(f"Mode invalide : {mode}.")
        if m not in modes:
            modes.append(m)
    return modes


def normalize_dlp(v: Optional[str]) -> str:
    return "DLP" if (v or "").strip().upper() == "DLP" else "non-DLP"


class StudentCreate(CamelModel):
    """Schéma de création d'un élève (POST /students)."""
    student_id: str
    name: str
    full_name: Optional[str] = None
    parent_name: Optional[str] = None
    student_phone: Optional[str] = None
    parent_phone: Optional[str] = None
    email: Optional[EmailStr] = None
    school: Optional[str] = None
    grade: Optional[str] = None
    status: str = "pending"
    class_in_id: Optional[str] = None
    registered_date: Optional[date] = None
    modes: List[str] = []
    dlp: str = "non-DLP"
    subjects: List[str] = []
    recurring_payment: bool = False
    next_recurring_payment_date: Optional[date] = None
    last_payment_made_date: Optional[date] = None

    @field_validator("student_id", "name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: str) -> str:
        return normalize_status(v)

    @field_validator("modes")
    @classmethod
    def valid_modes(cls, v: List[str]) -> List[str]:
        return normalize_modes(v)

    @field_validator("dlp", mode="before")
    @classmethod
    def valid_dlp(cls, v: Optional[str]) -> str:
        return normalize_dlp(v)


class StudentUpdate(CamelModel):
    """
    Schéma de mise à jour (PATCH /students/{id}).
    L'id du corps doit correspondre à celui de l'URL ; les champs absents ne sont pas modifiés.
    Si `subjects` est fourni, les inscriptions sont synchronisées sur cette liste.
    """
    id: uuid.UUID
    student_id: Optional[str] = None
    name: Optional[str] = None
    full_name: Optional[str] = None
    parent_name: Optional[str] = None
    student_phone: Optional[str] = None
    parent_phone: Optional[str] = None
    email: Optional[EmailStr] = None
    school: Optional[str] = None
    grade: Optional[str] = None
    status: Optional[str] = None
    class_in_id: Optional[str] = None
    registered_date: Optional[date] = None
    modes: Optional[List[str]] = None
    dlp: Optional[str] = None
    subjects: Optional[List[str]] = None
    recurring_payment: Optional[bool] = None
    next_recurring_payment_date: Optional[date] = None
    last_payment_made_date: Optional[date] = None

    # Les validateurs ne tournent pas sur les valeurs par défaut :
    # None ici vient d'un null explicite, refusé pour les colonnes NOT NULL.
    @field_validator("student_id", "name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Le statut ne peut pas être vide.")
        return normalize_status(v)

    @field_validator("modes")
    @classmethod
    def valid_modes(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return normalize_modes(v) if v is not None else v

    @field_validator("dlp")
    @classmethod
    def valid_dlp(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Le champ DLP ne peut pas être vide.")
        return normalize_dlp(v)


class StudentResponse(CamelModel):
    """Schéma de réponse pour un élève, avec les codes des matières suivies."""
    id: uuid.UUID
    student_id: str
    name: str
    full_name: Optional[str] = None
    parent_name: Optional[str] = None
    student_phone: Optional[str] = None
    parent_phone: Optional[str] = None
    email: Optional[str] = None
    school: Optional[str] = None
    grade: Optional[str] = None
    status: str
    class_in_id: Optional[str] = None
    registered_date: Optional[date] = None
    modes: List[str] = []
    dlp: str = "non-DLP"
    subjects: List[str] = []
    recurring_payment: bool = False
    next_recurring_payment_date: Optional[date] = None
    last_payment_made_date: Optional[date] = None


class StudentPage(CamelModel):
    students: List[StudentResponse]
    total_count: int
    page: int
    page_size: int
