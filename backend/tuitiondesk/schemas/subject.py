"""
Schémas Pydantic pour les matières et les inscriptions.
"""

import uuid
from typing import List, Optional

from pydantic import field_validator

from tuitiondesk.schemas.base import CamelModel
from tuitiondesk.schemas.student import StudentResponse

SUBJECT_TYPES = {"classroom": "Classroom", "1 to 1": "1 to 1", "one-to-one": "1 to 1"}


def _normalize_type(v: str) -> str:
    key = " ".join(v.strip().lower().split())
    if key not in SUBJECT_TYPES:
        raise ValueError("Type de matière invalide (Classroom ou 1 to 1).")
    return SUBJECT_TYPES[key]


class SubjectCreate(CamelModel):
    code: str
    name: str
    standard: str
    type: str
    subject: Optional[str] = None

    @field_validator("code", "name", "standard")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return _normalize_type(v)


class SubjectUpdate(CamelModel):
    """Le code est accepté dans le corps uniquement pour détecter une tentative de modification."""
    code: Optional[str] = None
    name: str
    standard: str
    type: str
    subject: Optional[str] = None

    @field_validator("name", "standard")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return _normalize_type(v)


class SubjectResponse(CamelModel):
    code: str
    name: str
    standard: str
    type: str
    subject: str


class SubjectDetail(CamelModel):
    subject: SubjectResponse
    enrolled_students: List[StudentResponse]
    enrolled_count: int


class SubjectStudentsAssign(CamelModel):
    """Corps de requête pour inscrire des élèves à une matière."""
    student_ids: List[uuid.UUID]

    @field_validator("student_ids")
    @classmethod
    def not_empty(cls, v: List[uuid.UUID]) -> List[uuid.UUID]:
        if not v:
            raise ValueError("La liste d'élèves ne peut pas être vide.")
        return v


class EnrollmentResult(CamelModel):
    added_count: int
