"""
Schémas Pydantic pour les créneaux horaires.
"""

import re
import uuid
from typing import List, Literal, Optional

from pydantic import field_validator, model_validator

from tuitiondesk.schemas.base import CamelModel

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


class TimeslotInput(CamelModel):
    day: Weekday
    start_time: str
    end_time: str
    teacher_name: str = ""
    student_id: Optional[str] = None
    student_name: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        v = v.strip()
        if not _TIME_RE.match(v):
            raise ValueError("Heure invalide, format attendu HH:MM.")
        return v

    @field_validator("teacher_name")
    @classmethod
    def strip_teacher(cls, v: str) -> str:
        return v.strip()

    @field_validator("student_id", "student_name")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class TimeslotReplace(CamelModel):
    """Remplacement complet des créneaux d'une matière pour un mode donné."""
    mode: Literal["normal", "oneToOne"]
    timeslots: List[TimeslotInput]

    @model_validator(mode="after")
    def student_pairing(self) -> "TimeslotReplace":
        for slot in self.timeslots:
            if self.mode == "normal" and (slot.student_id or slot.student_name):
                raise ValueError("Un créneau de classe ne peut pas être lié à un élève.")
            if self.mode == "oneToOne" and not (slot.student_id and slot.student_name):
                raise ValueError("Un cours particulier doit indiquer l'élève (identifiant et nom).")
        return self


class TimeslotResponse(CamelModel):
    timeslot_id: uuid.UUID
    subject_code: str
    day: str
    start_time: str
    end_time: str
    teacher_name: str
    student_id: Optional[str]
    student_name: Optional[str]


class TimeslotList(CamelModel):
    timeslots: List[TimeslotResponse]
