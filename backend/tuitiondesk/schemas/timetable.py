"""
Schémas de réponse des emplois du temps (vues calculées, jamais persistées).
"""

from typing import Dict, List, Optional

from tuitiondesk.schemas.base import CamelModel


class TimeWindowResponse(CamelModel):
    index: int
    start: str
    end: str
    label: str


class LegendItemResponse(CamelModel):
    abbrev: str
    color: str
    label: str


class GridEntryResponse(CamelModel):
    subject_code: str
    subject_name: str
    standard: str
    abbrev: str
    color: str
    teacher_name: str


class OneToOneEntryResponse(CamelModel):
    subject_code: str
    subject_name: Optional[str] = None
    abbrev: str
    color: str
    teacher_name: str
    student_id: Optional[str] = None
    student_name: Optional[str] = None


class OneToOneColumn(CamelModel):
    label: str
    entries: List[OneToOneEntryResponse]


class StandardGrid(CamelModel):
    """Grille d'un niveau : jour → [entrées fenêtre 0, entrées fenêtre 1]."""
    standard: str
    grid: Dict[str, List[List[GridEntryResponse]]]
    legend: List[LegendItemResponse]


class MasterTimetable(CamelModel):
    days: List[str]
    windows: List[TimeWindowResponse]
    standards: List[StandardGrid]


class OneToOneTimetable(CamelModel):
    days: List[str]
    grid: Dict[str, List[OneToOneColumn]]
    legend: List[LegendItemResponse]


class StudentTimetable(CamelModel):
    student_id: str
    name: str
    days: List[str]
    windows: List[TimeWindowResponse]
    normal_grid: Dict[str, List[List[GridEntryResponse]]]
    one_to_one_grid: Dict[str, List[OneToOneColumn]]
    legend: List[LegendItemResponse]


class SubjectTimetable(CamelModel):
    code: str
    abbrev: str
    color: str
    days: List[str]
    windows: List[TimeWindowResponse]
    occupancy: Dict[str, List[bool]]
    one_to_one_grid: Dict[str, List[OneToOneColumn]]
