"""
Vues d'emploi du temps : charge matières et créneaux puis délègue la
construction des grilles au module timetable.
"""

import logging
import uuid
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from tuitiondesk.errors import NotFound, ValidationFailed
from tuitiondesk.models.student import Student
from tuitiondesk.models.subject import Subject
from tuitiondesk.schemas.timeslot import WEEKDAYS
from tuitiondesk.schemas.timetable import (
    GridEntryResponse,
    LegendItemResponse,
    MasterTimetable,
    OneToOneColumn,
    OneToOneEntryResponse,
    OneToOneTimetable,
    StandardGrid,
    StudentTimetable,
    SubjectTimetable,
    TimeWindowResponse,
)
from tuitiondesk.services import enrollment_service, timeslot_service
from tuitiondesk.services.legend import abbreviate, build_legend, colorize, display_name, is_dlp
from tuitiondesk.services.timetable import (
    NIGHT_WINDOWS,
    DynamicGrid,
    FixedGrid,
    build_dynamic_grid,
    build_fixed_grid,
    dynamic_grid_subjects,
    fixed_grid_subjects,
    index_subjects,
    partition_slots,
    slots_for_student,
    slots_for_subject,
    slots_for_subjects,
    window_occupancy,
)

logger = logging.getLogger(__name__)

MAX_STANDARDS = 5
CLASSROOM_TYPE = "Classroom"
SUBJECT_FILTERS = ("ALL", "DLP", "KSSM")


def get_all_subjects(db: Session) -> List[Subject]:
    return list(db.execute(select(Subject).order_by(Subject.code)).scalars().all())


def normalize_standards(standards: Optional[Sequence[str]]) -> List[str]:
    """Niveaux distincts en majuscules, au plus MAX_STANDARDS."""
    result = []
    for standard in standards or []:
        s = (standard or "").strip().upper()
        if s and s not in result:
            result.append(s)
    if len(result) > MAX_STANDARDS:
        raise ValidationFailed(f"Au plus {MAX_STANDARDS} niveaux peuvent être affichés simultanément.")
    return result


def master_timetable(db: Session, standards: Sequence[str], subject_filter: str = "ALL") -> MasterTimetable:
    """
    Grille des cours en classe par niveau sélectionné.
    subject_filter : ALL, DLP (noms contenant DLP) ou KSSM (les autres).
    """
    subject_filter = (subject_filter or "ALL").strip().upper()
    if subject_filter not in SUBJECT_FILTERS:
        raise ValidationFailed("Filtre de matière invalide (ALL, DLP ou KSSM).")
    selected = normalize_standards(standards)

    subjects = get_all_subjects(db)
    normal, _ = partition_slots(timeslot_service.get_all_timeslots(db))
    subjects_by_code = index_subjects(subjects)

    grids = []
    for standard in selected:
        codes = [
            s.code for s in subjects
            if (s.standard or "").upper() == standard
            and s.type == CLASSROOM_TYPE
            and _matches_filter(s, subject_filter)
        ]
        grid = build_fixed_grid(slots_for_subjects(normal, codes), subjects_by_code)
        grids.append(StandardGrid(
            standard=standard,
            grid=_fixed_grid_response(grid),
            legend=_legend_response(fixed_grid_subjects(grid)),
        ))

    return MasterTimetable(days=list(WEEKDAYS), windows=_windows_response(), standards=grids)


def one_to_one_timetable(db: Session, standards: Optional[Sequence[str]] = None) -> OneToOneTimetable:
    """Tous les cours particuliers, éventuellement limités aux matières des niveaux donnés."""
    selected = normalize_standards(standards)
    subjects = get_all_subjects(db)
    subjects_by_code = index_subjects(subjects)
    _, one_to_one = partition_slots(timeslot_service.get_all_timeslots(db))

    if selected:
        codes = [s.code for s in subjects if (s.standard or "").upper() in selected]
        one_to_one = slots_for_subjects(one_to_one, codes)

    grid = build_dynamic_grid(one_to_one, subjects_by_code)
    return OneToOneTimetable(
        days=list(WEEKDAYS),
        grid=_dynamic_grid_response(grid),
        legend=_legend_response(dynamic_grid_subjects(grid)),
    )


def student_timetable(db: Session, student_id: uuid.UUID) -> StudentTimetable:
    """
    Emploi du temps d'un élève : cours en classe des matières suivies
    et cours particuliers qui lui sont attribués.
    """
    student = db.get(Student, student_id)
    if student is None:
        raise NotFound("Élève introuvable.")

    codes = enrollment_service.get_subject_codes(db, student.id)
    subjects_by_code = index_subjects(get_all_subjects(db))
    normal, one_to_one = partition_slots(timeslot_service.get_all_timeslots(db))

    fixed = build_fixed_grid(slots_for_subjects(normal, codes), subjects_by_code)
    dynamic = build_dynamic_grid(slots_for_student(one_to_one, student.student_id), subjects_by_code)

    return StudentTimetable(
        student_id=student.student_id,
        name=student.name,
        days=list(WEEKDAYS),
        windows=_windows_response(),
        normal_grid=_fixed_grid_response(fixed),
        one_to_one_grid=_dynamic_grid_response(dynamic),
        legend=_legend_response(fixed_grid_subjects(fixed) + dynamic_grid_subjects(dynamic)),
    )


def subject_timetable(db: Session, code: str) -> SubjectTimetable:
    """Occupation des fenêtres du soir et cours particuliers d'une matière."""
    subject = db.get(Subject, code)
    if subject is None:
        raise NotFound(f"Matière '{code}' introuvable.")

    slots = slots_for_subject(timeslot_service.get_all_timeslots(db), code)
    normal, one_to_one = partition_slots(slots)
    abbrev = abbreviate(display_name(subject))

    return SubjectTimetable(
        code=subject.code,
        abbrev=abbrev,
        color=colorize(abbrev),
        days=list(WEEKDAYS),
        windows=_windows_response(),
        occupancy=window_occupancy(normal),
        one_to_one_grid=_dynamic_grid_response(build_dynamic_grid(one_to_one, {subject.code: subject})),
    )


def _matches_filter(subject: Subject, subject_filter: str) -> bool:
    if subject_filter == "ALL":
        return True
    dlp = is_dlp(subject.name)
    return dlp if subject_filter == "DLP" else not dlp


def _windows_response() -> List[TimeWindowResponse]:
    return [
        TimeWindowResponse(index=i, start=w.start, end=w.end, label=w.label)
        for i, w in enumerate(NIGHT_WINDOWS)
    ]


def _legend_response(subjects) -> List[LegendItemResponse]:
    return [LegendItemResponse(abbrev=i.abbrev, color=i.color, label=i.label) for i in build_legend(subjects)]


def _fixed_grid_response(grid: FixedGrid) -> Dict[str, List[List[GridEntryResponse]]]:
    result = {}
    for day in WEEKDAYS:
        cells = []
        for index in sorted(grid[day]):
            entries = []
            for entry in grid[day][index]:
                abbrev = abbreviate(display_name(entry.subject))
                entries.append(GridEntryResponse(
                    subject_code=entry.subject.code,
                    subject_name=entry.subject.name,
                    standard=entry.subject.standard,
                    abbrev=abbrev,
                    color=colorize(abbrev),
                    teacher_name=entry.teacher_name,
                ))
            cells.append(entries)
        result[day] = cells
    return result


def _dynamic_grid_response(grid: DynamicGrid) -> Dict[str, List[OneToOneColumn]]:
    result = {}
    for day in WEEKDAYS:
        columns = []
        for label, entries in grid[day].items():
            items = []
            for entry in entries:
                # matière inconnue : on retombe sur le code du créneau
                abbrev = abbreviate(display_name(entry.subject) if entry.subject is not None else entry.subject_code)
                items.append(OneToOneEntryResponse(
                    subject_code=entry.subject_code,
                    subject_name=entry.subject.name if entry.subject is not None else None,
                    abbrev=abbrev,
                    color=colorize(abbrev),
                    teacher_name=entry.teacher_name,
                    student_id=entry.student_id,
                    student_name=entry.student_name,
                ))
            columns.append(OneToOneColumn(label=label, entries=items))
        result[day] = columns
    return result
