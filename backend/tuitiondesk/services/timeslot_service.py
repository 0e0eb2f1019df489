"""
Service métier des créneaux horaires.

Le planning d'une matière est remplacé en bloc par mode (classe ou cours
particuliers) : suppression puis insertion dans une seule transaction.
"""

import logging
import uuid
from typing import List, Set

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from tuitiondesk.errors import NotFound, ValidationFailed
from tuitiondesk.models.student import Student
from tuitiondesk.models.subject import StudentSubject, Subject
from tuitiondesk.models.timeslot import Timeslot
from tuitiondesk.schemas.timeslot import TimeslotReplace, TimeslotResponse

logger = logging.getLogger(__name__)


def get_all_timeslots(db: Session) -> List[Timeslot]:
    return list(db.execute(
        select(Timeslot).order_by(Timeslot.created_at.desc())
    ).scalars().all())


def get_timeslots_for_subject(db: Session, subject_code: str) -> List[TimeslotResponse]:
    slots = db.execute(
        select(Timeslot)
        .where(Timeslot.subject_code == subject_code)
        .order_by(Timeslot.created_at)
    ).scalars().all()
    return [TimeslotResponse.model_validate(s) for s in slots]


def get_timeslots_for_student(db: Session, student_id: str) -> List[TimeslotResponse]:
    """Cours particuliers d'un élève (identifiant métier), toutes matières confondues."""
    slots = db.execute(
        select(Timeslot)
        .where(Timeslot.student_id == student_id)
        .order_by(Timeslot.created_at)
    ).scalars().all()
    return [TimeslotResponse.model_validate(s) for s in slots]


def replace_timeslots(db: Session, subject_code: str, data: TimeslotReplace) -> List[TimeslotResponse]:
    """
    Remplace tous les créneaux du mode demandé pour une matière.
    Les créneaux de l'autre mode ne sont pas touchés. Retourne tous les créneaux de la matière.
    """
    if db.get(Subject, subject_code) is None:
        raise NotFound(f"Matière '{subject_code}' introuvable.")

    one_to_one = data.mode == "oneToOne"
    if one_to_one:
        _check_enrolled(db, subject_code, {slot.student_id for slot in data.timeslots})
    mode_filter = Timeslot.student_id.is_not(None) if one_to_one else Timeslot.student_id.is_(None)

    try:
        db.execute(
            delete(Timeslot).where(Timeslot.subject_code == subject_code, mode_filter)
        )
        rows = [
            {
                "timeslot_id": uuid.uuid4(),
                "subject_code": subject_code,
                "day": slot.day,
                "start_time": slot.start_time,
                "end_time": slot.end_time,
                "teacher_name": slot.teacher_name,
                "student_id": slot.student_id if one_to_one else None,
                "student_name": slot.student_name if one_to_one else None,
            }
            for slot in data.timeslots
        ]
        if rows:
            db.bulk_insert_mappings(Timeslot, rows)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Créneaux %s remplacés pour %s : %d créneau(x)",
        data.mode, subject_code, len(data.timeslots),
    )
    return get_timeslots_for_subject(db, subject_code)


def _check_enrolled(db: Session, subject_code: str, student_ids: Set[str]) -> None:
    """Un cours particulier ne peut viser qu'un élève inscrit à la matière (identifiant métier)."""
    if not student_ids:
        return
    enrolled = set(db.execute(
        select(Student.student_id)
        .join(StudentSubject, StudentSubject.student_id == Student.id)
        .where(StudentSubject.subject_code == subject_code, Student.student_id.in_(student_ids))
    ).scalars().all())
    missing = sorted(student_ids - enrolled)
    if missing:
        raise ValidationFailed(f"Élève(s) non inscrit(s) à {subject_code} : {', '.join(missing)}.")


def delete_timeslot(db: Session, subject_code: str, timeslot_id: uuid.UUID) -> None:
    slot = db.get(Timeslot, timeslot_id)
    if slot is None or slot.subject_code != subject_code:
        raise NotFound("Créneau introuvable.")
    db.delete(slot)
    db.commit()
    logger.info("Créneau %s supprimé (%s)", timeslot_id, subject_code)
