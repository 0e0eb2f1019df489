"""
Service métier des inscriptions élève ↔ matière.

La table student_subjects est la seule source de vérité des inscriptions.
La synchronisation calcule un diff (ajouts / retraits) et l'applique dans une
seule transaction : soit les deux lots passent, soit aucun.
"""

import logging
import uuid
from typing import Iterable, List, Set, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tuitiondesk.errors import NotFound
from tuitiondesk.models.student import Student
from tuitiondesk.models.subject import StudentSubject, Subject

logger = logging.getLogger(__name__)


def diff_enrollment(current: Iterable[str], desired: Iterable[str]) -> Tuple[Set[str], Set[str]]:
    """Retourne (codes à ajouter, codes à retirer) ; les deux ensembles sont disjoints."""
    current_set, desired_set = set(current), set(desired)
    return desired_set - current_set, current_set - desired_set


def get_subject_codes(db: Session, student_id: uuid.UUID) -> List[str]:
    """Codes des matières suivies par un élève, plus récentes d'abord."""
    return list(db.execute(
        select(StudentSubject.subject_code)
        .where(StudentSubject.student_id == student_id)
        .order_by(StudentSubject.created_at.desc())
    ).scalars().all())


def sync_student_subjects(db: Session, student_id: uuid.UUID, desired: Iterable[str]) -> Tuple[Set[str], Set[str]]:
    """
    Aligne les inscriptions d'un élève sur la liste voulue.
    Ne fait pas de commit : l'appelant valide la transaction avec ses propres modifications.
    """
    desired = [code.strip() for code in desired if code and code.strip()]
    to_add, to_remove = diff_enrollment(get_subject_codes(db, student_id), desired)

    if to_add:
        known = set(db.execute(
            select(Subject.code).where(Subject.code.in_(to_add))
        ).scalars().all())
        unknown = sorted(to_add - known)
        if unknown:
            raise NotFound(f"Matière(s) introuvable(s) : {', '.join(unknown)}.")

    if to_remove:
        db.execute(
            delete(StudentSubject).where(
                StudentSubject.student_id == student_id,
                StudentSubject.subject_code.in_(to_remove),
            )
        )
    if to_add:
        db.bulk_insert_mappings(
            StudentSubject,
            [{"student_id": student_id, "subject_code": code} for code in sorted(to_add)],
        )

    logger.info(
        "Inscriptions élève %s : %d ajoutée(s), %d retirée(s)",
        student_id, len(to_add), len(to_remove),
    )
    return to_add, to_remove


def enroll_students(db: Session, subject_code: str, student_ids: List[uuid.UUID]) -> int:
    """
    Inscrit plusieurs élèves à une matière.
    Les élèves déjà inscrits sont ignorés. Retourne le nombre d'inscriptions créées.
    """
    if db.get(Subject, subject_code) is None:
        raise NotFound(f"Matière '{subject_code}' introuvable.")

    existing = set(db.execute(
        select(StudentSubject.student_id)
        .where(StudentSubject.subject_code == subject_code)
    ).scalars().all())

    to_insert = []
    for sid in dict.fromkeys(student_ids):
        if sid not in existing:
            to_insert.append({"student_id": sid, "subject_code": subject_code})

    if to_insert:
        db.bulk_insert_mappings(StudentSubject, to_insert)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise NotFound("Un ou plusieurs élèves sont introuvables.")
        logger.info("Matière %s : %d élève(s) inscrit(s)", subject_code, len(to_insert))

    return len(to_insert)


def unenroll_student(db: Session, subject_code: str, student_id: uuid.UUID) -> None:
    """Désinscrit un élève d'une matière. Les cours particuliers existants ne sont pas touchés."""
    link = db.get(StudentSubject, (student_id, subject_code))
    if link is None:
        raise NotFound("Inscription introuvable.")
    db.delete(link)
    db.commit()
    logger.info("Élève %s désinscrit de %s", student_id, subject_code)


def get_enrolled_students(db: Session, subject_code: str) -> List[Student]:
    return list(db.execute(
        select(Student)
        .join(StudentSubject, StudentSubject.student_id == Student.id)
        .where(StudentSubject.subject_code == subject_code)
        .order_by(Student.name)
    ).scalars().all())

