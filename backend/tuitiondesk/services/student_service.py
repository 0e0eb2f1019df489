"""
Service métier des élèves : listes paginées, création, mise à jour et retrait.
"""

import logging
import uuid
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tuitiondesk.config import settings
from tuitiondesk.errors import Conflict, NotFound, ValidationFailed
from tuitiondesk.models.student import Student
from tuitiondesk.models.subject import StudentSubject
from tuitiondesk.schemas.student import (
    STATUSES,
    StudentCreate,
    StudentPage,
    StudentResponse,
    StudentUpdate,
)
from tuitiondesk.services import enrollment_service

logger = logging.getLogger(__name__)


def clamp_page(page: Optional[int], page_size: Optional[int]) -> Tuple[int, int]:
    """Page ≥ 1 et taille de page bornée à MAX_PAGE_SIZE ; valeurs invalides ramenées aux défauts."""
    page = page if page and page > 0 else 1
    page_size = page_size if page_size and page_size > 0 else settings.DEFAULT_PAGE_SIZE
    return page, min(page_size, settings.MAX_PAGE_SIZE)


def keyword_filter(keyword: Optional[str]):
    """Recherche insensible à la casse sur le nom, l'identifiant, l'email et le téléphone."""
    keyword = (keyword or "").strip()
    if not keyword:
        return None
    pattern = f"%{keyword}%"
    return or_(
        Student.name.ilike(pattern),
        Student.full_name.ilike(pattern),
        Student.student_id.ilike(pattern),
        Student.email.ilike(pattern),
        Student.parent_name.ilike(pattern),
        Student.student_phone.ilike(pattern),
    )


def normalize_statuses(statuses: Optional[Iterable[str]]) -> List[str]:
    """Statuts reconnus uniquement, en minuscules ; les valeurs inconnues sont ignorées."""
    result = []
    for status in statuses or []:
        s = (status or "").strip().lower()
        if s in STATUSES and s not in result:
            result.append(s)
    return result


def list_students(
    db: Session,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    statuses: Optional[Sequence[str]] = None,
    modes: Optional[Sequence[str]] = None,
    keyword: Optional[str] = None,
) -> StudentPage:
    """Liste paginée des élèves, plus récents d'abord. Les élèves retirés n'apparaissent que si demandés."""
    page, page_size = clamp_page(page, page_size)

    conditions = []
    wanted = normalize_statuses(statuses)
    if wanted:
        conditions.append(Student.status.in_(wanted))
    else:
        conditions.append(Student.status != "removed")
    if modes:
        conditions.append(Student.modes.overlap([m.strip().upper() for m in modes]))
    search = keyword_filter(keyword)
    if search is not None:
        conditions.append(search)

    total = db.execute(
        select(func.count()).select_from(Student).where(*conditions)
    ).scalar() or 0

    students = db.execute(
        select(Student)
        .where(*conditions)
        .order_by(Student.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).scalars().all()

    subjects = subjects_by_student(db, [s.id for s in students])
    return StudentPage(
        students=[to_response(s, subjects.get(s.id, [])) for s in students],
        total_count=total,
        page=page,
        page_size=page_size,
    )


def list_available_for_subject(
    db: Session,
    subject_code: str,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    keyword: Optional[str] = None,
) -> StudentPage:
    """Élèves non retirés qui ne sont pas encore inscrits à la matière."""
    page, page_size = clamp_page(page, page_size)

    enrolled = select(StudentSubject.student_id).where(StudentSubject.subject_code == subject_code)
    conditions = [Student.status != "removed", Student.id.not_in(enrolled)]
    search = keyword_filter(keyword)
    if search is not None:
        conditions.append(search)

    total = db.execute(
        select(func.count()).select_from(Student).where(*conditions)
    ).scalar() or 0

    students = db.execute(
        select(Student)
        .where(*conditions)
        .order_by(Student.name)
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).scalars().all()

    subjects = subjects_by_student(db, [s.id for s in students])
    return StudentPage(
        students=[to_response(s, subjects.get(s.id, [])) for s in students],
        total_count=total,
        page=page,
        page_size=page_size,
    )


def get_student(db: Session, student_id: uuid.UUID) -> StudentResponse:
    student = db.get(Student, student_id)
    if student is None:
        raise NotFound("Élève introuvable.")
    return to_response(student, enrollment_service.get_subject_codes(db, student.id))


def create_student(db: Session, data: StudentCreate) -> StudentResponse:
    """
    Crée un élève et ses inscriptions initiales dans une même transaction.
    Lève Conflict si l'identifiant métier existe déjà, ValidationFailed pour toute
    autre contrainte refusée par la base.
    """
    fields = data.model_dump(exclude={"subjects"})
    student = Student(**fields)
    db.add(student)
    try:
        db.flush()
        if data.subjects:
            enrollment_service.sync_student_subjects(db, student.id, data.subjects)
        db.commit()
    except IntegrityError:
        db.rollback()
        if _student_id_taken(db, data.student_id):
            raise Conflict(f"Un élève avec l'identifiant '{data.student_id}' existe déjà.")
        logger.warning("Création d'élève refusée par la base : %s", data.student_id)
        raise ValidationFailed("Données d'élève invalides.")
    except NotFound:
        db.rollback()
        raise
    db.refresh(student)
    logger.info("Élève créé : %s (%s)", student.student_id, student.id)
    return to_response(student, enrollment_service.get_subject_codes(db, student.id))


def update_student(db: Session, student_id: uuid.UUID, data: StudentUpdate) -> StudentResponse:
    """
    Met à jour les champs fournis d'un élève.
    Si `subjects` est présent, les inscriptions sont synchronisées dans la même transaction.
    """
    if data.id != student_id:
        raise ValidationFailed("Identifiant d'élève invalide.")

    student = db.get(Student, student_id)
    if student is None:
        raise NotFound("Élève introuvable.")

    update_data = data.model_dump(exclude_unset=True, exclude={"id", "subjects"})
    for field, value in update_data.items():
        setattr(student, field, value)

    try:
        if data.subjects is not None:
            enrollment_service.sync_student_subjects(db, student.id, data.subjects)
        db.commit()
    except IntegrityError:
        db.rollback()
        if data.student_id is not None and _student_id_taken(db, data.student_id, exclude=student_id):
            raise Conflict(f"Un élève avec l'identifiant '{data.student_id}' existe déjà.")
        logger.warning("Mise à jour de l'élève %s refusée par la base", student_id)
        raise ValidationFailed("Données d'élève invalides.")
    except NotFound:
        db.rollback()
        raise
    db.refresh(student)
    return to_response(student, enrollment_service.get_subject_codes(db, student.id))


def remove_student(db: Session, student_id: uuid.UUID) -> None:
    """Retrait logique : l'élève passe au statut 'removed', ses données sont conservées."""
    student = db.get(Student, student_id)
    if student is None:
        raise NotFound("Élève introuvable.")
    student.status = "removed"
    db.commit()
    logger.info("Élève retiré : %s", student.student_id)


def _student_id_taken(db: Session, student_id: str, exclude: Optional[uuid.UUID] = None) -> bool:
    query = select(Student.id).where(Student.student_id == student_id)
    if exclude is not None:
        query = query.where(Student.id != exclude)
    return db.execute(query.limit(1)).scalar_one_or_none() is not None


def subjects_by_student(db: Session, ids: List[uuid.UUID]) -> Dict[uuid.UUID, List[str]]:
    if not ids:
        return {}
    rows = db.execute(
        select(StudentSubject.student_id, StudentSubject.subject_code)
        .where(StudentSubject.student_id.in_(ids))
    ).all()
    result: Dict[uuid.UUID, List[str]] = {}
    for sid, code in rows:
        result.setdefault(sid, []).append(code)
    return result


def to_response(student: Student, subjects: List[str]) -> StudentResponse:
    """Construit le schéma de réponse avec la liste dénormalisée des matières."""
    return StudentResponse(
        id=student.id,
        student_id=student.student_id,
        name=student.name,
        full_name=student.full_name,
        parent_name=student.parent_name,
        student_phone=student.student_phone,
        parent_phone=student.parent_phone,
        email=student.email,
        school=student.school,
        grade=student.grade,
        status=student.status,
        class_in_id=student.class_in_id,
        registered_date=student.registered_date,
        modes=list(student.modes or []),
        dlp=student.dlp or "non-DLP",
        subjects=list(subjects),
        recurring_payment=bool(student.recurring_payment),
        next_recurring_payment_date=student.next_recurring_payment_date,
        last_payment_made_date=student.last_payment_made_date,
    )
