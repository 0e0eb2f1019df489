"""
Service métier des matières.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tuitiondesk.errors import Conflict, NotFound, ValidationFailed
from tuitiondesk.models.subject import StudentSubject, Subject
from tuitiondesk.schemas.subject import SubjectCreate, SubjectDetail, SubjectResponse, SubjectUpdate
from tuitiondesk.services import enrollment_service, student_service
from tuitiondesk.services.legend import clean_subject_name

logger = logging.getLogger(__name__)


def create_subject(db: Session, data: SubjectCreate) -> SubjectResponse:
    """
    Crée une matière. Le champ `subject` est dérivé du nom s'il est absent.
    Lève Conflict si le code existe déjà.
    """
    subject = Subject(
        code=data.code,
        name=data.name,
        standard=data.standard,
        type=data.type,
        subject=clean_subject_name((data.subject or "").strip() or data.name),
    )
    db.add(subject)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Création refusée, code de matière déjà utilisé : %s", data.code)
        raise Conflict(f"Une matière avec le code '{data.code}' existe déjà.")
    db.refresh(subject)
    logger.info("Matière créée : %s", subject.code)
    return SubjectResponse.model_validate(subject)


def list_subjects(db: Session, keyword: Optional[str] = None, standard: Optional[str] = None) -> List[SubjectResponse]:
    """Toutes les matières triées par code, filtrables par mot-clé et par niveau."""
    query = select(Subject).order_by(Subject.code)
    keyword = (keyword or "").strip()
    if keyword:
        pattern = f"%{keyword}%"
        query = query.where(or_(
            Subject.code.ilike(pattern),
            Subject.name.ilike(pattern),
            Subject.standard.ilike(pattern),
        ))
    if standard:
        query = query.where(func.upper(Subject.standard) == standard.strip().upper())
    return [SubjectResponse.model_validate(s) for s in db.execute(query).scalars().all()]


def get_subject_detail(db: Session, code: str) -> SubjectDetail:
    """Matière et élèves inscrits."""
    subject = db.get(Subject, code)
    if subject is None:
        raise NotFound(f"Matière '{code}' introuvable.")
    students = enrollment_service.get_enrolled_students(db, code)
    subjects = student_service.subjects_by_student(db, [s.id for s in students])
    return SubjectDetail(
        subject=SubjectResponse.model_validate(subject),
        enrolled_students=[student_service.to_response(s, subjects.get(s.id, [])) for s in students],
        enrolled_count=len(students),
    )


def update_subject(db: Session, code: str, data: SubjectUpdate) -> SubjectResponse:
    """Met à jour une matière. Le code est immuable : un code différent dans le corps est refusé."""
    if data.code is not None and data.code != code:
        raise ValidationFailed("La modification du code d'une matière n'est pas autorisée.")

    subject = db.get(Subject, code)
    if subject is None:
        raise NotFound(f"Matière '{code}' introuvable.")

    subject.name = data.name
    subject.standard = data.standard
    subject.type = data.type
    subject.subject = clean_subject_name((data.subject or "").strip() or data.name)
    db.commit()
    db.refresh(subject)
    return SubjectResponse.model_validate(subject)


def delete_subject(db: Session, code: str) -> None:
    """
    Supprime une matière et ses créneaux.
    Bloqué tant que des élèves y sont inscrits ; le nombre d'inscrits est joint à l'erreur.
    """
    subject = db.get(Subject, code)
    if subject is None:
        raise NotFound(f"Matière '{code}' introuvable.")

    enrolled_count = db.execute(
        select(func.count())
        .select_from(StudentSubject)
        .where(StudentSubject.subject_code == code)
    ).scalar() or 0

    if enrolled_count > 0:
        logger.warning("Suppression refusée : %s a %d élève(s) inscrit(s)", code, enrolled_count)
        raise Conflict(
            f"Impossible de supprimer la matière '{code}' : {enrolled_count} élève(s) inscrit(s).",
            extra={"enrolledCount": enrolled_count},
        )

    db.delete(subject)
    db.commit()
    logger.info("Matière supprimée : %s", code)
