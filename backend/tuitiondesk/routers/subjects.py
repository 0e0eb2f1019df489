"""
Router des matières : fiche, planning (créneaux) et inscriptions.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tuitiondesk.database import get_db
from tuitiondesk.schemas.student import StudentPage
from tuitiondesk.schemas.subject import (
    EnrollmentResult,
    SubjectCreate,
    SubjectDetail,
    SubjectResponse,
    SubjectStudentsAssign,
    SubjectUpdate,
)
from tuitiondesk.schemas.timeslot import TimeslotList, TimeslotReplace
from tuitiondesk.security import get_current_user
from tuitiondesk.services import enrollment_service, student_service, subject_service, timeslot_service

router = APIRouter(
    prefix="/api/v1/subjects",
    tags=["Matières"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", response_model=SubjectResponse, status_code=201, summary="Créer une matière")
def create_subject(data: SubjectCreate, db: Session = Depends(get_db)):
    """Crée une matière. Le code est unique et ne pourra plus être modifié."""
    return subject_service.create_subject(db, data)


@router.get("", response_model=List[SubjectResponse], summary="Lister les matières")
def list_subjects(
    q: Optional[str] = None,
    standard: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return subject_service.list_subjects(db, keyword=q, standard=standard)


@router.get("/{code}", response_model=SubjectDetail, summary="Détail d'une matière")
def get_subject(code: str, db: Session = Depends(get_db)):
    """Retourne la matière et la liste des élèves inscrits."""
    return subject_service.get_subject_detail(db, code)


@router.put("/{code}", response_model=SubjectResponse, summary="Modifier une matière")
def update_subject(code: str, data: SubjectUpdate, db: Session = Depends(get_db)):
    return subject_service.update_subject(db, code, data)


@router.delete("/{code}", status_code=204, summary="Supprimer une matière")
def delete_subject(code: str, db: Session = Depends(get_db)):
    """Supprime une matière et ses créneaux. Refusé (409) tant que des élèves y sont inscrits."""
    subject_service.delete_subject(db, code)


# --- Planning ---

@router.get("/{code}/timeslots", response_model=TimeslotList, summary="Créneaux d'une matière")
def get_timeslots(code: str, db: Session = Depends(get_db)):
    return TimeslotList(timeslots=timeslot_service.get_timeslots_for_subject(db, code))


@router.post("/{code}/timeslots", response_model=TimeslotList, summary="Remplacer le planning d'une matière")
def replace_timeslots(code: str, data: TimeslotReplace, db: Session = Depends(get_db)):
    """
    Remplace en bloc les créneaux du mode indiqué :
    - `normal` : créneaux de classe (sans élève)
    - `oneToOne` : cours particuliers (élève obligatoire)

    Retourne l'ensemble des créneaux de la matière après remplacement.
    """
    return TimeslotList(timeslots=timeslot_service.replace_timeslots(db, code, data))


@router.delete("/{code}/timeslots/{timeslot_id}", status_code=204, summary="Supprimer un créneau")
def delete_timeslot(code: str, timeslot_id: uuid.UUID, db: Session = Depends(get_db)):
    timeslot_service.delete_timeslot(db, code, timeslot_id)


# --- Inscriptions ---

@router.post("/{code}/students", response_model=EnrollmentResult, summary="Inscrire des élèves")
def enroll_students(code: str, data: SubjectStudentsAssign, db: Session = Depends(get_db)):
    """Inscrit un ou plusieurs élèves. Les élèves déjà inscrits sont ignorés."""
    added = enrollment_service.enroll_students(db, code, data.student_ids)
    return EnrollmentResult(added_count=added)


@router.delete("/{code}/students/{student_id}", status_code=204, summary="Désinscrire un élève")
def unenroll_student(code: str, student_id: uuid.UUID, db: Session = Depends(get_db)):
    enrollment_service.unenroll_student(db, code, student_id)


@router.get("/{code}/available-students", response_model=StudentPage, summary="Élèves inscriptibles")
def available_students(
    code: str,
    page: Optional[int] = None,
    page_size: Optional[int] = Query(None, alias="pageSize"),
    keyword: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Recherche paginée des élèves qui ne suivent pas encore la matière."""
    return student_service.list_available_for_subject(db, code, page=page, page_size=page_size, keyword=keyword)
