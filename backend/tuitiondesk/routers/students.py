"""
Router pour les élèves : liste filtrée, fiche, création, mise à jour et retrait.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tuitiondesk.database import get_db
from tuitiondesk.schemas.student import StudentCreate, StudentPage, StudentResponse, StudentUpdate
from tuitiondesk.security import get_current_user
from tuitiondesk.services import student_service

router = APIRouter(
    prefix="/api/v1/students",
    tags=["Élèves"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=StudentPage, summary="Lister les élèves")
def list_students(
    page: Optional[int] = None,
    page_size: Optional[int] = Query(None, alias="pageSize"),
    status: Optional[List[str]] = Query(None),
    mode: Optional[List[str]] = Query(None),
    keyword: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Liste paginée, plus récents d'abord.
    `status` et `mode` sont répétables ; sans `status`, les élèves retirés sont exclus.
    """
    return student_service.list_students(
        db, page=page, page_size=page_size, statuses=status, modes=mode, keyword=keyword,
    )


@router.post("", response_model=StudentResponse, status_code=201, summary="Créer un élève")
def create_student(data: StudentCreate, db: Session = Depends(get_db)):
    return student_service.create_student(db, data)


@router.get("/{student_id}", response_model=StudentResponse, summary="Fiche d'un élève")
def get_student(student_id: uuid.UUID, db: Session = Depends(get_db)):
    return student_service.get_student(db, student_id)


@router.patch("/{student_id}", response_model=StudentResponse, summary="Modifier un élève")
def update_student(student_id: uuid.UUID, data: StudentUpdate, db: Session = Depends(get_db)):
    """Met à jour les champs fournis. Une liste `subjects` remplace les inscriptions de l'élève."""
    return student_service.update_student(db, student_id, data)


@router.delete("/{student_id}", status_code=204, summary="Retirer un élève")
def remove_student(student_id: uuid.UUID, db: Session = Depends(get_db)):
    """Retrait logique : statut 'removed', aucune donnée supprimée."""
    student_service.remove_student(db, student_id)
