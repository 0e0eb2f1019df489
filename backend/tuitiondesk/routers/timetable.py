"""
Router des emplois du temps calculés (grille maître, cours particuliers, élève, matière).
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tuitiondesk.database import get_db
from tuitiondesk.schemas.timetable import (
    MasterTimetable,
    OneToOneTimetable,
    StudentTimetable,
    SubjectTimetable,
)
from tuitiondesk.security import get_current_user
from tuitiondesk.services import timetable_service

router = APIRouter(
    prefix="/api/v1/timetable",
    tags=["Emplois du temps"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/master", response_model=MasterTimetable, summary="Grille maître des cours en classe")
def master(
    standards: List[str] = Query(default=[]),
    type: str = Query("ALL"),
    db: Session = Depends(get_db),
):
    """
    Une grille par niveau (5 au plus), sur les deux fenêtres du soir.
    `type` : ALL, DLP ou KSSM. Les créneaux hors fenêtre n'apparaissent pas.
    """
    return timetable_service.master_timetable(db, standards, type)


@router.get("/one-to-one", response_model=OneToOneTimetable, summary="Grille des cours particuliers")
def one_to_one(
    standards: Optional[List[str]] = Query(None),
    db: Session = Depends(get_db),
):
    return timetable_service.one_to_one_timetable(db, standards)


@router.get("/students/{student_id}", response_model=StudentTimetable, summary="Emploi du temps d'un élève")
def student(student_id: uuid.UUID, db: Session = Depends(get_db)):
    return timetable_service.student_timetable(db, student_id)


@router.get("/subjects/{code}", response_model=SubjectTimetable, summary="Emploi du temps d'une matière")
def subject(code: str, db: Session = Depends(get_db)):
    return timetable_service.subject_timetable(db, code)
