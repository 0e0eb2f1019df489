"""
Router des créneaux vus côté élève.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tuitiondesk.database import get_db
from tuitiondesk.schemas.timeslot import TimeslotResponse
from tuitiondesk.security import get_current_user
from tuitiondesk.services import timeslot_service

router = APIRouter(
    prefix="/api/v1/timeslots",
    tags=["Créneaux"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/students/{student_id}", response_model=List[TimeslotResponse],
            summary="Cours particuliers d'un élève")
def get_student_timeslots(student_id: str, db: Session = Depends(get_db)):
    """`student_id` est l'identifiant métier de l'élève (ex. S0001)."""
    return timeslot_service.get_timeslots_for_student(db, student_id)
