"""
Router du suivi des paiements.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tuitiondesk.database import get_db
from tuitiondesk.schemas.finance import FinanceSummary, PaymentUpdate
from tuitiondesk.schemas.student import StudentResponse
from tuitiondesk.security import get_current_user
from tuitiondesk.services import finance_service

router = APIRouter(
    prefix="/api/v1/finance",
    tags=["Finances"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/summary", response_model=FinanceSummary, summary="Synthèse des paiements")
def get_summary(status: Optional[List[str]] = Query(None), db: Session = Depends(get_db)):
    """Nombre d'élèves, payés ce mois-ci, en paiement récurrent, et taux de paiement (%)."""
    return finance_service.summary(db, statuses=status)


@router.patch("/students/{student_id}", response_model=StudentResponse, summary="Modifier le paiement d'un élève")
def update_payment(student_id: uuid.UUID, data: PaymentUpdate, db: Session = Depends(get_db)):
    return finance_service.update_payment(db, student_id, data)
