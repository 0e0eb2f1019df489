"""
Suivi des paiements des élèves.

Un élève est considéré "Paid" si son dernier paiement tombe dans le mois
calendaire courant.
"""

import logging
import uuid
from datetime import date
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from tuitiondesk.errors import NotFound
from tuitiondesk.models.student import Student
from tuitiondesk.schemas.finance import FinanceSummary, PaymentUpdate
from tuitiondesk.schemas.student import StudentResponse
from tuitiondesk.services import enrollment_service, student_service

logger = logging.getLogger(__name__)

PAID = "Paid"
UNPAID = "No"


def paid_status(last_payment: Optional[date], today: Optional[date] = None) -> str:
    if last_payment is None:
        return UNPAID
    today = today or date.today()
    if last_payment.year == today.year and last_payment.month == today.month:
        return PAID
    return UNPAID


def update_payment(db: Session, student_id: uuid.UUID, data: PaymentUpdate) -> StudentResponse:
    """Met à jour uniquement les champs de paiement fournis."""
    student = db.get(Student, student_id)
    if student is None:
        raise NotFound("Élève introuvable.")

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(student, field, value)
    db.commit()
    db.refresh(student)
    logger.info("Paiement mis à jour pour %s", student.student_id)
    return student_service.to_response(student, enrollment_service.get_subject_codes(db, student.id))


def summary(db: Session, statuses: Optional[Sequence[str]] = None, today: Optional[date] = None) -> FinanceSummary:
    """Totaux sur les élèves non retirés (ou sur les statuts demandés)."""
    wanted = student_service.normalize_statuses(statuses)
    condition = Student.status.in_(wanted) if wanted else Student.status != "removed"
    students = db.execute(select(Student).where(condition)).scalars().all()

    total = len(students)
    paid = sum(1 for s in students if paid_status(s.last_payment_made_date, today) == PAID)
    recurring = sum(1 for s in students if s.recurring_payment)
    rate = round(paid * 100.0 / total, 1) if total else 0.0
    return FinanceSummary(total=total, paid=paid, recurring=recurring, payment_rate=rate)
