"""
Schémas Pydantic pour le suivi des paiements.
"""

from datetime import date
from typing import Optional

from tuitiondesk.schemas.base import CamelModel


class PaymentUpdate(CamelModel):
    recurring_payment: Optional[bool] = None
    next_recurring_payment_date: Optional[date] = None
    last_payment_made_date: Optional[date] = None


class FinanceSummary(CamelModel):
    total: int
    paid: int
    recurring: int
    payment_rate: float
