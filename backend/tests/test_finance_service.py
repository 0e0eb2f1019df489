"""
Tests unitaires du suivi des paiements.
"""

import uuid
from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from tuitiondesk.errors import NotFound
from tuitiondesk.schemas.finance import PaymentUpdate
from tuitiondesk.services.finance_service import paid_status, summary, update_payment

TODAY = date(2026, 10, 19)


def make_student(last_payment=None, recurring=False):
    return SimpleNamespace(last_payment_made_date=last_payment, recurring_payment=recurring)


@pytest.mark.parametrize("last_payment, expected", [
    (None, "No"),
    (date(2026, 10, 1), "Paid"),
    (date(2026, 9, 30), "No"),
    (date(2025, 10, 19), "No"),
])
def test_paid_status_mois_courant(last_payment, expected):
    assert paid_status(last_payment, TODAY) == expected


def test_summary_taux_de_paiement():
    db = MagicMock()
    db.execute.return_value.scalars.return_value.all.return_value = [
        make_student(date(2026, 10, 2), recurring=True),
        make_student(date(2026, 8, 2), recurring=True),
        make_student(None),
    ]

    result = summary(db, today=TODAY)

    assert result.total == 3
    assert result.paid == 1
    assert result.recurring == 2
    assert result.payment_rate == 33.3


def test_summary_sans_eleves():
    db = MagicMock()
    db.execute.return_value.scalars.return_value.all.return_value = []
    assert summary(db, today=TODAY).payment_rate == 0.0


def test_update_payment_eleve_introuvable():
    db = MagicMock()
    db.get.return_value = None
    with pytest.raises(NotFound):
        update_payment(db, uuid.uuid4(), PaymentUpdate(recurring_payment=True))


def test_payment_update_champs_fournis_uniquement():
    data = PaymentUpdate.model_validate({"lastPaymentMadeDate": "2026-10-05"})
    assert data.model_dump(exclude_unset=True) == {"last_payment_made_date": date(2026, 10, 5)}
