"""
Tests unitaires du service d'inscriptions (diff et synchronisation).
"""

import uuid
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from tuitiondesk.errors import NotFound
from tuitiondesk.services.enrollment_service import (
    diff_enrollment,
    enroll_students,
    sync_student_subjects,
    unenroll_student,
)


def make_db_mock(get_value=None, scalars=None):
    db = MagicMock()
    db.get.return_value = get_value
    db.execute.return_value.scalars.return_value.all.return_value = scalars or []
    return db


# --- diff_enrollment ---

@pytest.mark.parametrize("current, desired", [
    (set(), {"MMF4"}),
    ({"MMF4", "KIMF4"}, {"KIMF4", "BIOF4"}),
    ({"MMF4"}, set()),
    ({"MMF4"}, {"MMF4"}),
])
def test_diff_enrollment_converge_vers_la_cible(current, desired):
    to_add, to_remove = diff_enrollment(current, desired)

    assert to_add == desired - current
    assert to_remove == current - desired
    assert not (to_add & to_remove)
    assert (current | to_add) - to_remove == desired
    assert (current - to_remove) | to_add == desired


# --- sync_student_subjects ---

def test_sync_student_subjects_ajoute_et_retire():
    student_id = uuid.uuid4()
    db = MagicMock()
    with patch("tuitiondesk.services.enrollment_service.get_subject_codes") as mock_codes:
        mock_codes.return_value = ["MMF4", "KIMF4"]
        # seule la vérification des matières ajoutées passe par scalars()
        db.execute.return_value.scalars.return_value.all.return_value = ["BIOF4"]

        to_add, to_remove = sync_student_subjects(db, student_id, ["KIMF4", "BIOF4"])

    assert to_add == {"BIOF4"}
    assert to_remove == {"MMF4"}
    mappings = db.bulk_insert_mappings.call_args[0][1]
    assert mappings == [{"student_id": student_id, "subject_code": "BIOF4"}]
    db.commit.assert_not_called()


def test_sync_student_subjects_matiere_inconnue():
    db = MagicMock()
    with patch("tuitiondesk.services.enrollment_service.get_subject_codes") as mock_codes:
        mock_codes.return_value = []
        db.execute.return_value.scalars.return_value.all.return_value = []

        with pytest.raises(NotFound, match="XYZ"):
            sync_student_subjects(db, uuid.uuid4(), ["XYZ"])

    db.bulk_insert_mappings.assert_not_called()


def test_sync_student_subjects_rien_a_faire():
    db = MagicMock()
    with patch("tuitiondesk.services.enrollment_service.get_subject_codes") as mock_codes:
        mock_codes.return_value = ["MMF4"]
        to_add, to_remove = sync_student_subjects(db, uuid.uuid4(), ["MMF4", "  "])

    assert to_add == set() and to_remove == set()
    db.bulk_insert_mappings.assert_not_called()
    db.execute.assert_not_called()


# --- enroll_students ---

def test_enroll_students_matiere_inexistante():
    db = make_db_mock(get_value=None)
    with pytest.raises(NotFound, match="introuvable"):
        enroll_students(db, "MMF4", [uuid.uuid4()])


def test_enroll_students_ignore_doublons():
    existing_id, new_id = uuid.uuid4(), uuid.uuid4()
    db = make_db_mock(get_value=MagicMock(), scalars=[existing_id])

    added = enroll_students(db, "MMF4", [existing_id, new_id, new_id])

    assert added == 1
    mappings = db.bulk_insert_mappings.call_args[0][1]
    assert mappings == [{"student_id": new_id, "subject_code": "MMF4"}]
    db.commit.assert_called_once()


def test_enroll_students_tous_deja_inscrits():
    sid = uuid.uuid4()
    db = make_db_mock(get_value=MagicMock(), scalars=[sid])
    assert enroll_students(db, "MMF4", [sid]) == 0
    db.commit.assert_not_called()


def test_enroll_students_eleve_inexistant():
    db = make_db_mock(get_value=MagicMock())
    db.commit.side_effect = IntegrityError("fk", None, None)
    with pytest.raises(NotFound):
        enroll_students(db, "MMF4", [uuid.uuid4()])
    db.rollback.assert_called_once()


# --- unenroll_student ---

def test_unenroll_student_lien_inexistant():
    db = make_db_mock(get_value=None)
    with pytest.raises(NotFound):
        unenroll_student(db, "MMF4", uuid.uuid4())
    db.commit.assert_not_called()


def test_unenroll_student_existant():
    link = MagicMock()
    db = make_db_mock(get_value=link)
    unenroll_student(db, "MMF4", uuid.uuid4())
    db.delete.assert_called_once_with(link)
    db.commit.assert_called_once()
