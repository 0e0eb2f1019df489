"""
Tests unitaires des vues d'emploi du temps (grille maître, élève, matière).
"""

import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from conftest import make_slot, make_subject
from tuitiondesk.errors import NotFound, ValidationFailed
from tuitiondesk.services.timetable_service import (
    master_timetable,
    normalize_standards,
    one_to_one_timetable,
    student_timetable,
    subject_timetable,
)

SERVICE = "tuitiondesk.services.timetable_service"

SUBJECTS = [
    make_subject(code="MMF4", name="Matematik F4", standard="F4"),
    make_subject(code="AMDF4", name="Add math DLP F4", standard="F4", subject="Add math DLP"),
    make_subject(code="KIMF5", name="Kimia F5", standard="F5"),
    make_subject(code="AMF5 1:1", name="Add math F5 - 1 to 1", standard="F5", type="1 to 1",
                 subject="Add math"),
]

SLOTS = [
    make_slot(subject_code="MMF4", day="Monday", start_time="20:15", end_time="21:15"),
    make_slot(subject_code="AMDF4", day="Monday", start_time="21:20:00", end_time="22:20:00"),
    make_slot(subject_code="MMF4", day="Tuesday", start_time="09:00", end_time="10:00"),
    make_slot(subject_code="KIMF5", day="Wednesday", start_time="20:15", end_time="21:15"),
    make_slot(subject_code="AMF5 1:1", day="Saturday", start_time="10:00", end_time="11:00",
              student_id="S0001", student_name="Aisyah"),
]


@pytest.fixture
def data():
    with patch(f"{SERVICE}.get_all_subjects", return_value=SUBJECTS), \
         patch(f"{SERVICE}.timeslot_service.get_all_timeslots", return_value=SLOTS):
        yield


# --- normalize_standards ---

def test_normalize_standards_dedoublonne():
    assert normalize_standards(["f4", "F4", " f5 ", ""]) == ["F4", "F5"]


def test_normalize_standards_au_plus_cinq():
    with pytest.raises(ValidationFailed):
        normalize_standards(["F1", "F2", "F3", "F4", "F5", "F6"])


# --- master_timetable ---

def test_master_timetable_une_grille_par_niveau(data):
    result = master_timetable(MagicMock(), ["F4", "F5"])

    assert [g.standard for g in result.standards] == ["F4", "F5"]
    f4 = result.standards[0]
    assert [e.subject_code for e in f4.grid["Monday"][0]] == ["MMF4"]
    assert [e.abbrev for e in f4.grid["Monday"][1]] == ["AMD"]
    assert f4.grid["Tuesday"] == [[], []]
    assert [item.abbrev for item in f4.legend] == ["MM", "AMD"]
    assert len(result.windows) == 2


def test_master_timetable_filtre_dlp(data):
    result = master_timetable(MagicMock(), ["F4"], "DLP")
    grid = result.standards[0].grid
    assert grid["Monday"][0] == []
    assert [e.subject_code for e in grid["Monday"][1]] == ["AMDF4"]


def test_master_timetable_filtre_kssm(data):
    result = master_timetable(MagicMock(), ["F4"], "kssm")
    grid = result.standards[0].grid
    assert [e.subject_code for e in grid["Monday"][0]] == ["MMF4"]
    assert grid["Monday"][1] == []


def test_master_timetable_filtre_invalide(data):
    with pytest.raises(ValidationFailed):
        master_timetable(MagicMock(), ["F4"], "IGCSE")


# --- one_to_one_timetable ---

def test_one_to_one_timetable_colonnes_par_horaire(data):
    result = one_to_one_timetable(MagicMock())

    saturday = result.grid["Saturday"]
    assert [c.label for c in saturday] == ["10:00–11:00"]
    assert saturday[0].entries[0].student_name == "Aisyah"
    assert saturday[0].entries[0].abbrev == "AM"
    assert [c.label for c in result.grid["Monday"]] == ["—"]


def test_one_to_one_timetable_limite_aux_niveaux(data):
    result = one_to_one_timetable(MagicMock(), ["F4"])
    assert all(c.entries == [] for c in result.grid["Saturday"])


# --- student_timetable ---

def test_student_timetable_combine_classe_et_particuliers(data):
    student = SimpleNamespace(id=uuid.uuid4(), student_id="S0001", name="Aisyah")
    db = MagicMock()
    db.get.return_value = student

    with patch(f"{SERVICE}.enrollment_service.get_subject_codes", return_value=["KIMF5"]):
        result = student_timetable(db, student.id)

    assert [e.subject_code for e in result.normal_grid["Wednesday"][0]] == ["KIMF5"]
    assert result.normal_grid["Monday"] == [[], []]
    assert result.one_to_one_grid["Saturday"][0].entries[0].subject_code == "AMF5 1:1"
    assert [item.abbrev for item in result.legend] == ["KIM", "AM"]


def test_student_timetable_eleve_introuvable():
    db = MagicMock()
    db.get.return_value = None
    with pytest.raises(NotFound):
        student_timetable(db, uuid.uuid4())


# --- subject_timetable ---

def test_subject_timetable_occupation(data):
    db = MagicMock()
    db.get.return_value = SUBJECTS[0]

    result = subject_timetable(db, "MMF4")

    assert result.abbrev == "MM"
    assert result.occupancy["Monday"] == [True, False]
    assert result.occupancy["Tuesday"] == [False, False]
