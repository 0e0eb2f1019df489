"""
Tests unitaires du module de construction des grilles d'emploi du temps.
"""

import pytest

from conftest import make_slot, make_subject
from tuitiondesk.schemas.timeslot import WEEKDAYS
from tuitiondesk.services.timetable import (
    PLACEHOLDER_LABEL,
    build_dynamic_grid,
    build_fixed_grid,
    classify_window,
    fixed_grid_subjects,
    index_subjects,
    one_to_one_windows,
    partition_slots,
    slots_for_student,
    slots_for_subjects,
    window_occupancy,
)


# --- classify_window ---

@pytest.mark.parametrize("start, end, expected", [
    ("20:15", "21:15", 0),
    ("21:20", "22:20", 1),
    ("20:15:00", "21:15:00", 0),
    ("21:20:00+08", "22:20:00+08", 1),
])
def test_classify_window_fenetres_du_soir(start, end, expected):
    assert classify_window(start, end) == expected


@pytest.mark.parametrize("start, end", [
    ("09:00", "10:00"),
    ("20:15", "22:20"),
    ("21:20", "21:15"),
    ("20:14", "21:15"),
    ("8:15", "9:15"),
    ("", ""),
])
def test_classify_window_sans_correspondance(start, end):
    assert classify_window(start, end) is None


# --- Sélection des créneaux ---

def test_partition_slots_separe_classe_et_particuliers():
    normal = make_slot()
    private = make_slot(student_id="S0001", student_name="Aisyah")
    slots = [normal, private]

    result_normal, result_private = partition_slots(slots)

    assert result_normal == [normal]
    assert result_private == [private]
    assert slots == [normal, private]  # entrée non modifiée


def test_slots_for_subjects_concatene_sans_dedoublonner():
    a = make_slot(subject_code="MMF4")
    b = make_slot(subject_code="KIMF4")

    result = slots_for_subjects([a, b], ["KIMF4", "MMF4", "KIMF4"])

    assert result == [b, a, b]


def test_slots_for_student():
    mine = make_slot(student_id="S0001", student_name="Aisyah")
    other = make_slot(student_id="S0002", student_name="Farid")
    assert slots_for_student([mine, other, make_slot()], "S0001") == [mine]


# --- Grille à fenêtres fixes ---

def test_fixed_grid_initialisee_sur_sept_jours_et_deux_fenetres():
    grid = build_fixed_grid([], {})
    assert list(grid) == list(WEEKDAYS)
    assert all(grid[day] == {0: [], 1: []} for day in WEEKDAYS)


def test_fixed_grid_creneau_hors_fenetre_ignore():
    """MMF4 le lundi 20:15–21:15 et le mardi 09:00–10:00 : seul le lundi apparaît."""
    subject = make_subject(code="MMF4")
    slots = [
        make_slot(subject_code="MMF4", day="Monday", start_time="20:15", end_time="21:15"),
        make_slot(subject_code="MMF4", day="Tuesday", start_time="09:00", end_time="10:00"),
    ]

    grid = build_fixed_grid(slots, index_subjects([subject]))

    assert len(grid["Monday"][0]) == 1
    assert grid["Monday"][0][0].subject is subject
    assert grid["Monday"][0][0].teacher_name == "Cikgu Aminah"
    assert sum(len(cell) for day in WEEKDAYS for cell in grid[day].values()) == 1


def test_fixed_grid_matiere_orpheline_ignoree():
    slots = [make_slot(subject_code="INCONNU")]
    grid = build_fixed_grid(slots, index_subjects([make_subject(code="MMF4")]))
    assert fixed_grid_subjects(grid) == []


def test_fixed_grid_conserve_ordre_d_entree():
    bio = make_subject(code="BIOF4", name="Biology F4")
    kim = make_subject(code="KIMF4", name="Kimia F4")
    slots = [
        make_slot(subject_code="KIMF4", day="Friday", start_time="21:20", end_time="22:20"),
        make_slot(subject_code="BIOF4", day="Friday", start_time="21:20", end_time="22:20"),
    ]

    grid = build_fixed_grid(slots, index_subjects([bio, kim]))

    assert [e.subject.code for e in grid["Friday"][1]] == ["KIMF4", "BIOF4"]


def test_fixed_grid_ignore_cours_particuliers():
    slots = [make_slot(student_id="S0001", student_name="Aisyah")]
    grid = build_fixed_grid(slots, index_subjects([make_subject()]))
    assert fixed_grid_subjects(grid) == []


def test_window_occupancy():
    slots = [
        make_slot(day="Wednesday", start_time="21:20", end_time="22:20"),
        make_slot(day="Sunday", start_time="10:00", end_time="11:00"),
    ]
    occupancy = window_occupancy(slots)
    assert occupancy["Wednesday"] == [False, True]
    assert occupancy["Sunday"] == [False, False]


# --- Grille à fenêtres dynamiques ---

def test_one_to_one_windows_tri_lexicographique():
    slots = [
        make_slot(day="Monday", start_time="14:00", end_time="15:00", student_id="S1", student_name="A"),
        make_slot(day="Monday", start_time="09:00", end_time="10:00", student_id="S2", student_name="B"),
        make_slot(day="Monday", start_time="14:00", end_time="15:00", student_id="S3", student_name="C"),
        make_slot(day="Monday", start_time="9:30", end_time="10:30", student_id="S4", student_name="D"),
    ]

    windows = one_to_one_windows(slots)

    # "9:30" après "14:00" : tri de chaînes, pas chronologique
    assert windows["Monday"] == ["09:00–10:00", "14:00–15:00", "9:30–10:30"]
    assert windows["Tuesday"] == []


def test_dynamic_grid_jour_vide_colonne_unique():
    grid = build_dynamic_grid([], {})
    assert all(grid[day] == {PLACEHOLDER_LABEL: []} for day in WEEKDAYS)


def test_dynamic_grid_regroupe_par_libelle():
    subject = make_subject(code="AMF5 1:1", name="Add math F5 - 1 to 1", type="1 to 1")
    slots = [
        make_slot(subject_code="AMF5 1:1", day="Saturday", start_time="10:00", end_time="11:00",
                  student_id="S0001", student_name="Aisyah"),
        make_slot(subject_code="AMF5 1:1", day="Saturday", start_time="10:00", end_time="11:00",
                  student_id="S0002", student_name="Farid"),
        make_slot(subject_code="INCONNU", day="Saturday", start_time="12:00", end_time="13:00",
                  student_id="S0003", student_name="Mei Ling"),
    ]

    grid = build_dynamic_grid(slots, index_subjects([subject]))

    assert list(grid["Saturday"]) == ["10:00–11:00", "12:00–13:00"]
    assert [e.student_name for e in grid["Saturday"]["10:00–11:00"]] == ["Aisyah", "Farid"]
    orphan = grid["Saturday"]["12:00–13:00"][0]
    assert orphan.subject is None
    assert orphan.subject_code == "INCONNU"
    assert grid["Monday"] == {PLACEHOLDER_LABEL: []}
