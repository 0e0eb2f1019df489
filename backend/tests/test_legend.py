"""
Tests unitaires des abréviations et couleurs de matières.
"""

import pytest

from conftest import make_subject
from tuitiondesk.services.legend import (
    DEFAULT_COLOR,
    SUBJECT_COLORS,
    abbreviate,
    base_label,
    build_legend,
    clean_subject_name,
    colorize,
)


@pytest.mark.parametrize("name, expected", [
    ("Kimia F4", "KIM"),
    ("fizik", "FIZ"),
    ("Biologi F5", "BIO"),
    ("Add math F4", "AM"),
    ("Matematik", "MM"),
    ("Bahasa Malaysia", "BM"),
    ("Bahasa Inggeris F2 - 1 to 1", "BI"),
    ("Kimia BM - 1 to 1", "KIM"),
    ("Sejarah", "SEJ"),
    ("Geografi", "GEO"),
    ("Sains S3", "SC"),
    ("Prinsip Akaun", "PA"),
])
def test_abbreviate_matieres_connues(name, expected):
    assert abbreviate(name) == expected


def test_abbreviate_repli_initiales_si_plusieurs_mots():
    assert abbreviate("Ekonomi asas") == "EA"


def test_abbreviate_repli_trois_lettres():
    assert abbreviate("Ekonomi") == "EKO"


@pytest.mark.parametrize("name, expected", [
    ("Add math DLP F4", "AMD"),
    ("Kimia dlp", "KIMD"),
    ("Ekonomi DLP", "EKOD"),
    ("SainsDLP", "SCD"),
])
def test_abbreviate_variante_dlp(name, expected):
    assert abbreviate(name) == expected


def test_abbreviate_dlp_base_finissant_par_d():
    """Pas de second D si l'abréviation de base se termine déjà par D."""
    assert abbreviate("Ekonomi Dasar DLP") == "ED"


@pytest.mark.parametrize("name, expected", [
    ("BM", "BM"),
    ("DLP", "DLPD"),
    ("  bm  ", "BM"),
    ("- 1 to 1", "- 1"),
])
def test_abbreviate_nom_reduit_aux_marqueurs(name, expected):
    """Repli sur les trois premiers caractères du nom plutôt qu'une abréviation vide."""
    assert abbreviate(name) == expected


def test_colorize_table_et_repli_dlp():
    assert colorize("KIM") == SUBJECT_COLORS["KIM"]
    assert colorize("AMD") == SUBJECT_COLORS["AM"]
    assert colorize("EKOD") == DEFAULT_COLOR
    assert colorize("XYZ") == DEFAULT_COLOR


@pytest.mark.parametrize("name", ["Add math DLP F4", "Ekonomi", "Bahasa Malaysia", "", "Sains DLP"])
def test_abbreviate_puis_colorize_idempotent(name):
    first = colorize(abbreviate(name))
    second = colorize(abbreviate(name))
    assert first == second


def test_base_label():
    assert base_label("biologi DLP F5") == "Biology"
    assert base_label("Add math DLP") == "Add Math"
    assert base_label("Ekonomi") == "Ekonomi"


@pytest.mark.parametrize("name, expected", [
    ("Add math DLP F4", "Add math DLP"),
    ("Mathematics S1", "Mathematics"),
    ("Biology F6", "Biology"),
    ("Addmath DLP F4 - 1 to 1", "Addmath DLP"),
    ("Bahasa Inggeris F2 - 1 to 1", "Bahasa Inggeris"),
    ("Kimia -", "Kimia"),
    ("Sejarah", "Sejarah"),
])
def test_clean_subject_name(name, expected):
    assert clean_subject_name(name) == expected


def test_build_legend_une_entree_par_nom_de_base():
    subjects = [
        make_subject(code="KIMF4", name="Kimia F4", subject="Kimia"),
        make_subject(code="KIMF5", name="Kimia F5", subject="Kimia"),
        make_subject(code="AMDF4", name="Add math DLP F4", subject="Add math DLP"),
        None,
    ]

    legend = build_legend(subjects)

    assert [item.abbrev for item in legend] == ["KIM", "AMD"]
    assert legend[1].color == SUBJECT_COLORS["AM"]
    assert legend[1].label == "Add Math"
