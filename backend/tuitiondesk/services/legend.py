"""
Abréviations et couleurs des matières pour les légendes des emplois du temps.

Les noms de matières sont du texte libre saisi par l'administration
("Add math DLP F4", "Kimia BM - 1 to 1"...). On en dérive un code court
(KIM, AMD...) puis une classe de couleur. Les deux étapes sont déterministes.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

# Ordre significatif : la première correspondance de préfixe gagne
KNOWN_SUBJECTS: Tuple[Tuple[str, str, str], ...] = (
    ("kimia", "KIM", "Kimia"),
    ("fizik", "FIZ", "Fizik"),
    ("biology", "BIO", "Biology"),
    ("biologi", "BIO", "Biology"),
    ("add math", "AM", "Add Math"),
    ("matematik", "MM", "Matematik"),
    ("bahasa malaysia", "BM", "Bahasa Malaysia"),
    ("bahasa inggeris", "BI", "Bahasa Inggeris"),
    ("sejarah", "SEJ", "Sejarah"),
    ("geografi", "GEO", "Geografi"),
    ("sains", "SC", "Sains"),
    ("prinsip akaun", "PA", "Prinsip Akaun"),
)

SUBJECT_COLORS = {
    "BIO": "bg-green-100 text-green-900 border-green-300",
    "FIZ": "bg-yellow-100 text-yellow-900 border-yellow-300",
    "KIM": "bg-purple-100 text-purple-900 border-purple-300",
    "AM": "bg-red-100 text-red-900 border-red-300",
    "MM": "bg-pink-100 text-pink-900 border-pink-300",
    "BM": "bg-amber-100 text-amber-900 border-amber-300",
    "BI": "bg-sky-100 text-sky-900 border-sky-300",
    "SEJ": "bg-orange-100 text-orange-900 border-orange-300",
    "GEO": "bg-emerald-100 text-emerald-900 border-emerald-300",
    "SC": "bg-blue-100 text-blue-900 border-blue-300",
}

DEFAULT_COLOR = "bg-gray-100 text-gray-900 border-gray-300"

_MARKERS_RE = re.compile(r"\b(BM|DLP)\b", re.IGNORECASE)
_ONE_TO_ONE_RE = re.compile(r"\s*-?\s*1\s*[- ]*\s*to\s*[- ]*\s*1\s*$", re.IGNORECASE)
_GRADE_RE = re.compile(r"\s+(F[1-6]|S[1-6])\s*$", re.IGNORECASE)
_TRAILING_DASH_RE = re.compile(r"[\s-]+$")


@dataclass(frozen=True)
class LegendItem:
    abbrev: str
    color: str
    label: str


def is_dlp(name: str) -> bool:
    return "DLP" in (name or "").upper()


def clean_subject_name(name: str) -> str:
    """
    Retire le suffixe de niveau (F1-F6, S1-S6), le suffixe "1 to 1" et les tirets finaux.

    "Add math DLP F4"             -> "Add math DLP"
    "Addmath DLP F4 - 1 to 1"     -> "Addmath DLP"
    "Bahasa Inggeris F2 - 1 to 1" -> "Bahasa Inggeris"
    """
    if not name:
        return name
    cleaned = _GRADE_RE.sub("", name)
    cleaned = _ONE_TO_ONE_RE.sub("", cleaned)
    # le niveau peut précéder le suffixe "1 to 1"
    cleaned = _GRADE_RE.sub("", cleaned)
    cleaned = _TRAILING_DASH_RE.sub("", cleaned)
    return cleaned.strip()


def _normalize(name: str) -> str:
    stripped = _ONE_TO_ONE_RE.sub("", name or "")
    stripped = _MARKERS_RE.sub("", stripped)
    return " ".join(stripped.split())


def _lookup(normalized: str):
    lowered = normalized.lower()
    for prefix, abbrev, label in KNOWN_SUBJECTS:
        if lowered.startswith(prefix):
            return abbrev, label
    return None


def abbreviate(name: str) -> str:
    """Code court d'une matière ; suffixe D pour les variantes DLP."""
    normalized = _normalize(name)
    known = _lookup(normalized)
    if not normalized:
        # nom réduit à des marqueurs ("BM", "DLP", "- 1 to 1")
        base = (name or "").strip()[:3].upper()
    elif known is not None:
        base = known[0]
    elif " " in normalized:
        base = "".join(word[0].upper() for word in normalized.split(" "))
    else:
        base = normalized[:3].upper()

    if is_dlp(name) and not base.endswith("D"):
        return f"{base}D"
    return base


def colorize(abbrev: str) -> str:
    """Classe de couleur d'une abréviation, avec repli sur la matière de base pour les variantes DLP."""
    if abbrev in SUBJECT_COLORS:
        return SUBJECT_COLORS[abbrev]
    if abbrev.endswith("D") and abbrev[:-1] in SUBJECT_COLORS:
        return SUBJECT_COLORS[abbrev[:-1]]
    return DEFAULT_COLOR


def base_label(name: str) -> str:
    """Libellé affiché dans la légende ; le texte d'origine si la matière est inconnue."""
    known = _lookup(_normalize(name))
    return known[1] if known is not None else name


def display_name(subject) -> str:
    """Champ de regroupement d'une matière, à défaut son nom complet."""
    return subject.subject or subject.name


def build_legend(subjects: Iterable) -> List[LegendItem]:
    """
    Légende des matières affichées, dans l'ordre de première apparition.
    Deux matières qui partagent le même nom de base ne produisent qu'une entrée.
    """
    items = {}
    for subject in subjects:
        if subject is None:
            continue
        key = display_name(subject)
        if key in items:
            continue
        abbrev = abbreviate(key)
        items[key] = LegendItem(abbrev=abbrev, color=colorize(abbrev), label=base_label(key))
    return list(items.values())
