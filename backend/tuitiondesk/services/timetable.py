"""
Construction des grilles d'emploi du temps à partir des créneaux bruts.

Deux vues :
- grille à fenêtres fixes (cours en classe) : jour × fenêtre du soir (0 ou 1) ;
- grille à fenêtres dynamiques (cours particuliers) : jour × libellé "début–fin".

Les fonctions travaillent sur tout objet exposant les attributs des modèles
Timeslot / Subject (ORM ou schéma) et ne modifient jamais leurs entrées.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from tuitiondesk.schemas.timeslot import WEEKDAYS


@dataclass(frozen=True)
class TimeWindow:
    start: str
    end: str

    @property
    def label(self) -> str:
        return f"{self.start}–{self.end}"


NIGHT_WINDOWS: Tuple[TimeWindow, ...] = (
    TimeWindow("20:15", "21:15"),
    TimeWindow("21:20", "22:20"),
)

# Colonne affichée pour un jour sans cours particulier
PLACEHOLDER_LABEL = "—"


@dataclass(frozen=True)
class GridEntry:
    subject: object
    teacher_name: str


@dataclass(frozen=True)
class OneToOneEntry:
    subject_code: str
    subject: Optional[object]
    teacher_name: str
    student_id: Optional[str]
    student_name: Optional[str]


FixedGrid = Dict[str, Dict[int, List[GridEntry]]]
DynamicGrid = Dict[str, Dict[str, List[OneToOneEntry]]]


def _hhmm(value: str) -> str:
    return (value or "")[:5]


def classify_window(start_time: str, end_time: str) -> Optional[int]:
    """Index de la fenêtre du soir correspondant exactement au créneau, sinon None."""
    start, end = _hhmm(start_time), _hhmm(end_time)
    for index, window in enumerate(NIGHT_WINDOWS):
        if start == window.start and end == window.end:
            return index
    return None


def slot_label(slot) -> str:
    return f"{slot.start_time}–{slot.end_time}"


# --- Sélection des créneaux ---

def is_one_to_one(slot) -> bool:
    return slot.student_id is not None


def partition_slots(slots: Iterable) -> Tuple[list, list]:
    """Sépare les créneaux en (cours en classe, cours particuliers)."""
    normal, one_to_one = [], []
    for slot in slots:
        (one_to_one if is_one_to_one(slot) else normal).append(slot)
    return normal, one_to_one


def slots_for_subject(slots: Iterable, subject_code: str) -> list:
    return [s for s in slots if s.subject_code == subject_code]


def slots_for_subjects(slots: Sequence, subject_codes: Iterable[str]) -> list:
    """
    Concaténation des créneaux de chaque matière, dans l'ordre des codes.
    Aucun dédoublonnage : un code répété produit ses créneaux deux fois.
    """
    result = []
    for code in subject_codes:
        result.extend(slots_for_subject(slots, code))
    return result


def slots_for_student(slots: Iterable, student_id: str) -> list:
    return [s for s in slots if s.student_id == student_id]


def index_subjects(subjects: Iterable) -> Dict[str, object]:
    return {s.code: s for s in subjects}


# --- Grilles ---

def empty_fixed_grid() -> FixedGrid:
    return {day: {index: [] for index in range(len(NIGHT_WINDOWS))} for day in WEEKDAYS}


def build_fixed_grid(slots: Iterable, subjects_by_code: Mapping[str, object]) -> FixedGrid:
    """
    Grille jour × fenêtre du soir pour les cours en classe.

    Les créneaux hors fenêtre, les cours particuliers et les créneaux dont la
    matière est introuvable sont ignorés silencieusement. L'ordre d'entrée
    des créneaux est conservé dans chaque cellule.
    """
    grid = empty_fixed_grid()
    for slot in slots:
        if is_one_to_one(slot) or slot.day not in grid:
            continue
        index = classify_window(slot.start_time, slot.end_time)
        if index is None:
            continue
        subject = subjects_by_code.get(slot.subject_code)
        if subject is None:
            continue
        grid[slot.day][index].append(GridEntry(subject=subject, teacher_name=slot.teacher_name))
    return grid


def window_occupancy(slots: Iterable) -> Dict[str, List[bool]]:
    """Présence d'au moins un cours en classe par jour et par fenêtre."""
    occupancy = {day: [False] * len(NIGHT_WINDOWS) for day in WEEKDAYS}
    for slot in slots:
        if is_one_to_one(slot) or slot.day not in occupancy:
            continue
        index = classify_window(slot.start_time, slot.end_time)
        if index is not None:
            occupancy[slot.day][index] = True
    return occupancy


def one_to_one_windows(slots: Iterable) -> Dict[str, List[str]]:
    """
    Libellés distincts des cours particuliers par jour, triés comme des chaînes.
    Le tri n'est pas chronologique si les heures ne sont pas complétées par des zéros.
    """
    labels = {day: set() for day in WEEKDAYS}
    for slot in slots:
        if is_one_to_one(slot) and slot.day in labels:
            labels[slot.day].add(slot_label(slot))
    return {day: sorted(values) for day, values in labels.items()}


def build_dynamic_grid(slots: Sequence, subjects_by_code: Mapping[str, object]) -> DynamicGrid:
    """
    Grille jour → libellé → cours particuliers.

    Les colonnes de chaque jour suivent one_to_one_windows ; un jour vide reçoit
    une seule colonne PLACEHOLDER_LABEL sans entrée. Contrairement à la grille
    fixe, un créneau dont la matière est inconnue est conservé (subject à None).
    """
    windows = one_to_one_windows(slots)
    grid: DynamicGrid = {
        day: ({label: [] for label in labels} if labels else {PLACEHOLDER_LABEL: []})
        for day, labels in windows.items()
    }
    for slot in slots:
        if not is_one_to_one(slot) or slot.day not in grid:
            continue
        grid[slot.day][slot_label(slot)].append(
            OneToOneEntry(
                subject_code=slot.subject_code,
                subject=subjects_by_code.get(slot.subject_code),
                teacher_name=slot.teacher_name,
                student_id=slot.student_id,
                student_name=slot.student_name,
            )
        )
    return grid


def fixed_grid_subjects(grid: FixedGrid) -> list:
    """Matières présentes dans la grille, dans l'ordre jour puis fenêtre."""
    return [entry.subject for day in WEEKDAYS for index in sorted(grid[day]) for entry in grid[day][index]]


def dynamic_grid_subjects(grid: DynamicGrid) -> list:
    return [
        entry.subject
        for day in WEEKDAYS
        for entries in grid[day].values()
        for entry in entries
        if entry.subject is not None
    ]
