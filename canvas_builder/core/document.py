"""
Opérations pures sur LayoutDocument : chaque fonction reçoit un snapshot et en
retourne un nouveau (ou le même objet si l'opération ne change rien).

Le registre et la table de palettes sont passés en argument ; REGISTRY et
THEMES ne sont que les valeurs par défaut.
"""
import copy
import time
from collections import Counter
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from ..errors import (
    IndexOutOfRange, InvariantViolation, SchemaViolation, SectionNotFound, UnknownSectionType, UnknownTheme,
)
from .design_system import THEMES, ThemePalette
from .schemas import LayoutDocument, Section

Clock = Callable[[], float]


def _registry(registry):
    if registry is None:
        from ..registry import REGISTRY
        return REGISTRY
    return registry


def new_section_id(section_type: str, existing: Iterable[str], clock: Clock = time.time) -> str:
    """`<type>-<ms>` ; suffixe -2, -3… si déjà pris dans le document."""
    taken = set(existing)
    base = f"{section_type}-{int(clock() * 1000)}"
    candidate, n = base, 2
    while candidate in taken:
        candidate = f"{base}-{n}"
        n += 1
    return candidate


def empty_document(name: str = "Untitled Design") -> LayoutDocument:
    return LayoutDocument(name=name)


# ── Sections ────────────────────────────────────────────────────────────────

def create_section(doc: LayoutDocument, section_type: str, strict: bool = False,
                   registry=None, clock: Clock = time.time) -> LayoutDocument:
    """Ajoute une section (données par défaut) en fin de page et la sélectionne."""
    registry = _registry(registry)
    if strict and not registry.is_known(section_type):
        raise UnknownSectionType(section_type)
    section = Section(
        id=new_section_id(section_type, doc.ids(), clock),
        type=section_type,
        data=registry.default_data_for(section_type),
    )
    return doc.model_copy(update={
        "sections": doc.sections + (section,),
        "selected_section_id": section.id,
    })


def remove_section(doc: LayoutDocument, section_id: str) -> LayoutDocument:
    """Retire une section ; la sélection est effacée si elle pointait dessus."""
    if doc.index_of(section_id) is None:
        raise SectionNotFound(section_id)
    update: Dict[str, Any] = {"sections": tuple(s for s in doc.sections if s.id != section_id)}
    if doc.selected_section_id == section_id:
        update["selected_section_id"] = None
    return doc.model_copy(update=update)


def patch_section_data(doc: LayoutDocument, section_id: str, new_data: Dict[str, Any],
                       strict: bool = False, registry=None) -> LayoutDocument:
    """Remplace en bloc le sac `data` d'une section (pas de fusion partielle)."""
    i = doc.index_of(section_id)
    if i is None:
        raise SectionNotFound(section_id)
    section = doc.sections[i]
    if not isinstance(new_data, Mapping):
        raise SchemaViolation(["data"], section.type)
    if strict:
        _registry(registry).check(section.type, new_data)
    patched = section.model_copy(update={"data": copy.deepcopy(dict(new_data))})
    return doc.model_copy(update={"sections": doc.sections[:i] + (patched,) + doc.sections[i + 1:]})


def move_section(doc: LayoutDocument, from_index: int, to_index: int) -> LayoutDocument:
    """Sémantique array-move : retire en from_index, réinsère en to_index."""
    n = len(doc.sections)
    for index in (from_index, to_index):
        if not 0 <= index < n:
            raise IndexOutOfRange(index, n)
    if from_index == to_index:
        return doc
    sections = list(doc.sections)
    sections.insert(to_index, sections.pop(from_index))
    return doc.model_copy(update={"sections": tuple(sections)})


# ── Sélection / thème / nom ─────────────────────────────────────────────────

def select_section(doc: LayoutDocument, section_id: str) -> LayoutDocument:
    if doc.index_of(section_id) is None:
        raise SectionNotFound(section_id)
    if doc.selected_section_id == section_id:
        return doc
    return doc.model_copy(update={"selected_section_id": section_id})


def clear_selection(doc: LayoutDocument) -> LayoutDocument:
    if doc.selected_section_id is None:
        return doc
    return doc.model_copy(update={"selected_section_id": None})


def set_theme(doc: LayoutDocument, theme_id: str,
              palettes: Optional[Dict[str, ThemePalette]] = None) -> LayoutDocument:
    palettes = palettes if palettes is not None else THEMES
    if theme_id not in palettes:
        raise UnknownTheme(theme_id)
    if doc.theme == theme_id:
        return doc
    return doc.model_copy(update={"theme": theme_id})


def rename(doc: LayoutDocument, name: str) -> LayoutDocument:
    if doc.name == name:
        return doc
    return doc.model_copy(update={"name": name})


# ── Intégrité ───────────────────────────────────────────────────────────────

def integrity_problems(doc: LayoutDocument) -> list:
    problems = [
        f"id dupliqué : {sid!r}"
        for sid, n in Counter(doc.ids()).items() if n > 1
    ]
    if doc.selected_section_id is not None and doc.index_of(doc.selected_section_id) is None:
        problems.append(f"sélection pendante : {doc.selected_section_id!r}")
    return problems


def check_integrity(doc: LayoutDocument) -> None:
    """Lève InvariantViolation si ids dupliqués ou sélection pendante."""
    problems = integrity_problems(doc)
    if problems:
        raise InvariantViolation(problems)
