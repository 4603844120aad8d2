"""
Schémas Pydantic du Canvas Builder.

  LayoutDocument → Section (id, type, data)
  SectionSchema  → FieldSpec (clé, nature, requis, options / champs imbriqués)

Les snapshots de document sont immuables (frozen) : chaque opération en
produit un nouveau via model_copy.
"""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, Type, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field

from ..sections.base import SectionData
from .design_system import DEFAULT_THEME


# ── Document ────────────────────────────────────────────────────────────────

class Section(BaseModel):
    """Section typée de la page. `data` reste un sac ouvert (clés camelCase).

    `data` est en lecture seule : les snapshots successifs (et l'historique
    undo) partagent les mêmes objets Section. Pour éditer, passer par
    patch_section_data ou un SectionDraft, qui travaillent sur une copie.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)


class LayoutDocument(BaseModel):
    """Page en cours d'édition : sections ordonnées + thème + sélection."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = "Untitled Design"
    theme: str = DEFAULT_THEME
    sections: Tuple[Section, ...] = ()
    selected_section_id: Optional[str] = Field(default=None, alias="selectedSectionId")

    def ids(self) -> List[str]:
        return [s.id for s in self.sections]

    def index_of(self, section_id: str) -> Optional[int]:
        for i, s in enumerate(self.sections):
            if s.id == section_id:
                return i
        return None

    def find(self, section_id: str) -> Optional[Section]:
        i = self.index_of(section_id)
        return None if i is None else self.sections[i]

    @property
    def selected(self) -> Optional[Section]:
        if self.selected_section_id is None:
            return None
        return self.find(self.selected_section_id)


# ── Descripteurs de schéma ──────────────────────────────────────────────────

class FieldKind(str, Enum):
    STRING      = "string"
    INTEGER     = "integer"
    BOOLEAN     = "boolean"
    ENUM        = "enum"
    STRING_LIST = "string_list"
    RECORD_LIST = "record_list"


class FieldSpec(BaseModel):
    key: str
    kind: FieldKind
    required: bool = True
    options: Optional[List[str]] = None        # ENUM
    fields: Optional[List["FieldSpec"]] = None  # RECORD_LIST


FieldSpec.model_rebuild()


class SectionSchema(BaseModel):
    """Clés reconnues d'un type de section et nature de leurs valeurs."""
    type: str
    fields: List[FieldSpec] = Field(default_factory=list)

    def keys(self) -> List[str]:
        return [f.key for f in self.fields]

    def required_keys(self) -> List[str]:
        return [f.key for f in self.fields if f.required]

    def field(self, key: str) -> Optional[FieldSpec]:
        return next((f for f in self.fields if f.key == key), None)


def _kind_of(annotation) -> Tuple[FieldKind, Optional[List[str]], Optional[Type[BaseModel]]]:
    origin = get_origin(annotation)
    if origin is Literal:
        return FieldKind.ENUM, [str(a) for a in get_args(annotation)], None
    if annotation is bool:
        return FieldKind.BOOLEAN, None, None
    if annotation is int:
        return FieldKind.INTEGER, None, None
    if annotation is str:
        return FieldKind.STRING, None, None
    if origin in (list, List):
        (item,) = get_args(annotation) or (str,)
        if isinstance(item, type) and issubclass(item, BaseModel):
            return FieldKind.RECORD_LIST, None, item
        return FieldKind.STRING_LIST, None, None
    raise TypeError(f"Annotation non supportée dans un schéma de section : {annotation!r}")


def fields_from_model(model: Type[BaseModel], optional_keys: Optional[Tuple[str, ...]] = None) -> List[FieldSpec]:
    """Dérive les FieldSpec d'un modèle Pydantic (clés = alias camelCase)."""
    specs = []
    for name, info in model.model_fields.items():
        key = info.alias or name
        kind, options, record = _kind_of(info.annotation)
        specs.append(FieldSpec(
            key=key,
            kind=kind,
            required=info.is_required() if optional_keys is None else key not in optional_keys,
            options=options,
            fields=fields_from_model(record) if record is not None else None,
        ))
    return specs


def schema_from_model(section_type: str, model: Type[SectionData]) -> SectionSchema:
    """Schéma d'un type : clés spécifiques requises, clés de présentation optionnelles."""
    return SectionSchema(
        type=section_type,
        fields=fields_from_model(model, optional_keys=SectionData.PRESENTATION_KEYS),
    )
