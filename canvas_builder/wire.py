"""
Format d'échange du layout : { name, theme, layout: [ {id, type, data}, … ] }.

L'ordre de `layout` fait l'aller-retour à l'identique. La sélection n'est pas
persistée (état d'édition local).
"""
import copy
from collections import Counter
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError

from .core.design_system import DEFAULT_THEME
from .core.schemas import LayoutDocument, Section
from .errors import SchemaViolation, UnknownSectionType
from .registry import REGISTRY, SectionRegistry


class WireSection(BaseModel):
    id: str
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)


class ProjectPayload(BaseModel):
    name: str = "Untitled Design"
    theme: str = DEFAULT_THEME
    layout: List[WireSection] = Field(default_factory=list)


def document_to_wire(doc: LayoutDocument) -> Dict[str, Any]:
    return {
        "name": doc.name,
        "theme": doc.theme,
        "layout": [
            {"id": s.id, "type": s.type, "data": copy.deepcopy(s.data)}
            for s in doc.sections
        ],
    }


def layout_to_wire(doc: LayoutDocument) -> List[Dict[str, Any]]:
    return document_to_wire(doc)["layout"]


def _loc(err: dict) -> str:
    return ".".join(str(p) for p in err["loc"]) or "layout"


def document_from_wire(payload: Union[Dict[str, Any], ProjectPayload], strict: bool = False,
                       registry: SectionRegistry = REGISTRY) -> LayoutDocument:
    """
    Hydrate un LayoutDocument depuis le format d'échange.

    Ids dupliqués → SchemaViolation. En mode strict : type inconnu →
    UnknownSectionType, données hors schéma → SchemaViolation.
    """
    if not isinstance(payload, ProjectPayload):
        try:
            payload = ProjectPayload.model_validate(payload)
        except ValidationError as exc:
            raise SchemaViolation([_loc(e) for e in exc.errors()]) from exc

    dupes = [sid for sid, n in Counter(s.id for s in payload.layout).items() if n > 1]
    if dupes:
        raise SchemaViolation([f"layout.id={sid}" for sid in dupes])

    if strict:
        for entry in payload.layout:
            if not registry.is_known(entry.type):
                raise UnknownSectionType(entry.type)
            registry.check(entry.type, entry.data)

    return LayoutDocument(
        name=payload.name,
        theme=payload.theme,
        sections=tuple(
            Section(id=e.id, type=e.type, data=copy.deepcopy(e.data)) for e in payload.layout
        ),
    )
