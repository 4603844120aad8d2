"""
Exporter — compile un LayoutDocument + thème en fichiers statiques.

Fichiers produits (politique fixe, indépendante des types présents) :
  index.html            → page complète, fragments dans l'ordre du document
  assets/css/style.css  → variables du thème + classes de base + animations
  manifest.json         → nom, thème, statut de rendu de chaque section

Pur et déterministe sur le chemin de rendu local. Un renderer qui lève est
remplacé par un placeholder d'erreur ; un document structurellement invalide
lève InvariantViolation avant tout rendu.
"""
import copy
import json
import logging
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .core.design_system import THEMES, ThemePalette, palette_for
from .core.document import check_integrity
from .core.schemas import LayoutDocument, Section
from .errors import RenderFailure
from .registry import REGISTRY, SectionRegistry
from .renderer.base import RenderRule
from .renderer.css import generate_stylesheet, inner_style, outer_style, resolve_style
from .renderer.html import render_document, render_error, render_section_shell, render_unknown

log = logging.getLogger(__name__)

EXPORT_FORMAT = 1
INDEX_PATH    = "index.html"
STYLE_PATH    = "assets/css/style.css"
MANIFEST_PATH = "manifest.json"


class SectionOutcome(BaseModel):
    id: str
    type: str
    status: Literal["rendered", "placeholder", "error"]
    error: Optional[str] = None


class ExportArtifact(BaseModel):
    files: Dict[str, str]
    sections: List[SectionOutcome] = Field(default_factory=list)
    theme: str

    @property
    def failures(self) -> List[SectionOutcome]:
        return [s for s in self.sections if s.status == "error"]


def _render_one(section: Section, palette: ThemePalette, registry: SectionRegistry,
                overrides: Dict[str, RenderRule]) -> tuple:
    """→ (fragment interne, SectionOutcome)"""
    rule = overrides.get(section.type)
    if rule is None and not registry.is_known(section.type):
        return render_unknown(section.type), SectionOutcome(id=section.id, type=section.type, status="placeholder")
    rule = rule or registry.render_rule_for(section.type)
    try:
        # copie : un renderer ne peut pas altérer le snapshot exporté
        inner = rule(copy.deepcopy(section.data), palette)
    except Exception as exc:
        failure = RenderFailure(section.id, section.type, exc)
        log.warning("%s", failure)
        return (
            render_error(section.type, type(exc).__name__),
            SectionOutcome(id=section.id, type=section.type, status="error", error=type(exc).__name__),
        )
    return inner, SectionOutcome(id=section.id, type=section.type, status="rendered")


def render_section(section: Section, palette: ThemePalette, registry: SectionRegistry = REGISTRY,
                   overrides: Optional[Dict[str, RenderRule]] = None) -> tuple:
    """Fragment <section> complet (style effectif appliqué) + son statut."""
    inner, outcome = _render_one(section, palette, registry, overrides or {})
    style = resolve_style(registry.default_data_for(section.type), section.data, palette)
    fragment = render_section_shell(
        section.id, section.type, inner,
        outer_style=outer_style(style),
        inner_style=inner_style(style),
        animation=style.get("animation"),
        status=outcome.status,
    )
    return fragment, outcome


def build_manifest(doc: LayoutDocument, theme_id: str, outcomes: List[SectionOutcome]) -> str:
    manifest = {
        "format": EXPORT_FORMAT,
        "name": doc.name,
        "theme": theme_id,
        "sections": [o.model_dump(exclude_none=True) for o in outcomes],
    }
    return json.dumps(manifest, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def export(doc: LayoutDocument, theme: Optional[str] = None, registry: SectionRegistry = REGISTRY,
           palettes: Optional[Dict[str, ThemePalette]] = None,
           render_overrides: Optional[Dict[str, RenderRule]] = None) -> ExportArtifact:
    """
    Compile `doc` en fichiers statiques.

    Args:
        theme: id de thème ; par défaut celui du document. Un id inconnu
            retombe sur la palette par défaut.
        render_overrides: render rules remplaçant celles du registre pour
            certains types (ex. backend IA).
    """
    check_integrity(doc)
    palettes = palettes if palettes is not None else THEMES
    theme_id = theme or doc.theme
    if theme_id not in palettes:
        log.warning("Thème %r inconnu, palette par défaut utilisée", theme_id)
    palette = palette_for(theme_id, palettes)

    fragments, outcomes = [], []
    for section in doc.sections:
        fragment, outcome = render_section(section, palette, registry, render_overrides)
        fragments.append(fragment)
        outcomes.append(outcome)

    files = {
        INDEX_PATH: render_document(doc.name, "\n".join(fragments), stylesheet=STYLE_PATH),
        STYLE_PATH: generate_stylesheet(palette),
        MANIFEST_PATH: build_manifest(doc, palette.name, outcomes),
    }
    failed = sum(1 for o in outcomes if o.status == "error")
    log.info("Export %r : %d sections (%d en erreur), thème %s", doc.name, len(outcomes), failed, palette.name)
    return ExportArtifact(files=files, sections=outcomes, theme=palette.name)
