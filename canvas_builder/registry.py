"""
Registre des types de section — seul endroit où un nouveau type est ajouté.

tag → SectionType(modèle de données, render rule)
  default_data_for(tag)  → sac de données frais (clés camelCase)
  schema_for(tag)        → SectionSchema dérivé du modèle Pydantic
  render_rule_for(tag)   → renderer HTML, ou placeholder si tag inconnu
  validate(tag, data)    → clés fautives (vide si valide)
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Type

from pydantic import ValidationError

from .core.schemas import SectionSchema, schema_from_model
from .errors import SchemaViolation, UnknownSectionType
from .renderer import html as r
from .renderer.base import RenderRule
from .sections import (
    SectionData, NavbarData, HeroData, RichTextData, TextData, ContactData,
    ImageData, VideoData, LogoGridData, CardsData, FeaturesData,
    TestimonialsData, PricingData, StatsData, CTAData, ButtonsData,
    FAQData, FooterData, DividerData,
)


@dataclass(frozen=True)
class SectionType:
    tag: str
    label: str
    data_model: Type[SectionData]
    render: RenderRule


class SectionRegistry:
    def __init__(self, types: Iterable[SectionType] = ()):
        self._types: Dict[str, SectionType] = {}
        self._schemas: Dict[str, SectionSchema] = {}
        for t in types:
            self.register(t)

    def register(self, section_type: SectionType) -> None:
        self._types[section_type.tag] = section_type
        self._schemas.pop(section_type.tag, None)

    def tags(self) -> List[str]:
        return list(self._types)

    def is_known(self, tag: str) -> bool:
        return tag in self._types

    def get(self, tag: str) -> SectionType:
        if tag not in self._types:
            raise UnknownSectionType(tag)
        return self._types[tag]

    def _model_for(self, tag: str) -> Type[SectionData]:
        t = self._types.get(tag)
        return t.data_model if t else SectionData

    # ── Défauts / schéma / rendu ────────────────────────────────────────────

    def default_data_for(self, tag: str) -> Dict[str, Any]:
        """Nouveau dict à chaque appel ; type inconnu → champs de présentation seuls."""
        return self._model_for(tag)().model_dump(by_alias=True)

    def schema_for(self, tag: str) -> SectionSchema:
        if tag not in self._schemas:
            self._schemas[tag] = schema_from_model(tag, self._model_for(tag))
        return self._schemas[tag]

    def render_rule_for(self, tag: str) -> RenderRule:
        t = self._types.get(tag)
        return t.render if t else r.placeholder_rule(tag)

    # ── Validation ──────────────────────────────────────────────────────────

    def validate(self, tag: str, data: Any) -> List[str]:
        """Clés fautives de `data` pour le type `tag` (liste vide si bien formé)."""
        if not isinstance(data, Mapping):
            return ["data"]
        bad = [k for k in self.schema_for(tag).required_keys() if k not in data]
        try:
            payload = json.dumps(dict(data))
        except (TypeError, ValueError):
            return bad or ["data"]
        # mode strict sur la forme JSON : "false" n'est pas un booléen, "3" pas un entier
        try:
            parsed = self._model_for(tag).model_validate_json(payload, strict=True)
        except ValidationError as exc:
            for err in exc.errors():
                key = str(err["loc"][0]) if err["loc"] else "data"
                if key not in bad:
                    bad.append(key)
            return bad
        for key in parsed.consistency_errors():
            if key not in bad:
                bad.append(key)
        return bad

    def check(self, tag: str, data: Any) -> None:
        """Lève SchemaViolation si `data` ne respecte pas le schéma du type."""
        bad = self.validate(tag, data)
        if bad:
            raise SchemaViolation(bad, section_type=tag)


REGISTRY = SectionRegistry([
    SectionType("navbar",       "Navbar",       NavbarData,       r.render_navbar),
    SectionType("hero",         "Hero",         HeroData,         r.render_hero),
    SectionType("richtext",     "Rich Text",    RichTextData,     r.render_richtext),
    SectionType("text",         "Text",         TextData,         r.render_text),
    SectionType("image",        "Image",        ImageData,        r.render_image),
    SectionType("cards",        "Cards",        CardsData,        r.render_cards),
    SectionType("testimonials", "Testimonials", TestimonialsData, r.render_testimonials),
    SectionType("pricing",      "Pricing",      PricingData,      r.render_pricing),
    SectionType("contact",      "Contact",      ContactData,      r.render_contact),
    SectionType("logogrid",     "Logo Grid",    LogoGridData,     r.render_logogrid),
    SectionType("video",        "Video",        VideoData,        r.render_video),
    SectionType("buttons",      "Buttons",      ButtonsData,      r.render_buttons),
    SectionType("features",     "Features",     FeaturesData,     r.render_features),
    SectionType("stats",        "Stats",        StatsData,        r.render_stats),
    SectionType("cta",          "Call to Action", CTAData,        r.render_cta),
    SectionType("faq",          "FAQ",          FAQData,          r.render_faq),
    SectionType("divider",      "Divider",      DividerData,      r.render_divider),
    SectionType("footer",       "Footer",       FooterData,       r.render_footer),
])


def default_data_for(tag: str) -> Dict[str, Any]:
    return REGISTRY.default_data_for(tag)


def schema_for(tag: str) -> SectionSchema:
    return REGISTRY.schema_for(tag)


def render_rule_for(tag: str) -> RenderRule:
    return REGISTRY.render_rule_for(tag)
