"""
Backend de rendu IA — Gemini génère le fragment HTML d'une section.

Même contrat que les renderers locaux : (data, theme) → markup. Les erreurs
remontent telles quelles et sont isolées par section dans l'exporter.
Non déterministe : seul le chemin local garantit un export identique octet à octet.
"""
import json
import logging
import os
import re
from typing import Any, Callable, Dict, Iterable, Optional

from ..core.design_system import ThemePalette

log = logging.getLogger(__name__)
TEMP = 0.1

_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?|\n?```\s*$")

_PROMPT = """You generate one section of a static landing page.
Return ONLY an HTML fragment (no <html>, <head> or <body>, no markdown fences).
Use semantic tags and these CSS variables for colors: --color-bg, --color-text,
--color-accent, --color-accent-text, --color-secondary, --color-muted, --color-border.

Section type: {section_type}
Theme ({theme_name}): {theme}
Section data (JSON): {data}
"""


def ai_model() -> str:
    return os.getenv("EXPORT_AI_MODEL", "gemini-1.5-flash")


def ai_enabled() -> bool:
    return bool(os.getenv("GEMINI_API_KEY"))


def _gemini(q: str, model: Optional[str] = None) -> str:
    import google.generativeai as g
    g.configure(api_key=os.getenv("GEMINI_API_KEY"))
    r = g.GenerativeModel(model or ai_model(),
        generation_config={"temperature": TEMP, "max_output_tokens": 2048}).generate_content(q)
    return r.text or ""


def strip_fences(text: str) -> str:
    """Retire les balises ```html … ``` que le modèle ajoute parfois."""
    return _FENCE.sub("", text.strip()).strip()


def build_prompt(section_type: str, data: Dict[str, Any], theme: ThemePalette) -> str:
    return _PROMPT.format(
        section_type=section_type,
        theme_name=theme.name,
        theme=json.dumps(theme.model_dump(), sort_keys=True),
        data=json.dumps(data, sort_keys=True, ensure_ascii=False),
    )


class GeminiRenderRule:
    """Render rule déléguant la génération du fragment à un modèle Gemini."""

    def __init__(self, section_type: str, model: Optional[str] = None,
                 caller: Optional[Callable[[str], str]] = None):
        self.section_type = section_type
        self.model = model
        self._caller = caller

    def __call__(self, data: Dict[str, Any], theme: ThemePalette) -> str:
        prompt = build_prompt(self.section_type, data, theme)
        raw = self._caller(prompt) if self._caller else _gemini(prompt, self.model)
        fragment = strip_fences(raw)
        if not fragment:
            raise ValueError(f"Réponse IA vide pour {self.section_type}")
        log.info("Fragment IA généré pour %s (%d caractères)", self.section_type, len(fragment))
        return fragment


def ai_render_overrides(section_types: Iterable[str], model: Optional[str] = None,
                        caller: Optional[Callable[[str], str]] = None) -> Dict[str, GeminiRenderRule]:
    """Table type → GeminiRenderRule, à passer à export(render_overrides=…)."""
    return {t: GeminiRenderRule(t, model=model, caller=caller) for t in section_types}
