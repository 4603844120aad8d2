"""
Générateur CSS — style effectif par section + feuille de style de l'export.

Style effectif, couche par couche (la dernière gagne, attribut par attribut) :
  (a) défauts du type   → espacements, largeur, rayon, ombre, animation
  (b) palette du thème  → fond, texte, bordure
  (c) overrides section → customBg, customText, py/px/maxWidth/radius/shadow/animation
"""
from typing import Any, Dict

from ..core.design_system import (
    ThemePalette, generate_css_variables, max_width_css, radius_css, shadow_css, spacing_css,
)

# clé de data → (attribut de style, convertisseur token → CSS)
_TOKEN_KEYS = {
    "py":        ("padding_y", spacing_css),
    "px":        ("padding_x", spacing_css),
    "maxWidth":  ("max_width", max_width_css),
    "radius":    ("radius", radius_css),
    "shadow":    ("shadow", shadow_css),
    "animation": ("animation", str),
}


def _token_layer(data: Dict[str, Any]) -> Dict[str, str]:
    layer = {}
    for key, (attr, convert) in _TOKEN_KEYS.items():
        value = data.get(key)
        if isinstance(value, str) and value:
            layer[attr] = convert(value)
    return layer


def _override_layer(data: Dict[str, Any]) -> Dict[str, str]:
    layer = _token_layer(data)
    for key, attr in (("customBg", "background"), ("customText", "color")):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            layer[attr] = value.strip()
    return layer


def resolve_style(type_defaults: Dict[str, Any], data: Dict[str, Any], palette: ThemePalette) -> Dict[str, str]:
    """Style effectif d'une section (dict attribut → valeur CSS)."""
    layers = [
        _token_layer(type_defaults),
        {"background": palette.bg, "color": palette.text, "border_color": palette.border},
        _override_layer(data if isinstance(data, dict) else {}),
    ]
    style: Dict[str, str] = {}
    for layer in layers:
        style.update(layer)
    return style


def _clean(value: str) -> str:
    # une valeur ne doit pas sortir de sa déclaration ni de l'attribut style
    return value.replace(";", "").replace('"', "").replace("<", "").replace(">", "")


def outer_style(style: Dict[str, str]) -> str:
    """Déclarations inline de la <section> (padding + couleurs)."""
    parts = [
        f"padding:{_clean(style.get('padding_y', '0'))} {_clean(style.get('padding_x', '0'))}",
        f"background:{_clean(style['background'])}",
        f"color:{_clean(style['color'])}",
    ]
    return ";".join(parts)


def inner_style(style: Dict[str, str]) -> str:
    """Déclarations inline du conteneur interne (largeur, rayon, ombre)."""
    parts = [
        f"max-width:{_clean(style.get('max_width', '100%'))}",
        "margin:0 auto",
        f"border-radius:{_clean(style.get('radius', '0'))}",
        f"box-shadow:{_clean(style.get('shadow', 'none'))}",
    ]
    return ";".join(parts)


# ── Feuille de style de l'export ────────────────────────────────────────────

_BASE_CSS = """*, *::before, *::after { box-sizing: border-box; }
body { margin: 0; font-family: var(--font-family-base); line-height: var(--line-height-base); background: var(--color-bg); color: var(--color-text); }
img { max-width: 100%; display: block; }
h1, h2, h3 { line-height: var(--line-height-tight); margin: 0 0 1rem; }
.section__inner { overflow: hidden; }
.align-left { text-align: left; }
.align-center { text-align: center; }
.align-right { text-align: right; }
.grid-3 { display: grid; grid-template-columns: repeat(auto-fit, minmax(240px, 1fr)); gap: 2rem; }
.btn { display: inline-block; padding: 0.75rem 1.5rem; border-radius: var(--border-radius-md); font-weight: 600; text-decoration: none; transition: background var(--transition-base); }
.btn-primary { background: var(--color-accent); color: var(--color-accent-text); }
.btn-primary:hover { background: var(--color-accent-hover); }
.btn-secondary { background: var(--color-secondary); color: var(--color-text); border: 1px solid var(--color-border); }"""

_BLOCKS_CSS = """.navbar__inner { display: flex; align-items: center; justify-content: space-between; gap: 2rem; }
.navbar--left .navbar__inner { justify-content: flex-start; }
.navbar--center .navbar__inner { flex-direction: column; }
.navbar--sticky { position: sticky; top: 0; z-index: 10; }
.navbar__logo { font-weight: 800; letter-spacing: -0.02em; text-decoration: none; color: inherit; }
.navbar__links { display: flex; gap: 1.5rem; list-style: none; margin: 0; padding: 0; }
.navbar__link { color: var(--color-muted); text-decoration: none; }
.hero__title { font-size: clamp(2.5rem, 6vw, 4.5rem); font-weight: 800; }
.hero__subtitle { font-size: 1.25rem; color: var(--color-muted); margin-bottom: 2rem; }
.richtext__paragraph, .text p { margin: 0 0 1rem; }
.text--xs { font-size: 0.75rem; } .text--sm { font-size: 0.875rem; } .text--base { font-size: 1rem; }
.text--lg { font-size: 1.125rem; } .text--xl { font-size: 1.25rem; } .text--2xl { font-size: 1.5rem; } .text--3xl { font-size: 1.875rem; }
.contact__list { list-style: none; padding: 0; display: grid; gap: 1rem; }
.contact__label { display: block; font-size: 0.75rem; text-transform: uppercase; color: var(--color-muted); }
.image img, .image__empty { width: 100%; object-fit: cover; border-radius: var(--border-radius-md); }
.image__empty { display: flex; align-items: center; justify-content: center; background: var(--color-secondary); color: var(--color-muted); }
.image__caption { margin-top: 0.75rem; font-size: 0.875rem; color: var(--color-muted); text-align: center; }
.video__frame { position: relative; padding-top: 56.25%; }
.video__frame iframe { position: absolute; inset: 0; width: 100%; height: 100%; border-radius: var(--border-radius-md); }
.logogrid, .features { display: grid; gap: 2rem; align-items: center; }
.card { border: 1px solid var(--color-border); border-radius: var(--border-radius-md); overflow: hidden; background: var(--color-secondary); }
.card__image { width: 100%; height: 180px; object-fit: cover; }
.card__title, .card__desc { padding: 0 1.25rem; }
.feature__icon { width: 3rem; height: 3rem; border-radius: var(--border-radius-md); background: var(--color-accent); margin-bottom: 1rem; }
.testimonial { margin: 0; padding: 2rem; border: 1px solid var(--color-border); border-radius: var(--border-radius-lg); }
.testimonial__author { display: flex; align-items: center; gap: 0.75rem; margin-top: 1.5rem; }
.testimonial__avatar { width: 3rem; height: 3rem; border-radius: 9999px; }
.testimonial__role { display: block; font-size: 0.875rem; color: var(--color-muted); }
.pricing__grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(260px, 1fr)); gap: 2rem; }
.pricing__card { padding: 2rem; border: 1px solid var(--color-border); border-radius: var(--border-radius-lg); }
.pricing__card--featured { border: 2px solid var(--color-accent); }
.pricing__price { font-size: 2.5rem; font-weight: 800; margin: 0.5rem 0 1rem; }
.pricing__features { padding-left: 1.25rem; margin-bottom: 2rem; }
.stat__grid { display: flex; flex-wrap: wrap; justify-content: center; gap: 3rem; }
.stat--vertical .stat__grid { flex-direction: column; align-items: center; }
.stat__value { font-size: 3rem; font-weight: 800; }
.stat__label { color: var(--color-muted); }
.buttons { display: flex; flex-wrap: wrap; gap: 1rem; }
.buttons.align-center { justify-content: center; }
.buttons.align-right { justify-content: flex-end; }
.faq__item { border-bottom: 1px solid var(--color-border); padding: 1rem 0; }
.faq__question { cursor: pointer; font-weight: 600; }
.faq__answer { margin-top: 0.75rem; color: var(--color-muted); }
.divider--sm { height: 1rem; } .divider--md { height: 2rem; } .divider--lg { height: 4rem; }
.divider__line { border: 0; border-top: 1px solid var(--color-border); margin: 0; }
.footer__text { font-size: 0.875rem; color: var(--color-muted); margin: 0; }
.placeholder { padding: 2rem; border: 2px dashed var(--color-border); border-radius: var(--border-radius-md); text-align: center; color: var(--color-muted); }
.placeholder--error { border-color: #ef4444; color: #ef4444; }"""

_ANIMATIONS_CSS = """@keyframes fadeUp { from { opacity: 0; transform: translateY(30px); } to { opacity: 1; transform: translateY(0); } }
@keyframes fadeDown { from { opacity: 0; transform: translateY(-30px); } to { opacity: 1; transform: translateY(0); } }
@keyframes fadeIn { from { opacity: 0; } to { opacity: 1; } }
@keyframes scaleUp { from { opacity: 0; transform: scale(0.9); } to { opacity: 1; transform: scale(1); } }
@keyframes slideLeft { from { opacity: 0; transform: translateX(50px); } to { opacity: 1; transform: translateX(0); } }
@keyframes slideRight { from { opacity: 0; transform: translateX(-50px); } to { opacity: 1; transform: translateX(0); } }
.anim-fadeUp, .anim-fadeDown, .anim-fadeIn, .anim-scaleUp, .anim-slideLeft, .anim-slideRight { animation-duration: var(--animation-duration); animation-timing-function: var(--animation-easing); animation-fill-mode: both; }
.anim-fadeUp { animation-name: fadeUp; } .anim-fadeDown { animation-name: fadeDown; } .anim-fadeIn { animation-name: fadeIn; }
.anim-scaleUp { animation-name: scaleUp; } .anim-slideLeft { animation-name: slideLeft; } .anim-slideRight { animation-name: slideRight; }
@media (prefers-reduced-motion: reduce) { [class*="anim-"] { animation: none; } }"""


def generate_stylesheet(palette: ThemePalette) -> str:
    """
    CSS complet de l'export :
    1. :root { variables } — depuis la palette du thème
    2. base + blocs + animations d'entrée
    """
    return "\n\n".join([generate_css_variables(palette), _BASE_CSS, _BLOCKS_CSS, _ANIMATIONS_CSS]) + "\n"
