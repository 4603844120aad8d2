"""
Design System — palettes de thèmes + conversion des tokens de présentation en CSS.

Les palettes sont une table de lookup pure, passée explicitement à l'engine et à
l'exporter (THEMES n'est que la valeur par défaut).
"""
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_THEME = "light"


class ThemePalette(BaseModel):
    """Couleurs d'un thème (CSS)."""
    model_config = ConfigDict(frozen=True)

    name: str
    bg: str
    text: str
    border: str
    accent: str
    accent_text: str
    secondary: str
    muted: str
    mood: str = "light"


def _palette(name, bg, text, border, accent, accent_text, secondary, muted, mood="light"):
    return ThemePalette(
        name=name, bg=bg, text=text, border=border, accent=accent,
        accent_text=accent_text, secondary=secondary, muted=muted, mood=mood,
    )


THEMES: Dict[str, ThemePalette] = {p.name: p for p in [
    _palette("light",    "#ffffff", "#111827", "#d1d5db", "#000000", "#ffffff", "#f3f4f6", "#4b5563"),
    _palette("dark",     "#09090b", "#ffffff", "#27272a", "#ffffff", "#000000", "#18181b", "#a1a1aa", "dark"),
    _palette("gray",     "#f9fafb", "#111827", "#d1d5db", "#111827", "#ffffff", "#e5e7eb", "#4b5563"),
    _palette("blue",     "#eff6ff", "#172554", "#bfdbfe", "#2563eb", "#ffffff", "#dbeafe", "#1d4ed8"),
    _palette("indigo",   "#eef2ff", "#1e1b4b", "#c7d2fe", "#4f46e5", "#ffffff", "#e0e7ff", "#4338ca"),
    _palette("purple",   "#faf5ff", "#3b0764", "#e9d5ff", "#9333ea", "#ffffff", "#f3e8ff", "#7e22ce"),
    _palette("slate",    "#f8fafc", "#0f172a", "#cbd5e1", "#0f172a", "#ffffff", "#f1f5f9", "#475569"),
    _palette("emerald",  "#ecfdf5", "#022c22", "#a7f3d0", "#059669", "#ffffff", "#d1fae5", "#047857"),
    _palette("charcoal", "#18181b", "#f4f4f5", "#3f3f46", "#f4f4f5", "#18181b", "#27272a", "#a1a1aa", "dark"),
    _palette("peach",    "#fff7ed", "#431407", "#fed7aa", "#ea580c", "#ffffff", "#ffedd5", "#c2410c"),
    _palette("rose",     "#fff1f2", "#4c0519", "#fecdd3", "#e11d48", "#ffffff", "#ffe4e6", "#be123c"),
    _palette("teal",     "#f0fdfa", "#042f2e", "#99f6e4", "#0d9488", "#ffffff", "#ccfbf1", "#0f766e"),
    _palette("midnight", "#020617", "#f1f5f9", "#1e293b", "#6366f1", "#ffffff", "#0f172a", "#94a3b8", "dark"),
    _palette("coffee",   "#fafaf9", "#1c1917", "#d6d3d1", "#292524", "#ffffff", "#f5f5f4", "#57534e"),
    _palette("cyber",    "#0a0a0a", "#f5f5f5", "#262626", "#06b6d4", "#000000", "#171717", "#a3a3a3", "dark"),
    _palette("terminal", "#000000", "#4ade80", "#14532d", "#16a34a", "#000000", "#18181b", "#15803d", "dark"),
    _palette("lavender", "#f5f3ff", "#2e1065", "#ddd6fe", "#7c3aed", "#ffffff", "#ede9fe", "#6d28d9"),
    _palette("mint",     "#ecfdf5", "#022c22", "#a7f3d0", "#059669", "#ffffff", "#d1fae5", "#047857"),
]}

THEME_GROUPS: Dict[str, List[str]] = {
    "Minimal":  ["light", "dark", "gray"],
    "Startup":  ["blue", "indigo", "purple"],
    "Business": ["slate", "emerald", "charcoal"],
    "Creative": ["peach", "rose", "teal"],
    "Premium":  ["midnight", "coffee"],
    "Tech":     ["cyber", "terminal"],
    "Soft":     ["lavender", "mint"],
}


def palette_for(theme_id: str, palettes: Optional[Dict[str, ThemePalette]] = None) -> ThemePalette:
    """Palette du thème, ou celle du thème par défaut si l'id est inconnu."""
    palettes = palettes if palettes is not None else THEMES
    if theme_id in palettes:
        return palettes[theme_id]
    return palettes.get(DEFAULT_THEME) or THEMES[DEFAULT_THEME]


# ── Couleurs ────────────────────────────────────────────────────────────────

HOVER_SHIFT = 0.15


def scale_hex(hex_color: str, factor: float) -> str:
    """#RRGGBB dont chaque canal est multiplié par `factor`, borné à [0, 255]."""
    raw = hex_color.lstrip("#")
    channels = [max(0, min(255, int(int(raw[i:i + 2], 16) * factor))) for i in (0, 2, 4)]
    return "#" + "".join(f"{c:02x}" for c in channels)


def hover_color(palette: ThemePalette) -> str:
    """Couleur de survol de l'accent : éclaircie sur thème sombre, assombrie sinon."""
    shift = HOVER_SHIFT if palette.mood == "dark" else -HOVER_SHIFT
    return scale_hex(palette.accent, 1 + shift)


# ── Tokens de présentation → CSS ────────────────────────────────────────────

_MAX_WIDTHS = {
    "max-w-4xl": "56rem",
    "max-w-5xl": "64rem",
    "max-w-6xl": "72rem",
    "max-w-7xl": "80rem",
    "max-w-full": "100%",
}

_RADII = {
    "rounded-none": "0",
    "rounded-lg": "0.5rem",
    "rounded-2xl": "1rem",
    "rounded-3xl": "1.5rem",
    "rounded-full": "9999px",
}

_SHADOWS = {
    "shadow-none": "none",
    "shadow-sm": "0 1px 2px 0 rgba(0, 0, 0, 0.05)",
    "shadow-md": "0 4px 6px -1px rgba(0, 0, 0, 0.1)",
    "shadow-lg": "0 10px 15px -3px rgba(0, 0, 0, 0.1)",
    "shadow-xl": "0 20px 25px -5px rgba(0, 0, 0, 0.1)",
    "shadow-2xl": "0 25px 50px -12px rgba(0, 0, 0, 0.25)",
}

_SPACING = re.compile(r"^p[xy]-(\d+)$")
_ARBITRARY = re.compile(r"^[a-z-]+-\[(.+)\]$")


def spacing_css(token: str) -> str:
    """py-24 → 6rem (échelle 0.25rem). Valeur non-token renvoyée telle quelle."""
    m = _SPACING.match(token)
    if not m:
        return token
    n = int(m.group(1))
    return "0" if n == 0 else f"{n * 0.25:g}rem"


def max_width_css(token: str) -> str:
    return _MAX_WIDTHS.get(token, token)


def radius_css(token: str) -> str:
    if token in _RADII:
        return _RADII[token]
    m = _ARBITRARY.match(token)
    return m.group(1) if m else token


def shadow_css(token: str) -> str:
    return _SHADOWS.get(token, token)


def generate_css_variables(palette: ThemePalette) -> str:
    """
    Génère le bloc :root {} d'un thème.

    Returns:
        CSS :root {} avec les couleurs du thème + échelles fixes
    """
    return f""":root {{
  /* === Couleurs ({palette.name}) === */
  --color-bg: {palette.bg};
  --color-text: {palette.text};
  --color-border: {palette.border};
  --color-accent: {palette.accent};
  --color-accent-text: {palette.accent_text};
  --color-accent-hover: {hover_color(palette)};
  --color-secondary: {palette.secondary};
  --color-muted: {palette.muted};

  /* === Typographie === */
  --font-family-base: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
  --line-height-base: 1.6;
  --line-height-tight: 1.1;

  /* === Autres === */
  --border-radius-md: 12px;
  --border-radius-lg: 24px;
  --transition-base: 200ms cubic-bezier(0.4, 0, 0.2, 1);
  --animation-duration: 800ms;
  --animation-easing: cubic-bezier(0.16, 1, 0.3, 1);
}}"""
