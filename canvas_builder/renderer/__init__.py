from .base import RenderRule
from .css import generate_stylesheet, resolve_style
from .html import render_document, render_error, render_unknown

__all__ = ["RenderRule", "generate_stylesheet", "resolve_style", "render_document", "render_error", "render_unknown"]
