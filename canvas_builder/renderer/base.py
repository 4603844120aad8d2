"""
Protocol RenderRule — interface pluggable des renderers de section (HTML local, IA…).
"""
from typing import Any, Dict, Protocol, runtime_checkable

from ..core.design_system import ThemePalette


@runtime_checkable
class RenderRule(Protocol):
    def __call__(self, data: Dict[str, Any], theme: ThemePalette) -> str: ...
