"""Sections de fin de page — footer et séparateur."""
from typing import Literal

from .base import PaddingY, SectionData


class FooterData(SectionData):
    py: PaddingY = "py-12"
    text: str = "© 2025 UI Designer. All rights reserved."
    align: Literal["left", "center", "right"] = "center"


class DividerData(SectionData):
    py: PaddingY = "py-0"
    height: Literal["sm", "md", "lg"] = "md"
    show_line: bool = True
