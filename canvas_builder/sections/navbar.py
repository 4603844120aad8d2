"""Section Navbar — logo + liens de navigation."""
from typing import List, Literal

from pydantic import Field

from .base import PaddingY, SectionData


class NavbarData(SectionData):
    py: PaddingY = "py-8"
    logo: str = "DESIGNER"
    links: List[str] = Field(default_factory=lambda: ["Home", "Features", "Pricing"])
    align: Literal["left", "center", "right"] = "right"
    sticky: bool = False
