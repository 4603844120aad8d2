"""Section Hero — titre, sous-titre, bouton principal."""
from typing import Literal

from .base import PaddingY, SectionData


class HeroData(SectionData):
    py: PaddingY = "py-40"
    heading: str = "Design something amazing"
    subheading: str = "Your vision, powered by AI components."
    button: str = "Get Started"
    align: Literal["left", "center"] = "center"
