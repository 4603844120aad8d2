"""Sections d'action — call-to-action et rangée de boutons."""
from typing import List, Literal

from pydantic import Field

from .base import PaddingY, Record, SectionData


class CTAData(SectionData):
    heading: str = "Ready?"
    supporting_text: str = "Join us today."
    button: str = "Sign Up"
    align: Literal["left", "center", "right"] = "center"


class ButtonItem(Record):
    label: str


class ButtonsData(SectionData):
    py: PaddingY = "py-12"
    buttons: List[ButtonItem] = Field(
        default_factory=lambda: [ButtonItem(label="Action 1"), ButtonItem(label="Action 2")]
    )
    align: Literal["left", "center", "right"] = "center"
