"""Sections de contenu texte — richtext, text, contact."""
from typing import Literal

from .base import PaddingY, SectionData


class RichTextData(SectionData):
    heading: str = "Our Story"
    body: str = (
        "Start telling your story here. This component supports multiple lines "
        "of text and custom headings."
    )
    align: Literal["left", "center"] = "left"


class TextData(SectionData):
    py: PaddingY = "py-8"
    content: str = "This is a text block."
    font_size: Literal["xs", "sm", "base", "lg", "xl", "2xl", "3xl"] = "base"
    align: Literal["left", "center", "right"] = "left"


class ContactData(SectionData):
    heading: str = "Contact Us"
    email: str = "hi@example.com"
    phone: str = "+1 234 567 890"
    address: str = "123 Studio St"
