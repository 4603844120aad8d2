"""Sections média — image, vidéo embarquée, grille de logos."""
from typing import List

from pydantic import Field

from .base import SectionData

_LOGO_PLACEHOLDER = "https://via.placeholder.com/120x60/eeeeee/999999?text=LOGO"


class ImageData(SectionData):
    url: str = ""
    height: int = 400
    caption: str = "Beautiful Image"
    full_width: bool = False


class VideoData(SectionData):
    heading: str = "Product Demo"
    video_url: str = "https://www.youtube.com/embed/dQw4w9WgXcQ"


class LogoGridData(SectionData):
    logos: List[str] = Field(default_factory=lambda: [_LOGO_PLACEHOLDER] * 4)
    columns: int = 4
