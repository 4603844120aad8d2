"""Grilles — cartes (listes parallèles) et features."""
from typing import List

from pydantic import Field

from .base import Record, SectionData

_CARD_IMAGE = "https://images.unsplash.com/photo-1498050108023-c5249f4df085?auto=format&fit=crop&w=400&q=80"


class CardsData(SectionData):
    count: int = 3
    titles: List[str] = Field(default_factory=lambda: ["Card Title"] * 3)
    descriptions: List[str] = Field(default_factory=lambda: ["Card description text goes here."] * 3)
    image_urls: List[str] = Field(default_factory=lambda: [_CARD_IMAGE] * 3)

    def consistency_errors(self) -> List[str]:
        # count doit égaler la longueur de chaque liste parallèle
        bad = [
            key for key, values in (
                ("titles", self.titles),
                ("descriptions", self.descriptions),
                ("imageUrls", self.image_urls),
            )
            if len(values) != self.count
        ]
        if self.count < 0 or bad:
            return ["count"] + bad
        return []


class FeatureItem(Record):
    title: str
    description: str


class FeaturesData(SectionData):
    items: List[FeatureItem] = Field(
        default_factory=lambda: [FeatureItem(title="Power", description="AI generated code")]
    )
    columns: int = 3
