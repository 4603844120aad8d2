"""Section Stats — chiffres clés."""
from typing import List, Literal

from pydantic import Field

from .base import PaddingY, Record, SectionData


class StatItem(Record):
    label: str
    value: str


class StatsData(SectionData):
    py: PaddingY = "py-16"
    stats: List[StatItem] = Field(default_factory=lambda: [StatItem(label="Users", value="1M+")])
    layout: Literal["horizontal", "vertical"] = "horizontal"
