"""Section Pricing — grille de plans tarifaires."""
from typing import List

from pydantic import Field

from .base import Record, SectionData


class PricingPlan(Record):
    name: str
    price: str
    features: List[str] = Field(default_factory=list)
    highlighted: bool = False


class PricingData(SectionData):
    plans: List[PricingPlan] = Field(
        default_factory=lambda: [
            PricingPlan(name="Base", price="$0", features=["Feature 1"], highlighted=False),
            PricingPlan(name="Pro", price="$29", features=["All Features", "Support"], highlighted=True),
        ]
    )
