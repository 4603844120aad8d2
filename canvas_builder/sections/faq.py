"""Section FAQ — liste de questions/réponses."""
from typing import List

from pydantic import Field

from .base import Record, SectionData


class FAQItem(Record):
    question: str
    answer: str


class FAQData(SectionData):
    items: List[FAQItem] = Field(
        default_factory=lambda: [FAQItem(question="Is it fast?", answer="Yes, incredibly.")]
    )
