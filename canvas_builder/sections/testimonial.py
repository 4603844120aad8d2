"""Section Témoignages — citation, nom, rôle, avatar."""
from typing import List

from pydantic import Field

from .base import Record, SectionData

_AVATAR = (
    "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e"
    "?auto=format&fit=facearea&facepad=2&w=100&h=100&q=80"
)


class TestimonialItem(Record):
    name: str
    role: str
    quote: str
    image_url: str


class TestimonialsData(SectionData):
    items: List[TestimonialItem] = Field(
        default_factory=lambda: [TestimonialItem(
            name="Alex Rivera",
            role="Founder",
            quote="This builder is game changing!",
            image_url=_AVATAR,
        )]
    )
