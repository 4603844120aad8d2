"""
Variantes de données de section — une classe Pydantic par type.
"""
from .base import SectionData, Record
from .navbar import NavbarData
from .hero import HeroData
from .content import RichTextData, TextData, ContactData
from .media import ImageData, VideoData, LogoGridData
from .cards import CardsData, FeaturesData, FeatureItem
from .testimonial import TestimonialsData, TestimonialItem
from .pricing import PricingData, PricingPlan
from .stat import StatsData, StatItem
from .cta import CTAData, ButtonsData, ButtonItem
from .faq import FAQData, FAQItem
from .footer import FooterData, DividerData

__all__ = [
    # Base
    "SectionData", "Record",
    # Variantes
    "NavbarData", "HeroData", "RichTextData", "TextData", "ContactData",
    "ImageData", "VideoData", "LogoGridData",
    "CardsData", "FeaturesData", "FeatureItem",
    "TestimonialsData", "TestimonialItem",
    "PricingData", "PricingPlan",
    "StatsData", "StatItem",
    "CTAData", "ButtonsData", "ButtonItem",
    "FAQData", "FAQItem",
    "FooterData", "DividerData",
]
