"""
Données de section — base commune à toutes les variantes.

Chaque type de section est un modèle Pydantic dérivé de SectionData.
Clés sérialisées en camelCase (format du layout persisté : customBg, maxWidth…).
"""
from typing import ClassVar, List, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PaddingY = Literal["py-0", "py-4", "py-8", "py-12", "py-16", "py-20", "py-24", "py-32", "py-40", "py-60"]
PaddingX = Literal["px-0", "px-4", "px-8", "px-12", "px-20", "px-32"]
MaxWidth = Literal["max-w-4xl", "max-w-5xl", "max-w-6xl", "max-w-7xl", "max-w-full"]
Radius = Literal["rounded-none", "rounded-lg", "rounded-2xl", "rounded-3xl", "rounded-[40px]", "rounded-full"]
Shadow = Literal["shadow-none", "shadow-sm", "shadow-md", "shadow-lg", "shadow-xl", "shadow-2xl"]
Animation = Literal["none", "fadeUp", "fadeDown", "fadeIn", "scaleUp", "slideLeft", "slideRight"]


class Record(BaseModel):
    """Élément d'une liste de records (plan tarifaire, témoignage, question FAQ…)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class SectionData(BaseModel):
    """Champs de présentation optionnels portés par toute section."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    # Clés (alias) de présentation : optionnelles dans le schéma de chaque type
    PRESENTATION_KEYS: ClassVar[tuple] = (
        "py", "px", "radius", "shadow", "customBg", "customText", "maxWidth", "animation",
    )

    py: PaddingY = "py-24"
    px: PaddingX = "px-12"
    radius: Radius = "rounded-none"
    shadow: Shadow = "shadow-none"
    custom_bg: str = ""
    custom_text: str = ""
    max_width: MaxWidth = "max-w-6xl"
    animation: Animation = "none"

    def consistency_errors(self) -> List[str]:
        """Clés incohérentes entre elles (listes parallèles…). Vide si cohérent."""
        return []
