"""
Erreurs du modèle de document, de l'export et de la frontière de persistance.

LayoutError        → erreurs d'opération sur le document (récupérées par l'engine)
InvariantViolation → document structurellement invalide (défaut, pas une erreur utilisateur)
RenderFailure      → un renderer a levé sur une section (contenu dans l'export)
AccessError        → Forbidden / NotFound côté persistance
"""
from typing import List, Optional


class LayoutError(Exception):
    """Erreur d'opération sur un LayoutDocument."""
    code = "layout_error"


class SectionNotFound(LayoutError):
    code = "section_not_found"

    def __init__(self, section_id: str):
        super().__init__(f"Section introuvable : {section_id!r}")
        self.section_id = section_id


class UnknownSectionType(LayoutError):
    code = "unknown_section_type"

    def __init__(self, section_type: str):
        super().__init__(f"Type de section inconnu : {section_type!r}")
        self.section_type = section_type


class SchemaViolation(LayoutError):
    code = "schema_violation"

    def __init__(self, keys: List[str], section_type: Optional[str] = None):
        where = f" ({section_type})" if section_type else ""
        super().__init__(f"Données invalides{where} : {', '.join(keys)}")
        self.keys = list(keys)
        self.section_type = section_type


class IndexOutOfRange(LayoutError):
    code = "index_out_of_range"

    def __init__(self, index: int, length: int):
        super().__init__(f"Index {index} hors de [0, {length})")
        self.index = index
        self.length = length


class UnknownTheme(LayoutError):
    code = "unknown_theme"

    def __init__(self, theme_id: str):
        super().__init__(f"Thème inconnu : {theme_id!r}")
        self.theme_id = theme_id


class InvariantViolation(Exception):
    """Ids dupliqués ou sélection pendante : bug en amont, jamais un cas à gérer."""

    def __init__(self, problems: List[str]):
        super().__init__("Invariant du document violé : " + "; ".join(problems))
        self.problems = list(problems)


class RenderFailure(Exception):
    def __init__(self, section_id: str, section_type: str, cause: BaseException):
        super().__init__(f"Rendu impossible pour {section_type} {section_id!r} : {cause}")
        self.section_id = section_id
        self.section_type = section_type
        self.cause = cause


class AccessError(Exception):
    """Erreur d'accès à la frontière de persistance."""


class Forbidden(AccessError):
    def __init__(self, project_id: str):
        super().__init__(f"Accès refusé au projet {project_id!r}")
        self.project_id = project_id


class NotFound(AccessError):
    def __init__(self, project_id: str):
        super().__init__(f"Projet introuvable : {project_id!r}")
        self.project_id = project_id
