from .design_system import DEFAULT_THEME, THEMES, THEME_GROUPS, ThemePalette, palette_for
from .schemas import FieldKind, FieldSpec, LayoutDocument, Section, SectionSchema
from .document import (
    check_integrity, clear_selection, create_section, empty_document, move_section,
    patch_section_data, remove_section, rename, select_section, set_theme,
)

__all__ = [
    "DEFAULT_THEME", "THEMES", "THEME_GROUPS", "ThemePalette", "palette_for",
    "FieldKind", "FieldSpec", "LayoutDocument", "Section", "SectionSchema",
    "check_integrity", "clear_selection", "create_section", "empty_document", "move_section",
    "patch_section_data", "remove_section", "rename", "select_section", "set_theme",
]
