"""
Canvas Builder — modèle de document de layout pour un site builder visuel.

Usage minimal :
    from canvas_builder import EditorSession
    session = EditorSession()
    res = session.add_section("hero")
    session.commit_edit(res.document.selected_section_id, {...})
    artifact = session.export()
"""
from .core import (
    DEFAULT_THEME, THEMES, THEME_GROUPS, LayoutDocument, Section, SectionSchema, ThemePalette,
    check_integrity, clear_selection, create_section, empty_document, move_section,
    patch_section_data, remove_section, rename, select_section, set_theme,
)
from .engine import CommandResult, EditorSession, PendingMove, SectionDraft
from .errors import (
    AccessError, Forbidden, IndexOutOfRange, InvariantViolation, LayoutError, NotFound,
    RenderFailure, SchemaViolation, SectionNotFound, UnknownSectionType, UnknownTheme,
)
from .exporter import ExportArtifact, SectionOutcome, export
from .persistence import DocumentStore, InMemoryDocumentStore
from .registry import REGISTRY, SectionRegistry, SectionType, default_data_for, render_rule_for, schema_for
from .wire import ProjectPayload, document_from_wire, document_to_wire

__version__ = "0.1.0"

__all__ = [
    # Document
    "LayoutDocument", "Section", "SectionSchema", "empty_document",
    "create_section", "remove_section", "patch_section_data", "move_section",
    "select_section", "clear_selection", "set_theme", "rename", "check_integrity",
    # Thèmes
    "DEFAULT_THEME", "THEMES", "THEME_GROUPS", "ThemePalette",
    # Registre
    "REGISTRY", "SectionRegistry", "SectionType", "default_data_for", "schema_for", "render_rule_for",
    # Engine
    "EditorSession", "CommandResult", "PendingMove", "SectionDraft",
    # Export
    "export", "ExportArtifact", "SectionOutcome",
    # Persistance
    "DocumentStore", "InMemoryDocumentStore", "ProjectPayload", "document_from_wire", "document_to_wire",
    # Erreurs
    "LayoutError", "SectionNotFound", "UnknownSectionType", "SchemaViolation", "IndexOutOfRange",
    "UnknownTheme", "InvariantViolation", "RenderFailure", "AccessError", "Forbidden", "NotFound",
]
