"""
Mutation Engine — session d'édition mono-utilisateur.

Chaque action UI = une opération de document appliquée atomiquement :
  succès → le snapshot courant est remplacé
  échec  → snapshot inchangé + CommandResult "rejected" (jamais d'exception)

Historique undo/redo des changements de contenu ; la sélection seule n'est
pas enregistrée.
"""
import copy
import logging
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .core import document as ops
from .core.design_system import THEMES, ThemePalette
from .core.schemas import LayoutDocument
from .errors import LayoutError
from .exporter import ExportArtifact, export
from .registry import REGISTRY, SectionRegistry

log = logging.getLogger(__name__)

HISTORY_LIMIT = 100


class CommandResult(BaseModel):
    status: Literal["applied", "noop", "rejected"]
    action: str
    document: LayoutDocument
    error_code: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != "rejected"


class PendingMove(BaseModel):
    """Geste de drag en cours : résolu en indices seulement au commit."""
    model_config = ConfigDict(frozen=True)

    moved_id: str
    target_id: Optional[str] = None


class SectionDraft:
    """Tampon d'édition d'une section : les frappes s'accumulent ici, un seul patch au commit."""

    def __init__(self, section_id: str, data: Dict[str, Any]):
        self.section_id = section_id
        self.data = copy.deepcopy(data)
        self.dirty = False

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value
        self.dirty = True

    def update(self, changes: Dict[str, Any]) -> None:
        for key, value in changes.items():
            self.set(key, value)

    def discard(self, key: str) -> None:
        if key in self.data:
            del self.data[key]
            self.dirty = True


class EditorSession:
    def __init__(self, document: Optional[LayoutDocument] = None, registry: SectionRegistry = REGISTRY,
                 palettes: Optional[Dict[str, ThemePalette]] = None, history_limit: int = HISTORY_LIMIT,
                 clock: Callable[[], float] = time.time, strict: bool = False):
        self._document = document if document is not None else LayoutDocument()
        self.registry = registry
        self.palettes = palettes if palettes is not None else THEMES
        self.strict = strict
        self._clock = clock
        self._undo: Deque[LayoutDocument] = deque(maxlen=history_limit)
        self._redo: Deque[LayoutDocument] = deque(maxlen=history_limit)

    def get_current_document(self) -> LayoutDocument:
        return self._document

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    # ── Application atomique ────────────────────────────────────────────────

    def _apply(self, action: str, op: Callable[[LayoutDocument], LayoutDocument],
               record: bool = True) -> CommandResult:
        before = self._document
        try:
            after = op(before)
        except LayoutError as exc:
            log.warning("Action %s rejetée : %s", action, exc)
            return CommandResult(status="rejected", action=action, document=before,
                                 error_code=exc.code, error=str(exc))
        if after is before:
            return CommandResult(status="noop", action=action, document=before)
        if record:
            self._undo.append(before)
            self._redo.clear()
        self._document = after
        return CommandResult(status="applied", action=action, document=after)

    def _noop(self, action: str) -> CommandResult:
        return CommandResult(status="noop", action=action, document=self._document)

    # ── Actions ─────────────────────────────────────────────────────────────

    def add_section(self, section_type: str) -> CommandResult:
        return self._apply("add_section", lambda d: ops.create_section(
            d, section_type, strict=self.strict, registry=self.registry, clock=self._clock))

    def delete_section(self, section_id: str) -> CommandResult:
        return self._apply("delete_section", lambda d: ops.remove_section(d, section_id))

    def commit_edit(self, section_id: str, new_data: Dict[str, Any]) -> CommandResult:
        return self._apply("commit_edit", lambda d: ops.patch_section_data(
            d, section_id, new_data, strict=self.strict, registry=self.registry))

    def select(self, section_id: str) -> CommandResult:
        return self._apply("select", lambda d: ops.select_section(d, section_id), record=False)

    def clear_selection(self) -> CommandResult:
        return self._apply("clear_selection", ops.clear_selection, record=False)

    def switch_theme(self, theme_id: str) -> CommandResult:
        return self._apply("switch_theme", lambda d: ops.set_theme(d, theme_id, self.palettes))

    def rename(self, name: str) -> CommandResult:
        return self._apply("rename", lambda d: ops.rename(d, name))

    def move(self, from_index: int, to_index: int) -> CommandResult:
        return self._apply("move", lambda d: ops.move_section(d, from_index, to_index))

    # ── Drag & drop (deux phases) ───────────────────────────────────────────

    def begin_drag(self, moved_id: str) -> PendingMove:
        return PendingMove(moved_id=moved_id)

    def commit_drag(self, pending: PendingMove, target_id: Optional[str] = None) -> CommandResult:
        return self.reorder(pending.moved_id, target_id or pending.target_id)

    def reorder(self, moved_id: str, target_id: Optional[str]) -> CommandResult:
        """Indices résolus maintenant ; id disparu ou même index → noop."""
        doc = self._document
        src = doc.index_of(moved_id)
        dst = doc.index_of(target_id) if target_id is not None else None
        if src is None or dst is None or src == dst:
            return self._noop("reorder")
        return self._apply("reorder", lambda d: ops.move_section(d, src, dst))

    # ── Brouillons ──────────────────────────────────────────────────────────

    def open_draft(self, section_id: str) -> Optional[SectionDraft]:
        section = self._document.find(section_id)
        return SectionDraft(section.id, section.data) if section else None

    def commit_draft(self, draft: SectionDraft) -> CommandResult:
        if not draft.dirty:
            return self._noop("commit_edit")
        result = self.commit_edit(draft.section_id, draft.data)
        if result.status == "applied":
            draft.dirty = False
        return result

    # ── Historique ──────────────────────────────────────────────────────────

    def undo(self) -> CommandResult:
        if not self._undo:
            return self._noop("undo")
        self._redo.append(self._document)
        self._document = self._undo.pop()
        return CommandResult(status="applied", action="undo", document=self._document)

    def redo(self) -> CommandResult:
        if not self._redo:
            return self._noop("redo")
        self._undo.append(self._document)
        self._document = self._redo.pop()
        return CommandResult(status="applied", action="redo", document=self._document)

    # ── Export ──────────────────────────────────────────────────────────────

    def export(self, theme: Optional[str] = None, **kwargs) -> ExportArtifact:
        """Exporte le snapshot courant ; les éditions suivantes ne l'affectent pas."""
        return export(self._document, theme, registry=self.registry, palettes=self.palettes, **kwargs)
