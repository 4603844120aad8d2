"""
Frontière de persistance — contrat DocumentStore + implémentation mémoire.

Règle d'accès commune à tous les stores :
  lecture          → propriétaire, ou projet public
  écriture/partage → propriétaire uniquement
Un token absent ou invalide = invité (projets publics seulement).
"""
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from .core.schemas import LayoutDocument
from .errors import Forbidden, NotFound
from .wire import document_from_wire, document_to_wire

log = logging.getLogger(__name__)

# token → user_id (None = invité)
IdentityResolver = Callable[[Optional[str]], Optional[str]]


def can_read(owner_id: str, is_public: bool, caller_id: Optional[str]) -> bool:
    return is_public or (caller_id is not None and caller_id == owner_id)


def can_write(owner_id: str, caller_id: Optional[str]) -> bool:
    return caller_id is not None and caller_id == owner_id


class DocumentStore(Protocol):
    def load_document(self, project_id: str, auth_token: Optional[str]) -> LayoutDocument: ...
    def save_document(self, project_id: str, document: LayoutDocument, auth_token: Optional[str]) -> None: ...
    def set_visibility(self, project_id: str, is_public: bool, auth_token: Optional[str]) -> None: ...


class StoredProject(BaseModel):
    project_id: str
    owner_id: str
    is_public: bool = False
    payload: Dict[str, Any] = Field(default_factory=dict)


def _token_is_user_id(token: Optional[str]) -> Optional[str]:
    return token or None


class InMemoryDocumentStore:
    """Store en mémoire (tests, intégration embarquée). Token = user_id par défaut."""

    def __init__(self, resolve_identity: IdentityResolver = _token_is_user_id):
        self._resolve = resolve_identity
        self._projects: Dict[str, StoredProject] = {}

    def create(self, owner_id: str, document: Optional[LayoutDocument] = None,
               project_id: Optional[str] = None, is_public: bool = False) -> str:
        project_id = project_id or str(uuid.uuid4())
        self._projects[project_id] = StoredProject(
            project_id=project_id,
            owner_id=owner_id,
            is_public=is_public,
            payload=document_to_wire(document or LayoutDocument()),
        )
        return project_id

    def project_ids(self, owner_id: str) -> List[str]:
        return [p.project_id for p in self._projects.values() if p.owner_id == owner_id]

    def _get(self, project_id: str) -> StoredProject:
        record = self._projects.get(project_id)
        if record is None:
            raise NotFound(project_id)
        return record

    def load_document(self, project_id: str, auth_token: Optional[str]) -> LayoutDocument:
        record = self._get(project_id)
        if not can_read(record.owner_id, record.is_public, self._resolve(auth_token)):
            raise Forbidden(project_id)
        return document_from_wire(record.payload)

    def save_document(self, project_id: str, document: LayoutDocument, auth_token: Optional[str]) -> None:
        record = self._get(project_id)
        if not can_write(record.owner_id, self._resolve(auth_token)):
            raise Forbidden(project_id)
        self._projects[project_id] = record.model_copy(update={"payload": document_to_wire(document)})
        log.info("Projet %s sauvegardé (%d sections)", project_id, len(document.sections))

    def set_visibility(self, project_id: str, is_public: bool, auth_token: Optional[str]) -> None:
        record = self._get(project_id)
        if not can_write(record.owner_id, self._resolve(auth_token)):
            raise Forbidden(project_id)
        self._projects[project_id] = record.model_copy(update={"is_public": is_public})
        log.info("Projet %s : public=%s", project_id, is_public)
