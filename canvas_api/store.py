"""
SqlDocumentStore — implémentation SQLAlchemy du contrat DocumentStore.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from canvas_builder import Forbidden, LayoutDocument, NotFound
from canvas_builder.persistence import IdentityResolver, can_read, can_write
from canvas_builder.wire import document_from_wire, layout_to_wire

from .auth import verify_token
from .database import db_get_project, db_update_project, jd, jl
from .models import ProjectDB

log = logging.getLogger(__name__)


def project_to_document(p: ProjectDB) -> LayoutDocument:
    return document_from_wire({"name": p.name, "theme": p.theme, "layout": jl(p.layout)})


def project_out(p: ProjectDB) -> dict:
    return {
        "projectId": p.project_id,
        "ownerId":   p.user_id,
        "name":      p.name,
        "theme":     p.theme,
        "layout":    jl(p.layout),
        "isPublic":  bool(p.is_public),
        "createdAt": p.created_at.isoformat() if p.created_at else None,
        "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
    }


class SqlDocumentStore:
    def __init__(self, db: Session, resolve_identity: IdentityResolver = verify_token):
        self.db = db
        self._resolve = resolve_identity

    def _get(self, project_id: str) -> ProjectDB:
        p = db_get_project(self.db, project_id)
        if p is None:
            raise NotFound(project_id)
        return p

    def readable(self, project_id: str, auth_token: Optional[str]) -> ProjectDB:
        p = self._get(project_id)
        if not can_read(p.user_id, bool(p.is_public), self._resolve(auth_token)):
            raise Forbidden(project_id)
        return p

    def writable(self, project_id: str, auth_token: Optional[str]) -> ProjectDB:
        p = self._get(project_id)
        if not can_write(p.user_id, self._resolve(auth_token)):
            raise Forbidden(project_id)
        return p

    # ── Contrat DocumentStore ───────────────────────────────────────────────

    def load_document(self, project_id: str, auth_token: Optional[str]) -> LayoutDocument:
        return project_to_document(self.readable(project_id, auth_token))

    def save_document(self, project_id: str, document: LayoutDocument, auth_token: Optional[str]) -> None:
        p = self.writable(project_id, auth_token)
        p.name = document.name
        p.theme = document.theme
        p.layout = jd(layout_to_wire(document))
        p.updated_at = datetime.utcnow()
        db_update_project(self.db, p)
        log.info("Projet %s sauvegardé (%d sections)", project_id, len(document.sections))

    def set_visibility(self, project_id: str, is_public: bool, auth_token: Optional[str]) -> None:
        p = self.writable(project_id, auth_token)
        p.is_public = is_public
        db_update_project(self.db, p)
        log.info("Projet %s : public=%s", project_id, is_public)
