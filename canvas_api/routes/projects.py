"""
Projets — CRUD du layout persisté + visibilité publique.

POST   /projects              → création (201), layout validé strictement
GET    /projects              → projets de l'utilisateur, plus récents d'abord
GET    /projects/{id}         → propriétaire ou projet public
PUT    /projects/{id}         → mise à jour partielle name/theme/layout (propriétaire)
DELETE /projects/{id}         → suppression (propriétaire)
PATCH  /projects/{id}/public  → {isPublic} ou bascule si absent (propriétaire)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from canvas_builder import AccessError, Forbidden, LayoutError, SchemaViolation
from canvas_builder.core.document import rename, set_theme
from canvas_builder.wire import document_from_wire, layout_to_wire

from ..auth import bearer_token, require_user
from ..database import db_create_project, db_delete_project, db_list_projects, get_db, jd
from ..models import ProjectCreate, ProjectDB, ProjectUpdate, VisibilityInput
from ..store import SqlDocumentStore, project_out, project_to_document

log = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"])


def access_error(exc: AccessError) -> HTTPException:
    if isinstance(exc, Forbidden):
        return HTTPException(403, "Accès refusé")
    return HTTPException(404, "Projet introuvable")


def layout_error(exc: LayoutError) -> HTTPException:
    detail = {"error": exc.code, "message": str(exc)}
    if isinstance(exc, SchemaViolation):
        detail["keys"] = exc.keys
    return HTTPException(422, detail)


def _strict_document(name: str, theme: str, layout: list):
    try:
        doc = document_from_wire({"name": name, "theme": "light", "layout": layout}, strict=True)
        return set_theme(doc, theme)
    except LayoutError as e:
        raise layout_error(e)


@router.post("/projects", status_code=201)
def create_project(data: ProjectCreate, user_id: str = Depends(require_user), db: Session = Depends(get_db)):
    doc = _strict_document(data.name, data.theme, data.layout)
    p = db_create_project(db, ProjectDB(
        user_id=user_id, name=doc.name, theme=doc.theme, layout=jd(layout_to_wire(doc)),
    ))
    log.info("Projet %s créé par %s", p.project_id, user_id)
    return project_out(p)


@router.get("/projects")
def list_projects(user_id: str = Depends(require_user), db: Session = Depends(get_db)):
    return [project_out(p) for p in db_list_projects(db, user_id)]


@router.get("/projects/{project_id}")
def get_project(project_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        p = SqlDocumentStore(db).readable(project_id, bearer_token(request))
    except AccessError as e:
        raise access_error(e)
    return project_out(p)


@router.put("/projects/{project_id}")
def update_project(project_id: str, data: ProjectUpdate, request: Request,
                   user_id: str = Depends(require_user), db: Session = Depends(get_db)):
    store = SqlDocumentStore(db)
    token = bearer_token(request)
    try:
        doc = project_to_document(store.writable(project_id, token))
    except AccessError as e:
        raise access_error(e)

    if data.layout is not None:
        doc = _strict_document(doc.name, doc.theme, data.layout)
    try:
        if data.name:  # nom vide → inchangé
            doc = rename(doc, data.name)
        if data.theme is not None:
            doc = set_theme(doc, data.theme)
    except LayoutError as e:
        raise layout_error(e)

    store.save_document(project_id, doc, token)
    return project_out(store.readable(project_id, token))


@router.delete("/projects/{project_id}")
def delete_project(project_id: str, request: Request,
                   user_id: str = Depends(require_user), db: Session = Depends(get_db)):
    try:
        p = SqlDocumentStore(db).writable(project_id, bearer_token(request))
    except AccessError as e:
        raise access_error(e)
    db_delete_project(db, p)
    log.info("Projet %s supprimé", project_id)
    return {"deleted": project_id}


@router.patch("/projects/{project_id}/public")
def set_public(project_id: str, request: Request, data: Optional[VisibilityInput] = Body(None),
               user_id: str = Depends(require_user), db: Session = Depends(get_db)):
    store = SqlDocumentStore(db)
    token = bearer_token(request)
    try:
        p = store.writable(project_id, token)
        is_public = data.is_public if data and data.is_public is not None else not p.is_public
        store.set_visibility(project_id, is_public, token)
    except AccessError as e:
        raise access_error(e)
    return {"projectId": project_id, "isPublic": is_public}
