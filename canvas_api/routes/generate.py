"""
Export — POST /generate/{id} → {filename, data (zip base64), sections}

?ai=true : les sections passent par le backend Gemini (si GEMINI_API_KEY),
avec la même isolation d'erreur par section que le rendu local.
"""
import base64
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from canvas_builder import AccessError, InvariantViolation, export
from canvas_builder.archive import archive_filename, package_archive
from canvas_builder.renderer.ai import ai_enabled, ai_render_overrides

from ..auth import bearer_token
from ..database import get_db
from ..store import SqlDocumentStore
from .projects import access_error

log = logging.getLogger(__name__)

router = APIRouter(tags=["Generate"])


@router.post("/generate/{project_id}")
def generate_project(project_id: str, request: Request, ai: bool = False, db: Session = Depends(get_db)):
    try:
        doc = SqlDocumentStore(db).load_document(project_id, bearer_token(request))
    except AccessError as e:
        raise access_error(e)

    overrides = None
    if ai:
        if not ai_enabled():
            raise HTTPException(400, "Backend IA non configuré (GEMINI_API_KEY)")
        overrides = ai_render_overrides({s.type for s in doc.sections})

    try:
        artifact = export(doc, render_overrides=overrides)
    except InvariantViolation as e:
        log.error("Projet %s : %s", project_id, e)
        raise HTTPException(500, "Document invalide")

    archive = package_archive(artifact, doc.name)
    log.info("Projet %s exporté (%d octets)", project_id, len(archive))
    return {
        "filename": archive_filename(doc.name),
        "data": base64.b64encode(archive).decode("ascii"),
        "sections": [o.model_dump(exclude_none=True) for o in artifact.sections],
    }
