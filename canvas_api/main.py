"""
CANVAS BUILDER — FastAPI app (persistance des projets + export)
Démarrer : uvicorn canvas_api.main:app --reload --port 8001
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import canvas_builder

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Canvas Builder — API projets", version=canvas_builder.__version__, docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    from . import database
    if database.ENGINE is None:
        database.init_db()
    log.info("DB prête (SQLite)")


@app.get("/health")
def health():
    return {"status": "ok", "service": "canvas_builder", "version": canvas_builder.__version__}


from .routes import projects, generate, catalog

app.include_router(projects.router)
app.include_router(generate.router)
app.include_router(catalog.router)
