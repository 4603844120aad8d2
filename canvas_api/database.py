"""SQLite — init + session + CRUD helpers"""
import json, logging, os
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, ProjectDB

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

ENGINE       = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def _db_path() -> str:
    return os.getenv("DB_PATH", str(DATA_DIR / "canvas_builder.db"))


def init_db(db_url: Optional[str] = None):
    """(Re)lie le moteur : DB_PATH par défaut, ou une URL explicite (tests)."""
    global ENGINE
    if db_url is None:
        path = Path(_db_path())
        path.parent.mkdir(parents=True, exist_ok=True)
        db_url = f"sqlite:///{path}"
    ENGINE = create_engine(db_url, connect_args={"check_same_thread": False})
    SessionLocal.configure(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    log.info("DB initialisée : %s", db_url)
    return ENGINE


def get_db():
    if ENGINE is None:
        init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jl(s: str) -> list:
    try: return json.loads(s or "[]")
    except json.JSONDecodeError:
        log.warning("Layout JSON illisible, remplacé par []")
        return []

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Projects ──
def db_create_project(db: Session, obj: ProjectDB) -> ProjectDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_project(db: Session, project_id: str) -> Optional[ProjectDB]:
    return db.get(ProjectDB, project_id)

def db_list_projects(db: Session, user_id: str) -> List[ProjectDB]:
    return (db.query(ProjectDB)
              .filter(ProjectDB.user_id == user_id)
              .order_by(ProjectDB.updated_at.desc())
              .all())

def db_update_project(db: Session, obj: ProjectDB) -> ProjectDB:
    db.commit(); db.refresh(obj); return obj

def db_delete_project(db: Session, obj: ProjectDB) -> None:
    db.delete(obj); db.commit()
