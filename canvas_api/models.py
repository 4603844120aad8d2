"""
Data models — ProjectDB (SQLAlchemy) + corps de requêtes (Pydantic v2)
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class ProjectDB(Base):
    __tablename__ = "projects"
    project_id: Mapped[str]      = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id:    Mapped[str]      = mapped_column(sa.String, nullable=False, index=True)
    name:       Mapped[str]      = mapped_column(sa.String, nullable=False, default="Untitled Design")
    theme:      Mapped[str]      = mapped_column(sa.String, nullable=False, default="light")
    layout:     Mapped[str]      = mapped_column(sa.Text, nullable=False, default="[]")  # JSON [{id,type,data}]
    is_public:  Mapped[bool]     = mapped_column(sa.Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ── API (Pydantic) ─────────────────────────────────────────────────────

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectCreate(_CamelModel):
    name: str = "Untitled Design"
    theme: str = "light"
    layout: List[Dict[str, Any]] = Field(default_factory=list)


class ProjectUpdate(_CamelModel):
    name: Optional[str] = None
    theme: Optional[str] = None
    layout: Optional[List[Dict[str, Any]]] = None


class VisibilityInput(_CamelModel):
    is_public: Optional[bool] = None  # absent → bascule
