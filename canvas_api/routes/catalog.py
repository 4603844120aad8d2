"""Catalogue — types de section (schéma + défauts) et palettes de thèmes."""
from fastapi import APIRouter

from canvas_builder import REGISTRY, THEME_GROUPS, THEMES

router = APIRouter(tags=["Catalog"])


@router.get("/catalog")
def catalog():
    return [
        {
            "type":     tag,
            "label":    REGISTRY.get(tag).label,
            "defaults": REGISTRY.default_data_for(tag),
            "schema":   REGISTRY.schema_for(tag).model_dump(mode="json", exclude_none=True)["fields"],
        }
        for tag in REGISTRY.tags()
    ]


@router.get("/themes")
def themes():
    return {
        "groups": THEME_GROUPS,
        "themes": {tid: p.model_dump() for tid, p in THEMES.items()},
    }
