"""
Archive — empaquette un ExportArtifact en zip téléchargeable.

Dossier racine = nom du projet slugifié ; horodatages fixes et ordre trié,
donc deux exports identiques donnent deux archives identiques.
"""
import io
import re
import unicodedata
import zipfile

from .exporter import ExportArtifact

_FIXED_DATE = (1980, 1, 1, 0, 0, 0)


def slugify(name: str) -> str:
    s = "".join(c for c in unicodedata.normalize("NFD", name or "") if unicodedata.category(c) != "Mn")
    s = re.sub(r"[^a-z0-9]+", "-", s.lower()).strip("-")
    return s or "untitled-design"


def archive_filename(name: str) -> str:
    return f"{slugify(name)}.zip"


def package_archive(artifact: ExportArtifact, project_name: str) -> bytes:
    folder = slugify(project_name)
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for path in sorted(artifact.files):
            info = zipfile.ZipInfo(f"{folder}/{path}", date_time=_FIXED_DATE)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            zf.writestr(info, artifact.files[path].encode("utf-8"))
    return buf.getvalue()
