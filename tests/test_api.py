"""
Tests API projets — CRUD, contrôle d'accès, export zip, catalogue.
DB SQLite temporaire par test.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import base64, io, zipfile
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTH_SECRET", "test-secret")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    from canvas_api import database
    from canvas_api.main import app
    database.init_db(f"sqlite:///{tmp_path / 'test.db'}")
    with TestClient(app) as c:
        yield c


def _auth(user_id: str) -> dict:
    from canvas_api.auth import issue_token
    return {"Authorization": f"Bearer {issue_token(user_id)}"}


def _section(sid: str, type_: str, **changes) -> dict:
    from canvas_builder import default_data_for
    return {"id": sid, "type": type_, "data": {**default_data_for(type_), **changes}}


def _create(client, user="alice", **body) -> dict:
    r = client.post("/projects", json=body, headers=_auth(user))
    assert r.status_code == 201, r.text
    return r.json()


# ── Auth ──────────────────────────────────────────────────────────────────

class TestAuth:

    def test_token_round_trip(self, monkeypatch):
        monkeypatch.setenv("AUTH_SECRET", "s1")
        from canvas_api.auth import issue_token, verify_token
        assert verify_token(issue_token("alice")) == "alice"

    def test_tampered_token(self, monkeypatch):
        monkeypatch.setenv("AUTH_SECRET", "s1")
        from canvas_api.auth import issue_token, verify_token
        token = issue_token("alice")
        assert verify_token("bob." + token.split(".", 1)[1]) is None
        assert verify_token("garbage") is None
        assert verify_token(None) is None

    def test_secret_rotation_invalidates(self, monkeypatch):
        from canvas_api.auth import issue_token, verify_token
        monkeypatch.setenv("AUTH_SECRET", "s1")
        token = issue_token("alice")
        monkeypatch.setenv("AUTH_SECRET", "s2")
        assert verify_token(token) is None

    def test_write_requires_token(self, client):
        assert client.post("/projects", json={}).status_code == 401
        assert client.get("/projects").status_code == 401


# ── CRUD ──────────────────────────────────────────────────────────────────

class TestProjects:

    def test_create_defaults(self, client):
        p = _create(client)
        assert p["name"] == "Untitled Design"
        assert p["theme"] == "light"
        assert p["layout"] == []
        assert p["isPublic"] is False
        assert p["ownerId"] == "alice"

    def test_create_with_layout(self, client):
        layout = [_section("nav-1", "navbar"), _section("hero-1", "hero", heading="Launch Day")]
        p = _create(client, name="Launch", theme="dark", layout=layout)
        assert [e["id"] for e in p["layout"]] == ["nav-1", "hero-1"]
        assert p["layout"][1]["data"]["heading"] == "Launch Day"

    def test_create_rejects_invalid_layout(self, client):
        bad = _section("c", "cards", count=5)
        r = client.post("/projects", json={"layout": [bad]}, headers=_auth("alice"))
        assert r.status_code == 422
        assert r.json()["detail"]["error"] == "schema_violation"
        assert "count" in r.json()["detail"]["keys"]

    def test_create_rejects_unknown_type(self, client):
        r = client.post("/projects", json={"layout": [{"id": "m", "type": "mystery", "data": {}}]},
                        headers=_auth("alice"))
        assert r.status_code == 422
        assert r.json()["detail"]["error"] == "unknown_section_type"

    def test_create_rejects_unknown_theme(self, client):
        r = client.post("/projects", json={"theme": "neon"}, headers=_auth("alice"))
        assert r.status_code == 422
        assert r.json()["detail"]["error"] == "unknown_theme"

    def test_list_own_most_recent_first(self, client):
        a = _create(client, name="A")
        b = _create(client, name="B")
        _create(client, user="bob", name="Other")
        client.put(f"/projects/{a['projectId']}", json={"name": "A2"}, headers=_auth("alice"))
        names = [p["name"] for p in client.get("/projects", headers=_auth("alice")).json()]
        assert names == ["A2", "B"]
        assert b["projectId"] != a["projectId"]

    def test_update_layout_round_trips_order(self, client):
        pid = _create(client)["projectId"]
        layout = [_section("f", "footer"), _section("h", "hero"), _section("n", "navbar")]
        r = client.put(f"/projects/{pid}", json={"layout": layout}, headers=_auth("alice"))
        assert r.status_code == 200
        assert [e["id"] for e in r.json()["layout"]] == ["f", "h", "n"]
        again = client.get(f"/projects/{pid}", headers=_auth("alice")).json()
        assert again["layout"] == r.json()["layout"]

    def test_partial_update_keeps_layout(self, client):
        pid = _create(client, layout=[_section("h", "hero")])["projectId"]
        r = client.put(f"/projects/{pid}", json={"theme": "rose"}, headers=_auth("alice"))
        assert r.json()["theme"] == "rose"
        assert [e["id"] for e in r.json()["layout"]] == ["h"]

    def test_empty_name_leaves_name_unchanged(self, client):
        pid = _create(client, name="Launch")["projectId"]
        r = client.put(f"/projects/{pid}", json={"name": "", "theme": "dark"}, headers=_auth("alice"))
        assert r.status_code == 200
        assert r.json()["name"] == "Launch"
        assert r.json()["theme"] == "dark"

    def test_strict_layout_rejects_string_boolean(self, client):
        pid = _create(client)["projectId"]
        layout = [_section("n", "navbar", sticky="false")]
        r = client.put(f"/projects/{pid}", json={"layout": layout}, headers=_auth("alice"))
        assert r.status_code == 422
        assert "sticky" in r.json()["detail"]["keys"]

    def test_update_invalid_layout_422(self, client):
        pid = _create(client)["projectId"]
        r = client.put(f"/projects/{pid}", json={"layout": [{"id": "h", "type": "hero", "data": {}}]},
                       headers=_auth("alice"))
        assert r.status_code == 422

    def test_update_by_non_owner_403(self, client):
        pid = _create(client)["projectId"]
        r = client.put(f"/projects/{pid}", json={"name": "hack"}, headers=_auth("bob"))
        assert r.status_code == 403

    def test_delete(self, client):
        pid = _create(client)["projectId"]
        assert client.delete(f"/projects/{pid}", headers=_auth("bob")).status_code == 403
        assert client.delete(f"/projects/{pid}", headers=_auth("alice")).json() == {"deleted": pid}
        assert client.get(f"/projects/{pid}", headers=_auth("alice")).status_code == 404


# ── Contrôle d'accès ──────────────────────────────────────────────────────

class TestAccess:

    def test_private_project(self, client):
        pid = _create(client)["projectId"]
        assert client.get(f"/projects/{pid}", headers=_auth("alice")).status_code == 200
        assert client.get(f"/projects/{pid}", headers=_auth("bob")).status_code == 403
        assert client.get(f"/projects/{pid}").status_code == 403

    def test_invalid_token_is_guest(self, client):
        pid = _create(client)["projectId"]
        r = client.get(f"/projects/{pid}", headers={"Authorization": "Bearer alice.forged"})
        assert r.status_code == 403

    def test_missing_project_404(self, client):
        assert client.get("/projects/nope", headers=_auth("alice")).status_code == 404

    def test_public_toggle(self, client):
        pid = _create(client)["projectId"]
        r = client.patch(f"/projects/{pid}/public", headers=_auth("alice"))
        assert r.json() == {"projectId": pid, "isPublic": True}
        assert client.get(f"/projects/{pid}").status_code == 200
        assert client.get(f"/projects/{pid}", headers=_auth("bob")).json()["isPublic"] is True
        r = client.patch(f"/projects/{pid}/public", headers=_auth("alice"))
        assert r.json()["isPublic"] is False
        assert client.get(f"/projects/{pid}").status_code == 403

    def test_public_explicit_value(self, client):
        pid = _create(client)["projectId"]
        for _ in range(2):
            r = client.patch(f"/projects/{pid}/public", json={"isPublic": True}, headers=_auth("alice"))
            assert r.json()["isPublic"] is True

    def test_public_by_non_owner_403(self, client):
        pid = _create(client)["projectId"]
        r = client.patch(f"/projects/{pid}/public", json={"isPublic": True}, headers=_auth("bob"))
        assert r.status_code == 403


# ── Export ────────────────────────────────────────────────────────────────

class TestGenerate:

    def test_generate_zip(self, client):
        layout = [_section("n", "navbar"), _section("h", "hero", heading="Launch Day")]
        pid = _create(client, name="My Site", layout=layout)["projectId"]
        r = client.post(f"/generate/{pid}", headers=_auth("alice"))
        assert r.status_code == 200
        body = r.json()
        assert body["filename"] == "my-site.zip"
        assert [s["status"] for s in body["sections"]] == ["rendered", "rendered"]
        with zipfile.ZipFile(io.BytesIO(base64.b64decode(body["data"]))) as zf:
            assert "my-site/index.html" in zf.namelist()
            assert "Launch Day" in zf.read("my-site/index.html").decode("utf-8")

    def test_generate_is_deterministic(self, client):
        pid = _create(client, layout=[_section("h", "hero")])["projectId"]
        a = client.post(f"/generate/{pid}", headers=_auth("alice")).json()["data"]
        b = client.post(f"/generate/{pid}", headers=_auth("alice")).json()["data"]
        assert a == b

    def test_generate_private_forbidden(self, client):
        pid = _create(client)["projectId"]
        assert client.post(f"/generate/{pid}", headers=_auth("bob")).status_code == 403
        assert client.post("/generate/nope", headers=_auth("alice")).status_code == 404

    def test_generate_public_for_guest(self, client):
        pid = _create(client)["projectId"]
        client.patch(f"/projects/{pid}/public", headers=_auth("alice"))
        assert client.post(f"/generate/{pid}").status_code == 200

    def test_generate_ai_requires_key(self, client):
        pid = _create(client, layout=[_section("h", "hero")])["projectId"]
        assert client.post(f"/generate/{pid}?ai=true", headers=_auth("alice")).status_code == 400

    def test_generate_ai_backend(self, client, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "fake-key")
        pid = _create(client, layout=[_section("h", "hero")])["projectId"]
        with patch("canvas_builder.renderer.ai._gemini", return_value="<div>AI hero</div>"):
            body = client.post(f"/generate/{pid}?ai=true", headers=_auth("alice")).json()
        with zipfile.ZipFile(io.BytesIO(base64.b64decode(body["data"]))) as zf:
            html = zf.read("untitled-design/index.html").decode("utf-8")
        assert "<div>AI hero</div>" in html


# ── Catalogue ─────────────────────────────────────────────────────────────

class TestCatalog:

    def test_catalog(self, client):
        items = client.get("/catalog").json()
        assert len(items) == 18
        hero = next(i for i in items if i["type"] == "hero")
        assert hero["defaults"]["heading"] == "Design something amazing"
        heading = next(f for f in hero["schema"] if f["key"] == "heading")
        assert heading == {"key": "heading", "kind": "string", "required": True}

    def test_themes(self, client):
        body = client.get("/themes").json()
        assert len(body["themes"]) == 18
        assert body["themes"]["dark"]["bg"] == "#09090b"
        assert "Minimal" in body["groups"]

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"
