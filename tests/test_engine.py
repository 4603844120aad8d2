"""Tests EditorSession — application atomique, rejets, drag, brouillons, historique."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import itertools

import pytest

from canvas_builder import EditorSession, default_data_for


@pytest.fixture
def session():
    c = itertools.count(1)
    return EditorSession(clock=lambda: next(c))


def _types(session):
    return [s.type for s in session.get_current_document().sections]


def _ids(session):
    return session.get_current_document().ids()


def _seed(session, *types):
    for t in types:
        assert session.add_section(t).status == "applied"
    return _ids(session)


# ── Application / rejet ──────────────────────────────────────────────────────

def test_add_section_applied(session):
    res = session.add_section("hero")
    assert res.status == "applied"
    assert res.ok
    assert res.document is session.get_current_document()
    assert res.document.selected.type == "hero"


def test_rejected_keeps_snapshot(session):
    _seed(session, "hero")
    before = session.get_current_document()
    res = session.delete_section("ghost")
    assert res.status == "rejected"
    assert not res.ok
    assert res.error_code == "section_not_found"
    assert res.document is before
    assert session.get_current_document() is before


@pytest.mark.parametrize("bad", [None, "heading", ["heading"], 42])
def test_commit_edit_non_mapping_is_rejected(session, bad):
    (hero,) = _seed(session, "hero")
    before = session.get_current_document()
    res = session.commit_edit(hero, bad)
    assert res.status == "rejected"
    assert res.error_code == "schema_violation"
    assert session.get_current_document() is before


def test_rejected_move_out_of_range(session):
    _seed(session, "hero")
    res = session.move(0, 5)
    assert res.error_code == "index_out_of_range"


def test_switch_theme(session):
    assert session.switch_theme("cyber").document.theme == "cyber"
    res = session.switch_theme("neon")
    assert res.status == "rejected"
    assert res.error_code == "unknown_theme"
    assert session.get_current_document().theme == "cyber"


def test_switch_to_current_theme_is_noop(session):
    assert session.switch_theme("light").status == "noop"


def test_strict_session_rejects_unknown_type():
    s = EditorSession(strict=True)
    res = s.add_section("mystery")
    assert res.error_code == "unknown_section_type"
    assert s.get_current_document().sections == ()


def test_strict_session_rejects_bad_edit():
    s = EditorSession(strict=True)
    sid = s.add_section("hero").document.selected_section_id
    res = s.commit_edit(sid, {"heading": "x"})
    assert res.error_code == "schema_violation"
    assert s.get_current_document().find(sid).data == default_data_for("hero")


def test_delete_selected_clears_selection(session):
    nav, hero = _seed(session, "navbar", "hero")
    res = session.delete_section(hero)
    assert res.document.selected_section_id is None
    assert _ids(session) == [nav]


def test_rename(session):
    assert session.rename("Launch").document.name == "Launch"


# ── Reorder / drag ───────────────────────────────────────────────────────────

def test_reorder_by_ids(session):
    nav, hero, footer = _seed(session, "navbar", "hero", "footer")
    res = session.reorder(nav, footer)
    assert res.status == "applied"
    assert _ids(session) == [hero, footer, nav]


def test_reorder_same_id_is_noop(session):
    nav, hero = _seed(session, "navbar", "hero")
    before = session.get_current_document()
    res = session.reorder(hero, hero)
    assert res.status == "noop"
    assert session.get_current_document() is before


def test_reorder_missing_id_is_noop(session):
    nav, hero = _seed(session, "navbar", "hero")
    assert session.reorder("ghost", hero).status == "noop"
    assert session.reorder(nav, "ghost").status == "noop"


def test_drag_resolves_ids_at_commit(session):
    """Le drag est résolu en indices au commit, pas au début du geste."""
    nav, hero, cards, footer = _seed(session, "navbar", "hero", "cards", "footer")
    pending = session.begin_drag(footer)
    session.delete_section(nav)  # décale les indices pendant le geste
    res = session.commit_drag(pending, target_id=hero)
    assert res.status == "applied"
    assert _ids(session) == [footer, hero, cards]


def test_drag_target_deleted_during_gesture_is_noop(session):
    nav, hero = _seed(session, "navbar", "hero")
    pending = session.begin_drag(nav)
    session.delete_section(hero)
    before = session.get_current_document()
    res = session.commit_drag(pending, target_id=hero)
    assert res.status == "noop"
    assert session.get_current_document() is before


def test_drag_without_target_is_noop(session):
    nav, _ = _seed(session, "navbar", "hero")
    assert session.commit_drag(session.begin_drag(nav)).status == "noop"


# ── Brouillons ───────────────────────────────────────────────────────────────

def test_draft_commits_single_patch(session):
    (hero,) = _seed(session, "hero")
    draft = session.open_draft(hero)
    for partial in ("L", "La", "Launch", "Launch Day"):
        draft.set("heading", partial)
    assert session.get_current_document().find(hero).data["heading"] == "Design something amazing"

    res = session.commit_draft(draft)
    assert res.status == "applied"
    assert session.get_current_document().find(hero).data["heading"] == "Launch Day"
    assert not draft.dirty

    session.undo()
    assert session.get_current_document().find(hero).data["heading"] == "Design something amazing"


def test_draft_and_commit_never_alias_history(session):
    (hero,) = _seed(session, "hero")
    draft = session.open_draft(hero)
    draft.set("heading", "Draft only")
    draft.data["subheading"] = "also draft"
    assert session.get_current_document().find(hero).data["heading"] == "Design something amazing"

    payload = {**default_data_for("hero"), "heading": "Committed"}
    session.commit_edit(hero, payload)
    payload["heading"] = "mutated after commit"
    assert session.get_current_document().find(hero).data["heading"] == "Committed"
    session.undo()
    assert session.get_current_document().find(hero).data["heading"] == "Design something amazing"


def test_clean_draft_is_noop(session):
    (hero,) = _seed(session, "hero")
    assert session.commit_draft(session.open_draft(hero)).status == "noop"


def test_draft_on_missing_section(session):
    assert session.open_draft("ghost") is None


def test_draft_for_deleted_section_is_rejected(session):
    (hero,) = _seed(session, "hero")
    draft = session.open_draft(hero)
    draft.update({"heading": "Gone"})
    session.delete_section(hero)
    res = session.commit_draft(draft)
    assert res.error_code == "section_not_found"
    assert draft.dirty


# ── Historique ───────────────────────────────────────────────────────────────

def test_undo_redo(session):
    _seed(session, "navbar", "hero")
    assert session.undo().status == "applied"
    assert _types(session) == ["navbar"]
    assert session.redo().status == "applied"
    assert _types(session) == ["navbar", "hero"]


def test_new_action_clears_redo(session):
    _seed(session, "navbar", "hero")
    session.undo()
    session.add_section("footer")
    assert not session.can_redo
    assert session.redo().status == "noop"


def test_selection_not_recorded(session):
    nav, hero = _seed(session, "navbar", "hero")
    session.select(nav)
    session.clear_selection()
    session.select(hero)
    session.undo()
    assert _types(session) == ["navbar"]


def test_undo_on_empty_history_is_noop(session):
    assert session.undo().status == "noop"


def test_history_limit():
    c = itertools.count(1)
    s = EditorSession(history_limit=3, clock=lambda: next(c))
    for _ in range(5):
        s.add_section("text")
    statuses = [s.undo().status for _ in range(4)]
    assert statuses == ["applied", "applied", "applied", "noop"]
    assert len(s.get_current_document().sections) == 2


# ── Export ───────────────────────────────────────────────────────────────────

def test_export_works_on_snapshot(session):
    (hero,) = _seed(session, "hero")
    artifact = session.export()
    session.commit_edit(hero, {**default_data_for("hero"), "heading": "Changed"})
    assert "Changed" not in artifact.files["index.html"]
    assert "Changed" in session.export().files["index.html"]


def test_export_theme_override(session):
    _seed(session, "hero")
    artifact = session.export("midnight")
    assert artifact.theme == "midnight"
    assert session.get_current_document().theme == "light"
