"""Tests Exporter — fichiers, déterminisme, couches de style, isolation d'erreurs, archive."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import io
import itertools
import json
import zipfile
from unittest.mock import patch

import pytest

from canvas_builder import (
    THEMES, InvariantViolation, LayoutDocument, Section, create_section, default_data_for,
    empty_document, export, patch_section_data, rename, set_theme,
)
from canvas_builder.archive import archive_filename, package_archive, slugify
from canvas_builder.core.design_system import hover_color, scale_hex
from canvas_builder.renderer.ai import GeminiRenderRule, ai_render_overrides, strip_fences


def _doc(*types):
    c = itertools.count(1)
    doc = empty_document()
    for t in types:
        doc = create_section(doc, t, clock=lambda: next(c))
    return doc


def _index(artifact):
    return artifact.files["index.html"]


def _manifest(artifact):
    return json.loads(artifact.files["manifest.json"])


# ── Fichiers ─────────────────────────────────────────────────────────────────

def test_fixed_file_set():
    artifact = export(_doc("navbar", "hero", "footer"))
    assert list(artifact.files) == ["index.html", "assets/css/style.css", "manifest.json"]


def test_empty_document_exports():
    artifact = export(empty_document())
    assert "<!DOCTYPE html>" in _index(artifact)
    assert _manifest(artifact)["sections"] == []


def test_launch_day_scenario():
    """Scénario : hero créé, heading patché en "Launch Day", exporté."""
    doc = create_section(empty_document(), "hero", clock=lambda: 1.0)
    sid = doc.sections[0].id
    doc = patch_section_data(doc, sid, {**default_data_for("hero"), "heading": "Launch Day"})
    html = _index(export(doc))
    assert html.count('data-section-type="hero"') == 1
    assert html.count("Launch Day") == 1
    assert '<h1 class="hero__title">Launch Day</h1>' in html


def test_sections_in_document_order():
    html = _index(export(_doc("footer", "hero", "navbar")))
    positions = [html.index(f'data-section-type="{t}"') for t in ("footer", "hero", "navbar")]
    assert positions == sorted(positions)


def test_title_is_document_name():
    doc = rename(_doc("hero"), "Acme & Co")
    assert "<title>Acme &amp; Co</title>" in _index(export(doc))


def test_manifest_sorted_and_complete():
    doc = _doc("navbar", "hero")
    artifact = export(doc)
    raw = artifact.files["manifest.json"]
    m = json.loads(raw)
    assert m["name"] == "Untitled Design"
    assert m["theme"] == "light"
    assert [s["id"] for s in m["sections"]] == doc.ids()
    assert all(s["status"] == "rendered" for s in m["sections"])
    assert raw == json.dumps(m, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def test_user_text_is_escaped():
    doc = _doc("hero")
    doc = patch_section_data(doc, doc.sections[0].id, {**default_data_for("hero"), "heading": "<script>x</script>"})
    html = _index(export(doc))
    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html


# ── Déterminisme ─────────────────────────────────────────────────────────────

def test_export_is_deterministic():
    doc = _doc("navbar", "hero", "cards", "pricing", "testimonials", "faq", "footer")
    assert export(doc).files == export(doc).files


def test_archive_is_deterministic():
    doc = rename(_doc("hero", "footer"), "Launch Day")
    assert package_archive(export(doc), doc.name) == package_archive(export(doc), doc.name)


# ── Thème / couches de style ─────────────────────────────────────────────────

def test_theme_palette_in_stylesheet():
    css = export(set_theme(_doc("hero"), "dark")).files["assets/css/style.css"]
    assert "--color-bg: #09090b;" in css
    assert "@keyframes fadeUp" in css


def test_accent_hover_shift():
    assert scale_hex("#808080", 1.15) == "#939393"
    assert scale_hex("#808080", 0.85) == "#6c6c6c"
    assert scale_hex("#ff0000", 1.15) == "#ff0000"
    light = THEMES["light"].model_copy(update={"accent": "#808080"})
    dark = light.model_copy(update={"mood": "dark"})
    assert hover_color(light) == "#6c6c6c"
    assert hover_color(dark) == "#939393"


def test_explicit_theme_overrides_document_theme():
    artifact = export(_doc("hero"), theme="cyber")
    assert artifact.theme == "cyber"
    assert "background:#0a0a0a" in _index(artifact)


def test_unknown_theme_falls_back_to_default():
    doc = LayoutDocument(theme="neon", sections=(Section(id="h", type="hero", data=default_data_for("hero")),))
    artifact = export(doc)
    assert artifact.theme == "light"
    assert _manifest(artifact)["theme"] == "light"


def test_type_defaults_then_theme():
    html = _index(export(_doc("hero")))
    # hero : py-40 / px-12 par défaut, fond et texte du thème light
    assert "padding:10rem 3rem;background:#ffffff;color:#111827" in html


def test_section_overrides_win():
    doc = _doc("hero")
    data = {**default_data_for("hero"), "customBg": "#ff0000", "customText": "#00ff00",
            "py": "py-8", "radius": "rounded-[40px]", "shadow": "shadow-sm", "animation": "fadeUp"}
    html = _index(export(patch_section_data(doc, doc.sections[0].id, data)))
    assert "padding:2rem 3rem;background:#ff0000;color:#00ff00" in html
    assert "border-radius:40px" in html
    assert "box-shadow:0 1px 2px 0 rgba(0, 0, 0, 0.05)" in html
    assert "anim-fadeUp" in html


def test_missing_presentation_keys_fall_back_to_type_defaults():
    doc = _doc("footer")
    doc = patch_section_data(doc, doc.sections[0].id, {"text": "Bye", "align": "left"})
    html = _index(export(doc))
    assert "padding:3rem 3rem" in html
    assert "Bye" in html


# ── Résilience ───────────────────────────────────────────────────────────────

def test_unknown_type_placeholder():
    doc = _doc("hero")
    doc = doc.model_copy(update={"sections": doc.sections + (Section(id="m1", type="mystery", data={}),)})
    artifact = export(doc)
    html = _index(artifact)
    assert "Unsupported section: mystery" in html
    assert "hero__title" in html
    assert [s.status for s in artifact.sections] == ["rendered", "placeholder"]


def test_renderer_failure_is_contained():
    doc = _doc("navbar", "hero", "footer")
    doc = patch_section_data(doc, doc.sections[1].id, {"heading": "no other keys"})
    artifact = export(doc)
    html = _index(artifact)
    assert [s.status for s in artifact.sections] == ["rendered", "error", "rendered"]
    assert artifact.failures[0].error == "KeyError"
    assert "placeholder--error" in html
    assert "navbar__logo" in html and "footer__text" in html


def test_renderer_cannot_mutate_snapshot():
    doc = _doc("hero")

    def greedy(data, theme):
        data["heading"] = "mutated"
        return "<p>ok</p>"

    export(doc, render_overrides={"hero": greedy})
    assert doc.sections[0].data["heading"] == "Design something amazing"


def test_invariant_violation_is_distinct():
    doc = LayoutDocument(sections=(Section(id="x", type="hero"), Section(id="x", type="hero")))
    with pytest.raises(InvariantViolation):
        export(doc)


# ── Backend IA ───────────────────────────────────────────────────────────────

def test_strip_fences():
    assert strip_fences("```html\n<div>a</div>\n```") == "<div>a</div>"
    assert strip_fences("<div>b</div>") == "<div>b</div>"


def test_ai_overrides_use_same_contract():
    doc = _doc("navbar", "hero")
    overrides = ai_render_overrides(["hero"], caller=lambda prompt: "```html\n<div class=\"ai-hero\">AI</div>\n```")
    artifact = export(doc, render_overrides=overrides)
    assert '<div class="ai-hero">AI</div>' in _index(artifact)
    assert "navbar__logo" in _index(artifact)


def test_ai_failure_is_contained():
    def boom(prompt):
        raise RuntimeError("quota")

    artifact = export(_doc("hero"), render_overrides=ai_render_overrides(["hero"], caller=boom))
    assert artifact.sections[0].status == "error"
    assert artifact.sections[0].error == "RuntimeError"


def test_gemini_rule_calls_backend():
    with patch("canvas_builder.renderer.ai._gemini", return_value="<section>G</section>") as m:
        html = GeminiRenderRule("hero")(default_data_for("hero"), THEMES["light"])
    assert html == "<section>G</section>"
    prompt = m.call_args[0][0]
    assert "Section type: hero" in prompt
    assert "Design something amazing" in prompt


def test_gemini_empty_answer_raises():
    rule = GeminiRenderRule("hero", caller=lambda p: "   ")
    with pytest.raises(ValueError):
        rule({}, THEMES["light"])


# ── Archive ──────────────────────────────────────────────────────────────────

def test_slugify():
    assert slugify("Launch Day") == "launch-day"
    assert slugify("Café  Déco!") == "cafe-deco"
    assert slugify("   ") == "untitled-design"
    assert archive_filename("My Site") == "my-site.zip"


def test_archive_layout():
    doc = rename(_doc("hero"), "Launch Day")
    data = package_archive(export(doc), doc.name)
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        names = zf.namelist()
        assert names == sorted(names)
        assert set(names) == {
            "launch-day/index.html", "launch-day/assets/css/style.css", "launch-day/manifest.json",
        }
        assert all(i.date_time == (1980, 1, 1, 0, 0, 0) for i in zf.infolist())
        assert "Design something amazing" in zf.read("launch-day/index.html").decode("utf-8")
