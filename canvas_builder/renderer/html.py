"""
Renderer HTML — un render rule par type de section : (data, theme) → fragment.

Les renderers lisent les clés requises directement (data["heading"]…) : une
donnée malformée lève, et l'exporter remplace la section par un placeholder
d'erreur. Toutes les valeurs utilisateur passent par html.escape.
"""
import html
from typing import Any, Dict, Optional

from ..core.design_system import ThemePalette

Data = Dict[str, Any]


def _e(value: Any) -> str:
    return html.escape(str(value), quote=True)


def _align(data: Data, default: str = "left") -> str:
    return f"align-{data.get('align', default)}"


# ── Navigation / en-tête ────────────────────────────────────────────────────

def render_navbar(data: Data, theme: ThemePalette) -> str:
    classes = ["navbar", f"navbar--{data['align']}"]
    if data["sticky"]:
        classes.append("navbar--sticky")
    links_html = "".join(
        f'<li><a href="#{_e(str(link).lower())}" class="navbar__link">{_e(link)}</a></li>'
        for link in data["links"]
    )
    return f"""<nav class="{" ".join(classes)}">
  <div class="navbar__inner">
    <a href="#" class="navbar__logo">{_e(data["logo"])}</a>
    <ul class="navbar__links">{links_html}</ul>
  </div>
</nav>"""


def render_hero(data: Data, theme: ThemePalette) -> str:
    button = data["button"]
    cta = f'\n    <div class="hero__cta-group"><a href="#" class="btn btn-primary">{_e(button)}</a></div>' if button else ""
    return f"""<div class="hero {_align(data, "center")}">
  <div class="hero__content">
    <h1 class="hero__title">{_e(data["heading"])}</h1>
    <p class="hero__subtitle">{_e(data["subheading"])}</p>{cta}
  </div>
</div>"""


# ── Texte ───────────────────────────────────────────────────────────────────

def render_richtext(data: Data, theme: ThemePalette) -> str:
    paragraphs = "".join(
        f'<p class="richtext__paragraph">{_e(p)}</p>'
        for p in str(data["body"]).split("\n") if p.strip()
    )
    return f"""<div class="richtext {_align(data)}">
  <h2 class="richtext__title">{_e(data["heading"])}</h2>
  <div class="richtext__body">{paragraphs}</div>
</div>"""


def render_text(data: Data, theme: ThemePalette) -> str:
    return (
        f'<div class="text text--{_e(data["fontSize"])} {_align(data)}">'
        f'<p>{_e(data["content"])}</p></div>'
    )


def render_contact(data: Data, theme: ThemePalette) -> str:
    email = _e(data["email"])
    return f"""<div class="contact align-center">
  <h2 class="contact__title">{_e(data["heading"])}</h2>
  <ul class="contact__list">
    <li class="contact__item"><span class="contact__label">Email</span><a href="mailto:{email}">{email}</a></li>
    <li class="contact__item"><span class="contact__label">Phone</span>{_e(data["phone"])}</li>
    <li class="contact__item"><span class="contact__label">Address</span>{_e(data["address"])}</li>
  </ul>
</div>"""


# ── Média ───────────────────────────────────────────────────────────────────

def render_image(data: Data, theme: ThemePalette) -> str:
    height = int(data["height"])
    classes = "image image--full" if data["fullWidth"] else "image"
    url = data["url"]
    if url:
        media = f'<img src="{_e(url)}" alt="{_e(data["caption"])}" style="height:{height}px" loading="lazy">'
    else:
        media = f'<div class="image__empty" style="height:{height}px">No image selected</div>'
    caption = f'\n  <figcaption class="image__caption">{_e(data["caption"])}</figcaption>' if data["caption"] else ""
    return f"""<figure class="{classes}">
  {media}{caption}
</figure>"""


def render_video(data: Data, theme: ThemePalette) -> str:
    return f"""<div class="video align-center">
  <h2 class="video__title">{_e(data["heading"])}</h2>
  <div class="video__frame">
    <iframe src="{_e(data["videoUrl"])}" title="{_e(data["heading"])}" frameborder="0" allowfullscreen></iframe>
  </div>
</div>"""


def render_logogrid(data: Data, theme: ThemePalette) -> str:
    columns = int(data["columns"])
    logos = "".join(
        f'<div class="logogrid__item"><img src="{_e(src)}" alt="Logo {i}" loading="lazy"></div>'
        for i, src in enumerate(data["logos"], 1)
    )
    return f'<div class="logogrid" style="grid-template-columns:repeat({columns}, minmax(0, 1fr))">{logos}</div>'


# ── Grilles ─────────────────────────────────────────────────────────────────

def render_cards(data: Data, theme: ThemePalette) -> str:
    count = int(data["count"])
    titles, descriptions, images = data["titles"], data["descriptions"], data["imageUrls"]
    items = ""
    for i in range(count):
        items += f"""<article class="card">
  <img class="card__image" src="{_e(images[i])}" alt="{_e(titles[i])}" loading="lazy">
  <h3 class="card__title">{_e(titles[i])}</h3>
  <p class="card__desc">{_e(descriptions[i])}</p>
</article>"""
    return f'<div class="cards grid-3">{items}</div>'


def render_features(data: Data, theme: ThemePalette) -> str:
    columns = int(data["columns"])
    items = "".join(
        f'<div class="feature"><div class="feature__icon" aria-hidden="true"></div>'
        f'<h3 class="feature__title">{_e(item["title"])}</h3>'
        f'<p class="feature__desc">{_e(item["description"])}</p></div>'
        for item in data["items"]
    )
    return f'<div class="features" style="grid-template-columns:repeat({columns}, minmax(0, 1fr))">{items}</div>'


def render_testimonials(data: Data, theme: ThemePalette) -> str:
    items = ""
    for item in data["items"]:
        items += f"""<blockquote class="testimonial">
  <p class="testimonial__quote">&ldquo;{_e(item["quote"])}&rdquo;</p>
  <footer class="testimonial__author">
    <img class="testimonial__avatar" src="{_e(item["imageUrl"])}" alt="{_e(item["name"])}">
    <div><strong>{_e(item["name"])}</strong><span class="testimonial__role">{_e(item["role"])}</span></div>
  </footer>
</blockquote>"""
    return f'<div class="testimonials grid-3">{items}</div>'


def render_pricing(data: Data, theme: ThemePalette) -> str:
    cards = ""
    for plan in data["plans"]:
        classes = "pricing__card pricing__card--featured" if plan.get("highlighted") else "pricing__card"
        features = "".join(f"<li>{_e(f)}</li>" for f in plan.get("features", []))
        cards += f"""<div class="{classes}">
  <div class="pricing__name">{_e(plan["name"])}</div>
  <div class="pricing__price">{_e(plan["price"])}</div>
  <ul class="pricing__features">{features}</ul>
  <a href="#" class="btn {"btn-primary" if plan.get("highlighted") else "btn-secondary"}">Choose {_e(plan["name"])}</a>
</div>"""
    return f'<div class="pricing"><div class="pricing__grid">{cards}</div></div>'


def render_stats(data: Data, theme: ThemePalette) -> str:
    items = "".join(
        f'<div class="stat__item"><div class="stat__value">{_e(s["value"])}</div>'
        f'<div class="stat__label">{_e(s["label"])}</div></div>'
        for s in data["stats"]
    )
    return f'<div class="stat stat--{_e(data["layout"])}"><div class="stat__grid">{items}</div></div>'


# ── Action ──────────────────────────────────────────────────────────────────

def render_cta(data: Data, theme: ThemePalette) -> str:
    return f"""<div class="cta {_align(data, "center")}">
  <h2 class="cta__title">{_e(data["heading"])}</h2>
  <p class="cta__text">{_e(data["supportingText"])}</p>
  <a href="#" class="btn btn-primary">{_e(data["button"])}</a>
</div>"""


def render_buttons(data: Data, theme: ThemePalette) -> str:
    buttons = "".join(
        f'<a href="#" class="btn {"btn-primary" if i == 0 else "btn-secondary"}">{_e(b["label"])}</a>'
        for i, b in enumerate(data["buttons"])
    )
    return f'<div class="buttons {_align(data, "center")}">{buttons}</div>'


def render_faq(data: Data, theme: ThemePalette) -> str:
    items = "".join(
        f'<details class="faq__item"><summary class="faq__question">{_e(item["question"])}</summary>'
        f'<div class="faq__answer">{_e(item["answer"])}</div></details>'
        for item in data["items"]
    )
    return f'<div class="faq"><h2 class="faq__title">FAQ</h2><div class="faq__list">{items}</div></div>'


# ── Fin de page ─────────────────────────────────────────────────────────────

def render_divider(data: Data, theme: ThemePalette) -> str:
    line = '<hr class="divider__line">' if data["showLine"] else ""
    return f'<div class="divider divider--{_e(data["height"])}">{line}</div>'


def render_footer(data: Data, theme: ThemePalette) -> str:
    return f'<footer class="footer {_align(data, "center")}"><p class="footer__text">{_e(data["text"])}</p></footer>'


# ── Placeholders ────────────────────────────────────────────────────────────

def render_unknown(section_type: str) -> str:
    """Placeholder visible pour un type absent du registre."""
    return f"""<div class="placeholder placeholder--unknown">
  <p class="placeholder__label">Unsupported section: {_e(section_type)}</p>
</div>"""


def placeholder_rule(section_type: str):
    """Render rule générique d'un type inconnu : ignore data, affiche le tag."""
    def render(data: Data, theme: ThemePalette) -> str:
        return render_unknown(section_type)
    return render


def render_error(section_type: str, error: str) -> str:
    """Placeholder d'erreur pour une section dont le renderer a levé."""
    return f"""<div class="placeholder placeholder--error" data-error="{_e(error)}">
  <p class="placeholder__label">This {_e(section_type)} section could not be rendered.</p>
</div>"""


# ── Enveloppe de section + page ─────────────────────────────────────────────

def render_section_shell(
    section_id: str,
    section_type: str,
    inner: str,
    outer_style: str,
    inner_style: str,
    animation: Optional[str] = None,
    status: str = "rendered",
) -> str:
    classes = ["section", f"section--{_e(section_type)}"]
    if status != "rendered":
        classes.append(f"section--{status}")
    if animation and animation != "none":
        classes.append(f"anim-{_e(animation)}")
    return f"""<section id="{_e(section_id)}" class="{" ".join(classes)}" data-section-type="{_e(section_type)}" style="{outer_style}">
  <div class="section__inner" style="{inner_style}">
{inner}
  </div>
</section>"""


def render_document(title: str, sections_html: str, stylesheet: str = "assets/css/style.css", lang: str = "en") -> str:
    """Page HTML complète (index.html de l'export)."""
    return f"""<!DOCTYPE html>
<html lang="{_e(lang)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{_e(title)}</title>
  <link rel="stylesheet" href="{_e(stylesheet)}">
</head>
<body>
{sections_html}
</body>
</html>
"""
