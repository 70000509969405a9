"""Static category gallery pages rendered from the metadata JSON."""

from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment

from cloudfolio.categorize import UNCATEGORIZED

_jinja_env = Environment(autoescape=True)
Template = _jinja_env.from_string

SITE_NAME = "Praveen K Photography"

DISPLAY_NAMES = {
    "documentary": "Documentary Photography",
    "portraits": "Portrait Photography",
    "product": "Product Photography",
    "macro": "Macro Photography",
    "street": "Street Photography",
    "interior": "Interior Photography",
    "jewels": "Jewelry Photography",
    UNCATEGORIZED: "Photography Collection",
}


def display_name(category: str) -> str:
    return DISPLAY_NAMES.get(category) or category[:1].upper() + category[1:]


_jinja_env.filters["display_name"] = display_name


# ---------------------------------------------------------------------------
# Shared assets (written to css/lazy-loading.css and js/lazy-loader.js)
# ---------------------------------------------------------------------------

LAZY_CSS = """\
/* ── gallery grid ── */
.grid {
  display: grid;
  grid-template-columns: repeat(auto-fill, minmax(260px, 1fr));
  gap: 6px;
}
.grid a { display: block; overflow: hidden; border-radius: 2px; }
.grid img {
  width: 100%; height: 100%; object-fit: cover; display: block;
  transition: transform 0.25s ease;
}
.grid a:hover img { transform: scale(1.03); }

/* ── progressive loading ── */
img.placeholder { filter: blur(12px); transition: filter 0.4s ease; }
img.placeholder.loading { opacity: 0.8; }
img.placeholder.loaded { filter: none; opacity: 1; }
img.placeholder.error { filter: grayscale(1); opacity: 0.5; }

/* ── category index ── */
.categories { display: grid; grid-template-columns: repeat(auto-fill, minmax(320px, 1fr)); gap: 12px; }
.category-card { position: relative; display: block; aspect-ratio: 4 / 3; overflow: hidden; }
.category-card .info {
  position: absolute; left: 0; right: 0; bottom: 0; padding: 12px 16px;
  background: linear-gradient(transparent, rgba(0,0,0,0.7)); color: #fff;
}

@media (max-width: 640px) {
  .grid { grid-template-columns: repeat(auto-fill, minmax(140px, 1fr)); gap: 3px; }
}
"""

LAZY_JS = """\
(function() {
  function loadImage(el) {
    var full = el.getAttribute('data-src');
    if (!full) return;
    var img = new Image();
    img.onload = function() {
      el.src = full;
      el.classList.add('loaded');
      el.classList.remove('loading');
    };
    img.onerror = function() {
      el.classList.add('error');
      el.classList.remove('loading');
    };
    el.classList.add('loading');
    img.src = full;
  }

  var images = document.querySelectorAll('img[data-src]');

  // No observer support: load everything now
  if (!('IntersectionObserver' in window)) {
    images.forEach(loadImage);
    return;
  }

  var observer = new IntersectionObserver(function(entries, obs) {
    entries.forEach(function(entry) {
      if (entry.isIntersecting) {
        loadImage(entry.target);
        obs.unobserve(entry.target);
      }
    });
  }, { root: null, rootMargin: '50px', threshold: 0.01 });

  images.forEach(function(el) { observer.observe(el); });
})();
"""

NAV_PARTIAL = """\
<nav class="site-navigation">
  <a href="index.html">Home</a>
  <a href="gallery.html">Gallery</a>
  {% for c in categories %}<a href="{{ c }}.html"{% if c == current %} class="active"{% endif %}>{{ c|display_name }}</a>
  {% endfor %}
</nav>
"""

CATEGORY_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1, shrink-to-fit=no">
<title>{{ title }} - {{ site_name }} Portfolio</title>
<meta name="description" content="{{ title }} - Professional photography portfolio featuring {{ images|length }} images">
<link rel="stylesheet" href="css/style.css">
<link rel="stylesheet" href="css/lazy-loading.css">
</head>
<body>
""" + NAV_PARTIAL + """
<h2 class="site-section-heading">{{ title }}</h2>
<p class="lead">{{ images|length }} Professional Photos</p>
<div class="grid" id="lightgallery">
{% for image in images %}<a href="{{ image.urls.large }}" class="item-wrap" data-fancybox="gallery"><img src="{{ image.urls.placeholder }}" data-src="{{ image.urls.gallery }}" alt="{{ title }} - {{ image.filename }}" class="img-fluid placeholder"></a>
{% endfor %}
</div>
<div class="footer">Copyright &copy; {{ year }} {{ site_name }} | All rights reserved</div>
<script src="js/lazy-loader.js"></script>
</body>
</html>
""")

GALLERY_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1, shrink-to-fit=no">
<title>Gallery - {{ site_name }} Portfolio</title>
<link rel="stylesheet" href="css/style.css">
<link rel="stylesheet" href="css/lazy-loading.css">
</head>
<body>
""" + NAV_PARTIAL + """
<h2 class="site-section-heading">Gallery</h2>
<p class="lead">{{ total }} photos in {{ covers|length }} collections</p>
<div class="categories">
{% for category, cover, count in covers %}<a href="{{ category }}.html" class="category-card"><img src="{{ cover.urls.placeholder }}" data-src="{{ cover.urls.hero }}" alt="{{ category|display_name }}" class="img-fluid placeholder"><div class="info"><h2>{{ category|display_name }}</h2>View {{ count }} Photos</div></a>
{% endfor %}
</div>
<div class="footer">Copyright &copy; {{ year }} {{ site_name }} | All rights reserved</div>
<script src="js/lazy-loader.js"></script>
</body>
</html>
""")


def copyright_year(generated: str | None) -> int:
    """Year the metadata was generated, so re-rendering old metadata is stable."""
    try:
        return int((generated or "")[:4])
    except ValueError:
        return datetime.now().year


def group_by_category(images: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Category -> images, keeping document order within and across categories."""
    groups: dict[str, list[dict[str, Any]]] = {}
    for image in images:
        groups.setdefault(image.get("category") or UNCATEGORIZED, []).append(image)
    return groups


def render_category_page(category: str, images: list[dict[str, Any]], categories: list[str], year: int) -> str:
    return CATEGORY_TEMPLATE.render(
        title=display_name(category),
        images=images,
        categories=categories,
        current=category,
        site_name=SITE_NAME,
        year=year,
    )


def render_gallery_page(groups: dict[str, list[dict[str, Any]]], year: int) -> str:
    return GALLERY_TEMPLATE.render(
        covers=[(c, imgs[0], len(imgs)) for c, imgs in groups.items()],
        total=sum(len(imgs) for imgs in groups.values()),
        categories=list(groups),
        current=None,
        site_name=SITE_NAME,
        year=year,
    )


def render_category_pages(metadata: dict[str, Any], site_dir: Path) -> dict[str, int]:
    """Write one page per category plus gallery.html and the shared assets.

    Returns category -> number of images on its page.
    """
    year = copyright_year(metadata.get("generated"))
    groups = group_by_category(metadata.get("images", []))
    categories = list(groups)

    (site_dir / "css").mkdir(parents=True, exist_ok=True)
    (site_dir / "js").mkdir(parents=True, exist_ok=True)
    (site_dir / "css" / "lazy-loading.css").write_text(LAZY_CSS, encoding="utf-8")
    (site_dir / "js" / "lazy-loader.js").write_text(LAZY_JS, encoding="utf-8")

    for category, images in groups.items():
        html = render_category_page(category, images, categories, year)
        (site_dir / f"{category}.html").write_text(html, encoding="utf-8")

    (site_dir / "gallery.html").write_text(render_gallery_page(groups, year), encoding="utf-8")
    return {category: len(images) for category, images in groups.items()}
