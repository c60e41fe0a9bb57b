"""
HTML page shells: the wedding site layout and status pages
"""

from typing import List, Mapping, Optional

from jinja2 import BaseLoader, Environment
from markupsafe import Markup

from wedding_builder.rendering.navigation import NavItem

env = Environment(loader=BaseLoader(), autoescape=True)

PREVIEW_BANNER_TEXT = "Preview Mode - RSVP and payments are disabled"

LAYOUT = env.from_string("""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  {% if noindex %}<meta name="robots" content="noindex, nofollow" />{% endif %}
  <title>{{ title }}</title>
</head>
<body class="{{ mode }}">
{% if preview_banner %}<div class="preview-banner" role="status">{{ preview_banner }}</div>{% endif %}
<nav class="wedding-navbar" aria-label="Main navigation">
  <a class="brand" href="#hero">{% if logo_url %}<img src="{{ logo_url }}" alt="{{ wedding_name }}" />{% else %}{{ wedding_name }}{% endif %}</a>
  {% for item in nav %}<a href="{{ item.href }}">{{ item.label }}</a>{% endfor %}
</nav>
<main id="main-content">
{{ body }}
</main>
</body>
</html>""")

STATUS_PAGE = env.from_string("""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <meta name="robots" content="noindex" />
  <title>{{ title }}</title>
</head>
<body class="status-page">
<main>
  <h1>{{ title }}</h1>
  <p>{{ message }}</p>
</main>
</body>
</html>""")


def render_layout(
    title: str,
    wedding_name: str,
    body: str,
    nav: List[NavItem],
    mode: str = "light",
    logo_url: Optional[str] = None,
    preview: bool = False,
) -> str:
    return LAYOUT.render(
        title=title,
        wedding_name=wedding_name,
        body=Markup(body),
        nav=nav,
        mode=mode,
        logo_url=logo_url,
        noindex=preview,
        preview_banner=PREVIEW_BANNER_TEXT if preview else None,
    )


def render_status_page(title: str, message: str) -> str:
    return STATUS_PAGE.render(title=title, message=message)


STATUS_MESSAGES: Mapping[str, str] = {
    "Wedding Not Found": "We couldn't find the wedding you're looking for.",
    "Coming Soon": "This wedding site is not published yet. Please check back later.",
    "Template Error": "This wedding site could not be displayed. Please try again later.",
}


def not_found_page() -> str:
    return render_status_page("Wedding Not Found", STATUS_MESSAGES["Wedding Not Found"])


def coming_soon_page() -> str:
    return render_status_page("Coming Soon", STATUS_MESSAGES["Coming Soon"])


def template_error_page() -> str:
    return render_status_page("Template Error", STATUS_MESSAGES["Template Error"])
