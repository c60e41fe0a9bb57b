"""
Classic Elegance, version 2

Released. Do not edit; ship changes as a new version module.

Same markup as v1, but sections render in the order the couple stored, and
the countdown section is supported.
"""

from datetime import datetime
from typing import Optional

from wedding_builder.content.sections import SectionKey
from wedding_builder.rendering.dates import countdown_to
from wedding_builder.templates.base import compile_snippets, enabled_keys, env, render_sections, scoped_wrapper
from wedding_builder.templates.classic.v1 import DEFAULT_PALETTE, FOOTER, SNIPPETS as V1_SNIPPETS
from wedding_builder.templates.types import TemplateProps

COUNTDOWN = """
<section class="section-countdown">
  <h2>Countdown</h2>
  {% if countdown and countdown.is_today %}
  <p class="countdown-today">Today is the day!</p>
  {% elif countdown %}
  <div class="countdown" data-target="{{ wedding.wedding_date }}">
    <span><strong>{{ countdown.days }}</strong> days</span>
    <span><strong>{{ countdown.hours }}</strong> hours</span>
    <span><strong>{{ countdown.minutes }}</strong> minutes</span>
    <span><strong>{{ countdown.seconds }}</strong> seconds</span>
  </div>
  {% endif %}
</section>"""

SNIPPETS = dict(V1_SNIPPETS)
SNIPPETS[SectionKey.COUNTDOWN] = COUNTDOWN

TEMPLATES = compile_snippets(SNIPPETS)

_footer = env.from_string(FOOTER)


def render(props: TemplateProps, now: Optional[datetime] = None) -> str:
    order = enabled_keys(props)
    extra = {}
    if SectionKey.COUNTDOWN in order:
        countdown = countdown_to(props.wedding.wedding_date, now)
        if countdown is None:
            # Past or missing dates hide the countdown entirely
            order = [key for key in order if key != SectionKey.COUNTDOWN]
        extra["countdown"] = countdown
    body = render_sections(order, TEMPLATES, props, extra)
    footer = _footer.render(wedding=props.wedding, is_preview=props.is_preview)
    return scoped_wrapper("classic-v2", DEFAULT_PALETTE, props, body + footer)
