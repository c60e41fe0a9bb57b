"""
Classic Elegance, version 1

Released. Do not edit; ship changes as a new version module.

Sections render in a fixed order regardless of how the couple ordered them.
The countdown section is not supported.
"""

from types import MappingProxyType

from wedding_builder.content.sections import SectionKey
from wedding_builder.templates.base import compile_snippets, enabled_keys, env, render_sections, scoped_wrapper
from wedding_builder.templates.types import TemplateProps

SECTION_ORDER = (
    SectionKey.HERO,
    SectionKey.ITINERARY,
    SectionKey.PHOTOS,
    SectionKey.LOCATION,
    SectionKey.LODGING,
    SectionKey.DRESS_CODE,
    SectionKey.GIFTS,
    SectionKey.RSVP,
)

DEFAULT_PALETTE = MappingProxyType({
    "background": "#fdfbf7",
    "foreground": "#2b2622",
    "card": "#ffffff",
    "cardForeground": "#2b2622",
    "popover": "#ffffff",
    "popoverForeground": "#2b2622",
    "primary": "#8a6d3b",
    "primaryForeground": "#ffffff",
    "secondary": "#efe8dc",
    "secondaryForeground": "#3d342b",
    "muted": "#f3efe8",
    "mutedForeground": "#7a6f63",
    "accent": "#d9c7a7",
    "accentForeground": "#2b2622",
    "destructive": "#b3261e",
    "border": "#e6ddcf",
    "input": "#e6ddcf",
    "ring": "#8a6d3b",
})

SNIPPETS = {
    SectionKey.HERO: """
<section class="section-hero">
  <h1>{{ content.title if content and content.title else wedding.name }}</h1>
  {% if content and content.subtitle %}<p class="subtitle">{{ content.subtitle }}</p>{% endif %}
  {% if wedding.date %}<p class="date">{{ wedding.date }}</p>{% endif %}
  {% if content and content.cta_text %}<a class="cta" href="{{ content.cta_link or '#rsvp' }}">{{ content.cta_text }}</a>{% endif %}
</section>""",
    SectionKey.ITINERARY: """
<section class="section-itinerary">
  <h2>{{ content.title if content and content.title else "Itinerary" }}</h2>
  {% if content and content.items %}
  <ol class="timeline">
    {% for item in content.items %}
    <li><time>{{ item.time }}</time> <strong>{{ item.title }}</strong>
      {% if item.description %}<p>{{ item.description }}</p>{% endif %}
      {% if item.location %}<p class="muted">{{ item.location }}</p>{% endif %}
    </li>
    {% endfor %}
  </ol>
  {% else %}
  <p class="muted">The schedule will be shared soon.</p>
  {% endif %}
</section>""",
    SectionKey.PHOTOS: """
<section class="section-photos">
  <h2>{{ content.title if content and content.title else "Photos" }}</h2>
  {% if content and content.images %}
  <div class="gallery">
    {% for image in content.images %}
    <figure><img src="{{ image.url }}" alt="{{ image.alt or 'Photo ' ~ loop.index }}" loading="lazy" />
      {% if image.caption %}<figcaption>{{ image.caption }}</figcaption>{% endif %}
    </figure>
    {% endfor %}
  </div>
  {% else %}
  <p class="muted">Photos coming soon.</p>
  {% endif %}
</section>""",
    SectionKey.LOCATION: """
<section class="section-location">
  <h2>{{ content.title if content and content.title else "Location" }}</h2>
  {% if content %}
  <p><strong>{{ content.venue_name }}</strong></p>
  <p>{{ content.address }}</p>
  {% if content.directions %}<p class="muted">{{ content.directions }}</p>{% endif %}
  {% if content.map_url %}<a href="{{ content.map_url }}" target="_blank" rel="noopener noreferrer">View map</a>{% endif %}
  {% else %}
  <p class="muted">Venue details will be shared soon.</p>
  {% endif %}
</section>""",
    SectionKey.LODGING: """
<section class="section-lodging">
  <h2>{{ content.title if content and content.title else "Lodging" }}</h2>
  {% if content and content.items %}
  <ul class="cards">
    {% for item in content.items %}
    <li><strong>{{ item.name }}</strong>
      {% if item.address %}<p>{{ item.address }}</p>{% endif %}
      {% if item.phone %}<p>{{ item.phone }}</p>{% endif %}
      {% if item.notes %}<p class="muted">{{ item.notes }}</p>{% endif %}
      {% if item.website %}<a href="{{ item.website }}" target="_blank" rel="noopener noreferrer">Website</a>{% endif %}
    </li>
    {% endfor %}
  </ul>
  {% else %}
  <p class="muted">Lodging suggestions will be shared soon.</p>
  {% endif %}
</section>""",
    SectionKey.DRESS_CODE: """
<section class="section-dress-code">
  <h2>{{ content.title if content and content.title else "Dress Code" }}</h2>
  {% if content %}
  <p>{{ content.description }}</p>
  {% if content.examples %}<ul>{% for example in content.examples %}<li>{{ example }}</li>{% endfor %}</ul>{% endif %}
  {% else %}
  <p class="muted">Dress code details will be shared soon.</p>
  {% endif %}
</section>""",
    SectionKey.GIFTS: """
<section class="section-gifts">
  <h2>{{ content.title if content and content.title else "Gifts" }}</h2>
  <p>{{ content.description if content and content.description else "Your presence is our greatest gift, but if you wish to give something..." }}</p>
  {% if content and content.mode == "wishlist" and content.wishlist_url %}
  <div class="card">
    <h3>Our Gift Registry</h3>
    <a href="{{ content.wishlist_url }}" target="_blank" rel="noopener noreferrer">View Our Wishlist</a>
  </div>
  {% elif content and content.mode == "gifts" and content.items %}
  <div class="card">
    <h3>Our Gift List</h3>
    <p class="muted">You can contribute any amount to any gift</p>
    <ul class="gift-list">
      {% for gift in content.items %}
      <li>
        <strong>{{ gift.name }}</strong> <span class="price">{{ gift.price_display }}</span>
        {% if gift.description %}<p>{{ gift.description }}</p>{% endif %}
        <form method="post" action="{{ actions.gift_url(gift.id) }}">
          <input type="text" name="guest_name" placeholder="Your name" required{% if not actions.interactive %} disabled{% endif %} />
          <button type="submit"{% if not actions.interactive %} disabled{% endif %}>Contribute</button>
        </form>
      </li>
      {% endfor %}
    </ul>
  </div>
  {% endif %}
</section>""",
    SectionKey.RSVP: """
<section class="section-rsvp">
  <h2>{{ content.title if content and content.title else "RSVP" }}</h2>
  <p>{{ content.description if content and content.description else "Please confirm your attendance" }}</p>
  {% if content and content.deadline %}<p class="muted">Please respond by {{ content.deadline }}</p>{% endif %}
  <form method="post" action="{{ actions.rsvp_url }}">
    <fieldset{% if not actions.interactive %} disabled{% endif %}>
      <label>Full name <input type="text" name="name" required /></label>
      <label>Phone <input type="tel" name="phone" required /></label>
      <label>Email <input type="email" name="email" /></label>
      <label>Will you attend?
        <select name="attending">
          <option value="true">Yes, I'll attend</option>
          <option value="false">No, I can't attend</option>
        </select>
      </label>
      <label>How many guests?
        <select name="plus_ones">
          <option value="0">Just me</option>
          <option value="1">1 guest</option>
          <option value="2">2 guests</option>
          <option value="3">3 guests</option>
        </select>
      </label>
      <label>Dietary restrictions (optional) <input type="text" name="dietary_notes" /></label>
      <button type="submit">Send RSVP</button>
    </fieldset>
  </form>
</section>""",
}

TEMPLATES = compile_snippets(SNIPPETS)

FOOTER = """
<footer class="wedding-footer">
  <p>{{ wedding.name }}</p>
  <p>We look forward to celebrating with you!</p>
  {% if is_preview %}<p class="preview-note">Preview Mode</p>{% endif %}
</footer>"""

_footer = env.from_string(FOOTER)


def render(props: TemplateProps) -> str:
    enabled = set(enabled_keys(props))
    order = [key for key in SECTION_ORDER if key in enabled]
    body = render_sections(order, TEMPLATES, props)
    footer = _footer.render(wedding=props.wedding, is_preview=props.is_preview)
    return scoped_wrapper("classic-v1", DEFAULT_PALETTE, props, body + footer)
