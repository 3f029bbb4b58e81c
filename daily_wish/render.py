import textwrap
from dataclasses import dataclass
from html import escape
from urllib.parse import urlencode

from .votes import VoteStats

CARD_WIDTH = 600
CARD_HEIGHT = 400
CARD_FONT = "Arial, sans-serif"
CARD_WRAP_WIDTH = 44
CARD_LINE_HEIGHT = 26
CARD_MAX_LINES = 5
DEFAULT_CARD_TEXT = "Ready for your daily wish?"


@dataclass(frozen=True)
class WishView:
    day: str
    wish: str
    stats: VoteStats
    has_identity: bool
    can_vote: bool
    thanks: bool = False
    notice: str | None = None


def _attr(value: str) -> str:
    return escape(value, quote=True)


def card_url(base_url: str, text: str | None = None, stats: str | None = None, voted: bool = False) -> str:
    params = {}
    if text:
        params["text"] = text
    if stats:
        params["stats"] = stats
    if voted:
        params["voted"] = "true"
    url = f"{base_url.rstrip('/')}/api/og"
    return f"{url}?{urlencode(params)}" if params else url


def _meta(prop: str, content: str) -> str:
    return f'<meta property="{_attr(prop)}" content="{_attr(content)}" />'


def _document(head: list[str], body: str, title: str = "Daily Wish") -> str:
    head_html = "\n    ".join(head)
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{escape(title)}</title>
    {head_html}
  </head>
  <body>
{body}
  </body>
</html>
"""


def render_entry(base_url: str) -> str:
    base = base_url.rstrip("/")
    head = [
        _meta("fc:frame", "vNext"),
        _meta("fc:frame:image", card_url(base)),
        _meta("fc:frame:post_url", f"{base}/api/wish"),
        _meta("fc:frame:button:1", "Tell me"),
        _meta("og:title", "Get your daily wish"),
        _meta("og:description", "Tap the button to reveal a personalized wish for today."),
    ]
    return _document(head, "    <main><h1>Daily Wish</h1></main>")


def render_wish(view: WishView, base_url: str) -> str:
    """Frame document for a revealed wish; vote buttons only when voting is possible."""
    base = base_url.rstrip("/")
    summary = view.stats.summary

    head = [
        _meta("fc:frame", "vNext"),
        _meta("fc:frame:image", card_url(base, view.wish, summary, voted=view.thanks)),
    ]
    if view.can_vote:
        head += [
            _meta("fc:frame:post_url", f"{base}/api/vote"),
            _meta("fc:frame:button:1", "👍 Like"),
            _meta("fc:frame:button:2", "👎 Dislike"),
        ]
    head += [
        _meta("og:title", "Today's Wish"),
        _meta("og:description", view.wish),
    ]

    # Non-frame fallback; frame hosts only read the meta tags
    lines = [
        f"      <h1>Daily Wish for {escape(view.day)}</h1>",
        f"      <p>{escape(view.wish)}</p>",
        f"      <p>{escape(summary)}</p>",
    ]
    if view.thanks:
        lines.append("      <p>Thank you!</p>")
    if view.notice:
        lines.append(f"      <p>{escape(view.notice)}</p>")
    if not view.has_identity:
        lines.append("      <p>(Sign-in not detected; voting disabled)</p>")
    body = "    <main>\n" + "\n".join(lines) + "\n    </main>"
    return _document(head, body, title="Today's Wish")


def _wrap(text: str) -> list[str]:
    lines = textwrap.wrap(text, width=CARD_WRAP_WIDTH) or [""]
    if len(lines) > CARD_MAX_LINES:
        lines = lines[:CARD_MAX_LINES]
        lines[-1] = lines[-1][: CARD_WRAP_WIDTH - 1].rstrip() + "…"
    return lines


def render_card(text: str | None = None, stats: str | None = None, voted: bool = False) -> str:
    """600x400 SVG card: title, optional thank-you badge, wrapped wish, optional stats bar."""
    lines = _wrap(text or DEFAULT_CARD_TEXT)
    center = CARD_WIDTH // 2

    parts = [
        f'<svg width="{CARD_WIDTH}" height="{CARD_HEIGHT}" viewBox="0 0 {CARD_WIDTH} {CARD_HEIGHT}" '
        'xmlns="http://www.w3.org/2000/svg">',
        "  <defs>",
        '    <linearGradient id="bg" x1="0%" y1="0%" x2="100%" y2="100%">',
        '      <stop offset="0%" stop-color="#667eea" />',
        '      <stop offset="100%" stop-color="#764ba2" />',
        "    </linearGradient>",
        "  </defs>",
        f'  <rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" fill="url(#bg)" />',
        f'  <text x="{center}" y="60" font-family="{CARD_FONT}" font-size="24" font-weight="bold" '
        'fill="white" text-anchor="middle">Daily Wish</text>',
    ]

    text_top = 110
    if voted:
        parts += [
            f'  <rect x="{center - 100}" y="90" width="200" height="40" rx="20" fill="#10b981" opacity="0.9" />',
            f'  <text x="{center}" y="115" font-family="{CARD_FONT}" font-size="18" font-weight="bold" '
            'fill="white" text-anchor="middle">Thank you!</text>',
        ]
        text_top = 170

    tspans = "".join(
        f'<tspan x="{center}" y="{text_top + i * CARD_LINE_HEIGHT}">{escape(line)}</tspan>'
        for i, line in enumerate(lines)
    )
    parts.append(
        f'  <text font-family="{CARD_FONT}" font-size="18" fill="white" text-anchor="middle">{tspans}</text>'
    )

    if stats:
        parts += [
            '  <rect x="100" y="320" width="400" height="50" rx="10" fill="white" fill-opacity="0.2" />',
            f'  <text x="{center}" y="350" font-family="{CARD_FONT}" font-size="16" fill="white" '
            f'text-anchor="middle">{escape(stats)}</text>',
        ]

    parts.append("</svg>")
    return "\n".join(parts) + "\n"
