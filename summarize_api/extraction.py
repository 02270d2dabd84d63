# GPL-3.0-only
"""Page content extraction.

The browser extension runs this heuristic against the live DOM; the policy
below (which containers hold the main content, which substructures are noise)
is plain data so the extension can fetch it from `/api/extraction-policy`
instead of hard-coding it. `extract_page` applies the same policy to raw HTML
with BeautifulSoup, which is what the server-side tooling and the tests use.
"""

from __future__ import annotations
import copy
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from summarize_api.schemas import ExtractedPage


# Tried in order; the first container with enough text wins.
MAIN_CONTENT_SELECTORS: List[str] = [
    "article",
    "main",
    "[role=main]",
    "#main-content",
    "#content",
    ".post-content",
    ".article-content",
    ".entry-content",
    ".post",
    ".article",
    ".content",
]

# Removed from the chosen container before reading its text.
NOISE_SELECTORS: List[str] = [
    "script",
    "style",
    "noscript",
    "template",
    "iframe",
    "svg",
    "nav",
    "header",
    "footer",
    "aside",
    "form",
    "[role=navigation]",
    "[role=banner]",
    "[role=complementary]",
    "[aria-hidden=true]",
    ".nav",
    ".navbar",
    ".menu",
    ".sidebar",
    ".breadcrumb",
    ".ad",
    ".ads",
    ".advert",
    ".advertisement",
    "[class*=sponsor]",
    "[id^=google_ads]",
    ".comments",
    "#comments",
    ".comment-section",
    ".share",
    ".social-share",
    ".share-buttons",
    ".related-posts",
    ".newsletter",
    ".cookie-banner",
]

MIN_CONTENT_CHARS = 200
DEFAULT_MAX_CHARS = 50000

_inline_ws = re.compile(r"[ \t\r\f\v\u00a0]+")


def extraction_policy() -> dict:
    return {
        "main_content_selectors": list(MAIN_CONTENT_SELECTORS),
        "noise_selectors": list(NOISE_SELECTORS),
        "min_content_chars": MIN_CONTENT_CHARS,
        "max_chars": DEFAULT_MAX_CHARS,
    }


def _strip_noise(node: Tag) -> Tag:
    clone = copy.copy(node)
    for selector in NOISE_SELECTORS:
        for el in clone.select(selector):
            if not el.decomposed:
                el.decompose()
    return clone


def _visible_text(node: Tag) -> str:
    raw = node.get_text(separator="\n")
    lines = (_inline_ws.sub(" ", line).strip() for line in raw.splitlines())
    return "\n".join(line for line in lines if line)


def _main_text(soup: BeautifulSoup) -> str:
    for selector in MAIN_CONTENT_SELECTORS:
        for candidate in soup.select(selector):
            text = _visible_text(_strip_noise(candidate))
            if len(text) >= MIN_CONTENT_CHARS:
                return text
    root = soup.body or soup
    return _visible_text(_strip_noise(root))


def extract_page(
    html: str,
    url: Optional[str] = None,
    max_chars: Optional[int] = None,
) -> ExtractedPage:
    """Return the title and main visible text of an HTML document."""
    soup = BeautifulSoup(html or "", "html.parser")
    title = soup.title.get_text(strip=True) if soup.title else ""
    content = _main_text(soup)
    if max_chars is not None and len(content) > max_chars:
        content = content[:max_chars]
    return ExtractedPage(title=title, content=content, url=url)
