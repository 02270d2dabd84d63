# GPL-3.0-only
"""Client side of the summarize API, as the browser extension uses it.

Covers picking a backend (a local development server wins when its health
endpoint answers), sending extracted page text, and turning the plain-text
summary into the HTML shown in the popup.
"""

from __future__ import annotations
import math
import re
from dataclasses import dataclass
from html import escape
from typing import Optional

import httpx
from loguru import logger

from summarize_api.schemas import ExtractedPage


DEVELOPMENT_ENDPOINT = "http://localhost:3000/api/summarize"
DEVELOPMENT_HEALTH = "http://localhost:3000/health"
PRODUCTION_ENDPOINT = "https://summarize-api-two.vercel.app/api/summarize"

_bullet = re.compile(r"^[-•*]\s")
_many_newlines = re.compile(r"\n{3,}")


class SummarizeClientError(Exception):
    pass


async def probe_local_server(
    client: httpx.AsyncClient,
    health_url: str = DEVELOPMENT_HEALTH,
    timeout: float = 1.0,
) -> bool:
    try:
        response = await client.get(health_url, timeout=timeout)
    except httpx.HTTPError:
        return False
    return response.is_success


async def resolve_endpoint(
    client: httpx.AsyncClient,
    development: str = DEVELOPMENT_ENDPOINT,
    production: str = PRODUCTION_ENDPOINT,
    health_url: str = DEVELOPMENT_HEALTH,
) -> str:
    if await probe_local_server(client, health_url):
        logger.debug("Using development backend {}", development)
        return development
    return production


@dataclass
class SummarizeClient:
    http: httpx.AsyncClient
    endpoint: Optional[str] = None
    timeout: float = 60.0

    async def summarize(
        self,
        page: ExtractedPage,
        custom_prompt: Optional[str] = None,
    ) -> str:
        endpoint = self.endpoint or await resolve_endpoint(self.http)
        body = {
            "title": page.title,
            "content": page.content,
            "customPrompt": (custom_prompt or "").strip(),
        }
        if page.url:
            body["url"] = page.url
        try:
            response = await self.http.post(endpoint, json=body, timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise SummarizeClientError(f"Could not reach summarize API: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not response.is_success or data.get("error"):
            raise SummarizeClientError(data.get("error") or "Failed to get summary")
        return data["summary"]


def format_content_size(content: str) -> str:
    """Human readable size of the text about to be summarized."""
    chars = len(content)
    words = len(content.split())
    minutes = math.ceil(words / 225)
    if chars < 1000:
        return f"{chars} chars ({words} words)"
    if chars < 10000:
        return f"{chars / 1000:.1f}K chars ({words} words, ~{minutes} min read)"
    return (
        f"{chars / 1000:.0f}K chars ({int(words / 100 + 0.5) * 100} words, "
        f"~{minutes} min read)"
    )


def format_summary(text: str) -> str:
    """Render a plain-text summary as popup HTML.

    Bullet lines (``-``, ``*`` or ``•``) are grouped into lists, other lines
    become paragraphs, and a short one-liner is highlighted. Text is escaped.
    """
    text = _many_newlines.sub("\n\n", text.strip())
    lines = [line for line in text.split("\n") if line.strip()]

    if not any(_bullet.match(line.strip()) for line in lines):
        if len(text) < 100 and "\n" not in text:
            return f'<p class="highlight telegram-style">{escape(text)}</p>'
        paragraphs = "".join(f"<p>{escape(line)}</p>" for line in lines)
        return f'<div class="telegram-style">{paragraphs}</div>'

    parts = []
    in_list = False
    for line in lines:
        stripped = line.strip()
        if _bullet.match(stripped):
            if not in_list:
                parts.append("<ul>")
                in_list = True
            parts.append(f"<li>{escape(_bullet.sub('', stripped, count=1))}</li>")
        else:
            if in_list:
                parts.append("</ul>")
                in_list = False
            parts.append(f"<p>{escape(line)}</p>")
    if in_list:
        parts.append("</ul>")
    return '<div class="telegram-style">' + "".join(parts) + "</div>"
