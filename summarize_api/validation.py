# GPL-3.0-only
# summarize_api/validation.py

from typing import Any, Optional
from pydantic import HttpUrl, TypeAdapter, ValidationError


MIN_CONTENT_CHARS = 10
MAX_CONTENT_CHARS = 50000

_url_adapter = TypeAdapter(HttpUrl)


def is_valid_url(url: Any) -> bool:
    """Absolute http(s) URLs pass, as do missing or empty values."""
    if url is None or url == "":
        return True
    if not isinstance(url, str):
        return False
    try:
        _url_adapter.validate_python(url)
    except ValidationError:
        return False
    return True


def _present(body: dict, key: str) -> bool:
    return body.get(key) is not None


def validate_request(body: Any) -> Optional[str]:
    """Return the message of the first rule `body` breaks, or None.

    URL is optional and content is required: the extension always sends the
    page text and only sometimes knows the URL.
    """
    if not body or not isinstance(body, dict):
        return "Request body is required"

    if not is_valid_url(body.get("url")):
        return "Invalid URL format"

    content = body.get("content")
    if not content or not isinstance(content, str):
        return "Content is required and must be a string"
    if len(content) < MIN_CONTENT_CHARS:
        return "Content is too short to summarize"
    if len(content) > MAX_CONTENT_CHARS:
        return "Content is too long. Please provide a shorter text"

    if _present(body, "title") and not isinstance(body["title"], str):
        return "Title must be a string"
    if _present(body, "customPrompt") and not isinstance(body["customPrompt"], str):
        return "Custom prompt must be a string"
    if _present(body, "description") and not isinstance(body["description"], str):
        return "Description must be a string"

    return None
