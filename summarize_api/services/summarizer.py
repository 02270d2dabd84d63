# GPL-3.0-only
# summarize_api/services/summarizer.py

from __future__ import annotations
from typing import Any, List, Mapping, Optional

import openai
from loguru import logger
from openai import AsyncOpenAI

from summarize_api import prompts
from summarize_api.exceptions import ProviderError
from summarize_api.schemas import SummarizeRequest
from summarize_api.settings import Settings, get_settings


def build_system_prompt(custom_prompt: Optional[str] = None) -> str:
    if custom_prompt:
        return prompts.CUSTOM_INSTRUCTION.format(custom_prompt=custom_prompt)
    return prompts.DEFAULT_SUMMARY


def build_user_message(request: SummarizeRequest, max_chars: int = 15000) -> str:
    """Concatenate title, description and (truncated) content."""
    text = ""
    if request.title:
        text += f"Title: {request.title}\n\n"
    if request.description:
        text += f"Description: {request.description}\n\n"
    if request.content:
        text += f"Content: {request.content[:max_chars]}"
    return prompts.USER_PREAMBLE + text


def build_messages(request: SummarizeRequest, max_chars: int = 15000) -> List[dict]:
    return [
        {"role": "system", "content": build_system_prompt(request.custom_prompt)},
        {"role": "user", "content": build_user_message(request, max_chars)},
    ]


def _provider_message(exc: openai.APIStatusError) -> str:
    body = exc.body
    if isinstance(body, Mapping):
        inner: Any = body.get("error", body)
        if isinstance(inner, Mapping) and inner.get("message"):
            return str(inner["message"])
    return exc.message or "Unknown error"


class Summarizer:
    """Turns a validated request into a short summary via the chat-completions API."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.settings.openai_api_key:
                raise ProviderError("OpenAI API key is not configured", 500)
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                base_url=self.settings.openai_base_url,
                timeout=self.settings.provider_timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def summarize(self, request: SummarizeRequest) -> str:
        messages = build_messages(request, self.settings.max_prompt_chars)
        logger.debug(
            "Requesting summary: model={} chars={} custom_prompt={}",
            self.settings.model_name,
            len(request.content),
            bool(request.custom_prompt),
        )
        try:
            completion = await self.client.chat.completions.create(
                model=self.settings.model_name,
                messages=messages,
                max_tokens=self.settings.max_output_tokens,
                temperature=self.settings.temperature,
            )
        except openai.APIStatusError as exc:
            raise ProviderError(_provider_message(exc), exc.status_code) from exc
        except openai.APITimeoutError as exc:
            raise ProviderError("Request to provider timed out", 504) from exc
        except openai.APIConnectionError as exc:
            raise ProviderError(f"Could not reach provider: {exc}", 502) from exc

        if not completion.choices:
            raise ProviderError("Provider returned no choices", 502)
        content = completion.choices[0].message.content or ""
        return content.strip()

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
