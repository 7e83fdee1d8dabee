"""OpenAI Chat Completions provider built on the official SDK."""

from __future__ import annotations

from typing import Any, Optional

import openai

from .base import CompletionProvider
from ..errors import UpstreamError


def extract_chat_text(completion: Any) -> str:
    """Return ``choices[0].message.content`` or ``""`` if any level is missing."""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


class OpenAIChatProvider(CompletionProvider):
    name = "openai_chat"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[openai.AsyncOpenAI] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.client = client

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def complete(self, messages: list[dict]) -> str:
        owned = self.client is None
        # The SDK retries twice by default; one attempt per request here
        client = self.client or openai.AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=0,
        )
        try:
            completion = await client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
            )
        except openai.APIError as exc:
            raise UpstreamError(details=str(exc)) from exc
        finally:
            if owned:
                await client.close()

        return extract_chat_text(completion)
