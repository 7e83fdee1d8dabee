"""OpenAI Responses API provider, called over plain HTTP."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from .base import CompletionProvider
from ..core.utils import truncate
from ..errors import UpstreamError

logger = logging.getLogger(__name__)


def extract_output_text(data: Any) -> str:
    """Pull the generated text out of a Responses API payload.

    The answer normally sits at ``output[0].content[0].text``, but reasoning
    models emit a leading ``reasoning`` item without content, and any level
    may be missing on odd responses. The first non-empty ``text`` found
    while walking ``output[*].content[*]`` wins. Returns ``""`` when
    nothing usable is present.
    """
    if not isinstance(data, dict):
        return ""

    # SDK-style convenience field, present on some proxies
    output_text = data.get("output_text")
    if isinstance(output_text, str) and output_text:
        return output_text

    output = data.get("output")
    if not isinstance(output, list):
        return ""
    for item in output:
        if not isinstance(item, dict):
            continue
        content = item.get("content")
        if not isinstance(content, list):
            continue
        for part in content:
            if isinstance(part, dict):
                text = part.get("text")
                if isinstance(text, str) and text:
                    return text
    return ""


class OpenAIResponsesProvider(CompletionProvider):
    name = "openai"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def complete(self, messages: list[dict]) -> str:
        body = {
            "model": self.model,
            "input": messages,
            # Ask for a bare JSON object back
            "text": {"format": {"type": "json_object"}},
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(f"{self.base_url}/responses", headers=headers, json=body)
        except httpx.HTTPError as exc:
            logger.error("Completion service unreachable: %s", exc)
            raise UpstreamError(details=f"{type(exc).__name__}: {exc}") from exc

        if not r.is_success:
            raise UpstreamError(details=r.text)

        try:
            data = r.json()
        except ValueError as exc:
            raise UpstreamError(details=f"Non-JSON response body: {truncate(r.text)}") from exc

        # API-reported failure on a 2xx (e.g. status "failed")
        if isinstance(data, dict) and data.get("error"):
            raise UpstreamError(details=json.dumps(data["error"], ensure_ascii=False, default=str))

        text = extract_output_text(data)
        if not text:
            logger.error("No text in completion response: %s", truncate(json.dumps(data, default=str)))
        return text
