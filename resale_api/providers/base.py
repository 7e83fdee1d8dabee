from typing import Protocol

class CompletionProvider(Protocol):
    """
    Narrow seam between the prediction pipeline and a text-generation API.
    Implementations turn a system/user message pair into the model's raw
    answer text, or raise UpstreamError when the service call fails.
    An empty string means the call succeeded but no text could be found.
    """
    name: str

    def is_configured(self) -> bool:
        """True when every credential the provider needs is present."""
        ...

    async def complete(self, messages: list[dict]) -> str: ...
