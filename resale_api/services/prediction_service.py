import json
import logging
import time

from pydantic import ValidationError

from ..core.config import settings
from ..core.metrics import UPSTREAM_LATENCY
from ..core.utils import truncate
from ..errors import (
    EmptyUpstreamResponse,
    InvalidRequestBody,
    MissingProductText,
    ServerMisconfigured,
)
from ..prompts import build_messages
from ..providers.base import CompletionProvider
from ..providers.mock_provider import MockProvider
from ..providers.openai_chat import OpenAIChatProvider
from ..providers.openai_responses import OpenAIResponsesProvider
from ..schemas import PredictionRequest
from .prediction_parser import parse_prediction_text, shape_warnings, validate_prediction

logger = logging.getLogger(__name__)

def completion_provider() -> CompletionProvider:
    """
    Factory picks the completion backend based on env flags.
    """
    provider = settings.MODEL_PROVIDER
    if provider == "mock":
        return MockProvider()
    if provider == "openai_chat":
        return OpenAIChatProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            base_url=settings.OPENAI_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
    if provider != "openai":
        logger.warning("Unknown MODEL_PROVIDER %r, using openai", provider)
    return OpenAIResponsesProvider(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
    )

def read_product_text(raw_body: bytes) -> str:
    """
    Decode the request body and return the trimmed productText.
    An empty body counts as an empty object.
    """
    try:
        body = json.loads(raw_body or b"{}")
    except ValueError as exc:
        raise InvalidRequestBody() from exc

    if not isinstance(body, dict):
        raise MissingProductText()
    try:
        req = PredictionRequest.model_validate(body)
    except ValidationError as exc:
        raise MissingProductText() from exc

    product_text = req.productText.strip()
    if not product_text:
        raise MissingProductText()
    return product_text

class PredictionService:
    """
    Orchestrates:
      product text → prompt → provider.complete → strip/parse → validate
    One outbound call per prediction; nothing is cached or retried.
    """
    def __init__(self, provider: CompletionProvider | None = None):
        self.provider = provider or completion_provider()

    def ensure_configured(self) -> None:
        if not self.provider.is_configured():
            logger.error("Missing OPENAI_API_KEY for provider %s", self.provider.name)
            raise ServerMisconfigured()

    async def predict(self, product_text: str) -> dict:
        self.ensure_configured()
        logger.info("Prediction requested for product: %s", truncate(product_text, 200))

        start = time.perf_counter()
        try:
            raw_text = await self.provider.complete(build_messages(product_text))
        finally:
            UPSTREAM_LATENCY.labels(provider=self.provider.name).observe(time.perf_counter() - start)

        # Whitespace-only text falls through to the parser and is reported with its raw value
        if not raw_text:
            raise EmptyUpstreamResponse()

        prediction = validate_prediction(parse_prediction_text(raw_text))
        for warning in shape_warnings(prediction):
            logger.warning("Prediction shape: %s", warning)
        return prediction
