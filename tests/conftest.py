"""
Shared fixtures: a TestClient whose prediction service uses a scripted
provider instead of the network.
"""
import pytest
from fastapi.testclient import TestClient

from resale_api.main import app
from resale_api.routers.prediction import service_dep
from resale_api.services.prediction_service import PredictionService


VALID_PREDICTION = {
    "productTitle": "Apple iPhone 13 (128GB)",
    "valueRange": "$250 – $300",
    "demandScore": 82,
    "confidenceScore": 74,
    "resaleWindow": "Sell before the next iPhone launch in September.",
    "conditionPricing": [
        {"tier": "A1", "range": "$290 – $300"},
        {"tier": "A2", "range": "$270 – $290"},
        {"tier": "B1", "range": "$250 – $270"},
        {"tier": "B2", "range": "$210 – $240"},
    ],
    "summary": "Strong steady demand. Prices soften after each new model release.",
}


class FakeProvider:
    """Returns canned text (or raises) and records every call."""
    name = "fake"

    def __init__(self, text="", error=None, configured=True):
        self.text = text
        self.error = error
        self.configured = configured
        self.calls = []

    def is_configured(self):
        return self.configured

    async def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def valid_prediction():
    # Fresh copy so a test can't leak mutations
    import copy
    return copy.deepcopy(VALID_PREDICTION)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def use_provider():
    """Route POST /v1/predict through the given provider."""
    def install(provider):
        app.dependency_overrides[service_dep] = lambda: PredictionService(provider=provider)
        return provider
    yield install
    app.dependency_overrides.clear()
