"""Failure kinds of the prediction endpoint.

Each kind knows its HTTP status and the public ``error`` message. Optional
diagnostics (``details``, ``raw``, ``prediction``) are copied into the JSON
error body when set.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PredictionError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[str] = None,
        raw: Optional[str] = None,
        prediction: Any = None,
    ):
        self.message = message or self.message
        self.details = details
        self.raw = raw
        self.prediction = prediction
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        if self.raw is not None:
            payload["raw"] = self.raw
        if self.prediction is not None:
            payload["prediction"] = self.prediction
        return payload


class MethodNotAllowed(PredictionError):
    status_code = 405
    message = "Method Not Allowed"


class ServerMisconfigured(PredictionError):
    status_code = 500
    message = "Server not configured (missing API key)"


class InvalidRequestBody(PredictionError):
    status_code = 400
    message = "Invalid JSON body"


class MissingProductText(PredictionError):
    status_code = 400
    message = "productText is required"


class UpstreamError(PredictionError):
    status_code = 500
    message = "Upstream API error"


class EmptyUpstreamResponse(PredictionError):
    status_code = 500
    message = "Empty model response"


class MalformedUpstreamJSON(PredictionError):
    status_code = 500
    message = "Failed to parse JSON from model"


class IncompletePrediction(PredictionError):
    status_code = 500
    message = "Prediction missing fields"


class UnexpectedError(PredictionError):
    status_code = 500
    message = "Server error"
