from typing import Any, Literal
from pydantic import BaseModel, Field

CONDITION_TIERS = ("A1", "A2", "B1", "B2")

class PredictionRequest(BaseModel):
    productText: str = ""

class ConditionPrice(BaseModel):
    tier: Literal["A1", "A2", "B1", "B2"]
    range: str

class PredictionResult(BaseModel):
    productTitle: str = Field(min_length=1)
    valueRange: str = Field(min_length=1)
    demandScore: int = Field(ge=0, le=100)
    confidenceScore: int = Field(ge=0, le=100)
    resaleWindow: str
    conditionPricing: list[ConditionPrice]
    summary: str

class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    raw: str | None = None
    prediction: Any = None
