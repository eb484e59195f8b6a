"""Pydantic schema package for request and response models."""

from .plan_schema import (
    MealEntry,
    ParseResult,
    PlanTextRequest,
    BeforeAfterData,
    RenderRequest,
    RenderedPage,
    GenerateRequest,
    GenerateResponse,
)
from .settings_schema import ApiKeyRequest, ApiKeyStatus

__all__ = [
    "MealEntry",
    "ParseResult",
    "PlanTextRequest",
    "BeforeAfterData",
    "RenderRequest",
    "RenderedPage",
    "GenerateRequest",
    "GenerateResponse",
    "ApiKeyRequest",
    "ApiKeyStatus",
]
