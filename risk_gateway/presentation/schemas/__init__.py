"""API request/response schemas."""

from .decision import (
    DecisionHistoryResponseSchema,
    DecisionRequestSchema,
    DecisionResponseSchema,
    DecisionSummarySchema,
    RiskAssessmentSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "DecisionRequestSchema",
    "DecisionResponseSchema",
    "DecisionHistoryResponseSchema",
    "DecisionSummarySchema",
    "RiskAssessmentSchema",
    "ErrorResponseSchema",
]
