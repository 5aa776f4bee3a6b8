"""Data Transfer Objects for application layer."""

from .decision import (
    DecisionHistoryResponse,
    DecisionRequest,
    DecisionResponse,
    DecisionSummary,
    RiskAssessmentDTO,
)

__all__ = [
    "DecisionRequest",
    "DecisionResponse",
    "DecisionHistoryResponse",
    "DecisionSummary",
    "RiskAssessmentDTO",
]
