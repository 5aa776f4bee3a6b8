"""Decision-related Pydantic schemas."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


class DecisionRequestSchema(BaseModel):
    """Schema for POST /v1/decision request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "phone_number": "9876543210",
                    "requested_amount": 20000,
                }
            ]
        }
    )
    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Registered phone number of the applicant",
        examples=["9876543210"],
    )
    requested_amount: int = Field(
        ...,
        gt=0,
        description="Requested principal in whole rupees",
        examples=[20000],
    )

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: str) -> str:
        """Ensure phone_number is not just whitespace."""
        if not v.strip():
            raise ValueError("phone_number cannot be empty or whitespace")
        return v.strip()


class RiskAssessmentSchema(BaseModel):
    """Schema for the risk assessment in the response."""

    risk_score: int = Field(
        ...,
        ge=0,
        le=100,
        description="Composite risk score (0-100, higher is riskier)",
        examples=[25],
    )
    risk_category: str = Field(
        ...,
        description="LOW, MEDIUM or HIGH",
        examples=["LOW"],
    )
    risk_factors: list[str] = Field(
        ...,
        description="Explanations for every contributing factor, in evaluation order",
        examples=[["Young borrower: 20 years", "First time borrower"]],
    )


class DecisionResponseSchema(BaseModel):
    """Schema for a loan decision."""

    decision_id: str = Field(
        ...,
        description="UUID of the persisted decision",
    )
    action: str = Field(
        ...,
        description="REJECT, MANUAL_REVIEW, AUTO_APPROVE or AUTO_REJECT",
        examples=["MANUAL_REVIEW"],
    )
    status: str = Field(
        ...,
        description="REJECTED, UNDER_REVIEW or APPROVED",
        examples=["UNDER_REVIEW"],
    )
    message: str = Field(
        ...,
        description="Human-readable outcome; joined rejection reasons for REJECT",
        examples=["Loan requires manual review (Low risk profile)"],
    )
    risk_assessment: Optional[RiskAssessmentSchema] = Field(
        None,
        description="Risk assessment (null when the application failed eligibility)",
    )
    created_at: str = Field(
        ...,
        description="ISO 8601 timestamp of the decision",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "decision_id": "550e8400-e29b-41d4-a716-446655440000",
                    "action": "MANUAL_REVIEW",
                    "status": "UNDER_REVIEW",
                    "message": "Loan requires manual review (Low risk profile)",
                    "risk_assessment": {
                        "risk_score": 10,
                        "risk_category": "LOW",
                        "risk_factors": [
                            "Young borrower: 20 years",
                            "First time borrower",
                        ],
                    },
                    "created_at": "2026-01-15T10:00:00+00:00",
                }
            ]
        }
    )

    @classmethod
    def from_dto(cls, response) -> "DecisionResponseSchema":
        assessment = response.risk_assessment
        return cls(
            decision_id=response.decision_id,
            action=response.action,
            status=response.status,
            message=response.message,
            risk_assessment=RiskAssessmentSchema(
                risk_score=assessment.risk_score,
                risk_category=assessment.risk_category,
                risk_factors=list(assessment.risk_factors),
            ) if assessment else None,
            created_at=response.created_at,
        )


class DecisionSummarySchema(BaseModel):
    """Schema for a decision summary in history."""

    decision_id: str = Field(
        ...,
        description="UUID of the decision",
    )
    requested_amount: int = Field(
        ...,
        gt=0,
        description="Requested principal",
    )
    action: str = Field(
        ...,
        description="Routing action",
    )
    status: str = Field(
        ...,
        description="Application status",
    )
    risk_score: Optional[int] = Field(
        None,
        description="Risk score (null when not assessed)",
    )
    risk_category: Optional[str] = Field(
        None,
        description="Risk category (null when not assessed)",
    )
    created_at: str = Field(
        ...,
        description="ISO 8601 timestamp of the decision",
    )


class DecisionHistoryResponseSchema(BaseModel):
    """Schema for GET /v1/decision/history response."""

    phone_number: str = Field(
        ...,
        description="The applicant's phone number",
    )
    decisions: list[DecisionSummarySchema] = Field(
        ...,
        description="List of past decisions, newest first",
    )
