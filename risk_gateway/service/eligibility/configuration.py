"""
Policy configuration for the Micro-Loan Risk Engine.

A ConfigurationSnapshot is the immutable bundle of policy thresholds that is
valid for exactly one decision. The engine receives it as an argument and
never looks settings up on its own; the settings provider (database row,
environment defaults) builds and validates it before the engine is called.

Validation happens here, at construction time:
    - min_age must not exceed max_age
    - low_risk_threshold must be strictly below medium_risk_threshold
    - min_loan_amount must not exceed max_loan_amount

Usage:
    snapshot = ConfigurationSnapshot(low_risk_threshold=20, medium_risk_threshold=50)
    snapshot = policy_defaults.to_snapshot()
"""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingMode(str, Enum):
    """How the approval router treats eligible applications."""
    ALWAYS_MANUAL = "always_manual"
    TIERED = "tiered"


class RoutingPolicy(BaseModel):
    """
    Approval-lane policy for eligible applications.

    In ALWAYS_MANUAL mode every eligible application is queued for a human
    reviewer and the remaining fields are ignored. In TIERED mode low-risk
    applications up to max_auto_approval_amount may be auto-approved and
    high-risk applications may be auto-rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: RoutingMode = RoutingMode.ALWAYS_MANUAL
    auto_approval_enabled: bool = True
    auto_reject_enabled: bool = True
    max_auto_approval_amount: int = Field(
        default=50_000,
        ge=0,
        description="Largest requested amount that may be approved without review",
    )


class ConfigurationSnapshot(BaseModel):
    """Policy thresholds for a single decision. Never mutated by the engine."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Optional[str] = Field(
        default=None,
        description="Label of the settings revision this snapshot was taken from",
    )

    # Age window (years, inclusive)
    min_age: int = Field(default=18, ge=18, le=100)
    max_age: int = Field(default=30, ge=18, le=100)

    # Bureau score floor (0 = no floor)
    min_credit_score: int = Field(default=0, ge=0, le=900)

    # Risk category boundaries on the 0-100 score
    low_risk_threshold: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Risk scores below this are LOW risk",
    )
    medium_risk_threshold: int = Field(
        default=60,
        ge=0,
        le=100,
        description="Risk scores below this (and not LOW) are MEDIUM risk; the rest HIGH",
    )

    # Requested amount limits
    min_loan_amount: int = Field(default=1_000, ge=100)
    max_loan_amount: int = Field(default=100_000, ge=1_000)

    routing: RoutingPolicy = Field(default_factory=RoutingPolicy)

    @model_validator(mode="after")
    def validate_ordering(self) -> "ConfigurationSnapshot":
        if self.min_age > self.max_age:
            raise ValueError("Minimum age cannot be greater than maximum age")
        if self.low_risk_threshold >= self.medium_risk_threshold:
            raise ValueError(
                "Low risk threshold must be less than medium risk threshold"
            )
        if self.min_loan_amount > self.max_loan_amount:
            raise ValueError(
                "Minimum loan amount cannot be greater than maximum loan amount"
            )
        return self


class PolicyDefaults(BaseSettings):
    """
    Fallback policy used when no active settings record exists.

    All settings can be overridden via environment variables with POLICY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="POLICY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    min_age: int = 18
    max_age: int = 30
    min_credit_score: int = 0
    low_risk_threshold: int = 30
    medium_risk_threshold: int = 60
    min_loan_amount: int = 1_000
    max_loan_amount: int = 100_000
    routing_mode: RoutingMode = RoutingMode.ALWAYS_MANUAL
    auto_approval_enabled: bool = True
    auto_reject_enabled: bool = True
    max_auto_approval_amount: int = 50_000

    def to_snapshot(self) -> ConfigurationSnapshot:
        """Build a validated snapshot from the environment defaults."""
        return ConfigurationSnapshot(
            version="defaults",
            min_age=self.min_age,
            max_age=self.max_age,
            min_credit_score=self.min_credit_score,
            low_risk_threshold=self.low_risk_threshold,
            medium_risk_threshold=self.medium_risk_threshold,
            min_loan_amount=self.min_loan_amount,
            max_loan_amount=self.max_loan_amount,
            routing=RoutingPolicy(
                mode=self.routing_mode,
                auto_approval_enabled=self.auto_approval_enabled,
                auto_reject_enabled=self.auto_reject_enabled,
                max_auto_approval_amount=self.max_auto_approval_amount,
            ),
        )


@lru_cache
def get_policy_defaults() -> PolicyDefaults:
    """Get cached policy defaults instance."""
    return PolicyDefaults()
