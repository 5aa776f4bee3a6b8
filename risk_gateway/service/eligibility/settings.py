"""
Scoring Settings for the Micro-Loan Risk Engine.

This module contains the point tables of the ten risk factors. Policy
thresholds that operators tune per deployment (age window, minimum credit
score, category boundaries) are NOT here: they travel with each call in a
ConfigurationSnapshot. What lives here is the rule set itself, which only
changes with a release or an explicit override.

Environment variables use the SCORING_ prefix:
    SCORING_FIRST_TIME_BORROWER_POINTS=5
    SCORING_CREDIT_SCORE_POOR_BELOW=600
    SCORING_PREFERRED_MAX_AGE=30

Usage:
    from risk_gateway.service.eligibility.settings import scoring_settings

    # Use default settings (loaded from env)
    points = scoring_settings.first_time_borrower_points

    # Or create custom settings for testing
    custom = ScoringSettings(first_time_borrower_points=0)
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """
    Point values and band boundaries of the risk factors.

    All settings can be overridden via environment variables with SCORING_ prefix.
    Points are added to a 0-100 risk score (higher = riskier).
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Factor 1: KYC Quality ===
    kyc_unverified_points: int = Field(
        default=20,
        ge=0,
        description="Points when the identity record is missing or not verified",
    )
    kyc_high_risk_threshold: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Internal KYC risk score above this is scaled into the risk score",
    )
    kyc_risk_weight: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Multiplier applied to a high internal KYC risk score",
    )

    # === Factor 2: Age Band ===
    age_missing_points: int = Field(default=10, ge=0)
    adult_age: int = Field(
        default=18,
        ge=0,
        description="Applicants younger than this are scored as under age",
    )
    under_age_points: int = Field(default=15, ge=0)
    young_borrower_max_age: int = Field(
        default=21,
        ge=0,
        description="Adults up to and including this age are young borrowers",
    )
    young_borrower_points: int = Field(default=5, ge=0)
    preferred_max_age: int = Field(
        default=30,
        ge=0,
        description="Applicants older than this are above the preferred age band",
    )
    above_preferred_age_points: int = Field(default=10, ge=0)

    # === Factor 3: Bank Verification ===
    bank_unverified_points: int = Field(default=15, ge=0)

    # === Factor 4: Phone Validity ===
    invalid_phone_points: int = Field(default=10, ge=0)
    mobile_number_pattern: str = Field(
        default=r"^[6-9][0-9]{9}$",
        description="Regex a valid 10-digit mobile number must match",
    )

    # === Factor 5: Blacklist / Fraud ===
    blocked_points: int = Field(default=30, ge=0)
    fraud_points: int = Field(default=30, ge=0)

    # === Factor 6: Bureau Score ===
    credit_score_poor_below: int = Field(default=600, ge=300, le=900)
    credit_score_poor_points: int = Field(default=20, ge=0)
    credit_score_fair_below: int = Field(default=700, ge=300, le=900)
    credit_score_fair_points: int = Field(default=10, ge=0)
    credit_score_good_below: int = Field(default=750, ge=300, le=900)
    credit_score_good_points: int = Field(default=5, ge=0)
    credit_score_missing_points: int = Field(default=8, ge=0)

    # === Factor 7: Repayment History ===
    overdue_loan_points: int = Field(
        default=10,
        ge=0,
        description="Points per prior loan that ended overdue",
    )
    good_history_min_repaid: int = Field(
        default=3,
        ge=1,
        description="Repaid loans (with none overdue) needed for the good-history bonus",
    )
    good_history_bonus: int = Field(
        default=10,
        ge=0,
        description="Points removed for a good repayment history",
    )
    avg_overdue_high_days: float = Field(default=10.0, ge=0.0)
    avg_overdue_high_points: int = Field(default=15, ge=0)
    avg_overdue_moderate_days: float = Field(default=5.0, ge=0.0)
    avg_overdue_moderate_points: int = Field(default=8, ge=0)

    # === Factor 8: Behavioural Flags ===
    multiple_accounts_points: int = Field(default=10, ge=0)
    suspicious_activity_points: int = Field(default=15, ge=0)

    # === Factor 9: Credit-Limit Utilization ===
    exceeds_available_points: int = Field(default=10, ge=0)
    utilization_high_pct: float = Field(default=90.0, ge=0.0, le=100.0)
    utilization_high_points: int = Field(default=10, ge=0)
    utilization_moderate_pct: float = Field(default=75.0, ge=0.0, le=100.0)
    utilization_moderate_points: int = Field(default=5, ge=0)

    # === Factor 10: First-Time Borrower ===
    first_time_borrower_points: int = Field(default=5, ge=0)

    @model_validator(mode="after")
    def validate_bands(self) -> "ScoringSettings":
        """Validate that every banded factor has increasing boundaries."""
        if not (
            self.credit_score_poor_below
            <= self.credit_score_fair_below
            <= self.credit_score_good_below
        ):
            raise ValueError(
                "Credit score bands must satisfy poor <= fair <= good"
            )
        if not self.adult_age <= self.young_borrower_max_age <= self.preferred_max_age:
            raise ValueError(
                "Age bands must satisfy adult_age <= young_borrower_max_age <= preferred_max_age"
            )
        if self.avg_overdue_moderate_days > self.avg_overdue_high_days:
            raise ValueError(
                f"avg_overdue_moderate_days ({self.avg_overdue_moderate_days}) "
                f"> avg_overdue_high_days ({self.avg_overdue_high_days})"
            )
        if self.utilization_moderate_pct > self.utilization_high_pct:
            raise ValueError(
                f"utilization_moderate_pct ({self.utilization_moderate_pct}) "
                f"> utilization_high_pct ({self.utilization_high_pct})"
            )
        return self


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
