"""
Unit tests for policy configuration and scoring settings.

These tests verify:
1. ConfigurationSnapshot invariants are enforced at load time
2. Snapshots are immutable
3. Environment-driven defaults
"""

import pytest
from pydantic import ValidationError

from risk_gateway.service.eligibility import (
    ConfigurationSnapshot,
    PolicyDefaults,
    RoutingMode,
    RoutingPolicy,
    ScoringSettings,
)


class TestConfigurationSnapshot:
    """Tests for ConfigurationSnapshot validation."""

    def test_defaults(self):
        config = ConfigurationSnapshot()

        assert (config.min_age, config.max_age) == (18, 30)
        assert config.min_credit_score == 0
        assert (config.low_risk_threshold, config.medium_risk_threshold) == (30, 60)
        assert config.routing.mode == RoutingMode.ALWAYS_MANUAL

    def test_min_age_above_max_age(self):
        with pytest.raises(ValidationError, match="Minimum age cannot be greater than maximum age"):
            ConfigurationSnapshot(min_age=40, max_age=30)

    @pytest.mark.parametrize("low,medium", [(60, 60), (70, 60)])
    def test_low_threshold_must_be_below_medium(self, low, medium):
        with pytest.raises(ValidationError, match="Low risk threshold must be less than medium"):
            ConfigurationSnapshot(low_risk_threshold=low, medium_risk_threshold=medium)

    def test_min_loan_amount_above_max(self):
        with pytest.raises(ValidationError, match="Minimum loan amount cannot be greater"):
            ConfigurationSnapshot(min_loan_amount=50_000, max_loan_amount=10_000)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("min_age", 17),
            ("max_age", 101),
            ("min_credit_score", 901),
            ("low_risk_threshold", -1),
            ("medium_risk_threshold", 101),
        ],
    )
    def test_out_of_range_values(self, field, value):
        with pytest.raises(ValidationError):
            ConfigurationSnapshot(**{field: value})

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            ConfigurationSnapshot(max_credit_score=900)

    def test_snapshot_is_immutable(self):
        config = ConfigurationSnapshot()

        with pytest.raises(ValidationError):
            config.min_age = 21

    def test_routing_mode_from_string(self):
        config = ConfigurationSnapshot(routing={"mode": "tiered"})

        assert config.routing == RoutingPolicy(mode=RoutingMode.TIERED)


class TestPolicyDefaults:
    """Tests for environment-driven policy defaults."""

    def test_to_snapshot(self):
        snapshot = PolicyDefaults().to_snapshot()

        assert snapshot.version == "defaults"
        assert snapshot == ConfigurationSnapshot(version="defaults")

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("POLICY_MAX_AGE", "45")
        monkeypatch.setenv("POLICY_ROUTING_MODE", "tiered")

        snapshot = PolicyDefaults().to_snapshot()

        assert snapshot.max_age == 45
        assert snapshot.routing.mode == RoutingMode.TIERED

    def test_invalid_environment_is_rejected(self, monkeypatch):
        monkeypatch.setenv("POLICY_LOW_RISK_THRESHOLD", "80")

        with pytest.raises(ValidationError):
            PolicyDefaults().to_snapshot()


class TestScoringSettings:
    """Tests for ScoringSettings band validation."""

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SCORING_FIRST_TIME_BORROWER_POINTS", "7")

        assert ScoringSettings().first_time_borrower_points == 7

    def test_credit_bands_must_increase(self):
        with pytest.raises(ValidationError, match="Credit score bands"):
            ScoringSettings(credit_score_poor_below=720)

    def test_age_bands_must_increase(self):
        with pytest.raises(ValidationError, match="Age bands"):
            ScoringSettings(young_borrower_max_age=35)

    def test_utilization_bands_must_increase(self):
        with pytest.raises(ValidationError):
            ScoringSettings(utilization_moderate_pct=95)
