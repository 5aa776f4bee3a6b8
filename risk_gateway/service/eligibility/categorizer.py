"""
Risk Categorization for the Micro-Loan Risk Engine.

Maps a composite risk score to a LOW / MEDIUM / HIGH bucket using the
thresholds of the current ConfigurationSnapshot.
"""

from .configuration import ConfigurationSnapshot
from .models import RiskCategory


def categorize_risk(risk_score: int, config: ConfigurationSnapshot) -> RiskCategory:
    """
    Bucket a risk score.

    Args:
        risk_score: Composite risk score (0-100)
        config: Snapshot providing low/medium thresholds

    Returns:
        HIGH at or above the medium threshold, MEDIUM at or above the low
        threshold, LOW otherwise
    """
    if risk_score >= config.medium_risk_threshold:
        return RiskCategory.HIGH
    elif risk_score >= config.low_risk_threshold:
        return RiskCategory.MEDIUM
    return RiskCategory.LOW
