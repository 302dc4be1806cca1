"""
Property compatibility check.

A lightweight affordability check that uses only a stated monthly income
and the property's rent. It is deliberately independent of the tenant
score: its thresholds are not the recommendation gate's thresholds, and
a property can be "compatible" here while the full score says Decline.
"""

from .models import CompatibilityResult, RiskLevel
from .settings import ScoringSettings, scoring_settings


def check_property_compatibility(
    monthly_income: float,
    monthly_rent: float,
    settings: ScoringSettings = scoring_settings,
) -> CompatibilityResult:
    """
    Classify affordability of a property for a given income.

    Rules:
        ratio >= 3.0 -> Low risk, >= 2.5 -> Medium risk, otherwise High.
        compatible when ratio >= 2.5.

    Raises:
        ValueError: If monthly_rent is not positive
    """
    if monthly_rent <= 0:
        raise ValueError("monthly_rent must be positive")

    ratio = monthly_income / monthly_rent

    if ratio >= settings.compatibility_low_risk_ratio:
        risk = RiskLevel.LOW
    elif ratio >= settings.compatibility_medium_risk_ratio:
        risk = RiskLevel.MEDIUM
    else:
        risk = RiskLevel.HIGH

    return CompatibilityResult(
        compatible=ratio >= settings.compatibility_min_ratio,
        affordability_ratio=ratio,
        risk_level=risk,
        monthly_income=monthly_income,
        monthly_rent=monthly_rent,
        max_recommended_rent=monthly_income * settings.max_rent_share,
    )
