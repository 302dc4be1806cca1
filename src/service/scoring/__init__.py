"""
Tenant Scoring Module for the RentCasaYa API
"""

from .settings import ScoringSettings, scoring_settings
from .models import (
    CompatibilityResult,
    Recommendation,
    RiskLevel,
    ScoreBreakdown,
    TenantScore,
)
from .components import (
    points_for,
    score_income_ratio,
    score_income_stability,
    score_balance,
    score_account_diversity,
    score_no_overdraft,
    score_identity_completeness,
    score_contact_channels,
    score_payment_history,
)
from .tenant_score import calculate_tenant_score, recommend
from .compatibility import check_property_compatibility

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    # Models
    "CompatibilityResult",
    "Recommendation",
    "RiskLevel",
    "ScoreBreakdown",
    "TenantScore",
    # Components
    "points_for",
    "score_income_ratio",
    "score_income_stability",
    "score_balance",
    "score_account_diversity",
    "score_no_overdraft",
    "score_identity_completeness",
    "score_contact_channels",
    "score_payment_history",
    # Engine
    "calculate_tenant_score",
    "recommend",
    # Compatibility
    "check_property_compatibility",
]
