"""
Data models for tenant scoring.

These models carry the per-category points and the final recommendation
produced by the scoring engine.
"""

from dataclasses import dataclass
from enum import Enum


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Recommendation(str, Enum):
    APPROVE = "Approve"
    FURTHER_REVIEW = "Further Review"
    DECLINE = "Decline"


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Points awarded per scoring signal.

    Attributes:
        income_ratio: Monthly income / rent tier points (max 25)
        income_stability: Recurring income deposit count points (max 15)
        balance: Checking + savings balance in months of rent (max 15)
        account_diversity: Distinct account types (max 10)
        no_overdraft: No debit above the available checking balance (max 5)
        identity_completeness: Names, addresses and emails on file (max 10)
        contact_channels: Phone/email/address presence (max 10)
        payment_history: Count of bill payments (max 10)
    """
    income_ratio: int
    income_stability: int
    balance: int
    account_diversity: int
    no_overdraft: int
    identity_completeness: int
    contact_channels: int
    payment_history: int

    @property
    def income(self) -> int:
        return self.income_ratio + self.income_stability

    @property
    def bank_health(self) -> int:
        return self.balance + self.account_diversity + self.no_overdraft

    @property
    def identity(self) -> int:
        return self.identity_completeness + self.contact_channels

    @property
    def total(self) -> int:
        return self.income + self.bank_health + self.identity + self.payment_history

    def to_dict(self) -> dict:
        return {
            "income": {
                "score": self.income,
                "max_score": 40,
                "ratio": self.income_ratio,
                "stability": self.income_stability,
            },
            "bank_health": {
                "score": self.bank_health,
                "max_score": 30,
                "balance": self.balance,
                "account_diversity": self.account_diversity,
                "no_overdraft": self.no_overdraft,
            },
            "identity": {
                "score": self.identity,
                "max_score": 20,
                "completeness": self.identity_completeness,
                "contact_channels": self.contact_channels,
            },
            "payment_history": {
                "score": self.payment_history,
                "max_score": 10,
            },
        }


@dataclass(frozen=True)
class TenantScore:
    """
    The scoring engine's result for one tenant against one property.

    ``score`` always equals ``breakdown.total``.
    """
    score: int
    breakdown: ScoreBreakdown
    risk_level: RiskLevel
    recommendation: Recommendation
    affordability_ratio: float
    monthly_income: float
    monthly_rent: float
    max_recommended_rent: float

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "max_score": 100,
            "breakdown": self.breakdown.to_dict(),
            "risk_level": self.risk_level.value,
            "recommendation": self.recommendation.value,
            "affordability_ratio": round(self.affordability_ratio, 2),
            "monthly_income": round(self.monthly_income, 2),
            "monthly_rent": round(self.monthly_rent, 2),
            "max_recommended_rent": round(self.max_recommended_rent, 2),
        }


@dataclass(frozen=True)
class CompatibilityResult:
    """Affordability-only check of a stated income against a property's rent."""
    compatible: bool
    affordability_ratio: float
    risk_level: RiskLevel
    monthly_income: float
    monthly_rent: float
    max_recommended_rent: float

    def to_dict(self) -> dict:
        return {
            "compatible": self.compatible,
            "affordability_ratio": round(self.affordability_ratio, 2),
            "risk_level": self.risk_level.value,
            "monthly_income": round(self.monthly_income, 2),
            "monthly_rent": round(self.monthly_rent, 2),
            "max_recommended_rent": round(self.max_recommended_rent, 2),
        }
