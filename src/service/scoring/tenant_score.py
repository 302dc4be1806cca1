"""
Tenant Scoring Engine.

This module combines the scoring components into a single 0-100 score
for a tenant against a specific property, then maps the score and the
affordability ratio to a risk level and a recommendation.
"""

from typing import List, Tuple

from src.domain.entities import BankAccount, BankTransaction

from .components import (
    first_owner,
    score_account_diversity,
    score_balance,
    score_contact_channels,
    score_identity_completeness,
    score_income_ratio,
    score_income_stability,
    score_no_overdraft,
    score_payment_history,
)
from .models import Recommendation, RiskLevel, ScoreBreakdown, TenantScore
from .settings import ScoringSettings, scoring_settings


def recommend(
    score: int,
    affordability_ratio: float,
    settings: ScoringSettings = scoring_settings,
) -> Tuple[RiskLevel, Recommendation]:
    """
    Map a score and an affordability ratio to risk and recommendation.

    Both conditions of a tier must hold:
        score >= 80 and ratio >= 2.5 -> (Low, Approve)
        score >= 60 and ratio >= 2.0 -> (Medium, Further Review)
        otherwise                    -> (High, Decline)

    A high score cannot compensate for rent the tenant cannot afford,
    and a comfortable ratio cannot compensate for thin bank data.
    """
    if score >= settings.approve_min_score and affordability_ratio >= settings.approve_min_ratio:
        return RiskLevel.LOW, Recommendation.APPROVE
    if score >= settings.review_min_score and affordability_ratio >= settings.review_min_ratio:
        return RiskLevel.MEDIUM, Recommendation.FURTHER_REVIEW
    return RiskLevel.HIGH, Recommendation.DECLINE


def calculate_tenant_score(
    monthly_income: float,
    monthly_rent: float,
    accounts: List[BankAccount],
    transactions: List[BankTransaction],
    settings: ScoringSettings = scoring_settings,
) -> TenantScore:
    """
    Score a tenant's bank data against a property's rent.

    Algorithm:
        1. Affordability ratio = monthly income / monthly rent
        2. Income (40): ratio tier + income stability
        3. Bank health (30): savings cushion + account diversity + no overdraft
        4. Identity (20): completeness of the first account owner + contact channels
        5. Payment history (10): bill payment count
        6. Total = sum of the four categories
        7. Gate the total and the ratio into a recommendation
        8. Max recommended rent = monthly income * 0.4

    Args:
        monthly_income: Verified monthly income
        monthly_rent: Rent of the target property
        accounts: Linked accounts with balances and owners
        transactions: Transaction history for the lookback window
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        TenantScore whose score equals the sum of its breakdown

    Raises:
        ValueError: If monthly_rent is not positive
    """
    if monthly_rent <= 0:
        raise ValueError("monthly_rent must be positive")

    affordability_ratio = max(monthly_income, 0.0) / monthly_rent
    owner = first_owner(accounts)

    breakdown = ScoreBreakdown(
        income_ratio=score_income_ratio(affordability_ratio, settings),
        income_stability=score_income_stability(transactions, settings),
        balance=score_balance(accounts, monthly_rent, settings),
        account_diversity=score_account_diversity(accounts, settings),
        no_overdraft=score_no_overdraft(accounts, transactions, settings),
        identity_completeness=score_identity_completeness(owner, settings),
        contact_channels=score_contact_channels(owner, settings),
        payment_history=score_payment_history(transactions, settings),
    )

    # ScoringSettings keeps the category maxima within 100
    score = breakdown.total
    risk_level, recommendation = recommend(score, affordability_ratio, settings)

    return TenantScore(
        score=score,
        breakdown=breakdown,
        risk_level=risk_level,
        recommendation=recommendation,
        affordability_ratio=affordability_ratio,
        monthly_income=monthly_income,
        monthly_rent=monthly_rent,
        max_recommended_rent=monthly_income * settings.max_rent_share,
    )
