"""
Deposit Classification for tenant income verification.

This module picks income-like deposits out of a 90-day transaction
history and groups them into clusters of near-equal amounts, which is
how recurring paychecks are detected.
"""

from typing import Dict, Iterable, List

from src.domain.entities import BankTransaction
from src.service.scoring.settings import ScoringSettings, scoring_settings


def is_income_deposit(
    transaction: BankTransaction,
    settings: ScoringSettings = scoring_settings,
) -> bool:
    """
    Decide whether a transaction looks like income.

    A transaction qualifies when money entered the account (negative
    amount in the provider's convention) and either its personal finance
    category is an income category or one of its legacy category labels
    is payroll-like.
    """
    if not transaction.is_inflow:
        return False

    if transaction.primary_category in settings.income_primary_category_set:
        return True

    return any(label in settings.income_legacy_category_set for label in transaction.category)


def classify_deposits(
    transactions: Iterable[BankTransaction],
    settings: ScoringSettings = scoring_settings,
) -> List[BankTransaction]:
    """Income-like deposits, in the order the provider returned them."""
    return [t for t in transactions if is_income_deposit(t, settings)]


def cluster_deposits(
    amounts: Iterable[float],
    tolerance: float | None = None,
    settings: ScoringSettings = scoring_settings,
) -> Dict[float, List[float]]:
    """
    Group deposit amounts into clusters of near-equal values.

    Algorithm:
        1. Take the absolute value of each amount, in input order
        2. Scan existing clusters in creation order; the amount joins the
           first cluster whose representative R satisfies
           R * (1 - tolerance) <= amount <= R * (1 + tolerance)
        3. If no cluster matches, start a new cluster whose representative
           is this amount

    Representatives are never recomputed: a cluster is always keyed by
    its first-seen amount. When an amount falls within tolerance of two
    representatives, the older cluster wins.

    Business Rationale:
        Paychecks vary slightly from period to period (overtime, tax
        adjustments) but stay close to a base amount. Grouping within a
        narrow band exposes the recurring pay pattern without needing the
        payer's name.

    Args:
        amounts: Deposit amounts (sign is ignored)
        tolerance: Relative band around a representative (defaults to settings)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Mapping of representative amount to every amount assigned to it,
        in insertion order
    """
    band = settings.deposit_tolerance if tolerance is None else tolerance
    clusters: Dict[float, List[float]] = {}

    for raw in amounts:
        amount = abs(raw)
        for representative, members in clusters.items():
            if representative * (1 - band) <= amount <= representative * (1 + band):
                members.append(amount)
                break
        else:
            clusters[amount] = [amount]

    return clusters
