"""
Scoring Components for the RentCasaYa tenant scoring engine.

This module converts raw bank data into points for each scoring signal:
- Income: income-to-rent ratio and recurring income deposits
- Bank health: savings cushion, account diversity, overdraft exposure
- Identity: completeness of the bank's owner record
- Payment history: count of bill payments

Each signal awards points from a tier table in ScoringSettings. The
category maxima add up to 100.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from src.domain.entities import AccountOwner, BankAccount, BankTransaction

from .settings import ScoringSettings, scoring_settings


def points_for(value: float, tiers: Sequence[Tuple[float, int]], floor: int = 0) -> int:
    """
    Look up the points for a value in a descending tier table.

    Args:
        value: The measured value
        tiers: [(threshold, points), ...] sorted by threshold, highest first
        floor: Points when the value is below every threshold

    Returns:
        Points of the first tier whose threshold the value meets
    """
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return floor


# =============================================================================
# Income
# =============================================================================

def score_income_ratio(
    affordability_ratio: float,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Points for monthly income relative to monthly rent.

    Algorithm:
        ratio >= 3.0 -> 25, >= 2.5 -> 20, >= 2.0 -> 15, >= 1.5 -> 10,
        otherwise the floor of 5.

    Business Rationale:
        The common rule of thumb is that rent should not exceed a third of
        gross income. Any verified income still earns the floor so that a
        low ratio is penalized by the recommendation gate rather than by
        zeroing the category.
    """
    return points_for(
        affordability_ratio,
        settings.income_ratio_tiers,
        floor=settings.income_ratio_floor_points,
    )


def count_income_deposits(
    transactions: Iterable[BankTransaction],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """Number of inflows whose primary category is an income category."""
    return sum(
        1 for t in transactions
        if t.is_inflow and t.primary_category in settings.income_primary_category_set
    )


def score_income_stability(
    transactions: Iterable[BankTransaction],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Points for how many income deposits landed in the window.

    Algorithm:
        >= 6 income deposits -> 15, >= 4 -> 10, >= 2 -> 5, otherwise 0.

    Business Rationale:
        Steady, repeated pay is a better predictor of on-time rent than a
        single large deposit.
    """
    return points_for(
        count_income_deposits(transactions, settings),
        settings.income_stability_tiers,
    )


# =============================================================================
# Bank Health
# =============================================================================

def savings_balance(
    accounts: Iterable[BankAccount],
    settings: ScoringSettings = scoring_settings,
) -> float:
    """Current balance of the first checking account plus the first savings account."""
    first_of_subtype = {}
    for account in accounts:
        if account.subtype in settings.balance_account_subtype_set:
            first_of_subtype.setdefault(account.subtype, account)
    return sum(account.balance_current or 0.0 for account in first_of_subtype.values())


def score_balance(
    accounts: Iterable[BankAccount],
    monthly_rent: float,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Points for the savings cushion measured in months of rent.

    Algorithm:
        1. Add the current balances of the first checking and the first
           savings account
        2. Divide by the monthly rent
        3. >= 6 months -> 15, >= 3 -> 10, >= 1 -> 5, otherwise 0

    Args:
        accounts: Linked accounts with balances
        monthly_rent: Rent of the target property (must be positive)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Points from 0 to 15
    """
    months_covered = savings_balance(accounts, settings) / monthly_rent
    return points_for(months_covered, settings.balance_tiers)


def score_account_diversity(
    accounts: Iterable[BankAccount],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """Points for distinct account types (depository, credit, loan, ...)."""
    distinct_types = {account.type for account in accounts if account.type}
    return points_for(len(distinct_types), settings.account_diversity_tiers)


def find_checking_account(accounts: Iterable[BankAccount]) -> Optional[BankAccount]:
    for account in accounts:
        if account.subtype == "checking":
            return account
    return None


def score_no_overdraft(
    accounts: Sequence[BankAccount],
    transactions: Iterable[BankTransaction],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Bonus when no debit is larger than the checking account's available balance.

    A missing checking account or an unknown available balance counts as
    0.0, so any debit at all then loses the bonus.
    """
    checking = find_checking_account(accounts)
    available = (checking.balance_available if checking else None) or 0.0

    if any(t.amount > available for t in transactions):
        return 0
    return settings.no_overdraft_points


# =============================================================================
# Identity
# =============================================================================

def score_identity_completeness(
    owner: Optional[AccountOwner],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Points when the owner record carries names, addresses and emails.

    The lists only have to be present; an owner with an empty ``emails``
    list still counts as complete. Contact channels are scored on content
    by ``score_contact_channels``.
    """
    if owner is None:
        return 0
    if owner.names is not None and owner.addresses is not None and owner.emails is not None:
        return settings.identity_complete_points
    return 0


def score_contact_channels(
    owner: Optional[AccountOwner],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """Points for each contact channel on file: phone, email, address."""
    if owner is None:
        return 0

    points = 0
    if owner.phone_numbers:
        points += settings.identity_phone_points
    if owner.emails:
        points += settings.identity_email_points
    if owner.addresses:
        points += settings.identity_address_points
    return points


# =============================================================================
# Payment History
# =============================================================================

def count_bill_payments(
    transactions: Iterable[BankTransaction],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """Number of outflows whose primary category is a bill payment category."""
    return sum(
        1 for t in transactions
        if t.amount > 0 and t.primary_category in settings.payment_category_set
    )


def score_payment_history(
    transactions: Iterable[BankTransaction],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Points for a record of paying bills.

    Algorithm:
        >= 10 payments -> 10, >= 6 -> 7, >= 3 -> 4, otherwise 0.
    """
    return points_for(
        count_bill_payments(transactions, settings),
        settings.payment_history_tiers,
    )


def first_owner(accounts: List[BankAccount]) -> Optional[AccountOwner]:
    """The first owner of the first account, which is the record that gets scored."""
    if not accounts or not accounts[0].owners:
        return None
    return accounts[0].owners[0]
