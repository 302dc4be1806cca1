"""
Unit Tests for tenant income verification.

These tests verify:
1. Deposit classification (inflow + income category or payroll-like label)
2. Deposit clustering within the tolerance band
3. Income estimation from the dominant cluster

Test Categories:
- TestIsIncomeDeposit / TestClassifyDeposits: which transactions count as income
- TestClusterDeposits: grouping of near-equal amounts
- TestEstimateIncome: frequency detection and monthly/annual amounts
- TestEstimateFromTransactions: the full pipeline
"""

from datetime import date, timedelta
from typing import List, Optional

import pytest

from src.domain.entities import BankTransaction
from src.service.scoring.settings import ScoringSettings
from src.service.verification import (
    IncomeEstimate,
    PayFrequency,
    classify_deposits,
    cluster_deposits,
    estimate_income,
    estimate_income_from_transactions,
    is_income_deposit,
)


# =============================================================================
# Test Fixtures
# =============================================================================

def make_txn(
    amount: float,
    days_ago: int = 0,
    primary_category: Optional[str] = None,
    category: Optional[List[str]] = None,
    name: str = "",
) -> BankTransaction:
    """Helper to create transactions. Negative amounts are inflows."""
    return BankTransaction(
        transaction_id=f"txn-{days_ago}-{amount}",
        account_id="acc-checking",
        date=date.today() - timedelta(days=days_ago),
        amount=amount,
        name=name,
        category=category or [],
        primary_category=primary_category,
    )


def biweekly_paychecks(amount: float = 1500.0, count: int = 6) -> List[BankTransaction]:
    return [
        make_txn(-(amount + (i % 3) * 10), days_ago=i * 14, primary_category="INCOME", name="ACME PAYROLL")
        for i in range(count)
    ]


# =============================================================================
# Classification
# =============================================================================

class TestIsIncomeDeposit:
    """Tests for is_income_deposit."""

    def test_inflow_with_income_category(self):
        assert is_income_deposit(make_txn(-2000, primary_category="INCOME")) is True

    def test_outflow_is_never_income(self):
        assert is_income_deposit(make_txn(2000, primary_category="INCOME")) is False

    def test_inflow_with_payroll_label(self):
        txn = make_txn(-1800, primary_category="TRANSFER_IN", category=["Transfer", "Payroll"])
        assert is_income_deposit(txn) is True

    def test_inflow_with_deposit_label(self):
        assert is_income_deposit(make_txn(-300, category=["Deposit"])) is True

    def test_inflow_without_income_signal(self):
        txn = make_txn(-45, primary_category="FOOD_AND_DRINK", category=["Food and Drink", "Refund"])
        assert is_income_deposit(txn) is False

    def test_zero_amount_is_not_income(self):
        assert is_income_deposit(make_txn(0, primary_category="INCOME")) is False

    def test_custom_categories(self):
        settings = ScoringSettings(income_primary_categories="INCOME,TRANSFER_IN")
        txn = make_txn(-500, primary_category="TRANSFER_IN")
        assert is_income_deposit(txn, settings) is True


class TestClassifyDeposits:
    """Tests for classify_deposits."""

    def test_keeps_provider_order(self):
        txns = [
            make_txn(-1000, days_ago=1, primary_category="INCOME"),
            make_txn(60, days_ago=2, primary_category="FOOD_AND_DRINK"),
            make_txn(-200, days_ago=3, category=["Transfer"]),
            make_txn(-15, days_ago=4, primary_category="GENERAL_MERCHANDISE"),
        ]

        deposits = classify_deposits(txns)

        assert [d.amount for d in deposits] == [-1000, -200]

    def test_empty_history(self):
        assert classify_deposits([]) == []


# =============================================================================
# Clustering
# =============================================================================

class TestClusterDeposits:
    """Tests for cluster_deposits."""

    def test_groups_amounts_within_band(self):
        clusters = cluster_deposits([1000, 1020, 980, 2000], tolerance=0.05)

        assert clusters == {1000: [1000, 1020, 980], 2000: [2000]}

    def test_uses_absolute_values(self):
        clusters = cluster_deposits([-1000, -1010])

        assert clusters == {1000: [1000, 1010]}

    def test_representative_is_never_recomputed(self):
        # 108 is within 5% of 104 but not of 100, the representative.
        clusters = cluster_deposits([100, 104, 108], tolerance=0.05)

        assert clusters == {100: [100, 104], 108: [108]}

    def test_older_cluster_wins_when_two_match(self):
        # 104 is within 5% of both 100 and 108.
        clusters = cluster_deposits([100, 108, 104], tolerance=0.05)

        assert clusters == {100: [100, 104], 108: [108]}

    def test_zero_tolerance_requires_exact_match(self):
        clusters = cluster_deposits([500, 500, 501], tolerance=0.0)

        assert clusters == {500: [500, 500], 501: [501]}

    def test_default_tolerance_comes_from_settings(self):
        settings = ScoringSettings(deposit_tolerance=0.2)

        clusters = cluster_deposits([100, 115], settings=settings)

        assert clusters == {100: [100, 115]}

    def test_empty_input(self):
        assert cluster_deposits([]) == {}


# =============================================================================
# Estimation
# =============================================================================

class TestEstimateIncome:
    """Tests for estimate_income."""

    def test_six_deposits_is_biweekly(self):
        estimate = estimate_income({1000: [1000] * 6})

        assert estimate.frequency == PayFrequency.BI_WEEKLY
        assert estimate.monthly == pytest.approx(2170.0)
        assert estimate.annual == pytest.approx(26040.0)
        assert estimate.cluster_size == 6
        assert estimate.confidence == "high"

    def test_three_deposits_is_monthly(self):
        estimate = estimate_income({3000: [3000, 3050, 2950]})

        assert estimate.frequency == PayFrequency.MONTHLY
        assert estimate.monthly == pytest.approx(3000.0)
        assert estimate.annual == pytest.approx(36000.0)

    def test_five_deposits_is_still_monthly(self):
        estimate = estimate_income({2000: [2000] * 5})

        assert estimate.frequency == PayFrequency.MONTHLY
        assert estimate.monthly == pytest.approx(2000.0)

    def test_two_deposits_is_no_income(self):
        estimate = estimate_income({2500: [2500, 2500]})

        assert estimate.frequency == PayFrequency.UNKNOWN
        assert estimate.monthly == 0.0
        assert estimate.annual == 0.0
        assert estimate.confidence == "low"

    def test_no_clusters(self):
        estimate = estimate_income({})

        assert estimate.monthly == 0.0
        assert estimate.cluster_size == 0

    def test_largest_cluster_wins(self):
        estimate = estimate_income({
            5000: [5000, 5000, 5000],
            800: [800, 800, 800, 800, 800, 800],
        })

        assert estimate.frequency == PayFrequency.BI_WEEKLY
        assert estimate.cluster_average == pytest.approx(800.0)

    def test_tie_goes_to_first_cluster(self):
        estimate = estimate_income({
            500: [500, 500, 500],
            900: [900, 900, 900],
        })

        assert estimate.cluster_average == pytest.approx(500.0)
        assert estimate.monthly == pytest.approx(500.0)

    def test_to_dict_rounds_amounts(self):
        estimate = IncomeEstimate(
            monthly=2170.3333,
            annual=26043.9999,
            frequency=PayFrequency.BI_WEEKLY,
            cluster_size=6,
            cluster_average=1000.15,
        )

        assert estimate.to_dict() == {
            "monthly": 2170.33,
            "annual": 26044.0,
            "frequency": "bi-weekly",
            "confidence": "high",
        }


class TestEstimateFromTransactions:
    """Tests for the classification -> clustering -> estimation pipeline."""

    def test_biweekly_payroll_history(self):
        txns = biweekly_paychecks(1500.0) + [
            make_txn(85.0, days_ago=3, primary_category="FOOD_AND_DRINK"),
            make_txn(1200.0, days_ago=5, primary_category="RENT_AND_UTILITIES"),
        ]

        estimate, deposits = estimate_income_from_transactions(txns)

        assert len(deposits) == 6
        assert estimate.frequency == PayFrequency.BI_WEEKLY
        assert estimate.monthly == pytest.approx(1510.0 * 2.17)

    def test_scattered_deposits_are_not_income(self):
        txns = [
            make_txn(-100, days_ago=1, category=["Transfer"]),
            make_txn(-900, days_ago=20, category=["Transfer"]),
            make_txn(-2500, days_ago=40, primary_category="INCOME"),
        ]

        estimate, deposits = estimate_income_from_transactions(txns)

        assert len(deposits) == 3
        assert estimate.frequency == PayFrequency.UNKNOWN
        assert estimate.monthly == 0.0

    def test_no_transactions(self):
        estimate, deposits = estimate_income_from_transactions([])

        assert deposits == []
        assert estimate.monthly == 0.0
