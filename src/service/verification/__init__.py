"""
Income Verification Module - deposit clustering and income estimation.
"""

from .deposits import cluster_deposits, classify_deposits, is_income_deposit
from .income import IncomeEstimate, PayFrequency, estimate_income, estimate_income_from_transactions

__all__ = [
    "cluster_deposits",
    "classify_deposits",
    "is_income_deposit",
    "IncomeEstimate",
    "PayFrequency",
    "estimate_income",
    "estimate_income_from_transactions",
]
