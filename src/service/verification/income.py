"""
Income Estimation from recurring deposit clusters.

Turns the cluster mapping produced by the deposit classifier into a
monthly and annual income estimate.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List

from src.domain.entities import BankTransaction
from src.service.scoring.settings import ScoringSettings, scoring_settings

from .deposits import classify_deposits, cluster_deposits


class PayFrequency(str, Enum):
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class IncomeEstimate:
    """
    Estimated income derived from the dominant deposit cluster.

    ``confidence`` is a two-valued label: "high" whenever any income was
    detected and "low" otherwise. It is not a statistical measure.

    Attributes:
        monthly: Estimated monthly income
        annual: monthly * 12
        frequency: Detected pay frequency
        cluster_size: Number of deposits in the dominant cluster
        cluster_average: Average deposit amount in the dominant cluster
    """

    monthly: float
    annual: float
    frequency: PayFrequency
    cluster_size: int
    cluster_average: float

    @property
    def confidence(self) -> str:
        return "high" if self.monthly > 0 else "low"

    def to_dict(self) -> dict:
        return {
            "monthly": round(self.monthly, 2),
            "annual": round(self.annual, 2),
            "frequency": self.frequency.value,
            "confidence": self.confidence,
        }


def estimate_income(
    clusters: Dict[float, List[float]],
    settings: ScoringSettings = scoring_settings,
) -> IncomeEstimate:
    """
    Estimate monthly income from deposit clusters.

    Algorithm:
        1. Select the cluster with the most members. Ties go to the cluster
           created first (strictly-greater comparison in insertion order)
        2. With >= 6 members the pattern is bi-weekly: monthly income is
           the cluster average times 2.17 (52 weeks / 2 / 12)
        3. With 3-5 members the average is already a monthly amount
        4. With fewer than 3 members no income is detected and the
           estimate is zero

    Business Rationale:
        Ninety days holds six or seven bi-weekly paychecks but only three
        monthly ones, so cluster size is a usable proxy for pay frequency.
        Fewer than three matching deposits is not a pattern at all.

    Args:
        clusters: Output of ``cluster_deposits``
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        IncomeEstimate (monthly is 0.0 when no income pattern is found)
    """
    best_size = 0
    best_average = 0.0

    for members in clusters.values():
        if len(members) > best_size:
            best_size = len(members)
            best_average = sum(members) / len(members)

    if best_size >= settings.biweekly_min_deposits:
        frequency = PayFrequency.BI_WEEKLY
        monthly = best_average * settings.biweekly_multiplier
    elif best_size >= settings.monthly_min_deposits:
        frequency = PayFrequency.MONTHLY
        monthly = best_average
    else:
        frequency = PayFrequency.UNKNOWN
        monthly = 0.0

    return IncomeEstimate(
        monthly=monthly,
        annual=monthly * 12,
        frequency=frequency,
        cluster_size=best_size,
        cluster_average=best_average,
    )


def estimate_income_from_transactions(
    transactions: Iterable[BankTransaction],
    settings: ScoringSettings = scoring_settings,
) -> tuple[IncomeEstimate, List[BankTransaction]]:
    """
    Run classification, clustering and estimation in one pass.

    Returns:
        The estimate and the deposits that were considered income
    """
    deposits = classify_deposits(transactions, settings)
    clusters = cluster_deposits((d.amount for d in deposits), settings=settings)
    return estimate_income(clusters, settings), deposits
