"""
Scoring Settings for the RentCasaYa tenant scoring engine.

This module contains every configurable parameter of income verification
and tenant scoring. Values can be adjusted via environment variables for
tuning against observed tenancy outcomes.

Environment variables use the SCORING_ prefix:
    SCORING_DEPOSIT_TOLERANCE=0.05
    SCORING_APPROVE_MIN_SCORE=80
    SCORING_INCOME_RATIO_TIERS_JSON=[[3.0,25],[2.5,20],[2.0,15],[1.5,10]]

Usage:
    from src.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    band = scoring_settings.deposit_tolerance

    # Or create custom settings for testing
    custom = ScoringSettings(approve_min_score=75)
"""

import json
from functools import lru_cache
from typing import FrozenSet, List, Tuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_SCORE = 100


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for income estimation and tenant scoring.

    All settings can be overridden via environment variables with SCORING_ prefix.
    Monetary values are in dollars. Tier tables are JSON arrays of
    [threshold, points] pairs, evaluated top-down; the first threshold the
    value meets or exceeds awards its points.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Deposit Classification ===
    transaction_lookback_days: int = Field(
        default=90,
        gt=0,
        description="Days of transaction history fetched for income verification",
    )
    income_primary_categories: str = Field(
        default="INCOME",
        description="Comma list of personal-finance primary categories treated as income",
    )
    income_legacy_categories: str = Field(
        default="Payroll,Transfer,Deposit",
        description="Comma list of legacy category labels treated as income",
    )
    deposit_tolerance: float = Field(
        default=0.05,
        ge=0.0,
        lt=1.0,
        description="Relative band around a cluster representative (0.05 = +/-5%)",
    )

    # === Income Estimation ===
    biweekly_min_deposits: int = Field(
        default=6,
        ge=1,
        description="Cluster size at or above which pay is treated as bi-weekly",
    )
    monthly_min_deposits: int = Field(
        default=3,
        ge=1,
        description="Cluster size at or above which pay is treated as monthly",
    )
    biweekly_multiplier: float = Field(
        default=2.17,
        gt=0.0,
        description="Bi-weekly paychecks per month (52 / 2 / 12)",
    )

    # === Income Category (40 pts) ===
    income_ratio_tiers_json: str = Field(
        default="[[3.0,25],[2.5,20],[2.0,15],[1.5,10]]",
        description="Income/rent ratio tiers as [[min_ratio, points], ...]",
    )
    income_ratio_floor_points: int = Field(
        default=5,
        ge=0,
        description="Points when the income/rent ratio is below every tier",
    )
    income_stability_tiers_json: str = Field(
        default="[[6,15],[4,10],[2,5]]",
        description="Recurring income deposit count tiers as [[min_count, points], ...]",
    )

    # === Bank Health Category (30 pts) ===
    balance_account_subtypes: str = Field(
        default="checking,savings",
        description="Comma list of account subtypes; the first account of each counts as savings",
    )
    balance_tiers_json: str = Field(
        default="[[6,15],[3,10],[1,5]]",
        description="Balance in months of rent tiers as [[min_months, points], ...]",
    )
    account_diversity_tiers_json: str = Field(
        default="[[3,10],[2,5]]",
        description="Distinct account type tiers as [[min_types, points], ...]",
    )
    no_overdraft_points: int = Field(
        default=5,
        ge=0,
        description="Points when no debit exceeds the checking account's available balance",
    )

    # === Identity Category (20 pts) ===
    identity_complete_points: int = Field(
        default=10,
        ge=0,
        description="Points when the bank owner record has names, addresses and emails",
    )
    identity_phone_points: int = Field(default=3, ge=0, description="Points for a phone on file")
    identity_email_points: int = Field(default=3, ge=0, description="Points for an email on file")
    identity_address_points: int = Field(default=4, ge=0, description="Points for an address on file")

    # === Payment History Category (10 pts) ===
    payment_categories: str = Field(
        default="PAYMENT",
        description="Comma list of primary categories counted as bill payments",
    )
    payment_history_tiers_json: str = Field(
        default="[[10,10],[6,7],[3,4]]",
        description="Bill payment count tiers as [[min_count, points], ...]",
    )

    # === Recommendation Gate ===
    approve_min_score: int = Field(
        default=80,
        ge=0,
        le=100,
        description="Minimum score for an Approve recommendation",
    )
    approve_min_ratio: float = Field(
        default=2.5,
        ge=0.0,
        description="Minimum income/rent ratio for an Approve recommendation",
    )
    review_min_score: int = Field(
        default=60,
        ge=0,
        le=100,
        description="Minimum score for a Further Review recommendation",
    )
    review_min_ratio: float = Field(
        default=2.0,
        ge=0.0,
        description="Minimum income/rent ratio for a Further Review recommendation",
    )

    # === Property Compatibility ===
    compatibility_low_risk_ratio: float = Field(
        default=3.0,
        description="Income/rent ratio at or above which compatibility risk is Low",
    )
    compatibility_medium_risk_ratio: float = Field(
        default=2.5,
        description="Income/rent ratio at or above which compatibility risk is Medium",
    )
    compatibility_min_ratio: float = Field(
        default=2.5,
        description="Income/rent ratio at or above which a property is compatible",
    )
    max_rent_share: float = Field(
        default=0.4,
        gt=0.0,
        le=1.0,
        description="Share of monthly income recommended as the rent ceiling",
    )

    @field_validator(
        "income_ratio_tiers_json",
        "income_stability_tiers_json",
        "balance_tiers_json",
        "account_diversity_tiers_json",
        "payment_history_tiers_json",
    )
    @classmethod
    def validate_tiers_json(cls, v: str) -> str:
        """Validate that a tier table is parseable and sorted high to low."""
        try:
            tiers = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(tiers, list):
            raise ValueError("Tiers must be a list")
        for tier in tiers:
            if not isinstance(tier, list) or len(tier) != 2:
                raise ValueError("Each tier must be [threshold, points]")
            if not all(isinstance(x, (int, float)) for x in tier):
                raise ValueError("Tier values must be numbers")
            if tier[1] < 0:
                raise ValueError(f"points cannot be negative: {tier[1]}")
        thresholds = [tier[0] for tier in tiers]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError("Tier thresholds must be in descending order")
        return v

    @model_validator(mode="after")
    def validate_max_score(self) -> "ScoringSettings":
        """The best possible breakdown must fit the 100 point scale."""
        if self.max_total_points > MAX_SCORE:
            raise ValueError(
                f"Category maxima add up to {self.max_total_points}, above {MAX_SCORE}"
            )
        return self

    @property
    def max_total_points(self) -> int:
        def best(tiers: List[Tuple[float, int]], floor: int = 0) -> int:
            return max([floor] + [points for _, points in tiers])

        return (
            best(self.income_ratio_tiers, self.income_ratio_floor_points)
            + best(self.income_stability_tiers)
            + best(self.balance_tiers)
            + best(self.account_diversity_tiers)
            + self.no_overdraft_points
            + self.identity_complete_points
            + self.identity_phone_points
            + self.identity_email_points
            + self.identity_address_points
            + best(self.payment_history_tiers)
        )

    @staticmethod
    def _parse_tiers(raw: str) -> List[Tuple[float, int]]:
        return [(float(threshold), int(points)) for threshold, points in json.loads(raw)]

    @staticmethod
    def _parse_set(raw: str) -> FrozenSet[str]:
        return frozenset(item.strip() for item in raw.split(",") if item.strip())

    @property
    def income_ratio_tiers(self) -> List[Tuple[float, int]]:
        return self._parse_tiers(self.income_ratio_tiers_json)

    @property
    def income_stability_tiers(self) -> List[Tuple[float, int]]:
        return self._parse_tiers(self.income_stability_tiers_json)

    @property
    def balance_tiers(self) -> List[Tuple[float, int]]:
        return self._parse_tiers(self.balance_tiers_json)

    @property
    def account_diversity_tiers(self) -> List[Tuple[float, int]]:
        return self._parse_tiers(self.account_diversity_tiers_json)

    @property
    def payment_history_tiers(self) -> List[Tuple[float, int]]:
        return self._parse_tiers(self.payment_history_tiers_json)

    @property
    def income_primary_category_set(self) -> FrozenSet[str]:
        return self._parse_set(self.income_primary_categories)

    @property
    def income_legacy_category_set(self) -> FrozenSet[str]:
        return self._parse_set(self.income_legacy_categories)

    @property
    def balance_account_subtype_set(self) -> FrozenSet[str]:
        return self._parse_set(self.balance_account_subtypes)

    @property
    def payment_category_set(self) -> FrozenSet[str]:
        return self._parse_set(self.payment_categories)


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
