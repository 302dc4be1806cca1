"""Tenant scoring schemas."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CalculateScoreRequestSchema(BaseModel):
    property_id: str = Field(..., min_length=1)


class TenantScoreSchema(BaseModel):
    score: int = Field(..., ge=0, le=100)
    max_score: int = 100
    breakdown: Dict[str, Dict[str, Any]] = Field(
        ...,
        description="Points per category: income, bank_health, identity, payment_history",
    )
    risk_level: str = Field(..., examples=["Low"])
    recommendation: str = Field(..., examples=["Approve"])
    affordability_ratio: float = Field(..., description="Monthly income divided by rent")
    monthly_income: float
    monthly_rent: float
    max_recommended_rent: float


class CreditCheckSchema(BaseModel):
    credit_score: Optional[int] = None
    last_credit_check: Optional[datetime] = None


class CompatibilityRequestSchema(BaseModel):
    monthly_income: float = Field(..., gt=0, examples=[6000])
    property_id: str = Field(..., min_length=1)


class CompatibilitySchema(BaseModel):
    compatible: bool
    affordability_ratio: float
    risk_level: str
    monthly_income: float
    monthly_rent: float
    max_recommended_rent: float = Field(..., description="40% of monthly income")
