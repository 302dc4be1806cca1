"""Scoring service - tenant score, credit check and property compatibility."""

from datetime import datetime

import structlog

from src.core.metrics import record_tenant_score
from src.domain.entities import Tenant
from src.domain.exceptions import (
    ConflictException,
    PropertyNotFoundException,
    TenantNotFoundException,
    ValidationException,
)
from src.domain.interfaces import (
    CreditBureauClient,
    PropertyRepository,
    TenantRepository,
)
from src.service.scoring import (
    CompatibilityResult,
    ScoringSettings,
    TenantScore,
    calculate_tenant_score,
    check_property_compatibility,
    scoring_settings,
)

from .verification_service import VerificationService

logger = structlog.get_logger(__name__)


class ScoringService:
    """
    Application service for tenant scoring use cases.

    The full score and the compatibility check are separate rules with
    their own thresholds; neither is derived from the other.
    """

    def __init__(
        self,
        tenant_repository: TenantRepository,
        property_repository: PropertyRepository,
        verification_service: VerificationService,
        credit_client: CreditBureauClient,
        settings: ScoringSettings = scoring_settings,
    ):
        self._tenants = tenant_repository
        self._properties = property_repository
        self._verification = verification_service
        self._credit = credit_client
        self._settings = settings

    async def _get_tenant(self, tenant_id: str) -> Tenant:
        tenant = await self._tenants.get(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        return tenant

    async def calculate_score(self, tenant_id: str, property_id: str) -> TenantScore:
        """
        Score a tenant against a property's rent.

        Raises:
            TenantNotFoundException: If the tenant does not exist
            PropertyNotFoundException: If the property does not exist
            ConflictException: If the tenant has not linked a bank account
        """
        tenant = await self._get_tenant(tenant_id)
        property = await self._properties.get(property_id)
        if property is None:
            raise PropertyNotFoundException(property_id)

        if not tenant.plaid_verified or not tenant.plaid_access_token:
            raise ConflictException(
                "Tenant must complete bank verification before scoring",
                code="BANK_VERIFICATION_REQUIRED",
            )

        log = logger.bind(tenant_id=tenant_id, property_id=property_id)

        estimate = await self._verification.refresh_income(tenant)
        accounts, transactions = await self._verification.fetch_scoring_inputs(
            tenant.plaid_access_token
        )

        result = calculate_tenant_score(
            monthly_income=estimate.monthly,
            monthly_rent=property.price,
            accounts=accounts,
            transactions=transactions,
            settings=self._settings,
        )

        record_tenant_score(result.score, result.recommendation.value)
        log.info(
            "tenant_scored",
            score=result.score,
            recommendation=result.recommendation.value,
            affordability_ratio=round(result.affordability_ratio, 2),
        )
        return result

    async def check_credit(self, tenant_id: str) -> Tenant:
        """
        Pull a credit score and store it on the tenant.

        Raises:
            ValidationException: If ssn, date_of_birth or current_address
                is missing from the profile
        """
        tenant = await self._get_tenant(tenant_id)

        missing = [
            name
            for name in ("ssn", "date_of_birth", "current_address")
            if not getattr(tenant, name)
        ]
        if missing:
            raise ValidationException(
                "Missing required information for credit check",
                missing_fields=missing,
            )

        score = await self._credit.get_credit_score(
            ssn=tenant.ssn,
            date_of_birth=tenant.date_of_birth,
            address=tenant.current_address,
            first_name=tenant.first_name,
            last_name=tenant.last_name,
        )

        tenant.credit_score = score
        tenant.last_credit_check = datetime.utcnow()
        await self._tenants.save(tenant)

        logger.info("credit_score_checked", tenant_id=tenant_id)
        return tenant

    async def check_compatibility(self, monthly_income: float, property_id: str) -> CompatibilityResult:
        if monthly_income is None or monthly_income <= 0:
            raise ValidationException("monthly_income must be positive", missing_fields=["monthly_income"])

        property = await self._properties.get(property_id)
        if property is None:
            raise PropertyNotFoundException(property_id)

        return check_property_compatibility(monthly_income, property.price, self._settings)
