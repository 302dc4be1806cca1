"""Verification service - bank-link flow and the three verification checks."""

import asyncio
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Any, Awaitable, Dict, List, Optional, Tuple

import structlog

from src.core.metrics import record_verification_check
from src.domain.entities import BankAccount, BankTransaction, Tenant
from src.domain.exceptions import TenantNotFoundException
from src.domain.interfaces import FinancialDataClient, TenantRepository
from src.service.scoring.settings import ScoringSettings, scoring_settings
from src.service.verification import IncomeEstimate, estimate_income_from_transactions

logger = structlog.get_logger(__name__)

IDENTITY = "identity"
INCOME = "income"
BANK_ACCOUNT = "bank_account"


@dataclass
class CheckOutcome:
    """
    Result of one verification check.

    ``updates`` holds the tenant fields to persist when the check succeeds.
    """
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    updates: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        result = {"success": self.success, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    message: str
    checks: Dict[str, CheckOutcome]


def split_name(full_name: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """First token is the first name, the rest is the last name."""
    parts = (full_name or "").split()
    if not parts:
        return None, None
    return parts[0], " ".join(parts[1:]) or None


class VerificationService:
    """
    Application service for tenant bank verification.

    The three checks (identity, bank account, income) share one access
    token but nothing else. They run concurrently and fail independently:
    a failed check becomes ``{success: false, message}`` and the others
    are still persisted.
    """

    def __init__(
        self,
        tenant_repository: TenantRepository,
        financial_client: FinancialDataClient,
        settings: ScoringSettings = scoring_settings,
    ):
        self._tenants = tenant_repository
        self._financial = financial_client
        self._settings = settings

    async def _get_tenant(self, tenant_id: str) -> Tenant:
        tenant = await self._tenants.get(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        return tenant

    async def create_link_token(self, tenant_id: str) -> str:
        await self._get_tenant(tenant_id)
        token = await self._financial.create_link_token(tenant_id)
        logger.info("link_token_created", tenant_id=tenant_id)
        return token

    async def create_sandbox_token(self) -> str:
        return await self._financial.create_sandbox_public_token()

    async def complete(self, tenant_id: str, public_token: str) -> VerificationResult:
        """
        Finish the bank-link flow and run every verification check.

        Returns:
            Overall success (true when at least one check passed) and the
            per-check outcomes
        """
        tenant = await self._get_tenant(tenant_id)
        log = logger.bind(tenant_id=tenant_id)

        access = await self._financial.exchange_public_token(public_token)
        tenant.plaid_access_token = access.access_token
        tenant.plaid_item_id = access.item_id

        identity, bank_account, income = await asyncio.gather(
            self._run_check(IDENTITY, self._identity_check(access.access_token)),
            self._run_check(BANK_ACCOUNT, self._bank_account_check(access.access_token)),
            self._run_check(INCOME, self._income_check(access.access_token)),
        )
        checks = {IDENTITY: identity, INCOME: income, BANK_ACCOUNT: bank_account}

        for outcome in checks.values():
            if outcome.success:
                for name, value in outcome.updates.items():
                    setattr(tenant, name, value)

        passed = [name for name, outcome in checks.items() if outcome.success]
        if passed:
            tenant.plaid_verified = True
            tenant.plaid_verified_at = datetime.utcnow()
            tenant.verified = True

        await self._tenants.save(tenant)
        log.info("verification_completed", passed=passed)

        if len(passed) == len(checks):
            message = "All verifications completed successfully"
        elif passed:
            message = "Some verifications failed"
        else:
            message = "All verifications failed"

        return VerificationResult(success=bool(passed), message=message, checks=checks)

    async def get_status(self, tenant_id: str) -> Tenant:
        return await self._get_tenant(tenant_id)

    async def refresh_income(self, tenant: Tenant) -> IncomeEstimate:
        """
        Re-run the income check for a linked tenant and persist the result.

        Raises:
            ExternalServiceException: If the provider call fails
        """
        estimate, _ = await self._estimate_income(tenant.plaid_access_token)
        for name, value in self._income_updates(estimate).items():
            setattr(tenant, name, value)
        await self._tenants.save(tenant)
        return estimate

    async def fetch_scoring_inputs(
        self,
        access_token: str,
    ) -> Tuple[List[BankAccount], List[BankTransaction]]:
        """Accounts with balances and owners, plus the lookback window's transactions."""
        end, start = self._window()
        identity, balances, transactions = await asyncio.gather(
            self._financial.get_identity(access_token),
            self._financial.get_balances(access_token),
            self._financial.get_transactions(access_token, start, end),
        )
        owners = {a.account_id: a.owners for a in identity.accounts}
        accounts = [
            replace(account, owners=owners.get(account.account_id, account.owners))
            for account in balances
        ]
        return accounts, transactions

    # =========================================================================
    # Checks
    # =========================================================================

    async def _run_check(self, name: str, check: Awaitable[CheckOutcome]) -> CheckOutcome:
        try:
            outcome = await check
        except Exception as e:
            message = getattr(e, "message", None) or str(e) or type(e).__name__
            logger.warning(f"{name}_verification_failed", error=message)
            outcome = CheckOutcome(success=False, message=message)
        record_verification_check(name, outcome.success)
        return outcome

    async def _identity_check(self, access_token: str) -> CheckOutcome:
        identity = await self._financial.get_identity(access_token)
        owner = identity.first_owner
        if owner is None:
            return CheckOutcome(success=False, message="No account owner information available")

        first_name, last_name = split_name(owner.full_name)
        address = owner.primary_address
        formatted_address = address.format() if address else None
        data = {
            "full_name": owner.full_name,
            "first_name": first_name,
            "last_name": last_name,
            "email": owner.primary_email,
            "phone": owner.primary_phone,
            "address": formatted_address,
        }
        return CheckOutcome(
            success=True,
            message="Identity verified",
            data=data,
            updates={
                "identity_verified": True,
                "identity_verified_at": datetime.utcnow(),
                "verified_first_name": first_name,
                "verified_last_name": last_name,
                "verified_email": owner.primary_email,
                "verified_phone": owner.primary_phone,
                "verified_address": formatted_address,
                "plaid_institution_id": identity.institution_id,
            },
        )

    async def _bank_account_check(self, access_token: str) -> CheckOutcome:
        auth, balances, identity = await asyncio.gather(
            self._financial.get_auth(access_token),
            self._financial.get_balances(access_token),
            self._financial.get_identity(access_token),
        )
        balance_by_id = {a.account_id: a for a in balances}
        owner_by_id = {
            a.account_id: a.owners[0].full_name
            for a in identity.accounts
            if a.owners
        }

        accounts = []
        for account in auth.accounts:
            live = balance_by_id.get(account.account_id, account)
            numbers = auth.numbers.get(account.account_id)
            accounts.append({
                "account_id": account.account_id,
                "name": account.name,
                "official_name": account.official_name,
                "mask": account.mask,
                "type": account.type,
                "subtype": account.subtype,
                "balances": {
                    "available": live.balance_available,
                    "current": live.balance_current,
                    "iso_currency_code": live.iso_currency_code,
                },
                "owner_name": owner_by_id.get(account.account_id),
                "routing_number": numbers.routing if numbers else None,
                "account_number_mask": numbers.account_mask if numbers else None,
            })

        if not accounts:
            return CheckOutcome(success=False, message="No bank accounts found")

        return CheckOutcome(
            success=True,
            message="Bank account verified",
            data={"accounts": accounts},
            updates={
                "bank_accounts": accounts,
                "bank_account_verified": True,
                "bank_account_verified_at": datetime.utcnow(),
            },
        )

    async def _estimate_income(self, access_token: str) -> Tuple[IncomeEstimate, List[BankTransaction]]:
        end, start = self._window()
        transactions = await self._financial.get_transactions(access_token, start, end)
        return estimate_income_from_transactions(transactions, self._settings)

    @staticmethod
    def _income_updates(estimate: IncomeEstimate) -> Dict[str, Any]:
        annual = round(estimate.annual, 2)
        return {
            "verified_income": annual,
            "income": annual,
            "income_verified_at": datetime.utcnow(),
        }

    async def _income_check(self, access_token: str) -> CheckOutcome:
        estimate, deposits = await self._estimate_income(access_token)
        return CheckOutcome(
            success=True,
            message="Income verified",
            data={
                "income": estimate.to_dict(),
                "deposits": [
                    {
                        "date": d.date.isoformat(),
                        "amount": abs(d.amount),
                        "description": d.name,
                        "category": d.primary_category or (d.category[0] if d.category else None),
                    }
                    for d in deposits
                ],
            },
            updates=self._income_updates(estimate),
        )

    def _window(self) -> Tuple[date, date]:
        end = date.today()
        return end, end - timedelta(days=self._settings.transaction_lookback_days)
