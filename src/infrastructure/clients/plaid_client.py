"""HTTP implementation of FinancialDataClient against Plaid."""

from datetime import date
from typing import Any, Dict, List, Optional

import structlog

from src.core.config import settings
from src.domain.entities import (
    AccountOwner,
    AchNumbers,
    AuthSnapshot,
    BankAccount,
    BankTransaction,
    ContactEntry,
    IdentitySnapshot,
    ItemAccess,
    PostalAddress,
)
from src.domain.interfaces import FinancialDataClient

from .base import ProviderHttpClient

logger = structlog.get_logger(__name__)

SANDBOX_INSTITUTION_ID = "ins_109508"
TRANSACTIONS_PAGE_SIZE = 500


class PlaidClient(ProviderHttpClient, FinancialDataClient):
    """
    HTTP client for the Plaid API.

    Every call is a JSON POST carrying the client id and secret in the body.
    """

    provider = "plaid"

    def __init__(
        self,
        base_url: str | None = None,
        client_id: str | None = None,
        secret: str | None = None,
        timeout: float | None = None,
        max_retries: int = 2,
    ):
        super().__init__(
            base_url=base_url or settings.plaid_env_url,
            timeout=timeout or settings.plaid_timeout,
            max_retries=max_retries,
        )
        self._client_id = client_id or settings.plaid_client_id
        self._secret = secret or settings.plaid_secret

    async def _post(self, path: str, payload: Dict[str, Any], context: str) -> Dict[str, Any]:
        body = {"client_id": self._client_id, "secret": self._secret, **payload}
        response = await self._request("POST", path, json=body)
        self._raise_for_status(response, context)
        return response.json()

    async def create_link_token(self, user_id: str) -> str:
        data = await self._post(
            "/link/token/create",
            {
                "user": {"client_user_id": user_id},
                "client_name": settings.plaid_client_name,
                "products": ["auth", "identity", "transactions"],
                "country_codes": settings.plaid_country_code_list,
                "language": "en",
            },
            "Failed to create link token",
        )
        return data["link_token"]

    async def exchange_public_token(self, public_token: str) -> ItemAccess:
        data = await self._post(
            "/item/public_token/exchange",
            {"public_token": public_token},
            "Failed to exchange public token",
        )
        logger.info("plaid_token_exchanged", item_id=data.get("item_id"))
        return ItemAccess(access_token=data["access_token"], item_id=data["item_id"])

    async def create_sandbox_public_token(self) -> str:
        data = await self._post(
            "/sandbox/public_token/create",
            {
                "institution_id": SANDBOX_INSTITUTION_ID,
                "initial_products": ["auth", "identity", "transactions"],
            },
            "Failed to create sandbox token",
        )
        return data["public_token"]

    async def get_identity(self, access_token: str) -> IdentitySnapshot:
        data = await self._post(
            "/identity/get",
            {"access_token": access_token},
            "Failed to fetch identity",
        )
        item = data.get("item") or {}
        return IdentitySnapshot(
            item_id=item.get("item_id"),
            institution_id=item.get("institution_id"),
            accounts=[self._parse_account(a) for a in data.get("accounts", [])],
        )

    async def get_auth(self, access_token: str) -> AuthSnapshot:
        data = await self._post(
            "/auth/get",
            {"access_token": access_token},
            "Failed to fetch account numbers",
        )
        numbers = {}
        for ach in (data.get("numbers") or {}).get("ach", []):
            numbers[ach["account_id"]] = AchNumbers(
                account_id=ach["account_id"],
                routing=ach.get("routing"),
                account=ach.get("account"),
            )
        return AuthSnapshot(
            accounts=[self._parse_account(a) for a in data.get("accounts", [])],
            numbers=numbers,
        )

    async def get_balances(self, access_token: str) -> List[BankAccount]:
        data = await self._post(
            "/accounts/balance/get",
            {"access_token": access_token},
            "Failed to fetch balances",
        )
        return [self._parse_account(a) for a in data.get("accounts", [])]

    async def get_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
    ) -> List[BankTransaction]:
        """Fetch every page of transactions in the window."""
        transactions: List[BankTransaction] = []
        offset = 0

        while True:
            data = await self._post(
                "/transactions/get",
                {
                    "access_token": access_token,
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                    "options": {
                        "count": TRANSACTIONS_PAGE_SIZE,
                        "offset": offset,
                        "include_personal_finance_category": True,
                    },
                },
                "Failed to fetch transactions",
            )
            page = data.get("transactions", [])
            transactions.extend(self._parse_transaction(t) for t in page)
            offset += len(page)

            if not page or offset >= data.get("total_transactions", offset):
                break

        return transactions

    def _parse_account(self, item: Dict[str, Any]) -> BankAccount:
        balances = item.get("balances") or {}
        return BankAccount(
            account_id=item["account_id"],
            name=item.get("name", ""),
            type=item.get("type", ""),
            subtype=item.get("subtype"),
            mask=item.get("mask"),
            official_name=item.get("official_name"),
            persistent_account_id=item.get("persistent_account_id"),
            balance_available=balances.get("available"),
            balance_current=balances.get("current"),
            iso_currency_code=balances.get("iso_currency_code"),
            owners=[self._parse_owner(o) for o in item.get("owners", [])],
        )

    def _parse_owner(self, item: Dict[str, Any]) -> AccountOwner:
        # A key the provider omits stays None; an empty list stays empty
        addresses = None
        if "addresses" in item:
            addresses = []
            for entry in item["addresses"] or []:
                data = entry.get("data") or {}
                addresses.append(
                    PostalAddress(
                        street=data.get("street"),
                        city=data.get("city"),
                        region=data.get("region"),
                        postal_code=data.get("postal_code"),
                        country=data.get("country"),
                        primary=bool(entry.get("primary")),
                    )
                )
        return AccountOwner(
            names=list(item["names"] or []) if "names" in item else None,
            emails=self._parse_contacts(item, "emails"),
            phone_numbers=self._parse_contacts(item, "phone_numbers"),
            addresses=addresses,
        )

    @classmethod
    def _parse_contacts(cls, item: Dict[str, Any], key: str) -> Optional[List[ContactEntry]]:
        if key not in item:
            return None
        return [cls._parse_contact(entry) for entry in item[key] or []]

    @staticmethod
    def _parse_contact(item: Dict[str, Any]) -> ContactEntry:
        return ContactEntry(
            data=item.get("data", ""),
            primary=bool(item.get("primary")),
            type=item.get("type"),
        )

    @staticmethod
    def _parse_transaction(item: Dict[str, Any]) -> BankTransaction:
        personal_finance = item.get("personal_finance_category") or {}
        return BankTransaction(
            transaction_id=item.get("transaction_id", ""),
            account_id=item.get("account_id", ""),
            date=date.fromisoformat(item["date"]),
            amount=float(item.get("amount", 0.0)),
            name=item.get("name") or "",
            category=list(item.get("category") or []),
            primary_category=personal_finance.get("primary"),
        )
