"""Bank data entities returned by the financial-data provider."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ContactEntry:
    """An email address or phone number attached to an account owner."""

    data: str
    primary: bool = False
    type: Optional[str] = None


@dataclass(frozen=True)
class PostalAddress:
    """A postal address attached to an account owner."""

    street: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    primary: bool = False

    def format(self) -> str:
        """Render as ``street, city, region postal_code``."""
        return f"{self.street or ''}, {self.city or ''}, {self.region or ''} {self.postal_code or ''}".strip()


@dataclass(frozen=True)
class AccountOwner:
    """
    Identity information the bank holds for an account holder.

    A list is None when the provider omitted it entirely and empty when the
    provider reported it with no entries.
    """

    names: Optional[List[str]] = None
    emails: Optional[List[ContactEntry]] = None
    phone_numbers: Optional[List[ContactEntry]] = None
    addresses: Optional[List[PostalAddress]] = None

    @property
    def full_name(self) -> Optional[str]:
        return self.names[0] if self.names else None

    @property
    def primary_email(self) -> Optional[str]:
        return _pick_primary(self.emails or [])

    @property
    def primary_phone(self) -> Optional[str]:
        return _pick_primary(self.phone_numbers or [])

    @property
    def primary_address(self) -> Optional[PostalAddress]:
        for address in self.addresses or []:
            if address.primary:
                return address
        return self.addresses[0] if self.addresses else None


def _pick_primary(entries: List[ContactEntry]) -> Optional[str]:
    for entry in entries:
        if entry.primary:
            return entry.data
    return entries[0].data if entries else None


@dataclass(frozen=True)
class BankAccount:
    """
    A depository or credit account linked through the provider.

    Balances are reported in the account's currency units (not cents).
    """

    account_id: str
    name: str
    type: str
    subtype: Optional[str] = None
    mask: Optional[str] = None
    official_name: Optional[str] = None
    persistent_account_id: Optional[str] = None
    balance_available: Optional[float] = None
    balance_current: Optional[float] = None
    iso_currency_code: Optional[str] = None
    owners: List[AccountOwner] = field(default_factory=list)


@dataclass(frozen=True)
class AchNumbers:
    """Routing and account numbers for an account, from the auth product."""

    account_id: str
    routing: Optional[str] = None
    account: Optional[str] = None

    @property
    def account_mask(self) -> Optional[str]:
        return self.account[-4:] if self.account else None


@dataclass(frozen=True)
class BankTransaction:
    """
    A single posted transaction.

    The provider reports money leaving the account as a positive amount
    and money entering it (deposits, payroll) as a negative amount.
    """

    transaction_id: str
    account_id: str
    date: date
    amount: float
    name: str = ""
    category: List[str] = field(default_factory=list)
    primary_category: Optional[str] = None

    @property
    def is_inflow(self) -> bool:
        return self.amount < 0


@dataclass(frozen=True)
class ItemAccess:
    """Credentials obtained by exchanging a link public token."""

    access_token: str
    item_id: str


@dataclass(frozen=True)
class IdentitySnapshot:
    """Accounts with their owners, as returned by the identity product."""

    item_id: Optional[str]
    institution_id: Optional[str]
    accounts: List[BankAccount] = field(default_factory=list)

    @property
    def first_owner(self) -> Optional[AccountOwner]:
        if not self.accounts or not self.accounts[0].owners:
            return None
        return self.accounts[0].owners[0]


@dataclass(frozen=True)
class AuthSnapshot:
    """Accounts plus their ACH numbers, keyed by account id."""

    accounts: List[BankAccount] = field(default_factory=list)
    numbers: Dict[str, AchNumbers] = field(default_factory=dict)
