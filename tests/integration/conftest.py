"""
Fixtures for integration tests.

Provides:
- Test client for the FastAPI app
- In-memory SQLite database shared by the app and the seeding helpers
- Mock auth, storage, bank-data, email and credit bureau clients
- Seeded tenants, landlords and listings with ready-made auth headers
"""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import AsyncGenerator, Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.core.dependencies import (
    get_auth_client,
    get_credit_client,
    get_email_client,
    get_financial_client,
    get_storage_client,
)
from src.domain.entities import (
    AccountOwner,
    AchNumbers,
    AuthSession,
    AuthSnapshot,
    AuthUser,
    BankAccount,
    BankTransaction,
    ContactEntry,
    IdentitySnapshot,
    ItemAccess,
    Landlord,
    PostalAddress,
    Property,
    Tenant,
)
from src.domain.exceptions import (
    AuthenticationException,
    ConflictException,
    DocumentNotFoundException,
    ExternalServiceException,
    ExternalServiceTimeoutException,
)
from src.domain.interfaces import (
    AuthProviderClient,
    CreditBureauClient,
    EmailClient,
    EmailResult,
    FinancialDataClient,
    StorageClient,
)
from src.infrastructure.database import Base, get_db_session
from src.infrastructure.repositories import (
    PostgresLandlordRepository,
    PostgresPropertyRepository,
    PostgresTenantRepository,
)


STORAGE_URL = "https://storage.test/storage/v1/object"
DEFAULT_PASSWORD = "Sunny2026"


# =============================================================================
# Test Data
# =============================================================================

def bank_owner() -> AccountOwner:
    return AccountOwner(
        names=["Maria Gonzalez"],
        emails=[ContactEntry(data="maria.gonzalez@example.com", primary=True, type="primary")],
        phone_numbers=[ContactEntry(data="4165550199", primary=True, type="mobile")],
        addresses=[
            PostalAddress(
                street="100 King St W",
                city="Toronto",
                region="ON",
                postal_code="M5X 1A9",
                country="CA",
                primary=True,
            )
        ],
    )


def default_accounts() -> List[BankAccount]:
    """Checking, savings, credit card and student loan with a single owner."""
    return [
        BankAccount(
            account_id="acc-checking",
            name="Everyday Chequing",
            type="depository",
            subtype="checking",
            mask="0000",
            official_name="Everyday Chequing Account",
            balance_available=4200.0,
            balance_current=4200.0,
            iso_currency_code="CAD",
            owners=[bank_owner()],
        ),
        BankAccount(
            account_id="acc-savings",
            name="High Interest Savings",
            type="depository",
            subtype="savings",
            mask="1111",
            balance_available=9000.0,
            balance_current=9000.0,
            iso_currency_code="CAD",
            owners=[bank_owner()],
        ),
        BankAccount(
            account_id="acc-credit",
            name="Rewards Visa",
            type="credit",
            subtype="credit card",
            mask="3333",
            balance_available=4600.0,
            balance_current=400.0,
            iso_currency_code="CAD",
        ),
        BankAccount(
            account_id="acc-loan",
            name="Student Loan",
            type="loan",
            subtype="student",
            mask="4444",
            balance_current=14000.0,
            iso_currency_code="CAD",
        ),
    ]


def default_transactions() -> List[BankTransaction]:
    """Six bi-weekly paychecks of 2,500, ten bill payments, everyday spending."""
    today = date.today()
    txns = [
        BankTransaction(
            transaction_id=f"pay-{i}",
            account_id="acc-checking",
            date=today - timedelta(days=3 + i * 14),
            amount=-2500.0,
            name="ACME CORP PAYROLL",
            category=["Transfer", "Payroll"],
            primary_category="INCOME",
        )
        for i in range(6)
    ]
    txns += [
        BankTransaction(
            transaction_id=f"bill-{i}",
            account_id="acc-checking",
            date=today - timedelta(days=5 + i * 8),
            amount=150.0,
            name="TORONTO HYDRO",
            category=["Service", "Utilities"],
            primary_category="PAYMENT",
        )
        for i in range(10)
    ]
    txns += [
        BankTransaction(
            transaction_id=f"food-{i}",
            account_id="acc-checking",
            date=today - timedelta(days=i * 6),
            amount=42.75,
            name="LOBLAWS",
            category=["Shops", "Supermarkets and Groceries"],
            primary_category="FOOD_AND_DRINK",
        )
        for i in range(12)
    ]
    return txns


@dataclass(frozen=True)
class SeededUser:
    """A user known to both the mock auth provider and the database."""

    id: str
    email: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}", "x-supabase-id": self.id}


# =============================================================================
# Mock Clients
# =============================================================================

class MockAuthClient(AuthProviderClient):
    """In-memory auth provider: accounts by email, users by bearer token."""

    def __init__(self):
        self.accounts: Dict[str, Tuple[str, AuthUser]] = {}
        self.tokens: Dict[str, AuthUser] = {}
        self.password_resets: List[Tuple[str, str]] = []
        self.signed_out: List[str] = []

    def register(
        self,
        email: str,
        password: str = DEFAULT_PASSWORD,
        user_id: Optional[str] = None,
    ) -> Tuple[AuthUser, str]:
        user = AuthUser(id=user_id or str(uuid4()), email=email)
        self.accounts[email] = (password, user)
        return user, self.issue_token(user)

    def issue_token(self, user: AuthUser) -> str:
        token = f"token-{uuid4().hex}"
        self.tokens[token] = user
        return token

    async def sign_up(self, email: str, password: str, metadata: dict) -> AuthUser:
        if email in self.accounts:
            raise ConflictException("User already registered", code="USER_EXISTS")
        user, _ = self.register(email, password)
        return user

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthenticationException("Invalid email or password")
        user = account[1]
        return AuthSession(access_token=self.issue_token(user), user=user)

    async def get_user(self, access_token: str) -> AuthUser:
        user = self.tokens.get(access_token)
        if user is None:
            raise AuthenticationException("Invalid or expired token")
        return user

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        self.password_resets.append((email, redirect_to))

    async def sign_out(self, access_token: str) -> None:
        self.tokens.pop(access_token, None)
        self.signed_out.append(access_token)


class MockStorageClient(StorageClient):
    """In-memory object storage keyed by (bucket, path)."""

    def __init__(self):
        self.objects: Dict[Tuple[str, str], Tuple[bytes, str]] = {}
        self.removed: List[Tuple[str, str]] = []

    def put(self, bucket: str, path: str, content: bytes, content_type: str = "application/pdf") -> str:
        self.objects[(bucket, path)] = (content, content_type)
        return self.public_url(bucket, path)

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = True,
    ) -> str:
        self.objects[(bucket, path)] = (content, content_type)
        return path

    async def download(self, bucket: str, path: str) -> bytes:
        if (bucket, path) not in self.objects:
            raise DocumentNotFoundException(path)
        return self.objects[(bucket, path)][0]

    async def remove(self, bucket: str, paths: List[str]) -> None:
        for path in paths:
            self.objects.pop((bucket, path), None)
            self.removed.append((bucket, path))

    def public_url(self, bucket: str, path: str) -> str:
        return f"{STORAGE_URL}/public/{bucket}/{path}"

    async def create_signed_url(self, bucket: str, path: str, expires_in: int) -> str:
        if (bucket, path) not in self.objects:
            raise DocumentNotFoundException(path)
        return f"{STORAGE_URL}/sign/{bucket}/{path}?token=signed&expires_in={expires_in}"


class MockFinancialClient(FinancialDataClient):
    """
    Bank-data aggregator returning fixed accounts and transactions.

    Add a method name to ``failing`` to make that call raise a provider error.
    """

    ACCESS_TOKEN = "access-sandbox-test"
    ITEM_ID = "item-test"

    def __init__(
        self,
        accounts: Optional[List[BankAccount]] = None,
        transactions: Optional[List[BankTransaction]] = None,
        failing: Iterable[str] = (),
    ):
        self.accounts = default_accounts() if accounts is None else accounts
        self.transactions = default_transactions() if transactions is None else transactions
        self.failing = set(failing)
        self.exchanged: List[str] = []
        self.calls: List[str] = []

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failing:
            raise ExternalServiceException("plaid", f"{name} is unavailable", status_code=400)

    def _without_owners(self) -> List[BankAccount]:
        return [replace(account, owners=[]) for account in self.accounts]

    async def create_link_token(self, user_id: str) -> str:
        self._call("create_link_token")
        return f"link-sandbox-{user_id}"

    async def exchange_public_token(self, public_token: str) -> ItemAccess:
        self._call("exchange_public_token")
        self.exchanged.append(public_token)
        return ItemAccess(access_token=self.ACCESS_TOKEN, item_id=self.ITEM_ID)

    async def create_sandbox_public_token(self) -> str:
        self._call("create_sandbox_public_token")
        return "public-sandbox-test"

    async def get_identity(self, access_token: str) -> IdentitySnapshot:
        self._call("get_identity")
        return IdentitySnapshot(item_id=self.ITEM_ID, institution_id="ins_109508", accounts=self.accounts)

    async def get_auth(self, access_token: str) -> AuthSnapshot:
        self._call("get_auth")
        return AuthSnapshot(
            accounts=self._without_owners(),
            numbers={
                "acc-checking": AchNumbers(
                    account_id="acc-checking",
                    routing="011401533",
                    account="1111222233330000",
                ),
            },
        )

    async def get_balances(self, access_token: str) -> List[BankAccount]:
        self._call("get_balances")
        return self._without_owners()

    async def get_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
    ) -> List[BankTransaction]:
        self._call("get_transactions")
        return [t for t in self.transactions if start_date <= t.date <= end_date]


class MockEmailClient(EmailClient):
    """Records welcome emails instead of sending them."""

    def __init__(self, success: bool = True):
        self.success = success
        self.sent: List[Dict[str, str]] = []

    async def send_newsletter_welcome(self, name: str, email: str, download_url: str) -> EmailResult:
        if not self.success:
            return EmailResult(success=False, message="Email service not configured")
        self.sent.append({"name": name, "email": email, "download_url": download_url})
        return EmailResult(success=True, message="Email sent successfully", message_id=f"msg-{len(self.sent)}")


class MockCreditClient(CreditBureauClient):
    """Returns a fixed credit score, or times out when ``fail_mode`` is set."""

    def __init__(self, score: int = 742, fail_mode: bool = False):
        self.score = score
        self.fail_mode = fail_mode
        self.requests: List[dict] = []

    async def get_credit_score(
        self,
        ssn: str,
        date_of_birth: date,
        address: str,
        first_name: str,
        last_name: str,
    ) -> int:
        if self.fail_mode:
            raise ExternalServiceTimeoutException("equifax")
        self.requests.append({"ssn": ssn, "first_name": first_name, "last_name": last_name})
        return self.score


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def mock_auth_client() -> MockAuthClient:
    return MockAuthClient()


@pytest.fixture
def mock_storage_client() -> MockStorageClient:
    return MockStorageClient()


@pytest.fixture
def mock_financial_client() -> MockFinancialClient:
    return MockFinancialClient()


@pytest.fixture
def mock_email_client() -> MockEmailClient:
    return MockEmailClient()


@pytest.fixture
def mock_credit_client() -> MockCreditClient:
    return MockCreditClient()


# =============================================================================
# App Client Fixture
# =============================================================================

@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    mock_auth_client: MockAuthClient,
    mock_storage_client: MockStorageClient,
    mock_financial_client: MockFinancialClient,
    mock_email_client: MockEmailClient,
    mock_credit_client: MockCreditClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Runs every request in the shared in-memory SQLite session, committing
      on success and rolling back on error like the real unit of work
    - Replaces every external provider with an in-memory mock
    """
    async def override_get_db_session():
        try:
            yield test_session
            await test_session.commit()
        except Exception:
            await test_session.rollback()
            raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_auth_client] = lambda: mock_auth_client
    app.dependency_overrides[get_storage_client] = lambda: mock_storage_client
    app.dependency_overrides[get_financial_client] = lambda: mock_financial_client
    app.dependency_overrides[get_email_client] = lambda: mock_email_client
    app.dependency_overrides[get_credit_client] = lambda: mock_credit_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Seeding Helpers
# =============================================================================

async def seed_tenant(
    session: AsyncSession,
    auth: MockAuthClient,
    email: str,
    first_name: str = "Maria",
    last_name: str = "Gonzalez",
    **fields,
) -> SeededUser:
    user, token = auth.register(email)
    await PostgresTenantRepository(session).add(
        Tenant(supabase_id=user.id, first_name=first_name, last_name=last_name, email=email, **fields)
    )
    await session.commit()
    return SeededUser(id=user.id, email=email, token=token)


async def seed_landlord(
    session: AsyncSession,
    auth: MockAuthClient,
    email: str,
    first_name: str = "Daniel",
    last_name: str = "Okafor",
    **fields,
) -> SeededUser:
    user, token = auth.register(email)
    await PostgresLandlordRepository(session).add(
        Landlord(supabase_id=user.id, first_name=first_name, last_name=last_name, email=email, **fields)
    )
    await session.commit()
    return SeededUser(id=user.id, email=email, token=token)


async def seed_property(session: AsyncSession, landlord_id: str, **overrides) -> Property:
    values = dict(
        address="221 Queen St W",
        city="Toronto",
        state="ON",
        postal_code="M5V 2T6",
        country="Canada",
        price=1800.0,
        property_type="House",
        style="Detached",
        available_date=date.today() + timedelta(days=30),
        bedrooms=2,
        bathrooms=1.0,
        heating_and_ac="Both",
        laundry_type="In-Unit",
    )
    values.update(overrides)
    property = Property(landlord_id=landlord_id, **values)
    await PostgresPropertyRepository(session).add(property)
    await session.commit()
    return property


def property_payload(**overrides) -> dict:
    """Request body for POST /api/landlord/properties."""
    payload = {
        "address": "48 Bloor St E",
        "city": "Toronto",
        "state": "ON",
        "postal_code": "M4W 1A8",
        "country": "Canada",
        "price": 2400,
        "property_type": "Apartment",
        "style": "Detached",
        "available_date": (date.today() + timedelta(days=45)).isoformat(),
        "bedrooms": 2,
        "bathrooms": 1,
        "heating_and_ac": "Both",
        "laundry_type": "In-Unit",
        "floor_number": 12,
        "unit_number": "1204",
        "has_parking": True,
        "parking_spaces": 1,
        "description": "Bright corner unit near the subway.",
    }
    payload.update(overrides)
    return payload


def stored_documents(storage: MockStorageClient, tenant_id: str) -> Dict[str, str]:
    """Put the three required documents in storage and return their public URLs."""
    return {
        "id": storage.put("application-documents", f"{tenant_id}/id-1.pdf", b"%PDF-1.4 id"),
        "bank_statement": storage.put(
            "application-documents", f"{tenant_id}/bank_statement-1.pdf", b"%PDF-1.4 statement"
        ),
        "form410": storage.put("application-documents", f"{tenant_id}/form410-1.png", b"\x89PNG form", "image/png"),
    }


# =============================================================================
# Seeded Data Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def tenant(test_session: AsyncSession, mock_auth_client: MockAuthClient) -> SeededUser:
    """An unverified tenant."""
    return await seed_tenant(test_session, mock_auth_client, "maria@example.com")


@pytest_asyncio.fixture
async def verified_tenant(test_session: AsyncSession, mock_auth_client: MockAuthClient) -> SeededUser:
    """A tenant who completed verification and may apply to listings."""
    return await seed_tenant(
        test_session,
        mock_auth_client,
        "verified@example.com",
        first_name="Lucia",
        last_name="Fernandez",
        verified=True,
    )


@pytest_asyncio.fixture
async def linked_tenant(test_session: AsyncSession, mock_auth_client: MockAuthClient) -> SeededUser:
    """A verified tenant with a linked bank item, ready to be scored."""
    return await seed_tenant(
        test_session,
        mock_auth_client,
        "linked@example.com",
        first_name="Sofia",
        last_name="Ramirez",
        verified=True,
        plaid_verified=True,
        plaid_access_token=MockFinancialClient.ACCESS_TOKEN,
        plaid_item_id=MockFinancialClient.ITEM_ID,
    )


@pytest_asyncio.fixture
async def other_tenant(test_session: AsyncSession, mock_auth_client: MockAuthClient) -> SeededUser:
    return await seed_tenant(
        test_session,
        mock_auth_client,
        "other.tenant@example.com",
        first_name="Kenji",
        last_name="Watanabe",
        verified=True,
    )


@pytest_asyncio.fixture
async def landlord(test_session: AsyncSession, mock_auth_client: MockAuthClient) -> SeededUser:
    return await seed_landlord(
        test_session,
        mock_auth_client,
        "daniel@example.com",
        phone="4165550123",
        company_name="Okafor Rentals",
    )


@pytest_asyncio.fixture
async def other_landlord(test_session: AsyncSession, mock_auth_client: MockAuthClient) -> SeededUser:
    return await seed_landlord(
        test_session,
        mock_auth_client,
        "priya@example.com",
        first_name="Priya",
        last_name="Shah",
    )


@pytest_asyncio.fixture
async def listing(test_session: AsyncSession, landlord: SeededUser) -> Property:
    """A 1,800/month house owned by ``landlord``."""
    return await seed_property(test_session, landlord.id)
