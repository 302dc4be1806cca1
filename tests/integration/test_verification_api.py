"""
Integration tests for tenant bank verification.

These tests verify:
1. The link-token and sandbox public-token endpoints
2. POST /api/tenant/verify/plaid/complete with all, some and no checks
   passing
3. GET /api/tenant/verify/status, which never exposes the access token
"""

import pytest
from httpx import AsyncClient

from tests.integration.conftest import MockFinancialClient, SeededUser

COMPLETE = "/api/tenant/verify/plaid/complete"
STATUS = "/api/tenant/verify/status"


class TestLinkFlow:
    @pytest.mark.asyncio
    async def test_create_link_token(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.post("/api/tenant/verify/plaid/init", headers=tenant.headers)

        assert response.status_code == 200
        assert response.json() == {"link_token": f"link-sandbox-{tenant.id}"}

    @pytest.mark.asyncio
    async def test_link_token_requires_tenant(
        self,
        client: AsyncClient,
        mock_financial_client: MockFinancialClient,
        landlord: SeededUser,
    ):
        response = await client.post("/api/tenant/verify/plaid/init", headers=landlord.headers)

        assert response.status_code == 404
        assert response.json()["error"] == "TENANT_NOT_FOUND"
        assert mock_financial_client.calls == []

    @pytest.mark.asyncio
    async def test_sandbox_public_token(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.post("/api/tenant/verify/plaid/sandbox-token", headers=tenant.headers)

        assert response.status_code == 200
        assert response.json() == {"public_token": "public-sandbox-test"}

    @pytest.mark.asyncio
    async def test_provider_error_is_bad_gateway(
        self,
        client: AsyncClient,
        mock_financial_client: MockFinancialClient,
        tenant: SeededUser,
    ):
        mock_financial_client.failing.add("create_link_token")

        response = await client.post("/api/tenant/verify/plaid/init", headers=tenant.headers)

        assert response.status_code == 502
        assert response.json()["error"] == "PLAID_ERROR"


class TestCompleteVerification:
    """Tests for POST /api/tenant/verify/plaid/complete."""

    @pytest.mark.asyncio
    async def test_all_checks_pass(
        self,
        client: AsyncClient,
        mock_financial_client: MockFinancialClient,
        tenant: SeededUser,
    ):
        response = await client.post(
            COMPLETE,
            json={"public_token": "public-sandbox-test"},
            headers=tenant.headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "All verifications completed successfully"
        assert sorted(data["verifications"]) == ["bank_account", "identity", "income"]
        assert mock_financial_client.exchanged == ["public-sandbox-test"]

        identity = data["verifications"]["identity"]["data"]
        assert identity["first_name"] == "Maria"
        assert identity["last_name"] == "Gonzalez"

        income = data["verifications"]["income"]["data"]
        assert income["income"] == {
            "monthly": 5425.0,
            "annual": 65100.0,
            "frequency": "bi-weekly",
            "confidence": "high",
        }
        assert len(income["deposits"]) == 6
        assert income["deposits"][0]["amount"] == 2500.0

        accounts = data["verifications"]["bank_account"]["data"]["accounts"]
        checking = next(a for a in accounts if a["account_id"] == "acc-checking")
        assert checking["routing_number"] == "011401533"
        assert checking["owner_name"] == "Maria Gonzalez"

    @pytest.mark.asyncio
    async def test_results_are_persisted(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        await client.post(COMPLETE, json={"public_token": "public-sandbox-test"}, headers=tenant.headers)

        response = await client.get(STATUS, headers=tenant.headers)

        assert response.status_code == 200
        data = response.json()
        assert data["verified"] is True
        assert data["plaid_verified"] is True
        assert data["identity_verified"] is True
        assert data["bank_account_verified"] is True
        assert data["income_verified"] is True
        assert data["verified_income"] == 65100.0
        assert data["verified_identity"]["first_name"] == "Maria"
        assert data["plaid_item"] == {
            "item_id": MockFinancialClient.ITEM_ID,
            "institution_id": "ins_109508",
            "institution_name": None,
        }
        assert len(data["bank_accounts"]) == 4
        assert MockFinancialClient.ACCESS_TOKEN not in response.text

        profile = await client.get("/api/tenant/profile", headers=tenant.headers)
        assert profile.json()["verified"] is True
        assert profile.json()["profile"]["income"] == 65100.0
        assert profile.json()["verifications"]["income"] is True

    @pytest.mark.asyncio
    async def test_one_check_fails(
        self,
        client: AsyncClient,
        mock_financial_client: MockFinancialClient,
        tenant: SeededUser,
    ):
        mock_financial_client.failing.add("get_auth")

        response = await client.post(
            COMPLETE,
            json={"public_token": "public-sandbox-test"},
            headers=tenant.headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Some verifications failed"
        assert data["verifications"]["bank_account"] == {
            "success": False,
            "message": "get_auth is unavailable",
            "data": None,
        }
        assert data["verifications"]["identity"]["success"] is True
        assert data["verifications"]["income"]["success"] is True

        status = (await client.get(STATUS, headers=tenant.headers)).json()
        assert status["verified"] is True
        assert status["bank_account_verified"] is False
        assert status["identity_verified"] is True

    @pytest.mark.asyncio
    async def test_every_check_fails(
        self,
        client: AsyncClient,
        mock_financial_client: MockFinancialClient,
        tenant: SeededUser,
    ):
        mock_financial_client.failing.update({"get_identity", "get_transactions"})

        response = await client.post(
            COMPLETE,
            json={"public_token": "public-sandbox-test"},
            headers=tenant.headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "All verifications failed"

        status = (await client.get(STATUS, headers=tenant.headers)).json()
        assert status["verified"] is False
        assert status["plaid_verified"] is False
        # The item is still linked so verification can be retried
        assert status["plaid_item"]["item_id"] == MockFinancialClient.ITEM_ID

    @pytest.mark.asyncio
    async def test_no_recurring_income(
        self,
        client: AsyncClient,
        mock_financial_client: MockFinancialClient,
        tenant: SeededUser,
    ):
        mock_financial_client.transactions = [
            t for t in mock_financial_client.transactions if t.amount > 0
        ]

        response = await client.post(
            COMPLETE,
            json={"public_token": "public-sandbox-test"},
            headers=tenant.headers,
        )

        income = response.json()["verifications"]["income"]
        assert income["success"] is True
        assert income["data"]["income"] == {
            "monthly": 0.0,
            "annual": 0.0,
            "frequency": "unknown",
            "confidence": "low",
        }
        assert income["data"]["deposits"] == []

    @pytest.mark.asyncio
    async def test_exchange_failure(
        self,
        client: AsyncClient,
        mock_financial_client: MockFinancialClient,
        tenant: SeededUser,
    ):
        mock_financial_client.failing.add("exchange_public_token")

        response = await client.post(
            COMPLETE,
            json={"public_token": "public-sandbox-test"},
            headers=tenant.headers,
        )

        assert response.status_code == 502
        status = (await client.get(STATUS, headers=tenant.headers)).json()
        assert status["plaid_item"]["item_id"] is None

    @pytest.mark.asyncio
    async def test_public_token_required(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.post(COMPLETE, json={}, headers=tenant.headers)

        assert response.status_code == 400
        assert response.json()["missing_fields"] == ["public_token"]


class TestVerificationStatus:
    @pytest.mark.asyncio
    async def test_unverified_status(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.get(STATUS, headers=tenant.headers)

        assert response.status_code == 200
        data = response.json()
        assert data["verified"] is False
        assert data["income_verified"] is False
        assert data["bank_accounts"] == []
        assert "plaid_access_token" not in data

    @pytest.mark.asyncio
    async def test_linked_tenant_hides_access_token(
        self,
        client: AsyncClient,
        linked_tenant: SeededUser,
    ):
        response = await client.get(STATUS, headers=linked_tenant.headers)

        assert response.status_code == 200
        assert response.json()["plaid_verified"] is True
        assert MockFinancialClient.ACCESS_TOKEN not in response.text
