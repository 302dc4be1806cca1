"""
Integration tests for the landlord profile endpoints.

These tests verify:
1. GET/PUT /api/landlord/profile, including owned properties and their
   applications, and the /api/profile/landlord alias
2. PUT /api/landlord/bank-info for direct deposit and e-transfer payouts
3. Profile image upload and removal
"""

import pytest
from httpx import AsyncClient

from src.domain.entities import Property
from tests.integration.conftest import STORAGE_URL, MockStorageClient, SeededUser


class TestLandlordProfile:
    """Tests for GET and PUT /api/landlord/profile."""

    @pytest.mark.asyncio
    async def test_profile_sections(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.get("/api/landlord/profile", headers=landlord.headers)

        assert response.status_code == 200
        data = response.json()
        assert data["landlord_id"] == landlord.id
        assert data["first_name"] == "Daniel"
        assert data["business_info"]["company_name"] == "Okafor Rentals"
        assert data["social_links"] == {
            "linkedin_url": None,
            "facebook_url": None,
            "instagram_url": None,
            "website_url": None,
        }
        assert data["bank_info"]["preferred_payment_method"] is None
        assert data["properties"] == []

    @pytest.mark.asyncio
    async def test_profile_lists_properties_with_applications(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        await client.post(
            "/api/tenant/applications",
            json={
                "property_id": listing.id,
                "documents": {
                    "id": f"{STORAGE_URL}/public/application-documents/x/id.pdf",
                    "bank_statement": f"{STORAGE_URL}/public/application-documents/x/bank.pdf",
                    "form410": f"{STORAGE_URL}/public/application-documents/x/form.pdf",
                },
            },
            headers=verified_tenant.headers,
        )

        response = await client.get("/api/landlord/profile", headers=landlord.headers)

        properties = response.json()["properties"]
        assert len(properties) == 1
        assert properties[0]["id"] == listing.id
        assert len(properties[0]["applications"]) == 1
        assert properties[0]["applications"][0]["tenant_id"] == verified_tenant.id

    @pytest.mark.asyncio
    async def test_update_profile(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.put(
            "/api/landlord/profile",
            json={
                "company_name": " <Okafor> Homes ",
                "years_of_experience": 12,
                "website_url": "https://okafor.example.com",
            },
            headers=landlord.headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["business_info"]["company_name"] == "Okafor Homes"
        assert data["years_of_experience"] == 12
        assert data["social_links"]["website_url"] == "https://okafor.example.com"
        assert data["last_name"] == "Okafor"

    @pytest.mark.asyncio
    async def test_negative_experience(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.put(
            "/api/landlord/profile",
            json={"years_of_experience": -2},
            headers=landlord.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "years_of_experience cannot be negative"

    @pytest.mark.asyncio
    async def test_tenant_has_no_landlord_profile(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.get("/api/landlord/profile", headers=tenant.headers)

        assert response.status_code == 404
        assert response.json()["error"] == "LANDLORD_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_role_addressed_alias(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        updated = await client.put(
            "/api/profile/landlord",
            json={"bio": "Family-run since 2010."},
            headers=landlord.headers,
        )
        fetched = await client.get("/api/profile/landlord", headers=landlord.headers)

        assert updated.status_code == 200
        assert fetched.json()["bio"] == "Family-run since 2010."


class TestBankInfo:
    """Tests for PUT /api/landlord/bank-info."""

    @pytest.mark.asyncio
    async def test_direct_deposit(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.put(
            "/api/landlord/bank-info",
            json={
                "preferred_payment_method": "directDeposit",
                "bank_name": "RBC",
                "account_name": "Okafor Rentals Inc",
                "account_number": "000123451234",
                "routing_number": "00302",
            },
            headers=landlord.headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Bank information updated successfully"
        assert data["bank_info"]["account_number_mask"] == "****1234"
        assert "account_number" not in data["bank_info"]

        profile = await client.get("/api/landlord/profile", headers=landlord.headers)
        assert profile.json()["bank_info"]["bank_name"] == "RBC"
        assert profile.json()["bank_info"]["account_number_mask"] == "****1234"

    @pytest.mark.asyncio
    async def test_e_transfer(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.put(
            "/api/landlord/bank-info",
            json={"preferred_payment_method": "eTransfer", "e_transfer_email": "Pay@Okafor.ca"},
            headers=landlord.headers,
        )

        assert response.status_code == 200
        bank_info = response.json()["bank_info"]
        assert bank_info["preferred_payment_method"] == "eTransfer"
        assert bank_info["e_transfer_email"] == "pay@okafor.ca"

    @pytest.mark.asyncio
    async def test_direct_deposit_missing_fields(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.put(
            "/api/landlord/bank-info",
            json={"preferred_payment_method": "directDeposit", "bank_name": "RBC"},
            headers=landlord.headers,
        )

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Missing required fields: account_name, account_number, routing_number"
        assert data["missing_fields"] == ["account_name", "account_number", "routing_number"]

    @pytest.mark.asyncio
    async def test_e_transfer_requires_contact(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.put(
            "/api/landlord/bank-info",
            json={"preferred_payment_method": "eTransfer"},
            headers=landlord.headers,
        )

        assert response.status_code == 400
        assert response.json()["missing_fields"] == ["e_transfer_email", "e_transfer_phone"]

    @pytest.mark.asyncio
    async def test_unknown_method(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.put(
            "/api/landlord/bank-info",
            json={"preferred_payment_method": "cheque"},
            headers=landlord.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "preferred_payment_method must be one of: directDeposit, eTransfer"


class TestLandlordProfileImage:
    @pytest.mark.asyncio
    async def test_upload_and_delete(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        landlord: SeededUser,
    ):
        uploaded = await client.post(
            "/api/landlord/profile-image",
            files={"file": ("logo.webp", b"RIFF logo", "image/webp")},
            headers=landlord.headers,
        )

        assert uploaded.status_code == 200
        url = uploaded.json()["profile_image"]
        assert url.startswith(f"{STORAGE_URL}/public/profile-images/landlord/{landlord.id}/profile-")

        deleted = await client.delete("/api/landlord/profile-image", headers=landlord.headers)

        assert deleted.status_code == 200
        assert mock_storage_client.removed == [("profile-images", url.split("/public/profile-images/", 1)[1])]

        profile = await client.get("/api/landlord/profile", headers=landlord.headers)
        assert profile.json()["profile_image"] is None
