"""
Integration tests for the tenant profile endpoints.

These tests verify:
1. GET/PUT /api/tenant/profile and the /api/profile/tenant alias
2. PUT /api/tenant/payment-info
3. Profile image upload and removal
4. Favorites
5. The landlord-only GET /api/tenant/{tenant_id} view
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.domain.entities import Property
from tests.integration.conftest import STORAGE_URL, MockStorageClient, SeededUser


def image(name: str = "me.png", content_type: str = "image/png") -> dict:
    return {"file": (name, b"\x89PNG avatar", content_type)}


class TestTenantProfile:
    """Tests for GET and PUT /api/tenant/profile."""

    @pytest.mark.asyncio
    async def test_new_profile(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.get("/api/tenant/profile", headers=tenant.headers)

        assert response.status_code == 200
        data = response.json()
        assert data["tenant_id"] == tenant.id
        assert data["email"] == "maria@example.com"
        assert data["verified"] is False
        assert data["payment_info"] is None
        assert data["application_counts"] == {"ongoing": 0, "rejected": 0, "completed": 0}
        assert data["verifications"] == {
            "identity": False,
            "income": False,
            "bank_account": False,
            "last_verified": None,
        }

    @pytest.mark.asyncio
    async def test_application_counts(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        created = await client.post(
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
        await client.put(
            f"/api/landlord/properties/{listing.id}/applications/{created.json()['application']['id']}/status",
            json={"status": "Approved"},
            headers=landlord.headers,
        )

        response = await client.get("/api/tenant/profile", headers=verified_tenant.headers)

        assert response.json()["application_counts"] == {"ongoing": 0, "rejected": 0, "completed": 1}

    @pytest.mark.asyncio
    async def test_partial_update(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.put(
            "/api/tenant/profile",
            json={
                "phone": "(416) 555-0177",
                "occupation": "  Nurse ",
                "income": 72000,
                "preferred_move_in_date": "2026-12-01",
                "linkedin_url": "https://linkedin.com/in/maria",
            },
            headers=tenant.headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["first_name"] == "Maria"
        assert data["phone"] == "4165550177"
        assert data["linkedin_url"] == "https://linkedin.com/in/maria"
        assert data["profile"]["occupation"] == "Nurse"
        assert data["profile"]["income"] == 72000
        assert data["profile"]["preferred_move_in_date"] == "2026-12-01"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"phone": "555"},
            {"facebook_url": "facebook.com/maria"},
            {"first_name": "   "},
            {"income": -1},
        ],
    )
    async def test_invalid_update(
        self,
        client: AsyncClient,
        tenant: SeededUser,
        body: dict,
    ):
        response = await client.put("/api/tenant/profile", json=body, headers=tenant.headers)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_landlord_has_no_tenant_profile(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.get("/api/tenant/profile", headers=landlord.headers)

        assert response.status_code == 404
        assert response.json()["error"] == "TENANT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_role_addressed_alias(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        updated = await client.put(
            "/api/profile/tenant",
            json={"bio": "Quiet, no pets."},
            headers=tenant.headers,
        )
        fetched = await client.get("/api/profile/tenant", headers=tenant.headers)

        assert updated.status_code == 200
        assert fetched.json()["profile"]["bio"] == "Quiet, no pets."
        assert fetched.json() == (await client.get("/api/tenant/profile", headers=tenant.headers)).json()


class TestPaymentInfo:
    @pytest.mark.asyncio
    async def test_store_card_summary(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        card = {"credit_card_last4": "4242", "credit_card_brand": "Visa", "credit_card_expiry": "08/28"}

        response = await client.put("/api/tenant/payment-info", json=card, headers=tenant.headers)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Payment information updated successfully",
            "payment_info": card,
        }
        profile = await client.get("/api/tenant/profile", headers=tenant.headers)
        assert profile.json()["payment_info"] == card

    @pytest.mark.asyncio
    async def test_invalid_card(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.put(
            "/api/tenant/payment-info",
            json={"credit_card_last4": "42a2", "credit_card_brand": "Visa", "credit_card_expiry": "2028-08"},
            headers=tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "credit_card_last4 must be exactly 4 digits; credit_card_expiry must be in MM/YY format"
        )

    @pytest.mark.asyncio
    async def test_missing_card_fields(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.put(
            "/api/tenant/payment-info",
            json={"credit_card_last4": "4242"},
            headers=tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["missing_fields"] == ["credit_card_brand", "credit_card_expiry"]


class TestProfileImage:
    @pytest.mark.asyncio
    async def test_upload_and_replace(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        tenant: SeededUser,
    ):
        first = await client.post("/api/tenant/profile-image", files=image(), headers=tenant.headers)

        assert first.status_code == 200
        first_url = first.json()["profile_image"]
        assert first_url.startswith(f"{STORAGE_URL}/public/profile-images/tenant/{tenant.id}/profile-")
        assert first_url.endswith(".png")

        second = await client.post(
            "/api/tenant/profile-image",
            files=image("me.jpg", "image/jpeg"),
            headers=tenant.headers,
        )

        assert second.json()["profile_image"] != first_url
        old_path = first_url.split("/public/profile-images/", 1)[1]
        assert ("profile-images", old_path) in mock_storage_client.removed

        profile = await client.get("/api/tenant/profile", headers=tenant.headers)
        assert profile.json()["profile_image"] == second.json()["profile_image"]

    @pytest.mark.asyncio
    async def test_rejects_non_image(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        tenant: SeededUser,
    ):
        response = await client.post(
            "/api/tenant/profile-image",
            files=image("cv.pdf", "application/pdf"),
            headers=tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Profile image has unsupported type application/pdf"
        assert mock_storage_client.objects == {}

    @pytest.mark.asyncio
    async def test_delete_image(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        tenant: SeededUser,
    ):
        await client.post("/api/tenant/profile-image", files=image(), headers=tenant.headers)

        response = await client.delete("/api/tenant/profile-image", headers=tenant.headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Profile image deleted successfully", "profile_image": None}
        assert len(mock_storage_client.removed) == 1

        profile = await client.get("/api/tenant/profile", headers=tenant.headers)
        assert profile.json()["profile_image"] is None


class TestFavorites:
    """Tests for /api/tenant/favorites."""

    @pytest.mark.asyncio
    async def test_add_and_list(
        self,
        client: AsyncClient,
        tenant: SeededUser,
        listing: Property,
    ):
        added = await client.post(
            "/api/tenant/favorites",
            json={"property_id": listing.id},
            headers=tenant.headers,
        )

        assert added.status_code == 201
        assert added.json()["property_id"] == listing.id
        assert added.json()["property"]["city"] == "Toronto"

        listed = await client.get("/api/tenant/favorites", headers=tenant.headers)
        assert listed.json()["count"] == 1
        assert listed.json()["favorites"][0]["id"] == added.json()["id"]

    @pytest.mark.asyncio
    async def test_duplicate_favorite(
        self,
        client: AsyncClient,
        tenant: SeededUser,
        listing: Property,
    ):
        await client.post("/api/tenant/favorites", json={"property_id": listing.id}, headers=tenant.headers)

        response = await client.post(
            "/api/tenant/favorites",
            json={"property_id": listing.id},
            headers=tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "DUPLICATE_FAVORITE"
        assert response.json()["message"] == "Property is already in favorites"

    @pytest.mark.asyncio
    async def test_unknown_property(
        self,
        client: AsyncClient,
        tenant: SeededUser,
    ):
        response = await client.post(
            "/api/tenant/favorites",
            json={"property_id": str(uuid4())},
            headers=tenant.headers,
        )

        assert response.status_code == 404
        assert response.json()["error"] == "PROPERTY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_remove_is_idempotent(
        self,
        client: AsyncClient,
        tenant: SeededUser,
        listing: Property,
    ):
        await client.post("/api/tenant/favorites", json={"property_id": listing.id}, headers=tenant.headers)

        first = await client.delete(f"/api/tenant/favorites/{listing.id}", headers=tenant.headers)
        second = await client.delete(f"/api/tenant/favorites/{listing.id}", headers=tenant.headers)

        assert first.status_code == 200
        assert first.json()["message"] == "Property removed from favorites"
        assert second.status_code == 200

        listed = await client.get("/api/tenant/favorites", headers=tenant.headers)
        assert listed.json() == {"count": 0, "favorites": []}

    @pytest.mark.asyncio
    async def test_deleting_property_removes_favorites(
        self,
        client: AsyncClient,
        tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        await client.post("/api/tenant/favorites", json={"property_id": listing.id}, headers=tenant.headers)

        await client.delete(f"/api/landlord/properties/{listing.id}", headers=landlord.headers)

        listed = await client.get("/api/tenant/favorites", headers=tenant.headers)
        assert listed.json()["count"] == 0


class TestLandlordViewOfTenant:
    """Tests for GET /api/tenant/{tenant_id}."""

    @pytest.mark.asyncio
    async def test_landlord_can_view_tenant(
        self,
        client: AsyncClient,
        tenant: SeededUser,
        landlord: SeededUser,
    ):
        response = await client.get(f"/api/tenant/{tenant.id}", headers=landlord.headers)

        assert response.status_code == 200
        assert response.json()["tenant_id"] == tenant.id

    @pytest.mark.asyncio
    async def test_tenant_cannot_view_other_tenant(
        self,
        client: AsyncClient,
        tenant: SeededUser,
        other_tenant: SeededUser,
    ):
        response = await client.get(f"/api/tenant/{tenant.id}", headers=other_tenant.headers)

        assert response.status_code == 403
        assert response.json()["message"] == "Only landlords can view tenant profiles"

    @pytest.mark.asyncio
    async def test_unknown_tenant(
        self,
        client: AsyncClient,
        landlord: SeededUser,
    ):
        response = await client.get(f"/api/tenant/{uuid4()}", headers=landlord.headers)

        assert response.status_code == 404
