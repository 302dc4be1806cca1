"""
Integration tests for the rental application workflow.

These tests verify:
1. Document upload and application submission rules (verification,
   lease state, one application per property per calendar month)
2. Tenant views, revocation and bulk revocation with ownership checks
3. Landlord review: approve (which leases the property) and reject
4. Landlord document access and application notes
"""

from typing import Dict, Optional
from uuid import uuid4

import pytest
from fastapi import Depends
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.dependencies import get_application_repository
from src.domain.entities import Property
from src.domain.exceptions import ExternalServiceException
from src.infrastructure.database import get_db_session
from src.infrastructure.repositories import PostgresApplicationRepository
from src.main import app
from tests.integration.conftest import (
    STORAGE_URL,
    MockStorageClient,
    SeededUser,
    seed_property,
    stored_documents,
)


async def submit(
    client: AsyncClient,
    tenant: SeededUser,
    property_id: str,
    documents: Optional[Dict[str, str]] = None,
):
    return await client.post(
        "/api/tenant/applications",
        json={
            "property_id": property_id,
            "documents": documents if documents is not None else {
                "id": f"{STORAGE_URL}/public/application-documents/{tenant.id}/id-1.pdf",
                "bank_statement": f"{STORAGE_URL}/public/application-documents/{tenant.id}/bank_statement-1.pdf",
                "form410": f"{STORAGE_URL}/public/application-documents/{tenant.id}/form410-1.png",
            },
        },
        headers=tenant.headers,
    )


async def decide(client: AsyncClient, landlord: SeededUser, property_id: str, application_id: str, status: str):
    return await client.put(
        f"/api/landlord/properties/{property_id}/applications/{application_id}/status",
        json={"status": status},
        headers=landlord.headers,
    )


def document_files(*names: str) -> list:
    files = {
        "id_file": ("passport.pdf", b"%PDF-1.4 passport", "application/pdf"),
        "bank_statement_file": ("statement.pdf", b"%PDF-1.4 statement", "application/pdf"),
        "form410_file": ("form410.png", b"\x89PNG form", "image/png"),
    }
    return [(name, files[name]) for name in names]


# =============================================================================
# Documents and submission
# =============================================================================

class TestUploadDocuments:
    """Tests for POST /api/tenant/applications/documents."""

    @pytest.mark.asyncio
    async def test_upload_all_documents(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        verified_tenant: SeededUser,
    ):
        response = await client.post(
            "/api/tenant/applications/documents",
            files=document_files("id_file", "bank_statement_file", "form410_file"),
            headers=verified_tenant.headers,
        )

        assert response.status_code == 200
        documents = response.json()["documents"]
        assert sorted(documents) == ["bank_statement", "form410", "id"]
        prefix = f"{STORAGE_URL}/public/application-documents/{verified_tenant.id}/"
        assert documents["id"].startswith(prefix + "id-")
        assert documents["form410"].endswith(".png")

        paths = sorted(path for bucket, path in mock_storage_client.objects if bucket == "application-documents")
        assert len(paths) == 3

    @pytest.mark.asyncio
    async def test_all_three_documents_are_required(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        verified_tenant: SeededUser,
    ):
        response = await client.post(
            "/api/tenant/applications/documents",
            files=document_files("id_file", "bank_statement_file"),
            headers=verified_tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["missing_fields"] == ["form410"]
        assert mock_storage_client.objects == {}

    @pytest.mark.asyncio
    async def test_rejects_unsupported_document_type(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
    ):
        files = document_files("bank_statement_file", "form410_file")
        files.append(("id_file", ("id.exe", b"MZ", "application/x-msdownload")))

        response = await client.post(
            "/api/tenant/applications/documents",
            files=files,
            headers=verified_tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Government ID has unsupported type application/x-msdownload"


class TestSubmitApplication:
    """Tests for POST /api/tenant/applications."""

    @pytest.mark.asyncio
    async def test_submit_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        response = await submit(client, verified_tenant, listing.id)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Application submitted successfully"
        application = data["application"]
        assert application["status"] == "Pending"
        assert application["tenant_id"] == verified_tenant.id
        assert application["landlord_id"] == landlord.id
        assert application["has_id"] is True
        assert application["has_bank_statement"] is True
        assert application["has_form_410"] is True

        property = await client.get(f"/api/landlord/properties/{listing.id}", headers=landlord.headers)
        assert property.json()["num_applicants"] == 1

    @pytest.mark.asyncio
    async def test_missing_document_links(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        response = await submit(client, verified_tenant, listing.id, documents={"id": "https://x/id.pdf"})

        assert response.status_code == 400
        assert response.json()["missing_fields"] == ["bank_statement", "form410"]

    @pytest.mark.asyncio
    async def test_unverified_tenant_cannot_apply(
        self,
        client: AsyncClient,
        tenant: SeededUser,
        listing: Property,
    ):
        response = await submit(client, tenant, listing.id)

        assert response.status_code == 400
        assert response.json()["error"] == "TENANT_NOT_VERIFIED"

    @pytest.mark.asyncio
    async def test_landlord_cannot_apply(
        self,
        client: AsyncClient,
        other_landlord: SeededUser,
        listing: Property,
    ):
        response = await submit(client, other_landlord, listing.id)

        assert response.status_code == 404
        assert response.json()["error"] == "TENANT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_property(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
    ):
        response = await submit(client, verified_tenant, str(uuid4()))

        assert response.status_code == 404
        assert response.json()["error"] == "PROPERTY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_leased_property(
        self,
        client: AsyncClient,
        test_session: AsyncSession,
        verified_tenant: SeededUser,
        landlord: SeededUser,
    ):
        leased = await seed_property(test_session, landlord.id, is_leased=True)

        response = await submit(client, verified_tenant, leased.id)

        assert response.status_code == 400
        assert response.json()["error"] == "PROPERTY_LEASED"

    @pytest.mark.asyncio
    async def test_second_application_in_same_month(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        first = await submit(client, verified_tenant, listing.id)
        second = await submit(client, verified_tenant, listing.id)

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json()["error"] == "DUPLICATE_APPLICATION"

        property = await client.get(f"/api/landlord/properties/{listing.id}", headers=landlord.headers)
        assert property.json()["num_applicants"] == 1

    @pytest.mark.asyncio
    async def test_check_existing_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        before = await client.get(
            f"/api/tenant/applications/check/{listing.id}",
            headers=verified_tenant.headers,
        )
        assert before.json() == {"exists": False, "application": None}

        created = await submit(client, verified_tenant, listing.id)

        after = await client.get(
            f"/api/tenant/applications/check/{listing.id}",
            headers=verified_tenant.headers,
        )
        assert after.json()["exists"] is True
        assert after.json()["application"]["id"] == created.json()["application"]["id"]


# =============================================================================
# Tenant views and revocation
# =============================================================================

class TestTenantApplications:
    @pytest.mark.asyncio
    async def test_list_with_property_summary(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        await submit(client, verified_tenant, listing.id)

        response = await client.get("/api/tenant/applications", headers=verified_tenant.headers)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["applications"][0]["property"]["address"] == "221 Queen St W"

    @pytest.mark.asyncio
    async def test_list_by_status(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        await submit(client, verified_tenant, listing.id)

        pending = await client.get("/api/tenant/applications/status/Pending", headers=verified_tenant.headers)
        approved = await client.get("/api/tenant/applications/status/Approved", headers=verified_tenant.headers)

        assert pending.json()["count"] == 1
        assert approved.json()["count"] == 0

    @pytest.mark.asyncio
    async def test_list_by_unknown_status(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
    ):
        response = await client.get("/api/tenant/applications/status/Archived", headers=verified_tenant.headers)

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid status")

    @pytest.mark.asyncio
    async def test_get_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        created = await submit(client, verified_tenant, listing.id)
        application_id = created.json()["application"]["id"]

        response = await client.get(f"/api/tenant/applications/{application_id}", headers=verified_tenant.headers)

        assert response.status_code == 200
        assert response.json()["property"]["id"] == listing.id

    @pytest.mark.asyncio
    async def test_get_foreign_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_tenant: SeededUser,
        listing: Property,
    ):
        created = await submit(client, verified_tenant, listing.id)
        application_id = created.json()["application"]["id"]

        response = await client.get(f"/api/tenant/applications/{application_id}", headers=other_tenant.headers)

        assert response.status_code == 403
        assert response.json()["error"] == "APPLICATION_OWNERSHIP"

    @pytest.mark.asyncio
    async def test_get_unknown_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
    ):
        response = await client.get(f"/api/tenant/applications/{uuid4()}", headers=verified_tenant.headers)

        assert response.status_code == 404
        assert response.json()["error"] == "APPLICATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_replace_one_document(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        documents = stored_documents(mock_storage_client, verified_tenant.id)
        created = await submit(client, verified_tenant, listing.id, documents)
        application_id = created.json()["application"]["id"]

        response = await client.put(
            f"/api/tenant/applications/{application_id}/documents",
            files=document_files("id_file"),
            headers=verified_tenant.headers,
        )

        assert response.status_code == 200
        updated = response.json()["documents"]
        assert updated["id"] != documents["id"]
        assert updated["bank_statement"] == documents["bank_statement"]
        assert updated["form410"] == documents["form410"]
        assert mock_storage_client.removed == [("application-documents", f"{verified_tenant.id}/id-1.pdf")]

    @pytest.mark.asyncio
    async def test_replace_documents_requires_a_file(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        created = await submit(client, verified_tenant, listing.id)
        application_id = created.json()["application"]["id"]

        response = await client.put(
            f"/api/tenant/applications/{application_id}/documents",
            headers=verified_tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "No documents uploaded"


class TestRevokeApplication:
    """Tests for DELETE /api/tenant/applications/{id} and bulk revoke."""

    @pytest.mark.asyncio
    async def test_revoke_pending_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        created = await submit(client, verified_tenant, listing.id)
        application_id = created.json()["application"]["id"]

        response = await client.delete(f"/api/tenant/applications/{application_id}", headers=verified_tenant.headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Application revoked successfully", "revoked_count": 1}

        property = await client.get(f"/api/landlord/properties/{listing.id}", headers=landlord.headers)
        assert property.json()["num_applicants"] == 0

        # A revoked application no longer blocks a new one this month
        again = await submit(client, verified_tenant, listing.id)
        assert again.status_code == 201

    @pytest.mark.asyncio
    async def test_revoke_foreign_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_tenant: SeededUser,
        listing: Property,
    ):
        created = await submit(client, verified_tenant, listing.id)
        application_id = created.json()["application"]["id"]

        response = await client.delete(f"/api/tenant/applications/{application_id}", headers=other_tenant.headers)

        assert response.status_code == 403
        assert response.json()["error"] == "APPLICATION_OWNERSHIP"

    @pytest.mark.asyncio
    async def test_cannot_revoke_decided_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        created = await submit(client, verified_tenant, listing.id)
        application_id = created.json()["application"]["id"]
        await decide(client, landlord, listing.id, application_id, "Rejected")

        response = await client.delete(f"/api/tenant/applications/{application_id}", headers=verified_tenant.headers)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_APPLICATION_STATE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("decision", ["Approved", "Rejected"])
    async def test_revoke_foreign_decided_application(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
        decision: str,
    ):
        created = await submit(client, verified_tenant, listing.id)
        application_id = created.json()["application"]["id"]
        await decide(client, landlord, listing.id, application_id, decision)

        response = await client.delete(f"/api/tenant/applications/{application_id}", headers=other_tenant.headers)

        assert response.status_code == 403
        assert response.json()["error"] == "APPLICATION_OWNERSHIP"

    @pytest.mark.asyncio
    async def test_bulk_revoke(
        self,
        client: AsyncClient,
        test_session: AsyncSession,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        second_listing = await seed_property(test_session, landlord.id, address="77 Spadina Ave")
        ids = [
            (await submit(client, verified_tenant, listing.id)).json()["application"]["id"],
            (await submit(client, verified_tenant, second_listing.id)).json()["application"]["id"],
        ]

        response = await client.post(
            "/api/tenant/applications/bulk-revoke",
            json={"application_ids": ids},
            headers=verified_tenant.headers,
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Successfully revoked 2 applications", "revoked_count": 2}

        remaining = await client.get("/api/tenant/applications", headers=verified_tenant.headers)
        assert remaining.json()["count"] == 0

    @pytest.mark.asyncio
    async def test_bulk_revoke_is_all_or_nothing(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_tenant: SeededUser,
        listing: Property,
    ):
        mine = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]
        theirs = (await submit(client, other_tenant, listing.id)).json()["application"]["id"]

        response = await client.post(
            "/api/tenant/applications/bulk-revoke",
            json={"application_ids": [mine, theirs]},
            headers=verified_tenant.headers,
        )

        assert response.status_code == 403
        assert response.json()["error"] == "APPLICATION_OWNERSHIP"

        remaining = await client.get("/api/tenant/applications", headers=verified_tenant.headers)
        assert remaining.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_bulk_revoke_unknown_id(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        mine = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await client.post(
            "/api/tenant/applications/bulk-revoke",
            json={"application_ids": [mine, str(uuid4())]},
            headers=verified_tenant.headers,
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_bulk_revoke_requires_ids(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
    ):
        response = await client.post(
            "/api/tenant/applications/bulk-revoke",
            json={"application_ids": []},
            headers=verified_tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["missing_fields"] == ["application_ids"]


# =============================================================================
# Landlord review
# =============================================================================

class TestReviewApplications:
    """Tests for the landlord application endpoints under /api/landlord/properties."""

    @pytest.mark.asyncio
    async def test_list_property_applications(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        first = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]
        await submit(client, other_tenant, listing.id)
        await decide(client, landlord, listing.id, first, "Rejected")

        everything = await client.get(f"/api/landlord/properties/{listing.id}/applications", headers=landlord.headers)
        rejected = await client.get(
            f"/api/landlord/properties/{listing.id}/applications",
            params={"status": "Rejected"},
            headers=landlord.headers,
        )

        assert everything.json()["count"] == 2
        assert rejected.json()["count"] == 1
        assert rejected.json()["applications"][0]["id"] == first

    @pytest.mark.asyncio
    async def test_list_foreign_property_applications(
        self,
        client: AsyncClient,
        other_landlord: SeededUser,
        listing: Property,
    ):
        response = await client.get(
            f"/api/landlord/properties/{listing.id}/applications",
            headers=other_landlord.headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_approve_leases_property(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await decide(client, landlord, listing.id, application_id, "Approved")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Application approved successfully"
        assert data["application"]["status"] == "Approved"

        property = await client.get(f"/api/landlord/properties/{listing.id}", headers=landlord.headers)
        assert property.json()["is_leased"] is True

        # New applications are refused once the property is leased
        late = await submit(client, other_tenant, listing.id)
        assert late.json()["error"] == "PROPERTY_LEASED"

    @pytest.mark.asyncio
    async def test_failed_approval_leaves_application_and_property_unchanged(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        class FailingAfterStaging(PostgresApplicationRepository):
            async def set_status(self, application, status, lease_property=False):
                await super().set_status(application, status, lease_property=lease_property)
                raise ExternalServiceException("database", "Connection lost before commit")

        async def failing_repository(session: AsyncSession = Depends(get_db_session)):
            return FailingAfterStaging(session)

        app.dependency_overrides[get_application_repository] = failing_repository
        try:
            response = await decide(client, landlord, listing.id, application_id, "Approved")
        finally:
            del app.dependency_overrides[get_application_repository]

        assert response.status_code == 502

        applications = await client.get(
            f"/api/landlord/properties/{listing.id}/applications",
            headers=landlord.headers,
        )
        assert applications.json()["applications"][0]["status"] == "Pending"

        property = await client.get(f"/api/landlord/properties/{listing.id}", headers=landlord.headers)
        assert property.json()["is_leased"] is False

    @pytest.mark.asyncio
    async def test_reject_keeps_property_available(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await decide(client, landlord, listing.id, application_id, "Rejected")

        assert response.status_code == 200
        assert response.json()["message"] == "Application rejected successfully"

        property = await client.get(f"/api/landlord/properties/{listing.id}", headers=landlord.headers)
        assert property.json()["is_leased"] is False

    @pytest.mark.asyncio
    async def test_decided_application_is_terminal(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]
        await decide(client, landlord, listing.id, application_id, "Approved")

        response = await decide(client, landlord, listing.id, application_id, "Rejected")

        assert response.status_code == 400
        assert response.json()["message"] == "Application has already been approved"

    @pytest.mark.asyncio
    async def test_only_approved_or_rejected(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await decide(client, landlord, listing.id, application_id, "Pending")

        assert response.status_code == 400
        assert response.json()["message"] == "Status must be either Approved or Rejected"

    @pytest.mark.asyncio
    async def test_other_landlord_cannot_decide(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await decide(client, other_landlord, listing.id, application_id, "Approved")

        assert response.status_code == 404
        assert response.json()["error"] == "PROPERTY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_application_must_belong_to_property(
        self,
        client: AsyncClient,
        test_session: AsyncSession,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        other_listing = await seed_property(test_session, landlord.id, address="1 Front St")
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await decide(client, landlord, other_listing.id, application_id, "Approved")

        assert response.status_code == 404
        assert response.json()["error"] == "APPLICATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_deleting_property_removes_applications(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        await submit(client, verified_tenant, listing.id)

        await client.delete(f"/api/landlord/properties/{listing.id}", headers=landlord.headers)

        response = await client.get("/api/tenant/applications", headers=verified_tenant.headers)
        assert response.json()["count"] == 0


# =============================================================================
# Landlord document access
# =============================================================================

class TestApplicationDocuments:
    """Tests for /api/landlord/applications/{id}/documents."""

    @pytest.mark.asyncio
    async def test_list_signed_links(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        documents = stored_documents(mock_storage_client, verified_tenant.id)
        application_id = (await submit(client, verified_tenant, listing.id, documents)).json()["application"]["id"]

        response = await client.get(
            f"/api/landlord/applications/{application_id}/documents",
            headers=landlord.headers,
        )

        assert response.status_code == 200
        links = response.json()["documents"]
        assert [link["type"] for link in links] == ["id", "bank_statement", "form410"]
        assert links[0]["name"] == "Government ID"
        assert links[0]["url"] == (
            f"{STORAGE_URL}/sign/application-documents/{verified_tenant.id}/id-1.pdf"
            "?token=signed&expires_in=3600"
        )

    @pytest.mark.asyncio
    async def test_download_document(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        documents = stored_documents(mock_storage_client, verified_tenant.id)
        application_id = (await submit(client, verified_tenant, listing.id, documents)).json()["application"]["id"]

        response = await client.get(
            f"/api/landlord/applications/{application_id}/documents/id",
            headers=landlord.headers,
        )

        assert response.status_code == 200
        assert response.content == b"%PDF-1.4 id"
        assert response.headers["content-type"].startswith("application/pdf")
        assert response.headers["content-disposition"] == 'attachment; filename="id.pdf"'

    @pytest.mark.asyncio
    async def test_view_document_inline(
        self,
        client: AsyncClient,
        mock_storage_client: MockStorageClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        documents = stored_documents(mock_storage_client, verified_tenant.id)
        application_id = (await submit(client, verified_tenant, listing.id, documents)).json()["application"]["id"]

        response = await client.get(
            f"/api/landlord/applications/{application_id}/documents/form410",
            params={"view": "true"},
            headers=landlord.headers,
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/png")
        assert response.headers["content-disposition"] == 'inline; filename="form410.png"'

    @pytest.mark.asyncio
    async def test_unknown_document_type(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await client.get(
            f"/api/landlord/applications/{application_id}/documents/paystub",
            headers=landlord.headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_stored_object(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        # Links point at objects that were never uploaded
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await client.get(
            f"/api/landlord/applications/{application_id}/documents/bank_statement",
            headers=landlord.headers,
        )

        assert response.status_code == 404
        assert response.json()["error"] == "DOCUMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_other_landlord_is_forbidden(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await client.get(
            f"/api/landlord/applications/{application_id}/documents",
            headers=other_landlord.headers,
        )

        assert response.status_code == 403
        assert response.json()["error"] == "FORBIDDEN"


# =============================================================================
# Notes
# =============================================================================

class TestApplicationNotes:
    @pytest.mark.asyncio
    async def test_tenant_and_landlord_share_notes(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        landlord: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        tenant_note = await client.post(
            f"/api/tenant/applications/{application_id}/notes",
            json={"content": "I can move in early."},
            headers=verified_tenant.headers,
        )
        landlord_note = await client.post(
            f"/api/landlord/applications/{application_id}/notes",
            json={"content": "<b>Thanks</b>, noted."},
            headers=landlord.headers,
        )

        assert tenant_note.status_code == 201
        assert tenant_note.json()["creator_type"] == "Tenant"
        assert landlord_note.status_code == 201
        assert landlord_note.json()["creator_type"] == "Landlord"
        assert landlord_note.json()["content"] == "bThanks/b, noted."

        as_tenant = await client.get(
            f"/api/tenant/applications/{application_id}/notes",
            headers=verified_tenant.headers,
        )
        as_landlord = await client.get(
            f"/api/landlord/applications/{application_id}/notes",
            headers=landlord.headers,
        )
        assert len(as_tenant.json()["notes"]) == 2
        assert as_tenant.json() == as_landlord.json()

    @pytest.mark.asyncio
    async def test_note_content_is_required(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await client.post(
            f"/api/tenant/applications/{application_id}/notes",
            json={"content": "   "},
            headers=verified_tenant.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Note content is required"

    @pytest.mark.asyncio
    async def test_other_tenant_cannot_read_notes(
        self,
        client: AsyncClient,
        verified_tenant: SeededUser,
        other_tenant: SeededUser,
        listing: Property,
    ):
        application_id = (await submit(client, verified_tenant, listing.id)).json()["application"]["id"]

        response = await client.get(
            f"/api/tenant/applications/{application_id}/notes",
            headers=other_tenant.headers,
        )

        assert response.status_code == 403
