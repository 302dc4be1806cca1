from fastapi import APIRouter

from .health import health_router
from .auth import tenant_auth_router, landlord_auth_router
from .tenant_applications import tenant_applications_router
from .verification import verification_router
from .tenant import tenant_router
from .landlord import landlord_router
from .landlord_properties import landlord_properties_router
from .landlord_applications import landlord_applications_router
from .properties import properties_router
from .profile import profile_router
from .scoring import scoring_router
from .newsletter import newsletter_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(tenant_auth_router, tags=["Tenant Auth"])
router.include_router(landlord_auth_router, tags=["Landlord Auth"])
# tenant_router ends with /tenant/{tenant_id} and must come after the other /tenant routes
router.include_router(tenant_applications_router, tags=["Tenant Applications"])
router.include_router(verification_router, tags=["Verification"])
router.include_router(tenant_router, tags=["Tenant"])
router.include_router(landlord_router, tags=["Landlord"])
router.include_router(landlord_properties_router, tags=["Landlord Properties"])
router.include_router(landlord_applications_router, tags=["Landlord Applications"])
router.include_router(properties_router, tags=["Properties"])
router.include_router(profile_router, tags=["Profile"])
router.include_router(scoring_router, tags=["Scoring"])
router.include_router(newsletter_router, tags=["Newsletter"])
