"""External API client implementations."""

from .plaid_client import PlaidClient
from .supabase_auth_client import SupabaseAuthClient
from .supabase_storage_client import SupabaseStorageClient
from .brevo_email_client import BrevoEmailClient
from .equifax_client import EquifaxClient, mock_credit_score

__all__ = [
    "PlaidClient",
    "SupabaseAuthClient",
    "SupabaseStorageClient",
    "BrevoEmailClient",
    "EquifaxClient",
    "mock_credit_score",
]
