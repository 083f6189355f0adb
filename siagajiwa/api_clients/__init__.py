from siagajiwa.api_clients.supabase.auth_client import AuthProvider, SupabaseAuthClient
from siagajiwa.api_clients.supabase.database_client import SupabaseDatabaseClient
from siagajiwa.api_clients.youtube.client import YouTubeClient

__all__ = [
    "AuthProvider",
    "SupabaseAuthClient",
    "SupabaseDatabaseClient",
    "YouTubeClient",
]
