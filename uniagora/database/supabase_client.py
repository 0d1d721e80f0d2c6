import hashlib
import time
from typing import Dict, Optional, Tuple

from fastapi import Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import create_client, Client
from uniagora.config import settings

optional_bearer = HTTPBearer(auto_error=False)

# One client per access token; pollers call in every few seconds with the same JWT
_USER_CLIENT_TTL_SEC = 300
_USER_CLIENT_MAX_SIZE = 200


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None
    _user_clients: Dict[str, Tuple[Client, float]] = {}

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Use for storage and admin auth calls."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def get_user_client(cls, token: str) -> Client:
        """Client whose table and RPC calls carry the caller's JWT, so RLS applies to them.
        Reused for the same token until it expires from the cache."""
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        cached = cls._user_clients.get(cache_key)
        if cached is not None:
            client, expiry = cached
            if now < expiry:
                return client
            del cls._user_clients[cache_key]

        client = create_client(settings.supabase_url, settings.supabase_key)
        client.postgrest.auth(token)
        if len(cls._user_clients) >= _USER_CLIENT_MAX_SIZE:
            # Drop the oldest entry
            cls._user_clients.pop(next(iter(cls._user_clients)))
        cls._user_clients[cache_key] = (client, now + _USER_CLIENT_TTL_SEC)
        return client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None
        cls._user_clients.clear()


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()


def get_user_supabase(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_bearer),
) -> Client:
    """Forward the caller's bearer token to Supabase; anonymous callers get the anon client."""
    if credentials is None or not credentials.credentials:
        return SupabaseClient.get_client()
    return SupabaseClient.get_user_client(credentials.credentials)
