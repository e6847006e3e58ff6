from functools import lru_cache

from .auth import SupabaseSignIn
from .cache import ViewCache
from .database import DatabaseClient


# Created on first use so importing the app does not need Supabase credentials.
# Tests swap these out through app.dependency_overrides.

@lru_cache()
def get_db() -> DatabaseClient:
    return DatabaseClient()


@lru_cache()
def get_view_cache() -> ViewCache:
    return ViewCache()


@lru_cache()
def get_sign_in() -> SupabaseSignIn:
    return SupabaseSignIn()
