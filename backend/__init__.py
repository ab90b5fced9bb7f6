"""Supabase-facing clients: transport, error taxonomy and one client per entity."""

from backend.client import BackendClient, BackendError, ClientError, InternalError, PostgrestError

__all__ = ["BackendClient", "BackendError", "ClientError", "InternalError", "PostgrestError"]
