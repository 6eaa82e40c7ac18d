"""Persistence collaborator: interface and Supabase implementation."""

from .client import SupabaseClient
from .store import (
    ConcurrentUpdateError,
    DuplicateDocumentNumberError,
    NotFoundError,
    ProposalStore,
)

__all__ = [
    "SupabaseClient",
    "ProposalStore",
    "NotFoundError",
    "ConcurrentUpdateError",
    "DuplicateDocumentNumberError",
]
