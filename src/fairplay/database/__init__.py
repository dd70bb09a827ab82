"""
FairPlay Database Layer.

Supabase persistence for seed sessions and the outcome audit log.
"""

from fairplay.database.audit import audit_bet
from fairplay.database.client import get_supabase_client
from fairplay.database.models import OutcomeRecord, SeedSessionRecord
from fairplay.database.outcomes import OutcomeLog
from fairplay.database.sessions import SeedSessionStore

__all__ = [
    "audit_bet",
    "get_supabase_client",
    "OutcomeLog",
    "OutcomeRecord",
    "SeedSessionRecord",
    "SeedSessionStore",
]
