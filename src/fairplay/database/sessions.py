"""
FairPlay - Seed Session Store

CRUD operations for the `seed_sessions` table.
"""

from datetime import datetime, timezone

from supabase import Client

from fairplay.database.models import SeedSessionRecord
from fairplay.engine.service import Rotation
from fairplay.engine.session import SeedSession


class SeedSessionStore:
    """Persists seed commitments and nonce history in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("seed_sessions")

    def save(self, session: SeedSession) -> SeedSessionRecord:
        """Insert a new session row."""
        data = (
            self.table
            .insert({
                "id": session.session_id,
                "server_seed": session.server_seed,
                "server_seed_hash": session.server_seed_hash,
                "client_seed": session.client_seed,
                "nonce": session.nonce,
                "is_active": session.is_active,
                "created_at": datetime.fromtimestamp(session.created_at, tz=timezone.utc).isoformat(),
            })
            .execute()
        )
        return SeedSessionRecord.model_validate(data.data[0])

    def get(self, session_id: str) -> SeedSessionRecord | None:
        """Get a session row by ID."""
        data = (
            self.table
            .select("*")
            .eq("id", session_id)
            .execute()
        )
        if data.data:
            return SeedSessionRecord.model_validate(data.data[0])
        return None

    def load(self, session_id: str) -> SeedSession | None:
        """Rebuild a live SeedSession from storage."""
        record = self.get(session_id)
        return record.to_session() if record else None

    def update_nonce(self, session_id: str, nonce: int) -> SeedSessionRecord:
        """Persist the session's nonce after a resolved bet."""
        data = (
            self.table
            .update({"nonce": nonce})
            .eq("id", session_id)
            .eq("is_active", True)
            .execute()
        )
        if not data.data:
            raise LookupError(f"No active session {session_id} to update.")
        return SeedSessionRecord.model_validate(data.data[0])

    def reveal(self, session_id: str) -> SeedSessionRecord:
        """Mark a session retired and its server seed public."""
        data = (
            self.table
            .update({
                "is_active": False,
                "revealed_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", session_id)
            .execute()
        )
        if not data.data:
            raise LookupError(f"No session {session_id} to reveal.")
        return SeedSessionRecord.model_validate(data.data[0])

    def save_rotation(self, rotation: Rotation) -> tuple[SeedSessionRecord, SeedSessionRecord]:
        """Persist a rotation: reveal the old session, insert the new one."""
        revealed = self.reveal(rotation.previous.session_id)
        created = self.save(rotation.new_session)
        return revealed, created

    def list_revealed(self, client_seed: str) -> list[SeedSessionRecord]:
        """Retired sessions for a client seed, newest first."""
        data = (
            self.table
            .select("*")
            .eq("client_seed", client_seed)
            .eq("is_active", False)
            .order("created_at", desc=True)
            .execute()
        )
        return [SeedSessionRecord.model_validate(row) for row in data.data]
