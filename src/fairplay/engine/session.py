"""
FairPlay - Seed Session

A seed session owns the committed server seed, its public hash, the client
seed and the nonce counter. The nonce is the only mutable value and is
guarded by a per-session lock so bets on one session are serialized.
"""

from __future__ import annotations

import secrets
import threading
import time
from typing import Any

from fairplay.engine.errors import FairPlayError, SessionClosedError
from fairplay.engine.rng import DeterministicRandomSource
from fairplay.engine.validators import validate_nonce, validate_seed


class SeedSession:
    """Server seed commitment plus client seed and nonce for one player.

    The server seed and its hash never change after construction. Replacing
    either seed means rotating to a new session.
    """

    def __init__(
        self,
        server_seed: str,
        client_seed: str,
        *,
        nonce: int = 0,
        session_id: str | None = None,
        created_at: float | None = None,
        is_active: bool = True,
    ) -> None:
        self._server_seed = validate_seed(server_seed, "server seed")
        self._client_seed = validate_seed(client_seed, "client seed")
        self._server_seed_hash = DeterministicRandomSource.hash_server_seed(server_seed)
        self._nonce = validate_nonce(nonce)
        self._active = is_active
        self._lock = threading.Lock()
        self.session_id = session_id or secrets.token_hex(8)
        self.created_at = created_at if created_at is not None else time.time()

    @classmethod
    def new(
        cls,
        client_seed: str | None = None,
        *,
        server_seed_bytes: int = 32,
        client_seed_bytes: int = 16,
    ) -> SeedSession:
        """Start a session with a fresh server seed (and client seed if none given)."""
        if client_seed is None:
            client_seed = DeterministicRandomSource.generate_client_seed(client_seed_bytes)
        server_seed = DeterministicRandomSource.generate_server_seed(server_seed_bytes)
        return cls(server_seed, client_seed)

    # -- Read-only state -------------------------------------------------

    @property
    def server_seed(self) -> str:
        return self._server_seed

    @property
    def server_seed_hash(self) -> str:
        return self._server_seed_hash

    @property
    def client_seed(self) -> str:
        return self._client_seed

    @property
    def nonce(self) -> int:
        return self._nonce

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def lock(self) -> threading.Lock:
        """Lock serializing bets on this session."""
        return self._lock

    def commitment_holds(self) -> bool:
        """True while the published hash still matches the server seed."""
        return DeterministicRandomSource.hash_server_seed(self._server_seed) == self._server_seed_hash

    # -- Transitions (caller holds ``lock``) -----------------------------

    def ensure_active(self) -> None:
        if not self._active:
            raise SessionClosedError(
                f"Session {self.session_id} was rotated; start a new session to keep betting."
            )

    def advance_nonce(self) -> int:
        """Increment the nonce by exactly one and return the new value."""
        self.ensure_active()
        self._nonce += 1
        return self._nonce

    def retire(self) -> str:
        """Close the session and return the server seed for reveal."""
        self._active = False
        return self._server_seed

    # -- Serialization ---------------------------------------------------

    def to_public_dict(self) -> dict[str, Any]:
        """Everything a player may see while the session is live."""
        return {
            "session_id": self.session_id,
            "server_seed_hash": self._server_seed_hash,
            "client_seed": self._client_seed,
            "nonce": self._nonce,
            "created_at": self.created_at,
            "is_active": self._active,
        }

    def to_revealed_dict(self) -> dict[str, Any]:
        """Public data plus the server seed; only available after rotation."""
        if self._active:
            raise FairPlayError("Server seed is revealed only after the session is rotated.")
        data = self.to_public_dict()
        data["server_seed"] = self._server_seed
        return data

    def __repr__(self) -> str:
        return (
            f"SeedSession(session_id={self.session_id!r}, "
            f"server_seed_hash={self._server_seed_hash[:16]!r}..., "
            f"client_seed={self._client_seed!r}, nonce={self._nonce}, active={self._active})"
        )
