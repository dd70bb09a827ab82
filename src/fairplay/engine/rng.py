"""
FairPlay - Deterministic Random Source

Hash-driven RNG shared by every game. SHA-256 is the only entropy
primitive: it produces the server seed commitment and every float handed to
the resolvers.

    digest = SHA256("{server_seed}:{client_seed}:{nonce}:{cursor}")
    float  = (first 7 bytes of digest >> 3) / 2**53

The cursor starts at 0 for each bet and advances once per float, so a game
that needs many values (a deck shuffle, a mine layout) still derives all of
them from the same (server_seed, client_seed, nonce) triple.
"""

import hashlib
import secrets
from typing import ClassVar

from fairplay.engine.validators import validate_nonce, validate_seed


class DeterministicRandomSource:
    """
    Stateless random source.

    All methods are class methods; the only state is the explicit cursor
    derived from the position in the requested sequence.
    """

    FLOAT_BITS: ClassVar[int] = 53
    FLOAT_BYTES: ClassVar[int] = 7

    @staticmethod
    def generate_server_seed(num_bytes: int = 32) -> str:
        """Cryptographically secure server seed (hex)."""
        return secrets.token_hex(num_bytes)

    @staticmethod
    def generate_client_seed(num_bytes: int = 16) -> str:
        """Random client seed (hex) for players who do not pick one."""
        return secrets.token_hex(num_bytes)

    @staticmethod
    def hash_server_seed(server_seed: str) -> str:
        """Commitment published before play: SHA-256 of the server seed."""
        validate_seed(server_seed, "server seed")
        return hashlib.sha256(server_seed.encode("utf-8")).hexdigest()

    @classmethod
    def derive_hash(cls, server_seed: str, client_seed: str, nonce: int, cursor: int = 0) -> str:
        """Hex digest behind the float at ``cursor`` (useful for display)."""
        return cls._digest(server_seed, client_seed, nonce, cursor).hex()

    @classmethod
    def next_floats(
        cls,
        server_seed: str,
        client_seed: str,
        nonce: int,
        count: int,
    ) -> tuple[float, ...]:
        """Derive ``count`` uniform floats in [0, 1).

        Args:
            server_seed: Secret server seed
            client_seed: Player's client seed
            nonce: Bet counter within the session
            count: Number of floats to derive

        Returns:
            Tuple of floats, identical for identical inputs

        Raises:
            InvalidSeed: If either seed is empty
        """
        validate_seed(server_seed, "server seed")
        validate_seed(client_seed, "client seed")
        validate_nonce(nonce)
        if count < 0:
            raise ValueError(f"Count cannot be negative, got {count}.")

        return tuple(
            cls._to_float(cls._digest(server_seed, client_seed, nonce, cursor))
            for cursor in range(count)
        )

    @classmethod
    def next_float(cls, server_seed: str, client_seed: str, nonce: int) -> float:
        """Single float at cursor 0."""
        return cls.next_floats(server_seed, client_seed, nonce, 1)[0]

    @staticmethod
    def _digest(server_seed: str, client_seed: str, nonce: int, cursor: int) -> bytes:
        message = f"{server_seed}:{client_seed}:{nonce}:{cursor}"
        return hashlib.sha256(message.encode("utf-8")).digest()

    @classmethod
    def _to_float(cls, digest: bytes) -> float:
        extra_bits = cls.FLOAT_BYTES * 8 - cls.FLOAT_BITS
        value = int.from_bytes(digest[:cls.FLOAT_BYTES], "big") >> extra_bits
        return value / (1 << cls.FLOAT_BITS)
