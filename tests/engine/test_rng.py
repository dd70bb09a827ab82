"""
FairPlay - Deterministic Random Source Tests
"""

import pytest

from fairplay.engine.errors import InvalidNonce, InvalidSeed
from fairplay.engine.rng import DeterministicRandomSource


class TestSeeds:
    """Tests for seed generation and hashing."""

    def test_server_seed_is_hex_of_requested_size(self):
        seed = DeterministicRandomSource.generate_server_seed(32)
        assert len(seed) == 64
        int(seed, 16)

    def test_client_seed_size(self):
        assert len(DeterministicRandomSource.generate_client_seed(8)) == 16

    def test_generated_seeds_differ(self):
        seeds = {DeterministicRandomSource.generate_server_seed() for _ in range(20)}
        assert len(seeds) == 20

    def test_hash_server_seed_known_vector(self):
        assert DeterministicRandomSource.hash_server_seed("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_hash_rejects_empty_seed(self):
        with pytest.raises(InvalidSeed):
            DeterministicRandomSource.hash_server_seed("")


class TestNextFloats:
    """Tests for DeterministicRandomSource.next_floats()."""

    def test_deterministic(self, server_seed, client_seed):
        first = DeterministicRandomSource.next_floats(server_seed, client_seed, 7, 10)
        second = DeterministicRandomSource.next_floats(server_seed, client_seed, 7, 10)
        assert first == second

    def test_returns_requested_count(self, server_seed, client_seed):
        assert len(DeterministicRandomSource.next_floats(server_seed, client_seed, 0, 51)) == 51

    def test_zero_count_is_empty(self, server_seed, client_seed):
        assert DeterministicRandomSource.next_floats(server_seed, client_seed, 0, 0) == ()

    def test_negative_count_raises(self, server_seed, client_seed):
        with pytest.raises(ValueError, match="Count cannot be negative"):
            DeterministicRandomSource.next_floats(server_seed, client_seed, 0, -1)

    def test_prefix_stable(self, server_seed, client_seed):
        """Asking for more floats never changes the earlier ones."""
        short = DeterministicRandomSource.next_floats(server_seed, client_seed, 3, 2)
        long = DeterministicRandomSource.next_floats(server_seed, client_seed, 3, 5)
        assert long[:2] == short

    def test_range(self, server_seed, client_seed):
        for nonce in range(50):
            for value in DeterministicRandomSource.next_floats(server_seed, client_seed, nonce, 4):
                assert 0.0 <= value < 1.0

    @pytest.mark.parametrize("change", ["server", "client", "nonce"])
    def test_any_input_changes_output(self, server_seed, client_seed, change):
        base = DeterministicRandomSource.next_floats(server_seed, client_seed, 1, 3)
        if change == "server":
            other = DeterministicRandomSource.next_floats(server_seed + "x", client_seed, 1, 3)
        elif change == "client":
            other = DeterministicRandomSource.next_floats(server_seed, client_seed + "x", 1, 3)
        else:
            other = DeterministicRandomSource.next_floats(server_seed, client_seed, 2, 3)
        assert other != base

    @pytest.mark.parametrize("server,client", [("", "c"), ("s", ""), ("s", "  ")])
    def test_empty_seed_raises(self, server, client):
        with pytest.raises(InvalidSeed):
            DeterministicRandomSource.next_floats(server, client, 0, 1)

    def test_negative_nonce_raises(self, server_seed, client_seed):
        with pytest.raises(InvalidNonce):
            DeterministicRandomSource.next_floats(server_seed, client_seed, -1, 1)

    def test_next_float_is_first_value(self, server_seed, client_seed):
        assert DeterministicRandomSource.next_float(server_seed, client_seed, 4) == (
            DeterministicRandomSource.next_floats(server_seed, client_seed, 4, 3)[0]
        )

    def test_roughly_uniform(self, server_seed, client_seed):
        values = DeterministicRandomSource.next_floats(server_seed, client_seed, 0, 4000)
        low = sum(1 for v in values if v < 0.5)
        assert 1800 < low < 2200


class TestFloatConversion:
    """Tests for the digest-to-float mapping."""

    def test_zero_digest(self):
        assert DeterministicRandomSource._to_float(bytes(32)) == 0.0

    def test_max_digest_stays_below_one(self):
        value = DeterministicRandomSource._to_float(b"\xff" * 32)
        assert value == (2 ** 53 - 1) / 2 ** 53
        assert value < 1.0

    def test_uses_first_seven_bytes_only(self):
        digest = bytes([0x80]) + bytes(6) + b"\xff" * 25
        assert DeterministicRandomSource._to_float(digest) == 0.5

    def test_derive_hash_matches_float(self, server_seed, client_seed):
        digest = DeterministicRandomSource.derive_hash(server_seed, client_seed, 9, 2)
        assert len(digest) == 64
        assert DeterministicRandomSource._to_float(bytes.fromhex(digest)) == (
            DeterministicRandomSource.next_floats(server_seed, client_seed, 9, 3)[2]
        )
