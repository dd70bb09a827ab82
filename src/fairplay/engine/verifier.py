"""
FairPlay - Verifier

Recomputes a bet from the revealed server seed and checks it against what
the player was shown:

1. SHA-256(revealed server seed) must equal the published commitment.
2. Re-deriving the outcome with the same resolver must give a
   field-for-field identical result.
"""

import hmac
import logging

from fairplay.engine.base import BetParams, GameType, ResolvedOutcome, VerificationReport
from fairplay.engine.errors import (
    FairPlayError,
    OutcomeMismatchError,
    SeedTamperedError,
)
from fairplay.engine.outcome import GameRules, derive_outcome
from fairplay.engine.rng import DeterministicRandomSource
from fairplay.engine.validators import validate_game

logger = logging.getLogger(__name__)


class Verifier:
    """Replays bets from revealed seeds."""

    def __init__(self, rules: GameRules | None = None) -> None:
        self.rules = rules or GameRules()

    def verify(
        self,
        revealed_server_seed: str,
        client_seed: str,
        nonce: int,
        game: GameType,
        params: BetParams,
        claimed_outcome: ResolvedOutcome,
        *,
        server_seed_hash: str | None = None,
        strict: bool = False,
    ) -> VerificationReport:
        """Verify one bet.

        Args:
            revealed_server_seed: Server seed revealed at rotation
            client_seed: Client seed used for the bet
            nonce: Nonce the bet consumed
            game: Game played
            params: Bet parameters the player submitted
            claimed_outcome: Outcome shown to the player
            server_seed_hash: Commitment published before play; defaults to
                the one recorded in ``claimed_outcome``
            strict: Raise instead of reporting a mismatch

        Returns:
            VerificationReport with both hashes and both outcomes

        Raises:
            SeedTamperedError: In strict mode, if the seed does not match the commitment
            OutcomeMismatchError: In strict mode, if the outcomes differ
            FairPlayError: In strict mode, for an empty seed, a bad nonce or
                parameters that do not fit the game
        """
        commitment = server_seed_hash or claimed_outcome.server_seed_hash
        computed_hash = None
        computed = None
        seed_valid = False
        outcome_valid = False
        error = None
        try:
            game = validate_game(game)
            computed_hash = DeterministicRandomSource.hash_server_seed(revealed_server_seed)
            seed_valid = hmac.compare_digest(computed_hash, commitment)
            if not seed_valid:
                raise SeedTamperedError(
                    "Revealed server seed does not match the published commitment."
                )
            computed = derive_outcome(
                revealed_server_seed,
                client_seed,
                nonce,
                game,
                params,
                self.rules,
                server_seed_hash=commitment,
            )
            outcome_valid = self.outcomes_match(computed, claimed_outcome)
            if not outcome_valid:
                raise OutcomeMismatchError(
                    f"Recomputed {game.value} outcome for nonce {nonce} differs from the "
                    "outcome shown."
                )
        except FairPlayError as exc:
            logger.warning("Verification failed for %s nonce %r: %s", game, nonce, exc)
            if strict:
                raise
            error = str(exc)

        return VerificationReport(
            match=seed_valid and outcome_valid,
            seed_valid=seed_valid,
            outcome_valid=outcome_valid,
            computed_server_seed_hash=computed_hash,
            provided_server_seed_hash=commitment,
            computed_outcome=computed,
            provided_outcome=claimed_outcome,
            error=error,
        )

    @staticmethod
    def outcomes_match(computed: ResolvedOutcome, provided: ResolvedOutcome) -> bool:
        """Structural comparison of two outcomes.

        A Minesweeper payout depends on the player's reveals, so only the
        committed board is compared for that game.
        """
        if (
            computed.game is not provided.game
            or computed.nonce != provided.nonce
            or computed.client_seed != provided.client_seed
            or computed.server_seed_hash != provided.server_seed_hash
            or computed.raw_values != tuple(provided.raw_values)
            or computed.result != provided.result
        ):
            return False
        if computed.game is GameType.MINESWEEPER:
            return True
        return computed.payout_multiplier == provided.payout_multiplier
