"""
FairPlay - Engine Service

High-level entry point for callers (bet APIs, ledgers, audit pages). Ties
seed sessions, outcome derivation, payouts and verification together and
owns the nonce discipline: a bet either resolves and advances the nonce by
exactly one, or fails and leaves the session untouched.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal

from fairplay.config.settings import Settings, get_settings
from fairplay.engine.base import (
    BetParams,
    BetRequest,
    GameType,
    MinesweeperBoard,
    ResolvedOutcome,
    VerificationReport,
)
from fairplay.engine.errors import NonceReuseError
from fairplay.engine.minesweeper import MinesweeperResolver, MinesweeperRound
from fairplay.engine.outcome import GameRules, derive_outcome
from fairplay.engine.payout import PayoutCalculator
from fairplay.engine.session import SeedSession
from fairplay.engine.validators import validate_bet_amount, validate_game
from fairplay.engine.verifier import Verifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """
    Result of one resolved bet.

    Attributes:
        outcome: Outcome to show the player and log for verification
        payout_multiplier: Total-return multiplier (None for an open
            Minesweeper round)
        payout: Stake times multiplier
        new_nonce: Session nonce after the bet
        bet_amount: Stake
        round: Opening Minesweeper round state, None for other games
    """
    outcome: ResolvedOutcome
    payout_multiplier: Decimal | None
    payout: Decimal
    new_nonce: int
    bet_amount: Decimal
    round: MinesweeperRound | None = None

    @property
    def result_hash(self) -> str:
        return self.outcome.result_hash


@dataclass(frozen=True)
class Rotation:
    """Seed rotation: the retired session, its revealed seed and its successor."""
    revealed_server_seed: str
    previous: SeedSession
    new_session: SeedSession


class FairPlayEngine:
    """Coordinates sessions, resolvers, payouts and verification.

    The engine itself holds no per-player state; sessions are passed in by
    the caller.
    """

    def __init__(self, settings: Settings | None = None, rules: GameRules | None = None) -> None:
        self.settings = settings or get_settings()
        self.rules = rules or GameRules.from_settings(self.settings)
        self.verifier = Verifier(self.rules)

    # -- Sessions --------------------------------------------------------

    def create_session(self, client_seed: str | None = None) -> SeedSession:
        """Open a session with a fresh server seed commitment."""
        session = SeedSession.new(
            client_seed,
            server_seed_bytes=self.settings.server_seed_bytes,
            client_seed_bytes=self.settings.client_seed_bytes,
        )
        logger.info(
            "Created session %s with commitment %s",
            session.session_id,
            session.server_seed_hash,
        )
        return session

    def rotate_seeds(self, session: SeedSession, new_client_seed: str | None = None) -> Rotation:
        """Reveal the session's server seed and start a fresh session.

        Args:
            session: Session to retire
            new_client_seed: Client seed for the new session; the current one
                is kept if omitted

        Returns:
            Rotation with the revealed seed and the new session

        Raises:
            SessionClosedError: If the session was already rotated
            InvalidSeed: If the new client seed is empty
        """
        client_seed = session.client_seed if new_client_seed is None else new_client_seed
        # Build the successor first so a bad client seed leaves the old session live.
        new_session = SeedSession.new(
            client_seed,
            server_seed_bytes=self.settings.server_seed_bytes,
            client_seed_bytes=self.settings.client_seed_bytes,
        )
        with session.lock:
            session.ensure_active()
            revealed = session.retire()

        logger.info(
            "Rotated session %s (final nonce %s, commitment %s) to %s",
            session.session_id,
            session.nonce,
            session.server_seed_hash,
            new_session.session_id,
        )
        return Rotation(revealed_server_seed=revealed, previous=session, new_session=new_session)

    # -- Betting ---------------------------------------------------------

    def resolve(
        self,
        session: SeedSession,
        game: GameType,
        params: BetParams,
        *,
        bet_amount: Decimal | int | str = 1,
        nonce: int | None = None,
    ) -> Resolution:
        """Resolve one bet on a session and advance its nonce.

        Args:
            session: Session the bet draws its randomness from
            game: Game being played
            params: Game-specific parameters
            bet_amount: Stake (must be positive)
            nonce: Nonce the caller expects to consume; rejected unless it
                equals the session's current nonce

        Returns:
            Resolution with the outcome, payout and new nonce

        Raises:
            InvalidBetParameters: If the stake or parameters are invalid
            NonceReuseError: If ``nonce`` is not the session's current nonce
            SessionClosedError: If the session was rotated
        """
        game = validate_game(game)
        amount = validate_bet_amount(bet_amount)

        with session.lock:
            session.ensure_active()
            if nonce is not None and nonce != session.nonce:
                logger.warning(
                    "Rejected nonce %s on session %s (current %s)",
                    nonce,
                    session.session_id,
                    session.nonce,
                )
                raise NonceReuseError(expected=session.nonce, provided=nonce)

            outcome = derive_outcome(
                session.server_seed,
                session.client_seed,
                session.nonce,
                game,
                params,
                self.rules,
                server_seed_hash=session.server_seed_hash,
            )
            new_nonce = session.advance_nonce()

        round_ = None
        if game is GameType.MINESWEEPER:
            round_ = self.start_round(outcome.result)

        logger.debug(
            "Resolved %s on session %s nonce %s: multiplier %s",
            game.value,
            session.session_id,
            outcome.nonce,
            outcome.payout_multiplier,
        )
        return Resolution(
            outcome=outcome,
            payout_multiplier=outcome.payout_multiplier,
            payout=PayoutCalculator.payout_amount(amount, outcome.payout_multiplier),
            new_nonce=new_nonce,
            bet_amount=amount,
            round=round_,
        )

    def resolve_request(
        self,
        session: SeedSession,
        request: BetRequest,
        *,
        nonce: int | None = None,
    ) -> Resolution:
        """Resolve a BetRequest (see ``resolve``)."""
        return self.resolve(
            session,
            request.game,
            request.params,
            bet_amount=request.bet_amount,
            nonce=nonce,
        )

    # -- Minesweeper rounds ----------------------------------------------

    def start_round(self, board: MinesweeperBoard) -> MinesweeperRound:
        return MinesweeperResolver.start(
            MinesweeperResolver.new_round(board, self.rules.minesweeper_range_factor)
        )

    def reveal(self, round_: MinesweeperRound, x: int, y: int) -> MinesweeperRound:
        return MinesweeperResolver.reveal(round_, x, y)

    def cash_out(self, round_: MinesweeperRound) -> MinesweeperRound:
        return MinesweeperResolver.cash_out(round_)

    def settle(self, resolution: Resolution, round_: MinesweeperRound) -> Resolution:
        """Attach the final multiplier of a finished Minesweeper round.

        Raises:
            ValueError: If the round is still open or belongs to another bet
        """
        if not round_.is_finished:
            raise ValueError(f"Round is still {round_.status.value}; nothing to settle.")
        if round_.board != resolution.outcome.result:
            raise ValueError("Round does not belong to this bet.")

        multiplier = round_.payout_multiplier
        return Resolution(
            outcome=resolution.outcome.with_payout(multiplier),
            payout_multiplier=multiplier,
            payout=PayoutCalculator.payout_amount(resolution.bet_amount, multiplier),
            new_nonce=resolution.new_nonce,
            bet_amount=resolution.bet_amount,
            round=round_,
        )

    # -- Verification ----------------------------------------------------

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
        """Replay a bet from its revealed seed (see ``Verifier.verify``)."""
        return self.verifier.verify(
            revealed_server_seed,
            client_seed,
            nonce,
            game,
            params,
            claimed_outcome,
            server_seed_hash=server_seed_hash,
            strict=strict,
        )


# -- Module-level convenience functions ----------------------------------

_engine_instance: FairPlayEngine | None = None
_engine_lock = threading.Lock()


def get_engine() -> FairPlayEngine:
    """Get or create the default engine built from settings."""
    global _engine_instance
    with _engine_lock:
        if _engine_instance is None:
            _engine_instance = FairPlayEngine()
        return _engine_instance


def create_session(client_seed: str | None = None) -> SeedSession:
    """Open a session on the default engine."""
    return get_engine().create_session(client_seed)


def resolve(
    session: SeedSession,
    game: GameType,
    params: BetParams,
    *,
    bet_amount: Decimal | int | str = 1,
    nonce: int | None = None,
) -> Resolution:
    """Resolve a bet on the default engine."""
    return get_engine().resolve(session, game, params, bet_amount=bet_amount, nonce=nonce)


def rotate_seeds(session: SeedSession, new_client_seed: str | None = None) -> Rotation:
    """Rotate seeds on the default engine."""
    return get_engine().rotate_seeds(session, new_client_seed)


def verify(
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
    """Verify a bet on the default engine."""
    return get_engine().verify(
        revealed_server_seed,
        client_seed,
        nonce,
        game,
        params,
        claimed_outcome,
        server_seed_hash=server_seed_hash,
        strict=strict,
    )
