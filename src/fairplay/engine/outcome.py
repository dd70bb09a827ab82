"""
FairPlay - Outcome Derivation

Single entry point that maps (server seed, client seed, nonce, game, params)
to a ResolvedOutcome. Both the betting path and the verifier go through
here, so a verification always replays exactly what the bet did.
"""

from dataclasses import dataclass
from decimal import Decimal

from fairplay.config.settings import Settings
from fairplay.engine.baccarat import BaccaratResolver
from fairplay.engine.base import (
    BetParams,
    GameType,
    ResolvedOutcome,
    as_decimal,
)
from fairplay.engine.dice import DiceResolver
from fairplay.engine.limbo import LimboResolver
from fairplay.engine.minesweeper import MinesweeperResolver
from fairplay.engine.payout import PayoutCalculator
from fairplay.engine.rng import DeterministicRandomSource
from fairplay.engine.validators import (
    validate_dice_params,
    validate_game,
    validate_limbo_params,
    validate_minesweeper_params,
    validate_params_for_game,
)


@dataclass(frozen=True)
class GameRules:
    """
    Tunable game math.

    Attributes:
        house_edge: House edge in percent (dice and limbo)
        limbo_max_multiplier: Highest limbo target and result
        minesweeper_range_factor: Multiplier gained by clearing a board
    """
    house_edge: Decimal = Decimal("1")
    limbo_max_multiplier: Decimal = Decimal("1000000")
    minesweeper_range_factor: Decimal = Decimal("5")

    @classmethod
    def from_settings(cls, settings: Settings) -> "GameRules":
        return cls(
            house_edge=as_decimal(settings.house_edge_percent),
            limbo_max_multiplier=as_decimal(settings.limbo_max_multiplier),
            minesweeper_range_factor=as_decimal(settings.minesweeper_range_factor),
        )


def validate_bet(game: GameType, params: BetParams, rules: GameRules) -> None:
    """Run every parameter check for a bet without drawing randomness."""
    validate_params_for_game(game, params)
    if game is GameType.DICE:
        validate_dice_params(params)
    elif game is GameType.LIMBO:
        validate_limbo_params(params, rules.limbo_max_multiplier)
    elif game is GameType.MINESWEEPER:
        validate_minesweeper_params(params)


def floats_needed(game: GameType, params: BetParams) -> int:
    if game is GameType.DICE:
        return DiceResolver.FLOATS_NEEDED
    if game is GameType.LIMBO:
        return LimboResolver.FLOATS_NEEDED
    if game is GameType.BACCARAT:
        return BaccaratResolver.FLOATS_NEEDED
    return MinesweeperResolver.floats_needed(params)


def derive_outcome(
    server_seed: str,
    client_seed: str,
    nonce: int,
    game: GameType,
    params: BetParams,
    rules: GameRules,
    server_seed_hash: str | None = None,
) -> ResolvedOutcome:
    """
    Derive the outcome of one bet.

    Args:
        server_seed: Secret (or revealed) server seed
        client_seed: Client seed in effect for the bet
        nonce: Nonce the bet consumes
        game: Game being played
        params: Game-specific bet parameters
        rules: House edge and game limits
        server_seed_hash: Commitment to record; computed from the seed if omitted

    Returns:
        ResolvedOutcome, with payout_multiplier left as None for Minesweeper

    Raises:
        InvalidSeed: If a seed is empty
        InvalidBetParameters: If the parameters are invalid for the game
    """
    game = validate_game(game)
    validate_bet(game, params, rules)
    floats = DeterministicRandomSource.next_floats(
        server_seed, client_seed, nonce, floats_needed(game, params)
    )

    if game is GameType.DICE:
        result = DiceResolver.resolve(floats, params)
    elif game is GameType.LIMBO:
        result = LimboResolver.resolve(
            floats,
            params,
            house_edge=rules.house_edge,
            max_multiplier=rules.limbo_max_multiplier,
        )
    elif game is GameType.BACCARAT:
        result = BaccaratResolver.resolve(floats)
    else:
        result = MinesweeperResolver.generate_board(floats, params)
    multiplier = PayoutCalculator.payout_multiplier(result, params, rules.house_edge)

    if server_seed_hash is None:
        server_seed_hash = DeterministicRandomSource.hash_server_seed(server_seed)

    return ResolvedOutcome(
        game=game,
        nonce=nonce,
        client_seed=client_seed,
        server_seed_hash=server_seed_hash,
        raw_values=floats,
        result=result,
        payout_multiplier=multiplier,
    )
