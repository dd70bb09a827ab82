"""
FairPlay - Input Validation Utilities

Provides validation functions for engine inputs. All validators either return
validated data or raise a descriptive InvalidSeed, InvalidNonce or
InvalidBetParameters.
"""

from decimal import Decimal

from fairplay.engine.base import (
    PARAMS_BY_GAME,
    BetParams,
    DiceDirection,
    DiceParams,
    GameType,
    LimboParams,
    MinesweeperParams,
    as_decimal,
)
from fairplay.engine.errors import InvalidBetParameters, InvalidNonce, InvalidSeed

LIMBO_MIN_TARGET = Decimal("1.01")

# Inclusive dice target range per direction; win chance stays within 1-98%.
DICE_TARGET_BOUNDS = {
    DiceDirection.UNDER: (Decimal(1), Decimal(98)),
    DiceDirection.OVER: (Decimal(2), Decimal(99)),
}


def validate_seed(seed: str, name: str = "server seed") -> str:
    """
    Validate a server or client seed.

    Args:
        seed: Seed value to validate
        name: Label used in the error message

    Returns:
        The seed, unchanged

    Raises:
        InvalidSeed: If the seed is not a non-empty string
    """
    if not isinstance(seed, str):
        raise InvalidSeed(f"The {name} must be a string, got {type(seed).__name__}.")
    if not seed.strip():
        raise InvalidSeed(f"The {name} must not be empty.")
    return seed


def validate_nonce(nonce: int) -> int:
    """Validate a nonce is a non-negative integer."""
    if isinstance(nonce, bool) or not isinstance(nonce, int):
        raise InvalidNonce(f"Nonce must be an integer, got {type(nonce).__name__}.")
    if nonce < 0:
        raise InvalidNonce(f"Nonce cannot be negative, got {nonce}.")
    return nonce


def validate_bet_amount(amount) -> Decimal:
    """
    Validate a bet amount.

    Raises:
        InvalidBetParameters: If the amount is not a positive number
    """
    try:
        value = as_decimal(amount)
    except ValueError as exc:
        raise InvalidBetParameters(f"Bet amount must be a number, got {amount!r}.") from exc
    if not value.is_finite() or value <= 0:
        raise InvalidBetParameters(f"Bet amount must be positive, got {amount}.")
    return value


def validate_game(game) -> GameType:
    """Normalize a game identifier (enum member or its string value)."""
    try:
        return GameType(game)
    except ValueError as exc:
        raise InvalidBetParameters(f"Unknown game {game!r}.") from exc


def validate_params_for_game(game: GameType, params: BetParams) -> BetParams:
    """Check the parameter object matches the game being played."""
    game = validate_game(game)
    expected = PARAMS_BY_GAME[game]
    if not isinstance(params, expected):
        raise InvalidBetParameters(
            f"{game.value} bets need {expected.__name__}, got {type(params).__name__}."
        )
    return params


def validate_dice_params(params: DiceParams) -> DiceParams:
    """
    Validate dice target and direction.

    Roll under accepts targets 1-98, roll over accepts 2-99, so the win
    chance always stays between 1% and 98%.

    Raises:
        InvalidBetParameters: If the target is out of range or too precise
    """
    target = params.target
    if not target.is_finite():
        raise InvalidBetParameters(f"Target must be a number, got {target}.")
    if target.as_tuple().exponent < -2:
        raise InvalidBetParameters(f"Target allows at most two decimals, got {target}.")

    low, high = DICE_TARGET_BOUNDS[params.direction]
    if not (low <= target <= high):
        raise InvalidBetParameters(
            f"Target must be between {low} and {high} for roll {params.direction.value}, "
            f"got {target}."
        )
    return params


def validate_limbo_params(params: LimboParams, max_multiplier: Decimal) -> LimboParams:
    """
    Validate a limbo target multiplier.

    Raises:
        InvalidBetParameters: If the target is below 1.01 or above the maximum
    """
    target = params.target
    if not target.is_finite():
        raise InvalidBetParameters(f"Target multiplier must be a number, got {target}.")
    if target < LIMBO_MIN_TARGET:
        raise InvalidBetParameters(
            f"Target multiplier must be at least {LIMBO_MIN_TARGET}, got {target}."
        )
    if target > max_multiplier:
        raise InvalidBetParameters(
            f"Target multiplier must be at most {max_multiplier}, got {target}."
        )
    return params


def validate_minesweeper_params(params: MinesweeperParams) -> MinesweeperParams:
    """
    Validate board dimensions and mine count.

    Raises:
        InvalidBetParameters: If the board is too small or the mine count
            leaves no safe cell (or no mine)
    """
    for name in ("width", "height", "mine_count"):
        value = getattr(params, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidBetParameters(f"{name} must be an integer, got {type(value).__name__}.")

    if params.width < 1 or params.height < 1:
        raise InvalidBetParameters(
            f"Board must be at least 1x1, got {params.width}x{params.height}."
        )

    total = params.total_cells
    if total < 2:
        raise InvalidBetParameters("Board needs at least two cells.")

    if not (1 <= params.mine_count <= total - 1):
        raise InvalidBetParameters(
            f"Mine count must be between 1 and {total - 1}, got {params.mine_count}."
        )
    return params
