"""
FairPlay - Dice Resolver

Roll a number between 0.00 and 99.99 and win if it lands on the chosen side
of the target. One float per bet:

    roll = floor(float * 10000) / 100

All methods are stateless class methods operating on immutable data.
"""

import math
from decimal import Decimal
from typing import ClassVar, Sequence

from fairplay.engine.base import DiceDirection, DiceParams, DiceResult
from fairplay.engine.validators import validate_dice_params


class DiceResolver:
    """Stateless resolver for Dice bets."""

    FLOATS_NEEDED: ClassVar[int] = 1
    RESOLUTION: ClassVar[int] = 10000

    @classmethod
    def roll_from_float(cls, value: float) -> Decimal:
        """Map a float in [0, 1) to a two-decimal roll in [0.00, 99.99]."""
        if not (0.0 <= value < 1.0):
            raise ValueError(f"Random value must be in [0, 1), got {value}.")
        return Decimal(math.floor(value * cls.RESOLUTION)) / 100

    @classmethod
    def win_chance(cls, params: DiceParams) -> Decimal:
        """Win chance in percent for a target and direction."""
        if params.direction is DiceDirection.UNDER:
            return params.target
        return Decimal(100) - params.target

    @classmethod
    def is_win(cls, roll: Decimal, params: DiceParams) -> bool:
        if params.direction is DiceDirection.UNDER:
            return roll < params.target
        return roll > params.target

    @classmethod
    def resolve(cls, floats: Sequence[float], params: DiceParams) -> DiceResult:
        """Resolve a dice bet.

        Args:
            floats: Random values from the random source (first one is used)
            params: Target and direction

        Returns:
            DiceResult with the roll and whether it won

        Raises:
            InvalidBetParameters: If the target is out of range
        """
        validate_dice_params(params)
        roll = cls.roll_from_float(floats[0])
        return DiceResult(
            roll=roll,
            target=params.target,
            direction=params.direction,
            won=cls.is_win(roll, params),
            win_chance=cls.win_chance(params),
        )
