"""
FairPlay - Limbo Resolver

Crash-style multiplier game. A single float is turned into a multiplier
through the inverse CDF of the house-edged distribution:

    multiplier = max(1.00, (100 - house_edge) / (100 * float))

truncated to two decimals. The bet wins when the multiplier reaches the
player's target.
"""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import ClassVar, Sequence

from fairplay.engine.base import LimboParams, LimboResult
from fairplay.engine.validators import validate_limbo_params

HUNDRED = Decimal(100)
TWO_PLACES = Decimal("0.01")


class LimboResolver:
    """Stateless resolver for Limbo bets."""

    FLOATS_NEEDED: ClassVar[int] = 1
    MIN_MULTIPLIER: ClassVar[Decimal] = Decimal("1.00")
    DEFAULT_MAX_MULTIPLIER: ClassVar[Decimal] = Decimal("1000000")

    @classmethod
    def multiplier_from_float(
        cls,
        value: float,
        house_edge: Decimal,
        max_multiplier: Decimal = DEFAULT_MAX_MULTIPLIER,
    ) -> Decimal:
        """Map a float in [0, 1) to a result multiplier."""
        if not (0.0 <= value < 1.0):
            raise ValueError(f"Random value must be in [0, 1), got {value}.")
        cap = max_multiplier.quantize(TWO_PLACES, rounding=ROUND_DOWN)
        if value == 0.0:
            return cap

        raw = (HUNDRED - house_edge) / (HUNDRED * Decimal(value))
        multiplier = raw.quantize(TWO_PLACES, rounding=ROUND_DOWN) if raw < cap else cap
        return max(cls.MIN_MULTIPLIER, multiplier)

    @classmethod
    def win_chance(cls, target: Decimal, house_edge: Decimal) -> Decimal:
        """Win chance in percent, bounded to (0, 100]."""
        chance = (HUNDRED - house_edge) / target
        return min(HUNDRED, chance).quantize(Decimal("0.000001"), rounding=ROUND_HALF_UP)

    @classmethod
    def resolve(
        cls,
        floats: Sequence[float],
        params: LimboParams,
        *,
        house_edge: Decimal,
        max_multiplier: Decimal = DEFAULT_MAX_MULTIPLIER,
    ) -> LimboResult:
        """Resolve a limbo bet.

        Args:
            floats: Random values from the random source (first one is used)
            params: Target multiplier
            house_edge: House edge in percent
            max_multiplier: Highest target (and result) allowed

        Returns:
            LimboResult with the rolled multiplier and whether it won

        Raises:
            InvalidBetParameters: If the target is below 1.01 or above the maximum
        """
        validate_limbo_params(params, max_multiplier)
        multiplier = cls.multiplier_from_float(floats[0], house_edge, max_multiplier)
        return LimboResult(
            multiplier=multiplier,
            target=params.target,
            won=multiplier >= params.target,
            win_chance=cls.win_chance(params.target, house_edge),
        )
