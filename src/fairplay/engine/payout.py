"""
FairPlay - Payout Calculator

Turns resolved results into total-return multipliers (a multiplier of 2
returns twice the stake) and multipliers into payout amounts.
"""

from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import ClassVar

from fairplay.engine.base import (
    BaccaratParams,
    BaccaratResult,
    BaccaratSide,
    BetParams,
    DiceDirection,
    DiceResult,
    GameResult,
    LimboResult,
)
from fairplay.engine.validators import DICE_TARGET_BOUNDS, validate_bet_amount

HUNDRED = Decimal(100)
ZERO = Decimal("0")
TARGET_STEP = Decimal("0.01")


@dataclass(frozen=True)
class DiceTableRow:
    """One target of the dice lookup table."""
    target: Decimal
    win_chance: Decimal
    multiplier: Decimal
    payout: Decimal

    def to_dict(self) -> dict:
        return {
            "target": str(self.target),
            "win_chance": str(self.win_chance),
            "multiplier": str(self.multiplier),
            "payout": str(self.payout),
        }


class PayoutCalculator:
    """Stateless payout rules shared by every game."""

    # Baccarat total-return multipliers for a winning bet.
    BACCARAT_PAYOUTS: ClassVar[dict[BaccaratSide, Decimal]] = {
        BaccaratSide.PLAYER: Decimal("2"),
        BaccaratSide.BANKER: Decimal("1.95"),
        BaccaratSide.TIE: Decimal("8"),
    }

    # (max win chance, decimal places) - smaller chances keep more precision.
    DICE_ROUNDING_TIERS: ClassVar[tuple[tuple[Decimal, int], ...]] = (
        (Decimal(5), 6),
        (Decimal(20), 5),
    )
    DICE_DEFAULT_PLACES: ClassVar[int] = 4

    AMOUNT_PLACES: ClassVar[Decimal] = Decimal("0.01")

    @classmethod
    def dice_multiplier(cls, win_chance: Decimal, house_edge: Decimal) -> Decimal:
        """
        Fair dice multiplier minus the house edge.

        Args:
            win_chance: Win chance in percent (1-98)
            house_edge: House edge in percent

        Returns:
            (100 - house_edge) / win_chance, rounded to the win chance's tier
        """
        if win_chance <= 0:
            raise ValueError(f"Win chance must be positive, got {win_chance}.")
        multiplier = (HUNDRED - house_edge) / win_chance

        places = cls.DICE_DEFAULT_PLACES
        for max_chance, tier_places in cls.DICE_ROUNDING_TIERS:
            if win_chance <= max_chance:
                places = tier_places
                break
        return multiplier.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)

    @classmethod
    def dice_table(
        cls,
        direction: DiceDirection,
        bet_amount: Decimal,
        house_edge: Decimal,
    ) -> list[DiceTableRow]:
        """
        Every valid dice target for a direction with its odds and payout.

        Args:
            direction: Roll under or roll over
            bet_amount: Stake used for the payout column
            house_edge: House edge in percent

        Returns:
            Rows in ascending target order, one per 0.01 step

        Raises:
            InvalidBetParameters: If the stake is not a positive number
        """
        direction = DiceDirection(direction)
        bet_amount = validate_bet_amount(bet_amount)
        low, high = DICE_TARGET_BOUNDS[direction]
        rows = []
        target = low
        while target <= high:
            chance = target if direction is DiceDirection.UNDER else HUNDRED - target
            multiplier = cls.dice_multiplier(chance, house_edge)
            rows.append(DiceTableRow(
                target=target,
                win_chance=chance,
                multiplier=multiplier,
                payout=cls.payout_amount(bet_amount, multiplier),
            ))
            target += TARGET_STEP
        return rows

    @classmethod
    def for_dice(cls, result: DiceResult, house_edge: Decimal) -> Decimal:
        if not result.won:
            return ZERO
        return cls.dice_multiplier(result.win_chance, house_edge)

    @classmethod
    def for_limbo(cls, result: LimboResult) -> Decimal:
        return result.target if result.won else ZERO

    @classmethod
    def for_baccarat(cls, result: BaccaratResult, params: BaccaratParams) -> Decimal:
        """Winning side pays its table multiplier; every other bet pays 0."""
        if params.side is not result.winner:
            return ZERO
        return cls.BACCARAT_PAYOUTS[params.side]

    @classmethod
    def payout_multiplier(cls, result: GameResult, params: BetParams, house_edge: Decimal) -> Decimal | None:
        """Multiplier for any resolved result; None for a Minesweeper board."""
        if isinstance(result, DiceResult):
            return cls.for_dice(result, house_edge)
        if isinstance(result, LimboResult):
            return cls.for_limbo(result)
        if isinstance(result, BaccaratResult):
            return cls.for_baccarat(result, params)
        return None

    @classmethod
    def payout_amount(cls, bet_amount: Decimal, multiplier: Decimal | None) -> Decimal:
        """Stake times multiplier, rounded down to cents."""
        if multiplier is None:
            return ZERO
        return (bet_amount * multiplier).quantize(cls.AMOUNT_PLACES, rounding=ROUND_DOWN)

    @classmethod
    def expected_return(cls, win_chance: Decimal, multiplier: Decimal) -> Decimal:
        """Return to player as a fraction of the stake (1 - house edge for fair games)."""
        return (win_chance / HUNDRED) * multiplier

    @classmethod
    def house_edge_of(cls, win_chance: Decimal, multiplier: Decimal) -> Decimal:
        """Effective house edge in percent implied by a win chance and multiplier."""
        return (1 - cls.expected_return(win_chance, multiplier)) * HUNDRED
