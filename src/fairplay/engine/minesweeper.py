"""
FairPlay - Minesweeper Resolver

Mines are placed once per bet from the random source, then the round is
played out through explicit state transitions driven by the caller.

Round Rules:
- Mines are drawn without replacement from the row-major cell list, one
  float per mine: index = floor(float * remaining_cells)
- Revealing a mine loses the round and discloses every mine
- Each safe reveal raises the multiplier to
  1 + (cleared / total_safe) * range_factor
- Cash out any time after the first safe reveal
- Clearing every safe cell wins automatically at the final multiplier

State machine: IDLE -> PLAYING -> {WON, LOST, CASHED_OUT}
"""

import math
from dataclasses import dataclass, replace
from decimal import ROUND_DOWN, Decimal
from typing import ClassVar, Iterable, Sequence

from fairplay.engine.base import MinesweeperBoard, MinesweeperParams, RoundStatus
from fairplay.engine.errors import InvalidMoveError
from fairplay.engine.validators import validate_minesweeper_params

MULTIPLIER_PLACES = Decimal("0.0001")


@dataclass(frozen=True)
class MinesweeperRound:
    """
    Immutable snapshot of a Minesweeper round.

    Attributes:
        board: Committed mine layout
        status: Current state
        revealed: Safe cells revealed so far, in order
        hit: The mine that ended the round, if any
        multiplier: Current payout multiplier
        range_factor: Multiplier gained by clearing every safe cell
    """
    board: MinesweeperBoard
    status: RoundStatus = RoundStatus.IDLE
    revealed: tuple[tuple[int, int], ...] = ()
    hit: tuple[int, int] | None = None
    multiplier: Decimal = Decimal("1")
    range_factor: Decimal = Decimal("5")

    @property
    def cleared(self) -> int:
        return len(self.revealed)

    @property
    def is_finished(self) -> bool:
        return self.status.is_finished

    @property
    def can_cash_out(self) -> bool:
        return self.status is RoundStatus.PLAYING and self.cleared >= 1

    @property
    def visible_mines(self) -> tuple[tuple[int, int], ...]:
        """Mines the player may see: all of them once the round is over."""
        return self.board.mines if self.is_finished else ()

    @property
    def payout_multiplier(self) -> Decimal | None:
        """Settled multiplier, or None while the round is still open."""
        if self.status is RoundStatus.LOST:
            return Decimal("0")
        if self.status in (RoundStatus.WON, RoundStatus.CASHED_OUT):
            return self.multiplier
        return None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "width": self.board.width,
            "height": self.board.height,
            "mine_count": len(self.board.mines),
            "revealed": [list(cell) for cell in self.revealed],
            "hit": list(self.hit) if self.hit else None,
            "multiplier": str(self.multiplier),
            "mines": [list(m) for m in self.visible_mines],
        }


class MinesweeperResolver:
    """Stateless engine for Minesweeper boards and rounds.

    All methods are class methods; rounds are passed in and returned,
    never stored.
    """

    DEFAULT_RANGE_FACTOR: ClassVar[Decimal] = Decimal("5")

    # -- Board generation ------------------------------------------------

    @classmethod
    def floats_needed(cls, params: MinesweeperParams) -> int:
        return params.mine_count

    @classmethod
    def generate_board(cls, floats: Sequence[float], params: MinesweeperParams) -> MinesweeperBoard:
        """
        Place mines by drawing cells without replacement.

        Args:
            floats: One random value per mine
            params: Board size and mine count

        Returns:
            MinesweeperBoard with mines in draw order

        Raises:
            InvalidBetParameters: If the board or mine count is invalid
        """
        validate_minesweeper_params(params)
        if len(floats) < params.mine_count:
            raise ValueError(
                f"Placing {params.mine_count} mines needs {params.mine_count} random values, "
                f"got {len(floats)}."
            )

        remaining = list(range(params.total_cells))
        mines = []
        for value in floats[:params.mine_count]:
            index = math.floor(value * len(remaining))
            cell = remaining.pop(index)
            mines.append((cell % params.width, cell // params.width))

        return MinesweeperBoard(width=params.width, height=params.height, mines=tuple(mines))

    # -- Round transitions -----------------------------------------------

    @classmethod
    def multiplier_for(cls, cleared: int, total_safe: int, range_factor: Decimal) -> Decimal:
        """Multiplier after ``cleared`` safe reveals, truncated to four places."""
        raw = 1 + (Decimal(cleared) / Decimal(total_safe)) * range_factor
        return raw.quantize(MULTIPLIER_PLACES, rounding=ROUND_DOWN)

    @classmethod
    def new_round(
        cls,
        board: MinesweeperBoard,
        range_factor: Decimal = DEFAULT_RANGE_FACTOR,
    ) -> MinesweeperRound:
        """Idle round for a committed board."""
        return MinesweeperRound(board=board, range_factor=range_factor)

    @classmethod
    def start(cls, round_: MinesweeperRound) -> MinesweeperRound:
        """IDLE -> PLAYING."""
        if round_.status is not RoundStatus.IDLE:
            raise InvalidMoveError(f"Round already started (status: {round_.status.value}).")
        return replace(round_, status=RoundStatus.PLAYING)

    @classmethod
    def reveal(cls, round_: MinesweeperRound, x: int, y: int) -> MinesweeperRound:
        """
        Reveal one cell.

        Returns:
            LOST if the cell holds a mine, WON if it was the last safe cell,
            otherwise PLAYING with the multiplier raised

        Raises:
            InvalidMoveError: If the round is not in play, a coordinate is not
                an integer, the cell is off the board or it was already revealed
        """
        if round_.status is not RoundStatus.PLAYING:
            raise InvalidMoveError(f"Cannot reveal while round is {round_.status.value}.")

        for value in (x, y):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidMoveError(
                    f"Cell coordinates must be integers, got ({x!r}, {y!r})."
                )

        board = round_.board
        if not board.contains(x, y):
            raise InvalidMoveError(
                f"Cell ({x}, {y}) is outside the {board.width}x{board.height} board."
            )

        cell = (x, y)
        if cell in round_.revealed:
            raise InvalidMoveError(f"Cell ({x}, {y}) is already revealed.")

        if board.is_mine(x, y):
            return replace(round_, status=RoundStatus.LOST, hit=cell)

        revealed = round_.revealed + (cell,)
        multiplier = cls.multiplier_for(len(revealed), board.total_safe, round_.range_factor)
        status = RoundStatus.WON if len(revealed) == board.total_safe else RoundStatus.PLAYING
        return replace(round_, status=status, revealed=revealed, multiplier=multiplier)

    @classmethod
    def cash_out(cls, round_: MinesweeperRound) -> MinesweeperRound:
        """
        Lock in the current multiplier.

        Raises:
            InvalidMoveError: If the round is not in play or no safe cell
                has been revealed yet
        """
        if round_.status is not RoundStatus.PLAYING:
            raise InvalidMoveError(f"Cannot cash out while round is {round_.status.value}.")
        if round_.cleared < 1:
            raise InvalidMoveError("Reveal at least one safe cell before cashing out.")
        return replace(round_, status=RoundStatus.CASHED_OUT)

    @classmethod
    def replay(
        cls,
        board: MinesweeperBoard,
        moves: Iterable[tuple[int, int]],
        *,
        cash_out: bool = False,
        range_factor: Decimal = DEFAULT_RANGE_FACTOR,
    ) -> MinesweeperRound:
        """Rebuild a round from its recorded reveals (for audits).

        Args:
            board: Mine layout recomputed from the revealed seeds
            moves: Cells revealed by the player, in order
            cash_out: Whether the player cashed out after the last move
            range_factor: Range factor the round was played with

        Returns:
            Final round state
        """
        round_ = cls.start(cls.new_round(board, range_factor))
        for x, y in moves:
            round_ = cls.reveal(round_, x, y)
        if cash_out:
            round_ = cls.cash_out(round_)
        return round_
