"""
FairPlay - Engine Base Classes

This module defines the foundational data structures and enums used throughout
the outcome engine. Bet parameters, results and outcomes are immutable (frozen
dataclasses) so a resolved outcome can be logged and later compared
field-by-field during verification.
"""

import hashlib
import json
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Union

from fairplay.engine.errors import InvalidBetParameters


class GameType(Enum):
    """Games served by the engine."""
    DICE = "dice"
    LIMBO = "limbo"
    BACCARAT = "baccarat"
    MINESWEEPER = "minesweeper"


class DiceDirection(Enum):
    """Which side of the target a dice roll must land on to win."""
    UNDER = "under"
    OVER = "over"


class BaccaratSide(Enum):
    """Baccarat bet sides (and hand winners)."""
    PLAYER = "player"
    BANKER = "banker"
    TIE = "tie"


class Suit(Enum):
    """Card suits in deck-building order."""
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class RoundStatus(Enum):
    """Minesweeper round states."""
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    CASHED_OUT = "cashed_out"

    @property
    def is_finished(self) -> bool:
        return self in (RoundStatus.WON, RoundStatus.LOST, RoundStatus.CASHED_OUT)


def as_decimal(value: Any) -> Decimal:
    """Convert ints, floats and strings to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Not a number: {value!r}") from exc


def _param_decimal(value: Any, label: str) -> Decimal:
    try:
        return as_decimal(value)
    except ValueError as exc:
        raise InvalidBetParameters(f"{label} must be a number, got {value!r}.") from exc


def _param_enum(enum_cls: type[Enum], value: Any, label: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_cls)
        raise InvalidBetParameters(f"{label} must be one of {choices}, got {value!r}.") from exc


# =============================================================================
# BET PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class DiceParams:
    """
    Dice bet parameters.

    Attributes:
        target: Threshold between 0 and 100 with at most two decimals
        direction: Win under or over the target
    """
    target: Decimal
    direction: DiceDirection = DiceDirection.UNDER

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", _param_decimal(self.target, "Target"))
        object.__setattr__(self, "direction", _param_enum(DiceDirection, self.direction, "Direction"))

    def to_dict(self) -> dict:
        return {"target": str(self.target), "direction": self.direction.value}


@dataclass(frozen=True)
class LimboParams:
    """Limbo bet parameters: the multiplier the result must reach."""
    target: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", _param_decimal(self.target, "Target"))

    def to_dict(self) -> dict:
        return {"target": str(self.target)}


@dataclass(frozen=True)
class BaccaratParams:
    """Baccarat bet parameters: the side backed by the player."""
    side: BaccaratSide

    def __post_init__(self) -> None:
        object.__setattr__(self, "side", _param_enum(BaccaratSide, self.side, "Bet side"))

    def to_dict(self) -> dict:
        return {"side": self.side.value}


@dataclass(frozen=True)
class MinesweeperParams:
    """
    Minesweeper board parameters.

    Attributes:
        width: Number of columns
        height: Number of rows
        mine_count: Mines hidden on the board
    """
    width: int = 5
    height: int = 5
    mine_count: int = 3

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "mine_count": self.mine_count,
        }


BetParams = Union[DiceParams, LimboParams, BaccaratParams, MinesweeperParams]

PARAMS_BY_GAME: dict[GameType, type] = {
    GameType.DICE: DiceParams,
    GameType.LIMBO: LimboParams,
    GameType.BACCARAT: BaccaratParams,
    GameType.MINESWEEPER: MinesweeperParams,
}


@dataclass(frozen=True)
class BetRequest:
    """A single bet handed to the engine."""
    game: GameType
    params: BetParams
    bet_amount: Decimal = Decimal("1")

    def __post_init__(self) -> None:
        object.__setattr__(self, "game", _param_enum(GameType, self.game, "Game"))
        object.__setattr__(self, "bet_amount", _param_decimal(self.bet_amount, "Bet amount"))


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class Card:
    """
    A playing card.

    Attributes:
        rank: 1-13 (1=Ace, 11=Jack, 12=Queen, 13=King)
        suit: Card suit
    """
    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if not (1 <= self.rank <= 13):
            raise ValueError(f"Invalid card rank {self.rank}. Must be between 1 and 13.")

    @property
    def value(self) -> int:
        """Baccarat value: Ace=1, 2-9 face value, tens and faces 0."""
        return self.rank if self.rank < 10 else 0

    @property
    def display(self) -> str:
        return {1: "A", 11: "J", 12: "Q", 13: "K"}.get(self.rank, str(self.rank))

    def to_dict(self) -> dict:
        return {"rank": self.rank, "suit": self.suit.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        return cls(rank=int(data["rank"]), suit=Suit(data["suit"]))

    def __str__(self) -> str:
        return f"{self.display} of {self.suit.value}"


@dataclass(frozen=True)
class DiceResult:
    """Resolved dice roll."""
    roll: Decimal
    target: Decimal
    direction: DiceDirection
    won: bool
    win_chance: Decimal

    def to_dict(self) -> dict:
        return {
            "roll": str(self.roll),
            "target": str(self.target),
            "direction": self.direction.value,
            "won": self.won,
            "win_chance": str(self.win_chance),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DiceResult":
        return cls(
            roll=Decimal(data["roll"]),
            target=Decimal(data["target"]),
            direction=DiceDirection(data["direction"]),
            won=bool(data["won"]),
            win_chance=Decimal(data["win_chance"]),
        )


@dataclass(frozen=True)
class LimboResult:
    """Resolved limbo round."""
    multiplier: Decimal
    target: Decimal
    won: bool
    win_chance: Decimal

    def to_dict(self) -> dict:
        return {
            "multiplier": str(self.multiplier),
            "target": str(self.target),
            "won": self.won,
            "win_chance": str(self.win_chance),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LimboResult":
        return cls(
            multiplier=Decimal(data["multiplier"]),
            target=Decimal(data["target"]),
            won=bool(data["won"]),
            win_chance=Decimal(data["win_chance"]),
        )


@dataclass(frozen=True)
class BaccaratResult:
    """
    Resolved baccarat hand.

    Attributes:
        player_hand: Player cards in deal order (2 or 3)
        banker_hand: Banker cards in deal order (2 or 3)
        player_score: Final player score (0-9)
        banker_score: Final banker score (0-9)
        winner: Winning side, TIE on equal scores
        natural: Whether either two-card hand was an 8 or 9
    """
    player_hand: tuple[Card, ...]
    banker_hand: tuple[Card, ...]
    player_score: int
    banker_score: int
    winner: BaccaratSide
    natural: bool = False

    @property
    def player_drew(self) -> bool:
        return len(self.player_hand) == 3

    @property
    def banker_drew(self) -> bool:
        return len(self.banker_hand) == 3

    def to_dict(self) -> dict:
        return {
            "player_hand": [c.to_dict() for c in self.player_hand],
            "banker_hand": [c.to_dict() for c in self.banker_hand],
            "player_score": self.player_score,
            "banker_score": self.banker_score,
            "winner": self.winner.value,
            "natural": self.natural,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BaccaratResult":
        return cls(
            player_hand=tuple(Card.from_dict(c) for c in data["player_hand"]),
            banker_hand=tuple(Card.from_dict(c) for c in data["banker_hand"]),
            player_score=int(data["player_score"]),
            banker_score=int(data["banker_score"]),
            winner=BaccaratSide(data["winner"]),
            natural=bool(data.get("natural", False)),
        )


@dataclass(frozen=True)
class MinesweeperBoard:
    """
    Committed mine layout for a Minesweeper round.

    Attributes:
        width: Number of columns
        height: Number of rows
        mines: Mine coordinates (x, y) in the order they were drawn
    """
    width: int
    height: int
    mines: tuple[tuple[int, int], ...]

    @property
    def mine_set(self) -> frozenset[tuple[int, int]]:
        return frozenset(self.mines)

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def total_safe(self) -> int:
        return self.total_cells - len(self.mines)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_mine(self, x: int, y: int) -> bool:
        return (x, y) in self.mine_set

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "mines": [list(m) for m in self.mines],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MinesweeperBoard":
        return cls(
            width=int(data["width"]),
            height=int(data["height"]),
            mines=tuple((int(x), int(y)) for x, y in data["mines"]),
        )


GameResult = Union[DiceResult, LimboResult, BaccaratResult, MinesweeperBoard]

RESULTS_BY_GAME: dict[GameType, type] = {
    GameType.DICE: DiceResult,
    GameType.LIMBO: LimboResult,
    GameType.BACCARAT: BaccaratResult,
    GameType.MINESWEEPER: MinesweeperBoard,
}


def params_from_dict(game: GameType, data: dict) -> BetParams:
    """Rebuild bet parameters from their ``to_dict`` form."""
    return PARAMS_BY_GAME[GameType(game)](**data)


# =============================================================================
# OUTCOMES & VERIFICATION
# =============================================================================

def canonical_json(data: Any) -> str:
    """Stable JSON encoding used for hashing."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"))


@dataclass(frozen=True)
class ResolvedOutcome:
    """
    The unit logged for later verification.

    Attributes:
        game: Game that produced the result
        nonce: Session nonce the bet consumed
        client_seed: Client seed in effect
        server_seed_hash: Commitment published before the bet
        raw_values: Floats drawn from the random source, in order
        result: Game-specific result
        payout_multiplier: Total-return multiplier; None for a Minesweeper
            board whose round has not settled yet
    """
    game: GameType
    nonce: int
    client_seed: str
    server_seed_hash: str
    raw_values: tuple[float, ...]
    result: GameResult
    payout_multiplier: Decimal | None = None

    @property
    def result_hash(self) -> str:
        """SHA-256 over the result and the inputs that produced it."""
        payload = {
            "game": self.game.value,
            "nonce": self.nonce,
            "client_seed": self.client_seed,
            "server_seed_hash": self.server_seed_hash,
            "result": self.result.to_dict(),
        }
        return hashlib.sha256(canonical_json(payload).encode("utf-8")).hexdigest()

    def with_payout(self, multiplier: Decimal) -> "ResolvedOutcome":
        """Copy of this outcome with a settled payout multiplier."""
        return replace(self, payout_multiplier=multiplier)

    def to_dict(self) -> dict:
        return {
            "game": self.game.value,
            "nonce": self.nonce,
            "client_seed": self.client_seed,
            "server_seed_hash": self.server_seed_hash,
            "raw_values": list(self.raw_values),
            "result": self.result.to_dict(),
            "payout_multiplier": (
                str(self.payout_multiplier) if self.payout_multiplier is not None else None
            ),
            "result_hash": self.result_hash,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ResolvedOutcome":
        """Rebuild a logged outcome (the stored result_hash is ignored)."""
        game = GameType(data["game"])
        multiplier = data.get("payout_multiplier")
        return cls(
            game=game,
            nonce=int(data["nonce"]),
            client_seed=data["client_seed"],
            server_seed_hash=data["server_seed_hash"],
            raw_values=tuple(float(v) for v in data["raw_values"]),
            result=RESULTS_BY_GAME[game].from_dict(data["result"]),
            payout_multiplier=Decimal(str(multiplier)) if multiplier is not None else None,
        )


@dataclass(frozen=True)
class VerificationReport:
    """Outcome of re-deriving a bet from its revealed seed."""
    match: bool
    seed_valid: bool
    outcome_valid: bool
    computed_server_seed_hash: str | None
    provided_server_seed_hash: str
    computed_outcome: ResolvedOutcome | None
    provided_outcome: ResolvedOutcome
    error: str | None = None

    @property
    def computed_result_hash(self) -> str | None:
        return self.computed_outcome.result_hash if self.computed_outcome else None

    @property
    def provided_result_hash(self) -> str:
        return self.provided_outcome.result_hash

    def to_dict(self) -> dict:
        return {
            "match": self.match,
            "seed_valid": self.seed_valid,
            "outcome_valid": self.outcome_valid,
            "computed_server_seed_hash": self.computed_server_seed_hash,
            "provided_server_seed_hash": self.provided_server_seed_hash,
            "computed_result_hash": self.computed_result_hash,
            "provided_result_hash": self.provided_result_hash,
            "computed_outcome": self.computed_outcome.to_dict() if self.computed_outcome else None,
            "provided_outcome": self.provided_outcome.to_dict(),
            "error": self.error,
        }
