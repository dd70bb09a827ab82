"""
FairPlay Outcome Engine.

Pure Python provably-fair logic with zero database dependencies.
Handles seed commitments, hash-driven randomness, game resolution,
payouts and verification.
"""

from fairplay.engine.baccarat import BaccaratResolver
from fairplay.engine.base import (
    BaccaratParams,
    BaccaratResult,
    BaccaratSide,
    BetRequest,
    Card,
    DiceDirection,
    DiceParams,
    DiceResult,
    GameType,
    LimboParams,
    LimboResult,
    MinesweeperBoard,
    MinesweeperParams,
    ResolvedOutcome,
    RoundStatus,
    Suit,
    VerificationReport,
)
from fairplay.engine.dice import DiceResolver
from fairplay.engine.errors import (
    FairPlayError,
    InvalidBetParameters,
    InvalidMoveError,
    InvalidNonce,
    InvalidSeed,
    NonceReuseError,
    OutcomeMismatchError,
    SeedTamperedError,
    SessionClosedError,
)
from fairplay.engine.limbo import LimboResolver
from fairplay.engine.minesweeper import MinesweeperResolver, MinesweeperRound
from fairplay.engine.outcome import GameRules, derive_outcome
from fairplay.engine.payout import PayoutCalculator
from fairplay.engine.rng import DeterministicRandomSource
from fairplay.engine.service import (
    FairPlayEngine,
    Resolution,
    Rotation,
    create_session,
    resolve,
    rotate_seeds,
    verify,
)
from fairplay.engine.session import SeedSession
from fairplay.engine.verifier import Verifier

__all__ = [
    # Data Classes
    "BaccaratParams",
    "BaccaratResult",
    "BetRequest",
    "Card",
    "DiceParams",
    "DiceResult",
    "LimboParams",
    "LimboResult",
    "MinesweeperBoard",
    "MinesweeperParams",
    "MinesweeperRound",
    "ResolvedOutcome",
    "Resolution",
    "Rotation",
    "VerificationReport",
    "GameRules",
    # Enums
    "BaccaratSide",
    "DiceDirection",
    "GameType",
    "RoundStatus",
    "Suit",
    # Errors
    "FairPlayError",
    "InvalidBetParameters",
    "InvalidMoveError",
    "InvalidNonce",
    "InvalidSeed",
    "NonceReuseError",
    "OutcomeMismatchError",
    "SeedTamperedError",
    "SessionClosedError",
    # Components
    "BaccaratResolver",
    "DeterministicRandomSource",
    "DiceResolver",
    "FairPlayEngine",
    "LimboResolver",
    "MinesweeperResolver",
    "PayoutCalculator",
    "SeedSession",
    "Verifier",
    # Functions
    "create_session",
    "derive_outcome",
    "resolve",
    "rotate_seeds",
    "verify",
]
