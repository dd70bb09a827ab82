"""
FairPlay - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from decimal import Decimal
from typing import Callable
from unittest.mock import MagicMock

import pytest

from fairplay.config.settings import Settings
from fairplay.engine.base import Card, MinesweeperBoard, Suit
from fairplay.engine.outcome import GameRules
from fairplay.engine.service import FairPlayEngine
from fairplay.engine.session import SeedSession


SERVER_SEED = "d3b07384d113edec49eaa6238ad5ff00c86b2e9a7d1f3e5c0b4a1f2e3d4c5b6a"
CLIENT_SEED = "lucky-player-7"


# =============================================================================
# SEEDS & SESSIONS
# =============================================================================

@pytest.fixture
def server_seed() -> str:
    return SERVER_SEED


@pytest.fixture
def client_seed() -> str:
    return CLIENT_SEED


@pytest.fixture
def settings() -> Settings:
    """Settings pinned to the defaults, independent of the environment."""
    return Settings(
        house_edge_percent=1.0,
        limbo_max_multiplier=1_000_000,
        minesweeper_range_factor=5.0,
        server_seed_bytes=32,
        client_seed_bytes=16,
        supabase_url=None,
        supabase_anon_key=None,
    )


@pytest.fixture
def rules() -> GameRules:
    return GameRules(
        house_edge=Decimal("1"),
        limbo_max_multiplier=Decimal("1000000"),
        minesweeper_range_factor=Decimal("5"),
    )


@pytest.fixture
def engine(settings: Settings, rules: GameRules) -> FairPlayEngine:
    return FairPlayEngine(settings=settings, rules=rules)


@pytest.fixture
def session() -> SeedSession:
    """Session with fixed seeds so outcomes are reproducible."""
    return SeedSession(SERVER_SEED, CLIENT_SEED, session_id="session-1")


# =============================================================================
# CARDS (Baccarat)
# =============================================================================

def card(rank: int, suit: Suit = Suit.HEARTS) -> Card:
    return Card(rank=rank, suit=suit)


@pytest.fixture
def make_deck() -> Callable[..., tuple[Card, ...]]:
    """
    Build a deck whose top cards have the given ranks.

    Cards are dealt P, B, P, B, then third cards, so
    make_deck(1, 2, 8, 3) gives the player A+8 and the banker 2+3.
    Six cards are always returned; missing ones are Kings (value 0).
    """
    def _make(*ranks: int) -> tuple[Card, ...]:
        cards = [card(rank, Suit.SPADES) for rank in ranks]
        while len(cards) < 6:
            cards.append(card(13, Suit.CLUBS))
        return tuple(cards)

    return _make


# =============================================================================
# MINESWEEPER
# =============================================================================

@pytest.fixture
def corner_board() -> MinesweeperBoard:
    """3x3 board with a single mine in the top-left corner (8 safe cells)."""
    return MinesweeperBoard(width=3, height=3, mines=((0, 0),))


@pytest.fixture
def safe_cells(corner_board: MinesweeperBoard) -> list[tuple[int, int]]:
    return [
        (x, y)
        for y in range(corner_board.height)
        for x in range(corner_board.width)
        if not corner_board.is_mine(x, y)
    ]


# =============================================================================
# SUPABASE
# =============================================================================

@pytest.fixture
def mock_client() -> MagicMock:
    """Mock Supabase client; every table() call returns the same mock table."""
    client = MagicMock()
    client.table.return_value = MagicMock()
    return client


@pytest.fixture
def mock_table(mock_client: MagicMock) -> MagicMock:
    return mock_client.table.return_value
