"""
FairPlay - Baccarat Resolver

Punto banco with a single freshly shuffled 52-card deck per hand.

Game Rules:
- Deck is shuffled with Fisher-Yates (last index down to 1, one random
  draw per swap), using 51 floats from the random source
- Deal order: player, banker, player, banker from the top of the deck
- Card values: Ace=1, 2-9 face value, 10/J/Q/K=0; score = sum mod 10
- A natural (either two-card hand on 8 or 9) ends the hand immediately
- Player draws on 0-5; banker follows the third-card table
- Higher score wins, equal scores tie
"""

import math
from typing import ClassVar, Sequence

from fairplay.engine.base import BaccaratResult, BaccaratSide, Card, Suit


class BaccaratResolver:
    """Stateless engine for Baccarat hands."""

    DECK_SIZE: ClassVar[int] = 52
    FLOATS_NEEDED: ClassVar[int] = DECK_SIZE - 1
    NATURAL_SCORES: ClassVar[frozenset[int]] = frozenset({8, 9})
    PLAYER_DRAWS_MAX: ClassVar[int] = 5

    # Banker two-card score -> player third-card values on which banker draws.
    # Scores 0-2 always draw, 7+ never draw.
    BANKER_DRAW_TABLE: ClassVar[dict[int, frozenset[int]]] = {
        3: frozenset({0, 1, 2, 3, 4, 5, 6, 7, 9}),
        4: frozenset({2, 3, 4, 5, 6, 7}),
        5: frozenset({4, 5, 6, 7}),
        6: frozenset({6, 7}),
    }

    @classmethod
    def build_deck(cls) -> tuple[Card, ...]:
        """Unshuffled deck: hearts, diamonds, clubs, spades, each Ace to King."""
        return tuple(Card(rank=rank, suit=suit) for suit in Suit for rank in range(1, 14))

    @classmethod
    def shuffle(cls, deck: Sequence[Card], floats: Sequence[float]) -> tuple[Card, ...]:
        """Fisher-Yates shuffle driven by one float per swap position.

        Args:
            deck: Cards in their starting order
            floats: At least len(deck) - 1 values in [0, 1)

        Returns:
            New tuple with the shuffled order
        """
        cards = list(deck)
        if len(floats) < len(cards) - 1:
            raise ValueError(
                f"Shuffling {len(cards)} cards needs {len(cards) - 1} random values, "
                f"got {len(floats)}."
            )
        for step, i in enumerate(range(len(cards) - 1, 0, -1)):
            j = math.floor(floats[step] * (i + 1))
            cards[i], cards[j] = cards[j], cards[i]
        return tuple(cards)

    @classmethod
    def hand_score(cls, cards: Sequence[Card]) -> int:
        """Baccarat score of a hand (0-9)."""
        return sum(card.value for card in cards) % 10

    @classmethod
    def is_natural(cls, score: int) -> bool:
        return score in cls.NATURAL_SCORES

    @classmethod
    def player_draws(cls, player_score: int) -> bool:
        """Player takes a third card on a two-card score of 0-5."""
        return player_score <= cls.PLAYER_DRAWS_MAX

    @classmethod
    def banker_draws(cls, banker_score: int, player_third_value: int | None) -> bool:
        """
        Decide whether the banker takes a third card.

        Args:
            banker_score: Banker's two-card score
            player_third_value: Value of the player's third card, or None
                if the player stood

        Returns:
            True if the banker draws
        """
        if player_third_value is None:
            return banker_score <= 5
        if banker_score <= 2:
            return True
        if banker_score >= 7:
            return False
        return player_third_value in cls.BANKER_DRAW_TABLE[banker_score]

    @classmethod
    def winner(cls, player_score: int, banker_score: int) -> BaccaratSide:
        if player_score > banker_score:
            return BaccaratSide.PLAYER
        if banker_score > player_score:
            return BaccaratSide.BANKER
        return BaccaratSide.TIE

    @classmethod
    def deal(cls, deck: Sequence[Card]) -> BaccaratResult:
        """
        Play one hand from the top of an already ordered deck.

        Args:
            deck: Shuffled cards; at least six are needed

        Returns:
            BaccaratResult with both hands, final scores and the winner
        """
        if len(deck) < 6:
            raise ValueError(f"A baccarat hand needs at least 6 cards, got {len(deck)}.")

        player = [deck[0], deck[2]]
        banker = [deck[1], deck[3]]
        next_card = 4

        player_score = cls.hand_score(player)
        banker_score = cls.hand_score(banker)

        # Naturals are checked before any third-card rule.
        natural = cls.is_natural(player_score) or cls.is_natural(banker_score)
        if not natural:
            player_third_value = None
            if cls.player_draws(player_score):
                third = deck[next_card]
                next_card += 1
                player.append(third)
                player_third_value = third.value

            if cls.banker_draws(banker_score, player_third_value):
                banker.append(deck[next_card])

            player_score = cls.hand_score(player)
            banker_score = cls.hand_score(banker)

        return BaccaratResult(
            player_hand=tuple(player),
            banker_hand=tuple(banker),
            player_score=player_score,
            banker_score=banker_score,
            winner=cls.winner(player_score, banker_score),
            natural=natural,
        )

    @classmethod
    def resolve(cls, floats: Sequence[float]) -> BaccaratResult:
        """Shuffle a fresh deck with ``floats`` and play one hand."""
        return cls.deal(cls.shuffle(cls.build_deck(), floats))
