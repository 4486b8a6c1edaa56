"""
Deck and shoe construction, shuffling, and card drawing.

A deck is a list of 52 Card objects; a shoe is one or more decks concatenated
and shuffled. Cards are drawn from the front of the list, so a stacked shoe
deals its cards in the order given.

Randomness comes from a numpy Generator so every shuffle can be reproduced
from a seed.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from .cards import RANK_NAMES, SUIT_SYMBOLS, Card
from .counting import hi_lo_value

logger = logging.getLogger(__name__)

DEFAULT_NUM_DECKS: int = 6
RESHUFFLE_THRESHOLD: int = 15   # rebuild at round start below this many cards


def build_deck() -> list[Card]:
    """Create a fresh 52-card deck in fixed rank-major order.

    Examples:
        >>> deck = build_deck()
        >>> len(deck)
        52
        >>> str(deck[0]), str(deck[-1])
        ('2♠', 'A♣')
    """
    return [Card(rank, suit) for rank in RANK_NAMES for suit in SUIT_SYMBOLS]


def shuffle(cards: list, rng: np.random.Generator | None = None) -> None:
    """Shuffle *cards* in place with Fisher-Yates.

    For i from the last index down to 1, swap position i with a uniformly
    chosen position in [0, i].

    Args:
        cards: Mutable sequence, modified in place.
        rng:   numpy Generator; a fresh unseeded one is used if None.
    """
    if rng is None:
        rng = np.random.default_rng()
    for i in range(len(cards) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        cards[i], cards[j] = cards[j], cards[i]


def build_shoe(num_decks: int = DEFAULT_NUM_DECKS, rng: np.random.Generator | None = None) -> list[Card]:
    """Concatenate *num_decks* decks and shuffle them.

    Raises:
        ValueError: If num_decks < 1.

    Examples:
        >>> len(build_shoe(2, np.random.default_rng(0)))
        104
    """
    if num_decks < 1:
        raise ValueError(f"A shoe needs at least one deck, got {num_decks}.")
    cards: list[Card] = []
    for _ in range(num_decks):
        cards.extend(build_deck())
    shuffle(cards, rng)
    return cards


class Shoe:
    """A shoe of cards with a Hi-Lo running count.

    The running count is the sum of hi_lo_value() over every card drawn since
    the last rebuild. Rebuilding resets it to zero.
    """

    def __init__(
        self,
        num_decks: int = DEFAULT_NUM_DECKS,
        rng: np.random.Generator | None = None,
    ) -> None:
        if num_decks < 1:
            raise ValueError(f"A shoe needs at least one deck, got {num_decks}.")
        self.num_decks = num_decks
        self._rng = rng if rng is not None else np.random.default_rng()
        self._cards: list[Card] = []
        self._running_count = 0
        self._generation = 0
        self.rebuild()

    @classmethod
    def stacked(
        cls,
        cards: Iterable[Card],
        num_decks: int = 1,
        rng: np.random.Generator | None = None,
    ) -> Shoe:
        """Build a shoe that deals *cards* in order, then falls back to shuffled decks.

        Used for deterministic rounds in tests and demos.

        Examples:
            >>> shoe = Shoe.stacked([Card('A', '♠'), Card('K', '♥')])
            >>> str(shoe.draw()), shoe.running_count
            ('A♠', -1)
        """
        shoe = cls(num_decks, rng)
        shoe._cards = list(cards)
        shoe._running_count = 0
        return shoe

    def rebuild(self) -> None:
        """Replace the remaining cards with a freshly shuffled shoe."""
        self._cards = build_shoe(self.num_decks, self._rng)
        self._running_count = 0
        self._generation += 1
        logger.info("Shoe rebuilt: %d decks, %d cards", self.num_decks, len(self._cards))

    def draw(self) -> Card:
        """Remove and return the front card, rebuilding first if the shoe is empty."""
        if not self._cards:
            self.rebuild()
        card = self._cards.pop(0)
        self._running_count += hi_lo_value(card)
        return card

    def needs_rebuild(self, threshold: int = RESHUFFLE_THRESHOLD) -> bool:
        return len(self._cards) < threshold

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    @property
    def running_count(self) -> int:
        return self._running_count

    @property
    def generation(self) -> int:
        """Number of rebuilds so far; cards from an older generation are out of the count."""
        return self._generation
