"""
Shared pytest fixtures for blackjack trainer tests.

Provides convenience wrappers around str_to_card for building known hands and
stacked shoes.
"""

from __future__ import annotations

import numpy as np
import pytest

from src.config import TrainerConfig
from src.engine.cards import SUIT_SYMBOLS, Card, str_to_card
from src.engine.deck import Shoe


def hand(*card_strs: str) -> tuple[Card, ...]:
    """Build a hand tuple from human-readable card strings.

    Examples:
        >>> hand('AS', 'KH')
        (Card(rank='A', suit='♠'), Card(rank='K', suit='♥'))
    """
    return tuple(str_to_card(s) for s in card_strs)


def ranks(*rank_strs: str) -> list[Card]:
    """Build cards from ranks alone, cycling through the suits."""
    return [Card(r, SUIT_SYMBOLS[i % 4]) for i, r in enumerate(rank_strs)]


def stacked_shoe(*rank_strs: str, seed: int = 0) -> Shoe:
    """A one-deck shoe that deals *rank_strs* first, in order."""
    return Shoe.stacked(ranks(*rank_strs), num_decks=1, rng=np.random.default_rng(seed))


# Never rebuild a stacked shoe at round start.
NO_RESHUFFLE = TrainerConfig(num_decks=1, reshuffle_threshold=0, seed=0)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture
def h():
    """Expose the hand() helper as a fixture for convenience."""
    return hand
