"""Trainer configuration: table rules, drill length and random seed."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from src.engine.deck import DEFAULT_NUM_DECKS, RESHUFFLE_THRESHOLD
from src.engine.rules import DEALER_STANDS_ON

DRILL_LENGTH: int = 20


@dataclass(frozen=True)
class TrainerConfig:
    """Settings shared by the play table and the drills.

    Attributes:
        num_decks:           Decks per shoe for the play-vs-dealer table.
        reshuffle_threshold: Rebuild the shoe at round start when fewer cards remain.
        dealer_stands_on:    Dealer draws while below this total.
        drill_length:        Cards shown per counting drill (taken from one deck).
        seed:                Seed for the numpy Generator; None for fresh entropy.
    """

    num_decks: int = DEFAULT_NUM_DECKS
    reshuffle_threshold: int = RESHUFFLE_THRESHOLD
    dealer_stands_on: int = DEALER_STANDS_ON
    drill_length: int = DRILL_LENGTH
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.num_decks < 1:
            raise ValueError(f"num_decks must be >= 1, got {self.num_decks}.")
        if self.reshuffle_threshold < 0:
            raise ValueError(
                f"reshuffle_threshold must be >= 0, got {self.reshuffle_threshold}."
            )
        if not 12 <= self.dealer_stands_on <= 21:
            raise ValueError(
                f"dealer_stands_on must be in [12, 21], got {self.dealer_stands_on}."
            )
        if not 1 <= self.drill_length <= 52:
            raise ValueError(f"drill_length must be in [1, 52], got {self.drill_length}.")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be >= 0 or None, got {self.seed}.")

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)


def parse_seed(text: str) -> int | None:
    """Parse a seed typed by the user; blank means None.

    Raises:
        ValueError: If *text* is not a non-negative integer.

    Examples:
        >>> parse_seed(" 42 "), parse_seed("")
        (42, None)
    """
    text = text.strip()
    if not text:
        return None
    seed = int(text)
    if seed < 0:
        raise ValueError(f"seed must be >= 0, got {seed}.")
    return seed
