"""
Hi-Lo counting drill.

Deals a fixed number of cards from one freshly shuffled deck, one at a time,
keeping its own running count (separate from the play table's shoe). The
player then types a guess which is graded against the true count.
"""

from __future__ import annotations

import numpy as np

from src.config import DRILL_LENGTH
from src.engine.cards import Card
from src.engine.counting import format_count, hi_lo_value
from src.engine.deck import build_deck, shuffle

INVALID_GUESS_MESSAGE: str = "Please enter a number for your guess."


class CountingDrill:
    """One counting drill; call start() to (re)deal a new sequence."""

    def __init__(self, length: int = DRILL_LENGTH, rng: np.random.Generator | None = None) -> None:
        if not 1 <= length <= 52:
            raise ValueError(f"Drill length must be in [1, 52], got {length}.")
        self.length = length
        self._rng = rng if rng is not None else np.random.default_rng()
        self.cards: list[Card] = []
        self.index = 0
        self.running_count = 0
        self.started = False

    def start(self) -> None:
        deck = build_deck()
        shuffle(deck, self._rng)
        self.cards = deck[: self.length]
        self.index = 0
        self.running_count = 0
        self.started = True

    @property
    def finished(self) -> bool:
        """True once every drill card has been shown; the guess form opens then."""
        return self.started and self.index >= len(self.cards)

    @property
    def current_card(self) -> Card | None:
        return self.cards[self.index - 1] if self.index > 0 else None

    def next_card(self) -> Card | None:
        """Show the next card and add its Hi-Lo value; None when the drill is over."""
        if not self.started or self.finished:
            return None
        card = self.cards[self.index]
        self.running_count += hi_lo_value(card)
        self.index += 1
        return card

    def reveal_count(self) -> str:
        return f"Current running count (answer): {format_count(self.running_count)}"

    def check_guess(self, guess: str | int) -> str:
        """Grade a guess. Non-numeric input produces a prompt, not an error."""
        try:
            value = int(str(guess).strip())
        except ValueError:
            return INVALID_GUESS_MESSAGE

        correct = self.running_count
        if value == correct:
            return f"Spot on! The running count is {format_count(correct)}."
        return (
            f"Close. Your answer: {format_count(value)}, "
            f"correct answer: {format_count(correct)}."
        )
