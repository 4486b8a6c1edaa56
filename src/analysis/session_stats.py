"""
Session statistics for the play-vs-dealer table.

Counters only ever increase; a split round records one outcome per hand, so
``hands_played`` can grow by two in a single round.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from src.engine.rules import Outcome


@dataclass
class SessionStats:
    """Running win/loss/push tallies for one session.

    Attributes:
        hands_played: Number of player hands settled (1 or 2 per round).
        wins:         Hands won, including blackjacks on the deal.
        losses:       Hands lost, including busts.
        pushes:       Hands tied with the dealer.
    """

    hands_played: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0

    def record_round(self, outcomes: Iterable[Outcome]) -> None:
        """Add the per-hand outcomes of one settled round."""
        outcomes = [Outcome(o) for o in outcomes]   # accepts "win"/"loss"/"push" too
        for outcome in outcomes:
            self.hands_played += 1
            if outcome is Outcome.WIN:
                self.wins += 1
            elif outcome is Outcome.LOSS:
                self.losses += 1
            else:
                self.pushes += 1

    @property
    def win_rate(self) -> int:
        """Wins as a percentage of decided (non-push) hands, rounded half up.

        Examples:
            >>> SessionStats().win_rate
            0
            >>> SessionStats(hands_played=2, wins=1, losses=1).win_rate
            50
        """
        decided = self.wins + self.losses
        if decided == 0:
            return 0
        return math.floor(self.wins * 100 / decided + 0.5)

    def copy(self) -> SessionStats:
        return SessionStats(self.hands_played, self.wins, self.losses, self.pushes)

    def __str__(self) -> str:
        return (
            f"Hands: {self.hands_played} | W/L/P: {self.wins}/{self.losses}/{self.pushes} | "
            f"Win rate: {self.win_rate}%"
        )
