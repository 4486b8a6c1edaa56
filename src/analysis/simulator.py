"""
Auto-play simulator for the play-vs-dealer table.

Plays many rounds through BlackjackTable with basic strategy driving every
decision, so the state machine, the strategy engine and the statistics are
exercised together the way a disciplined trainee would play.

Key implementation notes:
    - The table has no betting, so Double is played as Hit.
    - A Split recommendation on a hand that may not be split (second pair
      after a split) is replaced by the hard/soft recommendation for the same
      total.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from src.config import TrainerConfig
from src.engine.cards import Card
from src.engine.game_state import BlackjackTable
from src.engine.hand import hand_value, is_soft
from src.strategy.basic_strategy import Action, HandType, Recommendation, recommend, recommend_for_hand

# ─── Result type ──────────────────────────────────────────────────────────────


@dataclass
class SimulationResult:
    """Aggregate statistics from an auto-play run.

    Attributes:
        n_rounds:      Rounds dealt.
        n_hands:       Player hands settled (split rounds count twice).
        n_wins:        Hands won.
        n_losses:      Hands lost.
        n_pushes:      Hands pushed.
        n_splits:      Rounds in which the player split.
        n_blackjacks:  Rounds won on the deal.
        win_rate:      Session win rate in percent (pushes excluded).
        mean_count:    Mean running count seen at the start of each round.
        counts:        Running count seen at the start of each round, or None
                       if simulate_rounds() was called with return_counts=False.
    """

    n_rounds: int
    n_hands: int
    n_wins: int
    n_losses: int
    n_pushes: int
    n_splits: int
    n_blackjacks: int
    win_rate: int
    mean_count: float
    counts: np.ndarray | None = None

    def __str__(self) -> str:
        return (
            f"Rounds: {self.n_rounds:,} | Hands: {self.n_hands:,} | "
            f"W/L/P: {self.n_wins}/{self.n_losses}/{self.n_pushes} | "
            f"Win rate: {self.win_rate}% | Splits: {self.n_splits} | "
            f"Blackjacks: {self.n_blackjacks} | Mean count: {self.mean_count:+.2f}"
        )


# ─── Decision helper ──────────────────────────────────────────────────────────


def _total_recommendation(cards: Sequence[Card], upcard: str) -> Recommendation:
    """Recommendation by total only, ignoring pair-ness."""
    total = hand_value(cards)
    if is_soft(cards) and total >= 13:
        return recommend(HandType.SOFT, f"A,{total - 11}", upcard)
    return recommend(HandType.HARD, str(total), upcard)


def choose_action(table: BlackjackTable) -> Action:
    """Basic-strategy action for the table's current hand, as the table can play it."""
    hand = table.player_hands[table.current_hand]
    upcard = table.dealer_cards[0].rank
    action = recommend_for_hand(hand.cards, upcard).action
    if action is Action.SPLIT and not table.can_split():
        action = _total_recommendation(hand.cards, upcard).action
    if action is Action.DOUBLE:
        action = Action.HIT
    return action


# ─── Core simulation ──────────────────────────────────────────────────────────


def simulate_rounds(
    n_rounds: int,
    config: TrainerConfig | None = None,
    *,
    return_counts: bool = False,
) -> SimulationResult:
    """Play *n_rounds* rounds with basic strategy and return the tallies.

    Args:
        n_rounds:      Number of rounds to deal (must be >= 1).
        config:        Table configuration; set ``seed`` for reproducible runs.
        return_counts: If True, keep the pre-deal running count of every round.

    Returns:
        SimulationResult.
    """
    if n_rounds < 1:
        raise ValueError(f"n_rounds must be >= 1, got {n_rounds}.")

    table = BlackjackTable(config)
    counts = np.zeros(n_rounds, dtype=np.int64) if return_counts else None
    n_splits = 0
    n_blackjacks = 0
    count_sum = 0

    for i in range(n_rounds):
        count_sum += table.shoe.running_count
        if counts is not None:
            counts[i] = table.shoe.running_count
        view = table.deal_new_hand()
        if view.game_over:
            n_blackjacks += 1
            continue

        while table.awaiting_decision:
            action = choose_action(table)
            if action is Action.SPLIT:
                table.split()
                n_splits += 1
            elif action is Action.HIT:
                table.hit()
            else:
                table.stand()

    stats = table.stats
    return SimulationResult(
        n_rounds=n_rounds,
        n_hands=stats.hands_played,
        n_wins=stats.wins,
        n_losses=stats.losses,
        n_pushes=stats.pushes,
        n_splits=n_splits,
        n_blackjacks=n_blackjacks,
        win_rate=stats.win_rate,
        mean_count=count_sum / n_rounds,
        counts=counts,
    )


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import sys

    n = int(sys.argv[1]) if len(sys.argv) > 1 else 10_000
    print(f"Simulating {n:,} rounds with basic strategy …")
    print(simulate_rounds(n, TrainerConfig(seed=42)))
