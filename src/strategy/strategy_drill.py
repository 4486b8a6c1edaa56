"""
Basic-strategy drill: option lists for the trainer form, answer checking,
and random questions.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from src.engine.cards import RANK_NAMES

from .basic_strategy import Action, HandType, recommend

DEALER_UPCARDS: list[str] = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'A']
ACTIONS: list[str] = [a.value for a in Action]

_HARD_TOTALS = range(5, 21)
_SOFT_KICKERS = ['2', '3', '4', '5', '6', '7', '8', '9', '10']


@dataclass(frozen=True)
class MoveFeedback:
    correct: bool
    recommended: Action
    rationale: str
    message: str


def player_value_options(hand_type: HandType | str) -> list[tuple[str, str]]:
    """Return (value, label) choices for the player-hand selector.

    Examples:
        >>> player_value_options("soft")[0]
        ('A,2', 'Soft A-2')
        >>> player_value_options("hard")[-1]
        ('20', 'Hard 20')
    """
    kind = hand_type if isinstance(hand_type, HandType) else HandType(str(hand_type).lower())
    if kind is HandType.HARD:
        return [(str(t), f"Hard {t}") for t in _HARD_TOTALS]
    if kind is HandType.SOFT:
        return [(f"A,{k}", f"Soft A-{k}") for k in _SOFT_KICKERS]
    return [(f"{r},{r}", f"Pair {r},{r}") for r in RANK_NAMES]


def check_move(
    hand_type: HandType | str,
    player_value: str,
    dealer_upcard: str,
    player_action: Action | str,
) -> MoveFeedback:
    """Grade the player's chosen action against basic strategy.

    Only the action is compared; the rationale is returned for display.
    """
    chosen = player_action if isinstance(player_action, Action) else Action(player_action)
    rec = recommend(hand_type, player_value, dealer_upcard)
    correct = chosen is rec.action
    if correct:
        message = f"Correct! Basic strategy recommends: {rec.action.value}."
    else:
        message = f"Not quite. Basic strategy recommends: {rec.action.value}."
    return MoveFeedback(correct, rec.action, rec.rationale, message)


def random_question(rng: np.random.Generator | None = None) -> tuple[HandType, str, str]:
    """Pick a random (hand_type, player_value, dealer_upcard) from the option lists."""
    if rng is None:
        rng = np.random.default_rng()
    kind = list(HandType)[int(rng.integers(len(HandType)))]
    options = player_value_options(kind)
    value = options[int(rng.integers(len(options)))][0]
    upcard = DEALER_UPCARDS[int(rng.integers(len(DEALER_UPCARDS)))]
    return kind, value, upcard
