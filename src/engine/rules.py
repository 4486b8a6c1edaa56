"""
Settlement, dealer drawing policy, and result messages.

Settlement priority (highest to lowest):
    1. Player bust (>21)   → loss (even if the dealer also busts)
    2. Dealer bust         → win
    3. Total comparison    → higher total wins, equal totals push

The dealer draws while below 17 and stands on every 17, soft or hard.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .cards import Card
from .hand import hand_value, is_bust

DEALER_STANDS_ON: int = 17


class Outcome(Enum):
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"


def dealer_should_hit(dealer_cards: Sequence[Card], stands_on: int = DEALER_STANDS_ON) -> bool:
    """Fixed dealer policy: hit below *stands_on*, otherwise stand.

    Examples:
        >>> dealer_should_hit([Card('K', '♠'), Card('6', '♥')])
        True
        >>> dealer_should_hit([Card('A', '♠'), Card('6', '♥')])   # soft 17 stands
        False
    """
    return hand_value(dealer_cards) < stands_on


def settle_hand(player_cards: Sequence[Card], dealer_cards: Sequence[Card]) -> Outcome:
    """Determine the outcome of one finished player hand against the dealer's final hand.

    Args:
        player_cards: Player's final hand.
        dealer_cards: Dealer's final hand (may be only the initial two cards
                      when every player hand busted and the dealer never drew).

    Returns:
        Outcome from the player's perspective.
    """
    player_total = hand_value(player_cards)
    if is_bust(player_total):
        return Outcome.LOSS

    dealer_total = hand_value(dealer_cards)
    if is_bust(dealer_total):
        return Outcome.WIN

    if player_total > dealer_total:
        return Outcome.WIN
    if player_total < dealer_total:
        return Outcome.LOSS
    return Outcome.PUSH


def result_message(outcome: Outcome, player_total: int, dealer_total: int) -> str:
    """Human-readable feedback line for a settled hand.

    Examples:
        >>> result_message(Outcome.WIN, 20, 18)
        "You win! 20 vs dealer's 18."
        >>> result_message(Outcome.PUSH, 19, 19)
        'Push: both you and the dealer have 19.'
    """
    if is_bust(player_total):
        return "You bust! Dealer wins."
    if is_bust(dealer_total):
        return f"Dealer busts with {dealer_total}. You win with {player_total}!"
    if outcome is Outcome.LOSS:
        return f"Dealer wins {dealer_total} vs your {player_total}."
    if outcome is Outcome.WIN:
        return f"You win! {player_total} vs dealer's {dealer_total}."
    return f"Push: both you and the dealer have {player_total}."
