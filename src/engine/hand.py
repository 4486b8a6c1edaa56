"""
Hand evaluation: total calculation and ace adjustment.

Every ace starts at 11. While the total is over 21 and an ace is still
counted as 11, one ace at a time is downgraded to 1. The result is the best
total <= 21, or the smallest possible total if the hand is bust anyway.

All functions accept any sequence of Card objects.
"""

from __future__ import annotations

from typing import Sequence

from .cards import RANK_ACE, Card, card_value

BLACKJACK: int = 21


def _raw_total(cards: Sequence[Card]) -> tuple[int, int]:
    """Return (total with every ace at 11, number of aces)."""
    total = 0
    aces = 0
    for card in cards:
        total += card_value(card)
        if card.rank == RANK_ACE:
            aces += 1
    return total, aces


def hand_value(cards: Sequence[Card]) -> int:
    """Calculate the blackjack total of a hand.

    Examples:
        >>> hand_value([])
        0
        >>> hand_value([Card('A', '♠'), Card('K', '♥')])
        21
        >>> hand_value([Card('A', '♠'), Card('A', '♥'), Card('9', '♦')])
        21
        >>> hand_value([Card('10', '♠'), Card('10', '♥'), Card('5', '♦')])
        25
    """
    total, aces = _raw_total(cards)
    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1
    return total


def is_bust(total: int) -> bool:
    """Return True if a total exceeds 21."""
    return total > BLACKJACK


def is_soft(cards: Sequence[Card]) -> bool:
    """Return True if an ace is still counted as 11 in the hand's best total.

    Examples:
        >>> is_soft([Card('A', '♠'), Card('6', '♥')])
        True
        >>> is_soft([Card('A', '♠'), Card('6', '♥'), Card('9', '♦')])
        False
    """
    total, aces = _raw_total(cards)
    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1
    return aces > 0


def is_blackjack(cards: Sequence[Card]) -> bool:
    """Two cards totalling 21."""
    return len(cards) == 2 and hand_value(cards) == BLACKJACK


def is_pair(cards: Sequence[Card]) -> bool:
    """Exactly two cards of the same rank (K-Q is not a pair)."""
    return len(cards) == 2 and cards[0].rank == cards[1].rank
