"""
Hi-Lo card counting.

Tag values:
    2-6:  +1 (low cards)
    7-9:   0 (neutral)
    10-A: -1 (high cards)

A full deck sums to 0, so the running count drifts back to zero as a shoe is
dealt out.
"""

from __future__ import annotations

from typing import Iterable

from .cards import Card, normalize_rank

HI_LO_TAGS: dict[str, int] = {
    '2': 1, '3': 1, '4': 1, '5': 1, '6': 1,
    '7': 0, '8': 0, '9': 0,
    '10': -1, 'J': -1, 'Q': -1, 'K': -1, 'A': -1,
}


def hi_lo_value(rank: str | Card) -> int:
    """Return the Hi-Lo increment for a rank (or a card).

    Examples:
        >>> hi_lo_value('5')
        1
        >>> hi_lo_value('8')
        0
        >>> hi_lo_value('A')
        -1
    """
    if isinstance(rank, Card):
        return HI_LO_TAGS[rank.rank]
    return HI_LO_TAGS[normalize_rank(rank)]


def running_count(cards: Iterable[Card]) -> int:
    """Sum the Hi-Lo values of every card in *cards*."""
    return sum(HI_LO_TAGS[c.rank] for c in cards)


def format_count(count: int) -> str:
    """Signed display form of a count.

    Examples:
        >>> format_count(3)
        '+3'
        >>> format_count(0)
        '0'
        >>> format_count(-2)
        '-2'
    """
    return f"+{count}" if count > 0 else str(count)
