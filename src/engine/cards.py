"""
Card constants, the immutable Card type, and human-readable I/O helpers.

A card is a (rank, suit) pair:
    rank in 2, 3, ..., 10, J, Q, K, A
    suit in ♠, ♥, ♦, ♣

String form is "<rank><suit>", e.g. 'A♠' or '10♦'. Parsing also accepts the
ASCII suit letters S, H, D, C so tests and terminals can type cards easily.
"""

from __future__ import annotations

from dataclasses import dataclass

RANK_NAMES: list[str] = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A']
SUIT_SYMBOLS: list[str] = ['♠', '♥', '♦', '♣']

# ASCII aliases accepted by str_to_card
SUIT_LETTERS: dict[str, str] = {'S': '♠', 'H': '♥', 'D': '♦', 'C': '♣'}

# Blackjack point value per rank. Ace starts at 11 and is downgraded by hand_value().
RANK_VALUES: dict[str, int] = {
    '2': 2, '3': 3, '4': 4, '5': 5, '6': 6, '7': 7, '8': 8, '9': 9,
    '10': 10, 'J': 10, 'Q': 10, 'K': 10, 'A': 11,
}

RANK_ACE: str = 'A'


@dataclass(frozen=True)
class Card:
    """A single playing card. Frozen so cards can be shared between hands safely."""
    rank: str
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in RANK_VALUES:
            raise ValueError(f"Unknown rank {self.rank!r}.")
        if self.suit not in SUIT_SYMBOLS:
            raise ValueError(f"Unknown suit {self.suit!r}.")

    def __str__(self) -> str:
        return self.rank + self.suit


def normalize_rank(rank: str) -> str:
    """Return the canonical rank symbol, accepting lowercase face cards and 'T'.

    Examples:
        >>> normalize_rank('k')
        'K'
        >>> normalize_rank('T')
        '10'
    """
    r = str(rank).strip().upper()
    if r == 'T':
        r = '10'
    if r not in RANK_VALUES:
        raise ValueError(f"Unknown rank {rank!r}.")
    return r


def card_value(card: Card) -> int:
    """Return the point value of a card, counting an ace as 11.

    Examples:
        >>> card_value(Card('J', '♠'))
        10
        >>> card_value(Card('A', '♣'))
        11
    """
    return RANK_VALUES[card.rank]


def card_to_str(card: Card) -> str:
    """Convert a card to its display string.

    Examples:
        >>> card_to_str(Card('10', '♦'))
        '10♦'
    """
    return card.rank + card.suit


def str_to_card(s: str) -> Card:
    """Parse a card string; the suit is the last character.

    Examples:
        >>> str_to_card('A♠')
        Card(rank='A', suit='♠')
        >>> str_to_card('10H')
        Card(rank='10', suit='♥')
    """
    s = s.strip()
    if len(s) < 2:
        raise ValueError(f"Cannot parse card {s!r}.")
    suit_char = s[-1]
    suit = SUIT_LETTERS.get(suit_char.upper(), suit_char)
    return Card(normalize_rank(s[:-1]), suit)


def hand_to_str(cards) -> str:
    """Convert a sequence of cards to a space-separated string.

    Examples:
        >>> hand_to_str((Card('A', '♠'), Card('K', '♥')))
        'A♠ K♥'
    """
    return ' '.join(card_to_str(c) for c in cards)
