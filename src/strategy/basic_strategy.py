"""
Basic-strategy decision engine.

recommend(hand_type, player_value, dealer_upcard) maps a hand description and
the dealer's upcard to an Action plus a one-line rationale. It is a pure
lookup: no deck state, no side effects.

Player value encoding per hand type:
    hard  →  the total as a string or int, e.g. "16"
    soft  →  "A,x" with x in 2..10, soft total = 11 + x
    pair  →  "r,r" with r any rank, e.g. "8,8" or "K,K"

Dealer upcards are 2..10 or A (J/Q/K accepted as 10); A counts as 11.

Pairs dispatch through PAIR_RULES, a PairRank → rule table covering every
rank, so there is no unmatched pair at runtime.

Double is recommended regardless of how many cards the hand holds or whether
it came from a split; the trainer has no betting, so no eligibility check.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple, Sequence

from src.engine.cards import RANK_VALUES, Card, normalize_rank
from src.engine.hand import hand_value, is_pair, is_soft


class HandType(Enum):
    HARD = "hard"
    SOFT = "soft"
    PAIR = "pair"


class Action(Enum):
    HIT = "Hit"
    STAND = "Stand"
    DOUBLE = "Double"
    SPLIT = "Split"


class Recommendation(NamedTuple):
    action: Action
    rationale: str


class PairRank(Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


# ─── Input parsing ────────────────────────────────────────────────────────────

def dealer_value(upcard: str | int) -> int:
    """Numeric value of the dealer's upcard: A → 11, faces → 10.

    Examples:
        >>> dealer_value('A')
        11
        >>> dealer_value('7')
        7
    """
    return RANK_VALUES[normalize_rank(str(upcard))]


def _parse_hand_type(hand_type: HandType | str) -> HandType:
    if isinstance(hand_type, HandType):
        return hand_type
    try:
        return HandType(str(hand_type).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown hand type {hand_type!r}; expected hard, soft or pair.") from None


def _split_two(player_value: str) -> tuple[str, str]:
    parts = [p.strip() for p in str(player_value).split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected two comma-separated ranks, got {player_value!r}.")
    return normalize_rank(parts[0]), normalize_rank(parts[1])


def parse_pair(player_value: str) -> PairRank:
    """Return the PairRank for a value like "8,8".

    Raises:
        ValueError: If the two ranks differ.
    """
    first, second = _split_two(player_value)
    if first != second:
        raise ValueError(f"{player_value!r} is not a pair.")
    return PairRank(first)


def soft_total(player_value: str) -> int:
    """Soft total for an "A,x" value.

    Examples:
        >>> soft_total('A,7')
        18
        >>> soft_total('A,10')
        21
    """
    first, second = _split_two(player_value)
    if first != "A" or second == "A":
        raise ValueError(f"Soft hands are written 'A,x' with x in 2..10, got {player_value!r}.")
    return 11 + RANK_VALUES[second]


def _hard_total(player_value: str | int) -> int:
    try:
        return int(str(player_value).strip())
    except ValueError:
        raise ValueError(f"Hard hands are written as a total, got {player_value!r}.") from None


# ─── Pair rules ───────────────────────────────────────────────────────────────

PairRule = Callable[[int], Recommendation]


def _always_split(reason: str) -> PairRule:
    return lambda d: Recommendation(Action.SPLIT, reason)


def _small_pair(d: int) -> Recommendation:
    if 4 <= d <= 7:
        return Recommendation(Action.SPLIT, "Splitting small pairs vs a weak dealer improves your edge.")
    return Recommendation(
        Action.HIT, "Small pairs vs stronger dealer hands should be played as regular hands."
    )


def _fours(d: int) -> Recommendation:
    if d in (5, 6):
        return Recommendation(Action.SPLIT, "Splitting 4s vs 5 or 6 can be profitable, otherwise hit.")
    return Recommendation(Action.HIT, "Treat 4s as a weak hand and hit.")


def _fives(d: int) -> Recommendation:
    if 2 <= d <= 9:
        return Recommendation(Action.DOUBLE, "10 vs 2–9 is a great spot to double, never split 5s.")
    return Recommendation(Action.HIT, "Hit against strong dealer upcards instead of splitting 5s.")


def _sixes(d: int) -> Recommendation:
    if 2 <= d <= 6:
        return Recommendation(Action.SPLIT, "Splitting 6s vs 2–6 puts more money out when dealer is weak.")
    return Recommendation(Action.HIT, "Hit when the dealer shows a strong card.")


def _sevens(d: int) -> Recommendation:
    if 2 <= d <= 7:
        return Recommendation(
            Action.SPLIT, "Splitting 7s vs 2–7 is good, as the dealer is more likely to bust."
        )
    return Recommendation(Action.HIT, "Hit when the dealer has the advantage.")


def _nines(d: int) -> Recommendation:
    if d in (7, 10, 11):
        return Recommendation(Action.STAND, "19 is already very strong vs 7, 10, or Ace; just stand.")
    return Recommendation(Action.SPLIT, "Split 9s vs most dealer cards to improve your average result.")


def _tens(d: int) -> Recommendation:
    return Recommendation(
        Action.STAND, "20 is one of the best totals; splitting would weaken your position."
    )


PAIR_RULES: dict[PairRank, PairRule] = {
    PairRank.ACE: _always_split("Always split aces to start two strong hands."),
    PairRank.EIGHT: _always_split("Always split eights to avoid a hard 16, which is a weak hand."),
    PairRank.TWO: _small_pair,
    PairRank.THREE: _small_pair,
    PairRank.FOUR: _fours,
    PairRank.FIVE: _fives,
    PairRank.SIX: _sixes,
    PairRank.SEVEN: _sevens,
    PairRank.NINE: _nines,
    PairRank.TEN: _tens,
    PairRank.JACK: _tens,
    PairRank.QUEEN: _tens,
    PairRank.KING: _tens,
}

_PAIR_FALLBACK = Recommendation(Action.HIT, "For less common pairs, a safe default is to hit.")


# ─── Soft / hard rules ────────────────────────────────────────────────────────

def _soft_rule(total: int, d: int) -> Recommendation:
    if total <= 17:
        if 4 <= d <= 6:
            return Recommendation(Action.DOUBLE, "Soft totals 13–17 vs 4–6 are good double-down spots.")
        return Recommendation(
            Action.HIT, "Soft low totals give you room to hit without much bust risk."
        )
    if total == 18:
        if 3 <= d <= 6:
            return Recommendation(Action.DOUBLE, "Soft 18 vs 3–6 is strong and worth doubling.")
        if d in (2, 7, 8):
            return Recommendation(Action.STAND, "Soft 18 is fine as-is vs a medium dealer card.")
        return Recommendation(Action.HIT, "Soft 18 vs 9, 10, or Ace needs aggression; hit.")
    return Recommendation(Action.STAND, "Soft 19+ is strong; standing is usually best.")


def _hard_rule(total: int, d: int) -> Recommendation:
    if total <= 11:
        return Recommendation(
            Action.HIT, "You cannot bust with 11 or less, so hitting is always safe."
        )
    if 12 <= total <= 16:
        if 2 <= d <= 6:
            return Recommendation(
                Action.STAND,
                "Let a weak dealer (2–6) draw and potentially bust while you hold your total.",
            )
        return Recommendation(Action.HIT, "Dealer 7–Ace is strong; improve your weak 12–16 by hitting.")
    return Recommendation(
        Action.STAND, "Hard 17+ is strong enough; hitting risks busting too often."
    )


# ─── Public API ───────────────────────────────────────────────────────────────

def recommend(
    hand_type: HandType | str,
    player_value: str | int,
    dealer_upcard: str | int,
) -> Recommendation:
    """Return the basic-strategy action and rationale for a hand.

    Args:
        hand_type:     HandType or its string value ("hard", "soft", "pair").
        player_value:  Encoded hand, see module docstring.
        dealer_upcard: Dealer's visible card rank.

    Raises:
        ValueError: For an unknown hand type, malformed value, or bad upcard.

    Examples:
        >>> recommend("pair", "A,A", "6").action
        <Action.SPLIT: 'Split'>
        >>> recommend("hard", "16", "10").action
        <Action.HIT: 'Hit'>
        >>> recommend("soft", "A,7", "6").action
        <Action.DOUBLE: 'Double'>
    """
    kind = _parse_hand_type(hand_type)
    d = dealer_value(dealer_upcard)

    if kind is HandType.PAIR:
        rule = PAIR_RULES.get(parse_pair(str(player_value)))
        return rule(d) if rule is not None else _PAIR_FALLBACK
    if kind is HandType.SOFT:
        return _soft_rule(soft_total(str(player_value)), d)
    return _hard_rule(_hard_total(player_value), d)


def classify_hand(cards: Sequence[Card]) -> tuple[HandType, str]:
    """Describe a live hand in the encoding recommend() expects.

    Pairs are two cards of equal rank; a soft hand with more than two cards is
    folded into "A,x" where x is the rest of the soft total.

    Examples:
        >>> classify_hand([Card('8', '♠'), Card('8', '♥')])
        (<HandType.PAIR: 'pair'>, '8,8')
        >>> classify_hand([Card('A', '♠'), Card('2', '♥'), Card('3', '♦')])
        (<HandType.SOFT: 'soft'>, 'A,5')
    """
    if len(cards) < 2:
        raise ValueError("A hand needs at least two cards to classify.")
    if is_pair(cards):
        rank = cards[0].rank
        return HandType.PAIR, f"{rank},{rank}"
    total = hand_value(cards)
    if is_soft(cards) and total - 11 >= 2:
        return HandType.SOFT, f"A,{total - 11}"
    return HandType.HARD, str(total)


def recommend_for_hand(cards: Sequence[Card], dealer_upcard: Card | str) -> Recommendation:
    """recommend() for an actual hand of cards, e.g. a hint during play."""
    upcard = dealer_upcard.rank if isinstance(dealer_upcard, Card) else dealer_upcard
    hand_type, value = classify_hand(cards)
    return recommend(hand_type, value, upcard)
