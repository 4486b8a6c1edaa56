"""
Round state machine for the play-vs-dealer table.

Implements the full blackjack round flow:
    NO_ROUND → DEALING → PLAYER_TURN(hand_index) → DEALER_TURN → RESOLVED

Key rules modelled here:
    - Cards are dealt player, dealer, player, dealer from the shoe.
    - A two-card 21 for the player is settled immediately as a win.
    - One split per round, only from the first decision on a two-card pair.
    - After a hand stands or busts, play moves to the next live hand; when no
      live hand remains the dealer draws below 17 and every hand is settled.
      If every hand busted the dealer does not draw at all.
    - hit/stand/split outside the player's turn are ignored, never raised.

Transitions mutate the table; callers read results through the immutable
RoundView snapshot returned by each transition and passed to listeners.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable

from src.analysis.session_stats import SessionStats
from src.config import TrainerConfig

from .cards import Card, card_to_str, hand_to_str
from .counting import hi_lo_value
from .deck import Shoe
from .hand import hand_value, is_blackjack, is_bust, is_pair
from .rules import Outcome, dealer_should_hit, result_message, settle_hand

logger = logging.getLogger(__name__)

HIDDEN_CARD: str = "??"
BLACKJACK_MESSAGE: str = "Blackjack! You have 21 on the deal."


# ─── Enumerations ─────────────────────────────────────────────────────────────

class Phase(Enum):
    NO_ROUND = auto()
    DEALING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    RESOLVED = auto()


class HandStatus(Enum):
    ACTIVE = auto()
    STOOD = auto()
    BUSTED = auto()


# ─── State / view types ───────────────────────────────────────────────────────

@dataclass
class PlayerHand:
    """One player hand; a split round holds two of these."""
    cards: list[Card] = field(default_factory=list)
    status: HandStatus = HandStatus.ACTIVE
    outcome: Outcome | None = None

    @property
    def total(self) -> int:
        return hand_value(self.cards)


@dataclass(frozen=True)
class HandView:
    cards: tuple[str, ...]
    total: int
    status: HandStatus
    outcome: Outcome | None
    is_current: bool


@dataclass(frozen=True)
class RoundView:
    """Immutable snapshot of the table for a presentation layer.

    The dealer's hole card is masked as ``"??"`` and left out of both
    ``dealer_total`` and ``running_count`` until it is revealed. A hole card
    drawn before a mid-round rebuild is already out of the shoe's count.
    """
    phase: Phase
    dealer_cards: tuple[str, ...]
    dealer_total: int
    dealer_hole_hidden: bool
    player_hands: tuple[HandView, ...]
    current_hand: int
    game_over: bool
    can_hit: bool
    can_stand: bool
    can_split: bool
    message: str
    running_count: int
    cards_remaining: int
    stats: SessionStats


RoundListener = Callable[[RoundView], None]


# ─── Table ────────────────────────────────────────────────────────────────────

class BlackjackTable:
    """A single player against the dealer, drawing from one shoe.

    Args:
        config: Table rules; defaults to TrainerConfig().
        shoe:   Shoe to draw from. Built from config (num_decks, seed) if None.
        stats:  Statistics accumulator shared across rounds.
    """

    def __init__(
        self,
        config: TrainerConfig | None = None,
        shoe: Shoe | None = None,
        stats: SessionStats | None = None,
    ) -> None:
        self.config = config if config is not None else TrainerConfig()
        self.shoe = shoe if shoe is not None else Shoe(self.config.num_decks, self.config.make_rng())
        self.stats = stats if stats is not None else SessionStats()
        self._listeners: list[RoundListener] = []
        self._clear_round()
        self.phase = Phase.NO_ROUND

    def _clear_round(self) -> None:
        self.player_hands: list[PlayerHand] = [PlayerHand()]
        self.dealer_cards: list[Card] = []
        self.current_hand = 0
        self.split_used = False
        self.dealer_hole_hidden = True
        self._hole_generation: int | None = None
        self.message = ""

    # ── Listeners ─────────────────────────────────────────────────────────────

    def add_listener(self, listener: RoundListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: RoundListener) -> None:
        self._listeners.remove(listener)

    @property
    def listeners(self) -> tuple[RoundListener, ...]:
        return tuple(self._listeners)

    def clear_listeners(self) -> None:
        self._listeners.clear()

    def _notify(self) -> RoundView:
        view = self.view()
        for listener in list(self._listeners):
            listener(view)
        return view

    # ── Queries ───────────────────────────────────────────────────────────────

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.RESOLVED

    @property
    def awaiting_decision(self) -> bool:
        return self.phase is Phase.PLAYER_TURN

    def can_split(self) -> bool:
        return (
            self.awaiting_decision
            and not self.split_used
            and len(self.player_hands) == 1
            and is_pair(self.player_hands[0].cards)
        )

    def view(self) -> RoundView:
        """Build the current RoundView."""
        hide = self.dealer_hole_hidden and len(self.dealer_cards) >= 2
        if hide:
            dealer_strs = (card_to_str(self.dealer_cards[0]), HIDDEN_CARD) + tuple(
                card_to_str(c) for c in self.dealer_cards[2:]
            )
            dealer_total = hand_value(self.dealer_cards[:1])
            count = self.shoe.running_count
            if self._hole_generation == self.shoe.generation:
                count -= hi_lo_value(self.dealer_cards[1])
        else:
            dealer_strs = tuple(card_to_str(c) for c in self.dealer_cards)
            dealer_total = hand_value(self.dealer_cards)
            count = self.shoe.running_count

        in_round = self.phase is not Phase.NO_ROUND
        hands = tuple(
            HandView(
                cards=tuple(card_to_str(c) for c in h.cards),
                total=h.total,
                status=h.status,
                outcome=h.outcome,
                is_current=self.awaiting_decision and i == self.current_hand,
            )
            for i, h in enumerate(self.player_hands)
            if in_round
        )

        return RoundView(
            phase=self.phase,
            dealer_cards=dealer_strs,
            dealer_total=dealer_total,
            dealer_hole_hidden=hide,
            player_hands=hands,
            current_hand=self.current_hand,
            game_over=self.game_over,
            can_hit=self.awaiting_decision,
            can_stand=self.awaiting_decision,
            can_split=self.can_split(),
            message=self.message,
            running_count=count,
            cards_remaining=self.shoe.cards_remaining,
            stats=self.stats.copy(),
        )

    # ── Transitions ───────────────────────────────────────────────────────────

    def deal_new_hand(self) -> RoundView:
        """Start a new round: maybe rebuild the shoe, then deal two cards each."""
        if self.shoe.needs_rebuild(self.config.reshuffle_threshold):
            self.shoe.rebuild()

        self._clear_round()
        self.phase = Phase.DEALING

        hand = self.player_hands[0]
        hand.cards.append(self.shoe.draw())
        self.dealer_cards.append(self.shoe.draw())
        hand.cards.append(self.shoe.draw())
        self.dealer_cards.append(self.shoe.draw())
        self._hole_generation = self.shoe.generation

        self.phase = Phase.PLAYER_TURN

        if is_blackjack(hand.cards):
            hand.status = HandStatus.STOOD
            hand.outcome = Outcome.WIN
            self.dealer_hole_hidden = False
            self.message = BLACKJACK_MESSAGE
            self.phase = Phase.RESOLVED
            self.stats.record_round([Outcome.WIN])
            logger.info("Blackjack on the deal")

        return self._notify()

    def split(self) -> RoundView:
        """Split a two-card pair into two hands, drawing one card onto each."""
        if not self.can_split():
            logger.debug("Ignoring split in phase %s", self.phase.name)
            return self.view()

        first = self.player_hands[0]
        second = PlayerHand(cards=[first.cards.pop()])
        first.cards.append(self.shoe.draw())
        second.cards.append(self.shoe.draw())
        self.player_hands.append(second)
        self.split_used = True
        self.current_hand = 0
        return self._notify()

    def hit(self) -> RoundView:
        """Draw one card into the current hand; a bust moves play on."""
        if not self.awaiting_decision:
            logger.debug("Ignoring hit in phase %s", self.phase.name)
            return self.view()

        hand = self.player_hands[self.current_hand]
        hand.cards.append(self.shoe.draw())
        if is_bust(hand.total):
            hand.status = HandStatus.BUSTED
            self._advance()
        return self._notify()

    def stand(self) -> RoundView:
        """Freeze the current hand and move play on."""
        if not self.awaiting_decision:
            logger.debug("Ignoring stand in phase %s", self.phase.name)
            return self.view()

        self.player_hands[self.current_hand].status = HandStatus.STOOD
        self._advance()
        return self._notify()

    # ── Internals ─────────────────────────────────────────────────────────────

    def _advance(self) -> None:
        """Move to the next live hand, or finish the round."""
        for i in range(self.current_hand + 1, len(self.player_hands)):
            if self.player_hands[i].total <= 21:
                self.current_hand = i
                return

        if any(h.status is not HandStatus.BUSTED for h in self.player_hands):
            self._dealer_play()
        self._settle()

    def _dealer_play(self) -> None:
        self.phase = Phase.DEALER_TURN
        self.dealer_hole_hidden = False
        while dealer_should_hit(self.dealer_cards, self.config.dealer_stands_on):
            self.dealer_cards.append(self.shoe.draw())

    def _settle(self) -> None:
        self.dealer_hole_hidden = False
        dealer_total = hand_value(self.dealer_cards)
        lines = []
        for i, hand in enumerate(self.player_hands):
            hand.outcome = settle_hand(hand.cards, self.dealer_cards)
            line = result_message(hand.outcome, hand.total, dealer_total)
            if len(self.player_hands) > 1:
                line = f"Hand {i + 1}: {line}"
            lines.append(line)

        self.message = " | ".join(lines)
        self.phase = Phase.RESOLVED
        outcomes = [h.outcome for h in self.player_hands]
        self.stats.record_round(outcomes)
        logger.info(
            "Round settled: %s (dealer %s = %d)",
            ", ".join(o.value for o in outcomes),
            hand_to_str(self.dealer_cards),
            dealer_total,
        )
