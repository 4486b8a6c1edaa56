"""
Trainer session: owns the play table, its shoe and statistics, and the
counting drill for one user.

Lifecycle:
    session = TrainerSession(config)   # create
    session.reset()                    # fresh shoe, stats and drill
    session.close()                    # drop listeners; later calls and queries raise

Every table transition runs under one re-entrant lock so overlapping UI
triggers (double clicks, concurrent reruns) cannot interleave.
"""

from __future__ import annotations

import logging
import threading

import numpy as np

from src.analysis.session_stats import SessionStats
from src.config import TrainerConfig
from src.drills.counting_drill import CountingDrill
from src.engine.deck import Shoe
from src.engine.game_state import BlackjackTable, RoundListener, RoundView
from src.strategy.basic_strategy import Recommendation, recommend_for_hand

logger = logging.getLogger(__name__)


class TrainerSession:
    def __init__(self, config: TrainerConfig | None = None, shoe: Shoe | None = None) -> None:
        self.config = config if config is not None else TrainerConfig()
        self._lock = threading.RLock()
        self._closed = False
        self._rng = self.config.make_rng()
        self._build(shoe)

    def _build(self, shoe: Shoe | None = None) -> None:
        if shoe is None:
            shoe = Shoe(self.config.num_decks, self._rng)
        self.table = BlackjackTable(self.config, shoe=shoe, stats=SessionStats())
        self.drill = CountingDrill(self.config.drill_length, self._rng)

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("TrainerSession is closed.")

    @property
    def stats(self) -> SessionStats:
        return self.table.stats

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def rng(self) -> np.random.Generator:
        """Generator shared by the shoe, the drill and random trainer questions."""
        return self._rng

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Start over with a new shoe, zeroed statistics, and an unstarted drill."""
        with self._lock:
            self._check_open()
            listeners = self.table.listeners
            self._build()
            for listener in listeners:
                self.table.add_listener(listener)
            logger.info("Session reset")

    def close(self) -> None:
        with self._lock:
            self.table.clear_listeners()
            self._closed = True

    def __enter__(self) -> TrainerSession:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ── Table transitions ─────────────────────────────────────────────────────

    def add_listener(self, listener: RoundListener) -> None:
        with self._lock:
            self._check_open()
            self.table.add_listener(listener)

    def view(self) -> RoundView:
        with self._lock:
            self._check_open()
            return self.table.view()

    def deal_new_hand(self) -> RoundView:
        with self._lock:
            self._check_open()
            return self.table.deal_new_hand()

    def hit(self) -> RoundView:
        with self._lock:
            self._check_open()
            return self.table.hit()

    def stand(self) -> RoundView:
        with self._lock:
            self._check_open()
            return self.table.stand()

    def split(self) -> RoundView:
        with self._lock:
            self._check_open()
            return self.table.split()

    def hint(self) -> Recommendation | None:
        """Basic-strategy advice for the hand awaiting a decision, if any."""
        with self._lock:
            self._check_open()
            if not self.table.awaiting_decision:
                return None
            hand = self.table.player_hands[self.table.current_hand]
            return recommend_for_hand(hand.cards, self.table.dealer_cards[0])
