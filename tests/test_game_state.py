"""
Tests for src/engine/game_state.py — the play-vs-dealer round state machine.

Every round is dealt from a stacked shoe so outcomes are exact. Stacked shoes
are short, so the table is configured never to rebuild at round start
(NO_RESHUFFLE) except in the low-water test.
"""

from __future__ import annotations

import logging

import pytest

from src.config import TrainerConfig
from src.engine.deck import Shoe
from src.engine.game_state import (
    BLACKJACK_MESSAGE,
    HIDDEN_CARD,
    BlackjackTable,
    HandStatus,
    Phase,
)
from src.engine.rules import Outcome
from tests.conftest import NO_RESHUFFLE, ranks, stacked_shoe


def table_for(*rank_strs: str) -> BlackjackTable:
    return BlackjackTable(NO_RESHUFFLE, shoe=stacked_shoe(*rank_strs))


# ─── Before any deal ──────────────────────────────────────────────────────────

class TestNoRound:
    def test_initial_view(self):
        view = BlackjackTable(NO_RESHUFFLE).view()
        assert view.phase is Phase.NO_ROUND
        assert view.dealer_cards == ()
        assert view.player_hands == ()
        assert not view.can_hit and not view.can_stand and not view.can_split
        assert not view.game_over

    @pytest.mark.parametrize("method", ["hit", "stand", "split"])
    def test_actions_are_noops(self, method):
        table = BlackjackTable(NO_RESHUFFLE)
        remaining = table.shoe.cards_remaining
        view = getattr(table, method)()
        assert view.phase is Phase.NO_ROUND
        assert table.shoe.cards_remaining == remaining
        assert table.stats.hands_played == 0


# ─── Dealing ──────────────────────────────────────────────────────────────────

class TestDeal:
    def test_two_cards_each_alternating(self):
        table = table_for('A', 'K', '5', '6', '10')
        view = table.deal_new_hand()
        assert [c.rank for c in table.player_hands[0].cards] == ['A', '5']
        assert [c.rank for c in table.dealer_cards] == ['K', '6']
        assert len(view.player_hands) == 1
        assert view.player_hands[0].total == 16
        assert view.phase is Phase.PLAYER_TURN
        assert not view.game_over

    def test_hole_card_hidden(self):
        table = table_for('A', 'K', '5', '6', '10')
        view = table.deal_new_hand()
        assert view.dealer_cards == ('K♥', HIDDEN_CARD)
        assert view.dealer_hole_hidden
        assert view.dealer_total == 10

    def test_running_count_excludes_hidden_hole_card(self):
        table = table_for('A', 'K', '5', '6', '10')
        view = table.deal_new_hand()
        # A -1, K -1, 5 +1, 6 +1 → shoe count 0; the 6 is still hidden.
        assert table.shoe.running_count == 0
        assert view.running_count == -1

    def test_hole_card_drops_out_of_count_after_mid_round_rebuild(self):
        table = table_for('2', '7', '3', 'K')
        table.deal_new_hand()
        # The stacked cards are gone, so this hit rebuilds the shoe and the
        # count restarts without the hidden K.
        view = table.hit()
        assert view.dealer_hole_hidden
        assert view.running_count == table.shoe.running_count

    def test_blackjack_resolves_immediately(self):
        table = table_for('A', '5', 'K', '6')
        view = table.deal_new_hand()
        assert view.game_over
        assert view.phase is Phase.RESOLVED
        assert not view.dealer_hole_hidden
        assert view.dealer_cards == ('5♥', '6♣')
        assert view.message == BLACKJACK_MESSAGE
        assert view.player_hands[0].outcome is Outcome.WIN
        assert table.stats.wins == 1
        assert table.stats.hands_played == 1

    def test_new_deal_resets_round(self):
        table = table_for('10', '9', '6', '7', 'K', '2', '3', '4', '5')
        table.deal_new_hand()
        table.hit()
        view = table.deal_new_hand()
        assert len(view.player_hands) == 1
        assert len(view.dealer_cards) == 2
        assert view.message == ""
        assert not table.split_used

    def test_rebuilds_below_low_water_mark(self):
        config = TrainerConfig(num_decks=1, reshuffle_threshold=15, seed=0)
        table = BlackjackTable(config, shoe=stacked_shoe('A', 'K', '5', '6'))
        table.deal_new_hand()
        assert table.shoe.cards_remaining == 48

    def test_no_rebuild_at_or_above_low_water_mark(self):
        config = TrainerConfig(num_decks=1, reshuffle_threshold=15, seed=0)
        table = BlackjackTable(config, shoe=stacked_shoe(*(['7'] * 15)))
        table.deal_new_hand()
        assert table.shoe.cards_remaining == 11


# ─── Hit / stand ──────────────────────────────────────────────────────────────

class TestHitStand:
    def test_stand_then_dealer_busts(self):
        table = table_for('A', 'K', '5', '6', '10')
        table.deal_new_hand()
        view = table.stand()
        assert view.game_over
        assert view.dealer_cards == ('K♥', '6♣', '10♠')
        assert view.dealer_total == 26
        assert view.player_hands[0].outcome is Outcome.WIN
        assert view.message == "Dealer busts with 26. You win with 16!"

    def test_settlement_is_logged(self, caplog):
        table = table_for('A', 'K', '5', '6', '10')
        table.deal_new_hand()
        with caplog.at_level(logging.INFO, logger="src.engine.game_state"):
            table.stand()
        assert "Round settled: win (dealer K♥ 6♣ 10♠ = 26)" in caplog.text

    def test_hit_without_bust_keeps_turn(self):
        table = table_for('10', '9', '2', '7', '3')
        table.deal_new_hand()
        view = table.hit()
        assert view.player_hands[0].total == 15
        assert view.phase is Phase.PLAYER_TURN
        assert view.can_hit

    def test_hit_bust_skips_dealer(self):
        table = table_for('10', '9', '6', '7', 'K')
        table.deal_new_hand()
        view = table.hit()
        assert view.game_over
        assert view.player_hands[0].status is HandStatus.BUSTED
        assert view.player_hands[0].outcome is Outcome.LOSS
        assert len(table.dealer_cards) == 2
        assert not view.dealer_hole_hidden
        assert view.message == "You bust! Dealer wins."
        assert table.stats.losses == 1

    def test_dealer_stands_on_17(self):
        table = table_for('10', '10', '8', '7')
        table.deal_new_hand()
        view = table.stand()
        assert len(table.dealer_cards) == 2
        assert view.player_hands[0].outcome is Outcome.WIN
        assert view.message == "You win! 18 vs dealer's 17."

    def test_dealer_draws_until_17(self):
        # Dealer 2 + 3, then 4, 5, 3 → 17
        table = table_for('10', '2', '9', '3', '4', '5', '3')
        table.deal_new_hand()
        view = table.stand()
        assert [c.rank for c in table.dealer_cards] == ['2', '3', '4', '5', '3']
        assert view.dealer_total == 17
        assert view.player_hands[0].outcome is Outcome.WIN

    def test_push(self):
        table = table_for('10', '10', '8', '8')
        table.deal_new_hand()
        view = table.stand()
        assert view.player_hands[0].outcome is Outcome.PUSH
        assert view.message == "Push: both you and the dealer have 18."
        assert table.stats.pushes == 1

    def test_dealer_wins(self):
        table = table_for('10', '10', '7', '9')
        table.deal_new_hand()
        view = table.stand()
        assert view.player_hands[0].outcome is Outcome.LOSS
        assert view.message == "Dealer wins 19 vs your 17."


# ─── Split ────────────────────────────────────────────────────────────────────

class TestSplit:
    def test_split_creates_two_hands(self):
        table = table_for('8', '10', '8', '7', '3', '2')
        view = table.deal_new_hand()
        assert view.can_split
        view = table.split()
        assert [[c.rank for c in h.cards] for h in table.player_hands] == [['8', '3'], ['8', '2']]
        assert table.split_used
        assert view.current_hand == 0
        assert view.player_hands[0].is_current
        assert not view.can_split

    def test_stand_both_hands_settles_each(self):
        table = table_for('8', '10', '8', '7', '3', '2')
        table.deal_new_hand()
        table.split()
        view = table.stand()
        assert view.current_hand == 1
        assert view.phase is Phase.PLAYER_TURN
        view = table.stand()
        assert view.game_over
        assert [h.outcome for h in view.player_hands] == [Outcome.LOSS, Outcome.LOSS]
        assert view.message == (
            "Hand 1: Dealer wins 17 vs your 11. | Hand 2: Dealer wins 17 vs your 10."
        )
        assert table.stats.hands_played == 2
        assert table.stats.losses == 2

    def test_first_hand_bust_moves_to_second(self):
        table = table_for('8', '10', '8', '7', '5', '3', 'K', '10')
        table.deal_new_hand()
        table.split()
        view = table.hit()          # 8,5,K = 23
        assert view.player_hands[0].status is HandStatus.BUSTED
        assert view.current_hand == 1
        assert not view.game_over
        table.hit()                 # 8,3,10 = 21
        view = table.stand()
        assert [h.outcome for h in view.player_hands] == [Outcome.LOSS, Outcome.WIN]
        assert table.stats.win_rate == 50

    def test_all_hands_bust_dealer_does_not_draw(self):
        table = table_for('8', '10', '8', '6', '5', '5', 'K', 'K')
        table.deal_new_hand()
        table.split()
        table.hit()
        view = table.hit()
        assert view.game_over
        assert len(table.dealer_cards) == 2
        assert all(h.outcome is Outcome.LOSS for h in view.player_hands)
        assert table.stats.losses == 2

    def test_non_pair_cannot_split(self):
        table = table_for('K', '10', 'Q', '7')
        view = table.deal_new_hand()
        assert not view.can_split
        remaining = table.shoe.cards_remaining
        view = table.split()
        assert len(view.player_hands) == 1
        assert table.shoe.cards_remaining == remaining

    def test_cannot_split_after_hit(self):
        table = table_for('2', '10', '2', '7', '3')
        table.deal_new_hand()
        table.hit()
        view = table.split()
        assert len(view.player_hands) == 1
        assert len(view.player_hands[0].cards) == 3

    def test_only_one_split_per_round(self):
        table = table_for('8', '10', '8', '7', '8', '8')
        table.deal_new_hand()
        table.split()
        assert [c.rank for c in table.player_hands[0].cards] == ['8', '8']
        view = table.split()
        assert len(view.player_hands) == 2
        assert not view.can_split

    def test_split_after_resolution_is_noop(self):
        table = table_for('8', '10', '8', '7', '3', '2')
        table.deal_new_hand()
        table.stand()
        view = table.split()
        assert len(view.player_hands) == 1


# ─── Terminal state ───────────────────────────────────────────────────────────

class TestResolvedIsTerminal:
    @pytest.mark.parametrize("method", ["hit", "stand", "split"])
    def test_actions_ignored_after_resolution(self, method):
        table = table_for('A', 'K', '5', '6', '10', '2', '3')
        table.deal_new_hand()
        before = table.stand()
        after = getattr(table, method)()
        assert after == before
        assert table.stats.hands_played == 1

    def test_blackjack_round_ignores_hit(self):
        table = table_for('A', '5', 'K', '6', '2')
        before = table.deal_new_hand()
        after = table.hit()
        assert after == before


# ─── Listeners ────────────────────────────────────────────────────────────────

class TestListeners:
    def test_listener_receives_each_change(self):
        table = table_for('A', 'K', '5', '6', '10')
        seen = []
        table.add_listener(seen.append)
        table.deal_new_hand()
        table.stand()
        assert [v.phase for v in seen] == [Phase.PLAYER_TURN, Phase.RESOLVED]

    def test_noop_does_not_notify(self):
        table = table_for('A', 'K', '5', '6', '10')
        seen = []
        table.add_listener(seen.append)
        table.hit()
        assert seen == []

    def test_remove_listener(self):
        table = table_for('A', 'K', '5', '6', '10')
        seen = []
        table.add_listener(seen.append)
        table.remove_listener(seen.append)
        table.deal_new_hand()
        assert seen == []


# ─── Shoe integration ─────────────────────────────────────────────────────────

class TestShoeIntegration:
    def test_default_table_uses_six_decks(self):
        table = BlackjackTable(TrainerConfig(seed=1))
        assert table.shoe.cards_remaining == 312

    def test_view_count_matches_shoe_after_reveal(self):
        table = table_for('10', '9', '6', '7', 'K')
        table.deal_new_hand()
        view = table.hit()
        assert view.running_count == table.shoe.running_count == -1

    def test_stats_snapshot_is_a_copy(self):
        table = table_for('A', 'K', '5', '6', '10')
        view = table.deal_new_hand()
        table.stand()
        assert view.stats.hands_played == 0

    def test_explicit_shoe_is_used(self):
        shoe = Shoe.stacked(ranks('9', '9', '9', '9'))
        table = BlackjackTable(NO_RESHUFFLE, shoe=shoe)
        table.deal_new_hand()
        assert table.shoe is shoe
