"""Blackjack Trainer — Streamlit Dashboard.

Four-tab interactive trainer:
  Tab 1 — Strategy Trainer  (pick a hand + upcard + action, get graded)
  Tab 2 — Counting Drill    (Hi-Lo running count over 20 cards)
  Tab 3 — Play vs Dealer    (hit / stand / split, running count, session stats)
  Tab 4 — Strategy Chart    (matplotlib chart + Plotly hover lookup)

All game state lives in one TrainerSession kept in st.session_state; this
file only renders RoundView snapshots and forwards button presses.

Run:
    PYTHONPATH=. streamlit run app.py
"""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")  # must be set before any other matplotlib imports

import pandas as pd
import streamlit as st

from src.config import TrainerConfig, parse_seed
from src.engine.counting import format_count
from src.engine.game_state import HandStatus
from src.session import TrainerSession
from src.strategy.basic_strategy import HandType
from src.strategy.strategy_drill import (
    ACTIONS,
    DEALER_UPCARDS,
    check_move,
    player_value_options,
    random_question,
)

# ─── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Blackjack Trainer",
    page_icon="🃏",
    layout="wide",
)


@st.cache_resource
def _strategy_figures():
    """Build the static chart figures once for the process lifetime."""
    from src.analysis.heat_maps import plot_strategy_chart
    from src.analysis.plotly_lookup import build_lookup_figure

    return plot_strategy_chart(show=False), build_lookup_figure()


# ─── Sidebar controls ─────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🃏 Blackjack Trainer")
    st.markdown("---")

    num_decks = st.slider("Decks in shoe", min_value=1, max_value=8, value=6)
    seed_text = st.text_input("Random seed (blank = random)", value="")
    try:
        seed = parse_seed(seed_text)
    except ValueError:
        st.warning("Seed must be a whole number ≥ 0; using a random seed.")
        seed = None

    config = TrainerConfig(num_decks=num_decks, seed=seed)

    if "session" not in st.session_state or st.session_state["config"] != config:
        st.session_state["session"] = TrainerSession(config)
        st.session_state["config"] = config

    session: TrainerSession = st.session_state["session"]

    if st.button("Reset session"):
        session.reset()

    st.markdown("---")
    st.caption("Basic strategy → Hi-Lo → Play vs Dealer")

# ─── Tabs ─────────────────────────────────────────────────────────────────────

tab1, tab2, tab3, tab4 = st.tabs(
    [
        "Strategy Trainer",
        "Counting Drill",
        "Play vs Dealer",
        "Strategy Chart",
    ]
)

# ── Tab 1: Strategy Trainer ───────────────────────────────────────────────────

with tab1:
    st.header("Basic Strategy Trainer")

    if st.button("Random hand"):
        kind, value, upcard = random_question(session.rng)
        st.session_state["trainer_hand_type"] = kind
        st.session_state["trainer_player_value"] = value
        st.session_state["trainer_upcard"] = upcard

    col1, col2, col3, col4 = st.columns(4)
    hand_type = col1.selectbox(
        "Hand type",
        options=list(HandType),
        format_func=lambda t: t.value.capitalize(),
        key="trainer_hand_type",
    )
    options = player_value_options(hand_type)
    labels = dict(options)
    if st.session_state.get("trainer_player_value") not in labels:
        st.session_state.pop("trainer_player_value", None)
    player_value = col2.selectbox(
        "Your hand",
        options=[value for value, _label in options],
        format_func=lambda v: labels[v],
        key="trainer_player_value",
    )
    dealer_upcard = col3.selectbox("Dealer upcard", options=DEALER_UPCARDS, key="trainer_upcard")
    player_action = col4.selectbox("Your move", options=ACTIONS)

    if st.button("Check move", type="primary"):
        feedback = check_move(hand_type, player_value, dealer_upcard, player_action)
        if feedback.correct:
            st.success(feedback.message)
        else:
            st.warning(feedback.message)
        st.caption(feedback.rationale)

# ── Tab 2: Counting Drill ─────────────────────────────────────────────────────

with tab2:
    st.header("Hi-Lo Counting Drill")
    drill = session.drill

    col1, col2, col3 = st.columns(3)
    if col1.button("Start drill"):
        drill.start()
    if col2.button("Next card", disabled=not drill.started or drill.finished):
        drill.next_card()
    show_count = col3.button("Show count", disabled=not drill.started)

    card = drill.current_card
    st.metric("Current card", str(card) if card is not None else "—")
    if drill.started:
        st.caption(f"Card {drill.index} of {drill.length}")

    if show_count:
        st.info(drill.reveal_count())

    if drill.finished:
        guess = st.text_input("Your running count guess", key="count_guess")
        if st.button("Check count"):
            st.info(drill.check_guess(guess))

# ── Tab 3: Play vs Dealer ─────────────────────────────────────────────────────

with tab3:
    st.header("Play vs Dealer")
    current = session.view()

    col1, col2, col3, col4, col5 = st.columns(5)
    if col1.button("New hand", type="primary"):
        current = session.deal_new_hand()
    if col2.button("Hit", disabled=not current.can_hit):
        current = session.hit()
    if col3.button("Stand", disabled=not current.can_stand):
        current = session.stand()
    if col4.button("Split", disabled=not current.can_split):
        current = session.split()
    if col5.button("Hint", disabled=not current.can_hit):
        advice = session.hint()
        if advice is not None:
            st.info(f"Basic strategy: {advice.action.value}. {advice.rationale}")

    if current.dealer_cards:
        total_label = "Total showing" if current.dealer_hole_hidden else "Total"
        st.subheader("Dealer")
        st.markdown(" ".join(f"`{c}`" for c in current.dealer_cards))
        st.caption(f"{total_label}: {current.dealer_total}")

        for i, hand in enumerate(current.player_hands):
            title = "You" if len(current.player_hands) == 1 else f"Hand {i + 1}"
            if hand.is_current and len(current.player_hands) > 1:
                title += " ◀"
            st.subheader(title)
            st.markdown(" ".join(f"`{c}`" for c in hand.cards))
            status = " (bust)" if hand.status is HandStatus.BUSTED else ""
            st.caption(f"Total: {hand.total}{status}")

    if current.message:
        st.info(current.message)

    st.markdown("---")
    stats = current.stats
    col1, col2, col3, col4, col5, col6 = st.columns(6)
    col1.metric("Hands played", stats.hands_played)
    col2.metric("Wins", stats.wins)
    col3.metric("Losses", stats.losses)
    col4.metric("Pushes", stats.pushes)
    col5.metric("Win rate", f"{stats.win_rate}%")
    col6.metric("Running count", format_count(current.running_count))
    st.caption(f"Cards left in shoe: {current.cards_remaining}")

# ── Tab 4: Strategy Chart ─────────────────────────────────────────────────────

with tab4:
    st.header("Basic Strategy Chart")
    st.caption("H = Hit, S = Stand, D = Double, P = Split")

    fig_chart, fig_lookup = _strategy_figures()
    st.pyplot(fig_chart)

    st.markdown("---")
    st.subheader("Interactive lookup")
    st.plotly_chart(fig_lookup, use_container_width=True)

    rows = [
        {"Option": label, "Value": value}
        for kind in HandType
        for value, label in player_value_options(kind)
    ]
    with st.expander("All trainer hands"):
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
