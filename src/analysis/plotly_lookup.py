"""Interactive Plotly basic-strategy lookup.

Two public functions:

    build_lookup_figure()
        — Hard / soft / pair heatmaps; hover shows hand, upcard, action, rationale.
    save_lookup_html(fig, path)
        — Export any figure to a self-contained HTML file.

Figures open in a browser via ``fig.show()`` or embed in Streamlit with
``st.plotly_chart``.
"""

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from src.analysis.heat_maps import build_strategy_chart_data
from src.strategy.basic_strategy import HandType, recommend
from src.strategy.strategy_drill import DEALER_UPCARDS, player_value_options

# ─── Constants ────────────────────────────────────────────────────────────────

# Four discrete bands, one per action code (0 Hit, 1 Stand, 2 Double, 3 Split).
_ACTION_COLORSCALE: list[list] = [
    [0.00, "#2ca02c"],
    [0.25, "#2ca02c"],
    [0.25, "#d62728"],
    [0.50, "#d62728"],
    [0.50, "#1f77b4"],
    [0.75, "#1f77b4"],
    [0.75, "#ff7f0e"],
    [1.00, "#ff7f0e"],
]

_SUBPLOT_TITLES: list[str] = ["Hard totals", "Soft totals", "Pairs"]


# ─── Hover text ───────────────────────────────────────────────────────────────


def _build_hover(hand_type: HandType) -> list[list[str]]:
    """Return a rows×10 grid of HTML hover strings for one hand type."""
    rows: list[list[str]] = []
    for value, label in player_value_options(hand_type):
        row: list[str] = []
        for upcard in DEALER_UPCARDS:
            rec = recommend(hand_type, value, upcard)
            lines = [
                f"Hand: <b>{label}</b>",
                f"Dealer: {upcard}",
                f"Action: <b>{rec.action.value}</b>",
                rec.rationale,
            ]
            row.append("<br>".join(lines))
        rows.append(row)
    return rows


def _make_heatmap_trace(
    data: np.ndarray,
    row_labels: list[str],
    hover_text: list[list[str]],
    *,
    name: str,
    showscale: bool,
) -> go.Heatmap:
    """Build one go.Heatmap trace for a chart panel."""
    return go.Heatmap(
        z=data.tolist(),
        x=list(DEALER_UPCARDS),
        y=row_labels,
        colorscale=_ACTION_COLORSCALE,
        zmin=-0.5,
        zmax=3.5,
        text=hover_text,
        hovertemplate="%{text}<extra></extra>",
        showscale=showscale,
        colorbar={
            "title": "Action",
            "tickvals": [0, 1, 2, 3],
            "ticktext": ["Hit", "Stand", "Double", "Split"],
        },
        name=name,
    )


# ─── Public figure builder ────────────────────────────────────────────────────


def build_lookup_figure() -> go.Figure:
    """Build the interactive strategy lookup: three heatmap panels in one row.

    Returns:
        go.Figure with three heatmap traces (hard, soft, pair).
    """
    fig = make_subplots(
        rows=1,
        cols=3,
        subplot_titles=_SUBPLOT_TITLES,
        horizontal_spacing=0.09,
    )

    for col, kind in enumerate(HandType, start=1):
        data, row_labels, _cols = build_strategy_chart_data(kind)
        fig.add_trace(
            _make_heatmap_trace(
                data,
                row_labels,
                _build_hover(kind),
                name=kind.value.capitalize(),
                showscale=col == 3,
            ),
            row=1,
            col=col,
        )

    fig.update_layout(
        title_text="Basic Strategy Lookup",
        title_font_size=15,
        height=560,
        width=1150,
    )
    fig.update_xaxes(title_text="Dealer upcard", type="category")
    fig.update_yaxes(autorange="reversed", type="category")
    return fig


# ─── HTML export ──────────────────────────────────────────────────────────────


def save_lookup_html(fig: go.Figure, path: str) -> None:
    """Save a Plotly figure to an HTML file (Plotly JS loaded from the CDN)."""
    fig.write_html(path, include_plotlyjs="cdn")


if __name__ == "__main__":
    save_lookup_html(build_lookup_figure(), "strategy_lookup.html")
    print("Saved: strategy_lookup.html")
