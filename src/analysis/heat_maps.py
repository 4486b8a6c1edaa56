"""Basic-strategy chart heat maps.

One public data-builder returns a NumPy matrix that can be used
programmatically or passed to the plot helpers:

    build_strategy_chart_data(hand_type)  — action-code matrix + labels

Two public plot functions render matplotlib figures:

    plot_strategy_chart(...)        — 1×3 figure (hard, soft, pairs)
    plot_hand_type_chart(hand_type) — single panel

Matrix convention:
    Rows   : player values in trainer-option order (hard 5–20, soft A-2..A-10,
             pairs 2,2..A,A)
    Cols   : dealer upcards [2..10, A]
    Values : ACTION_CODES — 0 = Hit, 1 = Stand, 2 = Double, 3 = Split
"""

from __future__ import annotations

import matplotlib
import matplotlib.colors
import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np

from src.strategy.basic_strategy import Action, HandType, recommend
from src.strategy.strategy_drill import DEALER_UPCARDS, player_value_options

# ─── Constants ────────────────────────────────────────────────────────────────

ACTION_CODES: dict[Action, int] = {
    Action.HIT: 0,
    Action.STAND: 1,
    Action.DOUBLE: 2,
    Action.SPLIT: 3,
}
_ACTION_LETTERS: list[str] = ["H", "S", "D", "P"]
_ACTION_COLORS: list[str] = ["#2ca02c", "#d62728", "#1f77b4", "#ff7f0e"]

_PANEL_TITLES: dict[HandType, str] = {
    HandType.HARD: "Hard totals",
    HandType.SOFT: "Soft totals",
    HandType.PAIR: "Pairs",
}

_ACTION_CMAP = matplotlib.colors.ListedColormap(_ACTION_COLORS)


# ─── Data builder ─────────────────────────────────────────────────────────────


def build_strategy_chart_data(
    hand_type: HandType | str,
) -> tuple[np.ndarray, list[str], list[str]]:
    """Return (matrix, row_labels, col_labels) for one hand type.

    Args:
        hand_type: HandType or its string value.

    Returns:
        matrix:     int8 array, shape (n_player_values, 10), of ACTION_CODES.
        row_labels: Player-value labels, e.g. "Hard 12", "Soft A-7", "Pair 8,8".
        col_labels: Dealer upcards.
    """
    options = player_value_options(hand_type)
    data = np.zeros((len(options), len(DEALER_UPCARDS)), dtype=np.int8)
    for r, (value, _label) in enumerate(options):
        for c, upcard in enumerate(DEALER_UPCARDS):
            data[r, c] = ACTION_CODES[recommend(hand_type, value, upcard).action]
    return data, [label for _value, label in options], list(DEALER_UPCARDS)


# ─── Rendering helper ─────────────────────────────────────────────────────────


def _render_panel(
    ax: matplotlib.axes.Axes,
    data: np.ndarray,
    row_labels: list[str],
    col_labels: list[str],
) -> matplotlib.image.AxesImage:
    """Render one chart panel onto *ax* with a letter in every cell."""
    im = ax.imshow(data, cmap=_ACTION_CMAP, vmin=0, vmax=len(_ACTION_COLORS) - 1, aspect="auto")

    ax.set_xticks(range(len(col_labels)))
    ax.set_xticklabels(col_labels, fontsize=8)
    ax.set_yticks(range(len(row_labels)))
    ax.set_yticklabels(row_labels, fontsize=8)

    for r in range(data.shape[0]):
        for c in range(data.shape[1]):
            ax.text(
                c,
                r,
                _ACTION_LETTERS[int(data[r, c])],
                ha="center",
                va="center",
                fontsize=8,
                color="white",
                fontweight="bold",
            )

    return im


# ─── Public plot functions ────────────────────────────────────────────────────


def plot_hand_type_chart(
    hand_type: HandType | str,
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot the chart for a single hand type."""
    kind = hand_type if isinstance(hand_type, HandType) else HandType(hand_type)
    data, rows, cols = build_strategy_chart_data(kind)

    fig, ax = plt.subplots(figsize=(6, 0.35 * len(rows) + 1.5))
    _render_panel(ax, data, rows, cols)
    ax.set_title(_PANEL_TITLES[kind], fontsize=10)
    ax.set_xlabel("Dealer upcard", fontsize=9)
    plt.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig


def plot_strategy_chart(
    title: str = "Basic Strategy Chart",
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot hard, soft and pair charts side by side.

    Cell letters: H = Hit, S = Stand, D = Double, P = Split.

    Args:
        title:     Figure suptitle.
        show:      If True, call plt.show() after rendering.
        save_path: If not None, save the figure to this path before showing.

    Returns:
        matplotlib.figure.Figure with three axes.
    """
    fig, axes = plt.subplots(1, 3, figsize=(16, 7))
    fig.suptitle(title, fontsize=13, fontweight="bold")

    for ax, kind in zip(axes, HandType):
        data, rows, cols = build_strategy_chart_data(kind)
        _render_panel(ax, data, rows, cols)
        ax.set_title(_PANEL_TITLES[kind], fontsize=10)
        ax.set_xlabel("Dealer upcard", fontsize=9)

    plt.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import sys

    path = sys.argv[1] if len(sys.argv) > 1 else "basic_strategy_chart.png"
    print("Generating basic strategy chart …")
    plot_strategy_chart(show=False, save_path=path)
    print(f"Saved: {path}")
