"""Tests for the basic-strategy chart heat maps (src/analysis/heat_maps.py).

Tests verify data-matrix shapes and value invariants (no display required)
plus that each plot function returns a well-formed matplotlib Figure.
The Agg backend is activated before any pyplot import so CI/CD environments
without a display server can run the suite safely.
"""

from __future__ import annotations

import os

import matplotlib

matplotlib.use("Agg")  # must precede any pyplot import

import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np
import pytest

from src.analysis.heat_maps import (
    ACTION_CODES,
    build_strategy_chart_data,
    plot_hand_type_chart,
    plot_strategy_chart,
)
from src.strategy.basic_strategy import Action, HandType


# ─── build_strategy_chart_data ────────────────────────────────────────────────


class TestBuildStrategyChartData:
    @pytest.mark.parametrize("kind, rows", [("hard", 16), ("soft", 9), ("pair", 13)])
    def test_shape(self, kind, rows) -> None:
        data, row_labels, col_labels = build_strategy_chart_data(kind)
        assert data.shape == (rows, 10)
        assert len(row_labels) == rows
        assert col_labels == ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'A']

    def test_values_are_action_codes(self) -> None:
        for kind in HandType:
            data, _, _ = build_strategy_chart_data(kind)
            assert set(np.unique(data)) <= set(ACTION_CODES.values())

    def test_hard_never_splits_or_doubles(self) -> None:
        data, _, _ = build_strategy_chart_data(HandType.HARD)
        assert set(np.unique(data)) <= {ACTION_CODES[Action.HIT], ACTION_CODES[Action.STAND]}

    def test_hard_20_row_all_stand(self) -> None:
        data, rows, _ = build_strategy_chart_data("hard")
        assert rows[-1] == "Hard 20"
        assert (data[-1] == ACTION_CODES[Action.STAND]).all()

    def test_aces_row_all_split(self) -> None:
        data, rows, _ = build_strategy_chart_data("pair")
        assert rows[-1] == "Pair A,A"
        assert (data[-1] == ACTION_CODES[Action.SPLIT]).all()

    def test_soft_18_row(self) -> None:
        data, rows, _ = build_strategy_chart_data("soft")
        r = rows.index("Soft A-7")
        assert data[r, 0] == ACTION_CODES[Action.STAND]     # vs 2
        assert data[r, 4] == ACTION_CODES[Action.DOUBLE]    # vs 6
        assert data[r, 9] == ACTION_CODES[Action.HIT]       # vs A


# ─── Plot functions ───────────────────────────────────────────────────────────


class TestPlotStrategyChart:
    def test_returns_figure(self) -> None:
        fig = plot_strategy_chart(show=False)
        assert isinstance(fig, matplotlib.figure.Figure)
        assert len(fig.axes) == 3
        plt.close(fig)

    def test_panel_titles(self) -> None:
        fig = plot_strategy_chart(show=False)
        assert [ax.get_title() for ax in fig.axes] == ["Hard totals", "Soft totals", "Pairs"]
        plt.close(fig)

    def test_save_path(self, tmp_path) -> None:
        path = os.path.join(tmp_path, "chart.png")
        fig = plot_strategy_chart(show=False, save_path=path)
        assert os.path.exists(path)
        plt.close(fig)


class TestPlotHandTypeChart:
    def test_single_panel(self) -> None:
        fig = plot_hand_type_chart("pair", show=False)
        assert len(fig.axes) == 1
        assert fig.axes[0].get_title() == "Pairs"
        plt.close(fig)
