from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd
import matplotlib.pyplot as plt

from ..helpers.dates import parse_date
from ..helpers.utils import split_pair


# ================================
# Theme
# ================================

@dataclass
class PlotTheme:
    """Aesthetic knobs shared by the plotting helpers."""
    figsize: Tuple[float, float] = (10.0, 6.0)
    dpi: int = 120

    title_size: int = 20
    label_size: int = 16
    tick_size: int = 12
    legend_size: int = 12

    grid: bool = True
    grid_style: str = "--"
    grid_alpha: float = 0.3

    palette: Sequence[str] = field(default_factory=lambda: [
        "#2563eb",  # blue
        "#10b981",  # emerald
        "#f59e0b",  # amber
        "#ef4444",  # red
        "#8b5cf6",  # violet
        "#14b8a6",  # teal
        "#84cc16",  # lime
    ])


THEME = PlotTheme()


def _apply_axes_style(ax: plt.Axes, theme: PlotTheme, *, title: Optional[str], xlabel: str, ylabel: str) -> None:
    if title is not None:
        ax.set_title(title, fontsize=theme.title_size)
    ax.set_xlabel(xlabel, fontsize=theme.label_size)
    ax.set_ylabel(ylabel, fontsize=theme.label_size)
    if theme.grid:
        ax.grid(True, linestyle=theme.grid_style, alpha=theme.grid_alpha)
    for tick in ax.get_xticklabels() + ax.get_yticklabels():
        tick.set_fontsize(theme.tick_size)
    handles, labels = ax.get_legend_handles_labels()
    if labels:
        ax.legend(handles, labels, loc="best", fontsize=theme.legend_size, frameon=False)


# ================================
# Design timeline
# ================================

def cohort_windows(diff_df: pd.DataFrame) -> pd.DataFrame:
    """Per cohort: pre period, first and last post period (as Timestamps).

    Only non-RI rows of a staggered table are used.
    """
    if "gt" not in diff_df.columns:
        raise ValueError("cohort_windows needs a staggered specification table (no `gt` column).")
    fmt = str(diff_df["date_format"].iloc[0])
    primary = diff_df[diff_df["RI"].astype(int) == 0]

    spans: Dict[pd.Timestamp, List[pd.Timestamp]] = {}
    pres: Dict[pd.Timestamp, pd.Timestamp] = {}
    for gvar, diff_times in zip(primary["gvar"], primary["diff_times"]):
        g = parse_date(gvar, fmt)
        post, pre = split_pair(diff_times)
        spans.setdefault(g, []).append(parse_date(post, fmt))
        pres[g] = parse_date(pre, fmt)

    rows = [
        {"gvar": g, "pre": pres[g], "first_post": min(ts), "last_post": max(ts), "n_post": len(set(ts))}
        for g, ts in sorted(spans.items())
    ]
    return pd.DataFrame(rows, columns=["gvar", "pre", "first_post", "last_post", "n_post"])


def plot_diff_design(
    diff_df: pd.DataFrame,
    ax: Optional[plt.Axes] = None,
    *,
    theme: Optional[PlotTheme] = None,
    title: Optional[str] = "Cohort comparison windows",
    save: Optional[str] = None,
) -> plt.Figure:
    """Draw one horizontal bar per cohort spanning its post periods, with a
    marker at the shared pre-treatment baseline."""
    theme = theme or THEME
    windows = cohort_windows(diff_df)
    if ax is None:
        fig, ax = plt.subplots(figsize=theme.figsize, dpi=theme.dpi)
    else:
        fig = ax.figure

    palette = list(theme.palette)
    labels = []
    for i, row in enumerate(windows.itertuples(index=False)):
        color = palette[i % len(palette)]
        ax.hlines(i, row.first_post, row.last_post, colors=color, linewidth=6,
                  label="post periods" if i == 0 else None)
        ax.plot([row.pre], [i], marker="o", color=color, markersize=8, linestyle="none",
                label="pre period" if i == 0 else None)
        labels.append(f"g={row.gvar.date()} ({row.n_post})")

    ax.set_yticks(range(len(labels)))
    ax.set_yticklabels(labels)
    _apply_axes_style(ax, theme, title=title, xlabel="Period", ylabel="Cohort")
    fig.tight_layout()
    if save:
        fig.savefig(save, bbox_inches="tight")
    return fig


__all__ = ["PlotTheme", "cohort_windows", "plot_diff_design"]
