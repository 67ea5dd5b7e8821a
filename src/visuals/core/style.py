"""Plot styling helpers for visuals."""

from matplotlib.axes import Axes


def setup_bar_plot_style(ax: Axes, top_n: int = 10) -> None:
    """Style ``ax`` as a race chart: value axis on top, ranks downwards.

    Ranks ``0..top_n - 1`` are visible; the overflow rank ``top_n`` sits just
    below the bottom edge so bars moving there slide out of view.
    """
    for side in ("top", "right", "bottom", "left"):
        ax.spines[side].set_visible(False)
    ax.set_ylim(top_n - 0.5, -0.5)
    ax.set_yticks([])
    ax.xaxis.tick_top()
    ax.tick_params(axis="x", length=0, labelsize=11, labelcolor="#555555")
    ax.grid(axis="x", color="white", linewidth=1.5)
    ax.set_axisbelow(False)
    ax.set_facecolor("#F0F0F0")
    ax.margins(x=0)
    ax.xaxis.labelpad = 30
