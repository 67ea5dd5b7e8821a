"""Static bar plot of the race's terminal keyframe."""

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from src.visuals.anims.create_bar_animation import format_date, format_number
from src.visuals.anims.keyframes import RaceTimeline
from src.visuals.core import constants
from src.visuals.core.colors import get_category_color
from src.visuals.core.fonts import get_fonts
from src.visuals.core.style import setup_bar_plot_style


def plot_final_frame(
    timeline: RaceTimeline,
    figsize: tuple[float, float] = constants.figsize,
    dpi: int = constants.dpi,
) -> Figure:
    """Draw the top-N bars of the last keyframe.

    Args:
        timeline: Built race timeline; may be empty.
        figsize: Figure size in inches.
        dpi: Render resolution.

    Returns:
        matplotlib.figure.Figure: The generated figure (blank axes when the
        timeline has no keyframes).
    """
    fig = Figure(figsize=figsize, dpi=dpi, facecolor="#F0F0F0")
    FigureCanvasAgg(fig)
    ax = fig.add_subplot()
    setup_bar_plot_style(ax, timeline.top_n)
    if not timeline.keyframes:
        return fig

    heading_font, label_font = get_fonts()
    instant, entries = timeline.keyframes[-1]
    visible = entries[: timeline.top_n]
    colors: dict[str, tuple] = {}
    # Assign colors in first-keyframe order so they match the animation.
    for entry in timeline.keyframes[0].entries[: timeline.top_n]:
        get_category_color(entry.category, colors)

    ax.barh(
        [e.rank for e in visible],
        [e.value for e in visible],
        height=constants.bar_height,
        color=[get_category_color(e.category, colors) for e in visible],
        alpha=0.6,
    )
    for entry in visible:
        ax.annotate(
            f"{entry.category}\n{format_number(entry.value)}",
            xy=(entry.value, entry.rank),
            xytext=(6, 0),
            textcoords="offset points",
            va="center",
            fontsize=12,
            fontproperties=label_font,
        )
    top = visible[0].value if visible else 0
    ax.set_xlim(0, top or 1.0)
    ax.text(
        0.98,
        0.08,
        format_date(instant),
        transform=ax.transAxes,
        ha="right",
        fontsize=48,
        fontproperties=heading_font,
        color="#333333",
    )
    return fig
