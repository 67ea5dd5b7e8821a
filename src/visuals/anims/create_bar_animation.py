"""Matplotlib rendering of the circumstance bar-chart race.

``RaceSurface`` owns the figure, the shared value scale and the running
transitions. ``axis``, ``bars``, ``labels`` and ``ticker`` each bind to a
surface and return the update callback the playback driver calls once per
keyframe.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Sequence
from typing import Callable

import pandas as pd
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle
from matplotlib.text import Annotation

from src.visuals.anims.identity import IdentityMaps
from src.visuals.anims.keyframes import Keyframe, RaceTimeline, RankedEntry
from src.visuals.anims.playback import OneShotSignal, PlaybackDriver, RaceCallbacks
from src.visuals.anims.state import JoinState
from src.visuals.anims.transition import RealtimeClock, Transition, VirtualClock
from src.visuals.core import constants
from src.visuals.core.colors import get_category_color
from src.visuals.core.fonts import get_fonts
from src.visuals.core.scales import LinearScale
from src.visuals.core.style import setup_bar_plot_style

logger = logging.getLogger(__name__)

FrameListener = Callable[[Figure], None]


def format_number(value: float) -> str:
    return f"{int(round(value)):,d}"


def format_date(instant: pd.Timestamp) -> str:
    return instant.strftime("%Y")


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class RaceSurface:
    """The shared rendered artifact: a figure, its axes and the value scale.

    Args:
        top_n: Number of visible ranks.
        figsize: Figure size in inches.
        dpi: Figure resolution.
        clock: Time source for transitions.
        tick_interval: Seconds between transition ticks.
    """

    def __init__(
        self,
        top_n: int = constants.top_n,
        figsize: tuple[float, float] = constants.figsize,
        dpi: int = constants.dpi,
        clock: RealtimeClock | VirtualClock | None = None,
        tick_interval: float = constants.tick_interval,
    ) -> None:
        self.top_n = top_n
        self.fig = Figure(figsize=figsize, dpi=dpi, facecolor="#F0F0F0")
        FigureCanvasAgg(self.fig)
        self.ax = self.fig.add_subplot()
        setup_bar_plot_style(self.ax, top_n)
        self.x = LinearScale()
        self.clock = clock or RealtimeClock()
        self.tick_interval = tick_interval
        self.colors: dict[str, tuple] = {}
        self.heading_font, self.label_font = get_fonts()
        self._active: set[Transition] = set()
        self._frame_listeners: list[FrameListener] = []

    @property
    def artifact(self) -> Figure:
        return self.fig

    def on_frame(self, listener: FrameListener) -> None:
        """Call ``listener`` with the figure after every transition tick."""
        self._frame_listeners.append(listener)

    def transition(self, duration: float) -> Transition:
        transition = Transition(duration, self.clock, self.tick_interval)
        transition.after_tick(self.emit_frame)
        self._active.add(transition)
        transition.on_settle(lambda: self._active.discard(transition))
        return transition

    def interrupt(self) -> None:
        """Stop every running transition where it currently is."""
        for transition in list(self._active):
            transition.interrupt()
        self._active.clear()

    def emit_frame(self) -> None:
        for listener in self._frame_listeners:
            listener(self.fig)


def skips_invalid_data(update):
    """Log and skip keyframes whose entries are not a sequence of ranked entries."""

    @functools.wraps(update)
    def checked(keyframe, transition: Transition):
        try:
            _, entries = keyframe
        except (TypeError, ValueError):
            entries = None
        if (
            not isinstance(entries, Sequence)
            or isinstance(entries, str)
            or not all(isinstance(e, RankedEntry) for e in entries)
        ):
            logger.error("Invalid data for %s: %r", update.__name__, entries)
            return None
        return update(keyframe, transition)

    return checked


def bars(surface: RaceSurface, identity: IdentityMaps, top_n: int):
    ax = surface.ax
    height = constants.bar_height
    join: JoinState[Rectangle] = JoinState()

    def move(rect: Rectangle, target: RankedEntry) -> Callable[[float], None]:
        y0, w0 = rect.get_y(), rect.get_width()
        y1, w1 = target.rank - height / 2, target.value

        def step(t: float) -> None:
            rect.set_y(_lerp(y0, y1, t))
            rect.set_width(_lerp(w0, w1, t))

        return step

    def exit_bar(rect: Rectangle) -> None:
        rect.remove()
        join.exiting.remove(rect)

    @skips_invalid_data
    def update_bars(keyframe: Keyframe, transition: Transition) -> None:
        _, entries = keyframe
        visible = entries[:top_n]

        for category in join.stale({e.category for e in visible}):
            rect, datum = join.release(category)
            transition.tween(move(rect, identity.next_of(datum)))
            transition.on_end(functools.partial(exit_bar, rect))

        for entry in visible:
            rect = join.artists.get(entry.category)
            if rect is None:
                start = identity.prev_of(entry)
                rect = Rectangle(
                    (0, start.rank - height / 2),
                    start.value,
                    height,
                    facecolor=get_category_color(entry.category, surface.colors),
                    alpha=0.6,
                    clip_on=True,
                )
                ax.add_patch(rect)
            join.bind(rect, entry)
            transition.tween(move(rect, entry))

    return update_bars


def labels(surface: RaceSurface, identity: IdentityMaps, top_n: int):
    ax = surface.ax
    join: JoinState[Annotation] = JoinState()

    def move(
        label: Annotation, source: RankedEntry, target: RankedEntry
    ) -> Callable[[float], None]:
        (x0, y0), x1, y1 = label.xy, target.value, target.rank
        v0, v1 = source.value, target.value

        def step(t: float) -> None:
            label.xy = (_lerp(x0, x1, t), _lerp(y0, y1, t))
            label.set_text(f"{target.category}\n{format_number(_lerp(v0, v1, t))}")

        return step

    def exit_label(label: Annotation) -> None:
        label.remove()
        join.exiting.remove(label)

    @skips_invalid_data
    def update_labels(keyframe: Keyframe, transition: Transition) -> None:
        _, entries = keyframe
        visible = entries[:top_n]

        for category in join.stale({e.category for e in visible}):
            label, datum = join.release(category)
            transition.tween(move(label, datum, identity.next_of(datum)))
            transition.on_end(functools.partial(exit_label, label))

        for entry in visible:
            label = join.artists.get(entry.category)
            start = identity.prev_of(entry)
            if label is None:
                label = ax.annotate(
                    f"{entry.category}\n{format_number(entry.value)}",
                    xy=(start.value, start.rank),
                    xytext=(6, 0),
                    textcoords="offset points",
                    va="center",
                    ha="left",
                    fontsize=12,
                    fontproperties=surface.label_font,
                    annotation_clip=True,
                )
            join.bind(label, entry)
            transition.tween(move(label, start, entry))

    return update_labels


def axis(surface: RaceSurface):
    ax = surface.ax

    @skips_invalid_data
    def update_axis(keyframe: Keyframe, transition: Transition) -> None:
        x0 = ax.get_xlim()[1]
        x1 = surface.x.domain[1] or 1.0

        def step(t: float) -> None:
            ax.set_xlim(0, _lerp(x0, x1, t))

        transition.tween(step)

    return update_axis


def ticker(surface: RaceSurface, keyframes: Sequence[Keyframe]):
    now = surface.ax.text(
        0.98,
        0.08,
        format_date(keyframes[0].instant) if keyframes else "",
        transform=surface.ax.transAxes,
        ha="right",
        va="center",
        fontsize=48,
        fontproperties=surface.heading_font,
        color="#333333",
    )

    @skips_invalid_data
    def update_ticker(keyframe: Keyframe, transition: Transition) -> None:
        instant, _ = keyframe
        transition.on_end(lambda: now.set_text(format_date(instant)))

    return update_ticker


def create_bar_animation(
    timeline: RaceTimeline,
    duration_ms: float = constants.duration_ms,
    start: OneShotSignal | None = None,
    invalidation: OneShotSignal | None = None,
    clock: RealtimeClock | VirtualClock | None = None,
    figsize: tuple[float, float] = constants.figsize,
    dpi: int = constants.dpi,
    tick_interval: float = constants.tick_interval,
) -> PlaybackDriver:
    """Wire a surface and its four renderers into a playback driver.

    Returns:
        PlaybackDriver: not yet started; ``driver.surface`` is the
        ``RaceSurface`` whose figure is updated in place.
    """
    surface = RaceSurface(timeline.top_n, figsize, dpi, clock, tick_interval)
    callbacks = RaceCallbacks(
        update_axis=axis(surface),
        update_bars=bars(surface, timeline.identity, timeline.top_n),
        update_labels=labels(surface, timeline.identity, timeline.top_n),
        update_ticker=ticker(surface, timeline.keyframes),
    )
    return PlaybackDriver(
        timeline.keyframes,
        surface,
        callbacks,
        duration_ms=duration_ms,
        start=start,
        invalidation=invalidation,
    )
