import asyncio
import logging
import os
import tempfile

import pandas as pd

from backend.services.encoding import encode_gif, figure_to_jpeg
from src.visuals.anims.create_bar_animation import create_bar_animation
from src.visuals.anims.keyframes import RaceTimeline, build_race_timeline
from src.visuals.anims.playback import OneShotSignal
from src.visuals.anims.transition import VirtualClock
from src.visuals.plots.create_bar_plot import plot_final_frame

logger = logging.getLogger(__name__)


def build_timeline_wrapper(
    events,
    top_n,
    sub_steps,
    start_date,
    cutoff_date,
):
    """Thin wrapper around ``build_race_timeline`` with parsed dates.

    Args:
        events (pandas.DataFrame): circumstance/crash_date_time rows.
        top_n (int): Number of visible ranks.
        sub_steps (int): Interpolated keyframes per month.
        start_date, cutoff_date: Date bounds (anything ``pd.Timestamp`` takes).

    Returns:
        RaceTimeline: Snapshots, keyframes and identity maps.
    """
    return build_race_timeline(
        events,
        top_n=int(top_n),
        sub_steps=int(sub_steps),
        start=pd.Timestamp(start_date),
        cutoff=pd.Timestamp(cutoff_date),
    )


def keyframes_to_json(timeline: RaceTimeline) -> list[dict]:
    """Serialize keyframes for a browser-side renderer."""
    return [
        {
            "date": instant.isoformat(),
            "entries": [
                {"category": e.category, "value": e.value, "rank": e.rank}
                for e in entries
            ],
        }
        for instant, entries in timeline.keyframes
    ]


def plot_final_frame_wrapper(timeline, figsize, dpi):
    """Thin wrapper around ``plot_final_frame``.

    Returns:
        matplotlib.figure.Figure: The generated figure.
    """
    return plot_final_frame(timeline, figsize=figsize, dpi=dpi)


def render_race_gif(
    timeline: RaceTimeline,
    duration_ms: int,
    fps: int,
    figsize: tuple[float, float],
    dpi: int,
) -> bytes:
    """Play the race offline and return it as GIF bytes.

    Playback runs on a virtual clock with the start signal already fired, so
    frames are captured at transition-tick rate without real-time waits.
    """
    start = OneShotSignal()
    start.fire()
    frames: list[bytes] = []

    async def _play() -> None:
        driver = create_bar_animation(
            timeline,
            duration_ms=duration_ms,
            start=start,
            clock=VirtualClock(),
            figsize=figsize,
            dpi=dpi,
            tick_interval=1 / fps,
        )
        driver.surface.on_frame(lambda fig: frames.append(figure_to_jpeg(fig)))
        state = await driver.run()
        # The ticker settles after the last tick; capture the final look too.
        driver.surface.emit_frame()
        logger.info("offline playback finished in state %s", state.value)

    asyncio.run(_play())

    with tempfile.NamedTemporaryFile(delete=False, suffix=".gif") as temp_file:
        temp_path = temp_file.name
    try:
        encode_gif(frames, temp_path, fps)
        with open(temp_path, "rb") as f:
            return f.read()
    finally:
        os.remove(temp_path)
