"""Step-by-step playback of a keyframe sequence.

The driver renders the first keyframe, hands the artifact to its caller,
waits for a one-shot start signal and then walks the keyframes, awaiting
each transition before moving on. An invalidation signal is raced against
every wait and stops playback wherever it is.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Iterator, Protocol

from src.visuals.anims.keyframes import Keyframe
from src.visuals.anims.state import PlaybackState
from src.visuals.anims.transition import Transition
from src.visuals.core import constants

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[Keyframe, Transition], Any]


class OneShotSignal:
    """A signal that resolves once; later ``fire()`` calls are no-ops."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def fire(self) -> None:
        self._event.set()

    @property
    def fired(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


class Surface(Protocol):
    """What the driver needs from the shared rendering surface."""

    x: Any
    artifact: Any

    def transition(self, duration: float) -> Transition: ...

    def interrupt(self) -> None: ...


@dataclass(frozen=True)
class RaceCallbacks:
    """The four rendering capabilities, iterated in their required order."""

    update_axis: UpdateCallback
    update_bars: UpdateCallback
    update_labels: UpdateCallback
    update_ticker: UpdateCallback

    def __iter__(self) -> Iterator[UpdateCallback]:
        # Bars and labels read the scale domain the axis update applied.
        yield self.update_axis
        yield self.update_bars
        yield self.update_labels
        yield self.update_ticker


class PlaybackDriver:
    """Cancellable animation controller for a bar-chart race.

    Args:
        keyframes: The full, already-built keyframe sequence.
        surface: Shared rendering surface owning the scale and transitions.
        callbacks: Axis, bars, labels and ticker update callbacks.
        duration_ms: Transition length per keyframe.
        start: One-shot trigger that begins playback.
        invalidation: One-shot signal that cancels playback.
    """

    def __init__(
        self,
        keyframes: Sequence[Keyframe],
        surface: Surface,
        callbacks: RaceCallbacks,
        duration_ms: float = constants.duration_ms,
        start: OneShotSignal | None = None,
        invalidation: OneShotSignal | None = None,
    ) -> None:
        self.keyframes = keyframes
        self.surface = surface
        self.callbacks = callbacks
        self.duration = duration_ms / 1000
        self.start = start or OneShotSignal()
        self.invalidation = invalidation or OneShotSignal()
        self.state = PlaybackState.IDLE

    async def play(self) -> AsyncIterator[Any]:
        """Yield the rendered artifact once, then play until done or cancelled."""
        if not self.keyframes:
            logger.info("playback: no keyframes to render")
            self.state = PlaybackState.DONE
            yield self.surface.artifact
            return

        initial = self.surface.transition(0)
        self._render(self.keyframes[0], initial)
        self.state = PlaybackState.AWAITING_START
        if not await self._unless_invalidated(initial.end()):
            return
        yield self.surface.artifact

        if not await self._unless_invalidated(self.start.wait()):
            return
        self.state = PlaybackState.PLAYING
        logger.info("playback: started (%d keyframes)", len(self.keyframes))

        for index, keyframe in enumerate(self.keyframes):
            if self.invalidation.fired:
                self._cancel(index)
                return
            transition = self.surface.transition(self.duration)
            self._render(keyframe, transition)
            if not await self._unless_invalidated(transition.end(), index):
                return

        self.state = PlaybackState.DONE
        logger.info("playback: done")

    async def run(self) -> PlaybackState:
        """Drive ``play()`` to completion and return the terminal state."""
        async for _ in self.play():
            pass
        return self.state

    def _render(self, keyframe: Keyframe, transition: Transition) -> None:
        _, entries = keyframe
        valid = isinstance(entries, Sequence) and not isinstance(entries, str)
        top = getattr(entries[0], "value", None) if valid and entries else None
        if isinstance(top, (int, float)):
            self.surface.x.domain = (0, top)
        elif not valid or entries:
            logger.error("playback: keeping scale domain, invalid entries %r", entries)
        for update in self.callbacks:
            update(keyframe, transition)

    async def _unless_invalidated(
        self, awaitable: Awaitable[Any], index: int | None = None
    ) -> bool:
        """Await ``awaitable`` unless invalidation fires first.

        Returns False, after cancelling playback, when invalidation wins or
        both settle in the same turn.
        """
        waiter = asyncio.ensure_future(awaitable)
        invalidated = asyncio.ensure_future(self.invalidation.wait())
        try:
            await asyncio.wait(
                {waiter, invalidated}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for fut in (waiter, invalidated):
                if not fut.done():
                    fut.cancel()

        if self.invalidation.fired:
            if waiter.done() and not waiter.cancelled():
                waiter.exception()
            self._cancel(index)
            return False
        waiter.result()
        return True

    def _cancel(self, index: int | None) -> None:
        self.surface.interrupt()
        self.state = PlaybackState.CANCELLED
        if index is None:
            logger.info("playback: cancelled before start")
        else:
            logger.info("playback: cancelled at keyframe %d", index)
