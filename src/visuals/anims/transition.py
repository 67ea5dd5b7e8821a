"""Timed, interruptible transitions driven by the asyncio event loop.

A transition ticks its registered tweens with an eased fraction until its
duration has elapsed, then resolves. It can be stopped mid-flight, leaving
whatever state the last tick produced.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)

Tween = Callable[[float], None]

# Float slack so a virtual clock summing tick intervals lands on the duration.
_EPSILON = 1e-9


def ease_linear(t: float) -> float:
    return t


class RealtimeClock:
    """Wall-clock timing through the running event loop."""

    def now(self) -> float:
        return asyncio.get_running_loop().time()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class VirtualClock:
    """Clock that advances instantly, one event-loop turn per sleep.

    Used for offline frame capture, where a 100 ms transition should produce
    its frames without actually waiting 100 ms.
    """

    def __init__(self) -> None:
        self._now = 0.0

    def now(self) -> float:
        return self._now

    async def sleep(self, seconds: float) -> None:
        self._now += seconds
        await asyncio.sleep(0)


class TransitionInterrupted(Exception):
    """Raised from ``Transition.end()`` when the transition was interrupted."""


class TransitionStatus(str, Enum):
    RUNNING = "running"
    ENDED = "ended"
    INTERRUPTED = "interrupted"


class Transition:
    """A duration-bounded transition.

    Args:
        duration: Length in seconds; ``0`` applies the end state on the next
            loop turn.
        clock: Time source; defaults to ``RealtimeClock``.
        interval: Seconds between ticks.
        ease: Maps linear progress to eased progress.

    Must be created inside a running event loop. Tweens registered in the
    same loop turn as construction see every tick.
    """

    def __init__(
        self,
        duration: float,
        clock: RealtimeClock | VirtualClock | None = None,
        interval: float = 1 / 30,
        ease: Callable[[float], float] = ease_linear,
    ) -> None:
        if duration < 0:
            raise ValueError(f"duration must be non-negative, got {duration}")
        self.duration = duration
        self.interval = interval
        self.status = TransitionStatus.RUNNING
        self._clock = clock or RealtimeClock()
        self._ease = ease
        self._tweens: list[Tween] = []
        self._after_tick: list[Callable[[], None]] = []
        self._on_end: list[Callable[[], None]] = []
        loop = asyncio.get_running_loop()
        self._done: asyncio.Future[bool] = loop.create_future()
        self._task = loop.create_task(self._run())

    def tween(self, fn: Tween) -> Transition:
        self._tweens.append(fn)
        return self

    def after_tick(self, fn: Callable[[], None]) -> Transition:
        self._after_tick.append(fn)
        return self

    def on_end(self, fn: Callable[[], None]) -> Transition:
        """Run ``fn`` once the transition completes normally."""
        self._on_end.append(fn)
        return self

    def on_settle(self, fn: Callable[[], None]) -> Transition:
        """Run ``fn`` once the transition stops, whether it ended, failed or was interrupted."""
        self._done.add_done_callback(lambda _: fn())
        return self

    @property
    def done(self) -> bool:
        return self.status is not TransitionStatus.RUNNING

    async def end(self) -> None:
        completed = await asyncio.shield(self._done)
        if not completed:
            raise TransitionInterrupted()

    def interrupt(self) -> None:
        """Stop at the current state; no final tick and no ``on_end`` callbacks."""
        if self.done:
            return
        self.status = TransitionStatus.INTERRUPTED
        self._task.cancel()
        self._done.set_result(False)

    def _tick(self, t: float) -> None:
        eased = self._ease(t)
        for fn in self._tweens:
            fn(eased)
        for fn in self._after_tick:
            fn()

    async def _run(self) -> None:
        try:
            await self._advance()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("transition tween failed")
            self.status = TransitionStatus.INTERRUPTED
            self._done.set_exception(exc)
            return
        # A tween may have interrupted its own transition.
        if self.done:
            return
        self.status = TransitionStatus.ENDED
        self._done.set_result(True)
        for fn in self._on_end:
            fn()

    async def _advance(self) -> None:
        start = self._clock.now()
        while True:
            remaining = self.duration - (self._clock.now() - start)
            if remaining <= _EPSILON:
                break
            await self._clock.sleep(min(self.interval, remaining))
            t = (self._clock.now() - start) / self.duration
            if t < 1 - _EPSILON:
                self._tick(t)
        self._tick(1.0)
