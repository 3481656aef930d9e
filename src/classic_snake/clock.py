"""Fixed-interval tick driver with pause/resume and live re-arming."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class ClockState(str, enum.Enum):
    """Lifecycle states of the game clock."""

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback once after a delay in seconds."""

    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> Cancellable: ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop.

    Without an explicit loop, the running loop at call time is used, so the
    clock must be driven from inside that loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ManualHandle:
    """Handle returned by :class:`ManualScheduler`."""

    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler that only fires when told to.

    Used for headless simulation and deterministic tests: time stands still
    until :meth:`run_next` or :meth:`advance` is called.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._pending: list[ManualHandle] = []

    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> ManualHandle:
        handle = ManualHandle(self.now + delay, callback)
        self._pending.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        """Live (uncancelled, unfired) handles in due order."""
        self._pending = [h for h in self._pending if not h.cancelled]
        return sorted(self._pending, key=lambda h: h.due)

    def run_next(self) -> bool:
        """Jump to the earliest due callback and run it.

        Returns False when nothing is scheduled.
        """
        live = self.pending
        if not live:
            return False
        handle = live[0]
        self._pending.remove(handle)
        self.now = max(self.now, handle.due)
        handle.callback()
        return True

    def advance(self, seconds: float) -> int:
        """Run every callback due within *seconds*; return how many ran."""
        target = self.now + seconds
        fired = 0
        while True:
            live = self.pending
            if not live or live[0].due > target:
                break
            self.run_next()
            fired += 1
        self.now = target
        return fired


class GameClock:
    """One-shot timer re-armed after every tick.

    At most one scheduled handle is live at any time. The next tick is only
    armed once the current tick callback has returned, so ticks never
    overlap. Changing the interval while running cancels the pending handle
    and arms a new one straight away.
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        interval_ms: int = 200,
        scheduler: Scheduler | None = None,
    ) -> None:
        if interval_ms < 1:
            raise ValueError("interval_ms must be at least 1.")
        self._on_tick = on_tick
        self._interval_ms = interval_ms
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._state = ClockState.STOPPED
        self._handle: Cancellable | None = None

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def armed(self) -> bool:
        """Whether a tick is currently scheduled."""
        return self._handle is not None

    def start(self) -> bool:
        """STOPPED → RUNNING."""
        if self._state != ClockState.STOPPED:
            return False
        self._state = ClockState.RUNNING
        self._arm()
        return True

    def pause(self) -> bool:
        """RUNNING → PAUSED."""
        if self._state != ClockState.RUNNING:
            return False
        self._cancel()
        self._state = ClockState.PAUSED
        return True

    def resume(self) -> bool:
        """PAUSED → RUNNING, re-armed at the current interval."""
        if self._state != ClockState.PAUSED:
            return False
        self._state = ClockState.RUNNING
        self._arm()
        return True

    def halt(self) -> bool:
        """RUNNING → GAME_OVER."""
        if self._state != ClockState.RUNNING:
            return False
        self._cancel()
        self._state = ClockState.GAME_OVER
        return True

    def reset(self, interval_ms: int | None = None) -> None:
        """Return to STOPPED from any state, optionally with a new interval."""
        self._cancel()
        self._state = ClockState.STOPPED
        if interval_ms is not None:
            if interval_ms < 1:
                raise ValueError("interval_ms must be at least 1.")
            self._interval_ms = interval_ms

    def set_interval(self, interval_ms: int) -> None:
        """Change the tick interval, re-arming immediately when running."""
        if interval_ms < 1:
            raise ValueError("interval_ms must be at least 1.")
        if interval_ms == self._interval_ms:
            return
        self._interval_ms = interval_ms
        if self._state == ClockState.RUNNING:
            self._cancel()
            self._arm()
        logger.debug("Tick interval set to %d ms.", interval_ms)

    def _arm(self) -> None:
        self._handle = self._scheduler.call_later(
            self._interval_ms / 1000.0, self._fire,
        )

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if self._state != ClockState.RUNNING:
            return
        try:
            self._on_tick()
        except Exception:
            logger.exception("Tick callback failed; halting clock.")
            self.halt()
            return
        # The callback may already have re-armed via set_interval().
        if self._state == ClockState.RUNNING and self._handle is None:
            self._arm()
