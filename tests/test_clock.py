"""Tests for the GameClock state machine and schedulers."""

import asyncio

import pytest

from classic_snake.clock import (
    AsyncioScheduler,
    ClockState,
    GameClock,
    ManualScheduler,
)


@pytest.fixture()
def scheduler():
    return ManualScheduler()


class _Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


class TestClockTransitions:
    def test_starts_stopped(self, scheduler):
        clock = GameClock(_Counter(), 200, scheduler)
        assert clock.state is ClockState.STOPPED
        assert not clock.armed

    def test_start_arms_tick(self, scheduler):
        clock = GameClock(_Counter(), 200, scheduler)
        assert clock.start()
        assert clock.state is ClockState.RUNNING
        assert len(scheduler.pending) == 1
        assert scheduler.pending[0].due == pytest.approx(0.2)

    def test_pause_and_resume(self, scheduler):
        clock = GameClock(_Counter(), 200, scheduler)
        clock.start()
        assert clock.pause()
        assert clock.state is ClockState.PAUSED
        assert scheduler.pending == []
        assert clock.resume()
        assert clock.state is ClockState.RUNNING
        assert len(scheduler.pending) == 1

    def test_illegal_transitions_ignored(self, scheduler):
        clock = GameClock(_Counter(), 200, scheduler)
        assert not clock.pause()
        assert not clock.resume()
        assert not clock.halt()
        clock.start()
        assert not clock.start()
        assert not clock.resume()

    def test_halt_is_terminal(self, scheduler):
        clock = GameClock(_Counter(), 200, scheduler)
        clock.start()
        assert clock.halt()
        assert clock.state is ClockState.GAME_OVER
        assert scheduler.pending == []
        assert not clock.start()
        assert not clock.pause()
        assert not clock.resume()

    def test_reset_from_game_over(self, scheduler):
        clock = GameClock(_Counter(), 100, scheduler)
        clock.start()
        clock.halt()
        clock.reset(200)
        assert clock.state is ClockState.STOPPED
        assert clock.interval_ms == 200
        assert clock.start()

    def test_invalid_interval(self, scheduler):
        with pytest.raises(ValueError, match="at least 1"):
            GameClock(_Counter(), 0, scheduler)


class TestClockTicking:
    def test_fires_at_interval(self, scheduler):
        counter = _Counter()
        clock = GameClock(counter, 250, scheduler)
        clock.start()
        assert scheduler.advance(1.0) == 4
        assert counter.calls == 4
        assert len(scheduler.pending) == 1

    def test_paused_clock_does_not_fire(self, scheduler):
        counter = _Counter()
        clock = GameClock(counter, 250, scheduler)
        clock.start()
        clock.pause()
        assert scheduler.advance(10.0) == 0
        assert counter.calls == 0

    def test_failing_callback_halts(self, scheduler):
        def boom():
            raise RuntimeError("tick failed")

        clock = GameClock(boom, 100, scheduler)
        clock.start()
        scheduler.run_next()
        assert clock.state is ClockState.GAME_OVER
        assert scheduler.pending == []


class TestClockInterval:
    def test_set_interval_rearms_immediately(self, scheduler):
        clock = GameClock(_Counter(), 200, scheduler)
        clock.start()
        clock.set_interval(150)
        pending = scheduler.pending
        assert len(pending) == 1
        assert pending[0].due == pytest.approx(0.15)

    def test_set_interval_while_paused_does_not_arm(self, scheduler):
        clock = GameClock(_Counter(), 200, scheduler)
        clock.start()
        clock.pause()
        clock.set_interval(150)
        assert scheduler.pending == []
        clock.resume()
        assert scheduler.pending[0].due == pytest.approx(0.15)

    def test_rearm_inside_tick_keeps_single_handle(self, scheduler):
        clock = None

        def speed_up():
            clock.set_interval(clock.interval_ms - 50)

        clock = GameClock(speed_up, 200, scheduler)
        clock.start()
        scheduler.run_next()
        pending = scheduler.pending
        assert len(pending) == 1
        assert pending[0].due == pytest.approx(0.2 + 0.15)


class TestAsyncioScheduler:
    @pytest.mark.asyncio
    async def test_runs_on_event_loop(self):
        counter = _Counter()
        clock = GameClock(counter, 10, AsyncioScheduler())
        clock.start()
        for _ in range(50):
            await asyncio.sleep(0.01)
            if counter.calls >= 3:
                break
        clock.pause()
        assert counter.calls >= 3
        assert not clock.armed
