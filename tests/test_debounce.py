"""Tests for TrailingDebouncer and EdgeDebouncer."""

import asyncio

import pytest
from conftest import ManualScheduler

from pacer.config import EdgeOptions
from pacer.limiters.debounce import EdgeDebouncer, TrailingDebouncer


class TestTrailingDebouncer:
    def test_not_called_immediately(self, scheduler, fn):
        d = TrailingDebouncer(fn, 500, scheduler=scheduler)
        d()
        fn.assert_not_called()

    def test_burst_collapses_to_last_call(self, scheduler, fn):
        d = TrailingDebouncer(fn, 500, scheduler=scheduler)
        d("a")
        scheduler.advance(100)
        d("b")
        scheduler.advance(100)
        d("c")

        scheduler.advance(499)
        fn.assert_not_called()

        scheduler.advance(1)
        fn.assert_called_once_with("c")

    def test_fires_delay_after_last_call(self, scheduler, fn):
        d = TrailingDebouncer(fn, 500, scheduler=scheduler)
        for t in (0, 100, 200):
            scheduler.advance_to(t)
            d(t)

        scheduler.advance_to(699)
        fn.assert_not_called()
        scheduler.advance_to(700)
        fn.assert_called_once_with(200)

    def test_separate_bursts_fire_separately(self, scheduler, fn):
        d = TrailingDebouncer(fn, 100, scheduler=scheduler)
        d(1)
        scheduler.advance(100)
        d(2)
        scheduler.advance(100)
        assert [c.args for c in fn.call_args_list] == [(1,), (2,)]

    def test_return_value_discarded(self, scheduler):
        d = TrailingDebouncer(lambda: "ignored", 10, scheduler=scheduler)
        assert d() is None

    def test_zero_delay_defers(self, scheduler, fn):
        d = TrailingDebouncer(fn, 0, scheduler=scheduler)
        d()
        fn.assert_not_called()
        scheduler.advance(0)
        fn.assert_called_once_with()

    def test_callback_exception_propagates_to_timer(self, scheduler):
        def boom():
            raise RuntimeError("boom")

        d = TrailingDebouncer(boom, 10, scheduler=scheduler)
        d()  # does not raise
        with pytest.raises(RuntimeError, match="boom"):
            scheduler.advance(10)
        assert d.pending is False

    def test_delay_ms_property(self, fn):
        assert TrailingDebouncer(fn, 250).delay_ms == 250.0

    def test_has_no_cancel(self, fn):
        assert not hasattr(TrailingDebouncer(fn, 10), "cancel")


class TestTrailingDebouncerRealLoop:
    async def test_single_call(self):
        calls = []
        d = TrailingDebouncer(calls.append, 30)
        d("hello")
        await asyncio.sleep(0.08)
        assert calls == ["hello"]

    async def test_timer_resets_on_call(self):
        calls = []
        d = TrailingDebouncer(calls.append, 60)
        d("first")
        await asyncio.sleep(0.03)
        d("second")
        await asyncio.sleep(0.03)
        assert calls == []
        await asyncio.sleep(0.08)
        assert calls == ["second"]

    async def test_async_callback(self):
        done = asyncio.Event()
        seen = []

        async def handler(value):
            seen.append(value)
            done.set()

        d = TrailingDebouncer(handler, 10)
        d("x")
        await asyncio.wait_for(done.wait(), timeout=1.0)
        assert seen == ["x"]


class TestEdgeDebouncerLeading:
    def test_leading_only_fires_once_per_burst(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(leading=True), scheduler=scheduler)
        for i in range(10):
            d(i)
            scheduler.advance(50)
        fn.assert_called_once_with(0)

        scheduler.advance(1000)
        fn.assert_called_once_with(0)

    def test_leading_fires_again_for_next_burst(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(leading=True), scheduler=scheduler)
        d("first")
        d("ignored")
        scheduler.advance(200)
        d("second")
        assert [c.args for c in fn.call_args_list] == [("first",), ("second",)]

    def test_leading_uses_current_arguments(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(leading=True), scheduler=scheduler)
        d(1, flag=True)
        fn.assert_called_once_with(1, flag=True)

    def test_leading_exception_raises_into_caller(self, scheduler):
        def boom(_):
            raise ValueError("leading")

        d = EdgeDebouncer(boom, 100, EdgeOptions(leading=True), scheduler=scheduler)
        with pytest.raises(ValueError, match="leading"):
            d(1)

    def test_raising_leading_call_leaves_nothing_pending(self, scheduler):
        calls = []

        def boom(value):
            calls.append(value)
            raise RuntimeError("leading")

        d = EdgeDebouncer(
            boom, 100, EdgeOptions(leading=True, trailing=True), scheduler=scheduler
        )
        with pytest.raises(RuntimeError, match="leading"):
            d(1)
        assert d.pending is False
        scheduler.advance(500)
        assert calls == [1]

    def test_leading_call_runs_before_timer_is_set(self, scheduler):
        pending_during_call = []
        d = None

        def record(_):
            pending_during_call.append(d.pending)

        d = EdgeDebouncer(
            record, 100, EdgeOptions(leading=True, trailing=True), scheduler=scheduler
        )
        d(1)
        assert pending_during_call == [False]
        assert d.pending is True

    def test_reentrant_call_from_leading_keeps_one_timer(self, scheduler, fn):
        def reenter(value):
            fn(value)
            if value == "outer":
                d("inner")

        d = EdgeDebouncer(
            reenter, 100, EdgeOptions(leading=True, trailing=True), scheduler=scheduler
        )
        d("outer")
        assert scheduler.active_timers == 1
        scheduler.advance(100)
        assert [c.args for c in fn.call_args_list] == [("outer",), ("inner",)]


class TestEdgeDebouncerTrailing:
    def test_trailing_only(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(trailing=True), scheduler=scheduler)
        d("a")
        d("b")
        fn.assert_not_called()
        scheduler.advance(100)
        fn.assert_called_once_with("b")

    def test_leading_and_trailing_single_call_fires_twice(self, scheduler, fn):
        d = EdgeDebouncer(
            fn, 100, EdgeOptions(leading=True, trailing=True), scheduler=scheduler
        )
        d("x")
        fn.assert_called_once_with("x")
        scheduler.advance(100)
        assert fn.call_count == 2

    def test_leading_and_trailing_burst(self, scheduler, fn):
        d = EdgeDebouncer(
            fn, 100, EdgeOptions(leading=True, trailing=True), scheduler=scheduler
        )
        d("a")
        scheduler.advance(50)
        d("b")
        scheduler.advance(50)
        d("c")
        scheduler.advance(100)
        assert [c.args for c in fn.call_args_list] == [("a",), ("c",)]

    def test_no_edges_never_invokes(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(), scheduler=scheduler)
        d(1)
        scheduler.advance(50)
        d(2)
        scheduler.advance(1000)
        fn.assert_not_called()
        assert d.pending is False

    def test_default_options_disable_both_edges(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, scheduler=scheduler)
        assert d.options == EdgeOptions()
        d(1)
        scheduler.advance(200)
        fn.assert_not_called()


class TestEdgeDebouncerCancel:
    def test_cancel_prevents_invocation(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(trailing=True), scheduler=scheduler)
        d("a")
        d.cancel()
        scheduler.advance(500)
        fn.assert_not_called()
        assert d.pending is False

    def test_cancel_without_pending_is_noop(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(trailing=True), scheduler=scheduler)
        d.cancel()
        d.cancel()
        fn.assert_not_called()

    def test_cancel_keeps_last_call_time(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(leading=True), scheduler=scheduler)
        d("a")
        scheduler.advance(30)
        d("b")
        d.cancel()
        assert d.last_time == 30
        scheduler.advance(30)
        # Still within the burst, so no new leading call.
        d("c")
        fn.assert_called_once_with("a")

    def test_calls_after_cancel_schedule_again(self, scheduler, fn):
        d = EdgeDebouncer(fn, 100, EdgeOptions(trailing=True), scheduler=scheduler)
        d("a")
        d.cancel()
        d("b")
        scheduler.advance(100)
        fn.assert_called_once_with("b")


class TestTimestampZero:
    """A call at clock value 0 counts as a real call time.

    A falsy-zero "never called" check would treat ``d("ten")`` in
    ``test_call_after_burst_at_zero_is_not_leading`` as the start of a new
    burst and invoke the callback twice. Unset is ``None`` here, so a clock
    starting at 0 behaves like one starting anywhere else.
    """

    def test_first_call_at_clock_zero_is_leading(self, fn):
        sched = ManualScheduler(start=0.0)
        d = EdgeDebouncer(fn, 100, EdgeOptions(leading=True), scheduler=sched)
        d("zero")
        assert d.last_time == 0.0
        fn.assert_called_once_with("zero")

    def test_call_after_burst_at_zero_is_not_leading(self, fn):
        sched = ManualScheduler(start=0.0)
        d = EdgeDebouncer(fn, 100, EdgeOptions(leading=True), scheduler=sched)
        d("zero")
        sched.advance(10)
        # A call at t=0 counts as a real timestamp, so t=10 is mid-burst.
        d("ten")
        fn.assert_called_once_with("zero")

    def test_large_clock_value(self, fn):
        sched = ManualScheduler(start=1_700_000_000_000.0)
        d = EdgeDebouncer(fn, 100, EdgeOptions(leading=True), scheduler=sched)
        d("a")
        sched.advance(10)
        d("b")
        fn.assert_called_once_with("a")
