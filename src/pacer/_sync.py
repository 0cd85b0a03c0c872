"""Background event loop used when wrappers are called from synchronous code.

Timers need a running loop to fire. Outside of one, limiters schedule onto a
single shared daemon thread that hosts its own asyncio loop.
"""

import asyncio
import threading
from collections.abc import Callable
from typing import Any


class ThreadTimerHandle:
    """Cancellable handle for a timer living on another thread's loop."""

    __slots__ = ("_cancelled", "_handle", "_loop")

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        handle = self._handle
        if handle is not None:
            self._loop.call_soon_threadsafe(handle.cancel)

    def cancelled(self) -> bool:
        return self._cancelled

    def _arm(self, delay: float, callback: Callable[[], Any]) -> None:
        # Runs on the loop thread.
        if not self._cancelled:
            self._handle = self._loop.call_later(delay, self._fire, callback)

    def _fire(self, callback: Callable[[], Any]) -> None:
        if not self._cancelled:
            callback()


class _EventLoopThread:
    """Manages a background event loop for timers scheduled from sync code."""

    __slots__ = ("_lock", "_loop", "_started", "_thread")

    def __init__(self) -> None:
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()
        self._lock = threading.Lock()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self.start()
        assert self._loop is not None
        return self._loop

    def start(self) -> None:
        """Start the background event loop thread (idempotent)."""
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run, name="pacer-timers", daemon=True)
            self._thread.start()
        self._started.wait()

    def _run(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        self._started.set()
        self._loop.run_forever()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ThreadTimerHandle:
        """Schedule *callback* after *delay* seconds on the background loop."""
        loop = self.loop
        handle = ThreadTimerHandle(loop)
        loop.call_soon_threadsafe(handle._arm, delay, callback)
        return handle

    def submit(self, coro: Any) -> Any:
        """Run a coroutine on the background loop without waiting for it."""
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def shutdown(self) -> None:
        """Stop the background event loop and join the thread."""
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._loop.stop)
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None
            self._loop = None
            self._started.clear()


# Module-level shared event loop thread for timers scheduled outside a loop
_shared_loop = _EventLoopThread()


def get_shared_loop() -> _EventLoopThread:
    """Return the shared background event loop thread, starting it if needed."""
    _shared_loop.start()
    return _shared_loop
