"""Debounce and throttle primitives over the runtime scheduler."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from canvas_engine.runtime.scheduler import Scheduler

logger = logging.getLogger(__name__)

RateLimitedCallback = Callable[..., None]


class Debouncer:
    """Trailing-edge rate limiter.

    Every `call` cancels the pending invocation and restarts the quiet timer, so
    a burst of calls runs `callback` once, `delay_seconds` after the last call,
    with that call's arguments.
    """

    def __init__(
        self,
        callback: RateLimitedCallback,
        delay_seconds: float,
        *,
        scheduler: Scheduler,
    ) -> None:
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        self._callback = callback
        self._delay_seconds = delay_seconds
        self._scheduler = scheduler
        self._task_id: int | None = None
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}
        self.fire_count = 0

    @property
    def pending(self) -> bool:
        return self._task_id is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.call(*args, **kwargs)

    def call(self, *args: Any, **kwargs: Any) -> None:
        """Record arguments and re-arm the quiet timer."""
        self._args = args
        self._kwargs = kwargs
        if self._task_id is not None:
            self._scheduler.cancel(self._task_id)
        self._task_id = self._scheduler.call_later(self._delay_seconds, self._fire)

    def cancel(self) -> None:
        """Drop the pending invocation, if any."""
        if self._task_id is not None:
            self._scheduler.cancel(self._task_id)
            self._task_id = None

    def _fire(self) -> None:
        self._task_id = None
        args, kwargs = self._args, self._kwargs
        self._args, self._kwargs = (), {}
        self.fire_count += 1
        self._callback(*args, **kwargs)


class Throttler:
    """Leading-edge rate limiter with one trailing call.

    The first call runs immediately. Calls arriving before `interval_seconds`
    has passed since the last executed call are folded into a single trailing
    invocation at the interval boundary, which uses the most recent arguments.
    """

    def __init__(
        self,
        callback: RateLimitedCallback,
        interval_seconds: float,
        *,
        scheduler: Scheduler,
    ) -> None:
        if interval_seconds < 0.0:
            raise ValueError("interval_seconds must be >= 0")
        self._callback = callback
        self._interval_seconds = interval_seconds
        self._scheduler = scheduler
        self._last_run_seconds: float | None = None
        self._task_id: int | None = None
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}
        self.fire_count = 0
        self.suppressed_count = 0

    @property
    def pending(self) -> bool:
        return self._task_id is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.call(*args, **kwargs)

    def call(self, *args: Any, **kwargs: Any) -> None:
        """Run now if the interval has elapsed, otherwise arm the trailing call."""
        self._args = args
        self._kwargs = kwargs
        now = self._scheduler.now()
        last = self._last_run_seconds
        if last is None or now - last >= self._interval_seconds:
            self.cancel()
            self._run(now)
            return
        self.suppressed_count += 1
        if self._task_id is None:
            remaining = max(0.0, self._interval_seconds - (now - last))
            self._task_id = self._scheduler.call_later(remaining, self._fire_trailing)

    def cancel(self) -> None:
        """Drop the trailing invocation, if any."""
        if self._task_id is not None:
            self._scheduler.cancel(self._task_id)
            self._task_id = None

    def _fire_trailing(self) -> None:
        self._task_id = None
        self._run(self._scheduler.now())

    def _run(self, now: float) -> None:
        self._last_run_seconds = now
        args, kwargs = self._args, self._kwargs
        self._args, self._kwargs = (), {}
        self.fire_count += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "throttle_fire count=%d suppressed=%d", self.fire_count, self.suppressed_count
            )
        self._callback(*args, **kwargs)


__all__ = ["Debouncer", "RateLimitedCallback", "Throttler"]
