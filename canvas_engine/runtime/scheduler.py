"""One-shot deferred task scheduler backing all canvas timers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from heapq import heapify, heappop, heappush

TaskCallback = Callable[[], None]
TimeSource = Callable[[], float]


@dataclass(slots=True)
class _Task:
    task_id: int
    due_seconds: float
    callback: TaskCallback


class Scheduler:
    """Time-based scheduler.

    Without a time source the clock only moves through `advance`/`run_due`,
    which keeps tests deterministic. With a time source (usually
    `time.monotonic`) `now()` reads live time and `pump()` runs every task that
    has come due; the frame loop pumps once per display refresh.
    """

    def __init__(self, *, time_source: TimeSource | None = None) -> None:
        self._time_source = time_source
        self._now_seconds = time_source() if time_source is not None else 0.0
        self._next_task_id = 1
        self._tasks: dict[int, _Task] = {}
        self._queue: list[tuple[float, int]] = []

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def queued_task_count(self) -> int:
        """Return count of pending tasks."""
        return len(self._tasks)

    def now(self) -> float:
        """Return current scheduler time, reading the time source when present."""
        if self._time_source is None:
            return self._now_seconds
        return max(self._now_seconds, self._time_source())

    def call_later(self, delay_seconds: float, callback: TaskCallback) -> int:
        """Schedule a one-shot callback after delay."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        task_id = self._next_task_id
        self._next_task_id += 1
        task = _Task(task_id=task_id, due_seconds=self.now() + delay_seconds, callback=callback)
        self._tasks[task_id] = task
        heappush(self._queue, (task.due_seconds, task_id))
        return task_id

    def cancel(self, task_id: int) -> None:
        """Cancel a scheduled task if it is still pending."""
        if self._tasks.pop(task_id, None) is None:
            return
        # Stale heap entries are skipped lazily; compact once they dominate.
        if len(self._queue) > 2 * len(self._tasks) + 16:
            self._queue = [entry for entry in self._queue if entry[1] in self._tasks]
            heapify(self._queue)

    def advance(self, delta_seconds: float) -> int:
        """Advance scheduler clock and run due callbacks."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def pump(self) -> int:
        """Run callbacks due at the time source's current reading."""
        if self._time_source is None:
            raise RuntimeError("pump() requires a scheduler time source")
        return self.run_due(self.now())

    def run_due(self, now_seconds: float) -> int:
        """Run callbacks due at or before `now_seconds`, in due order."""
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        self._now_seconds = now_seconds
        executed = 0
        while self._queue and self._queue[0][0] <= self._now_seconds:
            _, task_id = heappop(self._queue)
            task = self._tasks.pop(task_id, None)
            if task is None:
                continue
            task.callback()
            executed += 1
        return executed
