"""
Deferred task queue used to sequence AI decisions.

Tasks run strictly one at a time in FIFO order. A key can only be queued
once, so a second AI decision of the same kind is never scheduled while
one is still waiting.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional


@dataclass
class ScheduledTask:
    """A callback waiting to run after `delay_ms` of simulated thinking."""

    key: str
    callback: Callable[[], None]
    delay_ms: int = 0


class TaskQueue:
    """Single-consumer FIFO of scheduled tasks."""

    def __init__(self):
        self._tasks: Deque[ScheduledTask] = deque()
        self._draining = False

    def schedule(self, key: str, callback: Callable[[], None], delay_ms: int = 0) -> bool:
        """
        Queue a task. Returns False if a task with the same key is pending.
        """
        if self.is_pending(key):
            return False
        self._tasks.append(ScheduledTask(key, callback, delay_ms))
        return True

    def is_pending(self, key: str) -> bool:
        return any(task.key == key for task in self._tasks)

    def peek(self) -> Optional[ScheduledTask]:
        return self._tasks[0] if self._tasks else None

    def run_next(self) -> bool:
        """Run the oldest task. Returns False if the queue was empty."""
        if not self._tasks:
            return False
        task = self._tasks.popleft()
        task.callback()
        return True

    def run_pending(self, max_tasks: Optional[int] = None) -> int:
        """
        Run queued tasks, including ones queued while draining, until the
        queue is empty or `max_tasks` have run. Returns the number run.
        A nested call while draining does nothing.
        """
        if self._draining:
            return 0
        self._draining = True
        ran = 0
        try:
            while self._tasks and (max_tasks is None or ran < max_tasks):
                self.run_next()
                ran += 1
        finally:
            self._draining = False
        return ran

    def clear(self) -> None:
        self._tasks.clear()

    def __len__(self) -> int:
        return len(self._tasks)
