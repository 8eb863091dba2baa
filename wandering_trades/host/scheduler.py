from __future__ import annotations

from dataclasses import dataclass, field
import itertools
import logging
from threading import Lock
from typing import Any, Callable, Optional, Protocol


LOG = logging.getLogger(__name__)

TICKS_PER_SECOND = 20

Task = Callable[[], None]


class EntityScheduler(Protocol):
    """Runs work with exclusive access to one entity's state.

    ``retired`` is called instead of ``task`` when the entity is removed
    before the task is due. Both methods return False when the entity is
    already gone at submission time; nothing is called in that case.
    """

    def run(self, entity: Any, task: Task, retired: Optional[Task] = None) -> bool: ...

    def run_delayed(self, entity: Any, task: Task, delay_ticks: int, retired: Optional[Task] = None) -> bool: ...


def seconds_to_ticks(seconds: float) -> int:
    return max(0, int(round(float(seconds) * TICKS_PER_SECOND)))


def _entity_alive(entity: Any) -> bool:
    check = getattr(entity, "is_valid", None)
    if callable(check):
        return bool(check())
    return True


@dataclass(order=True)
class _ScheduledTask:
    due_tick: int
    seq: int
    entity: Any = field(compare=False)
    task: Task = field(compare=False)
    retired: Optional[Task] = field(default=None, compare=False)


class TickScheduler:
    """Game-time scheduler for a single simulated region.

    Tasks are queued from any thread and executed by whoever calls
    ``tick``, in due order then submission order. A task that raises is
    logged and counted in ``failed``; the rest of the tick still runs.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._queue: list[_ScheduledTask] = []
        self._seq = itertools.count()
        self._current_tick = 0
        self.dropped = 0
        self.failed = 0

    @property
    def current_tick(self) -> int:
        return self._current_tick

    def pending(self) -> int:
        with self._lock:
            return len(self._queue)

    def run(self, entity: Any, task: Task, retired: Optional[Task] = None) -> bool:
        return self.run_delayed(entity, task, 1, retired)

    def run_delayed(self, entity: Any, task: Task, delay_ticks: int, retired: Optional[Task] = None) -> bool:
        if not _entity_alive(entity):
            return False
        with self._lock:
            due = self._current_tick + max(1, int(delay_ticks))
            row = _ScheduledTask(due_tick=due, seq=next(self._seq), entity=entity, task=task, retired=retired)
            self._queue.append(row)
        return True

    def _pop_due(self) -> list[_ScheduledTask]:
        with self._lock:
            due = sorted(row for row in self._queue if row.due_tick <= self._current_tick)
            if due:
                self._queue = [row for row in self._queue if row.due_tick > self._current_tick]
            return due

    def tick(self, count: int = 1) -> int:
        """Advance ``count`` ticks; returns how many tasks ran."""
        ran = 0
        for _ in range(max(0, int(count))):
            with self._lock:
                self._current_tick += 1
            for row in self._pop_due():
                if not _entity_alive(row.entity):
                    self.dropped += 1
                    LOG.debug("scheduler: dropped task for retired entity at tick %s", self._current_tick)
                    if row.retired is not None:
                        self._call(row.retired)
                    continue
                if self._call(row.task):
                    ran += 1
        return ran

    def _call(self, task: Task) -> bool:
        # Une tache en echec ne doit pas emporter le reste du lot.
        try:
            task()
        except Exception:
            self.failed += 1
            LOG.exception("scheduler: task failed at tick %s", self._current_tick)
            return False
        return True

    def advance_seconds(self, seconds: float) -> int:
        return self.tick(seconds_to_ticks(seconds))
