"""Tick-based task scheduling on top of a single hardware compare timer."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

Callback = Callable[[], None]

TICK_BITS = 32
TICK_MASK = (1 << TICK_BITS) - 1
_TICK_SIGN = 1 << (TICK_BITS - 1)
_CALIBRATION_MASK = 0xFFFF


def tick_less_than_tick(i: int, j: int) -> bool:
    """Return True if tick ``i`` comes before tick ``j``, allowing for wrap-around."""
    return bool((i - j) & TICK_MASK & _TICK_SIGN)


def tick_less_than_equal_to_tick(i: int, j: int) -> bool:
    """Return True if tick ``i`` comes before or at tick ``j``, allowing for wrap-around."""
    return not tick_less_than_tick(j, i)


@dataclass(eq=False)
class Task:
    """A callback to be run at a scheduled tick.

    ``scheduled_tick`` is only meaningful while scheduled or during the
    callback; ``executed_tick`` records when the callback actually ran.
    """

    callback: Callback
    delete_after_execution: bool = False
    scheduled_tick: int = field(default=0)
    executed_tick: int = field(default=0)
    scheduled: bool = field(default=False)


class TimerService(ABC):
    """Keeps tasks ordered by execution tick and drives a compare timer.

    Subclasses provide the free-running tick, its frequency, and
    :meth:`schedule_interrupt`; when the timer reaches the requested tick
    they must call :meth:`return_callback`.
    """

    def __init__(self) -> None:
        self._task_list: list[Task] = []
        self._latency = 0
        self._min_tick = 0

    @property
    def latency(self) -> int:
        """Ticks between requesting an interrupt and the timer acting on it."""
        return self._latency

    @property
    def min_tick(self) -> int:
        """Minimum number of ticks a task can be scheduled in advance."""
        return self._min_tick

    def task_list(self) -> list[Task]:
        """Return the tasks currently held, in execution order."""
        return list(self._task_list)

    @abstractmethod
    def schedule_interrupt(self, tick: int) -> None:
        """Arrange for :meth:`return_callback` to be called at ``tick``."""

    @abstractmethod
    def get_tick(self) -> int:
        """Return the current tick."""

    @abstractmethod
    def get_ticks_per_second(self) -> int:
        """Return the tick frequency."""

    def calibrate(self) -> None:
        """Measure the timer latency and minimum scheduling distance.

        Call this once the timer is running; it blocks until the probe tasks
        have executed.
        """
        saved = list(self._task_list)
        self._latency = 0
        self._min_tick = 0

        task = Task(lambda: None)
        task2 = Task(lambda: None)

        self.schedule_task(task, self.get_tick())
        self._wait_for(task)
        min_tick_add = (task.executed_tick - task.scheduled_tick + 1) & _CALIBRATION_MASK

        self.schedule_task(task, self.get_tick() + min_tick_add)
        self._wait_for(task)
        self._latency = (task.executed_tick - task.scheduled_tick + 1) & _CALIBRATION_MASK

        self._task_list.append(task2)
        task2.scheduled = True
        task2.scheduled_tick = self.get_tick() & TICK_MASK
        self.schedule_interrupt(task2.scheduled_tick)
        self._wait_for(task2)
        self._min_tick = (task2.executed_tick - task2.scheduled_tick + 1) & _CALIBRATION_MASK

        self._task_list = saved
        self._remove_unscheduled_front()
        if self._task_list:
            self._request_interrupt(self._task_list[0])

    def return_callback(self) -> None:
        """Run every scheduled task that is due, then re-arm for the next one."""
        index = next(
            (i for i, task in enumerate(self._task_list) if task.scheduled), None
        )
        if index is None:
            return

        while True:
            task = self._task_list[index]
            due = (task.scheduled_tick - self._min_tick) & TICK_MASK
            if not tick_less_than_equal_to_tick(due, self.get_tick()):
                break
            while True:
                task.executed_tick = self.get_tick() & TICK_MASK
                if not tick_less_than_tick(task.executed_tick, task.scheduled_tick):
                    break
            task.scheduled = False
            task.callback()
            index += 1
            if index >= len(self._task_list):
                return
        self._request_interrupt(self._task_list[index])

    def schedule_callback(self, callback: Callback, tick: int) -> None:
        """Run ``callback`` once at ``tick``; it cannot be rescheduled or cancelled."""
        self.schedule_task(Task(callback, delete_after_execution=True), tick)

    def schedule_task(self, task: Task, tick: int) -> None:
        """Schedule ``task`` at ``tick``, moving it if it is already scheduled."""
        tick &= TICK_MASK
        self._remove_unscheduled_front()
        tasks = self._task_list

        current = next((i for i, t in enumerate(tasks) if t is task), None)
        new = next(
            (i for i, t in enumerate(tasks) if tick_less_than_tick(tick, t.scheduled_tick)),
            len(tasks),
        )

        if current is not None:
            if new != current and new != current + 1:
                anchor = tasks[new] if new < len(tasks) else None
                del tasks[current]
                position = len(tasks) if anchor is None else _index_of(tasks, anchor)
                tasks.insert(position, task)
            task.scheduled_tick = tick
        else:
            task.scheduled_tick = tick
            task.scheduled = True
            tasks.insert(new, task)

        self._request_interrupt(tasks[0])

    def unschedule_task(self, task: Task) -> None:
        """Remove ``task`` from the schedule; it may be scheduled again later."""
        self._task_list = [t for t in self._task_list if t is not task]
        task.scheduled = False
        if self._task_list:
            self._request_interrupt(self._task_list[0])

    def _remove_unscheduled_front(self) -> None:
        while self._task_list and not self._task_list[0].scheduled:
            del self._task_list[0]

    def _request_interrupt(self, task: Task) -> None:
        self.schedule_interrupt((task.scheduled_tick - self._latency) & TICK_MASK)

    @staticmethod
    def _wait_for(task: Task) -> None:
        while task.scheduled:
            time.sleep(0)


def _index_of(tasks: list[Task], task: Task) -> int:
    return next(i for i, t in enumerate(tasks) if t is task)