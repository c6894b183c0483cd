import logging
from collections import deque
from typing import Deque, Optional

from mazing.algo.base import DONE, Args, Status, StepEvent, Task

logger = logging.getLogger(__name__)


def format_event(task: Task, event: StepEvent) -> str:
    """Renders a step event as a one-line log message."""
    where = f"At {event.at}, " if event.at is not None else ""
    text = event.detail or event.kind.value
    return f"[{task.name}] {where}{text}"


class Executor:
    """
    FIFO of tasks. Only the front task is ever ticked; it is popped as soon
    as it reports Done or Aborted.
    """

    def __init__(self):
        self.queue: Deque[Task] = deque()

    def __len__(self) -> int:
        return len(self.queue)

    @property
    def front(self) -> Optional[Task]:
        return self.queue[0] if self.queue else None

    def stack(self, task: Task):
        self.queue.append(task)

    def clear(self):
        self.queue.clear()

    def run_step(self, args: Args) -> Optional[Status]:
        """One tick of the front task. None when there is nothing to run."""
        status = self._execute_task(args)
        if status is not None and not status.is_continuing:
            self.queue.popleft()
        return status

    def run_task(self, args: Args) -> Optional[Status]:
        """Ticks the front task until it stops continuing."""
        status = self._execute_task(args)
        while status is not None and status.is_continuing:
            status = self._execute_task(args)
        if status is not None:
            self.queue.popleft()
        return status

    def run(self, args: Args) -> Status:
        """
        Drains the queue. Returns DONE once it is empty, or the first
        Aborted status, leaving the tasks behind the aborted one queued.
        """
        while self.queue:
            status = self.run_task(args)
            if status.is_aborted:
                return status
        return DONE

    def run_batch(self, args: Args, budget: int) -> Optional[Status]:
        """At most `budget` ticks, spanning tasks. Stops early on abort or empty queue."""
        status = None
        for _ in range(budget):
            if not self.queue:
                break
            status = self.run_step(args)
            if status.is_aborted:
                break
        return status

    def _execute_task(self, args: Args) -> Optional[Status]:
        task = self.front
        if task is None:
            return None

        if logger.isEnabledFor(logging.DEBUG):
            event = task.context()
            if event is not None:
                logger.debug(format_event(task, event))

        status = task.execute_one(args)

        if logger.isEnabledFor(logging.DEBUG):
            event = task.action()
            if event is not None:
                logger.debug(format_event(task, event))

        if status.is_done:
            logger.info("[%s] Done after %d steps", task.name, task.step_count)
        elif status.is_aborted:
            logger.error("[%s] Aborted: %s", task.name, status.reason)

        return status
