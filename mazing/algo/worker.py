import logging
import threading
from typing import Optional

from mazing.algo.base import Args, Status
from mazing.algo.executor import Executor

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """
    Drives an executor on a worker thread while the caller only reads.
    The whole maze is guarded by `args.maze.lock`, taken around every
    batch; readers take the same lock to see a complete tick.
    """

    def __init__(self, executor: Executor, args: Args, batch: int = 1):
        self.executor = executor
        self.args = args
        self.batch = batch
        self.status: Optional[Status] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.is_running:
            raise RuntimeError("Background runner already started")
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="mazing-carver", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()

    def join(self, timeout: float = None) -> Optional[Status]:
        if self._thread is not None:
            self._thread.join(timeout)
        return self.status

    def _loop(self):
        while not self._stop.is_set():
            with self.args.maze.lock:
                status = self.executor.run_batch(self.args, self.batch)
            if status is None:
                break
            self.status = status
            if status.is_aborted:
                logger.error("Background run stopped: %s", status.reason)
                break
        logger.debug("Background runner exits with %s", self.status)
