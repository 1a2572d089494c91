from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from PyQt6.QtCore import QObject, QThread, pyqtSignal

logger = logging.getLogger(__name__)


class GatewayWorker(QThread):
    """Runs one blocking gateway call off the UI thread."""

    succeeded = pyqtSignal(object, object)  # worker, result
    failed = pyqtSignal(object, object)  # worker, exception

    def __init__(self, job: Callable[[], Any]):
        super().__init__()
        self.job = job

    def run(self):
        try:
            result = self.job()
        except Exception as e:
            self.failed.emit(self, e)
        else:
            self.succeeded.emit(self, result)


class QtTaskRunner(QObject):
    """Submits jobs to GatewayWorkers and calls back on the UI thread.

    Workers are kept referenced until their thread finishes.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._callbacks: Dict[GatewayWorker, Tuple[Callable[[Any], None], Callable[[Exception], None]]] = {}

    def submit(
        self,
        job: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_failure: Callable[[Exception], None],
    ) -> None:
        worker = GatewayWorker(job)
        self._callbacks[worker] = (on_success, on_failure)
        worker.succeeded.connect(self._deliver_success)
        worker.failed.connect(self._deliver_failure)
        worker.finished.connect(self._cleanup)
        worker.start()

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def _deliver_success(self, worker: GatewayWorker, result: Any) -> None:
        callbacks = self._callbacks.get(worker)
        if callbacks:
            callbacks[0](result)

    def _deliver_failure(self, worker: GatewayWorker, exc: Exception) -> None:
        callbacks = self._callbacks.get(worker)
        if callbacks:
            callbacks[1](exc)

    def _cleanup(self) -> None:
        worker = self.sender()
        if isinstance(worker, GatewayWorker):
            self._callbacks.pop(worker, None)
            worker.deleteLater()

    def wait_all(self, msecs: Optional[int] = None) -> bool:
        """Block until running workers finish (used on shutdown).

        With `msecs` each worker gets at most that long; returns False if any
        is still running afterwards.
        """
        running = [w for w in self._callbacks if w.isRunning()]
        if running:
            logger.info("Waiting for %d pending request(s)", len(running))
        done = True
        for worker in running:
            finished = worker.wait() if msecs is None else worker.wait(msecs)
            done = done and finished
        return done
