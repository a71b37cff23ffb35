"""Background worker threads for report fetches used by the GUI."""

from __future__ import annotations

from typing import Callable, List

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from salesreport.services.report_provider import FetchResult


class FetchWorker(QThread):
    finished_with_result = pyqtSignal(object)  # FetchResult

    def __init__(self, job: Callable[[], FetchResult], parent: QObject | None = None):
        super().__init__(parent)
        self._job = job

    def run(self) -> None:  # type: ignore[override]
        self.finished_with_result.emit(self._job())


class QtFetchRunner(QObject):
    """Runs each fetch on its own ``FetchWorker``.

    The worker's signal is connected from the UI thread, so the callback
    executes there (queued connection) in the order results resolve.
    """

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._workers: List[FetchWorker] = []

    def run(self, job: Callable[[], FetchResult], on_done: Callable[[FetchResult], None]) -> None:
        worker = FetchWorker(job, self)
        worker.finished_with_result.connect(on_done)
        worker.finished.connect(lambda w=worker: self._release(w))
        self._workers.append(worker)
        worker.start()

    def _release(self, worker: FetchWorker) -> None:
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()

    def active_count(self) -> int:
        return len(self._workers)

    def wait_all(self, timeout_ms: int = 5000) -> bool:
        return all(w.wait(timeout_ms) for w in list(self._workers))
