from __future__ import annotations

import logging
import multiprocessing
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Sequence

from ..core.constants import DEFAULT_POOL_SIZE, DEFAULT_WORKER_TIMEOUT_SECONDS
from ..core.exceptions import ValidationError, WorkerCrashedError, WorkerTimeoutError
from ..ingest.model import BatchOutcome
from .batch_processor import worker_main

logger = logging.getLogger(__name__)


class WorkerPool:
    """Bounded pool of isolated batch workers.

    Every job runs in its own child process and talks to the parent over a
    one-way pipe, so a job cannot share memory with its siblings. At most
    ``pool_size`` processes run at once; further jobs wait in the executor
    queue. A job that does not answer within ``timeout`` seconds of starting
    is terminated and surfaces as ``WorkerTimeoutError``.
    """

    def __init__(
        self,
        pool_size: int = DEFAULT_POOL_SIZE,
        *,
        timeout: float = DEFAULT_WORKER_TIMEOUT_SECONDS,
        target: Callable[[Any, Any], None] = worker_main,
        start_method: Optional[str] = None,
    ):
        if int(pool_size) <= 0:
            raise ValidationError("pool_size must be greater than 0")
        if float(timeout) <= 0:
            raise ValidationError("timeout must be greater than 0")

        self.pool_size = int(pool_size)
        self.timeout = float(timeout)
        self._target = target
        self._ctx = multiprocessing.get_context(start_method)
        self._executor = ThreadPoolExecutor(max_workers=self.pool_size, thread_name_prefix="batch-worker")
        self._lock = threading.Lock()
        self._processes: set = set()
        self._closed = False

        self._created = time.time()
        self._submitted = 0
        self._active_jobs = 0
        self._jobs_completed = 0
        self._jobs_failed = 0
        self._jobs_cancelled = 0
        self._total_processing_time = 0.0

        logger.info("Worker pool initialized with %d workers (timeout=%.1fs)", self.pool_size, self.timeout)

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def submit(self, payload: Any) -> "Future[BatchOutcome]":
        # Held across the executor submit so shutdown cannot slip in between.
        with self._lock:
            if self._closed:
                raise ValidationError("Worker pool is shut down")
            future = self._executor.submit(self._run, payload)
            self._submitted += 1
        future.add_done_callback(self._count_cancelled)
        return future

    def _count_cancelled(self, future: Future) -> None:
        if future.cancelled():
            with self._lock:
                self._jobs_cancelled += 1

    def execute(self, payload: Any) -> BatchOutcome:
        return self.submit(payload).result()

    def execute_all(self, payloads: Sequence[Any]) -> list:
        """Run every payload; results (or the raised exception) in submission order."""
        futures = [self.submit(p) for p in payloads]
        out: list = []
        for future in futures:
            try:
                out.append(future.result())
            except Exception as exc:
                out.append(exc)
        return out

    def _run(self, payload: Any) -> BatchOutcome:
        with self._lock:
            self._active_jobs += 1
        started = time.monotonic()
        ok = False
        try:
            outcome = self._run_in_process(payload)
            ok = bool(outcome.success)
            return outcome
        finally:
            elapsed = time.monotonic() - started
            with self._lock:
                self._active_jobs -= 1
                self._total_processing_time += elapsed
                if ok:
                    self._jobs_completed += 1
                else:
                    self._jobs_failed += 1

    def _run_in_process(self, payload: Any) -> BatchOutcome:
        batch = getattr(payload, "batch_index", "?")
        receiver, sender = self._ctx.Pipe(duplex=False)
        process = self._ctx.Process(target=self._target, args=(sender, payload), daemon=True)
        process.start()
        sender.close()
        with self._lock:
            self._processes.add(process)
            closed = self._closed
        if closed:
            # Started after shutdown collected the running workers.
            process.terminate()

        try:
            if not receiver.poll(self.timeout):
                logger.warning(
                    "Worker pid=%s (batch %s) timed out after %.1fs, terminating",
                    process.pid,
                    batch,
                    self.timeout,
                )
                process.terminate()
                raise WorkerTimeoutError(f"Worker job timed out after {self.timeout:g}s")
            try:
                return receiver.recv()
            except EOFError:
                process.join(1)
                logger.error(
                    "Worker pid=%s (batch %s) exited with code %s before answering",
                    process.pid,
                    batch,
                    process.exitcode,
                )
                raise WorkerCrashedError(f"Worker exited with code {process.exitcode} before answering") from None
        finally:
            receiver.close()
            process.join(1)
            if process.is_alive():
                process.kill()
                process.join()
            with self._lock:
                self._processes.discard(process)

    def get_stats(self) -> dict:
        with self._lock:
            finished = self._jobs_completed + self._jobs_failed
            started = finished + self._active_jobs + self._jobs_cancelled
            return {
                "poolSize": self.pool_size,
                "activeJobs": self._active_jobs,
                "queueLength": max(self._submitted - started, 0),
                "jobsCompleted": self._jobs_completed,
                "jobsFailed": self._jobs_failed,
                "jobsCancelled": self._jobs_cancelled,
                "totalProcessingTime": round(self._total_processing_time, 4),
                "averageProcessingTime": round(self._total_processing_time / finished, 4) if finished else 0.0,
                "successRate": f"{self._jobs_completed / finished * 100:.2f}%" if finished else "0%",
                "uptime": round(time.time() - self._created, 3),
            }

    def is_healthy(self) -> dict:
        with self._lock:
            idle = max(self.pool_size - self._active_jobs, 0)
            ratio = idle / self.pool_size
            return {
                "healthy": not self._closed and ratio >= 0.5,
                "idleWorkers": idle,
                "totalWorkers": self.pool_size,
                "healthRatio": f"{ratio * 100:.2f}%",
                "activeJobs": self._active_jobs,
                "closed": self._closed,
            }

    def shutdown(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True

        # Drop queued jobs first so no new worker starts once the running ones die.
        self._executor.shutdown(wait=False, cancel_futures=True)
        with self._lock:
            processes = list(self._processes)

        logger.info("Terminating worker pool (%d running workers)", len(processes))
        for process in processes:
            if process.is_alive():
                process.terminate()
        self._executor.shutdown(wait=True)
        logger.info("Worker pool terminated")
