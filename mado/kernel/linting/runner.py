"""Parallel lint runner: fan files out to workers, fan violations into one report.

Workers never touch the report. Each one sends its file's result as one
message on a bounded queue; a single aggregator thread drains the queue and
extends the report under a lock, once per file. When every worker is done a
sentinel closes the queue, the aggregator is joined, and only then is the
report handed back.
"""

from __future__ import annotations

import os
import queue
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

from mado.core.logging import get_logger
from mado.kernel.document import Document
from mado.kernel.exceptions import ConcurrencyError, DocumentReadError, ValidationError
from mado.kernel.linting.models import FileFailure, LintReport, Violation

if TYPE_CHECKING:
    from collections.abc import Iterable
    from concurrent.futures import Future
    from pathlib import Path

    from mado.kernel.linting.linter import Linter

logger = get_logger(__name__)

DEFAULT_CAPACITY = 100

_Message = list[Violation] | FileFailure

# Put on the queue once every producer has finished
_CLOSED = object()

# Seconds between liveness checks of the aggregator while the queue is full
_POLL_INTERVAL = 0.05


def _deliver(channel: queue.Queue, item: object, consumer: threading.Thread) -> bool:
    """Put ``item`` on ``channel``; give up once ``consumer`` is gone."""
    while consumer.is_alive():
        try:
            channel.put(item, timeout=_POLL_INTERVAL)
        except queue.Full:
            continue
        return True
    return False


class _Aggregator(threading.Thread):
    """Single consumer that folds every queued message into the report.

    After a failure it keeps draining without recording, so producers
    blocked on a full queue are always released. The failure is exposed
    through ``error`` once the thread has been joined; ``closed`` tells
    whether the thread got as far as the closing sentinel.
    """

    def __init__(self, channel: queue.Queue, report: LintReport, lock: threading.Lock) -> None:
        super().__init__(name="mado-aggregator", daemon=True)
        self._channel = channel
        self._report = report
        self._lock = lock
        self.batches = 0
        self.closed = False
        self.error: BaseException | None = None

    def run(self) -> None:
        while True:
            message = self._channel.get()
            if message is _CLOSED:
                self.closed = True
                return
            if self.error is not None:
                continue
            try:
                with self._lock:
                    if isinstance(message, FileFailure):
                        self._report.add_failure(message)
                    else:
                        self._report.extend(message)
                self.batches += 1
            except BaseException as e:
                logger.error("Aggregator failed: {error!r}", error=e)
                self.error = e


class ParallelLintRunner:
    """Lint many files concurrently and collect one report.

    Parameters
    ----------
    walker : Iterable[Path]
        Source of files to lint, typically a ``FileWalker``
    linter : Linter
        Shared, read-only rule set applied to every file
    capacity : int, default=100
        Maximum file results queued for the aggregator; workers block
        beyond it
    max_workers : int | None, default=None
        Worker threads; defaults to the CPU count
    join_timeout : float | None, default=None
        Seconds to wait for the aggregator after the queue is closed

    Notes
    -----
    An unreadable file is recorded as a ``FileFailure`` and the run goes on.
    Any other worker error is fatal: files not yet started are cancelled,
    files in flight finish, the queue is drained and closed, and the error
    is re-raised from ``run``.
    """

    def __init__(
        self,
        walker: Iterable[Path],
        linter: Linter,
        capacity: int = DEFAULT_CAPACITY,
        max_workers: int | None = None,
        join_timeout: float | None = None,
    ) -> None:
        if capacity < 1:
            raise ValidationError("capacity", "must be at least 1", value=capacity)
        if max_workers is not None and max_workers < 1:
            raise ValidationError("max_workers", "must be at least 1", value=max_workers)
        self.walker = walker
        self.linter = linter
        self.capacity = capacity
        self.max_workers = max_workers or os.cpu_count() or 1
        self.join_timeout = join_timeout

    def _lint_file(
        self, path: Path, channel: queue.Queue, abort: threading.Event, consumer: threading.Thread
    ) -> None:
        if abort.is_set():
            return
        message: _Message
        try:
            violations = self.linter.check(Document.open(path))
        except DocumentReadError as e:
            logger.warning("Cannot read {path}: {reason}", path=path, reason=e.reason)
            message = FileFailure(path, e.reason)
        except BaseException:
            abort.set()
            raise
        else:
            logger.debug("Linted {path}: {count} violations", path=path, count=len(violations))
            message = violations
        if not _deliver(channel, message, consumer):
            logger.error("Dropped result for {path}: aggregator is gone", path=path)

    def _submit_all(
        self,
        executor: ThreadPoolExecutor,
        channel: queue.Queue,
        abort: threading.Event,
        consumer: threading.Thread,
    ) -> list[Future[None]]:
        futures: list[Future[None]] = []
        for path in self.walker:
            if abort.is_set():
                logger.debug("Stopped submitting files after a fatal error")
                break
            futures.append(executor.submit(self._lint_file, path, channel, abort, consumer))
        return futures

    def run(self) -> LintReport:
        """Lint every file from the walker.

        Returns
        -------
        LintReport
            Violations and read failures of all files, in arrival order

        Raises
        ------
        LintError
            If a rule failed on any file
        ConcurrencyError
            If the aggregator failed or could not be joined
        """
        report = LintReport()
        lock = threading.Lock()
        channel: queue.Queue[_Message | object] = queue.Queue(maxsize=self.capacity)
        abort = threading.Event()
        aggregator = _Aggregator(channel, report, lock)
        aggregator.start()

        fatal: BaseException | None = None
        try:
            with ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="mado-lint"
            ) as executor:
                try:
                    futures = self._submit_all(executor, channel, abort, aggregator)
                    done, _ = wait(futures, return_when=FIRST_EXCEPTION)
                    fatal = next(
                        (f.exception() for f in futures if f in done and f.exception()), None
                    )
                except BaseException:
                    abort.set()
                    raise
                finally:
                    if abort.is_set():
                        executor.shutdown(wait=True, cancel_futures=True)
        finally:
            # Every producer has returned; the aggregator may now finish draining
            _deliver(channel, _CLOSED, aggregator)
            aggregator.join(self.join_timeout)

        if aggregator.is_alive():
            raise ConcurrencyError("aggregator thread did not finish after the queue was closed")
        if aggregator.error is not None:
            reason = f"aggregator thread failed: {aggregator.error!r}"
            raise ConcurrencyError(reason) from aggregator.error
        if not aggregator.closed:
            raise ConcurrencyError("aggregator thread stopped before the queue was closed")
        if lock.locked():
            raise ConcurrencyError("report is still locked after the aggregator finished")
        if fatal is not None:
            raise fatal

        logger.debug(
            "Aggregated {batches} files: {violations} violations, {failures} failures",
            batches=aggregator.batches,
            violations=len(report.violations),
            failures=len(report.failures),
        )
        return report
