"""Fire-and-forget delivery of notifications to the skill invoker."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Final

from batterywatch.constants import DEFAULT_SKILL_BASE_URL
from batterywatch.notifications import Notification
from batterywatch.protocols import SkillInvoker

logger: Final = logging.getLogger(__name__)


class NotificationDispatcher:
    """Sends notifications on a single background worker.

    Submission order is preserved. A failed or rejected invocation is
    logged and dropped; nothing is retried.
    """

    def __init__(
        self,
        invoker: SkillInvoker,
        base_url: str = DEFAULT_SKILL_BASE_URL,
        executor: Executor | None = None,
    ) -> None:
        self.invoker = invoker
        self.base_url = base_url
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="batterywatch-notify"
        )

    def dispatch(self, notification: Notification) -> Future[bool]:
        """Queue *notification* for delivery and return its future."""
        url = notification.to_url(self.base_url)
        future = self._executor.submit(self.invoker.open_url, url, notification.preemptive)
        future.add_done_callback(lambda f: self._log_outcome(url, f))
        return future

    def invoke(self, notification: Notification) -> bool:
        """Deliver *notification* on the calling thread and return the outcome."""
        url = notification.to_url(self.base_url)
        try:
            ok = self.invoker.open_url(url, notification.preemptive)
        except Exception as exc:
            logger.warning("open_url %s raised: %s", url, exc)
            return False
        if not ok:
            logger.warning("open_url %s was not accepted", url)
        return bool(ok)

    def submit(self, task: Callable[[], object], description: str) -> Future[object]:
        """Run *task* on the worker after anything already queued.

        Exceptions are logged under *description* and not re-raised.
        """
        future = self._executor.submit(task)
        future.add_done_callback(lambda f: self._log_task_failure(description, f))
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker, optionally waiting for queued notifications."""
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _log_task_failure(description: str, future: Future[object]) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error("%s failed: %s", description, exc)

    @staticmethod
    def _log_outcome(url: str, future: Future[bool]) -> None:
        exc = future.exception()
        if exc is not None:
            logger.warning("open_url %s raised: %s", url, exc)
        elif not future.result():
            logger.warning("open_url %s was not accepted", url)
