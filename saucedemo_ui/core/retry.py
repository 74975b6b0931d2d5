# core/retry.py
import logging
import threading
from typing import Optional

from saucedemo_ui.models.report import Status

PER_TEST = 'per_test'
SHARED = 'shared'


class RetryPolicy:
    """Bounded re-execution counter for one failed test.

    `should_retry` is consulted by the runner after a failure. The counter is
    only reset by `reset()`; whether a test gets a fresh policy is decided by
    `RetryPolicyProvider`.
    """

    def __init__(self, max_count: int, reporter=None):
        self._count = 0
        self._max_count = max_count
        self._lock = threading.Lock()
        self.reporter = reporter
        self.logger = logging.getLogger(__name__)

    def should_retry(self, failure_context: Optional[str] = None) -> bool:
        name = failure_context or 'test'
        with self._lock:
            if self._count < self._max_count:
                self._count += 1
                attempt = self._count
            else:
                attempt = None
        if attempt is not None:
            self.logger.warning(f"Test '{name}' failed. Retrying attempt {attempt} of {self._max_count}")
            self._report(Status.WARNING, f"Test failed. Retrying attempt {attempt} of {self._max_count}")
            return True
        self.logger.error(f"Test '{name}' failed after {self._max_count} retry attempts")
        self._report(Status.FAIL, f"Test failed permanently after {self._max_count} retry attempts")
        return False

    def _report(self, status: Status, message: str) -> None:
        if self.reporter is not None:
            self.reporter.log(status, message)

    def current_count(self) -> int:
        return self._count

    def max_count(self) -> int:
        return self._max_count

    def reset(self) -> None:
        with self._lock:
            self._count = 0


class RetryPolicyProvider:
    """Hands out retry policies per test (`per_test`) or one for the whole run (`shared`)."""

    def __init__(self, max_count: int, scope: str = PER_TEST, reporter=None):
        if scope not in (PER_TEST, SHARED):
            raise ValueError(f"Unknown retry policy scope: {scope}")
        self.max_count = max_count
        self.scope = scope
        self.reporter = reporter
        self._shared = RetryPolicy(max_count, reporter) if scope == SHARED else None

    @classmethod
    def from_config(cls, config, reporter=None) -> 'RetryPolicyProvider':
        return cls(config.retry_count, config.retry_policy_scope, reporter)

    def for_test(self, name: str = '') -> RetryPolicy:
        if self._shared is not None:
            return self._shared
        return RetryPolicy(self.max_count, self.reporter)
