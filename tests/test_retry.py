import threading

import pytest

from saucedemo_ui.core.retry import PER_TEST, SHARED, RetryPolicy, RetryPolicyProvider
from saucedemo_ui.models.report import Status

pytestmark = pytest.mark.unit


class Recorder:
    def __init__(self):
        self.entries = []

    def log(self, status, message):
        self.entries.append((status, message))


def test_policy_allows_max_count_retries():
    policy = RetryPolicy(2)
    assert [policy.should_retry('t'), policy.should_retry('t'), policy.should_retry('t')] == [True, True, False]
    assert policy.current_count() == 2
    assert policy.max_count() == 2


def test_policy_with_zero_max_never_retries():
    assert RetryPolicy(0).should_retry() is False


def test_policy_reports_each_decision():
    recorder = Recorder()
    policy = RetryPolicy(1, reporter=recorder)
    policy.should_retry('login')
    policy.should_retry('login')
    assert recorder.entries == [
        (Status.WARNING, 'Test failed. Retrying attempt 1 of 1'),
        (Status.FAIL, 'Test failed permanently after 1 retry attempts'),
    ]


def test_reset_restores_budget():
    policy = RetryPolicy(1)
    policy.should_retry()
    policy.reset()
    assert policy.current_count() == 0
    assert policy.should_retry() is True


def test_concurrent_callers_never_exceed_budget():
    policy = RetryPolicy(5)
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(10):
            decision = policy.should_retry()
            with lock:
                results.append(decision)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert results.count(True) == 5
    assert policy.current_count() == 5


class TestRetryPolicyProvider:
    def test_per_test_scope_hands_out_fresh_policies(self):
        provider = RetryPolicyProvider(2, PER_TEST)
        first = provider.for_test('a')
        first.should_retry()
        second = provider.for_test('b')
        assert second is not first
        assert second.current_count() == 0

    def test_shared_scope_leaks_budget_across_tests(self):
        provider = RetryPolicyProvider(1, SHARED)
        assert provider.for_test('a').should_retry() is True
        assert provider.for_test('b').should_retry() is False
        assert provider.for_test('a') is provider.for_test('b')

    def test_unknown_scope_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicyProvider(1, 'per_suite')

    def test_from_config(self, config):
        provider = RetryPolicyProvider.from_config(config)
        assert provider.max_count == 2
        assert provider.scope == PER_TEST
