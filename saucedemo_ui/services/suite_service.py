# services/suite_service.py
import json
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from saucedemo_ui.config.settings import Config
from saucedemo_ui.core.element_actions import ElementActions
from saucedemo_ui.core.errors import ScenarioSkipped
from saucedemo_ui.core.retry import RetryPolicyProvider
from saucedemo_ui.core.session import SessionRegistry, create_driver
from saucedemo_ui.models.scenario import FAILED, PASSED, SKIPPED, Scenario, ScenarioResult, SuiteResult
from saucedemo_ui.services.hooks import ScenarioHooks
from saucedemo_ui.services.report_service import ReportService
from saucedemo_ui.utils.screenshot import TIMESTAMP_FORMAT, Screenshots
from saucedemo_ui.utils.test_data import TestData


class SuiteService:
    """Runs scenarios on a worker pool, one browser session per worker."""

    def __init__(self, config: Optional[Config] = None, driver_factory=create_driver, sleep=time.sleep):
        self.config = config or Config.load()
        self.driver_factory = driver_factory
        self.sleep = sleep
        self.logger = logging.getLogger(__name__)
        self._run_lock = threading.Lock()

    def _build_hooks(self) -> ScenarioHooks:
        registry = SessionRegistry(self.config, driver_factory=self.driver_factory)
        screenshots = Screenshots.from_config(self.config)
        report = ReportService(self.config, registry, screenshots)
        actions = ElementActions(registry, self.config, sleep=self.sleep)
        return ScenarioHooks(self.config, registry, actions, report, screenshots, TestData.from_config(self.config))

    def run(self, scenarios: Iterable[Scenario], tags: Optional[Sequence[str]] = None) -> SuiteResult:
        selected = [scenario for scenario in scenarios if scenario.matches(tags)]
        thread_count = max(1, self.config.thread_count)
        # one suite at a time; the report is flushed once per run
        with self._run_lock:
            hooks = self._build_hooks()
            retries = RetryPolicyProvider.from_config(self.config, reporter=hooks.report)
            result = SuiteResult(started_at=datetime.now().isoformat(), thread_count=thread_count)
            self.logger.info(f"Running {len(selected)} scenarios on {thread_count} workers"
                             + (f" (tags: {', '.join(tags)})" if tags else ''))
            hooks.before_all()
            start_time = time.time()
            with ThreadPoolExecutor(max_workers=thread_count) as executor:
                future_to_scenario = {
                    executor.submit(self._run_scenario, hooks, retries, scenario): scenario
                    for scenario in selected
                }
                for future in as_completed(future_to_scenario):
                    scenario = future_to_scenario[future]
                    try:
                        result.results.append(future.result())
                    except Exception as e:
                        self.logger.error(f"Scenario {scenario.name} crashed: {e}")
                        result.results.append(ScenarioResult(scenario.name, FAILED, error_message=str(e),
                                                             tags=list(scenario.tags)))
            result.total_time = round(time.time() - start_time, 2)
            result.report_paths = hooks.after_all()
            result.results_file = self.save_results_to_file(result)
        self.print_summary(result)
        return result

    def _run_scenario(self, hooks: ScenarioHooks, retries: RetryPolicyProvider, scenario: Scenario) -> ScenarioResult:
        policy = retries.for_test(scenario.name)
        attempt = 0
        start_time = time.time()
        while True:
            attempt += 1
            error = None
            try:
                context = hooks.before_scenario(scenario, attempt)
                scenario.run(context)
            except Exception as e:
                error = e
            retry = error is not None and not isinstance(error, ScenarioSkipped) and policy.should_retry(scenario.name)
            hooks.after_scenario(scenario, error)
            if not retry:
                break
        if error is None:
            status = PASSED
        elif isinstance(error, ScenarioSkipped):
            status = SKIPPED
        else:
            status = FAILED
        return ScenarioResult(
            name=scenario.name,
            status=status,
            attempts=attempt,
            duration=round(time.time() - start_time, 2),
            error_message=str(error) if error is not None else '',
            tags=list(scenario.tags),
        )

    def save_results_to_file(self, result: SuiteResult) -> Optional[str]:
        report_dir = Path(self.config.reports_path)
        filename = report_dir / f"SuiteResult_{datetime.now().strftime(TIMESTAMP_FORMAT)}.json"
        try:
            report_dir.mkdir(parents=True, exist_ok=True)
            with open(filename, 'w', encoding='utf-8') as f:
                json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            self.logger.error(f"Error saving results: {e}")
            return None
        self.logger.info(f"Results saved to: {filename}")
        return str(filename)

    def print_summary(self, result: SuiteResult) -> None:
        summary = result.summary()
        self.logger.info("=" * 80)
        self.logger.info("SUITE SUMMARY")
        self.logger.info("=" * 80)
        self.logger.info(f"   Scenarios: {summary['total']}")
        self.logger.info(f"   Passed: {summary['passed']} ({summary['pass_percentage']}%)")
        self.logger.info(f"   Failed: {summary['failed']}")
        self.logger.info(f"   Skipped: {summary['skipped']}")
        self.logger.info(f"   Retried: {summary['retried']}")
        self.logger.info(f"   Total time: {summary['total_time']} seconds")
        for scenario_result in result.results:
            if not scenario_result.passed:
                self.logger.info(f"   [{scenario_result.status.upper()}] {scenario_result.name}: "
                                 f"{scenario_result.error_message}")
        if result.report_paths:
            self.logger.info(f"   HTML report: {result.report_paths.get('html')}")


def selected_tags(raw: Optional[str]) -> List[str]:
    """'login, @cart' -> ['login', 'cart']"""
    if not raw:
        return []
    return [tag.strip().lstrip('@') for tag in raw.split(',') if tag.strip()]
