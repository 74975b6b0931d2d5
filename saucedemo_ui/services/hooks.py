# services/hooks.py
import logging
from typing import Callable, Dict, Optional, Type

from saucedemo_ui.core.errors import ScenarioSkipped
from saucedemo_ui.models.report import Status
from saucedemo_ui.models.scenario import Scenario
from saucedemo_ui.pages.base import Page
from saucedemo_ui.pages.cart import CartPage
from saucedemo_ui.pages.checkout import CheckoutCompletePage, CheckoutInformationPage, CheckoutOverviewPage
from saucedemo_ui.pages.header import AppHeader
from saucedemo_ui.pages.inventory import InventoryPage
from saucedemo_ui.pages.login import LoginPage

SETUP_LOGIN_TAGS = ('inventory', 'cart', 'checkout')
RESET_TAGS = ('cleanup_cart', 'reset_app_state')


class ScenarioContext:
    """State of one running scenario: driver, page objects and fixtures."""

    def __init__(self, scenario: Scenario, hooks: 'ScenarioHooks', attempt: int = 1):
        self.scenario = scenario
        self.hooks = hooks
        self.attempt = attempt
        self.actions = hooks.actions
        self.config = hooks.config
        self.test_data = hooks.test_data
        self._pages: Dict[Type[Page], Page] = {}
        self.values: Dict[str, object] = {}

    @property
    def driver(self):
        return self.hooks.registry.get()

    def page(self, page_type: Type[Page]) -> Page:
        if page_type not in self._pages:
            self._pages[page_type] = page_type(self.actions, self.config)
        return self._pages[page_type]

    @property
    def login_page(self) -> LoginPage:
        return self.page(LoginPage)

    @property
    def inventory_page(self) -> InventoryPage:
        return self.page(InventoryPage)

    @property
    def cart_page(self) -> CartPage:
        return self.page(CartPage)

    @property
    def checkout_information_page(self) -> CheckoutInformationPage:
        return self.page(CheckoutInformationPage)

    @property
    def checkout_overview_page(self) -> CheckoutOverviewPage:
        return self.page(CheckoutOverviewPage)

    @property
    def checkout_complete_page(self) -> CheckoutCompletePage:
        return self.page(CheckoutCompletePage)

    @property
    def header(self) -> AppHeader:
        return AppHeader(self.actions)

    def step(self, description: str, fn: Optional[Callable] = None, *args, **kwargs):
        self.hooks.log_step(description)
        if fn is None:
            return None
        return fn(*args, **kwargs)

    def check(self, condition, description: str) -> None:
        """Record an assertion in the report; a false condition fails the scenario."""
        passed = bool(condition)
        self.hooks.log_assertion(description, passed)
        if not passed:
            raise AssertionError(description)

    def check_equal(self, expected, actual, description: str) -> None:
        self.check(expected == actual, f"{description} - expected {expected!r}, got {actual!r}")

    def skip(self, reason: str) -> None:
        raise ScenarioSkipped(reason)


class ScenarioHooks:
    """Setup and teardown around every scenario, plus run-wide start and finish."""

    def __init__(self, config, registry, actions, report, screenshots, test_data):
        self.config = config
        self.registry = registry
        self.actions = actions
        self.report = report
        self.screenshots = screenshots
        self.test_data = test_data
        self.logger = logging.getLogger(__name__)

    def before_all(self) -> None:
        self.logger.info("========== STARTING TEST EXECUTION ==========")
        self.logger.info(f"Environment: {self.config.environment}")
        self.logger.info(f"Browser: {self.config.browser}")
        self.logger.info(f"Application URL: {self.config.app_url}")
        self.logger.info(f"Headless Mode: {self.config.headless}")
        self.logger.info(f"Grid Enabled: {self.config.grid_enabled}")
        self.screenshots.ensure_directory()
        deleted = self.screenshots.delete_older_than(self.config.screenshot_retention_days)
        self.logger.info(f"Global setup completed successfully ({deleted} old screenshots removed)")

    def before_scenario(self, scenario: Scenario, attempt: int = 1) -> ScenarioContext:
        name = scenario.name if attempt == 1 else f"{scenario.name} (attempt {attempt})"
        self.logger.info(f"========== STARTING SCENARIO: {name} ==========")
        self.report.start_test(name, scenario.description, scenario.category)
        try:
            self.registry.initialize(self.config.browser)
        except Exception as e:
            self.logger.error(f"Failed to initialize WebDriver for scenario: {name}: {e}")
            self.report.log_fail(f"Failed to initialize WebDriver: {e}")
            raise
        self.report.log_info(f"Scenario started: {scenario.name}")
        self.report.log_info(f"Browser: {self.config.browser}")
        self.report.log_info(f"Environment: {self.config.environment}")

        context = ScenarioContext(scenario, self, attempt)
        if scenario.has_tag('login'):
            self.actions.open(self.config.app_url)
            self.report.log_info("Navigated to login page")
        elif any(scenario.has_tag(tag) for tag in SETUP_LOGIN_TAGS):
            self.quick_login(context)
            self.report.log_info("Logged in with standard user")
        return context

    def quick_login(self, context: ScenarioContext) -> None:
        self.actions.open(self.config.app_url)
        context.login_page.wait_for_load()
        context.login_page.login(self.config.standard_user, self.config.password)
        context.inventory_page.wait_for_load()
        self.logger.info("Quick login completed")

    def after_scenario(self, scenario: Scenario, error: Optional[BaseException] = None) -> None:
        node = self.report.current()
        name = node.name if node is not None else scenario.name
        self.logger.info(f"========== FINISHING SCENARIO: {name} ==========")
        try:
            if isinstance(error, ScenarioSkipped):
                self._record_skip(name, error)
            elif error is not None:
                self.logger.warning(f"Scenario failed: {name}: {error}")
                self.report.record_outcome(Status.FAIL, f"Scenario failed: {name}: {error}",
                                           screenshot_name=name)
            else:
                self._record_pass(name)
            if self.registry.is_initialized() and any(scenario.has_tag(tag) for tag in RESET_TAGS):
                try:
                    AppHeader(self.actions).reset_app_state()
                    self.logger.info(f"App state reset after scenario: {name}")
                except Exception as e:
                    self.logger.warning(f"Failed to reset app state after scenario: {name}: {e}")
        finally:
            self.registry.quit()
            self.report.end_test()
            self.logger.info(f"Scenario cleanup completed: {name}")

    def _record_pass(self, name: str) -> None:
        self.logger.info(f"Scenario passed: {name}")
        self.report.record_outcome(Status.PASS, f"Scenario passed: {name}")
        self._attach_outcome_screenshot(self.screenshots.capture_success, name, 'Success Screenshot')

    def _record_skip(self, name: str, reason: BaseException) -> None:
        self.logger.info(f"Scenario skipped: {name}: {reason}")
        self.report.record_outcome(Status.SKIP, f"Scenario skipped: {name}: {reason}")
        self._attach_outcome_screenshot(self.screenshots.capture_skipped, name, 'Skipped Screenshot')

    def _attach_outcome_screenshot(self, capture, name: str, title: str) -> None:
        try:
            if not self.registry.is_initialized():
                return
            path = capture(self.registry.get(), name)
            self.report.attach_screenshot(path, title)
        except Exception as e:
            self.logger.error(f"Failed to capture {title.lower()} for {name}: {e}")
            self.report.log_warning(f"Failed to capture screenshot: {e}")

    def after_all(self) -> Dict[str, str]:
        self.logger.info("========== TEST EXECUTION COMPLETED ==========")
        paths = self.report.flush()
        self.logger.info(f"Reports generated at: {self.config.reports_path}")
        return paths

    # Step helpers, all best-effort
    def log_step(self, description: str) -> None:
        self.logger.info(f"STEP: {description}")
        self.report.log_info(f"Step: {description}")

    def log_test_data(self, label: str, data) -> None:
        self.logger.info(f"Test Data - {label}: {data}")
        self.report.log_info(f"Test Data - {label}: {data}")

    def log_assertion(self, description: str, passed: bool) -> None:
        if passed:
            self.logger.info(f"ASSERTION PASSED: {description}")
            self.report.log_pass(f"Assertion passed: {description}")
        else:
            self.logger.error(f"ASSERTION FAILED: {description}")
            self.report.log_fail(f"Assertion failed: {description}")

    def capture_step_screenshot(self, step_name: str) -> Optional[str]:
        try:
            if not self.registry.is_initialized():
                return None
            path = self.screenshots.capture_step(self.registry.get(), step_name)
            self.report.attach_screenshot(path, f"Step: {step_name}")
            return path
        except Exception as e:
            self.logger.warning(f"Failed to capture step screenshot: {step_name}: {e}")
            self.report.log_warning(f"Failed to capture step screenshot: {e}")
            return None
