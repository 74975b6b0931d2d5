# core/element_actions.py
"""Wait-then-act wrappers over the calling worker's browser session.

Waits that guard a further action (visible, clickable, present, all
visible) raise ElementTimeoutError when the explicit-wait deadline passes.
Waits used as soft checks (invisible, text present) return False instead.
Presence-based reads (count, is_enabled, is_selected) never raise.
"""
import logging
import time
from typing import Callable, List, Optional

from selenium.common.exceptions import (
    ElementClickInterceptedException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import Select, WebDriverWait

from saucedemo_ui.core.errors import (
    ClickFailedError,
    ElementTimeoutError,
    ScriptClickError,
    TypeTextError,
)
from saucedemo_ui.models.locator import Locator

TRANSIENT_CLICK_ERRORS = (StaleElementReferenceException, ElementClickInterceptedException)


class ElementActions:
    CLICK_ATTEMPTS = 3
    CLICK_BACKOFF = 0.5

    def __init__(self, registry, config, sleep: Callable[[float], None] = time.sleep,
                 poll_frequency: float = 0.5):
        self.registry = registry
        self.config = config
        self.sleep = sleep
        self.poll_frequency = poll_frequency
        self.logger = logging.getLogger(__name__)

    @property
    def driver(self):
        return self.registry.get()

    @property
    def timeout(self) -> int:
        return self.config.explicit_wait

    def _until(self, condition, locator: Locator, description: str):
        timeout = self.timeout
        wait = WebDriverWait(self.driver, timeout, poll_frequency=self.poll_frequency)
        try:
            result = wait.until(condition)
        except TimeoutException as e:
            self.logger.error(f"Element not {description} within {timeout}s: {locator}")
            raise ElementTimeoutError(locator, description, timeout) from e
        self.logger.debug(f"Element {description}: {locator}")
        return result

    def _until_soft(self, condition, locator: Locator, description: str) -> bool:
        timeout = self.timeout
        wait = WebDriverWait(self.driver, timeout, poll_frequency=self.poll_frequency)
        try:
            result = bool(wait.until(condition))
        except TimeoutException:
            self.logger.warning(f"Element not {description} within {timeout}s: {locator}")
            return False
        self.logger.debug(f"Element {description}: {locator}")
        return result

    # Waits
    def wait_visible(self, locator: Locator):
        return self._until(EC.visibility_of_element_located(locator.as_tuple()), locator, 'visible')

    def wait_clickable(self, locator: Locator):
        return self._until(EC.element_to_be_clickable(locator.as_tuple()), locator, 'clickable')

    def wait_present(self, locator: Locator):
        return self._until(EC.presence_of_element_located(locator.as_tuple()), locator, 'present')

    def wait_all_visible(self, locator: Locator) -> List:
        elements = self._until(EC.visibility_of_all_elements_located(locator.as_tuple()), locator, 'all visible')
        self.logger.debug(f"Elements visible: {locator} (count: {len(elements)})")
        return elements

    def wait_invisible(self, locator: Locator) -> bool:
        return self._until_soft(EC.invisibility_of_element_located(locator.as_tuple()), locator, 'invisible')

    def wait_text_present(self, locator: Locator, text: str) -> bool:
        return self._until_soft(EC.text_to_be_present_in_element(locator.as_tuple(), text),
                                locator, f"showing text '{text}'")

    # Actions
    def click(self, locator: Locator) -> int:
        """Click once the element is clickable; returns the number of attempts used."""
        for attempt in range(1, self.CLICK_ATTEMPTS + 1):
            try:
                self.wait_clickable(locator).click()
                self.logger.info(f"Element clicked successfully: {locator}")
                return attempt
            except TRANSIENT_CLICK_ERRORS as e:
                self.logger.warning(f"Click attempt {attempt} failed for element: {locator} ({type(e).__name__})")
                if attempt == self.CLICK_ATTEMPTS:
                    self.logger.error(f"Failed to click element after {attempt} attempts: {locator}")
                    raise ClickFailedError(locator, attempt) from e
                self.sleep(self.CLICK_BACKOFF)

    def click_via_script(self, locator: Locator) -> None:
        element = self.wait_present(locator)
        try:
            self.driver.execute_script("arguments[0].click();", element)
        except WebDriverException as e:
            self.logger.error(f"Failed to click element using JavaScript: {locator}: {e}")
            raise ScriptClickError(locator) from e
        self.logger.info(f"Element clicked using JavaScript: {locator}")

    def type_text(self, locator: Locator, text: str) -> None:
        try:
            element = self.wait_visible(locator)
            element.clear()
            element.send_keys(text)
        except (ElementTimeoutError, WebDriverException) as e:
            self.logger.error(f"Failed to type text in element: {locator}: {e}")
            raise TypeTextError(locator) from e
        self.logger.info(f"Text entered in element {locator}")

    def clear(self, locator: Locator) -> None:
        try:
            self.wait_visible(locator).clear()
        except (ElementTimeoutError, WebDriverException) as e:
            self.logger.error(f"Failed to clear element: {locator}: {e}")
            raise TypeTextError(locator) from e

    def select_by_visible_text(self, locator: Locator, text: str) -> None:
        Select(self.wait_visible(locator)).select_by_visible_text(text)
        self.logger.info(f"Dropdown option selected by text {locator}: {text}")

    def select_by_value(self, locator: Locator, value: str) -> None:
        Select(self.wait_visible(locator)).select_by_value(value)
        self.logger.info(f"Dropdown option selected by value {locator}: {value}")

    def hover(self, locator: Locator) -> None:
        element = self.wait_visible(locator)
        ActionChains(self.driver).move_to_element(element).perform()
        self.logger.info(f"Hovered over element: {locator}")

    def scroll_to(self, locator: Locator) -> None:
        element = self.wait_present(locator)
        self.driver.execute_script("arguments[0].scrollIntoView(true);", element)
        self.logger.info(f"Scrolled to element: {locator}")

    # Reads
    def get_text(self, locator: Locator) -> str:
        text = self.wait_visible(locator).text
        self.logger.debug(f"Element text retrieved from {locator}: {text}")
        return text

    def get_attribute(self, locator: Locator, name: str) -> Optional[str]:
        value = self.wait_visible(locator).get_attribute(name)
        self.logger.debug(f"Element attribute {name} retrieved from {locator}: {value}")
        return value

    def count(self, locator: Locator) -> int:
        try:
            count = len(self.driver.find_elements(*locator.as_tuple()))
        except Exception as e:
            self.logger.error(f"Failed to get element count: {locator}: {e}")
            return 0
        self.logger.debug(f"Element count for {locator}: {count}")
        return count

    def is_enabled(self, locator: Locator) -> bool:
        try:
            return self.wait_present(locator).is_enabled()
        except Exception as e:
            self.logger.error(f"Failed to check if element is enabled: {locator}: {e}")
            return False

    def is_selected(self, locator: Locator) -> bool:
        try:
            return self.wait_present(locator).is_selected()
        except Exception as e:
            self.logger.error(f"Failed to check if element is selected: {locator}: {e}")
            return False

    def is_present(self, locator: Locator) -> bool:
        try:
            return len(self.driver.find_elements(*locator.as_tuple())) > 0
        except WebDriverException:
            return False

    def is_visible(self, locator: Locator) -> bool:
        try:
            elements = self.driver.find_elements(*locator.as_tuple())
            return bool(elements) and elements[0].is_displayed()
        except WebDriverException:
            return False

    def texts(self, locator: Locator) -> List[str]:
        return [element.text for element in self.driver.find_elements(*locator.as_tuple())]

    # Rows: repeated containers (inventory items, cart items) matched by a child's text
    def _find_row(self, rows: Locator, match: Locator, text: str):
        for row in self.driver.find_elements(*rows.as_tuple()):
            matches = row.find_elements(*match.as_tuple())
            if matches and matches[0].text == text:
                return row
        return None

    def click_in_row(self, rows: Locator, match: Locator, text: str, target: Locator) -> bool:
        for attempt in range(1, self.CLICK_ATTEMPTS + 1):
            try:
                row = self._find_row(rows, match, text)
                if row is None:
                    self.logger.warning(f"No row in {rows} with text: {text}")
                    return False
                row.find_element(*target.as_tuple()).click()
                self.logger.info(f"Clicked {target} in row '{text}'")
                return True
            except TRANSIENT_CLICK_ERRORS as e:
                self.logger.warning(f"Row click attempt {attempt} failed for '{text}' ({type(e).__name__})")
                if attempt == self.CLICK_ATTEMPTS:
                    raise ClickFailedError(target, attempt) from e
                self.sleep(self.CLICK_BACKOFF)

    def text_in_row(self, rows: Locator, match: Locator, text: str, target: Locator) -> Optional[str]:
        row = self._find_row(rows, match, text)
        if row is None:
            return None
        return row.find_element(*target.as_tuple()).text

    # Navigation
    def open(self, url: str) -> None:
        self.driver.get(url)
        self.logger.info(f"Navigated to: {url}")

    def title(self) -> str:
        return self.driver.title

    def current_url(self) -> str:
        return self.driver.current_url

    def refresh(self) -> None:
        self.driver.refresh()
