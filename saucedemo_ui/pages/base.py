# pages/base.py
import logging
from typing import Iterable

from saucedemo_ui.models.locator import Locator


class Page:
    """Load contract shared by every screen.

    `wait_for_load` blocks until the signature elements are visible,
    `is_loaded` is a non-blocking snapshot that never raises, and `page_url`
    is the navigation target under the configured base URL.
    """

    path = ''
    signature: Iterable[Locator] = ()

    def __init__(self, actions, config):
        self.actions = actions
        self.config = config
        self.logger = logging.getLogger(type(self).__module__)

    def page_url(self) -> str:
        return self.config.app_url + self.path

    def wait_for_load(self) -> None:
        for locator in self.signature:
            self.actions.wait_visible(locator)
        self.logger.info(f"{type(self).__name__} loaded successfully")

    def is_loaded(self) -> bool:
        try:
            return all(self.actions.is_visible(locator) for locator in self.signature) and self._loaded_extra()
        except Exception as e:
            self.logger.error(f"Error checking if {type(self).__name__} is loaded: {e}")
            return False

    def _loaded_extra(self) -> bool:
        return True

    def navigate(self) -> None:
        url = self.page_url()
        self.actions.open(url)
        self.wait_for_load()

    def title(self) -> str:
        return self.actions.title()

    def current_url(self) -> str:
        return self.actions.current_url()

    def verify_elements(self, locators: Iterable[Locator]) -> bool:
        present = all(self.actions.is_present(locator) for locator in locators)
        self.logger.info(f"{type(self).__name__} elements verification: {present}")
        return present
