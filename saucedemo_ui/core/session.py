# core/session.py
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Hashable, Optional
from urllib.parse import urlparse

import requests
from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.safari.options import Options as SafariOptions

from saucedemo_ui.core.errors import (
    InvalidGridUrlError,
    SessionNotInitializedError,
    UnsupportedBrowserError,
)


class BrowserKind(str, Enum):
    CHROME = 'chrome'
    FIREFOX = 'firefox'
    EDGE = 'edge'
    SAFARI = 'safari'

    @classmethod
    def parse(cls, name) -> 'BrowserKind':
        if isinstance(name, cls):
            return name
        try:
            return cls((name or '').strip().lower())
        except ValueError:
            raise UnsupportedBrowserError(name) from None


class SessionState(str, Enum):
    UNINITIALIZED = 'uninitialized'
    ACTIVE = 'active'
    CLOSED = 'closed'


# Safari has no documented grid path in this suite
REMOTE_BROWSERS = (BrowserKind.CHROME, BrowserKind.FIREFOX, BrowserKind.EDGE)


@dataclass
class Session:
    driver: object
    kind: BrowserKind
    remote: bool
    headless: bool
    implicit_wait: int
    explicit_wait: int
    page_load_timeout: int
    worker_id: Hashable
    created_at: datetime = field(default_factory=datetime.now)


def create_driver(kind: BrowserKind, options, remote_url: Optional[str] = None):
    if remote_url:
        return webdriver.Remote(command_executor=remote_url, options=options)
    if kind is BrowserKind.CHROME:
        return webdriver.Chrome(options=options)
    if kind is BrowserKind.FIREFOX:
        return webdriver.Firefox(options=options)
    if kind is BrowserKind.EDGE:
        return webdriver.Edge(options=options)
    return webdriver.Safari(options=options)


def validate_grid_url(url: Optional[str]) -> str:
    parsed = urlparse(url or '')
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise InvalidGridUrlError(url)
    return url


class SessionRegistry:
    """One browser session per worker.

    Sessions are keyed by worker id (the calling thread's ident unless a
    different `worker_id` callable is supplied). A worker only ever sees its
    own entry; the lock guards the mapping, never the drivers themselves.
    """

    def __init__(self, config, driver_factory: Callable = create_driver,
                 worker_id: Callable[[], Hashable] = threading.get_ident):
        self.config = config
        self.driver_factory = driver_factory
        self.worker_id = worker_id
        self.logger = logging.getLogger(__name__)
        self._sessions: Dict[Hashable, Session] = {}
        self._states: Dict[Hashable, SessionState] = {}
        self._lock = threading.Lock()

    def initialize(self, browser=None):
        worker = self.worker_id()
        if self.is_initialized():
            self.logger.warning(f"Worker {worker} already owns a session, quitting it before re-initializing")
            self.quit()
        kind = BrowserKind.parse(browser or self.config.browser)
        remote = self.config.grid_enabled
        self.logger.info(f"Initializing {kind.value} driver ({'grid' if remote else 'local'}) for worker {worker}")
        implicit_wait = self.config.implicit_wait
        page_load_timeout = self.config.page_load_timeout
        explicit_wait = self.config.explicit_wait
        options = self.build_options(kind)
        if remote:
            driver = self._create_remote_driver(kind, options)
        else:
            driver = self.driver_factory(kind, options, None)
        try:
            driver.implicitly_wait(implicit_wait)
            driver.set_page_load_timeout(page_load_timeout)
            driver.maximize_window()
        except Exception as e:
            self.logger.error(f"Error configuring {kind.value} driver, quitting it: {e}")
            driver.quit()
            raise
        session = Session(
            driver=driver,
            kind=kind,
            remote=remote,
            headless=self.config.headless,
            implicit_wait=implicit_wait,
            explicit_wait=explicit_wait,
            page_load_timeout=page_load_timeout,
            worker_id=worker,
        )
        with self._lock:
            self._sessions[worker] = session
            self._states[worker] = SessionState.ACTIVE
        self.logger.info(f"{kind.value} driver initialized successfully for worker {worker}")
        return driver

    def _create_remote_driver(self, kind: BrowserKind, options):
        hub_url = validate_grid_url(self.config.grid_hub_url)
        if kind not in REMOTE_BROWSERS:
            self.logger.error(f"Unsupported browser for grid execution: {kind.value}")
            raise UnsupportedBrowserError(kind.value, remote=True)
        self.probe_grid(hub_url)
        return self.driver_factory(kind, options, hub_url)

    def probe_grid(self, hub_url: str) -> bool:
        status_url = hub_url.rstrip('/') + '/status'
        try:
            response = requests.get(status_url, timeout=5)
            ready = bool(response.json().get('value', {}).get('ready'))
        except (requests.RequestException, ValueError) as e:
            self.logger.warning(f"Grid status probe failed for {status_url}: {e}")
            return False
        if ready:
            self.logger.info(f"Grid hub ready: {hub_url}")
        else:
            self.logger.warning(f"Grid hub reports not ready: {hub_url}")
        return ready

    def build_options(self, kind: BrowserKind):
        headless = self.config.headless
        if kind is BrowserKind.CHROME:
            options = ChromeOptions()
            self._add_chromium_arguments(options, headless)
            options.add_argument("--disable-extensions")
            options.add_argument("--disable-infobars")
            options.add_argument("--disable-notifications")
            options.add_argument("--disable-popup-blocking")
            options.add_experimental_option('prefs', {
                'profile.default_content_setting_values.notifications': 2,
                'profile.default_content_settings.popups': 0,
                'profile.managed_default_content_settings.images': 2,
            })
            if self.config.mobile_enabled and self.config.device_name:
                options.add_experimental_option('mobileEmulation', {'deviceName': self.config.device_name})
            return options
        if kind is BrowserKind.EDGE:
            options = EdgeOptions()
            self._add_chromium_arguments(options, headless)
            return options
        if kind is BrowserKind.FIREFOX:
            options = FirefoxOptions()
            if headless:
                options.add_argument("-headless")
            options.set_preference('dom.webnotifications.enabled', False)
            options.set_preference('dom.disable_open_during_load', True)
            options.set_preference('permissions.default.image', 2)
            return options
        if headless:
            self.logger.warning("Safari does not support headless mode, starting a visible window")
        return SafariOptions()

    def _add_chromium_arguments(self, options, headless: bool) -> None:
        if headless:
            options.add_argument("--headless=new")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-gpu")
        options.add_argument("--remote-allow-origins=*")

    def session(self) -> Session:
        worker = self.worker_id()
        with self._lock:
            session = self._sessions.get(worker)
        if session is None:
            self.logger.error(f"WebDriver not initialized for worker {worker}")
            raise SessionNotInitializedError(worker)
        return session

    def get(self):
        return self.session().driver

    def state(self) -> SessionState:
        with self._lock:
            return self._states.get(self.worker_id(), SessionState.UNINITIALIZED)

    def is_initialized(self) -> bool:
        with self._lock:
            return self.worker_id() in self._sessions

    def quit(self) -> None:
        worker = self.worker_id()
        with self._lock:
            session = self._sessions.get(worker)
        if session is None:
            return
        try:
            session.driver.quit()
            self.logger.info(f"WebDriver quit successfully for worker {worker}")
        except Exception as e:
            self.logger.error(f"Error while quitting WebDriver for worker {worker}: {e}")
        finally:
            with self._lock:
                self._sessions.pop(worker, None)
                self._states[worker] = SessionState.CLOSED

    def close(self) -> None:
        """Close the current window; the session entry stays registered."""
        with self._lock:
            session = self._sessions.get(self.worker_id())
        if session is None:
            return
        try:
            session.driver.close()
            self.logger.info("WebDriver window closed successfully")
        except Exception as e:
            self.logger.error(f"Error while closing WebDriver window: {e}")

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def current_browser(self) -> str:
        return self.get().capabilities.get('browserName', '')

    def refresh(self) -> None:
        self.get().refresh()
        self.logger.info("Page refreshed")

    def back(self) -> None:
        self.get().back()
        self.logger.info("Navigated back")

    def forward(self) -> None:
        self.get().forward()
        self.logger.info("Navigated forward")
