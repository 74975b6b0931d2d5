# core/errors.py


class SuiteError(Exception):
    pass


class ConfigError(SuiteError):
    pass


class ConfigLoadError(ConfigError):
    def __init__(self, path, reason=''):
        self.path = str(path)
        super().__init__(f"Could not load configuration properties from {self.path}: {reason}")


class ConfigParseError(ConfigError):
    def __init__(self, key, value):
        self.key = key
        self.value = value
        super().__init__(f"Invalid integer property: {key} = {value!r}")


class SessionError(SuiteError):
    pass


class SessionNotInitializedError(SessionError):
    def __init__(self, worker_id=None):
        self.worker_id = worker_id
        super().__init__(f"Browser session not initialized for worker {worker_id}. Call initialize() first.")


class UnsupportedBrowserError(SessionError):
    def __init__(self, browser, remote: bool = False):
        self.browser = browser
        self.remote = remote
        where = 'grid execution' if remote else 'local execution'
        super().__init__(f"Unsupported browser for {where}: {browser}")


class InvalidGridUrlError(SessionError):
    def __init__(self, url):
        self.url = url
        super().__init__(f"Invalid Grid Hub URL: {url!r}")


class ElementInteractionError(SuiteError):
    """Base for failures acting on a located element."""

    action = 'interact with'

    def __init__(self, locator, message: str = ''):
        self.locator = locator
        super().__init__(message or f"Failed to {self.action} element: {locator}")


class ElementTimeoutError(ElementInteractionError):
    def __init__(self, locator, condition: str = 'visible', timeout=None):
        self.condition = condition
        self.timeout = timeout
        super().__init__(locator, f"Element not {condition} within {timeout}s: {locator}")


class ClickFailedError(ElementInteractionError):
    action = 'click'

    def __init__(self, locator, attempts: int):
        self.attempts = attempts
        super().__init__(locator, f"Failed to click element after {attempts} attempts: {locator}")


class ScriptClickError(ElementInteractionError):
    action = 'click (script)'


class TypeTextError(ElementInteractionError):
    action = 'type text into'


class TestDataNotFoundError(SuiteError):
    __test__ = False

    def __init__(self, source, key):
        self.source = source
        self.key = key
        super().__init__(f"Test data not found: {key} (in {source})")


class ScenarioSkipped(SuiteError):
    """Raised from a scenario body to mark it skipped rather than failed."""
