# config/settings.py
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from saucedemo_ui.core.errors import ConfigLoadError, ConfigParseError

DEFAULT_CONFIG_FILE = 'resources/config/config.properties'


def parse_properties(text: str) -> Dict[str, str]:
    """Parse `key=value` / `key: value` lines; `#` and `!` start comments."""
    properties = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in '#!':
            continue
        separators = [i for i in (line.find('='), line.find(':')) if i != -1]
        if not separators:
            properties[line] = ''
            continue
        cut = min(separators)
        properties[line[:cut].strip()] = line[cut + 1:].strip()
    return properties


def env_name(key: str) -> str:
    return key.upper().replace('.', '_')


class Config:
    """Key/value settings loaded from a properties file.

    Environment variables named after the upper-cased key (dots become
    underscores) take precedence over the file, so `BROWSER=firefox`
    overrides `browser=chrome`.
    """

    def __init__(self, path=None, environ: Optional[Mapping[str, str]] = None):
        self.path = Path(path or os.getenv('CONFIG_FILE', DEFAULT_CONFIG_FILE))
        self.environ = os.environ if environ is None else environ
        self.logger = logging.getLogger(__name__)
        self._properties: Mapping[str, str] = MappingProxyType({})
        self._load()

    @classmethod
    def load(cls, path=None, environ=None) -> 'Config':
        return cls(path, environ)

    def _load(self) -> None:
        try:
            text = self.path.read_text(encoding='utf-8')
        except OSError as e:
            self.logger.error(f"Failed to load configuration properties from: {self.path}: {e}")
            raise ConfigLoadError(self.path, str(e)) from e
        properties = parse_properties(text)
        for key in list(properties):
            override = self.environ.get(env_name(key))
            if override is not None:
                properties[key] = override
        # single reference swap, readers never see a half-built mapping
        self._properties = MappingProxyType(properties)
        self.logger.info(f"Configuration properties loaded successfully from: {self.path}")

    def reload(self) -> None:
        self._load()
        self.logger.info("Configuration properties reloaded")

    def as_dict(self) -> Dict[str, str]:
        return dict(self._properties)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.environ.get(env_name(key)) if key not in self._properties else self._properties[key]
        if value is None:
            if default is None:
                self.logger.warning(f"Property not found for key: {key}")
            return default
        return value

    def get_int(self, key: str) -> int:
        value = self.get(key)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Invalid integer value for key: {key} = {value}")
            raise ConfigParseError(key, value) from e

    def get_bool(self, key: str) -> bool:
        return self.get(key, '').strip().lower() == 'true'

    # Application
    @property
    def app_url(self) -> str:
        return (self.get('app.url') or '').rstrip('/')

    @property
    def app_title(self) -> Optional[str]:
        return self.get('app.title', 'Swag Labs')

    @property
    def browser(self) -> str:
        return self.get('browser', 'chrome')

    @property
    def headless(self) -> bool:
        return self.get_bool('headless')

    @property
    def environment(self) -> Optional[str]:
        return self.get('environment', 'QA')

    # Timeouts, in seconds
    @property
    def implicit_wait(self) -> int:
        return self.get_int('implicit.wait')

    @property
    def explicit_wait(self) -> int:
        return self.get_int('explicit.wait')

    @property
    def page_load_timeout(self) -> int:
        return self.get_int('page.load.timeout')

    # Paths
    @property
    def test_data_path(self) -> str:
        return self.get('test.data.path', 'resources/testdata')

    @property
    def screenshot_path(self) -> str:
        return self.get('screenshot.path', 'target/screenshots')

    @property
    def reports_path(self) -> str:
        return self.get('reports.path', 'target/reports')

    @property
    def screenshot_retention_days(self) -> int:
        if self.get('screenshot.retention.days', '') == '':
            return 7
        return self.get_int('screenshot.retention.days')

    # Reporting
    @property
    def report_name(self) -> str:
        return self.get('extent.report.name', 'SauceDemo UI Test Report')

    @property
    def report_title(self) -> str:
        return self.get('extent.report.title', 'SauceDemo Automation')

    @property
    def report_theme(self) -> str:
        return self.get('extent.report.theme', 'standard')

    # Execution
    @property
    def retry_count(self) -> int:
        return self.get_int('retry.count')

    @property
    def retry_policy_scope(self) -> str:
        return self.get('retry.policy.scope', 'per_test').lower()

    @property
    def thread_count(self) -> int:
        return self.get_int('thread.count')

    @property
    def parallel_mode(self) -> Optional[str]:
        return self.get('parallel.mode', 'scenarios')

    # Users
    @property
    def standard_user(self) -> Optional[str]:
        return self.get('standard.user')

    @property
    def locked_user(self) -> Optional[str]:
        return self.get('locked.user')

    @property
    def problem_user(self) -> Optional[str]:
        return self.get('problem.user')

    @property
    def performance_user(self) -> Optional[str]:
        return self.get('performance.user')

    @property
    def error_user(self) -> Optional[str]:
        return self.get('error.user')

    @property
    def visual_user(self) -> Optional[str]:
        return self.get('visual.user')

    @property
    def password(self) -> Optional[str]:
        return self.get('password')

    # Grid
    @property
    def grid_enabled(self) -> bool:
        return self.get_bool('grid.enabled')

    @property
    def grid_hub_url(self) -> Optional[str]:
        return self.get('grid.hub.url')

    # Mobile emulation
    @property
    def mobile_enabled(self) -> bool:
        return self.get_bool('mobile.enabled')

    @property
    def device_name(self) -> Optional[str]:
        return self.get('device.name')

    @property
    def platform_name(self) -> Optional[str]:
        return self.get('platform.name')

    @property
    def platform_version(self) -> Optional[str]:
        return self.get('platform.version')
