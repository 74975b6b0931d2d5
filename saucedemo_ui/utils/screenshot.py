# utils/screenshot.py
import logging
import re
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

TIMESTAMP_FORMAT = '%Y-%m-%d_%H-%M-%S'

SUCCESS = 'SUCCESS'
FAILED = 'FAILED'
SKIPPED = 'SKIPPED'
STEP = 'STEP'
ELEMENT = 'ELEMENT'

logger = logging.getLogger(__name__)


def safe_name(name: str) -> str:
    return re.sub(r'[\s/\\:]+', '_', name.strip())


def screenshot_file_name(base_name: str, now: Optional[datetime] = None) -> str:
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return f"{safe_name(base_name)}_{timestamp}.png"


class Screenshots:
    def __init__(self, directory):
        self.directory = Path(directory)

    @classmethod
    def from_config(cls, config) -> 'Screenshots':
        return cls(config.screenshot_path)

    def ensure_directory(self) -> bool:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create screenshot directory: {self.directory}: {e}")
            return False
        return True

    def _write(self, png: bytes, base_name: str) -> Optional[str]:
        path = self.directory / screenshot_file_name(base_name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(png)
        except OSError as e:
            logger.error(f"Failed to save screenshot {base_name}: {e}")
            return None
        logger.info(f"Screenshot captured: {path}")
        return str(path)

    def capture(self, driver, name: str) -> Optional[str]:
        return self._write(driver.get_screenshot_as_png(), name)

    def capture_failure(self, driver, name: str) -> Optional[str]:
        return self.capture(driver, f"{FAILED}_{name}")

    def capture_success(self, driver, name: str) -> Optional[str]:
        return self.capture(driver, f"{SUCCESS}_{name}")

    def capture_skipped(self, driver, name: str) -> Optional[str]:
        return self.capture(driver, f"{SKIPPED}_{name}")

    def capture_step(self, driver, step_name: str) -> Optional[str]:
        return self.capture(driver, f"{STEP}_{step_name}")

    def capture_element(self, element, name: str) -> Optional[str]:
        return self._write(element.screenshot_as_png, f"{ELEMENT}_{name}")

    def capture_base64(self, driver) -> Optional[str]:
        try:
            return driver.get_screenshot_as_base64()
        except Exception as e:
            logger.error(f"Failed to capture screenshot as base64: {e}")
            return None

    def exists(self, file_name: str) -> bool:
        return (self.directory / file_name).exists()

    def delete_older_than(self, days: int, now: Optional[float] = None) -> int:
        if not self.directory.exists():
            return 0
        cutoff = (now or time.time()) - days * 24 * 60 * 60
        deleted = 0
        for path in self.directory.iterdir():
            try:
                if path.is_file() and path.stat().st_mtime < cutoff:
                    path.unlink()
                    deleted += 1
            except OSError as e:
                logger.warning(f"Could not delete old screenshot {path}: {e}")
        logger.info(f"Deleted {deleted} old screenshots older than {days} days")
        return deleted
