# models/locator.py
from dataclasses import dataclass
from typing import Tuple

from selenium.webdriver.common.by import By


@dataclass(frozen=True)
class Locator:
    by: str
    value: str
    name: str = ''

    @classmethod
    def id(cls, value: str, name: str = '') -> 'Locator':
        return cls(By.ID, value, name)

    @classmethod
    def class_name(cls, value: str, name: str = '') -> 'Locator':
        return cls(By.CLASS_NAME, value, name)

    @classmethod
    def css(cls, value: str, name: str = '') -> 'Locator':
        return cls(By.CSS_SELECTOR, value, name)

    @classmethod
    def xpath(cls, value: str, name: str = '') -> 'Locator':
        return cls(By.XPATH, value, name)

    def format(self, *args) -> 'Locator':
        """Substitute call-time parameters into a template value, e.g. a product key."""
        return Locator(self.by, self.value % args, self.name)

    def as_tuple(self) -> Tuple[str, str]:
        return (self.by, self.value)

    def __iter__(self):
        # lets a Locator be splatted into driver.find_element(*locator)
        return iter(self.as_tuple())

    def __str__(self) -> str:
        label = f"{self.name} " if self.name else ''
        return f"{label}[{self.by}={self.value}]"
