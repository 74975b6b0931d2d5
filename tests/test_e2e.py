"""Live-browser journeys against the configured application.

Opt-in: E2E=1 pytest -m e2e
"""

import os

import pytest

from saucedemo_ui.config.settings import Config
from saucedemo_ui.core.element_actions import ElementActions
from saucedemo_ui.core.session import SessionRegistry
from saucedemo_ui.pages.inventory import InventoryPage
from saucedemo_ui.pages.login import INVALID_CREDENTIALS_MESSAGE, LoginPage

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.skipif(os.getenv('E2E') != '1', reason="set E2E=1 to run live browser journeys"),
]


@pytest.fixture
def live(project_root):
    config = Config(project_root / 'resources' / 'config' / 'config.properties')
    registry = SessionRegistry(config)
    registry.initialize()
    actions = ElementActions(registry, config)
    login = LoginPage(actions, config)
    login.navigate()
    yield config, login, InventoryPage(actions, config)
    registry.quit()


def test_valid_login_reaches_inventory(live):
    config, login, inventory = live
    login.login(config.standard_user, config.password)
    inventory.wait_for_load()
    assert inventory.is_loaded() is True


def test_invalid_password_shows_error(live):
    config, login, inventory = live
    login.login(config.standard_user, 'wrong_password')
    assert login.error_message() == INVALID_CREDENTIALS_MESSAGE
    assert inventory.is_loaded() is False
