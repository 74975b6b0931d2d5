import pytest
from selenium.common.exceptions import NoSuchElementException

from saucedemo_ui.config.settings import Config
from saucedemo_ui.core.element_actions import ElementActions
from saucedemo_ui.core.session import SessionRegistry

PROPERTIES = """\
app.url=https://www.saucedemo.com/
app.title=Swag Labs
browser=chrome
headless=true
implicit.wait=0
explicit.wait=1
page.load.timeout=30
standard.user=standard_user
password=secret_sauce
environment=TEST
test.data.path={root}/resources/testdata
screenshot.path={tmp}/screenshots
reports.path={tmp}/reports
retry.count=2
thread.count=2
grid.enabled=false
grid.hub.url=http://localhost:4444/wd/hub
"""


class FakeElement:
    """Stands in for a WebElement: text, visibility, attributes and child elements."""

    def __init__(self, text='', displayed=True, enabled=True, selected=False, attributes=None,
                 children=None, click_errors=None, on_click=None, tag_name='div'):
        self.text = text
        self.displayed = displayed
        self.enabled = enabled
        self.selected = selected
        self.attributes = dict(attributes or {})
        self.children = dict(children or {})
        self.click_errors = list(click_errors or [])
        self.on_click = on_click
        self.tag_name = tag_name
        self.value = self.attributes.get('value', '')
        self.clicks = 0
        self.cleared = 0
        self.screenshot_as_png = b'\x89PNG element'

    def is_displayed(self):
        return self.displayed

    def is_enabled(self):
        return self.enabled

    def is_selected(self):
        return self.selected

    def click(self):
        if self.click_errors:
            raise self.click_errors.pop(0)
        self.clicks += 1
        if self.on_click is not None:
            self.on_click()

    def clear(self):
        self.value = ''
        self.cleared += 1

    def send_keys(self, text):
        self.value += text

    def get_attribute(self, name):
        if name == 'value':
            return self.value
        return self.attributes.get(name)

    def find_element(self, by, value):
        found = self.children.get((by, value))
        if not found:
            raise NoSuchElementException(f"{by}={value}")
        return found[0]

    def find_elements(self, by, value):
        return list(self.children.get((by, value), []))


class FakeDriver:
    """In-memory WebDriver: elements are registered per locator."""

    def __init__(self, kind=None, options=None, remote_url=None):
        self.kind = kind
        self.options = options
        self.remote_url = remote_url
        self.elements = {}
        self.title = ''
        self.current_url = ''
        self.visited = []
        self.scripts = []
        self.implicit_wait = None
        self.page_load_timeout = None
        self.maximized = False
        self.quit_calls = 0
        self.close_calls = 0
        self.quit_error = None
        self.screenshot_error = None
        self.capabilities = {'browserName': getattr(kind, 'value', 'chrome')}

    def add(self, locator, *elements):
        self.elements[locator.as_tuple()] = list(elements)
        return elements[0] if len(elements) == 1 else list(elements)

    def remove(self, locator, element=None):
        if element is None:
            self.elements.pop(locator.as_tuple(), None)
        else:
            self.elements[locator.as_tuple()].remove(element)

    def find_element(self, by, value):
        found = self.elements.get((by, value))
        if not found:
            raise NoSuchElementException(f"{by}={value}")
        return found[0]

    def find_elements(self, by, value):
        return list(self.elements.get((by, value), []))

    def get(self, url):
        self.current_url = url
        self.visited.append(url)

    def implicitly_wait(self, seconds):
        self.implicit_wait = seconds

    def set_page_load_timeout(self, seconds):
        self.page_load_timeout = seconds

    def maximize_window(self):
        self.maximized = True

    def execute_script(self, script, *args):
        self.scripts.append((script, args))

    def get_screenshot_as_png(self):
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return b'\x89PNG page'

    def get_screenshot_as_base64(self):
        return 'iVBORw0KGgo='

    def refresh(self):
        pass

    def back(self):
        pass

    def forward(self):
        pass

    def close(self):
        self.close_calls += 1

    def quit(self):
        self.quit_calls += 1
        if self.quit_error is not None:
            raise self.quit_error


class FakeDriverFactory:
    def __init__(self, setup=None):
        self.created = []
        self.setup = setup

    def __call__(self, kind, options, remote_url=None):
        driver = FakeDriver(kind, options, remote_url)
        if self.setup is not None:
            self.setup(driver)
        self.created.append(driver)
        return driver


@pytest.fixture
def project_root(request):
    return request.config.rootpath


@pytest.fixture
def config_file(tmp_path, project_root):
    path = tmp_path / 'config.properties'
    path.write_text(PROPERTIES.format(root=project_root.as_posix(), tmp=tmp_path.as_posix()), encoding='utf-8')
    return path


@pytest.fixture
def config(config_file):
    return Config(config_file, environ={})


@pytest.fixture
def driver_factory():
    return FakeDriverFactory()


@pytest.fixture
def registry(config, driver_factory):
    return SessionRegistry(config, driver_factory=driver_factory)


@pytest.fixture
def driver(registry):
    driver = registry.initialize()
    yield driver
    registry.quit()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def actions(registry, driver, config, sleeps):
    return ElementActions(registry, config, sleep=sleeps.append, poll_frequency=0.05)
