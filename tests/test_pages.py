"""Page objects driven against fake pages built from registered elements."""

import pytest

from saucedemo_ui.pages import cart as cart_locators
from saucedemo_ui.pages import checkout as checkout_locators
from saucedemo_ui.pages import header as header_locators
from saucedemo_ui.pages import inventory as inventory_locators
from saucedemo_ui.pages import login as login_locators
from saucedemo_ui.pages.cart import CartPage
from saucedemo_ui.pages.checkout import CheckoutOverviewPage
from saucedemo_ui.pages.header import AppHeader
from saucedemo_ui.pages.inventory import InventoryPage, product_key
from saucedemo_ui.pages.login import INVALID_CREDENTIALS_MESSAGE, LoginPage

from conftest import FakeElement

pytestmark = pytest.mark.unit


def build_login_page(driver):
    for locator in LoginPage.signature:
        driver.add(locator, FakeElement())
    driver.add(login_locators.USERNAME_FIELD, FakeElement(attributes={'placeholder': 'Username'}))
    driver.add(login_locators.PASSWORD_FIELD, FakeElement(attributes={'placeholder': 'Password', 'type': 'password'}))


def build_inventory_page(driver, products):
    driver.add(inventory_locators.PAGE_TITLE, FakeElement('Products'))
    for locator in (inventory_locators.INVENTORY_CONTAINER, inventory_locators.SORT_DROPDOWN,
                    header_locators.MENU_BUTTON, header_locators.CART_LINK):
        driver.add(locator, FakeElement())
    rows = []
    for name, price in products:
        rows.append(FakeElement(children={
            inventory_locators.ITEM_NAMES.as_tuple(): [FakeElement(name)],
            inventory_locators.ITEM_PRICES.as_tuple(): [FakeElement(price)],
            inventory_locators.ITEM_BUTTON.as_tuple(): [FakeElement('Add to cart')],
        }))
    driver.add(inventory_locators.INVENTORY_ITEMS, *rows)
    driver.add(inventory_locators.ITEM_NAMES, *[FakeElement(name) for name, _ in products])
    driver.add(inventory_locators.ITEM_PRICES, *[FakeElement(price) for _, price in products])
    return rows


class TestBasePage:
    def test_page_url_joins_base_and_path(self, actions, config):
        assert InventoryPage(actions, config).page_url() == 'https://www.saucedemo.com/inventory.html'
        assert LoginPage(actions, config).page_url() == 'https://www.saucedemo.com'

    def test_navigate_waits_for_signature(self, actions, config, driver):
        build_login_page(driver)
        LoginPage(actions, config).navigate()
        assert driver.visited == ['https://www.saucedemo.com']

    def test_is_loaded_never_raises(self, actions, config, driver):
        page = InventoryPage(actions, config)
        assert page.is_loaded() is False

        def broken(by, value):
            raise RuntimeError('browser crashed')
        driver.find_elements = broken
        assert page.is_loaded() is False


class TestLoginPage:
    def test_loaded_when_signature_visible(self, actions, config, driver):
        build_login_page(driver)
        assert LoginPage(actions, config).is_loaded() is True

    def test_login_types_credentials_and_clicks(self, actions, config, driver):
        build_login_page(driver)
        button = driver.add(login_locators.LOGIN_BUTTON, FakeElement(attributes={'value': 'Login'}))
        page = LoginPage(actions, config)
        page.login('standard_user', 'secret_sauce')
        assert page.current_username() == 'standard_user'
        assert driver.find_element(*login_locators.PASSWORD_FIELD).get_attribute('value') == 'secret_sauce'
        assert button.clicks == 1
        assert page.login_button_text() == 'Login'
        assert page.username_placeholder() == 'Username'

    def test_empty_credentials_clear_fields(self, actions, config, driver):
        build_login_page(driver)
        username = driver.add(login_locators.USERNAME_FIELD, FakeElement(attributes={'value': 'typed'}))
        LoginPage(actions, config).login('', 'secret_sauce')
        assert username.get_attribute('value') == ''

    def test_error_message(self, actions, config, driver):
        page = LoginPage(actions, config)
        assert page.error_message() == ''
        driver.add(login_locators.ERROR_MESSAGE, FakeElement(INVALID_CREDENTIALS_MESSAGE))
        assert page.error_message() == INVALID_CREDENTIALS_MESSAGE
        assert page.validate_error_message(INVALID_CREDENTIALS_MESSAGE) is True

    def test_close_error(self, actions, config, driver):
        error = FakeElement('Epic sadface: Username is required')
        driver.add(login_locators.ERROR_MESSAGE, error)

        def hide():
            driver.remove(login_locators.ERROR_MESSAGE)
        driver.add(login_locators.ERROR_CLOSE_BUTTON, FakeElement(on_click=hide))
        page = LoginPage(actions, config)
        page.close_error()
        assert page.is_error_displayed() is False


class TestInventoryPage:
    PRODUCTS = [('Sauce Labs Backpack', '$29.99'), ('Sauce Labs Bike Light', '$9.99'), ('Sauce Labs Onesie', '$7.99')]

    def test_loaded_requires_products_title(self, actions, config, driver):
        build_inventory_page(driver, self.PRODUCTS)
        page = InventoryPage(actions, config)
        assert page.is_loaded() is True
        driver.add(inventory_locators.PAGE_TITLE, FakeElement('Your Cart'))
        assert page.is_loaded() is False

    def test_product_listing(self, actions, config, driver):
        build_inventory_page(driver, self.PRODUCTS)
        page = InventoryPage(actions, config)
        assert page.product_count() == 3
        assert page.product_names() == [name for name, _ in self.PRODUCTS]
        assert page.product_prices_as_floats() == [29.99, 9.99, 7.99]
        assert page.price_of('Sauce Labs Onesie') == '$7.99'

    def test_sort_verification_reports_first_violation(self, actions, config, driver):
        build_inventory_page(driver, self.PRODUCTS)
        page = InventoryPage(actions, config)
        assert page.verify_sorted_by_name_ascending()
        assert page.verify_sorted_by_price_descending()
        check = page.verify_sorted_by_price_ascending()
        assert not check
        assert check.index == 0

    def test_add_to_cart_by_name(self, actions, config, driver):
        rows = build_inventory_page(driver, self.PRODUCTS)
        page = InventoryPage(actions, config)
        assert page.add_to_cart_by_name('Sauce Labs Bike Light') is True
        button = rows[1].find_element(*inventory_locators.ITEM_BUTTON.as_tuple())
        assert button.clicks == 1
        assert page.add_to_cart_by_name('Sauce Labs Toaster') is False

    def test_add_and_remove_by_key(self, actions, config, driver):
        key = product_key('Sauce Labs Bike Light')
        assert key == 'sauce-labs-bike-light'
        remove = FakeElement('Remove')

        def added():
            driver.add(inventory_locators.REMOVE_FROM_CART.format(key), remove)
            driver.add(header_locators.CART_BADGE, FakeElement('1'))
        driver.add(inventory_locators.ADD_TO_CART.format(key), FakeElement(on_click=added))
        page = InventoryPage(actions, config)
        assert page.is_in_cart(key) is False
        assert page.cart_count() == 0
        page.add_to_cart(key)
        assert page.is_in_cart(key) is True
        assert page.cart_count() == 1
        page.remove_from_cart(key)
        assert remove.clicks == 1


class TestHeader:
    def test_badge_count_absent_is_zero(self, actions):
        header = AppHeader(actions)
        assert header.cart_badge_text() == ''
        assert header.cart_badge_count() == 0

    def test_badge_count_parses_text(self, actions, driver):
        driver.add(header_locators.CART_BADGE, FakeElement('3'))
        assert AppHeader(actions).cart_badge_count() == 3

    def test_logout_opens_menu_first(self, actions, driver):
        menu = driver.add(header_locators.MENU_BUTTON, FakeElement())
        logout = driver.add(header_locators.MENU_LOGOUT, FakeElement())
        AppHeader(actions).logout()
        assert (menu.clicks, logout.clicks) == (1, 1)


class TestCartPage:
    def _cart(self, driver, items):
        rows = []

        def remover(row, name_element, price_element):
            def remove():
                driver.remove(cart_locators.CART_ITEMS, row)
                driver.remove(cart_locators.ITEM_NAMES, name_element)
                driver.remove(cart_locators.ITEM_PRICES, price_element)
            return remove

        names, prices = [], []
        for name, price in items:
            name_element, price_element = FakeElement(name), FakeElement(price)
            row = FakeElement(children={cart_locators.ITEM_NAMES.as_tuple(): [name_element]})
            row.children[cart_locators.ITEM_REMOVE_BUTTON.as_tuple()] = [
                FakeElement('Remove', on_click=remover(row, name_element, price_element))]
            rows.append(row)
            names.append(name_element)
            prices.append(price_element)
        driver.elements[cart_locators.CART_ITEMS.as_tuple()] = rows
        driver.elements[cart_locators.ITEM_NAMES.as_tuple()] = names
        driver.elements[cart_locators.ITEM_PRICES.as_tuple()] = prices
        driver.add(cart_locators.ITEM_QUANTITIES, *[FakeElement('1') for _ in items])

    def test_total_price(self, actions, config, driver):
        self._cart(driver, [('Sauce Labs Bike Light', '$9.99'), ('Sauce Labs Bolt T-Shirt', '$15.99')])
        page = CartPage(actions, config)
        assert page.calculate_total_price() == pytest.approx(25.98)
        assert page.item_count() == 2
        assert page.item_quantities() == [1, 1]
        assert page.contains('Sauce Labs Bike Light')

    def test_remove_all_relocates_rows(self, actions, config, driver):
        self._cart(driver, [('a', '$1.00'), ('b', '$2.00'), ('c', '$3.00')])
        page = CartPage(actions, config)
        assert page.remove_all() == 3
        assert page.is_empty()

    def test_loaded_checks_title(self, actions, config, driver):
        for locator in CartPage.signature:
            driver.add(locator, FakeElement())
        driver.add(cart_locators.PAGE_TITLE, FakeElement('Your Cart'))
        assert CartPage(actions, config).is_loaded() is True


class TestCheckoutOverview:
    def test_amounts_from_labels(self, actions, config, driver):
        driver.add(checkout_locators.SUBTOTAL_LABEL, FakeElement('Item total: $39.98'))
        driver.add(checkout_locators.TAX_LABEL, FakeElement('Tax: $3.20'))
        driver.add(checkout_locators.TOTAL_LABEL, FakeElement('Total: $43.18'))
        page = CheckoutOverviewPage(actions, config)
        assert page.item_total() == 39.98
        assert page.tax() == 3.20
        assert page.total() == 43.18
