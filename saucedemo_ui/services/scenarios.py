# services/scenarios.py
"""Login, inventory, cart and checkout journeys run by the suite."""
from typing import List

from saucedemo_ui.models.scenario import Scenario
from saucedemo_ui.pages.inventory import (
    SORT_NAME_ASC,
    SORT_NAME_DESC,
    SORT_PRICE_ASC,
    SORT_PRICE_DESC,
    product_key,
)
from saucedemo_ui.pages.login import INVALID_CREDENTIALS_MESSAGE, PASSWORD_FIELD
from saucedemo_ui.utils import pricing

SORT_CHECKS = {
    SORT_NAME_ASC: 'verify_sorted_by_name_ascending',
    SORT_NAME_DESC: 'verify_sorted_by_name_descending',
    SORT_PRICE_ASC: 'verify_sorted_by_price_ascending',
    SORT_PRICE_DESC: 'verify_sorted_by_price_descending',
}


# Login
def login_with_valid_credentials(ctx):
    user = ctx.test_data.user('standard_user')
    ctx.hooks.log_test_data('User', user['username'])
    ctx.step("I am on the SauceDemo login page", ctx.login_page.wait_for_load)
    ctx.step("I log in as the standard user", ctx.login_page.login, user['username'], user['password'])
    ctx.step("I should be redirected to the inventory page", ctx.inventory_page.wait_for_load)
    ctx.check(ctx.inventory_page.is_loaded(), "Inventory page is loaded")
    ctx.check_equal(ctx.config.app_title, ctx.inventory_page.title(), "Page title")
    ctx.check(ctx.inventory_page.product_count() > 0, "Inventory items are displayed")


def login_with_invalid_password(ctx):
    user = ctx.test_data.invalid_user('invalid_password')
    ctx.step("I am on the SauceDemo login page", ctx.login_page.wait_for_load)
    ctx.step("I log in with an invalid password", ctx.login_page.login, user['username'], user['password'])
    ctx.check_equal(INVALID_CREDENTIALS_MESSAGE, ctx.login_page.error_message(), "Error message")
    ctx.check(not ctx.inventory_page.is_loaded(), "Inventory page is not loaded")
    ctx.check(ctx.login_page.is_loaded(), "I remain on the login page")


def login_with_rejected_users(ctx):
    for user_type in ctx.test_data.invalid_user_types():
        user = ctx.test_data.invalid_user(user_type)
        ctx.step(f"I log in as '{user_type}'", ctx.login_page.login, user['username'], user['password'])
        ctx.check_equal(user['expected_error'], ctx.login_page.error_message(), f"Error message for {user_type}")
        ctx.login_page.close_error()
        ctx.login_page.clear_credentials()


def login_page_elements(ctx):
    page = ctx.login_page
    ctx.step("I am on the SauceDemo login page", page.wait_for_load)
    ctx.check(page.verify_login_elements(), "Login page elements are displayed")
    ctx.check(page.is_username_enabled(), "Username field is enabled")
    ctx.check(page.is_password_enabled(), "Password field is enabled")
    ctx.check(page.is_login_button_enabled(), "Login button is enabled")
    ctx.check(ctx.config.standard_user in page.accepted_usernames(), "Accepted usernames are displayed")
    ctx.check(ctx.config.password in page.password_info(), "Password information is displayed")
    ctx.check_equal('password', ctx.actions.get_attribute(PASSWORD_FIELD, 'type'), "Password field masks input")


def dismiss_login_error(ctx):
    page = ctx.login_page
    ctx.step("I try to log in without credentials", page.login, '', '')
    ctx.check(page.is_error_displayed(), "Error message is displayed")
    ctx.step("I click the error close button", page.close_error)
    ctx.check(not page.is_error_displayed(), "Error message is dismissed")


def logout_from_menu(ctx):
    ctx.step("I log out from the menu", ctx.header.logout)
    ctx.step("I am back on the login page", ctx.login_page.wait_for_load)
    ctx.check(ctx.login_page.is_loaded(), "Login page is loaded after logout")


# Inventory
def sort_products(ctx):
    page = ctx.inventory_page
    for option in ctx.test_data.sorting_options():
        ctx.step(f"I sort products by '{option['text']}'", page.sort_by, option['value'])
        result = getattr(page, SORT_CHECKS[option['value']])()
        ctx.check(result, f"Products sorted by {option['text']}"
                          + ('' if result else f" (first violation at index {result.index})"))
        expected = ctx.test_data.expected_sorted_products(option['value'])
        if expected:
            ctx.check_equal(expected, page.product_names(), f"Product order for {option['text']}")


def inventory_matches_catalog(ctx):
    page = ctx.inventory_page
    products = ctx.test_data.products()
    ctx.check_equal(len(products), page.product_count(), "Product count")
    for product in products:
        ctx.check_equal(product['price'], page.price_of(product['name']), f"Price of {product['name']}")


def open_product_details(ctx):
    product = ctx.test_data.products()[0]
    ctx.step(f"I open '{product['name']}'", ctx.inventory_page.open_product, product_key(product['name']))
    ctx.hooks.capture_step_screenshot('product_details')
    ctx.step("I go back to products", ctx.inventory_page.back_to_products)
    ctx.check(ctx.inventory_page.is_loaded(), "Inventory page is loaded again")


# Cart
def add_products_to_cart(ctx):
    flow = ctx.test_data.checkout_flow()
    items = flow['items']
    for name in items:
        ctx.step(f"I add '{name}' to the cart", ctx.inventory_page.add_to_cart_by_name, name)
    ctx.check_equal(len(items), ctx.inventory_page.cart_count(), "Cart badge count")
    ctx.step("I open the cart", ctx.inventory_page.open_cart)
    ctx.cart_page.wait_for_load()
    ctx.check_equal(sorted(items), sorted(ctx.cart_page.item_names()), "Cart items")
    expected_total = pricing.total_price(ctx.test_data.product(name)['price'] for name in items)
    ctx.check(abs(ctx.cart_page.calculate_total_price() - expected_total) < 0.001,
              f"Cart total equals {expected_total}")


def remove_products_from_cart(ctx):
    for product in ctx.test_data.products()[:2]:
        ctx.inventory_page.add_to_cart(product_key(product['name']))
    ctx.step("I open the cart", ctx.inventory_page.open_cart)
    ctx.cart_page.wait_for_load()
    ctx.check_equal(2, ctx.cart_page.item_count(), "Cart item count")
    ctx.step("I remove every item", ctx.cart_page.remove_all)
    ctx.check(ctx.cart_page.is_empty(), "Cart is empty")
    ctx.check(not ctx.cart_page.header.is_cart_badge_visible(), "Cart badge is hidden")


# Checkout
def complete_checkout(ctx):
    flow = ctx.test_data.checkout_flow()
    customer = ctx.test_data.valid_checkout_data()[0]
    ctx.hooks.log_test_data('Customer', customer)
    for name in flow['items']:
        ctx.inventory_page.add_to_cart_by_name(name)
    ctx.step("I open the cart", ctx.inventory_page.open_cart)
    ctx.cart_page.wait_for_load()
    ctx.step("I proceed to checkout", ctx.cart_page.checkout)
    info = ctx.checkout_information_page
    info.wait_for_load()
    ctx.step("I enter my information", info.fill,
             customer['first_name'], customer['last_name'], customer['postal_code'])
    info.continue_checkout()
    overview = ctx.checkout_overview_page
    overview.wait_for_load()
    item_total = pricing.total_price(ctx.test_data.product(name)['price'] for name in flow['items'])
    ctx.check(abs(overview.item_total() - item_total) < 0.001, f"Item total equals {item_total}")
    ctx.check(abs(overview.total() - round(overview.item_total() + overview.tax(), 2)) < 0.001,
              "Total equals item total plus tax")
    ctx.step("I finish the order", overview.finish)
    complete = ctx.checkout_complete_page
    complete.wait_for_load()
    ctx.check_equal(flow['expected_complete_header'], complete.header_text(), "Order confirmation header")


def checkout_with_missing_information(ctx):
    ctx.inventory_page.add_to_cart_by_name(ctx.test_data.products()[0]['name'])
    ctx.inventory_page.open_cart()
    ctx.cart_page.wait_for_load()
    ctx.cart_page.checkout()
    info = ctx.checkout_information_page
    info.wait_for_load()
    for case in ctx.test_data.invalid_checkout_data():
        ctx.step(f"I submit checkout information: {case['description']}", info.fill,
                 case['first_name'], case['last_name'], case['postal_code'])
        info.continue_checkout()
        ctx.check_equal(case['expected_error'], info.error_message(), f"Error for {case['description']}")


def build_catalog() -> List[Scenario]:
    return [
        Scenario('Successful login with valid credentials', login_with_valid_credentials,
                 'Standard user reaches the inventory page', ('login', 'smoke', 'positive'), 'Login'),
        Scenario('Login fails with invalid password', login_with_invalid_password,
                 'Invalid password shows the credentials error', ('login', 'negative'), 'Login'),
        Scenario('Login is rejected for invalid users', login_with_rejected_users,
                 'Locked out, unknown and empty credentials show their error', ('login', 'negative'), 'Login'),
        Scenario('Login page elements are displayed', login_page_elements,
                 'Logo, fields, button and credential hints are present', ('login', 'ui'), 'Login'),
        Scenario('Login error can be dismissed', dismiss_login_error,
                 'Closing the error hides it', ('login', 'negative'), 'Login'),
        Scenario('User can log out', logout_from_menu,
                 'Logout from the burger menu returns to login', ('inventory', 'smoke'), 'Login'),
        Scenario('Products can be sorted', sort_products,
                 'Every sort option orders the product list', ('inventory', 'sorting'), 'Inventory'),
        Scenario('Inventory matches product catalog', inventory_matches_catalog,
                 'Listed products and prices match the fixtures', ('inventory',), 'Inventory'),
        Scenario('Product details can be opened', open_product_details,
                 'Product page opens and returns to inventory', ('inventory',), 'Inventory'),
        Scenario('Products can be added to the cart', add_products_to_cart,
                 'Badge, cart contents and total reflect added products', ('cart', 'smoke', 'cleanup_cart'), 'Cart'),
        Scenario('Products can be removed from the cart', remove_products_from_cart,
                 'Removing every row empties the cart', ('cart', 'cleanup_cart'), 'Cart'),
        Scenario('Checkout can be completed', complete_checkout,
                 'Order totals are consistent and the order completes', ('checkout', 'smoke', 'reset_app_state'),
                 'Checkout'),
        Scenario('Checkout requires customer information', checkout_with_missing_information,
                 'Missing fields show the matching error', ('checkout', 'negative', 'reset_app_state'), 'Checkout'),
    ]
