# pages/inventory.py
from typing import List, Optional

from saucedemo_ui.models.locator import Locator
from saucedemo_ui.pages.base import Page
from saucedemo_ui.pages.header import AppHeader, CART_BADGE, CART_LINK, MENU_BUTTON
from saucedemo_ui.utils import pricing

PAGE_TITLE = Locator.class_name('title', 'page title')
INVENTORY_CONTAINER = Locator.id('inventory_container', 'inventory container')
SORT_DROPDOWN = Locator.class_name('product_sort_container', 'sort dropdown')
ACTIVE_SORT_OPTION = Locator.class_name('active_option', 'active sort option')
INVENTORY_ITEMS = Locator.class_name('inventory_item', 'inventory items')
ITEM_NAMES = Locator.class_name('inventory_item_name', 'item names')
ITEM_PRICES = Locator.class_name('inventory_item_price', 'item prices')
ITEM_DESCRIPTIONS = Locator.class_name('inventory_item_desc', 'item descriptions')
ITEM_BUTTON = Locator.css('button.btn_inventory', 'item button')

ADD_TO_CART = Locator.css("[data-test='add-to-cart-%s']", 'add to cart button')
REMOVE_FROM_CART = Locator.css("[data-test='remove-%s']", 'remove button')
ITEM_TITLE_LINK = Locator.css("[data-test='item-%s-title-link']", 'item title link')
ITEM_IMAGE_LINK = Locator.css("[data-test='item-%s-img-link']", 'item image link')
BACK_TO_PRODUCTS = Locator.id('back-to-products', 'back to products button')

SORT_NAME_ASC = 'az'
SORT_NAME_DESC = 'za'
SORT_PRICE_ASC = 'lohi'
SORT_PRICE_DESC = 'hilo'


def product_key(name: str) -> str:
    """'Sauce Labs Bike Light' -> 'sauce-labs-bike-light', the data-test suffix."""
    return '-'.join(name.lower().split())


class InventoryPage(Page):
    path = '/inventory.html'
    signature = (PAGE_TITLE, INVENTORY_CONTAINER, SORT_DROPDOWN, MENU_BUTTON, CART_LINK)

    def __init__(self, actions, config):
        super().__init__(actions, config)
        self.header = AppHeader(actions)

    def _loaded_extra(self) -> bool:
        return self.page_title() == 'Products'

    def page_title(self) -> str:
        return self.actions.get_text(PAGE_TITLE)

    # Sorting
    def select_sort_option(self, visible_text: str) -> None:
        self.actions.select_by_visible_text(SORT_DROPDOWN, visible_text)
        self.logger.info(f"Sort option selected: {visible_text}")

    def sort_by(self, value: str) -> None:
        self.actions.select_by_value(SORT_DROPDOWN, value)
        self.logger.info(f"Sort option selected by value: {value}")

    def current_sort_option(self) -> str:
        return self.actions.get_text(ACTIVE_SORT_OPTION)

    # Product listing
    def product_names(self) -> List[str]:
        names = self.actions.texts(ITEM_NAMES)
        self.logger.info(f"Retrieved {len(names)} product names")
        return names

    def product_prices(self) -> List[str]:
        prices = self.actions.texts(ITEM_PRICES)
        self.logger.info(f"Retrieved {len(prices)} product prices")
        return prices

    def product_descriptions(self) -> List[str]:
        return self.actions.texts(ITEM_DESCRIPTIONS)

    def product_prices_as_floats(self) -> List[float]:
        return pricing.prices_as_floats(self.product_prices())

    def product_count(self) -> int:
        return self.actions.count(INVENTORY_ITEMS)

    def price_of(self, name: str) -> Optional[str]:
        return self.actions.text_in_row(INVENTORY_ITEMS, ITEM_NAMES, name, ITEM_PRICES)

    # Cart interaction
    def add_to_cart_by_name(self, name: str) -> bool:
        added = self.actions.click_in_row(INVENTORY_ITEMS, ITEM_NAMES, name, ITEM_BUTTON)
        if added:
            self.logger.info(f"Product added to cart: {name}")
        return added

    def add_to_cart(self, key: str) -> None:
        self.actions.click(ADD_TO_CART.format(key))
        self.logger.info(f"Product added to cart: {key}")

    def remove_from_cart(self, key: str) -> None:
        self.actions.click(REMOVE_FROM_CART.format(key))
        self.logger.info(f"Product removed from cart: {key}")

    def is_in_cart(self, key: str) -> bool:
        return self.actions.is_visible(REMOVE_FROM_CART.format(key))

    def cart_count(self) -> int:
        return self.header.cart_badge_count()

    def is_cart_badge_visible(self) -> bool:
        return self.actions.is_visible(CART_BADGE)

    def open_cart(self) -> None:
        self.header.click_cart()

    def open_product(self, key: str) -> None:
        self.actions.click(ITEM_TITLE_LINK.format(key))
        self.actions.wait_visible(BACK_TO_PRODUCTS)
        self.logger.info(f"Opened product details: {key}")

    def open_product_image(self, key: str) -> None:
        self.actions.click(ITEM_IMAGE_LINK.format(key))
        self.actions.wait_visible(BACK_TO_PRODUCTS)

    def back_to_products(self) -> None:
        self.actions.click(BACK_TO_PRODUCTS)
        self.wait_for_load()

    # Sort verification
    def verify_sorted_by_name_ascending(self) -> pricing.SortCheck:
        return pricing.verify_names_ascending(self.product_names())

    def verify_sorted_by_name_descending(self) -> pricing.SortCheck:
        return pricing.verify_names_descending(self.product_names())

    def verify_sorted_by_price_ascending(self) -> pricing.SortCheck:
        return pricing.verify_sorted_ascending(self.product_prices_as_floats())

    def verify_sorted_by_price_descending(self) -> pricing.SortCheck:
        return pricing.verify_sorted_descending(self.product_prices_as_floats())
