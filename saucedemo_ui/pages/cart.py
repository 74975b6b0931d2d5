# pages/cart.py
from typing import List

from saucedemo_ui.models.locator import Locator
from saucedemo_ui.pages.base import Page
from saucedemo_ui.pages.header import AppHeader
from saucedemo_ui.utils import pricing

PAGE_TITLE = Locator.class_name('title', 'page title')
CART_LIST = Locator.class_name('cart_list', 'cart list')
CART_ITEMS = Locator.class_name('cart_item', 'cart items')
ITEM_NAMES = Locator.class_name('inventory_item_name', 'cart item names')
ITEM_PRICES = Locator.class_name('inventory_item_price', 'cart item prices')
ITEM_QUANTITIES = Locator.class_name('cart_quantity', 'cart quantities')
ITEM_REMOVE_BUTTON = Locator.css('button.cart_button', 'cart remove button')
REMOVE_BUTTON = Locator.css("[data-test='remove-%s']", 'remove button')
CONTINUE_SHOPPING = Locator.id('continue-shopping', 'continue shopping button')
CHECKOUT_BUTTON = Locator.id('checkout', 'checkout button')


class CartPage(Page):
    path = '/cart.html'
    signature = (PAGE_TITLE, CART_LIST, CONTINUE_SHOPPING, CHECKOUT_BUTTON)

    def __init__(self, actions, config):
        super().__init__(actions, config)
        self.header = AppHeader(actions)

    def _loaded_extra(self) -> bool:
        return self.actions.get_text(PAGE_TITLE) == 'Your Cart'

    def item_count(self) -> int:
        return self.actions.count(CART_ITEMS)

    def is_empty(self) -> bool:
        return self.item_count() == 0

    def item_names(self) -> List[str]:
        return self.actions.texts(ITEM_NAMES)

    def item_prices(self) -> List[str]:
        return self.actions.texts(ITEM_PRICES)

    def item_quantities(self) -> List[int]:
        return [int(text) for text in self.actions.texts(ITEM_QUANTITIES) if text.strip().isdigit()]

    def contains(self, name: str) -> bool:
        return name in self.item_names()

    def remove(self, key: str) -> None:
        self.actions.click(REMOVE_BUTTON.format(key))
        self.logger.info(f"Item removed from cart: {key}")

    def remove_by_name(self, name: str) -> bool:
        removed = self.actions.click_in_row(CART_ITEMS, ITEM_NAMES, name, ITEM_REMOVE_BUTTON)
        if removed:
            self.logger.info(f"Item removed from cart: {name}")
        return removed

    def remove_all(self) -> int:
        """Empty the cart one row at a time; rows are re-located after each removal."""
        removed = 0
        while True:
            names = self.item_names()
            if not names:
                break
            if not self.remove_by_name(names[0]):
                self.logger.warning(f"Could not remove cart item: {names[0]}")
                break
            removed += 1
        self.logger.info(f"Removed {removed} items from cart")
        return removed

    def continue_shopping(self) -> None:
        self.actions.click(CONTINUE_SHOPPING)

    def checkout(self) -> None:
        self.actions.click(CHECKOUT_BUTTON)
        self.logger.info("Proceeded to checkout")

    def calculate_total_price(self) -> float:
        total = pricing.total_price(self.item_prices())
        self.logger.info(f"Cart total price: {total}")
        return total
