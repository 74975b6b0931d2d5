# pages/header.py
import logging

from saucedemo_ui.models.locator import Locator

MENU_BUTTON = Locator.id('react-burger-menu-btn', 'menu button')
MENU_CLOSE_BUTTON = Locator.id('react-burger-cross-btn', 'menu close button')
CART_BADGE = Locator.class_name('shopping_cart_badge', 'cart badge')
CART_LINK = Locator.class_name('shopping_cart_link', 'cart link')
MENU_ALL_ITEMS = Locator.id('inventory_sidebar_link', 'all items link')
MENU_ABOUT = Locator.id('about_sidebar_link', 'about link')
MENU_LOGOUT = Locator.id('logout_sidebar_link', 'logout link')
MENU_RESET_APP = Locator.id('reset_sidebar_link', 'reset app state link')


class AppHeader:
    """Burger menu and cart badge shown on every page behind the login."""

    def __init__(self, actions):
        self.actions = actions
        self.logger = logging.getLogger(__name__)

    def open_menu(self) -> None:
        self.actions.click(MENU_BUTTON)
        self.actions.wait_visible(MENU_LOGOUT)
        self.logger.info("Menu opened")

    def close_menu(self) -> None:
        self.actions.click(MENU_CLOSE_BUTTON)
        self.actions.wait_invisible(MENU_LOGOUT)
        self.logger.info("Menu closed")

    def click_cart(self) -> None:
        self.actions.click(CART_LINK)
        self.logger.info("Cart clicked")

    def cart_badge_text(self) -> str:
        if not self.actions.is_visible(CART_BADGE):
            return ''
        return self.actions.get_text(CART_BADGE)

    def cart_badge_count(self) -> int:
        text = self.cart_badge_text()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            self.logger.error(f"Invalid cart badge count: {text}")
            return 0

    def is_cart_badge_visible(self) -> bool:
        return self.actions.is_visible(CART_BADGE)

    def _menu_item(self, locator: Locator, label: str) -> None:
        self.open_menu()
        self.actions.click(locator)
        self.logger.info(label)

    def all_items(self) -> None:
        self._menu_item(MENU_ALL_ITEMS, "Navigated to All Items")

    def about(self) -> None:
        self._menu_item(MENU_ABOUT, "Navigated to About page")

    def logout(self) -> None:
        self._menu_item(MENU_LOGOUT, "Logged out successfully")

    def reset_app_state(self) -> None:
        self._menu_item(MENU_RESET_APP, "App state reset")
        self.close_menu()
