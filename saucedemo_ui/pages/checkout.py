# pages/checkout.py
from typing import List

from saucedemo_ui.models.locator import Locator
from saucedemo_ui.pages.base import Page
from saucedemo_ui.utils import pricing

FIRST_NAME = Locator.id('first-name', 'first name field')
LAST_NAME = Locator.id('last-name', 'last name field')
POSTAL_CODE = Locator.id('postal-code', 'postal code field')
CONTINUE_BUTTON = Locator.id('continue', 'continue button')
CANCEL_BUTTON = Locator.id('cancel', 'cancel button')
ERROR_MESSAGE = Locator.css("[data-test='error']", 'error message')

SUMMARY_ITEM_NAMES = Locator.class_name('inventory_item_name', 'summary item names')
SUBTOTAL_LABEL = Locator.class_name('summary_subtotal_label', 'item total')
TAX_LABEL = Locator.class_name('summary_tax_label', 'tax')
TOTAL_LABEL = Locator.class_name('summary_total_label', 'total')
FINISH_BUTTON = Locator.id('finish', 'finish button')

COMPLETE_HEADER = Locator.class_name('complete-header', 'complete header')
BACK_HOME_BUTTON = Locator.id('back-to-products', 'back home button')


class CheckoutInformationPage(Page):
    path = '/checkout-step-one.html'
    signature = (FIRST_NAME, LAST_NAME, POSTAL_CODE, CONTINUE_BUTTON)

    def fill(self, first_name: str, last_name: str, postal_code: str) -> None:
        for locator, value in ((FIRST_NAME, first_name), (LAST_NAME, last_name), (POSTAL_CODE, postal_code)):
            if value:
                self.actions.type_text(locator, value)
            else:
                self.actions.clear(locator)
        self.logger.info(f"Checkout information entered for: {first_name} {last_name}")

    def continue_checkout(self) -> None:
        self.actions.click(CONTINUE_BUTTON)

    def cancel(self) -> None:
        self.actions.click(CANCEL_BUTTON)

    def error_message(self) -> str:
        if not self.actions.is_visible(ERROR_MESSAGE):
            return ''
        return self.actions.get_text(ERROR_MESSAGE)


class CheckoutOverviewPage(Page):
    path = '/checkout-step-two.html'
    signature = (SUBTOTAL_LABEL, TAX_LABEL, TOTAL_LABEL, FINISH_BUTTON)

    def item_names(self) -> List[str]:
        return self.actions.texts(SUMMARY_ITEM_NAMES)

    def item_total(self) -> float:
        return pricing.parse_amount(self.actions.get_text(SUBTOTAL_LABEL))

    def tax(self) -> float:
        return pricing.parse_amount(self.actions.get_text(TAX_LABEL))

    def total(self) -> float:
        return pricing.parse_amount(self.actions.get_text(TOTAL_LABEL))

    def finish(self) -> None:
        self.actions.click(FINISH_BUTTON)
        self.logger.info("Order finished")

    def cancel(self) -> None:
        self.actions.click(CANCEL_BUTTON)


class CheckoutCompletePage(Page):
    path = '/checkout-complete.html'
    signature = (COMPLETE_HEADER, BACK_HOME_BUTTON)

    def header_text(self) -> str:
        return self.actions.get_text(COMPLETE_HEADER)

    def back_home(self) -> None:
        self.actions.click(BACK_HOME_BUTTON)
