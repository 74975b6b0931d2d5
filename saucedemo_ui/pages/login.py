# pages/login.py
from saucedemo_ui.models.locator import Locator
from saucedemo_ui.pages.base import Page

USERNAME_FIELD = Locator.id('user-name', 'username field')
PASSWORD_FIELD = Locator.id('password', 'password field')
LOGIN_BUTTON = Locator.id('login-button', 'login button')
ERROR_MESSAGE = Locator.css("[data-test='error']", 'error message')
ERROR_CLOSE_BUTTON = Locator.css('.error-button', 'error close button')
LOGIN_LOGO = Locator.class_name('login_logo', 'login logo')
LOGIN_BOT_IMAGE = Locator.class_name('bot_column', 'bot image')
LOGIN_CREDENTIALS_TEXT = Locator.id('login_credentials', 'accepted usernames')
LOGIN_PASSWORD_TEXT = Locator.class_name('login_password', 'password info')

INVALID_CREDENTIALS_MESSAGE = 'Epic sadface: Username and password do not match any user in this service'
LOCKED_OUT_MESSAGE = 'Epic sadface: Sorry, this user has been locked out.'
USERNAME_REQUIRED_MESSAGE = 'Epic sadface: Username is required'
PASSWORD_REQUIRED_MESSAGE = 'Epic sadface: Password is required'


class LoginPage(Page):
    signature = (LOGIN_LOGO, USERNAME_FIELD, PASSWORD_FIELD, LOGIN_BUTTON)

    def enter_username(self, username: str) -> None:
        self.actions.type_text(USERNAME_FIELD, username)
        self.logger.info(f"Username entered: {username}")

    def enter_password(self, password: str) -> None:
        self.actions.type_text(PASSWORD_FIELD, password)
        self.logger.info("Password entered")

    def clear_username(self) -> None:
        self.actions.clear(USERNAME_FIELD)

    def clear_password(self) -> None:
        self.actions.clear(PASSWORD_FIELD)

    def clear_credentials(self) -> None:
        self.clear_username()
        self.clear_password()

    def click_login(self) -> None:
        self.actions.click(LOGIN_BUTTON)

    def login(self, username: str, password: str) -> None:
        # an empty value means "leave the field blank"
        if username:
            self.enter_username(username)
        else:
            self.clear_username()
        if password:
            self.enter_password(password)
        else:
            self.clear_password()
        self.click_login()
        self.logger.info(f"Login attempted with username: {username}")

    def is_error_displayed(self) -> bool:
        return self.actions.is_visible(ERROR_MESSAGE)

    def error_message(self) -> str:
        if not self.is_error_displayed():
            return ''
        text = self.actions.get_text(ERROR_MESSAGE)
        self.logger.info(f"Error message displayed: {text}")
        return text

    def validate_error_message(self, expected: str) -> bool:
        actual = self.error_message()
        matches = actual == expected
        self.logger.info(f"Error message validation - Expected: '{expected}', Actual: '{actual}', Matches: {matches}")
        return matches

    def close_error(self) -> None:
        if self.is_error_displayed():
            self.actions.click(ERROR_CLOSE_BUTTON)
            self.actions.wait_invisible(ERROR_MESSAGE)

    def username_placeholder(self) -> str:
        return self.actions.get_attribute(USERNAME_FIELD, 'placeholder') or ''

    def password_placeholder(self) -> str:
        return self.actions.get_attribute(PASSWORD_FIELD, 'placeholder') or ''

    def login_button_text(self) -> str:
        return self.actions.get_attribute(LOGIN_BUTTON, 'value') or ''

    def current_username(self) -> str:
        return self.actions.get_attribute(USERNAME_FIELD, 'value') or ''

    def is_username_enabled(self) -> bool:
        return self.actions.is_enabled(USERNAME_FIELD)

    def is_password_enabled(self) -> bool:
        return self.actions.is_enabled(PASSWORD_FIELD)

    def is_login_button_enabled(self) -> bool:
        return self.actions.is_enabled(LOGIN_BUTTON)

    def is_bot_image_displayed(self) -> bool:
        return self.actions.is_visible(LOGIN_BOT_IMAGE)

    def accepted_usernames(self) -> str:
        if not self.actions.is_visible(LOGIN_CREDENTIALS_TEXT):
            return ''
        return self.actions.get_text(LOGIN_CREDENTIALS_TEXT)

    def password_info(self) -> str:
        if not self.actions.is_visible(LOGIN_PASSWORD_TEXT):
            return ''
        return self.actions.get_text(LOGIN_PASSWORD_TEXT)

    def verify_login_elements(self) -> bool:
        return self.verify_elements(self.signature + (LOGIN_CREDENTIALS_TEXT, LOGIN_PASSWORD_TEXT))
