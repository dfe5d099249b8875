"""
Base Page Object shared by every Dealls page abstraction.
"""
from playwright.sync_api import Page

from utils.test_logger import log_keyword


class BasePage:
    """Common navigation and wait helpers; all page objects extend this class."""

    def __init__(self, page: Page):
        # The page handle belongs to the fixture/context, never closed here
        self.page = page

    @property
    def url(self) -> str:
        return self.page.url

    @log_keyword()
    def goto(self, url: str):
        """Navigate the owned page to `url`; navigation errors propagate."""
        self.page.goto(url)

    @log_keyword()
    def wait_for_page_load(self):
        """Block until the page reports no network activity (networkidle)."""
        self.page.wait_for_load_state("networkidle")
