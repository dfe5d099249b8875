"""
Page Object for the Dealls homepage.
"""
import re

from playwright.sync_api import Page, expect

from pages.base_page import BasePage
from utils.config import BASE_URL, EXPECTED_HEADING, EXPECTED_TITLE
from utils.test_logger import log_keyword


class HomePage(BasePage):
    def __init__(self, page: Page, base_url: str = BASE_URL):
        super().__init__(page)
        self.base_url = base_url
        self.heading = page.get_by_role("heading", level=1)
        self.search_box = page.get_by_role("textbox", name=re.compile(r"Search by job title"))

    @log_keyword()
    def goto(self):
        super().goto(self.base_url)

    @log_keyword()
    def verify_page_loaded(self):
        expect(self.page).to_have_title(EXPECTED_TITLE)
        expect(self.heading).to_contain_text(EXPECTED_HEADING)

    @log_keyword()
    def search_jobs(self, keyword: str):
        """
        Fill the search box and submit with Enter.

        Does not wait for the results page; callers verify the new state.
        """
        expect(self.search_box).to_be_visible()
        self.search_box.fill(keyword)
        self.search_box.press("Enter")
