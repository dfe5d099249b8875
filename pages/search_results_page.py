"""
Page Object for the Dealls search results listing.
"""
import re
from typing import NamedTuple
from urllib.parse import quote_plus

from playwright.sync_api import Locator, Page, expect

from pages.base_page import BasePage
from utils.config import LISTINGS_TIMEOUT_MS
from utils.test_logger import get_test_logger, log_keyword


class JobTab(NamedTuple):
    """The tab opened by clicking a listing, plus the href read before the click."""
    page: Page
    job_url: str


def search_url_pattern(keyword: str) -> "re.Pattern":
    """
    Regex for the results URL produced by submitting `keyword`.

    The search form is a GET form, so the browser form-encodes the value:
    spaces become '+', reserved characters are percent-encoded. Browsers
    also escape '~', which quote_plus leaves alone.
    """
    encoded = quote_plus(keyword, safe="*").replace("~", "%7E")
    return re.compile("searchJob=" + re.escape(encoded))


class SearchResultsPage(BasePage):
    def __init__(self, page: Page, listings_timeout: int = LISTINGS_TIMEOUT_MS):
        super().__init__(page)
        self.listings_timeout = listings_timeout
        self.listing_headings = page.get_by_role("heading", level=2)

    @log_keyword()
    def verify_search_results(self, keyword: str):
        expect(self.page).to_have_url(search_url_pattern(keyword))
        # First listing heading is the "results loaded" signal
        expect(self.listing_headings.first).to_be_visible(timeout=self.listings_timeout)

    def get_job_by_title(self, title: str) -> Locator:
        """First level-2 heading containing `title`; resolved lazily."""
        return self.listing_headings.filter(has_text=title).first

    def get_job_link(self, title: str) -> Locator:
        """Nearest anchor enclosing the listing heading for `title`."""
        return self.get_job_by_title(title).locator("xpath=ancestor::a[1]")

    @log_keyword()
    def click_on_job(self, job_title: str) -> JobTab:
        """
        Open a listing and return the new tab it spawns.

        The popup listener is registered before the click; a listing that
        navigates in the same tab makes this wait until the default timeout.
        """
        job_heading = self.get_job_by_title(job_title)
        expect(job_heading).to_be_visible()

        job_link = self.get_job_link(job_title)
        href = job_link.get_attribute("href") if job_link.count() else None
        if not href:
            get_test_logger().log_warning(f"No link found around listing '{job_title}'")
        href = href or ""

        with self.page.expect_popup() as popup_info:
            job_heading.click()
        new_page = popup_info.value

        get_test_logger().log_info(f"Job tab opened: {new_page.url} (href: {href})")
        return JobTab(page=new_page, job_url=href)
