"""
Page Object for a Dealls job details tab.
"""
import re

from playwright.sync_api import Page, expect

from pages.base_page import BasePage
from utils.test_logger import log_keyword

JOB_DESCRIPTION_HEADING = "Deskripsi Pekerjaan"
QUALIFICATIONS_HEADING = "Kualifikasi"
APPLY_TEXT = re.compile(r"Lamar")
BENEFITS_HEADING = "Benefit Perusahaan"


class JobDetailsPage(BasePage):
    def __init__(self, page: Page):
        super().__init__(page)
        self.job_description_heading = page.get_by_role("heading", name=JOB_DESCRIPTION_HEADING)
        self.qualifications_heading = page.get_by_role("heading", name=QUALIFICATIONS_HEADING)
        self.apply_button = page.get_by_role("button").filter(has_text=APPLY_TEXT)
        self.benefits_section = page.get_by_role("heading", level=3).filter(has_text=BENEFITS_HEADING)

    @log_keyword()
    def verify_job_details_page(self, job_url: str):
        """All four sections must be visible; the first missing one fails the step."""
        self.wait_for_page_load()

        if job_url not in self.page.url:
            raise AssertionError(f"Expected job URL containing '{job_url}', got '{self.page.url}'")

        expect(self.job_description_heading).to_be_visible()
        expect(self.qualifications_heading).to_be_visible()
        expect(self.apply_button).to_be_visible()
        expect(self.benefits_section).to_be_visible()
