"""
The Dealls job search journey expressed once with the page objects:

    INITIAL -> HOME_LOADED -> SEARCH_SUBMITTED -> RESULTS_VERIFIED
            -> JOB_TAB_OPENED -> DETAILS_VERIFIED

Each step blocks until Playwright resolves it. A failure aborts the journey
and is re-raised as ScenarioFailed naming the last state reached.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from playwright.sync_api import Page

from pages.home_page import HomePage
from pages.job_details_page import JobDetailsPage
from pages.search_results_page import JobTab, SearchResultsPage
from utils.config import BASE_URL, JOB_TITLE, LISTINGS_TIMEOUT_MS, SEARCH_KEYWORD
from utils.test_logger import get_test_logger


class ScenarioState(Enum):
    INITIAL = "Initial"
    HOME_LOADED = "HomeLoaded"
    SEARCH_SUBMITTED = "SearchSubmitted"
    RESULTS_VERIFIED = "ResultsVerified"
    JOB_TAB_OPENED = "JobTabOpened"
    DETAILS_VERIFIED = "DetailsVerified"


class ScenarioFailed(AssertionError):
    """A journey step failed; `state` is the last state successfully reached."""

    def __init__(self, state: ScenarioState, step: str, error: BaseException):
        self.state = state
        self.step = step
        first_line = str(error).splitlines()[0] if str(error) else type(error).__name__
        super().__init__(f"'{step}' failed after reaching {state.value}: {first_line}")


@dataclass
class JobSearchScenario:
    keyword: str = SEARCH_KEYWORD
    job_title: str = JOB_TITLE
    base_url: str = BASE_URL
    listings_timeout: int = LISTINGS_TIMEOUT_MS


@dataclass
class ScenarioResult:
    state: ScenarioState = ScenarioState.INITIAL
    job_tab: Optional[JobTab] = None

    @property
    def job_url(self) -> str:
        return self.job_tab.job_url if self.job_tab else ""


def run_job_search_scenario(page: Page, scenario: JobSearchScenario) -> ScenarioResult:
    """Drive home -> search -> results -> job tab -> details on `page`."""
    test_logger = get_test_logger()
    result = ScenarioResult()
    home_page = HomePage(page, base_url=scenario.base_url)
    results_page = SearchResultsPage(page, listings_timeout=scenario.listings_timeout)

    def advance(state: ScenarioState, detail: str = None):
        result.state = state
        test_logger.log_state(state.value, detail)

    def step(name: str, action):
        try:
            return action()
        except Exception as e:
            test_logger.log_error(f"Scenario stopped at {result.state.value} during '{name}'")
            raise ScenarioFailed(result.state, name, e) from e

    test_logger.log_state(ScenarioState.INITIAL.value, scenario.base_url)

    def load_home():
        home_page.goto()
        home_page.verify_page_loaded()

    step("Navigate to Dealls homepage", load_home)
    advance(ScenarioState.HOME_LOADED)

    step("Search for jobs", lambda: home_page.search_jobs(scenario.keyword))
    advance(ScenarioState.SEARCH_SUBMITTED, scenario.keyword)

    step("Verify search results", lambda: results_page.verify_search_results(scenario.keyword))
    advance(ScenarioState.RESULTS_VERIFIED)

    result.job_tab = step("Open job listing", lambda: results_page.click_on_job(scenario.job_title))
    advance(ScenarioState.JOB_TAB_OPENED, result.job_url)

    details_page = JobDetailsPage(result.job_tab.page)
    step("Verify job details", lambda: details_page.verify_job_details_page(result.job_url))
    advance(ScenarioState.DETAILS_VERIFIED)

    return result
