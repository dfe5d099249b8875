"""
Dealls Job Search - end-to-end test cases

Homepage -> keyword search -> results -> job details tab, run once against the
local mock site and once (opt-in, RUN_LIVE=1) against dealls.com.
"""
import pytest
from playwright.sync_api import Page

from pages.job_search_flow import JobSearchScenario, ScenarioState, run_job_search_scenario
from utils.config import JOB_TITLE, SEARCH_KEYWORD


@pytest.mark.dealls
@pytest.mark.offline
@pytest.mark.parametrize(
    "keyword, job_title",
    [
        ("software developer", "Software Developer"),
        ("frontend developer", "Frontend Developer"),
        ("data analyst", "Data Analyst"),
    ],
)
def test_search_and_view_job_details_on_mock_site(page: Page, mock_site, keyword, job_title,
                                                  start_runtime_measurement, end_runtime_measurement):
    """Search for a keyword, open the matching listing and verify its details tab"""
    start_runtime_measurement(f"Mock site job search: {keyword}")
    try:
        scenario = JobSearchScenario(keyword=keyword, job_title=job_title, base_url=mock_site)
        result = run_job_search_scenario(page, scenario)

        assert result.state is ScenarioState.DETAILS_VERIFIED
        assert result.job_url.startswith("/loker/")
        assert result.job_url in result.job_tab.page.url
        # the listing opened in its own tab; the results tab stays where it was
        assert result.job_tab.page is not page
        assert "searchJob=" in page.url
    finally:
        end_runtime_measurement("Mock site job search")


@pytest.mark.dealls
@pytest.mark.offline
def test_repeated_scenario_gives_same_outcome(page: Page, mock_site):
    """Running the same journey twice yields the same result; nothing is carried over"""
    scenario = JobSearchScenario(keyword="software developer", job_title="Software Developer", base_url=mock_site)

    first = run_job_search_scenario(page, scenario)
    first.job_tab.page.close()
    second = run_job_search_scenario(page, scenario)

    assert first.state is second.state is ScenarioState.DETAILS_VERIFIED
    assert first.job_url == second.job_url


@pytest.mark.dealls
@pytest.mark.live
def test_search_software_developer_jobs_and_view_job_details(page: Page, live_site,
                                                             start_runtime_measurement, end_runtime_measurement):
    """Search dealls.com for software developer jobs and verify a job details tab"""
    start_runtime_measurement("Dealls live job search")
    try:
        scenario = JobSearchScenario(keyword=SEARCH_KEYWORD, job_title=JOB_TITLE, base_url=live_site)
        result = run_job_search_scenario(page, scenario)

        assert result.state is ScenarioState.DETAILS_VERIFIED
        assert result.job_url in result.job_tab.page.url
    finally:
        end_runtime_measurement("Dealls live job search")
