"""
Failure reporting test cases - the makereport hook saves artifacts for every open tab
"""
from types import SimpleNamespace

import pytest
from playwright.sync_api import Page

import Dealls_Conftest
from pages.home_page import HomePage
from pages.search_results_page import SearchResultsPage
from utils.test_logger import TestLogger

pytestmark = [pytest.mark.dealls, pytest.mark.offline]


def _report_failure(item, longrepr):
    """Feed a failed call-phase report through the makereport hook wrapper."""
    report = SimpleNamespace(when="call", outcome="failed", longrepr=longrepr, duration=0.25)
    hook = Dealls_Conftest.pytest_runtest_makereport(item, None)
    next(hook)
    with pytest.raises(StopIteration):
        hook.send(SimpleNamespace(get_result=lambda: report))


def test_failed_test_saves_artifacts_for_each_tab(page: Page, mock_site, request, monkeypatch, tmp_path):
    fresh_logger = TestLogger("dealls_test_artifacts")
    monkeypatch.setattr(Dealls_Conftest, "FAILURES_DIR", tmp_path)
    monkeypatch.setattr(Dealls_Conftest, "get_test_logger", lambda: fresh_logger)

    home = HomePage(page, base_url=mock_site)
    home.goto()
    home.search_jobs("software developer")
    results = SearchResultsPage(page)
    results.verify_search_results("software developer")
    job_tab = results.click_on_job("Software Developer")
    job_tab.page.wait_for_load_state()

    _report_failure(
        request.node,
        "AssertionError: Locator expected to be visible\n"
        '  - waiting for get_by_role("heading", name="Kualifikasi")\n',
    )

    url_files = sorted(tmp_path.glob("*.url.txt"))
    assert len(url_files) == 2
    assert "searchJob=software+developer" in url_files[0].read_text(encoding="utf-8")
    assert job_tab.job_url in url_files[1].read_text(encoding="utf-8")
    assert len(list(tmp_path.glob("*.png"))) == 2
    assert len(list(tmp_path.glob("*.html"))) == 2
    assert "<h2>Software Developer</h2>" in url_files[0].with_name(
        url_files[0].name.replace(".url.txt", ".html")
    ).read_text(encoding="utf-8")

    stats = fresh_logger.get_statistics()
    assert stats["failed"] == 1
    assert 'Locator hint: get_by_role("heading", name="Kualifikasi")' in stats["tests"][0]["error"]


def test_failure_without_browser_page_saves_nothing(request, monkeypatch, tmp_path):
    fresh_logger = TestLogger("dealls_test_artifacts")
    monkeypatch.setattr(Dealls_Conftest, "FAILURES_DIR", tmp_path)
    monkeypatch.setattr(Dealls_Conftest, "get_test_logger", lambda: fresh_logger)

    _report_failure(request.node, "AssertionError: Expected job URL containing '/loker/x'")

    assert list(tmp_path.iterdir()) == []
    stats = fresh_logger.get_statistics()
    assert stats["failed"] == 1
    assert "Locator hint" not in stats["tests"][0]["error"]
