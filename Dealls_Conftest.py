"""
Pytest configuration and fixtures for the Dealls job search automation tests
"""
import pytest
import time
import logging
import os
import re
import sys
from datetime import datetime, timedelta
from pathlib import Path

import requests
from playwright.sync_api import sync_playwright, Page as PWPage

sys.path.insert(0, str(Path(__file__).parent))

from utils.config import (
    BASE_URL,
    BROWSER_CHANNEL,
    DEFAULT_TIMEOUT_MS,
    FAILURES_DIR,
    HEADLESS,
    LOG_DIR,
    MAXIMIZE_BROWSER,
    MOCK_SITE_PORT,
    NET_CHECK_CACHE_TTL,
    NET_CHECK_MODE,
    NET_CHECK_RUN,
    NET_CHECK_TIMEOUT,
    SLOW_MO_MS,
    browser_launch_args,
    env_flag,
)
from utils.mock_site import MockSiteServer
from utils.test_logger import get_test_logger

SUITE_NAME = "Dealls Job Search"
# Live-site tests are opt-in: set RUN_LIVE=1
RUN_LIVE = env_flag("RUN_LIVE", "0")


def setup_logging():
    """Setup logging configuration similar to Robot Framework"""
    os.makedirs(LOG_DIR, exist_ok=True)
    os.makedirs(FAILURES_DIR, exist_ok=True)
    log_file = os.path.join(LOG_DIR, "dealls.log")

    # test_logger already formats its lines for the file
    file_formatter = logging.Formatter('%(message)s', datefmt='%Y-%m-%d %H:%M:%S')
    console_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)8s] %(filename)s:%(lineno)d - %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    return log_file


def cleanup_old_failure_artifacts(max_age_days: int = 7):
    """Remove failure screenshots/HTML/URL files older than `max_age_days`."""
    cutoff = datetime.now() - timedelta(days=max_age_days)
    removed = 0
    for artifact in FAILURES_DIR.glob("*"):
        try:
            if artifact.is_file() and datetime.fromtimestamp(artifact.stat().st_mtime) < cutoff:
                artifact.unlink()
                removed += 1
        except OSError as e:
            logger.debug(f"Could not remove old failure artifact {artifact}: {e}")
    if removed:
        logger.info(f"Cleanup: Removed {removed} failure artifact(s) older than {max_age_days} days")


LOG_FILE = setup_logging()
logger = logging.getLogger(__name__)
logger.info("=" * 80)
logger.info("Dealls Job Search Test Suite - Logging Initialized")
logger.info(f"Log file: {LOG_FILE}")
logger.info("=" * 80)

# Runtime monitoring
runtime_data = {
    'timings': {},
}

# Successful network checks are cached for NET_CHECK_CACHE_TTL seconds
_NET_CHECK_CACHE: dict = {"result": None, "timestamp": 0.0}


# -----------------------------
# Playwright fixtures
# -----------------------------
@pytest.fixture(scope="session")
def playwright_instance():
    """Start Playwright once for the whole session"""
    playwright = sync_playwright().start()
    yield playwright
    playwright.stop()


@pytest.fixture(scope="session")
def pw_browser(playwright_instance):
    """Launch Chromium (or the configured channel) once per session"""
    launch_kwargs = {
        "headless": HEADLESS,
        "args": browser_launch_args(),
    }
    if BROWSER_CHANNEL:
        launch_kwargs["channel"] = BROWSER_CHANNEL
    if SLOW_MO_MS:
        launch_kwargs["slow_mo"] = SLOW_MO_MS

    logger.info(
        f"Launching browser (channel={BROWSER_CHANNEL or 'chromium'}, headless={HEADLESS})"
    )
    browser = playwright_instance.chromium.launch(**launch_kwargs)
    yield browser

    try:
        logger.info("Closing browser instance")
        browser.close()
    except Exception as e:
        logger.warning(f"Error closing browser: {e}")


@pytest.fixture(scope="function")
def page(pw_browser, request):
    """
    Fresh, isolated browser context per test.

    The page is attached to the test node so failure artifacts can be captured;
    tabs opened during the test (job detail popups) belong to the same context
    and are closed with it.
    """
    context = pw_browser.new_context(
        ignore_https_errors=True,
        viewport=None if MAXIMIZE_BROWSER else {"width": 1920, "height": 1080},
        locale="id-ID",
        timezone_id="Asia/Jakarta",
    )
    context.set_default_timeout(DEFAULT_TIMEOUT_MS)
    pw_page = context.new_page()
    request.node._pw_page = pw_page

    yield pw_page

    try:
        for p in context.pages:
            if not p.is_closed():
                p.close()
    except Exception as e:
        logger.debug(f"Error during page cleanup: {e}")
    finally:
        try:
            context.close()
        except Exception as e:
            logger.debug(f"Error closing context: {e}")


@pytest.fixture(scope="session")
def mock_site():
    """Base URL of the local mock Dealls site"""
    server = MockSiteServer(port=MOCK_SITE_PORT)
    base_url = server.start()
    yield base_url
    server.stop()


@pytest.fixture(scope="function")
def live_site():
    """
    Base URL of the live site, after checking it is reachable.

    Runs before every live test: NET_CHECK_RUN=once reuses a cached pass,
    per_test checks again each time.
    """
    assert check_network_connectivity(BASE_URL), f"Network connectivity check failed for {BASE_URL}"
    return BASE_URL


@pytest.fixture(scope="function")
def start_runtime_measurement():
    """Start runtime measurement for a test"""
    def _start(test_name: str):
        runtime_data['current_test'] = test_name
        runtime_data['start_time'] = time.time()
        logger.info("=" * 80)
        logger.info(f"Started runtime measurement for: {test_name}")
        logger.info(f"Start time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        logger.info("=" * 80)
    return _start


@pytest.fixture(scope="function")
def end_runtime_measurement():
    """End runtime measurement and return elapsed time"""
    def _end(operation_name: str = None):
        if 'start_time' not in runtime_data:
            logger.warning("No start time recorded. Call start_runtime_measurement first.")
            return 0.0

        elapsed = time.time() - runtime_data.pop('start_time')
        test_name = runtime_data.get('current_test', operation_name or "Unknown")
        runtime_data['timings'].setdefault(test_name, []).append({
            'operation': operation_name or 'total',
            'elapsed_seconds': elapsed,
            'timestamp': datetime.now().isoformat(),
        })

        logger.info("=" * 80)
        logger.info(f"Runtime for '{test_name}': {elapsed:.2f} seconds")
        logger.info(f"End time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        logger.info("=" * 80)
        return elapsed
    return _end


def check_network_connectivity(url: str | None = None, timeout: float | None = None) -> bool:
    """
    Check that the site under test is reachable.

    Controls:
    - NET_CHECK_MODE: one of {"skip","fail","warn"} when the check fails (default: "skip").
    - NET_CHECK_RUN: one of {"once","per_test","skip"} (default: "once").
    """
    test_logger = get_test_logger()
    target = url or BASE_URL

    run_mode = NET_CHECK_RUN if NET_CHECK_RUN in {"once", "per_test", "skip"} else "once"
    if run_mode == "skip":
        logger.info("Network connectivity check skipped (NET_CHECK_RUN=skip).")
        return True

    now = time.time()
    if run_mode == "once" and _NET_CHECK_CACHE["result"] is True:
        age = now - _NET_CHECK_CACHE["timestamp"]
        if age <= NET_CHECK_CACHE_TTL:
            logger.info(f"Network connectivity check: using cached PASS (age={age:.2f}s)")
            return True

    timeout = float(timeout if timeout is not None else NET_CHECK_TIMEOUT)
    test_logger.log_keyword_start("Check Network Connectivity", [target])
    last_err = None
    try:
        try:
            resp = requests.head(target, timeout=timeout, allow_redirects=True)
        except requests.RequestException:
            resp = requests.get(target, timeout=timeout, allow_redirects=True)
        # Anything below 500 means the site answered
        if resp.status_code < 500:
            logger.info(f"Network connectivity check: Connected (Target: {target}, Status: {resp.status_code})")
            _NET_CHECK_CACHE["result"] = True
            _NET_CHECK_CACHE["timestamp"] = time.time()
            test_logger.log_keyword_end("Check Network Connectivity", "PASS")
            return True
        last_err = f"HTTP {resp.status_code}"
    except requests.RequestException as e:
        last_err = str(e)

    msg = f"Network connectivity check failed for {target}. Last error: {last_err}"
    logger.error(msg)
    test_logger.log_keyword_end("Check Network Connectivity", "FAIL")

    if NET_CHECK_MODE == "warn":
        return True
    if NET_CHECK_MODE == "fail":
        return False
    pytest.skip(msg)


# -----------------------------
# Failure artifacts
# -----------------------------
def _safe_filename(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_.-]+", "_", name or "test")


def _extract_locator_hint(error_text: str) -> str:
    """Pull the failing locator out of a Playwright error/assertion message."""
    if not error_text:
        return ""
    # e.g. "waiting for get_by_role("heading", name="Kualifikasi")"
    m = re.search(r'waiting for ((?:get_by_\w+|locator)\(.*\))\s*$', error_text, re.MULTILINE)
    if m:
        return m.group(1).strip()
    m = re.search(r'locator\("([^"]+)"\)', error_text)
    if m:
        return m.group(1).strip()
    return ""


def _capture_playwright_artifacts(page: PWPage, test_name: str):
    """Save screenshot + HTML + URL for one page of a failing test."""
    os.makedirs(FAILURES_DIR, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    base = FAILURES_DIR / f"{_safe_filename(test_name)}_{ts}"
    screenshot_path = f"{base}.png"
    html_path = f"{base}.html"
    url_path = f"{base}.url.txt"

    current_url = page.url

    try:
        page.screenshot(path=screenshot_path, full_page=True, timeout=8000)
    except Exception as e:
        logger.warning(f"Full page screenshot failed, trying viewport-only: {e}")
        try:
            page.screenshot(path=screenshot_path, full_page=False, timeout=5000)
        except Exception as e2:
            logger.warning(f"Viewport screenshot also failed: {e2}")
            screenshot_path = None

    try:
        with open(html_path, "w", encoding="utf-8") as f:
            f.write(page.content() or "")
    except Exception as e:
        logger.debug(f"Could not save HTML: {e}")
        html_path = None

    with open(url_path, "w", encoding="utf-8") as f:
        f.write(current_url or "")

    return screenshot_path, html_path, url_path, current_url


def _pages_for_artifacts(item) -> list:
    """The test's page plus any tabs it opened, newest last."""
    pw_page = getattr(item, "_pw_page", None)
    if pw_page is None:
        return []
    try:
        return [p for p in pw_page.context.pages if not p.is_closed()]
    except Exception:
        return [pw_page] if not pw_page.is_closed() else []


def _flush_log_handlers():
    for handler in logging.getLogger().handlers:
        handler.flush()


# -----------------------------
# Hooks
# -----------------------------
@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Log PASS/FAIL/SKIP per test and capture artifacts on failure"""
    test_logger = get_test_logger()

    outcome = yield
    rep = outcome.get_result()
    test_name = item.name
    elapsed = getattr(rep, "duration", None)

    if rep.when == "setup" and rep.outcome == "failed":
        test_logger.log_test_end(test_name, "FAIL", message=str(rep.longrepr or "Test setup failed"), elapsed=elapsed)
        _flush_log_handlers()
        return
    if rep.when == "setup" and rep.outcome == "skipped":
        test_logger.log_test_end(test_name, "SKIP", message=str(rep.longrepr or "Test skipped"), elapsed=elapsed)
        _flush_log_handlers()
        return
    if rep.when != "call":
        return

    if rep.outcome == "passed":
        test_logger.log_test_end(test_name, "PASS", elapsed=elapsed)
    elif rep.outcome == "skipped":
        test_logger.log_test_end(test_name, "SKIP", message=str(rep.longrepr or "Test skipped"), elapsed=elapsed)
    else:
        error_msg = str(rep.longrepr) if rep.longrepr else "Test failed"
        locator_hint = _extract_locator_hint(error_msg)
        if locator_hint:
            error_msg = f"{error_msg}\n\nLocator hint: {locator_hint}"
        test_logger.log_test_end(test_name, "FAIL", message=error_msg, elapsed=elapsed)

        for index, pw_page in enumerate(_pages_for_artifacts(item)):
            try:
                screenshot_path, html_path, url_path, current_url = _capture_playwright_artifacts(
                    pw_page, f"{test_name}_tab{index}"
                )
                test_logger.log_info("Failure artifacts saved:")
                test_logger.log_info(f"  URL: {current_url}")
                test_logger.log_info(f"  Screenshot: {screenshot_path}")
                test_logger.log_info(f"  HTML: {html_path}")
                test_logger.log_info(f"  URL file: {url_path}")
            except Exception as e:
                logger.debug(f"Could not capture Playwright failure artifacts: {e}")
    _flush_log_handlers()


@pytest.fixture(autouse=True)
def log_test_start_end(request):
    """Automatically log test start; the end is logged by pytest_runtest_makereport"""
    test_logger = get_test_logger()
    test_file = str(request.node.path) if hasattr(request.node, 'path') else None
    test_logger.log_test_start(request.node.name, test_file)
    yield


def pytest_configure(config):
    """Record suite start; this module is loaded through a sub-directory conftest."""
    test_logger = get_test_logger()
    if not test_logger.get_statistics().get("start_time"):
        cleanup_old_failure_artifacts()
        test_logger.log_suite_start(SUITE_NAME, str(getattr(config, "rootpath", "")) or None)
        logger.info(f"Session start time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


def pytest_collection_modifyitems(config, items):
    """Skip live-site tests unless RUN_LIVE=1"""
    if RUN_LIVE:
        return
    skip_live = pytest.mark.skip(reason="live site tests are disabled (set RUN_LIVE=1)")
    live_items = [item for item in items if item.get_closest_marker("live")]
    for item in live_items:
        item.add_marker(skip_live)
    if live_items:
        logger.info(f"Skipping {len(live_items)} live site test(s); set RUN_LIVE=1 to run them")


def pytest_sessionfinish(session, exitstatus):
    """Called after whole test run finished"""
    test_logger = get_test_logger()
    test_logger.log_suite_end(SUITE_NAME)

    logger.info("")
    logger.info("=" * 80)
    logger.info("TEST SESSION FINISHED")
    logger.info(f"Session end time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info(f"Exit status: {exitstatus}")

    if runtime_data['timings']:
        logger.info("")
        logger.info("RUNTIME SUMMARY:")
        logger.info("-" * 80)
        for test_name, timings in runtime_data['timings'].items():
            total_time = sum(t['elapsed_seconds'] for t in timings)
            logger.info(f"  {test_name}: {total_time:.2f} seconds")
        logger.info("-" * 80)

    logger.info("=" * 80)
    _flush_log_handlers()
