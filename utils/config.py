"""
Test configuration for the Dealls job search suite.

Every value can be overridden with an environment variable, e.g. (PowerShell):
    $env:HEADLESS="0"; $env:BROWSER_CHANNEL="chrome"
"""
import os
import re
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.resolve()
LOG_DIR = PROJECT_ROOT / "logs"
REPORTS_DIR = PROJECT_ROOT / "reports"
FAILURES_DIR = REPORTS_DIR / "failures"

_TRUTHY = ("1", "true", "yes", "on")


def env_flag(name: str, default: str = "0") -> bool:
    """Read a boolean flag from the environment (1/true/yes/on)."""
    return os.getenv(name, default).strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Site under test
BASE_URL = os.getenv("DEALLS_URL", "https://dealls.com/")
EXPECTED_TITLE = re.compile(r"Lowongan Kerja Terbaru")
EXPECTED_HEADING = "Cari Lowongan Kerja Pakai Dealls"

# Scenario data
SEARCH_KEYWORD = os.getenv("SEARCH_KEYWORD", "software developer")
JOB_TITLE = os.getenv("JOB_TITLE", "Software Developer")

# Timeouts (milliseconds)
DEFAULT_TIMEOUT_MS = env_int("PW_DEFAULT_TIMEOUT", 30000)
LISTINGS_TIMEOUT_MS = env_int("LISTINGS_TIMEOUT", 10000)

# -----------------------------
# Browser
# -----------------------------
HEADLESS = env_flag("HEADLESS", "1")
# Empty -> bundled Chromium; "chrome" / "msedge" -> installed branded browser
BROWSER_CHANNEL = os.getenv("BROWSER_CHANNEL", "").strip()
SLOW_MO_MS = env_int("PW_SLOW_MO", 0)

# Window geometry only matters for headed runs.
#   $env:PW_WINDOW_SIZE="1200,900"; $env:PW_WINDOW_POS="700,0"
MAXIMIZE_BROWSER = env_flag("MAXIMIZE_BROWSER", "0")
PW_WINDOW_SIZE = os.getenv("PW_WINDOW_SIZE", "").strip()
PW_WINDOW_POS = os.getenv("PW_WINDOW_POS", "").strip()

# -----------------------------
# Network check (live site only)
# -----------------------------
NET_CHECK_TIMEOUT = env_float("NET_CHECK_TIMEOUT", 5.0)
# Cache TTL for a successful check (seconds)
NET_CHECK_CACHE_TTL = env_float("NET_CHECK_CACHE_TTL", 300.0)
NET_CHECK_MODE = os.getenv("NET_CHECK_MODE", "skip").strip().lower()
NET_CHECK_RUN = os.getenv("NET_CHECK_RUN", "once").strip().lower()

# Offline copy of the site; 0 picks a free port
MOCK_SITE_PORT = env_int("MOCK_SITE_PORT", 0)


def browser_launch_args() -> list:
    """Chromium command line switches for the configured window geometry."""
    args = []
    if MAXIMIZE_BROWSER:
        args.append("--start-maximized")
    else:
        if PW_WINDOW_SIZE:
            args.append(f"--window-size={PW_WINDOW_SIZE}")
        if PW_WINDOW_POS:
            args.append(f"--window-position={PW_WINDOW_POS}")
    return args
