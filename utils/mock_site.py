"""
Mock Dealls site - a local HTTP server that serves the pages the job search
journey relies on, so the page objects can be exercised without the live site.

Routes:
    GET /                      homepage with the search form
    GET /jobs?searchJob=<k>    results listing (one card per matching job)
    GET /loker/<slug>          job details; ?omit=benefits,apply drops sections
    HEAD <any of the above>    same status and headers, no body

Usage:
    with MockSiteServer() as base_url:
        page.goto(base_url)
"""
import html
import logging
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from socketserver import ThreadingMixIn
from urllib.parse import parse_qs, unquote, urlparse

from utils.config import MOCK_SITE_PORT

logger = logging.getLogger(__name__)

JOB_CATALOG = [
    {"slug": "software-developer~pt-maju-digital", "title": "Software Developer",
     "company": "PT Maju Digital", "location": "Jakarta Selatan"},
    {"slug": "senior-software-developer~kopi-teknologi", "title": "Senior Software Developer",
     "company": "Kopi Teknologi", "location": "Bandung"},
    {"slug": "software-engineer-backend~nusantara-pay", "title": "Software Engineer (Backend)",
     "company": "Nusantara Pay", "location": "Remote"},
    {"slug": "frontend-developer~rumah-kreatif", "title": "Frontend Developer",
     "company": "Rumah Kreatif", "location": "Yogyakarta"},
    {"slug": "data-analyst~pasar-data", "title": "Data Analyst",
     "company": "Pasar Data", "location": "Surabaya"},
    {"slug": "product-designer~ruang-desain", "title": "Product Designer",
     "company": "Ruang Desain", "location": "Jakarta Barat"},
]

DETAIL_SECTIONS = ("description", "qualifications", "apply", "benefits")

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="id">
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
{body}
</body>
</html>
"""

_SEARCH_FORM = """<form action="/jobs" method="get" role="search">
  <input type="text" name="searchJob" value="{value}"
         aria-label="Search by job title, company, or skill"
         placeholder="Search by job title, company, or skill">
  <button type="submit">Cari</button>
</form>"""


def match_jobs(keyword: str, catalog=None) -> list:
    """Jobs whose title contains any word of `keyword` (case-insensitive); all jobs for an empty keyword."""
    catalog = JOB_CATALOG if catalog is None else catalog
    tokens = [t for t in (keyword or "").lower().split() if t]
    if not tokens:
        return list(catalog)
    return [job for job in catalog if any(t in job["title"].lower() for t in tokens)]


def render_home_page() -> str:
    body = "\n".join([
        "<header><h1>Cari Lowongan Kerja Pakai Dealls</h1></header>",
        "<main>",
        _SEARCH_FORM.format(value=""),
        "</main>",
    ])
    return _PAGE_TEMPLATE.format(title="Lowongan Kerja Terbaru | Dealls", body=body)


def render_results_page(keyword: str, catalog=None) -> str:
    jobs = match_jobs(keyword, catalog)
    cards = []
    for job in jobs:
        # heading sits four levels below the card link, like the real listing markup
        cards.append(
            f'<a class="job-card" href="/loker/{html.escape(job["slug"])}" target="_blank">'
            '<div class="card"><div class="card-header"><div class="card-title">'
            f'<h2>{html.escape(job["title"])}</h2>'
            '</div></div>'
            f'<p>{html.escape(job["company"])} - {html.escape(job["location"])}</p>'
            '</div></a>'
        )
    if not cards:
        cards.append('<p class="empty">Tidak ada lowongan yang cocok.</p>')

    body = "\n".join([
        "<main>",
        _SEARCH_FORM.format(value=html.escape(keyword or "", quote=True)),
        f'<section class="results" aria-label="{len(jobs)} lowongan">',
        "\n".join(cards),
        "</section>",
        "</main>",
    ])
    return _PAGE_TEMPLATE.format(title=f"Lowongan {html.escape(keyword or '')} | Dealls", body=body)


def render_job_page(job: dict, omit=()) -> str:
    parts = [f"<main><h1>{html.escape(job['title'])}</h1>",
             f"<p>{html.escape(job['company'])} - {html.escape(job['location'])}</p>"]
    if "apply" not in omit:
        parts.append('<button type="button">Lamar Sekarang</button>')
    if "description" not in omit:
        parts.append("<h2>Deskripsi Pekerjaan</h2>"
                     "<p>Membangun dan memelihara layanan web untuk jutaan pengguna.</p>")
    if "qualifications" not in omit:
        parts.append("<h2>Kualifikasi</h2>"
                     "<ul><li>Pengalaman 2 tahun</li><li>Menguasai Python atau Go</li></ul>")
    if "benefits" not in omit:
        parts.append("<h3>Benefit Perusahaan</h3>"
                     "<ul><li>Asuransi kesehatan</li><li>Kerja hybrid</li></ul>")
    parts.append("</main>")
    return _PAGE_TEMPLATE.format(
        title=f"{html.escape(job['title'])} di {html.escape(job['company'])} | Dealls",
        body="\n".join(parts),
    )


class ThreadingHTTPServer(ThreadingMixIn, HTTPServer):
    """Handle requests in a separate thread."""
    daemon_threads = True
    allow_reuse_address = True


class MockSiteHandler(BaseHTTPRequestHandler):
    """Serves the homepage, results listing and job details pages."""

    head_only = False

    def do_HEAD(self):
        # connectivity checks send HEAD before falling back to GET
        self.head_only = True
        self.do_GET()

    def do_GET(self):
        parsed = urlparse(self.path)
        query = parse_qs(parsed.query)
        catalog = getattr(self.server, "catalog", JOB_CATALOG)

        if parsed.path in ("/", ""):
            self._send_html(render_home_page())
        elif parsed.path.rstrip("/") == "/jobs":
            keyword = query.get("searchJob", [""])[0]
            self._send_html(render_results_page(keyword, catalog))
        elif parsed.path.startswith("/loker/"):
            slug = unquote(parsed.path[len("/loker/"):]).strip("/")
            job = next((j for j in catalog if j["slug"] == slug), None)
            if job is None:
                self._send_html(_PAGE_TEMPLATE.format(title="Not Found | Dealls", body="<h1>404</h1>"), status=404)
                return
            omit = {s.strip() for v in query.get("omit", []) for s in v.split(",") if s.strip()}
            self._send_html(render_job_page(job, omit))
        else:
            self._send_html(_PAGE_TEMPLATE.format(title="Not Found | Dealls", body="<h1>404</h1>"), status=404)

    def _send_html(self, content: str, status: int = 200):
        payload = content.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if not self.head_only:
            self.wfile.write(payload)

    def log_message(self, format, *args):
        logger.debug("mock site: " + format, *args)


class MockSiteServer:
    """Runs the mock site on a daemon thread; `start()` returns its base URL."""

    def __init__(self, host: str = "127.0.0.1", port: int = MOCK_SITE_PORT, catalog=None):
        self.host = host
        self.port = port
        self.catalog = JOB_CATALOG if catalog is None else catalog
        self._httpd = None
        self._thread = None

    @property
    def base_url(self) -> str:
        if self._httpd is None:
            raise RuntimeError("Mock site is not running")
        return f"http://{self.host}:{self._httpd.server_address[1]}/"

    def start(self) -> str:
        if self._httpd is not None:
            return self.base_url
        self._httpd = ThreadingHTTPServer((self.host, self.port), MockSiteHandler)
        self._httpd.catalog = self.catalog
        self._thread = threading.Thread(target=self._httpd.serve_forever, name="mock-dealls-site", daemon=True)
        self._thread.start()
        logger.info(f"Mock Dealls site listening on {self.base_url}")
        return self.base_url

    def stop(self):
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join(timeout=5)
        logger.info("Mock Dealls site stopped")
        self._httpd = None
        self._thread = None

    def __enter__(self) -> str:
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
