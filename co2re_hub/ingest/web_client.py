"""
HTTP capability used by the scrapers: page scraping, PDF/text extraction
and JSON API calls.

All network, HTTP-status and decoding failures surface as
SourceUnreachableError; a PDF that yields no text raises
ParseFailureError.
"""

import io
import logging
from typing import Any, Dict, Optional

import certifi
import pdfplumber
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from co2re_hub.core.constants import (
    BACKOFF_FACTOR,
    DEFAULT_HEADERS,
    MAX_PDF_BYTES,
    MAX_RETRIES,
    REQUEST_TIMEOUT,
    RETRY_STATUS_CODES,
)
from co2re_hub.core.errors import ParseFailureError, SourceUnreachableError
from co2re_hub.core.models import JsonResponse, ScrapedPage
from co2re_hub.core.utils import clean_text
from co2re_hub.extract.html_text import render_html

logger = logging.getLogger(__name__)


def create_session() -> requests.Session:
    """Create a requests session with retry logic."""
    session = requests.Session()
    retry_strategy = Retry(
        total=MAX_RETRIES,
        backoff_factor=BACKOFF_FACTOR,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update(DEFAULT_HEADERS)
    return session


def is_pdf_content(content_type: str, content: bytes) -> bool:
    """
    Detect if content is a PDF from the Content-Type header or the
    %PDF- file signature.
    """
    if "application/pdf" in (content_type or "").lower():
        return True
    return content.startswith(b"%PDF-")


def extract_pdf_text(content: bytes) -> str:
    """
    Extract text from PDF bytes using pdfplumber.

    Raises:
        ParseFailureError: If the bytes are not a readable PDF
    """
    text_parts = []
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            for page_num, page in enumerate(pdf.pages, 1):
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)
                else:
                    logger.debug(f"No text on page {page_num}")
    except Exception as e:
        raise ParseFailureError(f"Unreadable PDF: {e}") from e

    return clean_text("\n\n".join(text_parts))


class WebClient:
    """
    Fetches pages, documents and JSON for the scrapers.

    Usage:
        client = WebClient()
        page = client.scrape_url("https://co2re.org/research/")
        text = client.extract_text_from_url("https://co2re.org/files/brief.pdf")
        resp = client.fetch_json("https://co2re.org/wp-json/wp/v2/posts", {"per_page": 1})
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: int = REQUEST_TIMEOUT):
        """
        Initialize client.

        Args:
            session: Optional requests.Session (defaults to a retrying session)
            timeout: Per-request timeout in seconds
        """
        self.session = session or create_session()
        self.timeout = timeout

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> requests.Response:
        try:
            resp = self.session.get(
                url,
                params=params,
                timeout=self.timeout,
                verify=certifi.where(),
                **kwargs,
            )
        except requests.RequestException as e:
            raise SourceUnreachableError(f"Request failed: {e}", url=url) from e
        return resp

    def scrape_url(self, url: str) -> ScrapedPage:
        """
        Fetch an HTML page and render it to text, metadata and links.

        Raises:
            SourceUnreachableError: On network failure or a non-2xx status
        """
        resp = self._get(url)
        if not resp.ok:
            raise SourceUnreachableError(f"HTTP {resp.status_code}", url=url)

        page = render_html(resp.text, resp.url or url)
        logger.debug(f"Scraped {url} ({len(page.text)} chars, {len(page.links)} links)")
        return page

    def extract_text_from_url(self, url: str) -> str:
        """
        Fetch a document (PDF or HTML) and return its plain text.

        Raises:
            SourceUnreachableError: On network failure, a non-2xx status or
                an oversized body
            ParseFailureError: If no text could be extracted
        """
        resp = self._get(url)
        if not resp.ok:
            raise SourceUnreachableError(f"HTTP {resp.status_code}", url=url)

        content = resp.content
        if len(content) > MAX_PDF_BYTES:
            raise SourceUnreachableError(f"Document too large ({len(content)} bytes)", url=url)

        content_type = resp.headers.get("Content-Type", "")
        if is_pdf_content(content_type, content):
            text = extract_pdf_text(content)
        else:
            text = render_html(resp.text, url).text

        if not text.strip():
            raise ParseFailureError("No text extracted", url=url)
        return text

    def fetch_json(self, url: str, query: Optional[Dict[str, Any]] = None) -> JsonResponse:
        """
        GET a JSON endpoint.

        Non-2xx statuses are returned, not raised, so callers can branch on
        them. A 2xx body that is not JSON raises SourceUnreachableError.
        """
        resp = self._get(url, params=query, headers={"Accept": "application/json"})
        if not resp.ok:
            return JsonResponse(status=resp.status_code, body=None)

        try:
            body = resp.json()
        except ValueError as e:
            raise SourceUnreachableError(f"Non-JSON response: {e}", url=url) from e
        return JsonResponse(status=resp.status_code, body=body)
