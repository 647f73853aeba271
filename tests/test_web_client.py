"""
Tests for HTML rendering and the WebClient (with a stubbed session).
"""

import pytest
import requests

from co2re_hub.core.errors import ParseFailureError, SourceUnreachableError
from co2re_hub.core.utils import generate_document_id, generate_excerpt, parse_date_maybe, strip_html
from co2re_hub.extract.html_text import render_html
from co2re_hub.ingest.web_client import WebClient, create_session, is_pdf_content


PAGE_HTML = """
<html>
  <head>
    <title>Fallback title</title>
    <meta property="og:title" content="GGR Policy Brief">
    <meta property="article:published_time" content="2024-03-01T09:00:00+00:00">
  </head>
  <body>
    <nav><a href="/publications/">Publications</a></nav>
    <main>
      <h1>GGR Policy Brief</h1>
      <p>Greenhouse gas removal needs policy support.</p>
      <ul><li><p>Nested paragraph</p></li></ul>
      <a href="/files/brief.pdf">Download the full brief</a>
      <a href="javascript:void(0)">Menu</a>
    </main>
    <footer>Copyright CO2RE</footer>
    <script>var x = 1;</script>
  </body>
</html>
"""


class FakeResponse:
    def __init__(self, status_code=200, text="", content=None, headers=None, json_body=None, url=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self.text = text
        self.content = content if content is not None else text.encode("utf-8")
        self.headers = headers or {}
        self.url = url
        self._json_body = json_body

    def json(self):
        if self._json_body is None:
            raise ValueError("No JSON object could be decoded")
        return self._json_body


class FakeSession:
    def __init__(self, responses):
        self.responses = responses
        self.requests = []

    def get(self, url, params=None, timeout=None, verify=None, headers=None):
        self.requests.append({"url": url, "params": params, "timeout": timeout, "headers": headers})
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


class TestRenderHtml:
    """Tests for HTML -> ScrapedPage."""

    def test_text_drops_noise(self):
        page = render_html(PAGE_HTML, "https://co2re.org/policy/")

        assert "Greenhouse gas removal needs policy support." in page.text
        assert "Copyright" not in page.text
        assert "var x" not in page.text
        assert page.text.count("Nested paragraph") == 1

    def test_metadata(self):
        page = render_html(PAGE_HTML, "https://co2re.org/policy/")
        assert page.metadata["title"] == "GGR Policy Brief"
        assert page.metadata["published_time"] == "2024-03-01T09:00:00+00:00"

    def test_links_are_absolute_and_keep_nav(self):
        page = render_html(PAGE_HTML, "https://co2re.org/policy/")
        hrefs = [link.href for link in page.links]

        assert "https://co2re.org/publications/" in hrefs
        assert "https://co2re.org/files/brief.pdf" in hrefs
        assert not any(h.startswith("javascript:") for h in hrefs)


class TestWebClient:
    """Tests for WebClient against a stubbed session."""

    def test_scrape_url(self):
        session = FakeSession({"https://co2re.org/policy/": FakeResponse(text=PAGE_HTML)})
        page = WebClient(session=session, timeout=5).scrape_url("https://co2re.org/policy/")

        assert page.metadata["title"] == "GGR Policy Brief"
        assert session.requests[0]["timeout"] == 5

    def test_scrape_url_http_error(self):
        session = FakeSession({"https://co2re.org/x/": FakeResponse(status_code=404)})
        with pytest.raises(SourceUnreachableError):
            WebClient(session=session).scrape_url("https://co2re.org/x/")

    def test_network_error_is_source_unreachable(self):
        session = FakeSession({"https://co2re.org/x/": requests.ConnectionError("refused")})
        with pytest.raises(SourceUnreachableError) as exc_info:
            WebClient(session=session).scrape_url("https://co2re.org/x/")
        assert exc_info.value.error_type == "source_unreachable"

    def test_fetch_json_ok(self):
        url = "https://co2re.org/wp-json/wp/v2/posts"
        session = FakeSession({url: FakeResponse(json_body=[{"id": 1}])})
        resp = WebClient(session=session).fetch_json(url, {"per_page": 1})

        assert resp.status == 200
        assert resp.body == [{"id": 1}]
        assert session.requests[0]["params"] == {"per_page": 1}

    def test_fetch_json_non_ok_returns_status(self):
        url = "https://co2re.org/wp-json/wp/v2/posts"
        session = FakeSession({url: FakeResponse(status_code=400)})
        resp = WebClient(session=session).fetch_json(url)
        assert resp.status == 400
        assert resp.body is None

    def test_fetch_json_html_body_raises(self):
        url = "https://co2re.org/wp-json/wp/v2/posts"
        session = FakeSession({url: FakeResponse(text="<html>maintenance</html>")})
        with pytest.raises(SourceUnreachableError):
            WebClient(session=session).fetch_json(url)

    def test_extract_text_from_html(self):
        url = "https://co2re.org/page/"
        session = FakeSession({url: FakeResponse(text=PAGE_HTML, headers={"Content-Type": "text/html"})})
        text = WebClient(session=session).extract_text_from_url(url)
        assert "policy support" in text

    def test_extract_text_empty_is_parse_failure(self):
        url = "https://co2re.org/empty/"
        session = FakeSession({url: FakeResponse(text="<html><body></body></html>")})
        with pytest.raises(ParseFailureError):
            WebClient(session=session).extract_text_from_url(url)

    def test_unreadable_pdf_is_parse_failure(self):
        url = "https://co2re.org/files/broken.pdf"
        session = FakeSession({url: FakeResponse(content=b"%PDF-1.4 garbage", headers={"Content-Type": "application/pdf"})})
        with pytest.raises(ParseFailureError):
            WebClient(session=session).extract_text_from_url(url)

    def test_is_pdf_content(self):
        assert is_pdf_content("application/pdf", b"")
        assert is_pdf_content("application/octet-stream", b"%PDF-1.7")
        assert not is_pdf_content("text/html", b"<html>")

    def test_create_session_has_retries(self):
        session = create_session()
        adapter = session.get_adapter("https://co2re.org")
        assert adapter.max_retries.total == 3
        assert 503 in adapter.max_retries.status_forcelist
        assert "Mozilla" in session.headers["User-Agent"]


class TestUtils:
    """Tests for id, excerpt and date helpers."""

    def test_document_id_uses_last_segment(self):
        assert generate_document_id("https://co2re.org/research/mrv/") == "co2re_mrv"
        assert generate_document_id("https://co2re.org/research/mrv") == "co2re_mrv"
        assert generate_document_id("https://co2re.org/files/ggr-brief.pdf") == "co2re_ggr_brief_pdf"

    def test_excerpt_truncates(self):
        excerpt = generate_excerpt("word " * 100)
        assert excerpt.endswith("...")
        assert len(excerpt) == 203

    def test_strip_html(self):
        assert strip_html("<p>Carbon&nbsp;removal <b>research</b></p>") == "Carbon removal research"

    def test_parse_iso_date_keeps_month(self):
        parsed = parse_date_maybe("2024-01-05T10:00:00Z")
        assert (parsed.year, parsed.month, parsed.day) == (2024, 1, 5)

    def test_parse_uk_date(self):
        parsed = parse_date_maybe("05/01/2024")
        assert (parsed.month, parsed.day) == (1, 5)

    def test_parse_garbage(self):
        assert parse_date_maybe("not a date") is None
        assert parse_date_maybe("") is None


@pytest.mark.skip(reason="Requires network access")
class TestLiveSite:
    """Integration tests against co2re.org."""

    def test_scrape_homepage(self):
        page = WebClient().scrape_url("https://co2re.org/")
        assert page.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
