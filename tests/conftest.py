"""
Shared fakes for the ingestion tests: an in-memory record store, a scripted
web client and a pacer that records delays instead of sleeping.
"""

from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from co2re_hub.core.errors import PersistenceError, SourceUnreachableError
from co2re_hub.core.models import JsonResponse, PageLink, ScrapedPage
from co2re_hub.ingest.pacing import Pacer
from co2re_hub.monitoring.scraper_stats import ScraperMonitor


class InMemoryRecordStore:
    """RecordStore keeping rows in a dict, with optional injected failures."""

    def __init__(self, fail_ids=(), fail_list: bool = False):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.fail_ids = set(fail_ids)
        self.fail_list = fail_list
        self.created: List[str] = []
        self.updated: List[str] = []

    def list(self, where=None, order_by=None, limit=None):
        if self.fail_list:
            raise PersistenceError("store offline")

        rows = [
            dict(row) for row in self.rows.values()
            if all(row.get(k) == v for k, v in (where or {}).items())
        ]
        for name, direction in reversed(list((order_by or {}).items())):
            rows.sort(key=lambda r: (r.get(name) is not None, r.get(name)), reverse=direction == "desc")
        return rows[:limit] if limit else rows

    def create(self, record):
        if record["id"] in self.fail_ids:
            raise PersistenceError(f"rejected {record['id']}")
        if record["id"] in self.rows:
            raise PersistenceError(f"duplicate {record['id']}")
        self.rows[record["id"]] = dict(record)
        self.created.append(record["id"])
        return record

    def update(self, record_id, fields):
        if record_id in self.fail_ids:
            raise PersistenceError(f"rejected {record_id}")
        if record_id not in self.rows:
            raise PersistenceError(f"missing {record_id}")
        self.rows[record_id].update(fields)
        self.updated.append(record_id)


JsonHandler = Union[JsonResponse, Callable[[Optional[dict]], JsonResponse]]


class FakeWebClient:
    """
    Scripted WebClient. Unknown URLs raise SourceUnreachableError, like a
    dead host would.
    """

    def __init__(
        self,
        pages: Optional[Dict[str, ScrapedPage]] = None,
        texts: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, JsonHandler]] = None,
    ):
        self.pages = pages or {}
        self.texts = texts or {}
        self.json = json or {}
        self.calls: List[str] = []

    def scrape_url(self, url):
        self.calls.append(url)
        if url not in self.pages:
            raise SourceUnreachableError("connection refused", url=url)
        return self.pages[url]

    def extract_text_from_url(self, url):
        self.calls.append(url)
        if url not in self.texts:
            raise SourceUnreachableError("connection refused", url=url)
        return self.texts[url]

    def fetch_json(self, url, query=None):
        self.calls.append(url)
        if url not in self.json:
            raise SourceUnreachableError("connection refused", url=url)
        handler = self.json[url]
        return handler(query) if callable(handler) else handler


def make_page(url: str, text: str, title: Optional[str] = None, links=(), published_time=None) -> ScrapedPage:
    return ScrapedPage(
        url=url,
        text=text,
        metadata={"title": title, "published_time": published_time},
        links=[PageLink(href=href, text=label) for href, label in links],
    )


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def delays():
    """Seconds passed to the pacer's sleep, in call order."""
    return []


@pytest.fixture
def pacer(delays):
    return Pacer(sleep=delays.append)


@pytest.fixture
def monitor():
    return ScraperMonitor(run_id="test")
