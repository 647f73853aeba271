"""
Tests for the document and funding services.
"""

from datetime import datetime, timezone

import pytest

from co2re_hub.core.models import FunderProfile, JsonResponse
from co2re_hub.ingest.document_scraper import CO2REDocumentScraper
from co2re_hub.ingest.funding_scraper import CDRFunderScraper, CDRFundingScraper
from co2re_hub.ingest.sources import CDR_FUNDER_SOURCES
from co2re_hub.services.document_service import DocumentService
from co2re_hub.services.funding_service import FundingService
from co2re_hub.storage.document_repository import DocumentRepository
from co2re_hub.storage.funding_repository import FundingRepository

from conftest import FakeWebClient, InMemoryRecordStore
from test_document_scraper import POSTS_URL, make_post, paged_posts

BASE = "https://co2re.org"


@pytest.fixture
def document_service(store, pacer, monitor):
    def build(client):
        scraper = CO2REDocumentScraper(client, pacer=pacer, monitor=monitor, base_url=BASE)
        return DocumentService(scraper, DocumentRepository(store), monitor=monitor)
    return build


@pytest.fixture
def funding_service(store, pacer, monitor):
    def build(client, sources=None):
        return FundingService(
            CDRFundingScraper(client, pacer=pacer, monitor=monitor),
            CDRFunderScraper(client, pacer=pacer, monitor=monitor, sources=sources),
            FundingRepository(store),
            monitor=monitor,
        )
    return build


class TestDocumentService:
    """Tests for DocumentService."""

    def test_update_with_everything_down_stores_fallback(self, document_service, store):
        result = document_service(FakeWebClient()).update_documents()

        assert result.success is True
        assert result.count == 17
        assert "17 documents" in result.message
        assert len(store.rows) == 17

    def test_update_twice_upserts(self, document_service, store):
        service = document_service(FakeWebClient())
        service.update_documents()
        first = {row_id: (row["category"], row["type"]) for row_id, row in store.rows.items()}

        result = service.update_documents()
        second = {row_id: (row["category"], row["type"]) for row_id, row in store.rows.items()}

        assert result.count == 17
        assert first == second
        assert len(store.updated) == 17

    def test_enrich_overrides_scraped_category(self, document_service, store):
        posts = [make_post(5, "Update", "policy governance regulation of removals", category="Announcements")]
        service = document_service(FakeWebClient(json={POSTS_URL: paged_posts([posts])}))

        service.update_documents()
        row = store.rows["5"]

        assert row["category"] == "Policy & Governance"
        assert row["relevanceScore"] >= 50

    def test_enrich_keeps_structured_category(self, document_service, store):
        posts = [make_post(
            6, "Biochar policy", "policy governance regulation legislation of biochar",
            category="MRV Updates", tags=[("Biochar", "biochar")],
        )]
        service = document_service(FakeWebClient(json={POSTS_URL: paged_posts([posts])}))

        service.update_documents()
        doc = DocumentRepository(store).list_documents()[0]

        assert doc.category == "MRV & Monitoring"
        # classifier themes and tags are merged without duplicates
        assert doc.theme[0] == "Biochar"
        assert doc.theme.count("Biochar") == 1
        assert "policy" in doc.tags
        assert doc.tags.count("biochar") == 1

    def test_update_reports_store_failure_counts(self, pacer, monitor):
        store = InMemoryRecordStore(fail_ids={"co2re_about"})
        scraper = CO2REDocumentScraper(FakeWebClient(), pacer=pacer, monitor=monitor, base_url=BASE)
        result = DocumentService(scraper, DocumentRepository(store), monitor=monitor).update_documents()

        assert result.success is True
        assert result.count == 16

    def test_update_never_raises(self, pacer, monitor):
        class ExplodingScraper:
            monitor = None

            def scrape_all_documents(self):
                raise RuntimeError("boom")

        service = DocumentService(ExplodingScraper(), DocumentRepository(InMemoryRecordStore()), monitor=monitor)
        result = service.update_documents()

        assert result.to_dict() == {"success": False, "count": 0, "message": "Error updating documents: boom"}

    def test_malformed_api_page_stores_fallback(self, document_service, store):
        service = document_service(FakeWebClient(json={POSTS_URL: JsonResponse(200, [None])}))

        result = service.update_documents()

        assert result.success is True
        assert result.count == 17
        assert len(store.rows) == 17

    def test_get_documents_falls_back_when_empty_or_down(self, document_service):
        service = document_service(FakeWebClient())
        assert len(service.get_documents()) == 17

        service.repository = DocumentRepository(InMemoryRecordStore(fail_list=True))
        assert len(service.get_documents()) == 17

    def test_search_returns_empty_on_store_error(self, document_service):
        service = document_service(FakeWebClient())
        service.repository = DocumentRepository(InMemoryRecordStore(fail_list=True))
        assert service.search_documents("biochar") == []

    def test_document_stats(self, document_service):
        service = document_service(FakeWebClient())
        service.update_documents()

        stats = service.get_document_stats(now=datetime(2024, 3, 25, tzinfo=timezone.utc))

        assert stats["total"] == 17
        assert sum(stats["by_category"].values()) == 17
        assert sum(stats["by_type"].values()) == 17
        # published between 2024-02-25 and now
        assert 0 < stats["recent_count"] < 17


class TestFundingService:
    """Tests for FundingService."""

    def test_scrape_with_everything_down(self, funding_service, store):
        result = funding_service(FakeWebClient()).scrape_funding_data()

        assert result.success is True
        # curated list plus one fallback profile per registered funder
        assert result.count == len(store.rows)
        assert any(row_id.startswith("cdr-") for row_id in store.rows)
        assert sum(1 for r in store.rows if r.startswith("cdr-")) == len(CDR_FUNDER_SOURCES)
        assert all(row["isActive"] is True for row in store.rows.values())

    def test_duplicate_ids_stored_once(self, funding_service, store):
        """Opportunities sharing an id across branches are counted and stored once."""
        service = funding_service(FakeWebClient(), sources=[])
        general = service.funding_scraper.scrape_all_sources()
        service.funding_scraper.scrape_all_sources = lambda: general + general[:2]

        result = service.scrape_funding_data()

        assert result.count == len(general)
        assert len(store.rows) == len(general)
        assert store.updated == []

    def test_cdr_branch_failure_uses_targeted_list(self, funding_service, monitor):
        service = funding_service(FakeWebClient())

        def explode():
            raise RuntimeError("registry unavailable")

        service.funder_scraper.scrape_all_cdr_funding = explode
        opportunities = service.scrape_cdr_funders()

        assert len(opportunities) == len(CDR_FUNDER_SOURCES)
        assert "funders" in monitor.stats.fallbacks_used

    def test_top_matches_and_stats(self, funding_service):
        service = funding_service(FakeWebClient(), sources=[])
        service.scrape_funding_data()

        profile = FunderProfile(stage="Seed", focus_areas=["Direct Air Capture"], preferred_funding_types=["grant"])
        top = service.get_top_matches(profile, limit=3)

        assert len(top) == 3
        scores = [o.match_score for o in top]
        assert scores == sorted(scores, reverse=True)

        stats = service.get_funding_stats()
        assert stats["total"] == len(service.list_opportunities(limit=100))

    def test_read_paths_survive_store_errors(self, funding_service):
        service = funding_service(FakeWebClient())
        service.repository = FundingRepository(InMemoryRecordStore(fail_list=True))

        assert service.list_opportunities() == []
        assert service.get_top_matches(FunderProfile()) == []
        assert service.update_match_scores(FunderProfile()) == 0
        assert service.get_funding_stats() == {"total": 0, "by_type": [], "last_updated": None}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
