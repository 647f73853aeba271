"""
Tests for the document and funding repositories over an in-memory store.
"""

import json

import pytest

from co2re_hub.core.errors import PersistenceError
from co2re_hub.core.models import Document, FunderProfile, FundingOpportunity
from co2re_hub.storage.document_repository import DocumentRepository
from co2re_hub.storage.funding_repository import FundingRepository
from co2re_hub.storage.serialization import decode_list, row_to_document

from conftest import InMemoryRecordStore


def make_document(doc_id="co2re_mrv", **overrides):
    fields = dict(
        id=doc_id,
        title="MRV Research",
        content="Monitoring and verification of biochar removals.",
        excerpt="Monitoring and verification",
        url=f"https://co2re.org/{doc_id}/",
        category="MRV & Monitoring",
        type="article",
        theme=["MRV", "Biochar"],
        authors=["CO2RE Team"],
        published_date="2024-02-01T00:00:00Z",
        tags=["monitoring", "biochar"],
        relevance_score=70,
    )
    fields.update(overrides)
    return Document(**fields)


def make_opportunity(opp_id="opp-1", **overrides):
    fields = dict(
        id=opp_id,
        title="DAC grant",
        organization="Innovate UK",
        type="grant",
        amount="£1M",
        description="Grant for direct air capture pilots",
        website="https://example.org/dac",
        location="United Kingdom",
        last_updated="2024-02-01T00:00:00+00:00",
        requirements=["UK-based company"],
        focus_areas=["Direct Air Capture", "BECCS"],
        stage=["Seed"],
    )
    fields.update(overrides)
    return FundingOpportunity(**fields)


class TestDocumentRepository:
    """Tests for DocumentRepository."""

    def test_upsert_creates_then_updates(self, store):
        repo = DocumentRepository(store)

        assert repo.upsert(make_document()) == "created"
        created_at = store.rows["co2re_mrv"]["createdAt"]

        assert repo.upsert(make_document(title="MRV Research (updated)")) == "updated"
        row = store.rows["co2re_mrv"]
        assert row["title"] == "MRV Research (updated)"
        assert row["createdAt"] == created_at
        assert row["updatedAt"] >= created_at
        assert len(store.rows) == 1

    def test_list_fields_stored_as_json(self, store):
        DocumentRepository(store).upsert(make_document())
        row = store.rows["co2re_mrv"]

        assert json.loads(row["theme"]) == ["MRV", "Biochar"]
        assert row["pdfUrl"] == ""
        assert row["relevanceScore"] == 70

    def test_round_trip(self, store):
        doc = make_document(pdf_url="https://co2re.org/files/mrv.pdf")
        DocumentRepository(store).upsert(doc)

        restored = row_to_document(store.rows[doc.id])
        assert set(restored.theme) == set(doc.theme)
        assert set(restored.tags) == set(doc.tags)
        assert set(restored.authors) == set(doc.authors)
        assert restored.pdf_url == doc.pdf_url

    def test_upsert_many_continues_after_failure(self, monitor):
        store = InMemoryRecordStore(fail_ids={"bad"})
        repo = DocumentRepository(store)
        docs = [make_document("a"), make_document("bad"), make_document("c")]

        summary = repo.upsert_many(docs, monitor=monitor)

        assert (summary.created, summary.updated, summary.failed) == (2, 0, 1)
        assert set(store.rows) == {"a", "c"}
        assert monitor.get_error_summary() == {"persistence_failure": 1}
        assert monitor.stats.records_created == 2

    def test_upsert_twice_is_idempotent(self, store):
        repo = DocumentRepository(store)
        docs = [make_document("a"), make_document("b")]

        repo.upsert_many(docs)
        summary = repo.upsert_many(docs)

        assert (summary.created, summary.updated) == (0, 2)
        assert set(store.rows) == {"a", "b"}

    def test_list_documents_newest_first(self, store):
        repo = DocumentRepository(store)
        repo.upsert(make_document("old", published_date="2023-01-01T00:00:00Z"))
        repo.upsert(make_document("new", published_date="2024-06-01T00:00:00Z"))

        assert [d.id for d in repo.list_documents()] == ["new", "old"]

    def test_search_documents(self, store):
        repo = DocumentRepository(store)
        repo.upsert(make_document("mrv", relevance_score=60))
        repo.upsert(make_document(
            "policy", title="Policy Brief", content="Governance of removals",
            excerpt="Governance", category="Policy & Governance", theme=["Policy & Governance"],
            tags=["policy"], relevance_score=90,
        ))

        assert [d.id for d in repo.search_documents()] == ["policy", "mrv"]
        assert [d.id for d in repo.search_documents("BIOCHAR")] == ["mrv"]
        assert [d.id for d in repo.search_documents(category="Policy & Governance")] == ["policy"]
        assert [d.id for d in repo.search_documents(theme="policy")] == ["policy"]
        assert repo.search_documents("nothing-matches") == []

    def test_search_matches_tags(self, store):
        repo = DocumentRepository(store)
        repo.upsert(make_document("tagged", title="T", content="C", excerpt="E", tags=["net-zero"]))
        assert [d.id for d in repo.search_documents("net-zero")] == ["tagged"]


class TestFundingRepository:
    """Tests for FundingRepository."""

    def test_create_marks_active(self, store):
        FundingRepository(store).upsert(make_opportunity())
        row = store.rows["opp-1"]

        assert row["isActive"] is True
        assert json.loads(row["focusAreas"]) == ["Direct Air Capture", "BECCS"]
        assert "matchScore" not in row

    def test_rescrape_keeps_match_score(self, store):
        repo = FundingRepository(store)
        repo.upsert(make_opportunity())
        store.rows["opp-1"]["matchScore"] = 85

        assert repo.upsert(make_opportunity(amount="£2M")) == "updated"
        assert store.rows["opp-1"]["matchScore"] == 85
        assert store.rows["opp-1"]["amount"] == "£2M"

    def test_list_opportunities_filters(self, store):
        repo = FundingRepository(store)
        repo.upsert(make_opportunity("grant-uk"))
        repo.upsert(make_opportunity(
            "vc-global", type="vc", location="Global", stage=["Series A"],
            focus_areas=["Biochar"], last_updated="2024-03-01T00:00:00+00:00",
        ))

        assert [o.id for o in repo.list_opportunities()] == ["vc-global", "grant-uk"]
        assert [o.id for o in repo.list_opportunities(type="vc")] == ["vc-global"]
        assert [o.id for o in repo.list_opportunities(stage="Seed")] == ["grant-uk"]
        assert [o.id for o in repo.list_opportunities(focus_area="biochar")] == ["vc-global"]
        assert [o.id for o in repo.list_opportunities(location="united kingdom")] == ["grant-uk"]

    def test_inactive_rows_hidden(self, store):
        repo = FundingRepository(store)
        repo.upsert(make_opportunity())
        store.rows["opp-1"]["isActive"] = False
        assert repo.list_opportunities() == []

    def test_top_matches(self, store):
        repo = FundingRepository(store)
        repo.upsert(make_opportunity("best"))
        repo.upsert(make_opportunity("worst", type="vc", location="Canada", stage=[], focus_areas=[]))

        profile = FunderProfile(stage="Seed", focus_areas=["Direct Air Capture"], preferred_funding_types=["grant"])
        top = repo.get_top_matches(profile, limit=1)

        assert [o.id for o in top] == ["best"]
        assert top[0].match_score == 85
        assert store.rows["worst"]["matchScore"] == 0

    def test_update_match_scores_skips_failures(self):
        store = InMemoryRecordStore()
        repo = FundingRepository(store)
        repo.upsert(make_opportunity("a"))
        repo.upsert(make_opportunity("b"))
        store.fail_ids = {"a"}

        assert repo.update_match_scores(FunderProfile(stage="Seed")) == 1

    def test_funding_stats(self, store):
        repo = FundingRepository(store)
        repo.upsert(make_opportunity("g1"))
        repo.upsert(make_opportunity("g2"))
        repo.upsert(make_opportunity("v1", type="vc", last_updated="2025-01-01T00:00:00+00:00"))

        stats = repo.get_funding_stats()

        assert stats["total"] == 3
        assert stats["by_type"] == [{"type": "grant", "count": 2}, {"type": "vc", "count": 1}]
        assert stats["last_updated"] == "2025-01-01T00:00:00+00:00"

    def test_store_errors_propagate_from_upsert(self):
        repo = FundingRepository(InMemoryRecordStore(fail_list=True))
        with pytest.raises(PersistenceError):
            repo.upsert(make_opportunity())


class TestSerialization:
    """Tests for the JSON list columns."""

    def test_decode_list_tolerates_bad_values(self):
        assert decode_list(None) == []
        assert decode_list("") == []
        assert decode_list("not json") == []
        assert decode_list('{"a": 1}') == []
        assert decode_list(["already", "a", "list"]) == ["already", "a", "list"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
