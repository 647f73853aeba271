"""
Document persistence on top of a RecordStore.
"""

import logging
from typing import List, Optional

from tqdm import tqdm

from co2re_hub.core.constants import DOCUMENT_LIST_LIMIT, DOCUMENT_SEARCH_LIMIT
from co2re_hub.core.models import Document
from co2re_hub.monitoring.scraper_stats import ScraperMonitor
from co2re_hub.storage.record_store import RecordStore, UpsertSummary, upsert_row
from co2re_hub.storage.serialization import document_to_row, row_to_document

logger = logging.getLogger(__name__)


class DocumentRepository:
    """
    Store and query CO2RE documents.

    Usage:
        repo = DocumentRepository(MongoRecordStore.from_settings(settings, "documents"))
        summary = repo.upsert_many(documents)
        hits = repo.search_documents("biochar", category="MRV & Monitoring")
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def upsert(self, doc: Document) -> str:
        """
        Insert or update one document keyed on its id.

        Returns:
            "created" or "updated"

        Raises:
            PersistenceError: If the store rejects the write
        """
        return upsert_row(self.store, document_to_row(doc))

    def upsert_many(self, documents: List[Document], monitor: Optional[ScraperMonitor] = None) -> UpsertSummary:
        """
        Upsert a batch. A failing document is logged and counted, the rest
        of the batch still runs.
        """
        summary = UpsertSummary()

        for doc in tqdm(documents, desc="Storing documents", disable=None):
            try:
                outcome = self.upsert(doc)
            except Exception as e:
                logger.error(f"Error storing document {doc.id}: {e}")
                summary.failed += 1
                if monitor:
                    monitor.log_failure(doc.id, e, stage="persist", url=doc.url)
                continue

            if outcome == "created":
                summary.created += 1
            else:
                summary.updated += 1
            if monitor:
                monitor.log_attempt(
                    doc.id,
                    stage="persist",
                    success=True,
                    url=doc.url,
                    created=outcome == "created",
                    updated=outcome == "updated",
                )

        logger.info(
            f"Stored {summary.stored} documents "
            f"({summary.created} new, {summary.updated} updated, {summary.failed} failed)"
        )
        return summary

    def list_documents(self, limit: int = DOCUMENT_LIST_LIMIT) -> List[Document]:
        """Most recently published documents first."""
        rows = self.store.list(order_by={"publishedDate": "desc"}, limit=limit)
        return [row_to_document(row) for row in rows]

    def search_documents(
        self,
        query: str = "",
        category: Optional[str] = None,
        type: Optional[str] = None,
        theme: Optional[str] = None,
        limit: int = DOCUMENT_SEARCH_LIMIT,
    ) -> List[Document]:
        """
        Filter documents, most relevant first.

        category and type are exact filters applied by the store. query is
        a case-insensitive substring of title, content, excerpt or any tag;
        theme is a case-insensitive substring of any theme.
        """
        where = {}
        if category:
            where["category"] = category
        if type:
            where["type"] = type

        rows = self.store.list(where=where, order_by={"relevanceScore": "desc"}, limit=limit)
        documents = [row_to_document(row) for row in rows]

        if query:
            needle = query.lower()
            documents = [
                doc for doc in documents
                if needle in doc.title.lower()
                or needle in doc.content.lower()
                or needle in doc.excerpt.lower()
                or any(needle in tag.lower() for tag in doc.tags)
            ]

        if theme:
            wanted = theme.lower()
            documents = [doc for doc in documents if any(wanted in t.lower() for t in doc.theme)]

        return documents
