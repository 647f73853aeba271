"""
Document library entry points: update from CO2RE, list, search and stats.
"""

import logging
from collections import Counter
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil.relativedelta import relativedelta

from co2re_hub.classify.categorizer import SmartCategorizer
from co2re_hub.core.models import Document, IngestionResult
from co2re_hub.core.utils import dedupe, parse_date_maybe
from co2re_hub.ingest.document_scraper import CO2REDocumentScraper
from co2re_hub.ingest.fallback_content import fallback_documents
from co2re_hub.monitoring.scraper_stats import ScraperMonitor
from co2re_hub.storage.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Usage:
        service = DocumentService(scraper, DocumentRepository(store))
        result = service.update_documents()
        print(result.to_dict())
    """

    def __init__(
        self,
        scraper: CO2REDocumentScraper,
        repository: DocumentRepository,
        categorizer: Optional[SmartCategorizer] = None,
        monitor: Optional[ScraperMonitor] = None,
    ):
        self.scraper = scraper
        self.repository = repository
        self.categorizer = categorizer or SmartCategorizer()
        self.monitor = monitor or scraper.monitor

    def update_documents(self) -> IngestionResult:
        """
        Scrape, classify and store every CO2RE document.

        Never raises: every failure is reported in the returned result.
        """
        try:
            logger.info("Starting CO2RE document update")
            documents = self.scraper.scrape_all_documents()

            if not documents:
                return IngestionResult(False, 0, "No documents found during scraping")

            logger.info(f"Applying smart categorization to {len(documents)} documents")
            enriched = [self.enrich(doc) for doc in documents]

            summary = self.repository.upsert_many(enriched, monitor=self.monitor)

            logger.info(f"Document categories: {dict(Counter(d.category for d in enriched))}")

            return IngestionResult(
                True,
                summary.stored,
                f"Successfully updated {summary.stored} documents from CO2RE with smart categorization",
            )
        except Exception as e:
            logger.error(f"Error updating documents: {e}")
            return IngestionResult(False, 0, f"Error updating documents: {e}")

    def enrich(self, doc: Document) -> Document:
        """
        Apply the classifier to a scraped document.

        The classifier's category replaces the scraped one unless the
        category came from a structured source. Themes and tags are
        merged; relevance keeps the higher of the two scores.
        """
        result = self.categorizer.categorize(doc.title, doc.content, doc.url)

        category = doc.category if "category" in doc.structured_fields else result.category

        return replace(
            doc,
            category=category,
            type=result.type,
            theme=dedupe(doc.theme + result.themes),
            tags=dedupe(doc.tags + result.tags),
            relevance_score=max(doc.relevance_score or 0, result.confidence),
        )

    def get_documents(self) -> List[Document]:
        """Stored documents, or the static set when the store is empty or unavailable."""
        try:
            documents = self.repository.list_documents()
        except Exception as e:
            logger.error(f"Error fetching documents: {e}")
            return fallback_documents(self.scraper.base_url)

        if not documents:
            return fallback_documents(self.scraper.base_url)
        return documents

    def search_documents(
        self,
        query: str = "",
        category: Optional[str] = None,
        type: Optional[str] = None,
        theme: Optional[str] = None,
    ) -> List[Document]:
        try:
            return self.repository.search_documents(query, category=category, type=type, theme=theme)
        except Exception as e:
            logger.error(f"Error searching documents: {e}")
            return []

    def get_document_stats(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Counts by category and type, plus documents published within the
        last month.

        Args:
            now: Reference time (defaults to the current UTC time)
        """
        documents = self.get_documents()
        now = now or datetime.now(timezone.utc)
        one_month_ago = now - relativedelta(months=1)

        recent = 0
        for doc in documents:
            published = parse_date_maybe(doc.published_date)
            if published is None:
                continue
            if published.tzinfo is None:
                published = published.replace(tzinfo=timezone.utc)
            if published > one_month_ago:
                recent += 1

        return {
            "total": len(documents),
            "by_category": dict(Counter(doc.category for doc in documents)),
            "by_type": dict(Counter(doc.type for doc in documents)),
            "recent_count": recent,
        }
