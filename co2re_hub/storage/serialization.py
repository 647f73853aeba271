"""
Conversion between entity dataclasses and flat store rows.

Rows use the dashboard's camelCase column names. List-valued fields are
stored as JSON strings and decoded on read.
"""

import json
import logging
from typing import Any, Dict, List

from co2re_hub.core.models import Document, FundingOpportunity

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def encode_list(values: List[str]) -> str:
    return json.dumps(list(values or []))


def decode_list(value: Any) -> List[str]:
    """
    Decode a JSON list column.

    Rows written by other clients may already hold a list; anything
    undecodable reads as empty.
    """
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError):
        logger.warning(f"Could not decode list column: {str(value)[:50]}")
        return []
    return decoded if isinstance(decoded, list) else []


def document_to_row(doc: Document) -> Row:
    """Document -> row (without timestamps)."""
    return {
        "id": doc.id,
        "title": doc.title,
        "content": doc.content,
        "excerpt": doc.excerpt,
        "url": doc.url,
        "pdfUrl": doc.pdf_url or "",
        "category": doc.category,
        "type": doc.type,
        "theme": encode_list(doc.theme),
        "authors": encode_list(doc.authors),
        "publishedDate": doc.published_date,
        "tags": encode_list(doc.tags),
        "relevanceScore": doc.relevance_score or 0,
        "downloadCount": doc.download_count or 0,
    }


def row_to_document(row: Row) -> Document:
    return Document(
        id=row["id"],
        title=row.get("title") or "",
        content=row.get("content") or "",
        excerpt=row.get("excerpt") or "",
        url=row.get("url") or "",
        pdf_url=row.get("pdfUrl") or None,
        category=row.get("category") or "",
        type=row.get("type") or "",
        theme=decode_list(row.get("theme")),
        authors=decode_list(row.get("authors")),
        published_date=row.get("publishedDate") or "",
        tags=decode_list(row.get("tags")),
        relevance_score=row.get("relevanceScore"),
        download_count=row.get("downloadCount"),
    )


def funding_to_row(opp: FundingOpportunity) -> Row:
    """
    FundingOpportunity -> row (without timestamps or isActive).

    matchScore is left out: it belongs to the matching pass, not to
    ingestion, and must not be reset by a re-scrape.
    """
    return {
        "id": opp.id,
        "title": opp.title,
        "organization": opp.organization,
        "type": opp.type,
        "amount": opp.amount,
        "deadline": opp.deadline or None,
        "description": opp.description,
        "requirements": encode_list(opp.requirements),
        "website": opp.website,
        "contactEmail": opp.contact_email or None,
        "focusAreas": encode_list(opp.focus_areas),
        "stage": encode_list(opp.stage),
        "location": opp.location,
        "lastUpdated": opp.last_updated,
    }


def row_to_funding(row: Row) -> FundingOpportunity:
    return FundingOpportunity(
        id=row["id"],
        title=row.get("title") or "",
        organization=row.get("organization") or "",
        type=row.get("type") or "",
        amount=row.get("amount") or "",
        deadline=row.get("deadline"),
        description=row.get("description") or "",
        requirements=decode_list(row.get("requirements")),
        website=row.get("website") or "",
        contact_email=row.get("contactEmail"),
        focus_areas=decode_list(row.get("focusAreas")),
        stage=decode_list(row.get("stage")),
        location=row.get("location") or "",
        match_score=row.get("matchScore"),
        last_updated=row.get("lastUpdated") or "",
    )
