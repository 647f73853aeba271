"""
Shared utility functions for ID generation, text cleanup, and date parsing.
"""

import hashlib
import re
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from dateutil import parser as dateparser

from co2re_hub.core.constants import EXCERPT_LENGTH


def _sanitize_segment(segment: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", segment)


def generate_document_id(url: str) -> str:
    """
    Derive a deterministic document id from a URL.

    The last non-empty path segment is used, so trailing slashes do not
    collapse every page onto the same id. A URL without a path falls back to
    its host; only an unparseable URL gets a random token.

    Examples:
        >>> generate_document_id("https://co2re.org/research/mrv/")
        'co2re_mrv'
        >>> generate_document_id("https://co2re.org/files/ggr-brief.pdf")
        'co2re_ggr_brief_pdf'
        >>> generate_document_id("https://co2re.org")
        'co2re_co2re_org'
    """
    parsed = urlparse(url or "")
    segments = [s for s in parsed.path.split("/") if s]
    if segments:
        return f"co2re_{_sanitize_segment(segments[-1])}"
    if parsed.netloc:
        return f"co2re_{_sanitize_segment(parsed.netloc)}"
    return f"co2re_{uuid.uuid4().hex[:9]}"


def slugify(text: str) -> str:
    """
    Lowercase slug used for stable funding-opportunity ids.

    Examples:
        >>> slugify("Counteract VC")
        'counteract-vc'
        >>> slugify("XPRIZE Carbon Removal")
        'xprize-carbon-removal'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return slug.strip("-")


def stable_id(text: str, prefix: str = "") -> str:
    """
    Short SHA1-based identifier for records without a natural key.

    Args:
        text: Text to hash (e.g. a scraped title)
        prefix: Optional prefix (e.g. "scraped-")

    Returns:
        Stable ID like "scraped-a1b2c3d4e5f6"
    """
    h = hashlib.sha1(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}{h}" if prefix else h


def clean_text(text: str) -> str:
    """
    Clean text by normalizing whitespace and removing extra newlines.

    Args:
        text: Raw text

    Returns:
        Cleaned text
    """
    # Replace multiple spaces with single space
    text = re.sub(r"[ \t]+", " ", text)
    # Replace multiple newlines with double newline
    text = re.sub(r"\n\s*\n+", "\n\n", text)
    return text.strip()


def strip_html(html: str) -> str:
    """
    Strip markup and decode entities from an HTML fragment.

    Examples:
        >>> strip_html("<p>Carbon&nbsp;removal <b>research</b></p>")
        'Carbon removal research'
    """
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(separator=" ")
    text = text.replace("\xa0", " ")
    return re.sub(r"\s+", " ", text).strip()


def generate_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    """
    Collapse whitespace and truncate to `length` characters plus "...".

    Examples:
        >>> generate_excerpt("Short\\n\\ntext")
        'Short text'
    """
    collapsed = re.sub(r"\s+", " ", content or "").strip()
    if len(collapsed) > length:
        return collapsed[:length] + "..."
    return collapsed


def parse_date_maybe(text: Optional[str]) -> Optional[datetime]:
    """
    Attempt to parse a date string, returning None on failure.

    Args:
        text: Date string (e.g. "2024-01-15T10:00:00Z" or "15 January 2024")

    Returns:
        Parsed datetime or None if parsing fails
    """
    if not text:
        return None
    text = text.strip()
    if not text:
        return None

    try:
        return dateparser.isoparse(text)
    except (ValueError, TypeError, OverflowError):
        pass

    # dayfirst=True handles UK date formats (DD/MM/YYYY)
    try:
        return dateparser.parse(text, dayfirst=True)
    except (ValueError, TypeError, OverflowError):
        return None


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def dedupe(items: Iterable[str]) -> List[str]:
    """
    De-duplicate while keeping first-seen order.

    Examples:
        >>> dedupe(["a", "b", "a"])
        ['a', 'b']
    """
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
