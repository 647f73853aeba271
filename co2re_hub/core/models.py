"""
Core data models for the CO2RE ingestion pipeline.

Documents and funding opportunities are the two persisted entities. The
remaining dataclasses describe what flows between the scrapers, the
classifier and the services.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set


class DocumentCategory(str, Enum):
    """
    Document categories, in classifier registration order.

    GENERAL is only assigned when no category scores above zero.
    """
    POLICY_GOVERNANCE = "Policy & Governance"
    MRV_MONITORING = "MRV & Monitoring"
    TECHNICAL_RESEARCH = "Technical Research"
    DECISION_SUPPORT = "Decision Support"
    GENERAL = "General"


class DocumentType(str, Enum):
    """Mutually exclusive document types."""
    PUBLICATION = "publication"
    POLICY_BRIEF = "policy-brief"
    REPORT = "report"
    ARTICLE = "article"
    WORKSHOP = "workshop"


class FundingType(str, Enum):
    """Kinds of funding opportunity."""
    GRANT = "grant"
    VC = "vc"
    PHILANTHROPY = "philanthropy"
    COMPETITION = "competition"


@dataclass
class Document:
    """
    A CO2RE document (page, post or PDF).

    Attributes:
        id: Stable identifier derived from the source URL (or WordPress post id)
        title: Display title
        content: Plain-text body
        excerpt: Short summary (<= 200 chars + ellipsis)
        url: Canonical URL
        category: One of DocumentCategory values
        type: One of DocumentType values
        theme: De-duplicated theme names
        authors: Author names
        published_date: ISO-8601 publication timestamp
        tags: De-duplicated tags
        pdf_url: Linked PDF, if any
        relevance_score: 0-100 additive quality score
        download_count: Download counter owned by the UI
        structured_fields: Fields supplied by a structured source (never persisted)
    """
    id: str
    title: str
    content: str
    excerpt: str
    url: str
    category: str
    type: str
    theme: List[str] = field(default_factory=list)
    authors: List[str] = field(default_factory=list)
    published_date: str = ""
    tags: List[str] = field(default_factory=list)
    pdf_url: Optional[str] = None
    relevance_score: Optional[int] = None
    download_count: Optional[int] = None
    structured_fields: Set[str] = field(default_factory=set, compare=False, repr=False)


@dataclass
class FundingOpportunity:
    """
    A funding opportunity shown in the funding directory.

    match_score is not intrinsic: it is computed against a FunderProfile and
    may be overwritten in place.
    """
    id: str
    title: str
    organization: str
    type: str
    amount: str
    description: str
    website: str
    location: str
    last_updated: str
    requirements: List[str] = field(default_factory=list)
    focus_areas: List[str] = field(default_factory=list)
    stage: List[str] = field(default_factory=list)
    deadline: Optional[str] = None
    contact_email: Optional[str] = None
    match_score: Optional[int] = None


@dataclass
class CDRFunderProfile:
    """
    Raw profile of a CDR-focused funder, before conversion to a
    FundingOpportunity.

    Carries the investor-specific fields (recent investments, thesis)
    that the funding directory does not persist.
    """
    id: str
    title: str
    organization: str
    type: str
    amount: str
    description: str
    requirements: List[str]
    deadline: str
    url: str
    focus_areas: List[str]
    stage: List[str]
    geography: List[str]
    contact_info: str
    recent_investments: List[str]
    investment_thesis: str
    created_at: str

    def to_opportunity(self) -> FundingOpportunity:
        """Convert to the persisted FundingOpportunity shape."""
        return FundingOpportunity(
            id=self.id,
            title=self.title,
            organization=self.organization,
            type=self.type,
            amount=self.amount,
            deadline=self.deadline,
            description=self.description,
            requirements=list(self.requirements),
            website=self.url,
            contact_email=self.contact_info if "@" in (self.contact_info or "") else None,
            focus_areas=list(self.focus_areas),
            stage=list(self.stage),
            location=", ".join(self.geography),
            last_updated=self.created_at,
        )


@dataclass
class FunderProfile:
    """
    Caller-supplied profile that funding opportunities are matched against.

    Attributes:
        stage: Company stage, e.g. "Seed"
        focus_areas: Technology areas of interest
        preferred_funding_types: FundingType values the caller prefers
    """
    stage: Optional[str] = None
    focus_areas: List[str] = field(default_factory=list)
    preferred_funding_types: List[str] = field(default_factory=list)


@dataclass
class CategoryResult:
    """Output of SmartCategorizer.categorize()."""
    category: str
    confidence: int
    themes: List[str]
    tags: List[str]
    type: str


@dataclass
class PageLink:
    """Hyperlink found on a scraped page."""
    href: str
    text: str


@dataclass
class ScrapedPage:
    """
    Web page rendered to plain text.

    Attributes:
        url: URL that was fetched
        text: Readable text content
        metadata: Page metadata ("title", "published_time" when present)
        links: Absolute links found on the page
    """
    url: str
    text: str
    metadata: Dict[str, Optional[str]] = field(default_factory=dict)
    links: List[PageLink] = field(default_factory=list)


@dataclass
class JsonResponse:
    """Status code and decoded body of a JSON API call."""
    status: int
    body: Any


@dataclass
class DocumentSeed:
    """Seed page of the document pipeline with its title and category hint."""
    url: str
    title: str
    category: str


@dataclass
class FunderSource:
    """Registry entry for a CDR-focused funder."""
    name: str
    url: str
    type: str
    focus: str
    description: str


@dataclass
class IngestionResult:
    """Terminal outcome of an ingestion run, as reported to the UI."""
    success: bool
    count: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"success": self.success, "count": self.count, "message": self.message}
