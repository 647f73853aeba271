"""
Heuristic field extraction from scraped page text.

Every extractor is a pure function that always returns a value: when the
text gives nothing usable, the static fallback for the organization or
funding type is returned instead.
"""

import re
from typing import List, Optional

from co2re_hub.core.constants import (
    BASE_RELEVANCE_SCORE,
    DEFAULT_AUTHOR,
    DEFAULT_CONTACT,
    DEFAULT_TAG,
    DEFAULT_THEME,
    DEFAULT_THESIS,
    SCRAPED_PLACEHOLDER_DESCRIPTION,
)
from co2re_hub.core.models import FundingOpportunity, FundingType
from co2re_hub.core.utils import dedupe, stable_id, utc_now_iso
from co2re_hub.extract import fallbacks


# =============================================================================
# FUNDER PAGES
# =============================================================================

AMOUNT_PATTERNS = [
    re.compile(r"\$[\d,]+[MBK]?"),
    re.compile(r"£[\d,]+[MBK]?"),
    re.compile(r"€[\d,]+[MBK]?"),
    re.compile(r"[\d,]+\s*million", re.IGNORECASE),
    re.compile(r"[\d,]+\s*billion", re.IGNORECASE),
]

FOCUS_KEYWORDS = [
    "direct air capture", "dac", "biochar", "beccs", "enhanced weathering",
    "ocean carbon removal", "biomass", "afforestation", "reforestation",
    "carbon utilization", "ccus", "mineralization", "soil carbon",
]

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

INVESTMENT_KEYWORDS = ["portfolio", "investments", "companies", "startups"]
COMPANY_PATTERNS = [
    re.compile(r"[A-Z][a-z]+\s+[A-Z][a-z]+"),
    re.compile(r"[A-Z][a-z]+(?:Tech|Labs|Inc|Corp|Ltd)"),
]

THESIS_KEYWORDS = ["thesis", "focus", "mission", "vision", "strategy"]

FUNDING_TEXT_KEYWORDS = [
    "funding", "grant", "investment", "competition", "prize", "programme", "initiative",
]
MAX_FUNDING_MENTIONS = 3


def _has_word(text: str, word: str) -> bool:
    return re.search(rf"\b{re.escape(word)}\b", text) is not None


def extract_funding_amount(content: str, org_name: str, funding_type: str) -> str:
    """
    First currency amount found in the text.

    Examples:
        >>> extract_funding_amount("We manage a $350M fund", "X", "vc")
        '$350M'
        >>> extract_funding_amount("no figures", "Unknown", "grant")
        '$1M-$10M'
    """
    for pattern in AMOUNT_PATTERNS:
        match = pattern.search(content or "")
        if match:
            return match.group(0).strip()
    return fallbacks.mock_amount(org_name, funding_type)


def extract_requirements(content: str, funding_type: str) -> List[str]:
    text = (content or "").lower()
    requirements = []

    if "early stage" in text or "seed" in text:
        requirements.append("Early-stage companies")
    if "series a" in text or "growth" in text:
        requirements.append("Growth-stage companies")
    if "carbon removal" in text or "cdr" in text:
        requirements.append("Carbon removal focus")
    if _has_word(text, "uk") or "united kingdom" in text:
        requirements.append("UK presence preferred")
    if "europe" in text:
        requirements.append("European operations")

    return requirements or fallbacks.mock_requirements(funding_type)


def extract_focus_areas(content: str, default_focus: str) -> List[str]:
    """Registry focus first, then every focus keyword present in the text."""
    text = (content or "").lower()
    areas = [default_focus]
    for keyword in FOCUS_KEYWORDS:
        if keyword in text:
            areas.append(keyword[0].upper() + keyword[1:])
    return dedupe(areas)


def extract_investment_stage(content: str, funding_type: str) -> List[str]:
    if funding_type != FundingType.VC.value:
        return ["Various stages"]

    text = (content or "").lower()
    stages = []
    if "pre-seed" in text:
        stages.append("Pre-seed")
    if "seed" in text:
        stages.append("Seed")
    if "series a" in text:
        stages.append("Series A")
    if "series b" in text:
        stages.append("Series B")
    if "growth" in text:
        stages.append("Growth")

    return stages or ["Seed", "Series A"]


def extract_geography(content: str, org_name: str) -> List[str]:
    text = content or ""
    lower = text.lower()
    geography = []

    if _has_word(lower, "uk") or "united kingdom" in lower or _has_word(org_name.lower(), "uk"):
        geography.append("United Kingdom")
    if "europe" in lower:
        geography.append("Europe")
    if "global" in lower or "worldwide" in lower:
        geography.append("Global")
    # "us" is only taken as the country when written in capitals
    if re.search(r"\bUSA?\b", text) or "united states" in lower:
        geography.append("United States")

    return geography or fallbacks.mock_geography(org_name)


def extract_contact_info(content: str) -> str:
    match = EMAIL_PATTERN.search(content or "")
    return match.group(0) if match else DEFAULT_CONTACT


def extract_recent_investments(content: str, org_name: str = "") -> List[str]:
    """
    Up to three capitalized company-like names, only when the page talks
    about a portfolio.
    """
    text = content or ""
    lower = text.lower()

    if any(keyword in lower for keyword in INVESTMENT_KEYWORDS):
        for pattern in COMPANY_PATTERNS:
            matches = pattern.findall(text)
            if matches:
                return matches[:3]

    return fallbacks.mock_investments(org_name)


def extract_investment_thesis(content: str) -> str:
    for keyword in THESIS_KEYWORDS:
        match = re.search(rf"{keyword}[^.]*\.", content or "", re.IGNORECASE)
        if match:
            return match.group(0).strip()
    return DEFAULT_THESIS


def extract_funding_mentions(
    text: str,
    funding_type: str,
    organization: str,
    website: str = "",
) -> List[FundingOpportunity]:
    """
    Turn funding-related lines of a portal page into placeholder
    opportunities for manual review.

    Args:
        text: Page text, one logical line per row
        funding_type: Type assigned to every extracted opportunity
        organization: Organization running the portal
        website: Portal URL recorded on each opportunity

    Returns:
        At most three opportunities
    """
    opportunities = []
    seen = set()
    now = utc_now_iso()

    for raw_line in (text or "").split("\n"):
        line = raw_line.strip()
        if not (20 < len(line) < 200) or line in seen:
            continue
        lower = line.lower()
        if not any(keyword in lower for keyword in FUNDING_TEXT_KEYWORDS):
            continue
        seen.add(line)

        opportunities.append(FundingOpportunity(
            id=stable_id(f"{organization}:{line}", prefix="scraped-"),
            title=line,
            organization=organization,
            type=funding_type,
            amount="TBD",
            description=SCRAPED_PLACEHOLDER_DESCRIPTION,
            requirements=["To be determined"],
            website=website,
            focus_areas=["Carbon Removal"],
            stage=["All stages"],
            location="United Kingdom",
            last_updated=now,
        ))
        if len(opportunities) >= MAX_FUNDING_MENTIONS:
            break

    return opportunities


# =============================================================================
# DOCUMENT PAGES
# =============================================================================

AUTHOR_PATTERNS = [
    re.compile(r"\b(?:Author|By|Written by)[:\s]+([^.\n]+)", re.IGNORECASE),
    re.compile(r"\b(?:Lead author|Principal investigator)[:\s]+([^.\n]+)", re.IGNORECASE),
    re.compile(r"\b(?:Research team|Team)[:\s]+([^.\n]+)", re.IGNORECASE),
]

# (theme, any-of keywords), checked as plain substrings
PAGE_THEMES = [
    ("Biochar", ["biochar"]),
    ("BECCS", ["beccs", "bioenergy"]),
    ("Direct Air Capture", ["dac", "direct air capture"]),
    ("Enhanced Weathering", ["enhanced weathering", "rock weathering"]),
    ("Peatland Restoration", ["peatland", "wetland", "restoration"]),
    ("Afforestation/Reforestation", ["afforestation", "reforestation", "forest"]),
    ("Ocean-based CDR", ["ocean", "marine"]),
    ("Soil Carbon", ["soil", "agriculture"]),
    ("Policy & Governance", ["policy", "governance"]),
    ("Societal Engagement", ["social", "engagement", "public"]),
    ("MRV", ["mrv", "monitoring"]),
    ("Economics", ["economic", "cost", "finance"]),
    ("Risk Assessment", ["risk", "assessment"]),
]

PAGE_TAGS = [
    ("ggr", ["ggr"]),
    ("carbon-removal", ["carbon removal", "cdr"]),
    ("climate", ["climate"]),
    ("technology", ["technology"]),
    ("innovation", ["innovation"]),
    ("research", ["research"]),
    ("policy", ["policy"]),
    ("sustainability", ["sustainability"]),
    ("environment", ["environment"]),
    ("net-zero", ["net zero"]),
    ("biochar", ["biochar"]),
    ("beccs", ["beccs"]),
    ("dac", ["dac"]),
    ("weathering", ["weathering"]),
    ("forestry", ["forest"]),
]


def extract_authors(content: str) -> List[str]:
    """
    Author names from a labelled byline, else the CO2RE team.

    Examples:
        >>> extract_authors("Written by: Dr Jane Smith. Published 2024")
        ['Dr Jane Smith']
        >>> extract_authors("No byline here")
        ['CO2RE Team']
    """
    for pattern in AUTHOR_PATTERNS:
        match = pattern.search(content or "")
        if match:
            author = match.group(1).strip()
            if author:
                return [author]
    return [DEFAULT_AUTHOR]


def calculate_relevance_score(content: str, title: str) -> int:
    """
    Additive quality score in [0, 100].

    Starts at 50; longer content, a descriptive title and CO2RE
    vocabulary add points.
    """
    content = content or ""
    title = title or ""
    score = BASE_RELEVANCE_SCORE

    if len(content) > 1000:
        score += 10
    if len(content) > 5000:
        score += 10
    if len(title) > 20:
        score += 5
    if "CO2RE" in content:
        score += 10
    if "research" in content:
        score += 5
    if "carbon removal" in content:
        score += 15
    if "policy" in content:
        score += 10

    return max(0, min(100, score))


def extract_page_themes(content: str, title: str, url: Optional[str] = "") -> List[str]:
    text = f"{content} {title} {url or ''}".lower()
    themes = [theme for theme, keywords in PAGE_THEMES if any(k in text for k in keywords)]
    return themes or [DEFAULT_THEME]


def extract_page_tags(content: str, title: str, url: Optional[str] = "") -> List[str]:
    text = f"{content} {title} {url or ''}".lower()
    tags = [tag for tag, keywords in PAGE_TAGS if any(k in text for k in keywords)]
    return dedupe(tags) or [DEFAULT_TAG]
