"""
Funding opportunity ingestion.

Two scrapers:
- CDRFundingScraper: government grant portals scanned for funding
  mentions, plus the curated general list
- CDRFunderScraper: one live profile per registered CDR funder, with a
  static per-funder fallback when the live scrape fails
"""

import logging
from typing import List, Optional

from co2re_hub.core.constants import DEFAULT_CONTACT, FUNDER_DELAY_MS
from co2re_hub.core.errors import ParseFailureError
from co2re_hub.core.models import CDRFunderProfile, FunderSource, FundingOpportunity, FundingType
from co2re_hub.core.utils import slugify, utc_now_iso
from co2re_hub.extract import fallbacks
from co2re_hub.extract.content_extractors import (
    extract_contact_info,
    extract_focus_areas,
    extract_funding_amount,
    extract_funding_mentions,
    extract_geography,
    extract_investment_stage,
    extract_investment_thesis,
    extract_recent_investments,
    extract_requirements,
)
from co2re_hub.ingest.fallback_content import curated_funding_opportunities
from co2re_hub.ingest.pacing import Pacer
from co2re_hub.ingest.sources import CDR_FUNDER_SOURCES, GOVERNMENT_PORTALS
from co2re_hub.monitoring.scraper_stats import ScraperMonitor, StageResult

logger = logging.getLogger(__name__)


def funder_id(name: str) -> str:
    """
    Stable id shared by the live, fallback and curated profile of a funder.

    Examples:
        >>> funder_id("Counteract VC")
        'cdr-counteract-vc'
    """
    return f"cdr-{slugify(name)}"


def default_deadline(funding_type: str) -> str:
    return "Rolling applications" if funding_type == FundingType.VC.value else "Check website"


class CDRFundingScraper:
    """
    General funding sources: grant portals and the curated list.

    Usage:
        scraper = CDRFundingScraper(WebClient())
        opportunities = scraper.scrape_all_sources()
    """

    def __init__(self, client, pacer: Optional[Pacer] = None, monitor: Optional[ScraperMonitor] = None):
        self.client = client
        self.pacer = pacer or Pacer()
        self.monitor = monitor or ScraperMonitor()

    def scrape_all_sources(self) -> List[FundingOpportunity]:
        """
        Portal mentions followed by the curated list.

        Portal failures only reduce the number of scraped mentions; the
        curated list is always included.
        """
        logger.info("Starting general funding scraping")
        portals = self.scrape_government_portals()
        successes, failures = portals.counts
        logger.info(f"Extracted {successes} portal mentions ({failures} portals failed)")

        curated = curated_funding_opportunities()
        logger.info(f"Adding {len(curated)} curated opportunities")
        return portals.items + curated

    def scrape_government_portals(self) -> StageResult[FundingOpportunity]:
        result: StageResult[FundingOpportunity] = StageResult()

        for index, (url, organization) in enumerate(GOVERNMENT_PORTALS):
            if index:
                self.pacer.pause(FUNDER_DELAY_MS)

            try:
                page = self.client.scrape_url(url)
                mentions = extract_funding_mentions(
                    page.text, FundingType.GRANT.value, organization, website=url
                )
            except Exception as e:
                logger.error(f"Error scraping {organization} portal: {e}")
                result.add_failure(url, e)
                self.monitor.log_failure(url, e, stage="portals", url=url)
            else:
                result.items.extend(mentions)
                self.monitor.log_attempt(url, stage="portals", success=True, url=url)
                logger.debug(f"{organization}: {len(mentions)} funding mentions")

        return result


class CDRFunderScraper:
    """
    CDR-focused VCs, philanthropies, grant bodies and prizes.

    Usage:
        scraper = CDRFunderScraper(WebClient())
        profiles = scraper.scrape_all_cdr_funding()
        opportunities = [p.to_opportunity() for p in profiles]
    """

    def __init__(
        self,
        client,
        pacer: Optional[Pacer] = None,
        monitor: Optional[ScraperMonitor] = None,
        sources: Optional[List[FunderSource]] = None,
    ):
        self.client = client
        self.pacer = pacer or Pacer()
        self.monitor = monitor or ScraperMonitor()
        self.sources = list(sources) if sources is not None else list(CDR_FUNDER_SOURCES)

    def scrape_all_cdr_funding(self) -> List[CDRFunderProfile]:
        """
        One profile per registered funder: live when the page can be
        scraped, static fallback otherwise.
        """
        logger.info(f"Scraping {len(self.sources)} CDR funders")
        result: StageResult[CDRFunderProfile] = StageResult()
        fallback_count = 0

        for index, source in enumerate(self.sources):
            if index:
                self.pacer.pause(FUNDER_DELAY_MS)

            try:
                profile = self.scrape_funder_profile(source)
            except Exception as e:
                logger.error(f"Error scraping {source.name}: {e}")
                result.add_failure(source.name, e)
                self.monitor.log_failure(source.name, e, stage="funders", url=source.url)
                profile = self.fallback_profile(source)
                fallback_count += 1
            else:
                self.monitor.log_attempt(source.name, stage="funders", success=True, url=source.url)
                logger.info(f"Successfully scraped {source.name}")

            result.items.append(profile)

        logger.info(
            f"Collected {len(result.items)} CDR funder profiles "
            f"({len(result.items) - fallback_count} live, {fallback_count} fallback)"
        )
        return result.items

    def scrape_funder_profile(self, source: FunderSource) -> CDRFunderProfile:
        """
        Build a profile from the funder's live page.

        Raises:
            IngestionError: If the page cannot be fetched or has no text
        """
        page = self.client.scrape_url(source.url)
        text = page.text or ""
        if not text.strip():
            raise ParseFailureError("Funder page has no text", url=source.url)

        return CDRFunderProfile(
            id=funder_id(source.name),
            title=f"{source.name} - {source.focus}",
            organization=source.name,
            type=source.type,
            amount=extract_funding_amount(text, source.name, source.type),
            description=source.description,
            requirements=extract_requirements(text, source.type),
            deadline=default_deadline(source.type),
            url=source.url,
            focus_areas=extract_focus_areas(text, source.focus),
            stage=extract_investment_stage(text, source.type),
            geography=extract_geography(text, source.name),
            contact_info=extract_contact_info(text),
            recent_investments=extract_recent_investments(text, source.name),
            investment_thesis=extract_investment_thesis(text),
            created_at=utc_now_iso(),
        )

    def fallback_profile(self, source: FunderSource) -> CDRFunderProfile:
        """Profile built only from the registry entry and static tables."""
        return CDRFunderProfile(
            id=funder_id(source.name),
            title=f"{source.name} - {source.focus}",
            organization=source.name,
            type=source.type,
            amount=fallbacks.mock_amount(source.name, source.type),
            description=source.description,
            requirements=fallbacks.mock_requirements(source.type),
            deadline=default_deadline(source.type),
            url=source.url,
            focus_areas=fallbacks.mock_focus_areas(source.focus),
            stage=fallbacks.mock_stage(source.type),
            geography=fallbacks.mock_geography(source.name),
            contact_info=DEFAULT_CONTACT,
            recent_investments=fallbacks.mock_investments(source.name),
            investment_thesis=fallbacks.mock_thesis(source.focus),
            created_at=utc_now_iso(),
        )

    def get_targeted_cdr_funders(self) -> List[CDRFunderProfile]:
        """Curated profiles for every registered funder, without network access."""
        return [self.fallback_profile(source) for source in self.sources]
