"""
Funding directory entry points: scrape, list, match and stats.
"""

import logging
from typing import Any, Dict, List, Optional

from co2re_hub.core.constants import FUNDING_LIST_LIMIT, TOP_MATCHES_LIMIT
from co2re_hub.core.models import FunderProfile, FundingOpportunity, IngestionResult
from co2re_hub.ingest.funding_scraper import CDRFunderScraper, CDRFundingScraper
from co2re_hub.monitoring.scraper_stats import ScraperMonitor
from co2re_hub.storage.funding_repository import FundingRepository

logger = logging.getLogger(__name__)


class FundingService:
    """
    Usage:
        service = FundingService(CDRFundingScraper(client), CDRFunderScraper(client), FundingRepository(store))
        result = service.scrape_funding_data()
        top = service.get_top_matches(FunderProfile(stage="Seed", focus_areas=["Biochar"]))
    """

    def __init__(
        self,
        funding_scraper: CDRFundingScraper,
        funder_scraper: CDRFunderScraper,
        repository: FundingRepository,
        monitor: Optional[ScraperMonitor] = None,
    ):
        self.funding_scraper = funding_scraper
        self.funder_scraper = funder_scraper
        self.repository = repository
        self.monitor = monitor or funding_scraper.monitor

    def scrape_funding_data(self) -> IngestionResult:
        """
        Scrape general and CDR funding sources and store the union.

        Never raises: every failure is reported in the returned result.
        """
        logger.info("Starting comprehensive funding data scraping")

        try:
            general = self.funding_scraper.scrape_all_sources()
            cdr = self.scrape_cdr_funders()
            opportunities = self._dedupe(general + cdr)

            if not opportunities:
                return IngestionResult(False, 0, "No funding opportunities found during scraping")

            summary = self.repository.upsert_many(opportunities, monitor=self.monitor)
            logger.info(f"General funding: {len(general)}, CDR funders: {len(cdr)}")

            return IngestionResult(
                True,
                summary.stored,
                f"Successfully scraped and stored {summary.stored} funding opportunities",
            )
        except Exception as e:
            logger.error(f"Funding scraping error: {e}")
            return IngestionResult(False, 0, f"Error scraping funding data: {e}")

    @staticmethod
    def _dedupe(opportunities: List[FundingOpportunity]) -> List[FundingOpportunity]:
        seen = set()
        unique = []
        for opp in opportunities:
            if opp.id in seen:
                logger.debug(f"Dropping duplicate funding opportunity {opp.id}")
                continue
            seen.add(opp.id)
            unique.append(opp)
        return unique

    def scrape_cdr_funders(self) -> List[FundingOpportunity]:
        """
        CDR funder profiles as funding opportunities.

        Falls back to the curated profiles if the whole branch fails.
        """
        try:
            profiles = self.funder_scraper.scrape_all_cdr_funding()
        except Exception as e:
            logger.error(f"CDR funder scraping failed, using curated profiles: {e}")
            self.monitor.record_fallback("funders")
            profiles = self.funder_scraper.get_targeted_cdr_funders()

        opportunities = [profile.to_opportunity() for profile in profiles]
        logger.info(f"Found {len(opportunities)} CDR-focused funding sources")
        return opportunities

    def list_opportunities(
        self,
        type: Optional[str] = None,
        stage: Optional[str] = None,
        focus_area: Optional[str] = None,
        location: Optional[str] = None,
        limit: int = FUNDING_LIST_LIMIT,
    ) -> List[FundingOpportunity]:
        try:
            return self.repository.list_opportunities(
                type=type, stage=stage, focus_area=focus_area, location=location, limit=limit
            )
        except Exception as e:
            logger.error(f"Error fetching funding opportunities: {e}")
            return []

    def update_match_scores(self, profile: FunderProfile) -> int:
        try:
            return self.repository.update_match_scores(profile)
        except Exception as e:
            logger.error(f"Error updating match scores: {e}")
            return 0

    def get_top_matches(self, profile: FunderProfile, limit: int = TOP_MATCHES_LIMIT) -> List[FundingOpportunity]:
        try:
            return self.repository.get_top_matches(profile, limit=limit)
        except Exception as e:
            logger.error(f"Error getting top matches: {e}")
            return []

    def get_funding_stats(self) -> Dict[str, Any]:
        try:
            return self.repository.get_funding_stats()
        except Exception as e:
            logger.error(f"Error getting funding stats: {e}")
            return {"total": 0, "by_type": [], "last_updated": None}
