"""
Tests for the funding scrapers (government portals, curated list, CDR funders).
"""

import pytest

from co2re_hub.core.constants import DEFAULT_CONTACT
from co2re_hub.core.models import FunderSource
from co2re_hub.ingest.fallback_content import curated_funding_opportunities
from co2re_hub.ingest.funding_scraper import CDRFunderScraper, CDRFundingScraper, funder_id
from co2re_hub.ingest.sources import CDR_FUNDER_SOURCES, GOVERNMENT_PORTALS

from conftest import FakeWebClient, make_page

COUNTERACT = FunderSource(
    name="Counteract VC",
    url="https://counteract.vc",
    type="vc",
    focus="Pre-seed & seed carbon removal solutions",
    description="Early-stage carbon removal investor",
)
GRANTHAM = FunderSource(
    name="Grantham Foundation",
    url="https://www.granthamfoundation.org",
    type="philanthropy",
    focus="Environmental protection",
    description="Philanthropic support for climate solutions",
)


class TestGeneralSources:
    """Tests for CDRFundingScraper."""

    def test_curated_list_always_included(self, pacer, monitor):
        """Unreachable portals still leave the curated opportunities."""
        scraper = CDRFundingScraper(FakeWebClient(), pacer=pacer, monitor=monitor)

        opportunities = scraper.scrape_all_sources()

        curated_ids = [o.id for o in curated_funding_opportunities()]
        assert [o.id for o in opportunities] == curated_ids
        assert monitor.stats.failed == len(GOVERNMENT_PORTALS)

    def test_portal_mentions_come_first(self, pacer, delays, monitor):
        url, org = GOVERNMENT_PORTALS[0]
        page = make_page(url, "Open competition for greenhouse gas removal pilots\nAbout us")
        scraper = CDRFundingScraper(FakeWebClient(pages={url: page}), pacer=pacer, monitor=monitor)

        opportunities = scraper.scrape_all_sources()

        assert opportunities[0].title == "Open competition for greenhouse gas removal pilots"
        assert opportunities[0].organization == org
        assert opportunities[0].website == url
        assert opportunities[0].id.startswith("scraped-")
        # paced between portals only
        assert delays == [1.0] * (len(GOVERNMENT_PORTALS) - 1)

    def test_curated_list_is_fresh_per_call(self):
        first = curated_funding_opportunities()
        first[0].focus_areas.append("Mutated")
        assert "Mutated" not in curated_funding_opportunities()[0].focus_areas


class TestCDRFunders:
    """Tests for CDRFunderScraper."""

    def test_live_profile(self, pacer, monitor):
        page = make_page(
            COUNTERACT.url,
            "We write $5M checks at pre-seed and seed for direct air capture and biochar "
            "teams worldwide. Contact founders@counteract.vc. Our portfolio includes Charm Industrial.",
        )
        scraper = CDRFunderScraper(
            FakeWebClient(pages={COUNTERACT.url: page}), pacer=pacer, monitor=monitor, sources=[COUNTERACT]
        )

        [profile] = scraper.scrape_all_cdr_funding()

        assert profile.id == "cdr-counteract-vc"
        assert profile.amount == "$5M"
        assert profile.stage == ["Pre-seed", "Seed"]
        assert profile.geography == ["Global"]
        assert profile.contact_info == "founders@counteract.vc"
        assert profile.focus_areas[0] == COUNTERACT.focus
        assert "Direct air capture" in profile.focus_areas
        assert profile.deadline == "Rolling applications"

    def test_failed_source_uses_fallback_profile(self, pacer, delays, monitor):
        scraper = CDRFunderScraper(FakeWebClient(), pacer=pacer, monitor=monitor, sources=[COUNTERACT, GRANTHAM])

        profiles = scraper.scrape_all_cdr_funding()

        assert [p.id for p in profiles] == ["cdr-counteract-vc", "cdr-grantham-foundation"]
        counteract, grantham = profiles
        assert counteract.amount == "$50M fund"
        assert counteract.stage == ["Seed", "Series A", "Series B"]
        assert counteract.geography == ["Global"]
        assert counteract.contact_info == DEFAULT_CONTACT
        assert grantham.deadline == "Check website"
        assert grantham.stage == ["Research", "Development", "Pilot", "Scale-up"]
        assert delays == [1.0]
        assert monitor.stats.failed == 2

    def test_single_source_is_not_paced(self, pacer, delays, monitor):
        scraper = CDRFunderScraper(FakeWebClient(), pacer=pacer, monitor=monitor, sources=[GRANTHAM])

        scraper.scrape_all_cdr_funding()

        assert delays == []

    def test_live_and_fallback_share_id(self, pacer, monitor):
        scraper = CDRFunderScraper(FakeWebClient(), pacer=pacer, monitor=monitor, sources=[COUNTERACT])
        assert scraper.fallback_profile(COUNTERACT).id == funder_id("Counteract VC")

    def test_targeted_funders_cover_registry(self, pacer, monitor):
        scraper = CDRFunderScraper(FakeWebClient(), pacer=pacer, monitor=monitor)
        profiles = scraper.get_targeted_cdr_funders()

        assert len(profiles) == len(CDR_FUNDER_SOURCES)
        assert len({p.id for p in profiles}) == len(profiles)

    def test_to_opportunity(self, pacer, monitor):
        scraper = CDRFunderScraper(FakeWebClient(), pacer=pacer, monitor=monitor)
        opp = scraper.fallback_profile(COUNTERACT).to_opportunity()

        assert opp.website == COUNTERACT.url
        assert opp.location == "Global"
        assert opp.contact_email is None
        assert opp.match_score is None

    def test_funder_ids_do_not_collide_with_curated(self):
        curated = {o.id for o in curated_funding_opportunities()}
        assert not curated & {funder_id(s.name) for s in CDR_FUNDER_SOURCES}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
