"""
Funding opportunity persistence and profile matching.
"""

import logging
from collections import Counter
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from co2re_hub.classify.matching import calculate_match_score
from co2re_hub.core.constants import FUNDING_LIST_LIMIT, TOP_MATCHES_LIMIT
from co2re_hub.core.models import FunderProfile, FundingOpportunity
from co2re_hub.monitoring.scraper_stats import ScraperMonitor
from co2re_hub.storage.record_store import RecordStore, UpsertSummary, upsert_row
from co2re_hub.storage.serialization import funding_to_row, row_to_funding

logger = logging.getLogger(__name__)

ACTIVE = {"isActive": True}


class FundingRepository:
    """
    Store, filter and rank funding opportunities.

    Usage:
        repo = FundingRepository(store)
        repo.upsert_many(opportunities)
        top = repo.get_top_matches(FunderProfile(stage="Seed", focus_areas=["Biochar"]))
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def upsert(self, opportunity: FundingOpportunity) -> str:
        """
        Insert or update one opportunity keyed on its id. New rows are
        marked active.

        Returns:
            "created" or "updated"
        """
        return upsert_row(self.store, funding_to_row(opportunity), on_create=ACTIVE)

    def upsert_many(
        self,
        opportunities: List[FundingOpportunity],
        monitor: Optional[ScraperMonitor] = None,
    ) -> UpsertSummary:
        summary = UpsertSummary()

        for opp in tqdm(opportunities, desc="Storing funding", disable=None):
            try:
                outcome = self.upsert(opp)
            except Exception as e:
                logger.error(f"Error storing funding opportunity {opp.id}: {e}")
                summary.failed += 1
                if monitor:
                    monitor.log_failure(opp.id, e, stage="persist", url=opp.website)
                continue

            if outcome == "created":
                summary.created += 1
            else:
                summary.updated += 1
            if monitor:
                monitor.log_attempt(
                    opp.id,
                    stage="persist",
                    success=True,
                    url=opp.website,
                    created=outcome == "created",
                    updated=outcome == "updated",
                )

        logger.info(
            f"Stored {summary.stored} funding opportunities "
            f"({summary.created} new, {summary.updated} updated, {summary.failed} failed)"
        )
        return summary

    def list_opportunities(
        self,
        type: Optional[str] = None,
        stage: Optional[str] = None,
        focus_area: Optional[str] = None,
        location: Optional[str] = None,
        limit: int = FUNDING_LIST_LIMIT,
    ) -> List[FundingOpportunity]:
        """
        Active opportunities, most recently updated first.

        type is an exact filter. stage must be one of the opportunity's
        stages; focus_area and location are case-insensitive substrings.
        """
        where = dict(ACTIVE)
        if type:
            where["type"] = type

        rows = self.store.list(where=where, order_by={"lastUpdated": "desc"}, limit=limit)
        opportunities = [row_to_funding(row) for row in rows]

        if stage:
            opportunities = [o for o in opportunities if stage in o.stage]
        if focus_area:
            wanted = focus_area.lower()
            opportunities = [o for o in opportunities if any(wanted in a.lower() for a in o.focus_areas)]
        if location:
            opportunities = [o for o in opportunities if location.lower() in o.location.lower()]

        return opportunities

    def update_match_scores(self, profile: FunderProfile) -> int:
        """
        Score every active opportunity against the profile and store the
        result in matchScore.

        Returns:
            Number of rows updated
        """
        rows = self.store.list(where=dict(ACTIVE))
        updated = 0

        for row in rows:
            opp = row_to_funding(row)
            score = calculate_match_score(opp, profile)
            try:
                self.store.update(opp.id, {"matchScore": score})
            except Exception as e:
                logger.error(f"Error updating match score for {opp.id}: {e}")
                continue
            updated += 1

        logger.info(f"Updated match scores for {updated}/{len(rows)} opportunities")
        return updated

    def get_top_matches(self, profile: FunderProfile, limit: int = TOP_MATCHES_LIMIT) -> List[FundingOpportunity]:
        """Re-score against the profile, then return the best matches."""
        self.update_match_scores(profile)
        rows = self.store.list(where=dict(ACTIVE), order_by={"matchScore": "desc"}, limit=limit)
        return [row_to_funding(row) for row in rows]

    def get_funding_stats(self) -> Dict[str, Any]:
        """
        Summary of the active directory.

        Returns:
            {"total": int, "by_type": [{"type", "count"}], "last_updated": str | None}
        """
        rows = self.store.list(where=dict(ACTIVE), order_by={"lastUpdated": "desc"})
        by_type = Counter(row.get("type") or "unknown" for row in rows)

        return {
            "total": len(rows),
            "by_type": [{"type": t, "count": c} for t, c in by_type.most_common()],
            "last_updated": rows[0].get("lastUpdated") if rows else None,
        }
