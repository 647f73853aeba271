"""
Match score between a funding opportunity and a funder profile.
"""

from co2re_hub.core.constants import (
    MATCH_FOCUS_AREA_POINTS,
    MATCH_FUNDING_TYPE_POINTS,
    MATCH_LOCATION_POINTS,
    MATCH_LOCATIONS,
    MATCH_STAGE_POINTS,
    MAX_MATCH_SCORE,
)
from co2re_hub.core.models import FunderProfile, FundingOpportunity


def calculate_match_score(opportunity: FundingOpportunity, profile: FunderProfile) -> int:
    """
    Score how well an opportunity fits a profile (0-100).

    Points:
        +30 if the profile stage is one of the opportunity's stages
        +20 per opportunity focus area that contains any profile focus
            area (case-insensitive substring)
        +20 if the location mentions "United Kingdom" or "Global"
        +15 if the opportunity type is a preferred funding type

    Examples:
        >>> opp = FundingOpportunity(
        ...     id="x", title="x", organization="x", type="grant", amount="",
        ...     description="", website="", location="United Kingdom",
        ...     last_updated="", stage=["Seed"],
        ...     focus_areas=["Direct Air Capture", "BECCS"])
        >>> calculate_match_score(opp, FunderProfile(
        ...     stage="Seed", focus_areas=["Direct Air Capture"],
        ...     preferred_funding_types=["grant"]))
        85
    """
    score = 0

    if profile.stage and profile.stage in (opportunity.stage or []):
        score += MATCH_STAGE_POINTS

    profile_areas = [area.lower() for area in (profile.focus_areas or [])]
    for area in opportunity.focus_areas or []:
        candidate = area.lower()
        if any(needle in candidate for needle in profile_areas):
            score += MATCH_FOCUS_AREA_POINTS

    location = opportunity.location or ""
    if any(place in location for place in MATCH_LOCATIONS):
        score += MATCH_LOCATION_POINTS

    if opportunity.type in (profile.preferred_funding_types or []):
        score += MATCH_FUNDING_TYPE_POINTS

    return min(MAX_MATCH_SCORE, score)
