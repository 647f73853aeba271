"""
Tests for funding match scoring.
"""

import pytest

from co2re_hub.classify.matching import calculate_match_score
from co2re_hub.core.models import FunderProfile, FundingOpportunity


def make_opportunity(**overrides):
    fields = dict(
        id="opp-1",
        title="Test opportunity",
        organization="Test Org",
        type="grant",
        amount="£1M",
        description="",
        website="https://example.org",
        location="United Kingdom",
        last_updated="2024-01-01T00:00:00+00:00",
        stage=["Seed"],
        focus_areas=["Direct Air Capture", "BECCS"],
    )
    fields.update(overrides)
    return FundingOpportunity(**fields)


class TestMatchScore:
    """Tests for calculate_match_score."""

    def test_seed_dac_grant_scores_85(self):
        """30 stage + 20 one focus area + 20 location + 15 type."""
        profile = FunderProfile(
            stage="Seed",
            focus_areas=["Direct Air Capture"],
            preferred_funding_types=["grant"],
        )
        assert calculate_match_score(make_opportunity(), profile) == 85

    def test_empty_profile_scores_location_only(self):
        assert calculate_match_score(make_opportunity(), FunderProfile()) == 20

    def test_focus_match_is_case_insensitive_substring(self):
        """'air capture' matches 'Direct Air Capture'."""
        profile = FunderProfile(focus_areas=["air capture"])
        opp = make_opportunity(location="Canada")
        assert calculate_match_score(opp, profile) == 20

    def test_each_matching_opportunity_area_counts(self):
        opp = make_opportunity(location="Canada", focus_areas=["Biochar", "Biochar MRV", "DAC"])
        assert calculate_match_score(opp, FunderProfile(focus_areas=["biochar"])) == 40

    def test_global_location(self):
        opp = make_opportunity(location="Global")
        assert calculate_match_score(opp, FunderProfile()) == 20

    def test_capped_at_100(self):
        opp = make_opportunity(focus_areas=["DAC one", "DAC two", "DAC three", "DAC four"])
        profile = FunderProfile(stage="Seed", focus_areas=["dac"], preferred_funding_types=["grant"])
        assert calculate_match_score(opp, profile) == 100


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
