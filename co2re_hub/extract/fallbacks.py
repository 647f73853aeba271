"""
Static per-organization tables used when a funder page cannot be scraped
or yields nothing usable.
"""

from typing import Dict, List

from co2re_hub.core.models import FundingType

MOCK_AMOUNTS: Dict[str, str] = {
    "Counteract VC": "$50M fund",
    "Carbon Removal Partners": "$100M+ AUM",
    "Zero Carbon Capital": "€75M fund",
    "Balderton Capital": "$3B+ AUM",
    "Oxford Science Enterprises": "£500M+ AUM",
    "Aster Capital": "€200M fund",
    "Impact X Capital": "£100M fund",
    "Breakthrough Energy Ventures": "$2B+ fund",
    "SYSTEMIQ Capital": "£50M-£500M",
    "Pale Blue Dot": "€100M fund",
    "Clean Growth Fund": "£40M fund",
    "Lowercarbon Capital": "$350M fund",
    "Grantham Foundation": "$1M-$10M grants",
    "ClimateWorks Foundation": "$5M-$50M grants",
    "Bezos Earth Fund": "$10B commitment",
    "Frontier Climate": "$925M commitment",
    "XPRIZE Carbon Removal": "$100M prize",
}

MOCK_INVESTMENTS: Dict[str, List[str]] = {
    "Counteract VC": ["Charm Industrial", "Heirloom Carbon", "Running Tide"],
    "Carbon Removal Partners": ["Climeworks", "Carbon Engineering", "Orca Carbon"],
    "Zero Carbon Capital": ["Planetary Technologies", "Carbfix", "Climeworks"],
    "Balderton Capital": ["Revolut", "Citymapper", "GoCardless"],
    "Oxford Science Enterprises": ["Oxford PV", "Nexeon", "Ceres Power"],
    "Aster Capital": ["Sunfire", "Carbios", "Econic Technologies"],
    "Impact X Capital": ["Zopa", "Monzo", "Starling Bank"],
    "Breakthrough Energy Ventures": ["Climeworks", "Carbon Engineering", "Heirloom Carbon"],
    "SYSTEMIQ Capital": ["Orca Carbon", "Planetary Technologies"],
    "Pale Blue Dot": ["Climeworks", "Carbfix", "Planetary Technologies"],
    "Clean Growth Fund": ["Carbon Clean Solutions", "Econic Technologies"],
    "Lowercarbon Capital": ["Charm Industrial", "Heirloom Carbon", "Running Tide"],
}

UK_FOCUSED = [
    "Clean Growth Fund",
    "Oxford Science Enterprises",
    "SYSTEMIQ Capital",
    "Carbon Trust",
    "Impact X Capital",
]
EU_FOCUSED = ["Pale Blue Dot", "Zero Carbon Capital", "Aster Capital"]
GLOBAL_FOCUSED = [
    "Breakthrough Energy Ventures",
    "Bezos Earth Fund",
    "ClimateWorks Foundation",
    "Frontier Climate",
    "Counteract VC",
    "Carbon Removal Partners",
]

VC_RANGE = "$10M-$100M"
NON_VC_RANGE = "$1M-$10M"


def mock_amount(org_name: str, funding_type: str) -> str:
    """Known fund size for the organization, else a range by funding type."""
    if org_name in MOCK_AMOUNTS:
        return MOCK_AMOUNTS[org_name]
    return VC_RANGE if funding_type == FundingType.VC.value else NON_VC_RANGE


def mock_requirements(funding_type: str) -> List[str]:
    if funding_type == FundingType.VC.value:
        return ["Scalable technology", "Strong team", "Clear market opportunity", "Climate impact"]
    if funding_type == FundingType.PHILANTHROPY.value:
        return ["Non-profit or research focus", "Clear climate impact", "Measurable outcomes"]
    return ["Innovation focus", "UK/EU eligibility", "Technical feasibility"]


def mock_stage(funding_type: str) -> List[str]:
    if funding_type == FundingType.VC.value:
        return ["Seed", "Series A", "Series B"]
    return ["Research", "Development", "Pilot", "Scale-up"]


def mock_geography(org_name: str) -> List[str]:
    if org_name in UK_FOCUSED:
        return ["United Kingdom", "Europe"]
    if org_name in EU_FOCUSED:
        return ["Europe"]
    if org_name in GLOBAL_FOCUSED:
        return ["Global"]
    return ["United Kingdom", "Europe", "United States"]


def mock_investments(org_name: str) -> List[str]:
    return list(MOCK_INVESTMENTS.get(org_name, ["Various climate tech companies"]))


def mock_thesis(focus: str) -> str:
    return f"Focused on {focus.lower()} and climate solutions"


def mock_focus_areas(focus: str) -> List[str]:
    return [focus, "Carbon removal", "Climate tech"]
