"""
Static source registry: CO2RE seed pages, CDR funders and government
funding portals.
"""

from typing import List, Tuple

from co2re_hub.core.constants import CO2RE_BASE_URL
from co2re_hub.core.models import DocumentSeed, FunderSource, FundingType

# (path, title, category hint)
_SEED_PAGES: List[Tuple[str, str, str]] = [
    # Main sections
    ("about/", "About CO2RE", "General"),
    ("research/", "Research Programme", "Technical Research"),
    ("publications/", "Publications Overview", "General"),
    ("policy/", "Policy & Governance", "Policy & Governance"),
    # Research themes
    ("research/policy-governance/", "Policy & Governance Research", "Policy & Governance"),
    ("research/societal-engagement/", "Societal Engagement", "Technical Research"),
    ("research/mrv/", "MRV Research", "MRV & Monitoring"),
    ("research/synthesis/", "Synthesis Research", "Technical Research"),
    # GGR technologies
    ("research/biochar/", "Biochar Research", "Technical Research"),
    ("research/enhanced-rock-weathering/", "Enhanced Rock Weathering", "Technical Research"),
    ("research/peatland-restoration/", "Peatland Restoration", "Technical Research"),
    ("research/afforestation-reforestation/", "Afforestation & Reforestation", "Technical Research"),
    ("research/beccs/", "BECCS Research", "Technical Research"),
    ("research/direct-air-capture/", "Direct Air Capture", "Technical Research"),
    # Additional resources
    ("news/", "News & Updates", "General"),
    ("events/", "Events & Workshops", "General"),
    ("people/", "Research Team", "General"),
]


def document_seeds(base_url: str = CO2RE_BASE_URL) -> List[DocumentSeed]:
    """Seed pages of the web pass, in crawl order."""
    root = base_url.rstrip("/")
    return [
        DocumentSeed(url=f"{root}/{path}", title=title, category=category)
        for path, title, category in _SEED_PAGES
    ]


CDR_FUNDER_SOURCES: List[FunderSource] = [
    # Venture capital
    FunderSource(
        name="Counteract VC",
        url="https://counteract.vc",
        type=FundingType.VC.value,
        focus="Pre-seed & seed carbon removal solutions",
        description="Focused on financing early-stage founders with innovative carbon removal solutions",
    ),
    FunderSource(
        name="Carbon Removal Partners",
        url="https://www.carbonremoval.partners",
        type=FundingType.VC.value,
        focus="Carbon removal investment specialists",
        description="Specialists dedicated to carbon removal investments, very active in early stages",
    ),
    FunderSource(
        name="Zero Carbon Capital",
        url="https://zerocarbon.capital/",
        type=FundingType.VC.value,
        focus="Deep-tech emissions reduction",
        description=(
            "Deep-tech fund with offices in London and Berlin, specialized in "
            "scientific innovations for emissions reduction"
        ),
    ),
    FunderSource(
        name="Balderton Capital",
        url="https://www.balderton.com",
        type=FundingType.VC.value,
        focus="Series A-B climate tech",
        description="Generalist tech fund (Series A-B) with growing interest in climate tech and carbon removal",
    ),
    FunderSource(
        name="Oxford Science Enterprises",
        url="https://www.oxfordscienceenterprises.com",
        type=FundingType.VC.value,
        focus="Deep-tech spin-outs",
        description="Based in Oxford, focused on deep-tech spin-outs, including emerging carbon solutions",
    ),
    FunderSource(
        name="Aster Capital",
        url="https://www.aster.com",
        type=FundingType.VC.value,
        focus="Energy & cleantech",
        description="Based in Paris, strong presence in energy & cleantech (includes CO₂ capture technologies)",
    ),
    FunderSource(
        name="Impact X Capital",
        url="https://www.impactxcapital.com",
        type=FundingType.VC.value,
        focus="Diversity-focused climate tech",
        description="VC with focus on diversity, active in technology & impact, embraces climate tech",
    ),
    FunderSource(
        name="Breakthrough Energy Ventures",
        url="https://www.breakthroughenergy.org/investing-in-innovation/breakthrough-energy-ventures",
        type=FundingType.VC.value,
        focus="Carbon removal technologies",
        description="Bill Gates-backed climate tech VC investing in carbon removal",
    ),
    FunderSource(
        name="SYSTEMIQ Capital",
        url="https://systemiq.earth/systemiq-capital/",
        type=FundingType.VC.value,
        focus="Systems change including carbon removal",
        description="UK-based systems change investor",
    ),
    FunderSource(
        name="Pale Blue Dot",
        url="https://www.paleblue.vc",
        type=FundingType.VC.value,
        focus="Climate tech including CDR",
        description="European climate tech VC",
    ),
    FunderSource(
        name="Clean Growth Fund",
        url="https://www.cleangrowthfund.co.uk",
        type=FundingType.VC.value,
        focus="Clean technologies",
        description="UK government-backed clean tech fund",
    ),
    FunderSource(
        name="Lowercarbon Capital",
        url="https://www.lowercarbon.com",
        type=FundingType.VC.value,
        focus="Carbon removal and climate solutions",
        description="Climate-focused VC investing in carbon removal technologies",
    ),
    # Philanthropy
    FunderSource(
        name="Grantham Foundation",
        url="https://www.granthamfoundation.org",
        type=FundingType.PHILANTHROPY.value,
        focus="Climate change solutions",
        description="Environmental philanthropy focused on climate solutions",
    ),
    FunderSource(
        name="ClimateWorks Foundation",
        url="https://www.climateworks.org",
        type=FundingType.PHILANTHROPY.value,
        focus="Climate solutions including CDR",
        description="Global philanthropy for climate solutions",
    ),
    FunderSource(
        name="Bezos Earth Fund",
        url="https://www.bezosearthfund.org",
        type=FundingType.PHILANTHROPY.value,
        focus="Climate and nature solutions",
        description="Jeff Bezos climate philanthropy",
    ),
    # Specialized CDR funding
    FunderSource(
        name="Frontier Climate",
        url="https://frontierclimate.com",
        type=FundingType.VC.value,
        focus="Carbon removal advance market commitment",
        description="Advance market commitment for carbon removal",
    ),
    FunderSource(
        name="Carbon180",
        url="https://carbon180.org",
        type=FundingType.GRANT.value,
        focus="Carbon removal policy and research",
        description="NGO supporting carbon removal ecosystem",
    ),
    FunderSource(
        name="XPRIZE Carbon Removal",
        url="https://www.xprize.org/prizes/carbon-removal",
        type=FundingType.COMPETITION.value,
        focus="Carbon removal innovation",
        description="$100M competition for carbon removal solutions",
    ),
    # Government and institutional
    FunderSource(
        name="UK Net Zero Innovation Portfolio",
        url=(
            "https://www.ukri.org/what-we-offer/browse-our-areas-of-investment-and-support/"
            "net-zero-innovation-portfolio/"
        ),
        type=FundingType.GRANT.value,
        focus="Net zero technologies",
        description="UK government net zero innovation funding",
    ),
    FunderSource(
        name="EU Innovation Fund",
        url="https://climate.ec.europa.eu/eu-action/funding-climate-action/innovation-fund_en",
        type=FundingType.GRANT.value,
        focus="Low-carbon innovation",
        description="EU funding for innovative low-carbon technologies",
    ),
    FunderSource(
        name="Carbon Trust",
        url="https://www.carbontrust.com",
        type=FundingType.GRANT.value,
        focus="Carbon reduction and removal",
        description="UK organization supporting carbon reduction and removal projects",
    ),
]


# (url, organization) of grant portals scanned for funding mentions
GOVERNMENT_PORTALS: List[Tuple[str, str]] = [
    ("https://www.ukri.org/what-we-offer/browse-our-areas-of-investment-and-support/", "UKRI"),
    ("https://www.gov.uk/government/collections/innovate-uk-funding-competitions", "Innovate UK"),
    ("https://www.carbontrust.com/what-we-do/accelerating-low-carbon-innovation", "Carbon Trust"),
    ("https://www.nesta.org.uk/feature/innovation-methods/challenge-prizes/", "Nesta"),
    ("https://www.climatekic.org/programmes/", "Climate-KIC"),
]
