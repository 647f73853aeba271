"""
Hand-authored content served when live scraping yields nothing.

fallback_documents() covers every seed topic so the document library is
never empty; curated_funding_opportunities() is the reviewed general
funding list that is always merged into a funding run.
"""

from typing import List

from co2re_hub.core.constants import CO2RE_BASE_URL
from co2re_hub.core.models import Document, FundingOpportunity
from co2re_hub.core.utils import generate_document_id, utc_now_iso

# (path, title, content, excerpt, category, type, themes, authors, published, tags, relevance)
_FALLBACK_DOCUMENTS = [
    (
        "about/",
        "About CO2RE - Carbon Dioxide Removal Research",
        "CO2RE is a research programme that brings together researchers from across the UK to "
        "advance the evidence base for carbon dioxide removal (CDR). The programme focuses on "
        "greenhouse gas removal (GGR) technologies and their potential role in achieving "
        "net-zero emissions.",
        "CO2RE brings together UK researchers to advance carbon dioxide removal evidence base.",
        "General", "article",
        ["Carbon Removal", "Research"], ["CO2RE Team"],
        "2024-01-15T00:00:00Z", ["about", "research", "carbon-removal", "ggr"], 95,
    ),
    (
        "research/",
        "CO2RE Research Programme Overview",
        "The CO2RE research programme focuses on advancing understanding of carbon dioxide removal "
        "technologies and their implementation. Research themes include policy and governance, "
        "societal engagement, MRV, and synthesis across different GGR approaches.",
        "Overview of CO2RE research programme focusing on CDR technologies and implementation.",
        "Technical Research", "article",
        ["Research", "Technology", "GGR"], ["CO2RE Research Team"],
        "2024-02-01T00:00:00Z", ["research", "technology", "programme", "ggr"], 92,
    ),
    (
        "publications/",
        "CO2RE Publications and Resources",
        "Access to CO2RE publications, reports, and research outputs covering various aspects of "
        "carbon dioxide removal. Includes policy briefs, technical reports, and academic "
        "publications.",
        "Access to CO2RE publications and research outputs on carbon dioxide removal.",
        "General", "article",
        ["Publications", "Resources"], ["CO2RE Team"],
        "2024-01-20T00:00:00Z", ["publications", "resources", "reports", "briefs"], 88,
    ),
    (
        "policy/",
        "CO2RE Policy Engagement",
        "How CO2RE research informs UK and international policy on greenhouse gas removal. "
        "Covers evidence submissions, policy briefs for government, and engagement with "
        "regulators on the governance of carbon dioxide removal.",
        "How CO2RE research informs policy and governance of greenhouse gas removal.",
        "Policy & Governance", "article",
        ["Policy & Governance", "Regulation"], ["CO2RE Policy Team"],
        "2024-01-18T00:00:00Z", ["policy", "government", "evidence", "ggr"], 87,
    ),
    (
        "research/policy-governance/",
        "Policy & Governance for Carbon Removal",
        "Research into policy frameworks, governance structures, and regulatory approaches for "
        "carbon dioxide removal technologies. Includes analysis of policy instruments, "
        "institutional arrangements, and governance challenges.",
        "Research into policy frameworks and governance structures for CDR technologies.",
        "Policy & Governance", "article",
        ["Policy & Governance", "Regulation"], ["CO2RE Policy Team"],
        "2024-01-20T00:00:00Z", ["policy", "governance", "regulation", "framework"], 88,
    ),
    (
        "research/societal-engagement/",
        "Societal Engagement in Carbon Removal",
        "Research into public perceptions, social acceptance, and community engagement with "
        "carbon removal technologies. Includes stakeholder analysis and participatory research "
        "approaches.",
        "Research into public perceptions and social acceptance of carbon removal technologies.",
        "Technical Research", "article",
        ["Societal Engagement", "Public Perception"], ["CO2RE Social Research Team"],
        "2024-02-05T00:00:00Z", ["social", "engagement", "public", "stakeholder"], 85,
    ),
    (
        "research/mrv/",
        "MRV for Carbon Removal Technologies",
        "Monitoring, Reporting, and Verification (MRV) approaches for carbon dioxide removal. "
        "Research covers measurement methodologies, verification protocols, and reporting "
        "standards for different GGR technologies.",
        "MRV approaches and methodologies for carbon dioxide removal technologies.",
        "MRV & Monitoring", "article",
        ["MRV", "Monitoring", "Verification"], ["CO2RE MRV Team"],
        "2024-01-25T00:00:00Z", ["mrv", "monitoring", "verification", "measurement"], 90,
    ),
    (
        "research/synthesis/",
        "Synthesis Research Across GGR Technologies",
        "Cross-cutting synthesis research comparing different greenhouse gas removal "
        "technologies. Includes comparative assessments, integration studies, and portfolio "
        "approaches.",
        "Synthesis research comparing and integrating different GGR technologies.",
        "Technical Research", "article",
        ["Synthesis", "Comparative Analysis", "Integration"], ["CO2RE Synthesis Team"],
        "2024-03-05T00:00:00Z", ["synthesis", "comparison", "integration", "portfolio"], 92,
    ),
    (
        "research/biochar/",
        "Biochar for Carbon Removal",
        "Research into biochar production, application, and carbon sequestration potential. "
        "Covers feedstock selection, pyrolysis processes, soil application, and long-term carbon "
        "storage verification.",
        "Research into biochar production and carbon sequestration potential.",
        "Technical Research", "article",
        ["Biochar", "Pyrolysis", "Soil Carbon"], ["CO2RE Biochar Team"],
        "2024-01-30T00:00:00Z", ["biochar", "pyrolysis", "soil", "sequestration"], 93,
    ),
    (
        "research/enhanced-rock-weathering/",
        "Enhanced Rock Weathering for Carbon Removal",
        "Research into enhanced rock weathering as a carbon removal approach. Covers mineral "
        "selection, application methods, weathering rates, and environmental impacts.",
        "Research into enhanced rock weathering for carbon dioxide removal.",
        "Technical Research", "article",
        ["Enhanced Weathering", "Minerals", "Geochemistry"], ["CO2RE Weathering Team"],
        "2024-02-20T00:00:00Z", ["weathering", "minerals", "geochemistry", "rocks"], 87,
    ),
    (
        "research/peatland-restoration/",
        "Peatland Restoration for Carbon Storage",
        "Research into peatland restoration and management for carbon sequestration. Covers "
        "restoration techniques, carbon dynamics, biodiversity impacts, and monitoring "
        "approaches.",
        "Research into peatland restoration and carbon sequestration potential.",
        "Technical Research", "article",
        ["Peatland Restoration", "Wetlands", "Ecosystem"], ["CO2RE Peatland Team"],
        "2024-02-25T00:00:00Z", ["peatland", "restoration", "wetland", "ecosystem"], 86,
    ),
    (
        "research/afforestation-reforestation/",
        "Afforestation and Reforestation for Carbon Removal",
        "Research into afforestation and reforestation approaches for carbon sequestration. "
        "Covers species selection, planting strategies, growth monitoring, and long-term carbon "
        "storage.",
        "Research into afforestation and reforestation for carbon sequestration.",
        "Technical Research", "article",
        ["Afforestation/Reforestation", "Forestry", "Trees"], ["CO2RE Forestry Team"],
        "2024-03-01T00:00:00Z", ["afforestation", "reforestation", "forestry", "trees"], 84,
    ),
    (
        "research/beccs/",
        "BECCS - Bioenergy with Carbon Capture and Storage",
        "Research into bioenergy with carbon capture and storage (BECCS) systems. Covers biomass "
        "feedstocks, energy conversion technologies, carbon capture processes, and storage "
        "solutions.",
        "Research into BECCS systems and bioenergy with carbon capture technologies.",
        "Technical Research", "article",
        ["BECCS", "Bioenergy", "Carbon Capture"], ["CO2RE BECCS Team"],
        "2024-02-10T00:00:00Z", ["beccs", "bioenergy", "capture", "storage"], 91,
    ),
    (
        "research/direct-air-capture/",
        "Direct Air Capture Technologies",
        "Research into direct air capture (DAC) technologies for removing CO2 from ambient air. "
        "Covers sorbent materials, process design, energy requirements, and system integration.",
        "Research into direct air capture technologies and CO2 removal from ambient air.",
        "Technical Research", "article",
        ["Direct Air Capture", "DAC", "Sorbents"], ["CO2RE DAC Team"],
        "2024-02-15T00:00:00Z", ["dac", "direct-air-capture", "sorbent", "ambient"], 89,
    ),
    (
        "news/",
        "CO2RE News and Updates",
        "Latest news, updates, and announcements from the CO2RE research programme. Includes "
        "research highlights, event announcements, and programme developments.",
        "Latest news and updates from the CO2RE research programme.",
        "General", "article",
        ["News", "Updates"], ["CO2RE Communications Team"],
        "2024-03-10T00:00:00Z", ["news", "updates", "announcements", "highlights"], 75,
    ),
    (
        "events/",
        "CO2RE Events and Workshops",
        "Information about CO2RE events, workshops, conferences, and training opportunities. "
        "Includes past and upcoming events related to carbon removal research.",
        "Information about CO2RE events, workshops, and training opportunities.",
        "General", "workshop",
        ["Events", "Workshops", "Training"], ["CO2RE Events Team"],
        "2024-03-15T00:00:00Z", ["events", "workshops", "conferences", "training"], 78,
    ),
    (
        "people/",
        "CO2RE Research Team and Network",
        "Information about the CO2RE research team, principal investigators, and research "
        "network. Includes researcher profiles and institutional affiliations.",
        "Information about the CO2RE research team and network.",
        "General", "article",
        ["Research Team", "Network"], ["CO2RE Team"],
        "2024-03-20T00:00:00Z", ["people", "team", "researchers", "network"], 80,
    ),
]


def fallback_documents(base_url: str = CO2RE_BASE_URL) -> List[Document]:
    """
    One document per seed topic, with ids derived from the seed URL so a
    later live scrape updates the same rows.

    Returns a fresh list on every call.
    """
    root = base_url.rstrip("/")
    documents = []
    for (path, title, content, excerpt, category, doc_type,
         themes, authors, published, tags, relevance) in _FALLBACK_DOCUMENTS:
        url = f"{root}/{path}"
        documents.append(Document(
            id=generate_document_id(url),
            title=title,
            content=content,
            excerpt=excerpt,
            url=url,
            category=category,
            type=doc_type,
            theme=list(themes),
            authors=list(authors),
            published_date=published,
            tags=list(tags),
            relevance_score=relevance,
        ))
    return documents


def curated_funding_opportunities() -> List[FundingOpportunity]:
    """Reviewed grants, philanthropy, VC and competitions (fresh list per call)."""
    now = utc_now_iso()
    return [
        # Government grants
        FundingOpportunity(
            id="innovate-uk-net-zero",
            title="Net Zero Innovation Portfolio",
            organization="Innovate UK",
            type="grant",
            amount="£1M - £5M",
            deadline="2024-03-15",
            description=(
                "Supporting breakthrough technologies for net zero, including direct air "
                "capture and carbon removal solutions."
            ),
            requirements=[
                "UK-based company",
                "Technology readiness level 4-7",
                "Clear path to commercialization",
            ],
            website="https://www.ukri.org/opportunity/net-zero-innovation-portfolio/",
            focus_areas=["Direct Air Capture", "BECCS", "Enhanced Weathering", "Ocean CDR"],
            stage=["Series A", "Series B", "Growth"],
            location="United Kingdom",
            last_updated=now,
        ),
        FundingOpportunity(
            id="ukri-climate-resilience",
            title="UKRI Climate Resilience Programme",
            organization="UKRI",
            type="grant",
            amount="£500K - £2M",
            deadline="2024-04-30",
            description="Research and innovation in climate adaptation and carbon removal technologies.",
            requirements=[
                "Academic-industry collaboration",
                "UK research institution involvement",
            ],
            website=(
                "https://www.ukri.org/what-we-offer/browse-our-areas-of-investment-and-support/"
                "climate-resilience/"
            ),
            focus_areas=["Research & Development", "Pilot Projects", "Technology Validation"],
            stage=["Pre-seed", "Seed"],
            location="United Kingdom",
            last_updated=now,
        ),
        # Philanthropy
        FundingOpportunity(
            id="climateworks-cdr",
            title="ClimateWorks Carbon Removal Initiative",
            organization="ClimateWorks Foundation",
            type="philanthropy",
            amount="$100K - $1M",
            description="Supporting early-stage carbon removal technologies and policy development.",
            requirements=["Scalable technology", "Clear impact measurement", "Cost reduction pathway"],
            website="https://www.climateworks.org/programs/carbon-removal/",
            focus_areas=["Direct Air Capture", "Biomass CDR", "Ocean CDR", "Policy Development"],
            stage=["Pre-seed", "Seed", "Series A"],
            location="Global (UK eligible)",
            last_updated=now,
        ),
        FundingOpportunity(
            id="breakthrough-energy",
            title="Breakthrough Energy Ventures",
            organization="Breakthrough Energy",
            type="philanthropy",
            amount="$1M - $10M",
            description="Patient capital for breakthrough energy technologies including carbon removal.",
            requirements=[
                "Breakthrough technology",
                "Significant climate impact potential",
                "Strong team",
            ],
            website="https://www.breakthroughenergy.org/investing-in-innovation/breakthrough-energy-ventures",
            focus_areas=["Direct Air Capture", "Industrial CDR", "Novel Approaches"],
            stage=["Series A", "Series B", "Growth"],
            location="Global (UK eligible)",
            last_updated=now,
        ),
        # Venture capital
        FundingOpportunity(
            id="systemiq-capital",
            title="SYSTEMIQ Capital",
            organization="SYSTEMIQ",
            type="vc",
            amount="£500K - £5M",
            description="Investing in systems change solutions including carbon removal and circular economy.",
            requirements=["UK/EU based", "Systems-level impact", "Scalable business model"],
            website="https://www.systemiq.earth/systemiq-capital/",
            contact_email="capital@systemiq.earth",
            focus_areas=["Carbon Removal", "Circular Economy", "Nature-based Solutions"],
            stage=["Seed", "Series A"],
            location="United Kingdom",
            last_updated=now,
        ),
        FundingOpportunity(
            id="pale-blue-dot",
            title="Pale Blue Dot",
            organization="Pale Blue Dot",
            type="vc",
            amount="£1M - £10M",
            description="Climate tech VC focused on breakthrough technologies including carbon removal.",
            requirements=["Deep tech", "Climate impact", "Strong IP position"],
            website="https://www.palebluedot.vc/",
            focus_areas=["Direct Air Capture", "Industrial Decarbonization", "Energy Storage"],
            stage=["Series A", "Series B"],
            location="United Kingdom",
            last_updated=now,
        ),
        FundingOpportunity(
            id="clean-growth-fund",
            title="Clean Growth Fund",
            organization="CCLA Investment Management",
            type="vc",
            amount="£2M - £15M",
            description="Growth capital for clean technology companies including carbon management solutions.",
            requirements=["Revenue generating", "Clear growth trajectory", "UK operations"],
            website="https://www.ccla.co.uk/our-funds/clean-growth-fund",
            focus_areas=["Carbon Management", "Clean Energy", "Resource Efficiency"],
            stage=["Series B", "Growth", "Pre-IPO"],
            location="United Kingdom",
            last_updated=now,
        ),
        FundingOpportunity(
            id="ip-group-cleantech",
            title="IP Group CleanTech",
            organization="IP Group",
            type="vc",
            amount="£500K - £5M",
            description="University spinout investor with focus on clean technologies and carbon solutions.",
            requirements=["University spinout", "Strong IP", "Academic collaboration"],
            website="https://www.ipgroupplc.com/sectors/cleantech",
            focus_areas=["University Spinouts", "Deep Tech", "Carbon Technologies"],
            stage=["Pre-seed", "Seed", "Series A"],
            location="United Kingdom",
            last_updated=now,
        ),
        # Competitions and challenge funds
        FundingOpportunity(
            id="xprize-carbon-removal",
            title="XPRIZE Carbon Removal",
            organization="XPRIZE Foundation",
            type="competition",
            amount="$1M - $50M",
            deadline="2025-04-22",
            description=(
                "Global competition to develop carbon removal solutions that scale to "
                "gigatonne levels."
            ),
            requirements=[
                "Demonstrate 1000 tonnes CO2 removal",
                "Path to gigatonne scale",
                "Durable storage",
            ],
            website="https://www.xprize.org/prizes/carbonremoval",
            focus_areas=["Direct Air Capture", "Ocean CDR", "Biomass CDR", "Mineralization"],
            stage=["All stages"],
            location="Global (UK eligible)",
            last_updated=now,
        ),
        FundingOpportunity(
            id="carbon-trust-innovation",
            title="Carbon Trust Innovation Programme",
            organization="Carbon Trust",
            type="grant",
            amount="£50K - £500K",
            description="Supporting early-stage clean technology innovation including carbon removal.",
            requirements=["UK company", "Novel technology", "Commercial potential"],
            website="https://www.carbontrust.com/what-we-do/accelerating-low-carbon-innovation",
            focus_areas=["Early Stage Innovation", "Technology Development", "Market Validation"],
            stage=["Pre-seed", "Seed"],
            location="United Kingdom",
            last_updated=now,
        ),
    ]
