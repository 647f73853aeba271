"""
Rule-based document categorization.

SmartCategorizer scores a document against weighted keyword and regex rules
to pick a category, then runs fixed dictionaries for themes, tags and the
document type. Everything here is pure and deterministic: the same
(title, content, url) always yields the same CategoryResult.
"""

import re
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Pattern

from co2re_hub.core.constants import (
    DEFAULT_TAG,
    DEFAULT_THEME,
    MAX_CATEGORY_SCORE,
    MAX_TAGS,
    MAX_THEMES,
    MIN_CONFIDENCE,
)
from co2re_hub.core.models import CategoryResult, DocumentCategory, DocumentType
from co2re_hub.core.utils import dedupe


def _compile(patterns: Iterable[str]) -> List[Pattern]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


class CategoryRule:
    """Keywords (whole-word) and regex patterns that vote for one category."""

    def __init__(self, keywords: List[str], patterns: List[str], weight: float = 1.0):
        self.keywords = keywords
        self.patterns = _compile(patterns)
        self.weight = weight
        self._keyword_regexes = [
            re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE) for keyword in keywords
        ]

    def score(self, text: str) -> float:
        """
        Keyword occurrences count individually; a pattern counts once (x2)
        when it matches anywhere.
        """
        total = 0.0
        for regex in self._keyword_regexes:
            total += len(regex.findall(text)) * self.weight
        for pattern in self.patterns:
            if pattern.search(text):
                total += self.weight * 2
        return total


class ThemeRule:
    """Substring keywords plus optional regex patterns for a theme or type."""

    def __init__(self, keywords: List[str], patterns: Optional[List[str]] = None):
        self.keywords = [k.lower() for k in keywords]
        self.patterns = _compile(patterns or [])

    def matches_keyword(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)

    def matches_pattern(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns)

    def matches(self, text: str) -> bool:
        return self.matches_keyword(text) or self.matches_pattern(text)


class SmartCategorizer:
    """
    Keyword/pattern classifier for CO2RE documents.

    Category registration order matters: on equal scores the earlier
    category wins.
    """

    CATEGORY_RULES: Dict[str, CategoryRule] = {
        DocumentCategory.POLICY_GOVERNANCE.value: CategoryRule(
            keywords=[
                "policy", "governance", "regulation", "regulatory", "government",
                "legal", "framework", "legislation", "compliance", "institutional",
                "political", "public policy", "policy brief", "policy instrument",
                "governance structure",
            ],
            patterns=[
                r"policy\s+framework",
                r"regulatory\s+approach",
                r"governance\s+structure",
                r"legal\s+framework",
                r"institutional\s+arrangement",
            ],
        ),
        DocumentCategory.MRV_MONITORING.value: CategoryRule(
            keywords=[
                "mrv", "monitoring", "verification", "measurement", "reporting",
                "accounting", "quantification", "assessment", "validation", "audit",
                "tracking", "surveillance", "observation", "detection", "analysis",
            ],
            patterns=[
                r"monitoring[,\s]+reporting[,\s]+verification",
                r"measurement\s+and\s+verification",
                r"carbon\s+accounting",
                r"verification\s+protocol",
                r"monitoring\s+system",
            ],
        ),
        DocumentCategory.TECHNICAL_RESEARCH.value: CategoryRule(
            keywords=[
                "research", "technology", "technical", "method", "methodology",
                "analysis", "study", "investigation", "experiment", "development",
                "innovation", "engineering", "scientific", "laboratory", "testing",
            ],
            patterns=[
                r"technical\s+assessment",
                r"research\s+methodology",
                r"experimental\s+design",
                r"technology\s+development",
                r"scientific\s+study",
            ],
        ),
        DocumentCategory.DECISION_SUPPORT.value: CategoryRule(
            keywords=[
                "decision", "support", "tool", "guidance", "framework", "assessment",
                "evaluation", "comparison", "selection", "criteria", "recommendation",
                "best practice", "guideline", "standard", "protocol",
            ],
            patterns=[
                r"decision\s+support",
                r"assessment\s+framework",
                r"evaluation\s+criteria",
                r"best\s+practice",
                r"guidance\s+document",
            ],
        ),
    }

    TECHNOLOGY_THEMES: Dict[str, ThemeRule] = {
        "Biochar": ThemeRule(
            ["biochar", "pyrolysis", "biomass", "charcoal", "carbonization"],
            [r"biochar\s+production", r"pyrolysis\s+process"],
        ),
        "BECCS": ThemeRule(
            ["beccs", "bioenergy", "biomass energy", "bio-energy", "ccs"],
            [r"bioenergy\s+with\s+carbon\s+capture", r"beccs\s+system"],
        ),
        "Direct Air Capture": ThemeRule(
            ["dac", "direct air capture", "ambient air", "air capture", "sorbent"],
            [r"direct\s+air\s+capture", r"dac\s+technology", r"ambient\s+air\s+capture"],
        ),
        "Enhanced Weathering": ThemeRule(
            ["enhanced weathering", "rock weathering", "mineral weathering", "silicate", "basalt"],
            [r"enhanced\s+rock\s+weathering", r"mineral\s+weathering"],
        ),
        "Peatland Restoration": ThemeRule(
            ["peatland", "wetland", "bog", "marsh", "restoration", "rewetting"],
            [r"peatland\s+restoration", r"wetland\s+restoration"],
        ),
        "Afforestation/Reforestation": ThemeRule(
            ["afforestation", "reforestation", "forest", "tree", "woodland", "plantation"],
            [r"afforestation\s+and\s+reforestation", r"forest\s+restoration"],
        ),
        "Ocean-based CDR": ThemeRule(
            ["ocean", "marine", "seawater", "alkalinity", "blue carbon"],
            [r"ocean\s+alkalinization", r"marine\s+carbon", r"blue\s+carbon"],
        ),
        "Soil Carbon": ThemeRule(
            ["soil carbon", "soil organic carbon", "agriculture", "farming", "cropland"],
            [r"soil\s+carbon\s+sequestration", r"agricultural\s+carbon"],
        ),
    }

    CROSS_CUTTING_THEMES: Dict[str, ThemeRule] = {
        "Economics": ThemeRule(["economic", "cost", "finance", "financial", "investment", "market"]),
        "Risk Assessment": ThemeRule(["risk", "assessment", "uncertainty", "evaluation", "analysis"]),
        "Societal Engagement": ThemeRule(["social", "public", "community", "stakeholder", "engagement"]),
        "Sustainability": ThemeRule(["sustainable", "sustainability", "environmental", "ecological"]),
        "Innovation": ThemeRule(["innovation", "innovative", "novel", "breakthrough", "emerging"]),
        "Net Zero": ThemeRule(["net zero", "net-zero", "carbon neutral", "carbon neutrality"]),
        "Climate": ThemeRule(["climate", "climate change", "global warming", "greenhouse gas"]),
    }

    # Checked against both the full text and the title
    COMMON_TAGS: Dict[str, List[str]] = {
        "carbon-removal": ["carbon removal", "cdr", "carbon dioxide removal"],
        "ggr": ["ggr", "greenhouse gas removal"],
        "climate": ["climate", "climate change"],
        "technology": ["technology", "technical", "innovation"],
        "research": ["research", "study", "analysis"],
        "policy": ["policy", "governance", "regulation"],
        "monitoring": ["monitoring", "mrv", "verification"],
        "sustainability": ["sustainable", "sustainability"],
        "net-zero": ["net zero", "net-zero", "carbon neutral"],
        "uk": ["uk", "united kingdom", "britain", "british"],
    }

    TECHNOLOGY_TAGS: Dict[str, List[str]] = {
        "biochar": ["biochar", "pyrolysis"],
        "beccs": ["beccs", "bioenergy"],
        "dac": ["dac", "direct air capture"],
        "weathering": ["weathering", "mineral"],
        "forestry": ["forest", "tree", "afforestation"],
        "peatland": ["peatland", "wetland"],
        "ocean": ["ocean", "marine"],
        "soil": ["soil", "agriculture"],
    }

    # Priority order: the first rule set with a hit decides the type
    TYPE_RULES: Dict[str, ThemeRule] = {
        DocumentType.POLICY_BRIEF.value: ThemeRule(
            ["policy brief", "policy-brief", "briefing", "brief"],
            [r"policy\s+brief", r"briefing\s+paper"],
        ),
        DocumentType.REPORT.value: ThemeRule(
            ["report", "annual report", "summary report", "final report"],
            [r"annual\s+report", r"final\s+report", r"summary\s+report"],
        ),
        DocumentType.WORKSHOP.value: ThemeRule(
            ["workshop", "event", "meeting", "conference", "symposium"],
            [r"workshop\s+report", r"event\s+summary"],
        ),
        DocumentType.PUBLICATION.value: ThemeRule(
            ["publication", "paper", "journal", "article", "study"],
            [r"research\s+paper", r"journal\s+article", r"published\s+study"],
        ),
    }

    def categorize(self, title: str, content: str, url: Optional[str] = None) -> CategoryResult:
        """
        Classify one document.

        Args:
            title: Document title
            content: Plain-text body
            url: Source URL (optional; also drives the type rules)

        Returns:
            CategoryResult with category, confidence, themes, tags and type
        """
        title = title or ""
        text = f"{title} {content or ''} {url or ''}".lower()

        scores = self.score_categories(text)
        category, confidence = self._best_category(scores)

        return CategoryResult(
            category=category,
            confidence=confidence,
            themes=self.extract_themes(text),
            tags=self.extract_tags(text, title),
            type=self.determine_type(text, url),
        )

    def score_categories(self, text: str) -> Dict[str, float]:
        """Raw score per category for an already lowercased text blob."""
        return {name: rule.score(text) for name, rule in self.CATEGORY_RULES.items()}

    @staticmethod
    def _best_category(scores: Mapping[str, float]):
        best_category = DocumentCategory.GENERAL.value
        best_score = 0.0
        for category, score in scores.items():
            # Strictly greater: ties keep the earlier category
            if score > best_score:
                best_category = category
                best_score = score

        confidence = min(100, round(best_score / MAX_CATEGORY_SCORE * 100))
        return best_category, max(MIN_CONFIDENCE, confidence)

    def extract_themes(self, text: str) -> List[str]:
        themes = [
            name for name, rule in self.TECHNOLOGY_THEMES.items() if rule.matches(text)
        ]
        themes.extend(
            name for name, rule in self.CROSS_CUTTING_THEMES.items() if rule.matches_keyword(text)
        )
        if not themes:
            return [DEFAULT_THEME]
        return dedupe(themes)[:MAX_THEMES]

    def extract_tags(self, text: str, title: str) -> List[str]:
        title_lower = title.lower()
        tags = []
        for tag, keywords in self.COMMON_TAGS.items():
            if any(k in text or k in title_lower for k in keywords):
                tags.append(tag)
        for tag, keywords in self.TECHNOLOGY_TAGS.items():
            if any(k in text for k in keywords):
                tags.append(tag)
        if not tags:
            return [DEFAULT_TAG]
        return dedupe(tags)[:MAX_TAGS]

    def determine_type(self, text: str, url: Optional[str] = None) -> str:
        if url:
            url_lower = url.lower()
            if url_lower.endswith(".pdf"):
                return DocumentType.PUBLICATION.value
            if "policy-brief" in url_lower:
                return DocumentType.POLICY_BRIEF.value
            if "report" in url_lower:
                return DocumentType.REPORT.value
            if "workshop" in url_lower or "event" in url_lower:
                return DocumentType.WORKSHOP.value

        for doc_type, rule in self.TYPE_RULES.items():
            if rule.matches_keyword(text) or rule.matches_pattern(text):
                return doc_type

        return DocumentType.ARTICLE.value

    def categorize_documents(self, documents: Iterable[Mapping[str, str]]) -> List[CategoryResult]:
        """
        Categorize a batch of {"title", "content", "url"?} mappings.
        """
        return [
            self.categorize(doc.get("title", ""), doc.get("content", ""), doc.get("url"))
            for doc in documents
        ]

    @staticmethod
    def get_category_stats(results: Iterable[CategoryResult]) -> Dict[str, int]:
        """Count results per category."""
        return dict(Counter(result.category for result in results))

    @staticmethod
    def get_theme_stats(results: Iterable[CategoryResult]) -> Dict[str, int]:
        """Count theme occurrences across results."""
        counter = Counter()
        for result in results:
            counter.update(result.themes)
        return dict(counter)
