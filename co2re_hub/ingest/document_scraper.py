"""
CO2RE document ingestion.

Pipeline:
1. Probe the WordPress REST API
2. API pass (paged posts) when the probe succeeds, otherwise the web pass
   (seed pages, then links found on the publications index)
3. Static fallback documents when a pass yields nothing

Individual page, post and link failures are logged, recorded in the run
monitor and skipped.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests

from co2re_hub.classify.categorizer import SmartCategorizer
from co2re_hub.core.constants import (
    API_BATCH_SIZE,
    API_MAX_PAGES,
    API_PAGE_DELAY_MS,
    CO2RE_BASE_URL,
    DEFAULT_AUTHOR,
    MAX_PUBLICATION_LINKS,
    PUBLICATION_LINK_DELAY_MS,
    SEED_PAGE_DELAY_MS,
)
from co2re_hub.core.errors import IngestionError, ParseFailureError
from co2re_hub.core.models import Document, DocumentCategory, DocumentType, PageLink
from co2re_hub.core.utils import (
    dedupe,
    generate_document_id,
    generate_excerpt,
    strip_html,
    utc_now_iso,
)
from co2re_hub.extract.content_extractors import (
    calculate_relevance_score,
    extract_authors,
    extract_page_tags,
    extract_page_themes,
)
from co2re_hub.ingest.fallback_content import fallback_documents
from co2re_hub.ingest.pacing import Pacer
from co2re_hub.ingest.sources import document_seeds
from co2re_hub.monitoring.scraper_stats import ScraperMonitor, StageResult

logger = logging.getLogger(__name__)


# WordPress category name fragment -> document category
WORDPRESS_CATEGORY_MAP = [
    ("Policy", DocumentCategory.POLICY_GOVERNANCE.value),
    ("MRV", DocumentCategory.MRV_MONITORING.value),
    ("Research", DocumentCategory.TECHNICAL_RESEARCH.value),
]

MAX_WORDPRESS_THEMES = 3
MAX_WORDPRESS_TAGS = 5


def _rendered(post: Dict[str, Any], key: str) -> str:
    value = post.get(key)
    if isinstance(value, dict):
        return value.get("rendered") or ""
    return value or ""


def _embedded_terms(post: Dict[str, Any], index: int) -> List[Dict[str, Any]]:
    terms = (post.get("_embedded") or {}).get("wp:term") or []
    if len(terms) > index and isinstance(terms[index], list):
        return terms[index]
    return []


class CO2REDocumentScraper:
    """
    Scrapes CO2RE documents from the WordPress API or the public site.

    Usage:
        scraper = CO2REDocumentScraper(WebClient())
        documents = scraper.scrape_all_documents()
    """

    def __init__(
        self,
        client,
        categorizer: Optional[SmartCategorizer] = None,
        pacer: Optional[Pacer] = None,
        monitor: Optional[ScraperMonitor] = None,
        base_url: str = CO2RE_BASE_URL,
    ):
        """
        Initialize scraper.

        Args:
            client: WebClient (or any object with scrape_url,
                extract_text_from_url and fetch_json)
            categorizer: Classifier used when a page carries no category
            pacer: Delay scheduler between requests
            monitor: Run monitor that records every attempt
            base_url: CO2RE site root
        """
        self.client = client
        self.categorizer = categorizer or SmartCategorizer()
        self.pacer = pacer or Pacer()
        self.monitor = monitor or ScraperMonitor()
        self.base_url = base_url.rstrip("/")
        self.api_base = f"{self.base_url}/wp-json/wp/v2"
        self.publications_url = f"{self.base_url}/publications/"
        self.site_host = urlparse(self.base_url).netloc.replace("www.", "")

    # -------------------------------------------------------------------------
    # Orchestration
    # -------------------------------------------------------------------------

    def scrape_all_documents(self) -> List[Document]:
        """
        Run the full pipeline.

        Returns:
            Scraped documents, or the static fallback set; never empty
        """
        logger.info("Starting CO2RE document scraping")

        if self.probe_api():
            logger.info("WordPress API accessible, using API pass")
            try:
                result = self.scrape_via_api()
                stage = "api"
            except Exception as e:
                logger.error(f"API pass failed, switching to web pass: {e}")
                self.monitor.log_failure(self.api_base, e, stage="api", url=self.api_base)
                result = self.scrape_via_web()
                stage = "web"
        else:
            logger.warning("WordPress API not accessible, using web pass")
            result = self.scrape_via_web()
            stage = "web"

        successes, failures = result.counts
        logger.info(f"{stage} pass produced {successes} documents ({failures} failures)")

        if not result.items:
            self.monitor.record_fallback(f"documents:{stage}")
            return fallback_documents(self.base_url)

        return self._dedupe(result.items)

    @staticmethod
    def _dedupe(documents: List[Document]) -> List[Document]:
        seen = set()
        unique = []
        for doc in documents:
            if doc.id in seen:
                logger.debug(f"Dropping duplicate document {doc.id}")
                continue
            seen.add(doc.id)
            unique.append(doc)
        return unique

    def probe_api(self) -> bool:
        """True iff a one-post API request answers with status 200."""
        try:
            resp = self.client.fetch_json(f"{self.api_base}/posts", {"per_page": 1})
        except (IngestionError, requests.RequestException) as e:
            logger.warning(f"WordPress API probe failed: {e}")
            return False
        return resp.status == 200

    # -------------------------------------------------------------------------
    # API pass
    # -------------------------------------------------------------------------

    def scrape_via_api(self) -> StageResult[Document]:
        """
        Page through /posts until an empty or non-200 page.

        Raises:
            IngestionError: If a page cannot be fetched or decoded
        """
        result: StageResult[Document] = StageResult()
        posts_url = f"{self.api_base}/posts"

        for page in range(1, API_MAX_PAGES + 1):
            logger.info(f"Fetching API page {page}")
            resp = self.client.fetch_json(
                posts_url,
                {"per_page": API_BATCH_SIZE, "page": page, "_embed": "true"},
            )

            if resp.status != 200:
                logger.warning(f"API request failed for page {page}: {resp.status}")
                break

            posts = resp.body
            if not isinstance(posts, list):
                raise ParseFailureError(f"Unexpected API body for page {page}", url=posts_url)
            if not posts:
                break

            for index, post in enumerate(posts):
                source_id = f"page-{page}-{index}"
                link = None
                try:
                    if not isinstance(post, dict):
                        raise ParseFailureError(
                            f"Unexpected post entry of type {type(post).__name__}", url=posts_url
                        )
                    source_id = str(post.get("id") or post.get("link") or source_id)
                    link = post.get("link")
                    doc = self.process_wordpress_post(post)
                except Exception as e:
                    logger.error(f"Error processing WordPress post {source_id}: {e}")
                    result.add_failure(source_id, e)
                    self.monitor.log_failure(source_id, e, stage="api", url=link)
                    continue
                result.items.append(doc)
                self.monitor.log_attempt(source_id, stage="api", success=True, url=doc.url)

            self.pacer.pause(API_PAGE_DELAY_MS)

        logger.info(f"Scraped {len(result.items)} documents via API")
        return result

    def process_wordpress_post(self, post: Dict[str, Any]) -> Document:
        """
        Convert a WordPress post (with _embed) into a Document.

        Embedded category, tags and author win; the classifier and page
        heuristics fill whatever the post does not carry.

        Raises:
            ParseFailureError: If the post has neither id nor link
        """
        link = post.get("link") or ""
        if not post.get("id") and not link:
            raise ParseFailureError("Post has no id or link")

        content = strip_html(_rendered(post, "content") or _rendered(post, "excerpt"))
        title = strip_html(_rendered(post, "title")) or "Untitled"
        raw_excerpt = _rendered(post, "excerpt")
        excerpt = strip_html(raw_excerpt) if raw_excerpt else generate_excerpt(content)

        doc_id = str(post["id"]) if post.get("id") else generate_document_id(link)
        structured = set()

        category = self._category_from_wordpress(post)
        if category:
            structured.add("category")
        else:
            category = self.categorizer.categorize(title, content, link).category

        tag_terms = _embedded_terms(post, 1)
        theme = [t["name"] for t in tag_terms if t.get("name")][:MAX_WORDPRESS_THEMES]
        tags = [t["slug"] for t in tag_terms if t.get("slug")][:MAX_WORDPRESS_TAGS]

        if theme:
            structured.add("theme")
        else:
            theme = extract_page_themes(content, title, link)
        if tags:
            structured.add("tags")
        else:
            tags = extract_page_tags(content, title, link)

        authors = [a.get("name") for a in (post.get("_embedded") or {}).get("author", []) if a.get("name")]

        return Document(
            id=doc_id,
            title=title,
            content=content,
            excerpt=excerpt,
            url=link,
            category=category,
            type=DocumentType.ARTICLE.value,
            theme=dedupe(theme),
            authors=authors[:1] or [DEFAULT_AUTHOR],
            published_date=post.get("date") or utc_now_iso(),
            tags=dedupe(tags),
            relevance_score=calculate_relevance_score(content, title),
            structured_fields=structured,
        )

    @staticmethod
    def _category_from_wordpress(post: Dict[str, Any]) -> Optional[str]:
        categories = _embedded_terms(post, 0)
        if not categories:
            return None
        name = categories[0].get("name") or ""
        for fragment, category in WORDPRESS_CATEGORY_MAP:
            if fragment in name:
                return category
        return None

    # -------------------------------------------------------------------------
    # Web pass
    # -------------------------------------------------------------------------

    def scrape_via_web(self) -> StageResult[Document]:
        """Scrape every seed page, then the publications index."""
        result: StageResult[Document] = StageResult()

        for seed in document_seeds(self.base_url):
            logger.info(f"Scraping: {seed.title}")
            try:
                doc = self.scrape_page(seed.url, seed.title, seed.category)
            except Exception as e:
                logger.warning(f"Could not scrape {seed.url}: {e}")
                result.add_failure(seed.url, e)
                self.monitor.log_failure(seed.url, e, stage="web", url=seed.url)
            else:
                result.items.append(doc)
                self.monitor.log_attempt(seed.url, stage="web", success=True, url=seed.url)

            self.pacer.pause(SEED_PAGE_DELAY_MS)

        try:
            publications = self.scrape_publications()
        except Exception as e:
            logger.warning(f"Could not scrape publications page: {e}")
            result.add_failure(self.publications_url, e)
            self.monitor.log_failure(self.publications_url, e, stage="publications", url=self.publications_url)
        else:
            logger.info(f"Found {len(publications.items)} additional publications")
            result.extend(publications)

        logger.info(f"Scraped {len(result.items)} documents via web pass")
        return result

    def scrape_page(
        self,
        url: str,
        title: Optional[str] = None,
        category_hint: Optional[str] = None,
    ) -> Document:
        """
        Scrape one HTML page into a Document.

        Raises:
            IngestionError: If the page cannot be fetched or has no text
        """
        page = self.client.scrape_url(url)
        text = page.text or ""
        if not text.strip():
            raise ParseFailureError("Page has no text", url=url)

        pdf_url = next(
            (link.href for link in page.links if link.href.endswith(".pdf") and self.site_host in link.href),
            None,
        )
        title = title or page.metadata.get("title") or "CO2RE Document"
        classification = self.categorizer.categorize(title, text, url)

        return Document(
            id=generate_document_id(url),
            title=title,
            content=text,
            excerpt=generate_excerpt(text),
            url=url,
            pdf_url=pdf_url,
            category=category_hint or classification.category,
            type=classification.type,
            theme=extract_page_themes(text, title, url),
            authors=extract_authors(text),
            published_date=page.metadata.get("published_time") or utc_now_iso(),
            tags=extract_page_tags(text, title, url),
            relevance_score=calculate_relevance_score(text, title),
        )

    def process_pdf(self, pdf_url: str, title: Optional[str] = None) -> Document:
        """
        Extract a linked PDF into a publication Document.

        Raises:
            IngestionError: If the PDF cannot be fetched or read
        """
        logger.info(f"Processing PDF: {title or pdf_url}")
        text = self.client.extract_text_from_url(pdf_url)
        title = title or "CO2RE Publication"
        classification = self.categorizer.categorize(title, text, pdf_url)

        return Document(
            id=generate_document_id(pdf_url),
            title=title,
            content=text,
            excerpt=generate_excerpt(text),
            url=pdf_url,
            pdf_url=pdf_url,
            category=classification.category,
            type=DocumentType.PUBLICATION.value,
            theme=extract_page_themes(text, title, pdf_url),
            authors=extract_authors(text),
            published_date=utc_now_iso(),
            tags=extract_page_tags(text, title, pdf_url),
            relevance_score=calculate_relevance_score(text, title),
        )

    def is_publication_link(self, link: PageLink) -> bool:
        href = link.href or ""
        if self.site_host not in href or "#" in href or "mailto:" in href:
            return False
        return len(link.text or "") > 10 or "/publication/" in href or href.endswith(".pdf")

    def scrape_publications(self) -> StageResult[Document]:
        """
        Follow up to 20 candidate links from the publications index.

        PDFs are extracted as text; other pages are scraped unless they are
        themselves under /publications/.

        Raises:
            IngestionError: If the index page itself cannot be fetched
        """
        result: StageResult[Document] = StageResult()
        index = self.client.scrape_url(self.publications_url)

        candidates = []
        seen_hrefs = set()
        for link in index.links:
            if link.href in seen_hrefs or not self.is_publication_link(link):
                continue
            seen_hrefs.add(link.href)
            candidates.append(link)
        candidates = candidates[:MAX_PUBLICATION_LINKS]

        for link in candidates:
            try:
                if link.href.endswith(".pdf"):
                    doc = self.process_pdf(link.href, link.text)
                elif "/publications/" not in link.href:
                    doc = self.scrape_page(link.href, link.text)
                else:
                    doc = None
            except Exception as e:
                logger.info(f"Skipping {link.href}: {e}")
                result.add_failure(link.href, e)
                self.monitor.log_failure(link.href, e, stage="publications", url=link.href)
            else:
                if doc is not None:
                    result.items.append(doc)
                    self.monitor.log_attempt(link.href, stage="publications", success=True, url=link.href)

            self.pacer.pause(PUBLICATION_LINK_DELAY_MS)

        return result
