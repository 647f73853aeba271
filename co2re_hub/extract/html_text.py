"""
HTML to plain text, metadata and links.
"""

from typing import Dict, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from co2re_hub.core.models import PageLink, ScrapedPage
from co2re_hub.core.utils import clean_text

NOISE_TAGS = ["nav", "footer", "script", "style", "aside", "noscript", "form"]
TEXT_TAGS = ["h1", "h2", "h3", "h4", "p", "li", "blockquote", "td"]


def _meta_content(soup: BeautifulSoup, **attrs) -> Optional[str]:
    tag = soup.find("meta", attrs=attrs)
    if tag and tag.get("content"):
        return tag["content"].strip()
    return None


def extract_metadata(soup: BeautifulSoup) -> Dict[str, Optional[str]]:
    """Title (og:title preferred) and article publish time."""
    title = _meta_content(soup, property="og:title")
    if not title and soup.title and soup.title.string:
        title = soup.title.string.strip()

    published = (
        _meta_content(soup, property="article:published_time")
        or _meta_content(soup, name="date")
    )
    if not published:
        time_tag = soup.find("time", attrs={"datetime": True})
        if time_tag:
            published = time_tag["datetime"].strip()

    return {"title": title or None, "published_time": published}


def extract_links(soup: BeautifulSoup, base_url: str) -> List[PageLink]:
    """Every anchor with an href, resolved against base_url."""
    links = []
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href.startswith("javascript:"):
            continue
        links.append(PageLink(
            href=urljoin(base_url, href),
            text=anchor.get_text(" ", strip=True),
        ))
    return links


def extract_text(soup: BeautifulSoup) -> str:
    """
    Readable text, one block element per line.

    Navigation, footer and script elements are dropped first. Nested
    blocks (a <p> inside an <li>) are only emitted once.
    """
    for tag in soup(NOISE_TAGS):
        tag.decompose()

    root = soup.find("main") or soup.find("article") or soup.body or soup
    text_parts = []
    for tag in root.find_all(TEXT_TAGS):
        if tag.find_parent(TEXT_TAGS) is not None:
            continue
        text = tag.get_text(" ", strip=True)
        if text:
            text_parts.append(text)

    if not text_parts:
        return clean_text(root.get_text("\n", strip=True))

    return clean_text("\n".join(text_parts))


def render_html(html: str, url: str) -> ScrapedPage:
    """
    Render an HTML page into a ScrapedPage.

    Links and metadata are read before the noise elements are removed so
    that navigation links to publications are kept.

    Args:
        html: Raw HTML
        url: URL the page was fetched from (base for relative links)

    Returns:
        ScrapedPage with text, metadata and absolute links
    """
    soup = BeautifulSoup(html or "", "html.parser")
    metadata = extract_metadata(soup)
    links = extract_links(soup, url)
    text = extract_text(soup)
    return ScrapedPage(url=url, text=text, metadata=metadata, links=links)
