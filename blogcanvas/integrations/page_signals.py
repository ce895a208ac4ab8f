"""Extract on-page SEO signals from crawled HTML.

Fetching pages is the crawler's job; this module only parses HTML that
has already been downloaded.
"""

import logging
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from blogcanvas.schemas.page import HeadingOutline, PageSignals

logger = logging.getLogger(__name__)

NON_NAVIGABLE_SCHEMES = ("mailto:", "tel:", "javascript:", "data:")
CONTENT_SELECTORS = ("article", "main", '[role="main"]', "body")


def _normalize_domain(domain: str | None) -> str:
    normalized = (domain or "").strip().lower()
    if "://" in normalized:
        normalized = urlparse(normalized).netloc
    if normalized.startswith("www."):
        normalized = normalized[4:]
    return normalized.rstrip("/")


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    content = tag.get("content")
    return content.strip() if isinstance(content, str) else ""


def classify_link(href: str, page_url: str | None, first_party_domain: str | None) -> str | None:
    """Return "internal", "external" or None for anchors that are not page links."""
    value = href.strip()
    if not value or value.startswith("#"):
        return None
    if value.lower().startswith(NON_NAVIGABLE_SCHEMES):
        return None

    resolved = urljoin(page_url, value) if page_url else value
    parsed = urlparse(resolved)
    if not parsed.netloc:
        # Relative link on a page with no known URL.
        return "internal"

    link_domain = _normalize_domain(parsed.netloc)
    site_domain = _normalize_domain(first_party_domain) or _normalize_domain(
        urlparse(page_url).netloc if page_url else ""
    )
    if site_domain and (link_domain == site_domain or link_domain.endswith(f".{site_domain}")):
        return "internal"
    return "external"


def extract_page_signals(
    html: str,
    *,
    page_url: str | None = None,
    first_party_domain: str | None = None,
) -> PageSignals:
    """Parse one page's HTML into `PageSignals`."""
    soup = BeautifulSoup(html or "", "lxml")

    for element in soup(["script", "style", "noscript", "template"]):
        element.decompose()

    title = soup.title.get_text(strip=True) if soup.title else ""
    if not title:
        title = _meta_content(soup, property="og:title")

    meta_description = _meta_content(soup, name="description") or _meta_content(
        soup, property="og:description"
    )

    headings = HeadingOutline(
        h1=[h.get_text(" ", strip=True) for h in soup.find_all("h1")],
        h2=[h.get_text(" ", strip=True) for h in soup.find_all("h2")],
        h3=[h.get_text(" ", strip=True) for h in soup.find_all("h3")],
    )

    content_element = None
    for selector in CONTENT_SELECTORS:
        content_element = soup.select_one(selector)
        if content_element is not None:
            break
    text = content_element.get_text(" ", strip=True) if content_element is not None else ""
    word_count = len(text.split())

    images = [img for img in soup.find_all("img") if img.get("src")]
    images_with_alt = sum(
        1 for img in images if isinstance(img.get("alt"), str) and img.get("alt").strip()
    )

    internal_links = 0
    external_links = 0
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        if not isinstance(href, str):
            continue
        kind = classify_link(href, page_url, first_party_domain)
        if kind == "internal":
            internal_links += 1
        elif kind == "external":
            external_links += 1

    signals = PageSignals(
        url=page_url,
        title=title,
        meta_description=meta_description,
        headings=headings,
        word_count=word_count,
        images=len(images),
        images_with_alt=images_with_alt,
        internal_links=internal_links,
        external_links=external_links,
    )
    logger.debug(
        "Extracted page signals",
        extra={
            "url": page_url,
            "word_count": word_count,
            "images": len(images),
            "internal_links": internal_links,
            "external_links": external_links,
        },
    )
    return signals
