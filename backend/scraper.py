"""Page scraper: fetch a URL and extract meta, Open Graph and Twitter tags.

Only the requested page is fetched. Scripts are not executed, so tags injected
client-side are not seen.
"""

import logging
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from config import FETCH_TIMEOUT_SECONDS, FETCH_USER_AGENT
from models import PageTags, TagMapping

logger = logging.getLogger(__name__)

_REQUEST_HEADERS = {
    "User-Agent": FETCH_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


class FetchError(Exception):
    """The page could not be downloaded."""


def normalize_url(url: str) -> str:
    cleaned = (url or "").strip()
    # anything with an explicit scheme is left for validate_url to judge
    if "://" in cleaned:
        return cleaned
    return f"https://{cleaned}"


def validate_url(url: str) -> str:
    """Return ``url`` unchanged, or raise ValueError when it cannot be fetched."""
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise ValueError(f"Invalid URL: {url}") from exc
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        raise ValueError(f"Invalid URL: {url}")
    if any(ch.isspace() for ch in parsed.netloc):
        raise ValueError(f"Invalid URL: {url}")
    return url


def extract_domain(url: str) -> str:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return url
    if not hostname:
        return url
    return hostname.removeprefix("www.")


def _clean_key(value: object) -> str:
    return str(value or "").strip().lower()


def _document_title(soup: BeautifulSoup):
    """The <head> title; without a head, the first title outside inline SVG."""
    if soup.head is not None:
        return soup.head.find("title")
    for tag in soup.find_all("title"):
        if tag.find_parent("svg") is None:
            return tag
    return None


def extract_tags(html: str) -> tuple[TagMapping, TagMapping, TagMapping]:
    """
    Return (meta_tags, og_tags, twitter_tags) for an HTML document.

    meta_tags always carries a synthetic ``title`` key with the <title> text,
    plus every <meta> that has a name or property and non-empty content.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    meta_tags: TagMapping = {}
    og_tags: TagMapping = {}
    twitter_tags: TagMapping = {}

    title_tag = _document_title(soup)
    meta_tags["title"] = title_tag.get_text().strip() if title_tag else ""

    for tag in soup.find_all("meta"):
        content = tag.get("content")
        if not content:
            continue
        name = _clean_key(tag.get("name"))
        prop = _clean_key(tag.get("property"))

        key = name or prop
        if key:
            meta_tags[key] = content
        if prop.startswith("og:"):
            og_tags[prop] = content
        if name.startswith("twitter:"):
            twitter_tags[name] = content

    return meta_tags, og_tags, twitter_tags


def fetch_page_tags(url: str) -> PageTags:
    """
    Fetch ``url`` and return its tag mappings plus domain and title.
    Network failures and HTTP error statuses raise FetchError.
    """
    logger.info("Fetching %s", url)
    try:
        response = requests.get(url, timeout=FETCH_TIMEOUT_SECONDS, headers=_REQUEST_HEADERS)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Fetch failed for %s: %s", url, exc)
        raise FetchError(f"Could not fetch {url}: {exc}") from exc

    if response.encoding is None:
        response.encoding = response.apparent_encoding or "utf-8"

    meta_tags, og_tags, twitter_tags = extract_tags(response.text)
    domain = extract_domain(url)

    return {
        "url": url,
        "domain": domain,
        "title": meta_tags.get("title") or domain,
        "meta_tags": meta_tags,
        "og_tags": og_tags,
        "twitter_tags": twitter_tags,
    }
