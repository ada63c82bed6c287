# ABOUTME: Scrapes open graph metadata for bookmark blocks.
# ABOUTME: Falls back to plain HTML title/description tags where og tags are missing.

import logging
from dataclasses import dataclass
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Timeout for metadata requests (seconds)
METADATA_TIMEOUT = 10


@dataclass
class PageMetadata:
    """Preview data for an external page."""
    url: str
    title: str = ""
    description: str = ""
    image: str = ""


class MetadataError(Exception):
    """Raised when a page's metadata cannot be retrieved.

    ``metadata`` holds whatever was gathered before the failure.
    """

    def __init__(self, message: str, metadata: PageMetadata):
        super().__init__(message)
        self.metadata = metadata


def _meta_content(soup: BeautifulSoup, **attrs) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag and tag.get("content"):
        return tag["content"].strip()
    return ""


def extract_metadata(html: str, url: str) -> PageMetadata:
    """Extract preview metadata from an HTML document.

    Args:
        html: Page HTML.
        url: URL the page was fetched from.

    Returns:
        PageMetadata, og tags taking precedence over plain HTML tags.
    """
    soup = BeautifulSoup(html, "html.parser")

    title = _meta_content(soup, property="og:title")
    if not title and soup.title and soup.title.string:
        title = soup.title.string.strip()

    description = (
        _meta_content(soup, property="og:description")
        or _meta_content(soup, name="description")
    )

    image = _meta_content(soup, property="og:image")
    if image:
        image = urljoin(url, image)

    canonical = _meta_content(soup, property="og:url")
    if not canonical:
        link = soup.find("link", rel="canonical")
        if link and link.get("href"):
            canonical = urljoin(url, link["href"])

    return PageMetadata(
        url=canonical or url,
        title=title,
        description=description,
        image=image,
    )


def parse_metadata(url: str) -> PageMetadata:
    """Fetch a page and return its preview metadata.

    Args:
        url: The bookmarked URL.

    Returns:
        PageMetadata for the page.

    Raises:
        MetadataError: If the page cannot be fetched. The error carries
            metadata holding at least the URL.
    """
    logger.debug(f"Fetching metadata for {url}")
    try:
        response = requests.get(url, timeout=METADATA_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise MetadataError(f"couldn't fetch {url}: {e}", PageMetadata(url=url)) from e

    return extract_metadata(response.text, url)
