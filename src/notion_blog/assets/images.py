# ABOUTME: Downloads images referenced by page blocks into the site's static folder.
# ABOUTME: Names files after the source host and file name, once per URL.

import logging
import posixpath
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests

logger = logging.getLogger(__name__)

# Timeout for image downloads (seconds)
DOWNLOAD_TIMEOUT = 30


class ImageDownloadError(Exception):
    """Raised when an image cannot be stored locally.

    ``path`` holds whatever reference could still be computed; it may point
    to a missing or partially written file.
    """

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


def image_filename(url: str) -> str:
    """Generate the local file name for an image URL.

    Args:
        url: The image URL.

    Returns:
        Filename in format: {host}_{original_name}

    Raises:
        ImageDownloadError: If the URL cannot be parsed or has no scheme or host.
    """
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError as e:
        raise ImageDownloadError(f"malformed url: {url!r}: {e}") from e
    if not parsed.scheme or not host:
        raise ImageDownloadError(f"malformed url: {url!r}")

    original_name = unquote(parsed.path).rsplit("/", 1)[-1]
    return f"{host}_{original_name}"


class ImageStore:
    """Stores page images under the site's static folder."""

    def __init__(self, images_folder: Path, images_link: str):
        """Initialize the store.

        Args:
            images_folder: Directory the images are written to.
            images_link: URL path the site serves that directory from.
        """
        self.images_folder = Path(images_folder)
        self.images_link = images_link
        self._downloaded: dict[str, str] = {}

    def link_for(self, name: str) -> str:
        """Get the public reference for a stored file name."""
        return posixpath.join(self.images_link, name)

    def fetch(self, url: str) -> str:
        """Download an image and return the path it is served from.

        Each URL is downloaded at most once per store.

        Args:
            url: The image URL.

        Returns:
            Public reference path of the stored image.

        Raises:
            ImageDownloadError: If the URL is malformed, the download fails,
                or the file cannot be written. The error's ``path`` carries
                the reference the caller may still use.
        """
        if url in self._downloaded:
            return self._downloaded[url]

        name = image_filename(url)
        logger.info(f"Getting image `{name}`")

        try:
            response = requests.get(url, timeout=DOWNLOAD_TIMEOUT, stream=True)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImageDownloadError(f"couldn't download image: {e}") from e

        try:
            self.images_folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ImageDownloadError(f"couldn't create images folder: {e}") from e

        destination = self.images_folder / name
        link = self.link_for(name)
        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=8192):
                    f.write(chunk)
        # RequestException is an OSError subclass; keep it first
        except requests.RequestException as e:
            raise ImageDownloadError(f"couldn't write image file: {e}", path=link) from e
        except OSError as e:
            raise ImageDownloadError(f"couldn't create image file: {e}", path=name) from e

        logger.debug(f"Stored image {destination}")
        self._downloaded[url] = link
        return link
