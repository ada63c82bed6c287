# ABOUTME: External asset collaborators used while rendering.
# ABOUTME: Exports the image store and bookmark metadata scraper.

from .images import ImageStore, ImageDownloadError
from .bookmarks import PageMetadata, MetadataError, parse_metadata

__all__ = ["ImageStore", "ImageDownloadError", "PageMetadata", "MetadataError", "parse_metadata"]
