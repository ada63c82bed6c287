# ABOUTME: Writes generated posts into the site's content folder.
# ABOUTME: Derives file names from page titles.

import io
import logging
from pathlib import Path

from slugify import slugify

from ..assets import ImageStore
from ..config import BlogConfig
from ..notion.blocks import Block
from .archetype import generate, get_page_title

logger = logging.getLogger(__name__)


def post_filename(title: str, max_length: int = 100) -> str:
    """Convert a page title to a Markdown file name.

    Args:
        title: The page title.
        max_length: Maximum length of the name without extension.

    Returns:
        File name ending in ``.md``.
    """
    return f"{slugify(title, max_length=max_length) or 'untitled'}.md"


class PostWriter:
    """Writes Markdown posts for Notion pages."""

    def __init__(self, config: BlogConfig, images: ImageStore | None = None):
        """Initialize the writer.

        Args:
            config: Blog configuration.
            images: Image store shared across the post's assets.
        """
        self.config = config
        self.images = images or ImageStore(config.images_folder, config.images_link)

    def write_post(self, page: dict, blocks: tuple[Block, ...], output: Path | None = None) -> Path:
        """Write a page as a Markdown post.

        Args:
            page: Notion page dict.
            blocks: Parsed blocks of the page.
            output: Destination file. Defaults to the content folder plus a
                name derived from the page title.

        Returns:
            Path to the written file.
        """
        if output is None:
            output = self.config.content_folder / post_filename(get_page_title(page))

        # Render fully before touching the destination
        buffer = io.StringIO()
        generate(buffer, page, blocks, self.config, images=self.images)

        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            f.write(buffer.getvalue())

        logger.info(f"Wrote post: {output}")
        return output
