# ABOUTME: Page and block fetching logic.
# ABOUTME: Recursively retrieves all blocks within a page and parses them.

import logging
from dataclasses import dataclass

from .blocks import Block, parse_blocks
from .client import NotionClient

logger = logging.getLogger(__name__)

# Block types whose children are rendered
BLOCKS_WITH_CHILDREN = {
    "paragraph",
    "bulleted_list_item",
    "numbered_list_item",
    "toggle",
    "to_do",
    "quote",
    "callout",
}


@dataclass
class PageData:
    """A page's properties and its parsed block tree."""
    page: dict
    blocks: tuple[Block, ...]


def fetch_blocks_recursive(client: NotionClient, block_id: str) -> list[dict]:
    """Fetch all blocks under a parent, recursively fetching children.

    Args:
        client: The Notion API client.
        block_id: The ID of the parent block or page.

    Returns:
        List of raw blocks with their children populated in-place.
    """
    blocks = client.get_blocks(block_id)

    for block in blocks:
        block_type = block.get("type")
        has_children = block.get("has_children", False)

        if has_children and block_type in BLOCKS_WITH_CHILDREN:
            block["children"] = fetch_blocks_recursive(client, block["id"])

    return blocks


def fetch_page_with_blocks(client: NotionClient, page_id: str) -> PageData:
    """Fetch a page with all its properties and blocks.

    Args:
        client: The Notion API client.
        page_id: The ID of the page to fetch.

    Returns:
        PageData containing page properties and the parsed block tree.
    """
    logger.debug(f"Fetching page {page_id}")

    page = client.get_page(page_id)
    raw_blocks = fetch_blocks_recursive(client, page_id)

    logger.debug(f"Page {page_id} has {len(raw_blocks)} top-level blocks")

    return PageData(page=page, blocks=parse_blocks(raw_blocks))
