# ABOUTME: Notion API integration package.
# ABOUTME: Exports the client, page fetching and the typed block model.

from .blocks import Annotations, Block, BlockKind, RichSpan, parse_block, parse_blocks, parse_rich_text
from .client import NotionClient
from .pages import PageData, fetch_page_with_blocks

__all__ = [
    "Annotations",
    "Block",
    "BlockKind",
    "RichSpan",
    "parse_block",
    "parse_blocks",
    "parse_rich_text",
    "NotionClient",
    "PageData",
    "fetch_page_with_blocks",
]
