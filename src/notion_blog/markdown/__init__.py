# ABOUTME: Markdown generation package.
# ABOUTME: Exports the block renderer, archetype filling and post writer.

from .converter import ContentGenerator, generate_content, emoji_to_name
from .archetype import ArchetypeError, generate, get_page_title
from .writer import PostWriter

__all__ = [
    "ContentGenerator",
    "generate_content",
    "emoji_to_name",
    "ArchetypeError",
    "generate",
    "get_page_title",
    "PostWriter",
]
