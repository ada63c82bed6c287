# ABOUTME: Fills the user's archetype template with page metadata and rendered content.
# ABOUTME: Extracts front matter fields from Notion page properties.

import io
import logging
from typing import Any, TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError
from slugify import slugify

from ..assets import ImageDownloadError, ImageStore
from ..config import BlogConfig
from ..notion.blocks import Block, RichSpan, parse_rich_text
from .converter import ContentGenerator
from .richtext import convert_rich_text

logger = logging.getLogger(__name__)


class ArchetypeError(Exception):
    """Raised when the archetype template cannot be loaded or filled."""
    pass


def plain_text(rich_text: list[dict]) -> str:
    """Join the plain text of a Notion rich_text array."""
    return "".join(segment.get("plain_text", "") for segment in rich_text or [])


def get_page_title(page: dict) -> str:
    """Extract title from page properties."""
    props = page.get("properties", {})
    if not props:
        return "Untitled"

    for prop in props.values():
        if prop and prop.get("type") == "title":
            return plain_text(prop.get("title", [])) or "Untitled"

    return "Untitled"


def extract_property_value(prop: dict) -> Any:
    """Extract a simple value from a Notion property."""
    if not prop:
        return None
    prop_type = prop.get("type")

    if prop_type == "title":
        return plain_text(prop.get("title", []))
    if prop_type == "rich_text":
        return plain_text(prop.get("rich_text", []))
    if prop_type == "number":
        return prop.get("number")
    if prop_type == "select":
        select = prop.get("select")
        return select.get("name") if select else None
    if prop_type == "multi_select":
        return [s.get("name") for s in prop.get("multi_select", [])]
    if prop_type == "status":
        status = prop.get("status")
        return status.get("name") if status else None
    if prop_type == "date":
        date = prop.get("date")
        return date.get("start") if date else None
    if prop_type in ("checkbox", "url", "email", "phone_number", "created_time", "last_edited_time"):
        return prop.get(prop_type)
    if prop_type == "people":
        return [p.get("name", p.get("id")) for p in prop.get("people", [])]
    if prop_type in ("created_by", "last_edited_by"):
        return (prop.get(prop_type) or {}).get("name")
    if prop_type == "files":
        return [f.get("name", "file") for f in prop.get("files", [])]
    if prop_type == "relation":
        return [r.get("id") for r in prop.get("relation", [])]
    if prop_type in ("formula", "rollup"):
        value = prop.get(prop_type) or {}
        return value.get(value.get("type"))

    return None


def _as_list(value: Any) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def _cover_url(page: dict) -> str:
    cover = page.get("cover") or {}
    source = cover.get(cover.get("type", ""), {}) or {}
    return source.get("url", "")


def make_archetype_fields(page: dict, config: BlogConfig, images: ImageStore) -> dict:
    """Collect the template fields describing a page.

    Args:
        page: Notion page dict.
        config: Blog configuration naming the front matter properties.
        images: Store used to download the page cover.

    Returns:
        Dict of template fields; ``content`` is filled in by generate().
    """
    props = page.get("properties", {}) or {}
    names = config.properties
    title = get_page_title(page)

    properties = {}
    for name, prop in props.items():
        if not prop or prop.get("type") == "title":
            continue
        value = extract_property_value(prop)
        if value is not None:
            properties[name] = value

    banner = ""
    cover_url = _cover_url(page)
    if cover_url:
        try:
            banner = images.fetch(cover_url)
        except ImageDownloadError as e:
            logger.warning(f"Error getting banner image {cover_url}: {e}")
            banner = e.path

    return {
        "id": page.get("id", ""),
        "title": title,
        "description": properties.get(names.description) or "",
        "tags": _as_list(properties.get(names.tags)),
        "categories": _as_list(properties.get(names.categories)),
        "created": page.get("created_time", ""),
        "last_edited": page.get("last_edited_time", ""),
        "banner": banner,
        "properties": properties,
        "page": page,
        "content": "",
    }


def rich(value) -> str:
    """Template helper rendering rich text as inline Markdown.

    Accepts parsed RichSpans or a raw Notion rich_text array.
    """
    spans = list(value or [])
    if spans and not isinstance(spans[0], RichSpan):
        spans = parse_rich_text(spans)
    return convert_rich_text(spans)


TEMPLATE_HELPERS = {
    "add": lambda a, b: a + b,
    "sub": lambda a, b: a - b,
    "mul": lambda a, b: a * b,
    "div": lambda a, b: a // b,
    "repeat": lambda s, n: s * n,
    "rich": rich,
    "slug": lambda s: slugify(str(s)),
}


def make_environment(config: BlogConfig) -> Environment:
    """Create the Jinja environment for archetype files.

    Expressions use ``[[ ]]``, statements ``[% %]`` and comments ``[# #]``
    so the template can contain Hugo's own ``{{ }}`` untouched.
    """
    env = Environment(
        loader=FileSystemLoader(str(config.archetype_file.parent)),
        variable_start_string="[[",
        variable_end_string="]]",
        block_start_string="[%",
        block_end_string="%]",
        comment_start_string="[#",
        comment_end_string="#]",
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.globals.update(TEMPLATE_HELPERS)
    env.filters.update(TEMPLATE_HELPERS)
    return env


def generate(
    w: TextIO,
    page: dict,
    blocks: tuple[Block, ...],
    config: BlogConfig,
    images: ImageStore | None = None,
    content_generator: ContentGenerator | None = None,
) -> None:
    """Write a complete post: archetype front matter plus rendered content.

    Args:
        w: Text stream receiving the post.
        page: Notion page dict.
        blocks: Parsed page blocks.
        config: Blog configuration.
        images: Image store shared by the banner and image blocks.
        content_generator: Renderer for the page body.

    Raises:
        ArchetypeError: If the archetype file cannot be parsed or filled.
    """
    env = make_environment(config)
    try:
        template = env.get_template(config.archetype_file.name)
    except TemplateError as e:
        raise ArchetypeError(f"error parsing archetype file: {e}") from e

    images = images or ImageStore(config.images_folder, config.images_link)
    content_generator = content_generator or ContentGenerator(config, images=images)

    buffer = io.StringIO()
    content_generator.generate(buffer, blocks)

    fields = make_archetype_fields(page, config, images)
    fields["content"] = buffer.getvalue()

    try:
        w.write(template.render(**fields))
    except (TemplateError, ArithmeticError, TypeError) as e:
        raise ArchetypeError(f"error filling archetype file: {e}") from e
