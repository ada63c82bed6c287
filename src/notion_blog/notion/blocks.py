# ABOUTME: Typed block model for Notion page content.
# ABOUTME: Parses raw Notion API block and rich_text JSON into immutable dataclasses.

from dataclasses import dataclass
from enum import Enum


class BlockKind(Enum):
    """Block kinds understood by the Markdown renderer."""
    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    CALLOUT = "callout"
    BOOKMARK = "bookmark"
    QUOTE = "quote"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    IMAGE = "image"
    CODE = "code"
    EQUATION = "equation"
    DIVIDER = "divider"
    # Notion reports this for blocks its API cannot expose
    UNSUPPORTED = "unsupported"
    # Anything else; Block.raw_type keeps the original name
    UNKNOWN = "unknown"


_KINDS_BY_TYPE = {kind.value: kind for kind in BlockKind if kind is not BlockKind.UNKNOWN}


@dataclass(frozen=True)
class Annotations:
    """Inline style set of a rich text run."""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False
    color: str = "default"


@dataclass(frozen=True)
class RichSpan:
    """One styled run of inline text."""
    content: str
    href: str | None = None
    annotations: Annotations | None = None


@dataclass(frozen=True)
class Block:
    """A node of the page content tree.

    Only the fields relevant to ``kind`` are populated; the rest keep their
    defaults.
    """
    kind: BlockKind
    raw_type: str = ""
    id: str = ""
    rich_text: tuple[RichSpan, ...] = ()
    children: tuple["Block", ...] = ()
    language: str = ""
    url: str = ""
    emoji: str | None = None
    checked: bool = False
    caption: tuple[RichSpan, ...] = ()
    expression: str = ""


def parse_annotations(raw: dict | None) -> Annotations | None:
    if raw is None:
        return None
    return Annotations(
        bold=bool(raw.get("bold")),
        italic=bool(raw.get("italic")),
        underline=bool(raw.get("underline")),
        strikethrough=bool(raw.get("strikethrough")),
        code=bool(raw.get("code")),
        color=raw.get("color") or "default",
    )


def parse_rich_text(rich_text: list[dict] | None) -> tuple[RichSpan, ...]:
    """Convert a Notion rich_text array into RichSpans."""
    spans = []
    for segment in rich_text or []:
        if segment.get("type") == "text":
            text = segment.get("text") or {}
            content = text.get("content", segment.get("plain_text", ""))
            link = text.get("link") or {}
            href = link.get("url") or segment.get("href")
        else:
            # Mentions and inline equations only expose their plain text
            content = segment.get("plain_text", "")
            href = segment.get("href")

        spans.append(RichSpan(
            content=content,
            href=href,
            annotations=parse_annotations(segment.get("annotations")),
        ))

    return tuple(spans)


def _file_url(data: dict) -> str:
    """Get the URL of a Notion-hosted or external file object."""
    for source in ("file", "external"):
        if source in data and data[source]:
            return data[source].get("url", "")
    return ""


def _icon_emoji(icon: dict | None) -> str | None:
    if icon and icon.get("type") == "emoji":
        return icon.get("emoji")
    return None


def parse_block(block: dict) -> Block:
    """Convert a raw Notion block (with children attached) into a Block.

    Args:
        block: Notion block dict. Nested blocks are expected under the
            ``children`` key, as attached by fetch_blocks_recursive.

    Returns:
        Parsed Block.
    """
    block_type = block.get("type", "")
    data = block.get(block_type) or {}
    kind = _KINDS_BY_TYPE.get(block_type, BlockKind.UNKNOWN)

    fields = {
        "kind": kind,
        "raw_type": block_type,
        "id": block.get("id", ""),
        "rich_text": parse_rich_text(data.get("rich_text")),
        "children": parse_blocks(block.get("children", [])),
    }

    if kind is BlockKind.CODE:
        fields["language"] = data.get("language", "")
    elif kind is BlockKind.BOOKMARK:
        fields["url"] = data.get("url", "")
        fields["caption"] = parse_rich_text(data.get("caption"))
    elif kind is BlockKind.IMAGE:
        fields["url"] = _file_url(data)
        fields["caption"] = parse_rich_text(data.get("caption"))
    elif kind is BlockKind.CALLOUT:
        fields["emoji"] = _icon_emoji(data.get("icon"))
    elif kind is BlockKind.TO_DO:
        fields["checked"] = bool(data.get("checked"))
    elif kind is BlockKind.EQUATION:
        fields["expression"] = data.get("expression", "")

    return Block(**fields)


def parse_blocks(blocks: list[dict]) -> tuple[Block, ...]:
    """Parse a sibling sequence of raw Notion blocks."""
    return tuple(parse_block(block) for block in blocks)
