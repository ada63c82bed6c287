# ABOUTME: Renders a tree of Notion blocks as Markdown for a static site generator.
# ABOUTME: Handles list runs, quote/list prefixes, shortcodes and image/bookmark assets.

import logging
from collections.abc import Callable, Sequence
from typing import TextIO

from ..assets import ImageDownloadError, ImageStore, MetadataError, PageMetadata, parse_metadata
from ..config import BlogConfig
from ..notion.blocks import Block, BlockKind
from .richtext import convert_rich_text
from .wrap import word_wrap

logger = logging.getLogger(__name__)

LINE_WIDTH = 80

MORE_MARKER = "<!-- more -->"

# Callout icon to admonition category
EMOJI_CATEGORIES = {
    "⚠️": "warning",
    "💡": "tip",
    "🐞": "bug",
    "❓": "question",
    "❔": "question",
    "❌": "failure",
    "🧨": "failure",
    "💣": "failure",
    "✅": "success",
    "🆗": "success",
    "☑️": "success",
    "✔️": "success",
    "☠️": "danger",
    "⛔": "danger",
    "🛑": "danger",
    "📋": "abstract",
    "💬": "quote",
    "ℹ️": "info",
    "✍️": "example",
}

HEADING_MARKERS = {
    BlockKind.HEADING_1: "#",
    BlockKind.HEADING_2: "##",
    BlockKind.HEADING_3: "###",
}

BULLETED_KINDS = {BlockKind.BULLETED_LIST_ITEM, BlockKind.TO_DO}

QUOTE_PREFIX = "> "
LIST_CONTINUATION = "  "
LIST_INDENT = "    "


def emoji_to_name(emoji: str | None) -> str:
    """Map a callout icon to its admonition category."""
    if emoji is None:
        return "note"
    return EMOJI_CATEGORIES.get(emoji, "note")


def _shortcode_value(value: str) -> str:
    return value.replace('"', "&quot;")


class ContentGenerator:
    """Writes Markdown for a sequence of blocks and their descendants."""

    def __init__(
        self,
        config: BlogConfig,
        images: ImageStore | None = None,
        fetch_metadata: Callable[[str], PageMetadata] = parse_metadata,
        log: logging.Logger | None = None,
    ):
        """Initialize the generator.

        Args:
            config: Blog configuration.
            images: Store used for image blocks. Defaults to one built from
                the configured images folder and link.
            fetch_metadata: Returns preview metadata for bookmark URLs.
            log: Logger receiving notices about skipped blocks and failed
                fetches.
        """
        self.config = config
        self.images = images or ImageStore(config.images_folder, config.images_link)
        self.fetch_metadata = fetch_metadata
        self.log = log or logger

    def generate(self, w: TextIO, blocks: Sequence[Block], prefixes: tuple[str, ...] = ()) -> None:
        """Write Markdown for sibling blocks and their children.

        Args:
            w: Text stream receiving the Markdown.
            blocks: Sibling blocks in document order.
            prefixes: Prefixes inherited from enclosing quotes and lists,
                written at the start of every line.
        """
        if not blocks:
            return

        bulleted_list = False
        numbered_list = False
        last_index = len(blocks) - 1

        for index, block in enumerate(blocks):
            # Line break after a list is finished
            if bulleted_list and block.kind not in BULLETED_KINDS:
                bulleted_list = False
                w.write("\n")
            if numbered_list and block.kind is not BlockKind.NUMBERED_LIST_ITEM:
                numbered_list = False
                w.write("\n")

            if block.kind in BULLETED_KINDS:
                bulleted_list = True
            elif block.kind is BlockKind.NUMBERED_LIST_ITEM:
                numbered_list = True

            self._render_block(w, block, prefixes, is_last=index == last_index)

        if bulleted_list or numbered_list:
            w.write("\n")

    def _render_block(self, w: TextIO, block: Block, prefixes: tuple[str, ...], is_last: bool) -> None:
        kind = block.kind
        text = convert_rich_text(block.rich_text)
        lead = "".join(prefixes)

        if kind is BlockKind.PARAGRAPH:
            if text:
                self._line(w, prefixes, word_wrap(text, LINE_WIDTH, ""))
                if not is_last:
                    self._line(w, prefixes, "")
            self.generate(w, block.children, prefixes)

        elif kind in HEADING_MARKERS:
            self._line(w, prefixes, f"{HEADING_MARKERS[kind]} {text}")
            self._line(w, prefixes, "")

        elif kind is BlockKind.CALLOUT:
            if not self.config.use_shortcodes:
                return
            self._line(w, prefixes, f"{{{{< admonition {emoji_to_name(block.emoji)} >}}}}")
            self._line(w, prefixes, text)
            self.generate(w, block.children, prefixes)
            self._line(w, prefixes, "{{< /admonition >}}")
            self._line(w, prefixes, "")

        elif kind is BlockKind.BOOKMARK:
            self._render_bookmark(w, block, prefixes)

        elif kind is BlockKind.QUOTE:
            wrapped = word_wrap(text, LINE_WIDTH - len(lead), QUOTE_PREFIX)
            self._line(w, prefixes, QUOTE_PREFIX + wrapped)
            self.generate(w, block.children, (QUOTE_PREFIX,) + prefixes)
            self._line(w, prefixes, "")

        elif kind is BlockKind.BULLETED_LIST_ITEM:
            wrapped = word_wrap(text, LINE_WIDTH - len(lead), LIST_CONTINUATION)
            self._line(w, prefixes, "- " + wrapped)
            self.generate(w, block.children, (LIST_INDENT,) + prefixes)

        elif kind is BlockKind.TO_DO:
            checkbox = "[x]" if block.checked else "[ ]"
            wrapped = word_wrap(text, LINE_WIDTH - len(lead), LIST_CONTINUATION)
            self._line(w, prefixes, f"- {checkbox} {wrapped}")
            self.generate(w, block.children, (LIST_INDENT,) + prefixes)

        elif kind is BlockKind.NUMBERED_LIST_ITEM:
            # Markdown renderers number the items themselves
            self._line(w, prefixes, "1. " + text)
            self.generate(w, block.children, (LIST_INDENT,) + prefixes)

        elif kind is BlockKind.TOGGLE:
            self._line(w, prefixes, "<details>")
            self._line(w, prefixes, f"<summary>{text}</summary>")
            self._line(w, prefixes, "")
            self.generate(w, block.children, prefixes)
            self._line(w, prefixes, "</details>")
            self._line(w, prefixes, "")

        elif kind is BlockKind.IMAGE:
            self._render_image(w, block, prefixes)

        elif kind is BlockKind.CODE:
            if block.language == "plain text":
                self._line(w, prefixes, "```")
            else:
                self._line(w, prefixes, f"```{block.language}")
            self._line(w, prefixes, text)
            self._line(w, prefixes, "```")
            self._line(w, prefixes, "")

        elif kind is BlockKind.EQUATION:
            self._line(w, prefixes, "$$")
            self._line(w, prefixes, block.expression)
            self._line(w, prefixes, "$$")
            self._line(w, prefixes, "")

        elif kind is BlockKind.DIVIDER:
            self._line(w, prefixes, MORE_MARKER)
            self._line(w, prefixes, "")

        elif kind is BlockKind.UNSUPPORTED:
            self.log.info("Unsupported block type")

        else:
            self.log.info(f"Unimplemented block {block.raw_type}")

    def _render_bookmark(self, w: TextIO, block: Block, prefixes: tuple[str, ...]) -> None:
        url = block.url
        if not self.config.use_shortcodes:
            self._line(w, prefixes, f"[{url}]({url})")
            return

        try:
            metadata = self.fetch_metadata(url)
        except MetadataError as e:
            self.log.warning(f"Error getting bookmark metadata: {e}")
            metadata = e.metadata

        self._line(
            w,
            prefixes,
            f'{{{{< bookmark url="{_shortcode_value(metadata.url)}" '
            f'title="{_shortcode_value(metadata.title)}" '
            f'img="{_shortcode_value(metadata.image)}" >}}}}'
            f"{metadata.description}{{{{< /bookmark >}}}}",
        )

    def _render_image(self, w: TextIO, block: Block, prefixes: tuple[str, ...]) -> None:
        try:
            src = self.images.fetch(block.url)
        except ImageDownloadError as e:
            self.log.warning(f"Error getting image {block.url}: {e}")
            src = e.path

        caption = convert_rich_text(block.caption) or "image"
        self._line(w, prefixes, f"![{caption}]({src})")
        self._line(w, prefixes, "")

    @staticmethod
    def _line(w: TextIO, prefixes: tuple[str, ...], text: str) -> None:
        """Write text with every line prefixed; blank lines drop trailing prefix whitespace."""
        lead = "".join(prefixes)
        for line in text.split("\n"):
            if line:
                w.write(f"{lead}{line}\n")
            else:
                w.write(f"{lead.rstrip()}\n")


def generate_content(
    w: TextIO,
    blocks: Sequence[Block],
    config: BlogConfig,
    prefixes: tuple[str, ...] = (),
) -> None:
    """Write Markdown for blocks using the default asset collaborators."""
    ContentGenerator(config).generate(w, blocks, prefixes)
