# ABOUTME: Converts Notion rich text runs to inline Markdown.
# ABOUTME: Composes emphasis markers and wraps hyperlinks.

from collections.abc import Iterable

from ..notion.blocks import Annotations, RichSpan


def emph_format(annotations: Annotations | None) -> str:
    """Build a ``%s`` format string for the given style set.

    Code wins over every other style. Bold and italic combine; underline
    takes precedence over strikethrough. Colors are not rendered.
    """
    fmt = "%s"
    if annotations is None:
        return fmt

    if annotations.code:
        return "`%s`"

    if annotations.bold and annotations.italic:
        fmt = "***%s***"
    elif annotations.bold:
        fmt = "**%s**"
    elif annotations.italic:
        fmt = "*%s*"

    if annotations.underline:
        fmt = "__" + fmt + "__"
    elif annotations.strikethrough:
        fmt = "~~" + fmt + "~~"

    return fmt


def convert_rich(span: RichSpan) -> str:
    """Format a single rich text run."""
    text = span.content
    if span.href:
        text = f"[{text}]({span.href})"
    return emph_format(span.annotations) % text


def convert_rich_text(spans: Iterable[RichSpan]) -> str:
    """Format a rich text array as inline Markdown, trimmed."""
    return "".join(convert_rich(span) for span in spans).strip()
