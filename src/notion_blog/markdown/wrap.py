# ABOUTME: Word wrapping for rendered Markdown text.
# ABOUTME: Breaks long lines on word boundaries with a continuation prefix.


def _words(text: str):
    """Yield the whitespace separated words of text."""
    start = None
    for i, char in enumerate(text):
        if char.isspace():
            if start is not None:
                yield text[start:i]
                start = None
        elif start is None:
            start = i
    if start is not None:
        yield text[start:]


def word_wrap(text: str, width: int, prefix: str = "") -> str:
    """Wrap text at word boundaries.

    Runs of whitespace collapse to a single space. When a word would push the
    current line past ``width - len(prefix)`` columns it starts a new line,
    introduced by ``"\\n" + prefix``. Words longer than the available width
    are kept whole.

    Args:
        text: Text to wrap.
        width: Target line width.
        prefix: Written at the start of every continuation line.

    Returns:
        The wrapped text.
    """
    wrapped = ""
    end_of_line = width - len(prefix)

    for word in _words(text):
        if wrapped and len(wrapped) + 1 + len(word) > end_of_line:
            wrapped += "\n"
            end_of_line = len(wrapped) + width - len(prefix)
            wrapped += prefix
        elif wrapped:
            wrapped += " "
        wrapped += word

    return wrapped
