from notion_blog.markdown.wrap import word_wrap


def test_short_text_is_unchanged():
    assert word_wrap("a short line", 80) == "a short line"


def test_whitespace_runs_collapse():
    assert word_wrap("  a \t b\n\n c  ", 80) == "a b c"


def test_empty_text():
    assert word_wrap("", 80, "> ") == ""
    assert word_wrap("   ", 80) == ""


def test_lines_respect_width_minus_prefix():
    text = " ".join(["word"] * 40)
    prefix = "> "

    wrapped = word_wrap(text, 20, prefix)

    lines = wrapped.split("\n")
    assert len(lines) > 1
    assert all(len(line) <= 20 - len(prefix) for line in lines)
    assert all(line.startswith(prefix) for line in lines[1:])


def test_rejoining_reproduces_normalized_text():
    text = "The quick  brown fox\tjumps over the lazy dog " * 5
    prefix = "    "

    wrapped = word_wrap(text, 30, prefix)

    assert wrapped.replace("\n" + prefix, " ") == " ".join(text.split())


def test_long_word_is_not_split():
    long_word = "x" * 30

    wrapped = word_wrap(f"a {long_word} b", 10)

    assert wrapped == f"a\n{long_word}\nb"


def test_non_ascii_characters_count_as_one_column():
    text = "ééééé ééééé ééééé"

    assert word_wrap(text, 10) == "ééééé\nééééé\nééééé"
    assert word_wrap(text, 17) == text


def test_emoji_are_kept_whole():
    text = "🎉🎉 👍🏽👍🏽 ✅✅"

    wrapped = word_wrap(text, 6, "")

    assert wrapped.replace("\n", " ") == text
