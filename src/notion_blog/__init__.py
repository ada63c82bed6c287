# ABOUTME: notion-blog turns Notion pages into Markdown posts for static site generators.
# ABOUTME: Run with `python -m notion_blog` or the `notion-blog` command.

__version__ = "0.1.0"
