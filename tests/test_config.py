from pathlib import Path

import pytest

from notion_blog.config import BlogConfig, ConfigError, load_config


def write_config(tmp_path, text):
    path = tmp_path / "notion-blog.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_full_config(tmp_path):
    path = write_config(tmp_path, """
token_env: BLOG_TOKEN
archetype_file: archetypes/post.md
content_folder: content/posts
images_folder: static/images
images_link: /images
use_shortcodes: true
properties:
  description: Summary
  tags: Labels
""")

    config = load_config(path)

    assert config.token_env == "BLOG_TOKEN"
    assert config.archetype_file == tmp_path / "archetypes" / "post.md"
    assert config.content_folder == tmp_path / "content" / "posts"
    assert config.images_folder == tmp_path / "static" / "images"
    assert config.images_link == "/images"
    assert config.use_shortcodes is True
    assert config.properties.description == "Summary"
    assert config.properties.tags == "Labels"
    assert config.properties.categories == "Categories"


def test_defaults(tmp_path):
    config = load_config(write_config(tmp_path, "archetype_file: post.md\n"))

    assert config.token_env == "NOTION_TOKEN"
    assert config.use_shortcodes is False
    assert config.images_link == "/images"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_missing_archetype(tmp_path):
    with pytest.raises(ConfigError, match="archetype_file"):
        load_config(write_config(tmp_path, "use_shortcodes: true\n"))


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(write_config(tmp_path, "archetype_file: [unclosed\n"))


def test_not_a_mapping(tmp_path):
    with pytest.raises(ConfigError, match="mapping"):
        load_config(write_config(tmp_path, "- just\n- a list\n"))


def test_use_shortcodes_must_be_boolean(tmp_path):
    with pytest.raises(ConfigError, match="use_shortcodes"):
        load_config(write_config(tmp_path, "archetype_file: post.md\nuse_shortcodes: maybe\n"))


def test_get_token(monkeypatch):
    config = BlogConfig(archetype_file=Path("post.md"), token_env="BLOG_TOKEN")

    monkeypatch.setenv("BLOG_TOKEN", "secret")
    assert config.get_token() == "secret"

    monkeypatch.delenv("BLOG_TOKEN")
    with pytest.raises(ConfigError, match="BLOG_TOKEN"):
        config.get_token()
