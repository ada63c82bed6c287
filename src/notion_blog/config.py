# ABOUTME: Configuration loading and validation for notion-blog.
# ABOUTME: Parses config.yaml into validated dataclasses.

from dataclasses import dataclass, field
from pathlib import Path
import os
import yaml


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


@dataclass
class PropertyNames:
    """Names of the Notion page properties feeding the front matter."""
    description: str = "Description"
    tags: str = "Tags"
    categories: str = "Categories"


@dataclass
class BlogConfig:
    """Generation parameters for a blog post."""
    archetype_file: Path
    token_env: str = "NOTION_TOKEN"
    content_folder: Path = Path("content/posts")
    images_folder: Path = Path("static/images")
    images_link: str = "/images"
    use_shortcodes: bool = False
    properties: PropertyNames = field(default_factory=PropertyNames)

    def __post_init__(self):
        self.archetype_file = Path(self.archetype_file)
        self.content_folder = Path(self.content_folder)
        self.images_folder = Path(self.images_folder)
        if not str(self.archetype_file) or str(self.archetype_file) == ".":
            raise ConfigError("archetype_file must not be empty")
        if not self.token_env:
            raise ConfigError("token_env must not be empty")

    def get_token(self) -> str:
        """Retrieve the Notion token from environment variable."""
        token = os.environ.get(self.token_env)
        if not token:
            raise ConfigError(f"Environment variable '{self.token_env}' not set")
        return token


def load_config(path: Path) -> BlogConfig:
    """Load and validate configuration from a YAML file.

    Relative paths in the file are resolved against the file's directory.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")

    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a YAML mapping")

    if "archetype_file" not in raw:
        raise ConfigError("Missing required config field: archetype_file")

    base = path.parent

    def resolve(value) -> Path:
        return base / Path(value)

    # Parse property names
    props_raw = raw.get("properties") or {}
    if not isinstance(props_raw, dict):
        raise ConfigError("properties must be a mapping")
    properties = PropertyNames(
        description=props_raw.get("description", "Description"),
        tags=props_raw.get("tags", "Tags"),
        categories=props_raw.get("categories", "Categories"),
    )

    use_shortcodes = raw.get("use_shortcodes", False)
    if not isinstance(use_shortcodes, bool):
        raise ConfigError(f"use_shortcodes must be true or false, got '{use_shortcodes}'")

    return BlogConfig(
        archetype_file=resolve(raw["archetype_file"]),
        token_env=raw.get("token_env", "NOTION_TOKEN"),
        content_folder=resolve(raw.get("content_folder", "content/posts")),
        images_folder=resolve(raw.get("images_folder", "static/images")),
        images_link=raw.get("images_link", "/images"),
        use_shortcodes=use_shortcodes,
        properties=properties,
    )
