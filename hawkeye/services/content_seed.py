"""
Blog content seeding.

Blog posts have no write endpoint and are not part of the spreadsheet
export, so they are loaded from a YAML file:

```yaml
posts:
  - title: "..."
    content: "..."
    excerpt: "..."
    category: "News"
    image_url: "https://..."   # optional
    publish_date: "2025-01-15"
```
"""

import logging
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from ..models.catalog import BlogPostCreate
from .catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

DEFAULT_BLOG_POSTS_PATH = Path(__file__).parent.parent / "data" / "blog_posts.yaml"


def load_blog_posts(path: Union[str, Path]) -> list[BlogPostCreate]:
    """
    Read blog posts from YAML.

    Raises:
        ValueError: if the file has no ``posts`` list or a post is invalid
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    posts = data.get("posts") if isinstance(data, dict) else None
    if not isinstance(posts, list):
        raise ValueError(f"{path}: expected a top-level 'posts' list")

    result = []
    for index, raw in enumerate(posts, start=1):
        try:
            result.append(BlogPostCreate(**raw))
        except (TypeError, ValidationError) as e:
            raise ValueError(f"{path}: post #{index} is invalid: {e}") from e
    return result


def seed_blog_posts(repo: CatalogRepository, path: Union[str, Path] = DEFAULT_BLOG_POSTS_PATH) -> int:
    """Insert every post from ``path``. Returns the number of posts written."""
    posts = load_blog_posts(path)
    for post in posts:
        repo.create_blog_post(post)
    logger.info(f"Seeded {len(posts)} blog posts from {path}")
    return len(posts)
