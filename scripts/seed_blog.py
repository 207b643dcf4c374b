#!/usr/bin/env python3
"""
Seed blog posts from YAML.

Usage:
    python scripts/seed_blog.py                       # Seed hawkeye/data/blog_posts.yaml
    python scripts/seed_blog.py --file posts.yaml     # Seed a custom file
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_path = Path(__file__).parent.parent
sys.path.insert(0, str(project_path))

from dotenv import load_dotenv
load_dotenv()

from hawkeye.config import Config
from hawkeye.db import ensure_schema
from hawkeye.services.catalog_repository import CatalogRepository
from hawkeye.services.content_seed import DEFAULT_BLOG_POSTS_PATH, seed_blog_posts


def main():
    parser = argparse.ArgumentParser(description="Seed blog posts")
    parser.add_argument(
        "--file", "-f",
        default=str(DEFAULT_BLOG_POSTS_PATH),
        help="YAML file with a top-level 'posts' list"
    )
    args = parser.parse_args()

    db_path = Config.database_path()
    ensure_schema(db_path)
    repo = CatalogRepository(db_path)
    try:
        count = seed_blog_posts(repo, args.file)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    finally:
        repo.close()

    print(f"Seeded {count} blog posts into {db_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
