"""
Read-only catalog endpoints: albums, tracks, blog posts and merchandise.

Ids arrive as path strings so a non-integer id can be answered with a
400 naming the record kind instead of a generic validation error.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..models.catalog import Album, BlogPost, MerchItem, Track
from ..services.catalog_repository import CatalogRepository, get_catalog_repository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


def _parse_id(raw: str, label: str) -> int:
    """
    Parse a path id or raise 400 'Invalid <label> ID'.

    Only plain ASCII digits count as an id; signs, spaces and ``_``
    separators that int() would accept are rejected.
    """
    if not (raw.isascii() and raw.isdigit()):
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID")
    return int(raw)


# === Albums ===


@router.get("/albums", response_model=list[Album])
async def list_albums(repo: CatalogRepository = Depends(get_catalog_repository)) -> list[Album]:
    return repo.list_albums()


@router.get("/albums/{album_id}", response_model=Album)
async def get_album(album_id: str, repo: CatalogRepository = Depends(get_catalog_repository)) -> Album:
    album = repo.get_album(_parse_id(album_id, "album"))
    if album is None:
        raise HTTPException(status_code=404, detail="Album not found")
    return album


@router.get("/albums/{album_id}/tracks", response_model=list[Track])
async def list_album_tracks(
    album_id: str,
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> list[Track]:
    """Tracks of one album ordered by track number."""
    parsed = _parse_id(album_id, "album")
    if repo.get_album(parsed) is None:
        raise HTTPException(status_code=404, detail="Album not found")
    return repo.list_tracks_by_album(parsed)


# === Tracks ===


@router.get("/tracks/{track_id}", response_model=Track)
async def get_track(track_id: str, repo: CatalogRepository = Depends(get_catalog_repository)) -> Track:
    track = repo.get_track(_parse_id(track_id, "track"))
    if track is None:
        raise HTTPException(status_code=404, detail="Track not found")
    return track


# === Blog ===


@router.get("/blog", response_model=list[BlogPost])
async def list_blog_posts(repo: CatalogRepository = Depends(get_catalog_repository)) -> list[BlogPost]:
    return repo.list_blog_posts()


@router.get("/blog/{post_id}", response_model=BlogPost)
async def get_blog_post(post_id: str, repo: CatalogRepository = Depends(get_catalog_repository)) -> BlogPost:
    post = repo.get_blog_post(_parse_id(post_id, "blog post"))
    if post is None:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return post


# === Merchandise ===


@router.get("/merch", response_model=list[MerchItem])
async def list_merch_items(repo: CatalogRepository = Depends(get_catalog_repository)) -> list[MerchItem]:
    return repo.list_merch_items()


@router.get("/merch/{item_id}", response_model=MerchItem)
async def get_merch_item(item_id: str, repo: CatalogRepository = Depends(get_catalog_repository)) -> MerchItem:
    item = repo.get_merch_item(_parse_id(item_id, "merch item"))
    if item is None:
        raise HTTPException(status_code=404, detail="Merch item not found")
    return item
