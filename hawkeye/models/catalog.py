"""
Pydantic models for catalog records.

``*Create`` models carry the writable fields; the stored models add the
id assigned by the store. Field names match the SQLite columns.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class AlbumCreate(BaseModel):
    """Album fields written by the catalog import."""
    title: str
    dedicated_to: str = ""
    description: str = ""
    cover_image: Optional[str] = None
    back_image: Optional[str] = None
    side_image: Optional[str] = None
    disc_image: Optional[str] = None
    release_year: str = Field("", description="Free-text label, e.g. '2024' or '2023-2025'")
    track_count: int = Field(0, ge=0)


class Album(AlbumCreate):
    id: int


class TrackCreate(BaseModel):
    """A track; album_id is a plain reference, not enforced by the store."""
    album_id: int
    title: str
    duration: str
    track_number: int = Field(..., ge=1, description="1-based position within the album")
    lyrics: Optional[str] = None
    description: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    image_url: Optional[str] = None
    sku: Optional[str] = None


class Track(TrackCreate):
    id: int


class BlogPostCreate(BaseModel):
    title: str
    content: str
    excerpt: str
    category: str
    image_url: Optional[str] = None
    publish_date: str


class BlogPost(BlogPostCreate):
    id: int


class MerchItemCreate(BaseModel):
    """Merchandise item mapped 1:1 from a catalog row."""
    name: str
    description: str = ""
    price: float = Field(..., ge=0)
    sku: Optional[str] = None
    type: str
    category: Optional[str] = None
    in_stock: int = 0
    image_alt: Optional[str] = None
    image_back: Optional[str] = None
    image_front: Optional[str] = None
    image_side: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    kunaki_url: Optional[str] = None


class MerchItem(MerchItemCreate):
    id: int


class SubscriberCreate(BaseModel):
    email: EmailStr
    subscribed_at: str


class Subscriber(SubscriberCreate):
    id: int
