"""
Row classification tables for the catalog export.

The ``Type`` column of every row decides its branch:
- merchandise types map 1:1 to merch items
- album types are grouped into one album each
- ``Single`` rows are collected into the singles collection

Album metadata that the spreadsheet does not carry (dedication, release
year) lives in ALBUM_PROFILES, keyed by album type.
"""

from dataclasses import dataclass
from typing import Mapping

ARTIST_NAME = "Hawk Eye"


class CsvColumn:
    """Normalized column names of the catalog export (``.`` already replaced by ``_``)."""
    TYPE = "Type"
    NAME = "Name"
    SKU = "SKU"
    CATEGORIES = "Categories"
    REGULAR_PRICE = "Regular_price"
    IN_STOCK = "In_stock"
    DESCRIPTION = "Description"
    IMAGE_ALT = "Image_alt"
    IMAGE_BACK = "Image_back"
    IMAGE_FRONT = "Image_front"
    IMAGE_SIDE = "Image_side"
    AUDIO_URL = "Audio_URL"
    VIDEO_URL = "Video_URL"
    KUNAKI_URL = "Kunaki_URL"
    ALBUM_BACK = "Album_Back"
    ALBUM_SIDE = "Album_Side"
    ALBUM_DISC = "Album_Disc"


@dataclass(frozen=True)
class AlbumProfile:
    """Fixed album metadata not present in the row data."""
    dedicated_to: str = ""
    release_year: str = ""


EMPTY_PROFILE = AlbumProfile()

ALBUM_PROFILES: Mapping[str, AlbumProfile] = {
    "Full Disclosure": AlbumProfile(dedicated_to="Max Spiers", release_year="2023"),
    "Behold A Pale Horse": AlbumProfile(dedicated_to="Milton William Cooper", release_year="2024"),
    "Milabs": AlbumProfile(dedicated_to="Dr. Karla Turner", release_year="2025"),
}

ALBUM_TYPES: tuple[str, ...] = tuple(ALBUM_PROFILES)

MERCH_TYPES: tuple[str, ...] = ("Apparel", "Posters", "Stickers", "Accessories")

SINGLE_TYPE = "Single"


@dataclass(frozen=True)
class SinglesCollection:
    """The synthetic album holding every standalone single."""
    title: str = "Singles Collection"
    dedicated_to: str = "The Fans"
    description: str = f"Collection of {ARTIST_NAME}'s standalone singles."
    release_year: str = "2023-2025"


SINGLES_COLLECTION = SinglesCollection()


def profile_for(album_type: str, profiles: Mapping[str, AlbumProfile] = ALBUM_PROFILES) -> AlbumProfile:
    """Dedication/year for an album type; unknown types get empty values."""
    return profiles.get(album_type, EMPTY_PROFILE)


def ordinal(n: int) -> str:
    """English ordinal label: 1st, 2nd, 3rd, 4th, 11th, 21st."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def album_description(title: str, position: int) -> str:
    """Synthesized album blurb; position is the first-seen order of the album type."""
    return f"{title} is the {ordinal(position)} album in {ARTIST_NAME}'s truth trilogy."
