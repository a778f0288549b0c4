"""
Row schemas produced by the IGDB games normalizer.
"""

from datetime import datetime
from typing import List, Optional

from schemas.base import RowSchema


# ============================================================================
# Root
# ============================================================================

class GameRow(RowSchema):
    id: int
    name: str
    slug: Optional[str] = None
    rating: Optional[float] = None
    reviews_count: Optional[int] = None
    category: Optional[int] = None
    first_release_date: Optional[datetime] = None
    follows: Optional[int] = None
    hypes: Optional[int] = None
    status: Optional[int] = None
    summary: Optional[str] = None
    version_title: Optional[str] = None
    updated_at: Optional[datetime] = None
    checksum: Optional[str] = None
    main_series_id: Optional[int] = None
    main_franchise_id: Optional[int] = None


# ============================================================================
# Children
# ============================================================================

class GameAgeRatingRow(RowSchema):
    id: int
    game_id: int
    category: Optional[int] = None
    rating: Optional[int] = None
    rating_cover_url: Optional[str] = None
    synopsis: Optional[str] = None
    checksum: Optional[str] = None


class GameAgeRatingDescriptionRow(RowSchema):
    id: int
    age_rating_id: int
    category: Optional[int] = None
    description: Optional[str] = None
    checksum: Optional[str] = None


class GameAlternativeNameRow(RowSchema):
    id: int
    game_id: int
    name: str
    comment: Optional[str] = None
    checksum: Optional[str] = None


class GameImageRow(RowSchema):
    """Shared shape of covers and screenshots."""
    id: int
    game_id: int
    alpha_channel: bool = False
    animated: bool = False
    image_id: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    checksum: Optional[str] = None


class GameCoverRow(GameImageRow):
    pass


class GameScreenshotRow(GameImageRow):
    pass


class GameLocalizationRow(RowSchema):
    id: int
    game_id: int
    name: Optional[str] = None
    region_id: Optional[int] = None
    updated_at: Optional[datetime] = None
    checksum: Optional[str] = None


class GameExternalServiceRow(RowSchema):
    id: int
    game_id: int
    name: Optional[str] = None
    category: Optional[int] = None
    countries: Optional[List[int]] = None
    media: Optional[int] = None
    platform_id: Optional[int] = None
    url: Optional[str] = None
    updated_at: Optional[datetime] = None
    checksum: Optional[str] = None


class GameLanguageSupportRow(RowSchema):
    id: int
    game_id: int
    language_id: Optional[int] = None
    support_type_id: Optional[int] = None
    updated_at: Optional[datetime] = None
    checksum: Optional[str] = None


class GameReleaseDateRow(RowSchema):
    id: int
    game_id: int
    category: Optional[int] = None
    date: Optional[datetime] = None
    human: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None
    status_id: Optional[int] = None
    platform_id: Optional[int] = None
    region: Optional[int] = None
    updated_at: Optional[datetime] = None
    checksum: Optional[str] = None


class GameVideoRow(RowSchema):
    id: int
    game_id: int
    name: Optional[str] = None
    video_id: Optional[str] = None
    checksum: Optional[str] = None


class GameWebsiteRow(RowSchema):
    id: int
    game_id: int
    category: Optional[int] = None
    url: Optional[str] = None
    trusted: bool = False
    checksum: Optional[str] = None


# ============================================================================
# References
# ============================================================================

class CollectionRow(RowSchema):
    id: int
    name: str
    slug: Optional[str] = None
    type_id: Optional[int] = None
    updated_at: Optional[datetime] = None
    checksum: Optional[str] = None


class FranchiseRow(RowSchema):
    id: int
    name: str
    slug: Optional[str] = None
    updated_at: Optional[datetime] = None
    checksum: Optional[str] = None


class EngineRow(RowSchema):
    id: int
    name: str
    slug: Optional[str] = None
    description: Optional[str] = None
    updated_at: Optional[datetime] = None
    checksum: Optional[str] = None


# ============================================================================
# Joins
# ============================================================================

class GameCollectionRow(RowSchema):
    game_id: int
    collection_id: int


class GameFranchiseRow(RowSchema):
    game_id: int
    franchise_id: int


class GameEngineRow(RowSchema):
    game_id: int
    engine_id: int


class GameModeRow(RowSchema):
    game_id: int
    mode_id: int


class GameGenreRow(RowSchema):
    game_id: int
    genre_id: int


class GamePlayerPerspectiveRow(RowSchema):
    game_id: int
    perspective_id: int


class GamePlatformRow(RowSchema):
    game_id: int
    platform_id: int


class GameThemeRow(RowSchema):
    game_id: int
    theme_id: int
