"""
Entity catalog: one descriptor per normalized table.

A descriptor pairs a row schema with its table model, the role the table
plays in the dependency graph, and the conflict policy applied when a row
with the same key is already stored. The batch writer, router and upsert
engine are generic over descriptors, so adding a table means adding one
model, one row schema and one catalog entry.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple, Type

from schemas.base import RowSchema
from schemas import games as game_rows
from schemas import tv_shows as tv_rows
from schemas import movies as movie_rows
from models import games as game_models
from models import tv_shows as tv_models
from models import movies as movie_models


class EntityKind(str, enum.Enum):
    ROOT = "root"
    CHILD = "child"
    NESTED_CHILD = "nested_child"
    REFERENCE = "reference"
    JOIN = "join"


class ConflictPolicy(str, enum.Enum):
    """What happens when an incoming row's key already exists."""
    UPDATE_ALL = "update_all"
    DO_NOTHING = "do_nothing"


class Phase(enum.IntEnum):
    """Write phases; every phase starts only after the previous one finished."""
    ROOT = 1
    CHILD = 2
    NESTED_CHILD = 3
    JOIN = 4


_PHASE_BY_KIND = {
    EntityKind.ROOT: Phase.ROOT,
    EntityKind.REFERENCE: Phase.ROOT,
    EntityKind.CHILD: Phase.CHILD,
    EntityKind.NESTED_CHILD: Phase.NESTED_CHILD,
    EntityKind.JOIN: Phase.JOIN,
}


@dataclass(frozen=True)
class EntityDescriptor:
    """
    Static description of one entity type.

    Attributes:
        name: Stable name used in logs and run statistics (the table name)
        model: SQLAlchemy model of the target table
        schema: Row schema the normalizer emits for this table
        kind: Role in the dependency graph
        policy: Conflict policy for the upsert
        version_column: Column compared before an UPDATE_ALL overwrite; an
            incoming row older than the stored one leaves it untouched
    """
    name: str
    model: type
    schema: Type[RowSchema]
    kind: EntityKind
    policy: ConflictPolicy
    version_column: Optional[str] = None

    @property
    def phase(self) -> Phase:
        return _PHASE_BY_KIND[self.kind]

    @property
    def table(self):
        return self.model.__table__

    @property
    def key_columns(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.table.primary_key.columns)

    def key_of(self, row: RowSchema) -> tuple:
        return tuple(getattr(row, column) for column in self.key_columns)


def _entity(model, schema, kind, policy=ConflictPolicy.DO_NOTHING, version_column=None):
    return EntityDescriptor(
        name=model.__tablename__,
        model=model,
        schema=schema,
        kind=kind,
        policy=policy,
        version_column=version_column,
    )


# ============================================================================
# Games (IGDB)
# ============================================================================

GAME_ENTITIES = (
    _entity(game_models.Game, game_rows.GameRow, EntityKind.ROOT,
            ConflictPolicy.UPDATE_ALL, version_column="updated_at"),
    _entity(game_models.Collection, game_rows.CollectionRow, EntityKind.REFERENCE),
    _entity(game_models.Franchise, game_rows.FranchiseRow, EntityKind.REFERENCE),
    _entity(game_models.Engine, game_rows.EngineRow, EntityKind.REFERENCE),

    _entity(game_models.GameAgeRating, game_rows.GameAgeRatingRow, EntityKind.CHILD),
    _entity(game_models.GameAlternativeName, game_rows.GameAlternativeNameRow, EntityKind.CHILD),
    _entity(game_models.GameCover, game_rows.GameCoverRow, EntityKind.CHILD),
    _entity(game_models.GameLocalization, game_rows.GameLocalizationRow, EntityKind.CHILD,
            ConflictPolicy.UPDATE_ALL),
    _entity(game_models.GameExternalService, game_rows.GameExternalServiceRow, EntityKind.CHILD,
            ConflictPolicy.UPDATE_ALL),
    _entity(game_models.GameLanguageSupport, game_rows.GameLanguageSupportRow, EntityKind.CHILD,
            ConflictPolicy.UPDATE_ALL),
    _entity(game_models.GameReleaseDate, game_rows.GameReleaseDateRow, EntityKind.CHILD,
            ConflictPolicy.UPDATE_ALL),
    _entity(game_models.GameScreenshot, game_rows.GameScreenshotRow, EntityKind.CHILD),
    _entity(game_models.GameVideo, game_rows.GameVideoRow, EntityKind.CHILD),
    _entity(game_models.GameWebsite, game_rows.GameWebsiteRow, EntityKind.CHILD),

    _entity(game_models.GameAgeRatingDescription, game_rows.GameAgeRatingDescriptionRow,
            EntityKind.NESTED_CHILD),

    _entity(game_models.GameCollection, game_rows.GameCollectionRow, EntityKind.JOIN),
    _entity(game_models.GameFranchise, game_rows.GameFranchiseRow, EntityKind.JOIN),
    _entity(game_models.GameEngine, game_rows.GameEngineRow, EntityKind.JOIN),
    _entity(game_models.GameMode, game_rows.GameModeRow, EntityKind.JOIN),
    _entity(game_models.GameGenre, game_rows.GameGenreRow, EntityKind.JOIN),
    _entity(game_models.GamePlayerPerspective, game_rows.GamePlayerPerspectiveRow, EntityKind.JOIN),
    _entity(game_models.GamePlatform, game_rows.GamePlatformRow, EntityKind.JOIN),
    _entity(game_models.GameTheme, game_rows.GameThemeRow, EntityKind.JOIN),
)


# ============================================================================
# TV shows (TMDB)
# ============================================================================

TV_SHOW_ENTITIES = (
    _entity(tv_models.TVShow, tv_rows.TVShowRow, EntityKind.ROOT, ConflictPolicy.UPDATE_ALL),
    _entity(tv_models.TVNetwork, tv_rows.TVNetworkRow, EntityKind.REFERENCE),
    _entity(tv_models.CinemaPerson, tv_rows.CinemaPersonRow, EntityKind.REFERENCE),

    _entity(tv_models.TVSeason, tv_rows.TVSeasonRow, EntityKind.CHILD),

    _entity(tv_models.TVShowGenre, tv_rows.TVShowGenreRow, EntityKind.JOIN),
    _entity(tv_models.TVShowCreator, tv_rows.TVShowCreatorRow, EntityKind.JOIN),
    _entity(tv_models.TVShowNetwork, tv_rows.TVShowNetworkRow, EntityKind.JOIN),
    _entity(tv_models.TVShowOriginCountry, tv_rows.TVShowOriginCountryRow, EntityKind.JOIN),
    _entity(tv_models.TVShowProductionCountry, tv_rows.TVShowProductionCountryRow, EntityKind.JOIN),
)


# ============================================================================
# Movies (TMDB)
# ============================================================================

MOVIE_ENTITIES = (
    _entity(movie_models.Movie, movie_rows.MovieRow, EntityKind.ROOT, ConflictPolicy.UPDATE_ALL),
    _entity(movie_models.MovieCollection, movie_rows.MovieCollectionRow, EntityKind.REFERENCE),
    _entity(movie_models.ProductionCompany, movie_rows.ProductionCompanyRow, EntityKind.REFERENCE),

    _entity(movie_models.MovieGenre, movie_rows.MovieGenreRow, EntityKind.JOIN),
    _entity(movie_models.MovieProductionCompany, movie_rows.MovieProductionCompanyRow, EntityKind.JOIN),
    _entity(movie_models.MovieProductionCountry, movie_rows.MovieProductionCountryRow, EntityKind.JOIN),
    _entity(movie_models.MovieSpokenLanguage, movie_rows.MovieSpokenLanguageRow, EntityKind.JOIN),
)


def entities_in_phase(descriptors, phase: Phase):
    return [d for d in descriptors if d.phase == phase]
