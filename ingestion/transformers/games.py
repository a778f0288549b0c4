"""
Decompose IGDB game payloads into game rows.
"""

from typing import Any, Dict, Optional
from ingestion.transformers.normalizer import (
    NormalizedRows,
    RecordNormalizer,
    epoch_to_datetime,
    id_list,
    objects,
)
from schemas import games as rows


DEFAULT_COLLECTION_TYPE_ID = 1


class GameNormalizer(RecordNormalizer):
    """
    Map one expanded IGDB game into its root, child, nested child, reference
    and join rows.

    Field mapping notes:
    - ``aggregated_rating`` / ``aggregated_rating_count`` become ``rating`` /
      ``reviews_count``
    - the singular ``collection`` / ``franchise`` become ``main_series_id`` /
      ``main_franchise_id`` and are also emitted as reference rows
    - epoch integers become aware UTC datetimes
    - content descriptions are keyed to their age rating, not the game
    """

    source_name = "games"

    def _normalize(self, record: Dict[str, Any], game_id: int) -> NormalizedRows:
        out = NormalizedRows()

        collection = _embedded(record.get("collection"))
        franchise = _embedded(record.get("franchise"))

        out.add(rows.GameRow(
            id=game_id,
            name=record.get("name") or "",
            slug=record.get("slug"),
            rating=record.get("aggregated_rating"),
            reviews_count=record.get("aggregated_rating_count"),
            category=record.get("category"),
            first_release_date=epoch_to_datetime(record.get("first_release_date")),
            follows=record.get("follows"),
            hypes=record.get("hypes"),
            status=record.get("status"),
            summary=record.get("summary"),
            version_title=record.get("version_title"),
            updated_at=epoch_to_datetime(record.get("updated_at")),
            checksum=record.get("checksum"),
            main_series_id=collection["id"] if collection else None,
            main_franchise_id=franchise["id"] if franchise else None,
        ))

        self._add_children(out, record, game_id)
        self._add_references(out, record, game_id, collection, franchise)

        for mode_id in id_list(record.get("game_modes")):
            out.add(rows.GameModeRow(game_id=game_id, mode_id=mode_id))
        for genre_id in id_list(record.get("genres")):
            out.add(rows.GameGenreRow(game_id=game_id, genre_id=genre_id))
        for perspective_id in id_list(record.get("player_perspectives")):
            out.add(rows.GamePlayerPerspectiveRow(game_id=game_id, perspective_id=perspective_id))
        for platform_id in id_list(record.get("platforms")):
            out.add(rows.GamePlatformRow(game_id=game_id, platform_id=platform_id))
        for theme_id in id_list(record.get("themes")):
            out.add(rows.GameThemeRow(game_id=game_id, theme_id=theme_id))

        return out

    def _add_children(self, out: NormalizedRows, record: Dict[str, Any], game_id: int) -> None:
        for rating in objects(record.get("age_ratings")):
            out.add(rows.GameAgeRatingRow(
                id=rating["id"],
                game_id=game_id,
                category=rating.get("category"),
                rating=rating.get("rating"),
                rating_cover_url=rating.get("rating_cover_url"),
                synopsis=rating.get("synopsis"),
                checksum=rating.get("checksum"),
            ))
            for description in objects(rating.get("content_descriptions")):
                out.add(rows.GameAgeRatingDescriptionRow(
                    id=description["id"],
                    age_rating_id=rating["id"],
                    category=description.get("category"),
                    description=description.get("description"),
                    checksum=description.get("checksum"),
                ))

        for name in objects(record.get("alternative_names")):
            out.add(rows.GameAlternativeNameRow(
                id=name["id"],
                game_id=game_id,
                name=name.get("name") or "",
                comment=name.get("comment"),
                checksum=name.get("checksum"),
            ))

        cover = _embedded(record.get("cover"))
        if cover:
            out.add(rows.GameCoverRow(game_id=game_id, **_image_fields(cover)))

        for screenshot in objects(record.get("screenshots")):
            out.add(rows.GameScreenshotRow(game_id=game_id, **_image_fields(screenshot)))

        for localization in objects(record.get("game_localizations")):
            out.add(rows.GameLocalizationRow(
                id=localization["id"],
                game_id=game_id,
                name=localization.get("name"),
                region_id=localization.get("region"),
                updated_at=epoch_to_datetime(localization.get("updated_at")),
                checksum=localization.get("checksum"),
            ))

        for external in objects(record.get("external_games")):
            out.add(rows.GameExternalServiceRow(
                id=external["id"],
                game_id=game_id,
                name=external.get("name"),
                category=external.get("category"),
                countries=external.get("countries"),
                media=external.get("media"),
                platform_id=external.get("platform"),
                url=external.get("url"),
                updated_at=epoch_to_datetime(external.get("updated_at")),
                checksum=external.get("checksum"),
            ))

        for support in objects(record.get("language_supports")):
            out.add(rows.GameLanguageSupportRow(
                id=support["id"],
                game_id=game_id,
                language_id=support.get("language"),
                support_type_id=support.get("language_support_type"),
                updated_at=epoch_to_datetime(support.get("updated_at")),
                checksum=support.get("checksum"),
            ))

        for release in objects(record.get("release_dates")):
            out.add(rows.GameReleaseDateRow(
                id=release["id"],
                game_id=game_id,
                category=release.get("category"),
                date=epoch_to_datetime(release.get("date")),
                human=release.get("human"),
                month=release.get("m"),
                year=release.get("y"),
                status_id=release.get("status"),
                platform_id=release.get("platform"),
                region=release.get("region"),
                updated_at=epoch_to_datetime(release.get("updated_at")),
                checksum=release.get("checksum"),
            ))

        for video in objects(record.get("videos")):
            out.add(rows.GameVideoRow(
                id=video["id"],
                game_id=game_id,
                name=video.get("name"),
                video_id=video.get("video_id"),
                checksum=video.get("checksum"),
            ))

        for website in objects(record.get("websites")):
            out.add(rows.GameWebsiteRow(
                id=website["id"],
                game_id=game_id,
                category=website.get("category"),
                url=website.get("url"),
                trusted=bool(website.get("trusted")),
                checksum=website.get("checksum"),
            ))

    def _add_references(
        self,
        out: NormalizedRows,
        record: Dict[str, Any],
        game_id: int,
        collection: Optional[Dict[str, Any]],
        franchise: Optional[Dict[str, Any]],
    ) -> None:
        # The singular reference usually reappears in the plural list
        seen = set()
        for item in ([collection] if collection else []) + objects(record.get("collections")):
            if item["id"] in seen:
                continue
            seen.add(item["id"])
            out.add(rows.CollectionRow(
                id=item["id"],
                name=item.get("name") or "",
                slug=item.get("slug"),
                type_id=item.get("type") or DEFAULT_COLLECTION_TYPE_ID,
                updated_at=epoch_to_datetime(item.get("updated_at")),
                checksum=item.get("checksum"),
            ))
        # Joins only to expanded references, whose rows are written in phase 1
        for item in objects(record.get("collections")):
            out.add(rows.GameCollectionRow(game_id=game_id, collection_id=item["id"]))

        seen = set()
        for item in ([franchise] if franchise else []) + objects(record.get("franchises")):
            if item["id"] in seen:
                continue
            seen.add(item["id"])
            out.add(rows.FranchiseRow(
                id=item["id"],
                name=item.get("name") or "",
                slug=item.get("slug"),
                updated_at=epoch_to_datetime(item.get("updated_at")),
                checksum=item.get("checksum"),
            ))
        for item in objects(record.get("franchises")):
            out.add(rows.GameFranchiseRow(game_id=game_id, franchise_id=item["id"]))

        for engine in objects(record.get("game_engines")):
            out.add(rows.EngineRow(
                id=engine["id"],
                name=engine.get("name") or "",
                slug=engine.get("slug"),
                description=engine.get("description"),
                updated_at=epoch_to_datetime(engine.get("updated_at")),
                checksum=engine.get("checksum"),
            ))
            out.add(rows.GameEngineRow(game_id=game_id, engine_id=engine["id"]))


def _embedded(value: Any) -> Optional[Dict[str, Any]]:
    if isinstance(value, dict) and value.get("id") is not None:
        return value
    return None


def _image_fields(image: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": image["id"],
        "alpha_channel": bool(image.get("alpha_channel")),
        "animated": bool(image.get("animated")),
        "image_id": image.get("image_id"),
        "width": image.get("width"),
        "height": image.get("height"),
        "checksum": image.get("checksum"),
    }
