"""
Decompose TMDB TV show detail payloads into TV rows.
"""

from typing import Any, Dict
from ingestion.transformers.normalizer import NormalizedRows, RecordNormalizer, objects, parse_date
from schemas import tv_shows as rows


# TMDB TV genre IDs accepted into tv_show_genres
LEGAL_TV_GENRES = frozenset({
    16, 18, 35, 37, 80, 99, 9648, 10751,
    10759, 10762, 10763, 10764, 10765, 10766, 10767, 10768,
})


class TVShowNormalizer(RecordNormalizer):
    """Map one ``/tv/{id}`` payload into show, season, reference and join rows."""

    source_name = "tv_shows"

    def _normalize(self, record: Dict[str, Any], show_id: int) -> NormalizedRows:
        out = NormalizedRows()

        out.add(rows.TVShowRow(
            id=show_id,
            name=record.get("name") or "",
            episode_run_times=record.get("episode_run_time"),
            first_air_date=parse_date(record.get("first_air_date")),
            last_air_date=parse_date(record.get("last_air_date")),
            in_production=bool(record.get("in_production")),
            languages=record.get("languages"),
            original_language=record.get("original_language"),
            original_name=record.get("original_name"),
            popularity=record.get("popularity"),
            poster_path=record.get("poster_path"),
            status=record.get("status"),
            type=record.get("type"),
            vote_average=record.get("vote_average"),
        ))

        for season in objects(record.get("seasons")):
            out.add(rows.TVSeasonRow(
                id=season["id"],
                show_id=show_id,
                name=season.get("name"),
                season_number=season.get("season_number"),
                poster_path=season.get("poster_path"),
                air_date=parse_date(season.get("air_date")),
                episode_count=season.get("episode_count"),
                vote_average=season.get("vote_average"),
            ))

        for genre in objects(record.get("genres")):
            if genre["id"] in LEGAL_TV_GENRES:
                out.add(rows.TVShowGenreRow(show_id=show_id, genre_id=genre["id"]))

        for creator in objects(record.get("created_by")):
            out.add(rows.CinemaPersonRow(
                id=creator["id"],
                name=creator.get("name") or "",
                profile_path=creator.get("profile_path"),
            ))
            out.add(rows.TVShowCreatorRow(show_id=show_id, person_id=creator["id"]))

        for network in objects(record.get("networks")):
            out.add(rows.TVNetworkRow(
                id=network["id"],
                name=network.get("name") or "",
                logo_path=network.get("logo_path"),
                origin_country=network.get("origin_country") or None,
            ))
            out.add(rows.TVShowNetworkRow(show_id=show_id, network_id=network["id"]))

        for country in record.get("origin_country") or []:
            if country:
                out.add(rows.TVShowOriginCountryRow(show_id=show_id, country_iso=country))

        for country in record.get("production_countries") or []:
            iso = country.get("iso_3166_1") if isinstance(country, dict) else None
            if iso:
                out.add(rows.TVShowProductionCountryRow(show_id=show_id, country_iso=iso))

        return out
