"""
Decompose TMDB movie detail payloads into movie rows.
"""

from typing import Any, Dict
from ingestion.transformers.normalizer import NormalizedRows, RecordNormalizer, objects, parse_date
from schemas import movies as rows


# TMDB movie genre IDs accepted into movie_genres
LEGAL_MOVIE_GENRES = frozenset({
    12, 14, 16, 18, 27, 28, 35, 36, 37, 53, 80, 99,
    878, 9648, 10402, 10749, 10751, 10752, 10770,
})


class MovieNormalizer(RecordNormalizer):
    source_name = "movies"

    def _normalize(self, record: Dict[str, Any], movie_id: int) -> NormalizedRows:
        out = NormalizedRows()

        collection = record.get("belongs_to_collection")
        if not (isinstance(collection, dict) and collection.get("id") is not None):
            collection = None

        out.add(rows.MovieRow(
            id=movie_id,
            title=record.get("title") or "",
            original_title=record.get("original_title"),
            original_language=record.get("original_language"),
            overview=record.get("overview") or None,
            tagline=record.get("tagline") or None,
            release_date=parse_date(record.get("release_date")),
            runtime=record.get("runtime"),
            budget=record.get("budget"),
            revenue=record.get("revenue"),
            popularity=record.get("popularity"),
            vote_average=record.get("vote_average"),
            vote_count=record.get("vote_count"),
            poster_path=record.get("poster_path"),
            backdrop_path=record.get("backdrop_path"),
            status=record.get("status"),
            imdb_id=record.get("imdb_id") or None,
            collection_id=collection["id"] if collection else None,
        ))

        if collection:
            out.add(rows.MovieCollectionRow(
                id=collection["id"],
                name=collection.get("name") or "",
                poster_path=collection.get("poster_path"),
                backdrop_path=collection.get("backdrop_path"),
            ))

        for genre in objects(record.get("genres")):
            if genre["id"] in LEGAL_MOVIE_GENRES:
                out.add(rows.MovieGenreRow(movie_id=movie_id, genre_id=genre["id"]))

        for company in objects(record.get("production_companies")):
            out.add(rows.ProductionCompanyRow(
                id=company["id"],
                name=company.get("name") or "",
                logo_path=company.get("logo_path"),
                origin_country=company.get("origin_country") or None,
            ))
            out.add(rows.MovieProductionCompanyRow(movie_id=movie_id, company_id=company["id"]))

        for country in record.get("production_countries") or []:
            iso = country.get("iso_3166_1") if isinstance(country, dict) else None
            if iso:
                out.add(rows.MovieProductionCountryRow(movie_id=movie_id, country_iso=iso))

        for language in record.get("spoken_languages") or []:
            iso = language.get("iso_639_1") if isinstance(language, dict) else None
            if iso:
                out.add(rows.MovieSpokenLanguageRow(movie_id=movie_id, language_iso=iso))

        return out
