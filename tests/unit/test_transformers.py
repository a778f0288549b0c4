"""
Unit tests for record normalizers
"""

from datetime import date, datetime, timezone

import pytest

from core.exceptions import NormalizationError
from ingestion.transformers.games import GameNormalizer
from ingestion.transformers.movies import MovieNormalizer
from ingestion.transformers.normalizer import epoch_to_datetime, parse_date
from ingestion.transformers.tv_shows import TVShowNormalizer, LEGAL_TV_GENRES
from schemas import games as g
from schemas import movies as m
from schemas import tv_shows as tv


class TestValueParsers:

    def test_epoch_to_datetime_is_utc(self):
        assert epoch_to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert epoch_to_datetime(None) is None

    def test_parse_date(self):
        assert parse_date("2011-04-17") == date(2011, 4, 17)
        assert parse_date("") is None
        assert parse_date(None) is None


class TestGameNormalizer:

    def test_root_row(self, igdb_game_record):
        out = GameNormalizer().normalize(igdb_game_record)
        [game] = out.of(g.GameRow)

        assert game.id == 1942
        assert game.rating == 92.5
        assert game.reviews_count == 41
        assert game.first_release_date == datetime(2015, 5, 19, tzinfo=timezone.utc)
        assert game.updated_at == epoch_to_datetime(1700000000)
        assert game.main_series_id == 200
        assert game.main_franchise_id == 300

    def test_age_rating_keeps_its_own_rating(self, igdb_game_record):
        igdb_game_record["age_ratings"][0]["category"] = 2
        out = GameNormalizer().normalize(igdb_game_record)
        [rating] = out.of(g.GameAgeRatingRow)
        assert rating.category == 2
        assert rating.rating == 11
        assert rating.game_id == 1942

    def test_content_descriptions_belong_to_age_rating(self, igdb_game_record):
        out = GameNormalizer().normalize(igdb_game_record)
        descriptions = out.of(g.GameAgeRatingDescriptionRow)
        assert {d.id for d in descriptions} == {101, 102}
        assert all(d.age_rating_id == 11 for d in descriptions)

    def test_children(self, igdb_game_record):
        out = GameNormalizer().normalize(igdb_game_record)
        assert [c.id for c in out.of(g.GameCoverRow)] == [31]
        assert [s.id for s in out.of(g.GameScreenshotRow)] == [81]
        [release] = out.of(g.GameReleaseDateRow)
        assert (release.month, release.year, release.platform_id) == (5, 2015, 6)
        [external] = out.of(g.GameExternalServiceRow)
        assert external.countries == [1, 2]
        assert external.platform_id == 6
        [support] = out.of(g.GameLanguageSupportRow)
        assert (support.language_id, support.support_type_id) == (7, 1)
        assert out.of(g.GameWebsiteRow)[0].trusted is True

    def test_singular_reference_is_emitted_once(self, igdb_game_record):
        out = GameNormalizer().normalize(igdb_game_record)
        collections = out.of(g.CollectionRow)
        assert sorted(c.id for c in collections) == [200, 201]
        by_id = {c.id: c for c in collections}
        assert by_id[200].type_id == 3
        assert by_id[201].type_id == 1  # default collection type
        assert [f.id for f in out.of(g.FranchiseRow)] == [300]

    def test_join_rows(self, igdb_game_record):
        out = GameNormalizer().normalize(igdb_game_record)
        assert {r.collection_id for r in out.of(g.GameCollectionRow)} == {200, 201}
        assert [r.franchise_id for r in out.of(g.GameFranchiseRow)] == [300]
        assert [r.engine_id for r in out.of(g.GameEngineRow)] == [400]
        assert [r.genre_id for r in out.of(g.GameGenreRow)] == [12, 31]
        assert [r.platform_id for r in out.of(g.GamePlatformRow)] == [6, 48, 49]
        assert [r.theme_id for r in out.of(g.GameThemeRow)] == [1, 17]
        assert [r.mode_id for r in out.of(g.GameModeRow)] == [1]
        assert [r.perspective_id for r in out.of(g.GamePlayerPerspectiveRow)] == [2]

    def test_minimal_record(self):
        out = GameNormalizer().normalize({"id": 5, "name": "Tiny"})
        assert len(out) == 1
        [game] = out.of(g.GameRow)
        assert game.first_release_date is None
        assert game.main_series_id is None

    def test_missing_id_raises(self):
        with pytest.raises(NormalizationError):
            GameNormalizer().normalize({"name": "No id"})

    def test_malformed_field_raises(self):
        with pytest.raises(NormalizationError):
            GameNormalizer().normalize({"id": 5, "name": "Bad", "first_release_date": "soon"})


class TestTVShowNormalizer:

    def test_root_row(self, tmdb_tv_record):
        out = TVShowNormalizer().normalize(tmdb_tv_record)
        [show] = out.of(tv.TVShowRow)
        assert show.first_air_date == date(2011, 4, 17)
        assert show.last_air_date is None
        assert show.episode_run_times == [60]

    def test_seasons_carry_their_own_id(self, tmdb_tv_record):
        out = TVShowNormalizer().normalize(tmdb_tv_record)
        seasons = out.of(tv.TVSeasonRow)
        assert [s.id for s in seasons] == [3624, 3625]
        assert all(s.show_id == 1399 for s in seasons)
        assert seasons[1].air_date is None

    def test_genres_are_filtered(self, tmdb_tv_record):
        out = TVShowNormalizer().normalize(tmdb_tv_record)
        genre_ids = [r.genre_id for r in out.of(tv.TVShowGenreRow)]
        assert genre_ids == [10765]
        assert all(genre_id in LEGAL_TV_GENRES for genre_id in genre_ids)

    def test_references_and_joins(self, tmdb_tv_record):
        out = TVShowNormalizer().normalize(tmdb_tv_record)
        assert [p.id for p in out.of(tv.CinemaPersonRow)] == [9813]
        assert [r.person_id for r in out.of(tv.TVShowCreatorRow)] == [9813]
        assert [n.id for n in out.of(tv.TVNetworkRow)] == [49]
        assert [r.network_id for r in out.of(tv.TVShowNetworkRow)] == [49]
        assert [r.country_iso for r in out.of(tv.TVShowOriginCountryRow)] == ["US"]
        assert [r.country_iso for r in out.of(tv.TVShowProductionCountryRow)] == ["GB", "US"]


class TestMovieNormalizer:

    def test_root_and_joins(self, tmdb_movie_record):
        out = MovieNormalizer().normalize(tmdb_movie_record)
        [movie] = out.of(m.MovieRow)
        assert movie.release_date == date(1999, 10, 15)
        assert movie.tagline is None
        assert movie.collection_id is None
        assert out.of(m.MovieCollectionRow) == []
        assert [r.genre_id for r in out.of(m.MovieGenreRow)] == [18]
        assert [r.company_id for r in out.of(m.MovieProductionCompanyRow)] == [508]
        assert [r.language_iso for r in out.of(m.MovieSpokenLanguageRow)] == ["en"]

    def test_collection_reference(self, tmdb_movie_record):
        tmdb_movie_record["belongs_to_collection"] = {"id": 77, "name": "Box Set"}
        out = MovieNormalizer().normalize(tmdb_movie_record)
        assert out.of(m.MovieRow)[0].collection_id == 77
        assert [c.id for c in out.of(m.MovieCollectionRow)] == [77]
