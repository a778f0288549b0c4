"""
IGDB games extractor: bulk paged listing over ``POST /games``.
"""

import httpx
from typing import Any, Dict, List
from ingestion.extractors.api_extractor import APIExtractor
from ingestion.entities import GAME_ENTITIES
from ingestion.transformers.games import GameNormalizer
from models.base import SourceType
from core.config import settings
from core.exceptions import ParseError
import logging

logger = logging.getLogger(__name__)


# Expansions requested for every game; nested objects arrive inline
EXPANDED_FIELDS = (
    "*",
    "age_ratings.*",
    "age_ratings.content_descriptions.*",
    "alternative_names.*",
    "cover.*",
    "game_localizations.*",
    "external_games.*",
    "language_supports.*",
    "release_dates.*",
    "screenshots.*",
    "videos.*",
    "websites.*",
    "collection.*",
    "collections.*",
    "franchise.*",
    "franchises.*",
    "game_engines.*",
)


def build_games_query(page: int, page_size: int, excluded_theme_id: int) -> str:
    """Apicalypse body for one page, newest updates first."""
    offset = (page - 1) * page_size
    return (
        f"fields {', '.join(EXPANDED_FIELDS)}; "
        f"where themes != ({excluded_theme_id}); "
        f"limit {page_size}; offset {offset}; sort updated_at desc;"
    )


class GamesExtractor(APIExtractor):
    """
    Fetch the most recently updated games page by page.

    Work units are page numbers ``1..total_pages``; the page count is fixed
    by configuration, so discovery needs no request. Games tagged with the
    excluded theme are filtered out by the query itself.
    """

    source_type = SourceType.GAMES
    entities = GAME_ENTITIES

    def __init__(
        self,
        client: httpx.AsyncClient,
        client_id: str = None,
        access_token: str = None,
        base_url: str = None,
        total_pages: int = None,
        page_size: int = None,
        excluded_theme_id: int = None,
        batch_size: int = None,
        requests_per_second: float = None
    ):
        super().__init__(
            client=client,
            base_url=base_url or settings.IGDB_API_URL,
            batch_size=batch_size or settings.IGDB_BATCH_SIZE,
            requests_per_second=requests_per_second or settings.IGDB_REQUESTS_PER_SECOND,
            timeout=settings.HTTP_TIMEOUT
        )
        self.client_id = client_id if client_id is not None else settings.TWITCH_CLIENT_ID
        self.access_token = access_token if access_token is not None else settings.TWITCH_TOKEN
        self.total_pages = total_pages or settings.IGDB_TOTAL_PAGES
        self.page_size = page_size or settings.IGDB_PAGE_SIZE
        self.excluded_theme_id = (
            excluded_theme_id if excluded_theme_id is not None else settings.IGDB_EXCLUDED_THEME_ID
        )
        self.normalizer = GameNormalizer()

    def auth_headers(self) -> Dict[str, str]:
        return {
            "Client-ID": self.client_id or "",
            "Authorization": f"Bearer {self.access_token or ''}",
        }

    async def discover(self, context) -> List[int]:
        return list(range(1, self.total_pages + 1))

    async def fetch_records(self, page: int, context) -> List[Dict[str, Any]]:
        query = build_games_query(page, self.page_size, self.excluded_theme_id)
        logger.info(f"Fetching games page {page}")
        data = await self.request_json("POST", "/games", context, content=query)

        if not isinstance(data, list):
            raise ParseError(
                "Expected a JSON array of games",
                context={"source_name": self.source_name, "page": page, "type": type(data).__name__}
            )
        logger.debug(f"Fetched {len(data)} games from page {page}")
        return data

    def normalize(self, record: Dict[str, Any]):
        return self.normalizer.normalize(record)
