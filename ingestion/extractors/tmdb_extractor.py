"""
TMDB extractors: index-then-detail over ``/{kind}/changes`` and ``/{kind}/{id}``.
"""

import asyncio
import httpx
from typing import Any, Dict, List
from ingestion.extractors.api_extractor import APIExtractor
from ingestion.entities import TV_SHOW_ENTITIES, MOVIE_ENTITIES
from ingestion.transformers.tv_shows import TVShowNormalizer
from ingestion.transformers.movies import MovieNormalizer
from models.base import SourceType
from core.config import settings
from core.exceptions import ExtractionError, ParseError
import logging

logger = logging.getLogger(__name__)


class TMDBExtractor(APIExtractor):
    """
    Discover changed IDs from the TMDB change index, then fetch each detail.

    Discovery reads index page 1 for ``total_pages`` and fetches the
    remaining index pages concurrently. Adult entries are dropped and the
    surviving IDs are deduplicated; each ID is one work unit. A failed index
    page is logged and counted; a failed page 1 leaves nothing to fetch.
    """

    kind: str = ""

    def __init__(
        self,
        client: httpx.AsyncClient,
        access_token: str = None,
        base_url: str = None,
        language: str = None,
        batch_size: int = None,
        requests_per_second: float = None
    ):
        super().__init__(
            client=client,
            base_url=base_url or settings.TMDB_API_URL,
            batch_size=batch_size or settings.TMDB_BATCH_SIZE,
            requests_per_second=requests_per_second or settings.TMDB_REQUESTS_PER_SECOND,
            timeout=settings.HTTP_TIMEOUT
        )
        self.access_token = access_token if access_token is not None else settings.TMDB_ACCESS_TOKEN
        self.language = language or settings.TMDB_LANGUAGE

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token or ''}"}

    async def fetch_index_page(self, page: int, context) -> Dict[str, Any]:
        data = await self.request_json(
            "GET", f"/{self.kind}/changes", context, params={"page": page}
        )
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise ParseError(
                "Unexpected change index shape",
                context={"source_name": self.source_name, "page": page}
            )
        total_pages = data.get("total_pages")
        if total_pages is not None and (
            isinstance(total_pages, bool) or not isinstance(total_pages, int) or total_pages < 0
        ):
            raise ParseError(
                "Unexpected total_pages in change index",
                context={
                    "source_name": self.source_name,
                    "page": page,
                    "total_pages": repr(total_pages)[:100],
                }
            )
        return data

    @staticmethod
    def ids_from_index(data: Dict[str, Any]) -> List[int]:
        return [
            entry["id"]
            for entry in data.get("results", [])
            if isinstance(entry, dict) and entry.get("id") is not None and not entry.get("adult")
        ]

    async def discover(self, context) -> List[int]:
        try:
            first_page = await self.fetch_index_page(1, context)
        except ExtractionError as e:
            context.stats.record_extraction_error(e)
            logger.error(
                f"Discovery failed for {self.source_name}: {e}",
                extra={"error_context": e.to_dict()}
            )
            return []

        total_pages = first_page.get("total_pages") or 1
        pages = [self.ids_from_index(first_page)]

        if total_pages > 1:
            async with asyncio.TaskGroup() as tg:
                tasks = [
                    tg.create_task(self._index_page_ids(page, context))
                    for page in range(2, total_pages + 1)
                ]
            pages.extend(task.result() for task in tasks)

        ids = list(dict.fromkeys(id_ for page_ids in pages for id_ in page_ids))
        logger.info(f"Discovered {len(ids)} {self.source_name} IDs across {total_pages} index pages")
        return ids

    async def _index_page_ids(self, page: int, context) -> List[int]:
        try:
            return self.ids_from_index(await self.fetch_index_page(page, context))
        except ExtractionError as e:
            context.stats.record_extraction_error(e)
            logger.warning(
                f"Skipping {self.source_name} index page {page}: {e}",
                extra={"error_context": e.to_dict()}
            )
            return []

    async def fetch_records(self, record_id: int, context) -> List[Dict[str, Any]]:
        data = await self.request_json(
            "GET", f"/{self.kind}/{record_id}", context, params={"language": self.language}
        )
        if not isinstance(data, dict):
            raise ParseError(
                "Expected a JSON object",
                context={"source_name": self.source_name, "record_id": record_id}
            )
        return [data]

    def normalize(self, record: Dict[str, Any]):
        return self.normalizer.normalize(record)


class TVShowsExtractor(TMDBExtractor):
    source_type = SourceType.TV_SHOWS
    entities = TV_SHOW_ENTITIES
    kind = "tv"

    def __init__(self, client: httpx.AsyncClient, **kwargs):
        super().__init__(client, **kwargs)
        self.normalizer = TVShowNormalizer()


class MoviesExtractor(TMDBExtractor):
    source_type = SourceType.MOVIES
    entities = MOVIE_ENTITIES
    kind = "movie"

    def __init__(self, client: httpx.AsyncClient, **kwargs):
        super().__init__(client, **kwargs)
        self.normalizer = MovieNormalizer()
