"""Async OMDb client over aiohttp."""

from typing import Any, Callable, Dict, Optional

from ..models.config import Config
from ..models.movie_result import MovieResult
from ..models.query import QueryData
from ..models.search_result import SearchResponse
from ..utils.error_handler import ErrorHandler, OmdbError
from ..utils.http_client import AsyncHttpClient
from .client import BaseOmdbClient, Decoder
from .decoder import Result, decode_movie_result, decode_search_response, ensure_success
from .request_builder import OmdbRequest


class AsyncOmdbClient(BaseOmdbClient):
    """Same operations and error policy as OmdbClient, as coroutines."""

    def __init__(
        self,
        config: Optional[Config] = None,
        http_client: Optional[AsyncHttpClient] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        super().__init__(config, error_handler)
        self.http_client = http_client or AsyncHttpClient(
            timeout=self.config.timeout,
            user_agent=self.config.user_agent
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Release the underlying HTTP session."""
        await self.http_client.close()

    async def search(self, query: QueryData) -> SearchResponse:
        """
        Free-text search.

        Args:
            query: Uses ``title``, ``year``, ``search_type`` and ``page``

        Returns:
            SearchResponse with the matching titles
        """
        return await self._run(
            lambda: self._search_request(query),
            decode_search_response,
            {'operation': 'search', 'title': query.title}
        )

    async def lookup_by_title(self, query: QueryData) -> MovieResult:
        """
        Lookup of a single title.

        Args:
            query: Uses ``title``, ``year`` and ``search_type``

        Returns:
            MovieResult with full plot and ratings
        """
        return await self._run(
            lambda: self._title_request(query),
            decode_movie_result,
            {'operation': 'title', 'title': query.title}
        )

    async def lookup_by_imdb_id(self, imdb_id: str) -> MovieResult:
        """Lookup by IMDb id, e.g. ``"tt2015381"``."""
        return await self._run(
            lambda: self._id_request(imdb_id),
            decode_movie_result,
            {'operation': 'id', 'imdb_id': imdb_id}
        )

    async def _run(
        self,
        build: Callable[[], OmdbRequest],
        decode: Decoder,
        context: Dict[str, Any]
    ) -> Result:
        try:
            request = build()
            self.logger.debug(f"OMDb {request.operation.value} request: {request.redacted_url}")

            response = await self.http_client.get(request.base_url, params=request.params)
            response.raise_for_status()

            return ensure_success(decode(response.content))
        except OmdbError as e:
            self._report(e, context)
            raise
