"""Blocking OMDb client and module-level convenience functions."""

from typing import Any, Callable, Dict, Optional, Union

from ..models.config import Config
from ..models.movie_result import MovieResult
from ..models.query import QueryData
from ..models.search_result import SearchResponse
from ..utils.error_handler import ErrorHandler, OmdbError
from ..utils.http_client import HttpClient
from ..utils.logging_config import get_logger
from .decoder import Result, decode_movie_result, decode_search_response, ensure_success
from .request_builder import (
    OmdbRequest, build_id_request, build_search_request, build_title_request
)


Decoder = Callable[[Union[bytes, str]], Result]


class BaseOmdbClient:
    """Configuration and error reporting shared by the blocking and async clients."""

    def __init__(
        self,
        config: Optional[Config] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.config = config or Config()
        self.error_handler = error_handler or ErrorHandler()
        self.logger = get_logger(__name__)

    def _search_request(self, query: QueryData) -> OmdbRequest:
        return build_search_request(
            query.title, query.year, query.kind_value, query.page_value, config=self.config
        )

    def _title_request(self, query: QueryData) -> OmdbRequest:
        return build_title_request(
            query.title, query.year, query.kind_value, config=self.config
        )

    def _id_request(self, imdb_id: str) -> OmdbRequest:
        return build_id_request(imdb_id, config=self.config)

    def _report(self, error: OmdbError, context: Dict[str, Any]) -> None:
        self.error_handler.handle_error(error, context=context)


class OmdbClient(BaseOmdbClient):
    """
    Blocking client for the three OMDb operations.

    Every failure is raised as an ``OmdbError`` subclass:

    * ``InvalidCategoryError`` before anything is sent
    * ``TransportError`` when no response arrives
    * ``UpstreamStatusError`` for non-200 statuses, body left undecoded
    * ``DecodeError`` for malformed bodies
    * ``ApplicationError`` for ``"Response": "False"``, with the decoded
      result on ``error.result``

    Nothing is retried.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        http_client: Optional[HttpClient] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize the client.

        Args:
            config: Client settings (defaults to the public endpoint)
            http_client: Transport to use; one is created from ``config`` if None
            error_handler: Receives every failure before it is raised
        """
        super().__init__(config, error_handler)
        self.http_client = http_client or HttpClient(
            timeout=self.config.timeout,
            user_agent=self.config.user_agent
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.http_client.close()

    def search(self, query: QueryData) -> SearchResponse:
        """
        Free-text search.

        Args:
            query: Uses ``title``, ``year``, ``search_type`` and ``page``

        Returns:
            SearchResponse with the matching titles
        """
        return self._run(
            lambda: self._search_request(query),
            decode_search_response,
            {'operation': 'search', 'title': query.title}
        )

    def lookup_by_title(self, query: QueryData) -> MovieResult:
        """
        Lookup of a single title.

        Args:
            query: Uses ``title``, ``year`` and ``search_type``

        Returns:
            MovieResult with full plot and ratings
        """
        return self._run(
            lambda: self._title_request(query),
            decode_movie_result,
            {'operation': 'title', 'title': query.title}
        )

    def lookup_by_imdb_id(self, imdb_id: str) -> MovieResult:
        """Lookup by IMDb id, e.g. ``"tt2015381"``."""
        return self._run(
            lambda: self._id_request(imdb_id),
            decode_movie_result,
            {'operation': 'id', 'imdb_id': imdb_id}
        )

    def _run(
        self,
        build: Callable[[], OmdbRequest],
        decode: Decoder,
        context: Dict[str, Any]
    ) -> Result:
        try:
            request = build()
            self.logger.debug(f"OMDb {request.operation.value} request: {request.redacted_url}")

            response = self.http_client.get(request.base_url, params=request.params)
            response.raise_for_status()

            return ensure_success(decode(response.content))
        except OmdbError as e:
            self._report(e, context)
            raise


def search(query: QueryData, config: Optional[Config] = None) -> SearchResponse:
    """Run a search with a short-lived client."""
    with OmdbClient(config) as client:
        return client.search(query)


def lookup_by_title(query: QueryData, config: Optional[Config] = None) -> MovieResult:
    """Look up a title with a short-lived client."""
    with OmdbClient(config) as client:
        return client.lookup_by_title(query)


def lookup_by_imdb_id(imdb_id: str, config: Optional[Config] = None) -> MovieResult:
    """Look up an IMDb id with a short-lived client."""
    with OmdbClient(config) as client:
        return client.lookup_by_imdb_id(imdb_id)
