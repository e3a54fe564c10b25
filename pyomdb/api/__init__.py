"""Request pipeline: builders, decoder and clients."""

from .request_builder import (
    Operation, OmdbRequest, build_search_request, build_title_request, build_id_request
)
from .decoder import decode_search_response, decode_movie_result
from .client import OmdbClient, search, lookup_by_title, lookup_by_imdb_id
from .async_client import AsyncOmdbClient

__all__ = [
    'Operation', 'OmdbRequest',
    'build_search_request', 'build_title_request', 'build_id_request',
    'decode_search_response', 'decode_movie_result',
    'OmdbClient', 'AsyncOmdbClient',
    'search', 'lookup_by_title', 'lookup_by_imdb_id',
]
