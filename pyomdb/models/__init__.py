"""Data models for the OMDb client."""

from .query import QueryData, SearchKind, MOVIE_SEARCH, SERIES_SEARCH, EPISODE_SEARCH
from .search_result import SearchResult, SearchResponse
from .movie_result import MovieResult, Rating
from .config import Config

__all__ = [
    'QueryData', 'SearchKind', 'MOVIE_SEARCH', 'SERIES_SEARCH', 'EPISODE_SEARCH',
    'SearchResult', 'SearchResponse', 'MovieResult', 'Rating', 'Config',
]
