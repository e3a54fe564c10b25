"""Package entry point with lazy imports to keep ``import pyomdb`` light."""

from importlib import import_module
from typing import Any, Dict, Tuple

__version__ = "1.0.0"
__description__ = "Client library for the OMDb movie metadata API"

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    # Operations
    "search": (".api.client", "search"),
    "lookup_by_title": (".api.client", "lookup_by_title"),
    "lookup_by_imdb_id": (".api.client", "lookup_by_imdb_id"),

    # Clients
    "OmdbClient": (".api.client", "OmdbClient"),
    "AsyncOmdbClient": (".api.async_client", "AsyncOmdbClient"),

    # Core models
    "QueryData": (".models.query", "QueryData"),
    "SearchKind": (".models.query", "SearchKind"),
    "MOVIE_SEARCH": (".models.query", "MOVIE_SEARCH"),
    "SERIES_SEARCH": (".models.query", "SERIES_SEARCH"),
    "EPISODE_SEARCH": (".models.query", "EPISODE_SEARCH"),
    "SearchResult": (".models.search_result", "SearchResult"),
    "SearchResponse": (".models.search_result", "SearchResponse"),
    "MovieResult": (".models.movie_result", "MovieResult"),
    "Rating": (".models.movie_result", "Rating"),
    "Config": (".models.config", "Config"),

    # Errors
    "OmdbError": (".utils.error_handler", "OmdbError"),
    "InvalidCategoryError": (".utils.error_handler", "InvalidCategoryError"),
    "TransportError": (".utils.error_handler", "TransportError"),
    "UpstreamStatusError": (".utils.error_handler", "UpstreamStatusError"),
    "DecodeError": (".utils.error_handler", "DecodeError"),
    "ApplicationError": (".utils.error_handler", "ApplicationError"),
    "ConfigurationError": (".utils.error_handler", "ConfigurationError"),

    # Configuration
    "ConfigManager": (".config.config_manager", "ConfigManager"),
}

__all__ = [
    "__version__",
    "__description__",
    *list(_EXPORT_MAP.keys()),
]


def __getattr__(name: str) -> Any:  # pragma: no cover - trivial getter
    if name in _EXPORT_MAP:
        module_name, attribute_name = _EXPORT_MAP[name]
        module = import_module(module_name, package=__name__)
        value = getattr(module, attribute_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
