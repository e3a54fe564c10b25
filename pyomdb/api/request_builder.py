"""Assembles OMDb query strings for search, title and id lookups."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union
from urllib.parse import urlencode

from ..models.config import PLOT, TOMATOES, Config
from ..models.query import SearchKind
from ..utils.error_handler import InvalidCategoryError


class Operation(Enum):
    """The three upstream calls."""
    SEARCH = "search"
    TITLE = "title"
    ID = "id"


@dataclass(frozen=True)
class OmdbRequest:
    """A fully formed GET request: endpoint plus query parameters."""

    operation: Operation
    base_url: str
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        """Endpoint with the encoded query string appended."""
        return f"{self.base_url}?{urlencode(self.params)}"

    @property
    def redacted_url(self) -> str:
        """Same as ``url`` but with the API key masked, for logging."""
        params = dict(self.params)
        if params.get("apikey"):
            params["apikey"] = "***"
        return f"{self.base_url}?{urlencode(params)}"


def validate_kind(kind: Union[SearchKind, str, None]) -> str:
    """
    Normalize a search type to its text value.

    Args:
        kind: SearchKind, raw text or None

    Returns:
        "movie", "series", "episode" or "" when unset

    Raises:
        InvalidCategoryError: If a non-empty value is not a known kind
    """
    if isinstance(kind, SearchKind):
        return kind.value
    if not kind:
        return ""
    if kind not in SearchKind.values():
        raise InvalidCategoryError(kind)
    return kind


def _with_api_key(params: Dict[str, str], config: Config) -> Dict[str, str]:
    if config.has_api_key:
        params["apikey"] = config.api_key
    return params


def build_search_request(
    title: str,
    year: str = "",
    kind: Union[SearchKind, str, None] = "",
    page: Union[int, str, None] = "",
    config: Optional[Config] = None
) -> OmdbRequest:
    """
    Build a free-text search request (``s``, ``y``, ``type``, ``page``).

    Raises:
        InvalidCategoryError: If ``kind`` is not a known search type
    """
    config = config or Config()
    params = {
        "s": title or "",
        "y": year or "",
        "type": validate_kind(kind),
        "page": "" if page is None else str(page),
    }
    return OmdbRequest(Operation.SEARCH, config.base_url, _with_api_key(params, config))


def build_title_request(
    title: str,
    year: str = "",
    kind: Union[SearchKind, str, None] = "",
    config: Optional[Config] = None
) -> OmdbRequest:
    """
    Build an exact-title lookup request.

    Full plot text and supplementary ratings are always requested.

    Raises:
        InvalidCategoryError: If ``kind`` is not a known search type
    """
    config = config or Config()
    params = {
        "t": title or "",
        "y": year or "",
        "type": validate_kind(kind),
        "plot": PLOT,
        "tomatoes": TOMATOES,
    }
    return OmdbRequest(Operation.TITLE, config.base_url, _with_api_key(params, config))


def build_id_request(imdb_id: str, config: Optional[Config] = None) -> OmdbRequest:
    """Build a lookup request by IMDb id, e.g. ``"tt2015381"``."""
    config = config or Config()
    params = {
        "i": imdb_id or "",
        "plot": PLOT,
        "tomatoes": TOMATOES,
    }
    return OmdbRequest(Operation.ID, config.base_url, _with_api_key(params, config))
