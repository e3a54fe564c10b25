"""Query data model and search-kind constants."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


MOVIE_SEARCH = "movie"
SERIES_SEARCH = "series"
EPISODE_SEARCH = "episode"


class SearchKind(Enum):
    """Media categories understood by the upstream API."""
    MOVIE = MOVIE_SEARCH
    SERIES = SERIES_SEARCH
    EPISODE = EPISODE_SEARCH

    @classmethod
    def values(cls) -> tuple:
        """Return the raw string values of all kinds."""
        return tuple(kind.value for kind in cls)


@dataclass
class QueryData:
    """Parameters for a search or title lookup.

    No field is required here; the request builders decide which ones
    apply to each operation.
    """

    title: str = ""
    year: str = ""
    imdb_id: str = ""
    search_type: Union[SearchKind, str, None] = ""  # "movie", "series", "episode"
    page: Union[int, str, None] = ""  # page of a paginated search result

    @property
    def kind_value(self) -> str:
        """Search type as plain text, empty when unset."""
        if isinstance(self.search_type, SearchKind):
            return self.search_type.value
        return self.search_type or ""

    @property
    def page_value(self) -> str:
        """Page number as text, empty when unset."""
        if self.page is None:
            return ""
        return str(self.page)
