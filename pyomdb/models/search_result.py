"""Search result data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple


@dataclass(frozen=True)
class SearchResult:
    """A single entry of a search response."""

    title: str = ""
    year: str = ""
    imdb_id: str = ""
    type: str = ""  # "movie", "series", "episode"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the upstream key names."""
        return {
            "Title": self.title,
            "Year": self.year,
            "imdbID": self.imdb_id,
            "Type": self.type,
        }

    def __str__(self) -> str:
        return f"#{self.imdb_id}: {self.title} ({self.year}) Type: {self.type}"


@dataclass(frozen=True)
class SearchResponse:
    """Decoded body of a search request."""

    search: Tuple[SearchResult, ...] = field(default_factory=tuple)
    response: str = ""
    error: str = ""
    total_results: str = ""

    @property
    def success(self) -> bool:
        """False only when upstream flagged the request with ``"Response": "False"``."""
        return self.response != "False"

    @property
    def total_count(self) -> Optional[int]:
        """Total number of matches across all pages, if reported."""
        try:
            return int(self.total_results)
        except ValueError:
            return None

    def __len__(self) -> int:
        return len(self.search)

    def __iter__(self) -> Iterator[SearchResult]:
        return iter(self.search)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "Search": [item.to_dict() for item in self.search],
            "Response": self.response,
            "Error": self.error,
            "totalResults": self.total_results,
        }
