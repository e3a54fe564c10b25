"""Detailed movie lookup data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Rating:
    """Score reported by one ratings source (IMDb, Rotten Tomatoes, ...)."""

    source: str = ""
    value: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"Source": self.source, "Value": self.value}


@dataclass(frozen=True)
class MovieResult:
    """Represents the full record returned by a title or id lookup.

    All values are kept as the text upstream sends (``"N/A"`` included).
    When ``success`` is False only ``error`` is meaningful.
    """

    title: str = ""
    year: str = ""
    rated: str = ""
    released: str = ""
    runtime: str = ""
    genre: str = ""
    director: str = ""
    writer: str = ""
    actors: str = ""
    plot: str = ""
    language: str = ""
    country: str = ""
    awards: str = ""
    poster: str = ""
    metascore: str = ""
    imdb_rating: str = ""
    imdb_votes: str = ""
    imdb_id: str = ""
    ratings: Tuple[Rating, ...] = field(default_factory=tuple)
    type: str = ""
    dvd: str = ""
    box_office: str = ""
    production: str = ""
    website: str = ""
    response: str = ""
    error: str = ""
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def success(self) -> bool:
        """False only when upstream flagged the lookup with ``"Response": "False"``."""
        return self.response != "False"

    @property
    def genres(self) -> List[str]:
        """Genre field split into a list."""
        return [g.strip() for g in self.genre.split(",") if g.strip() and g.strip() != "N/A"]

    def rating_for(self, source: str) -> Optional[str]:
        """Get the rating value reported by the given source."""
        for rating in self.ratings:
            if rating.source == source:
                return rating.value
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the upstream key names."""
        data = {
            "Title": self.title,
            "Year": self.year,
            "Rated": self.rated,
            "Released": self.released,
            "Runtime": self.runtime,
            "Genre": self.genre,
            "Director": self.director,
            "Writer": self.writer,
            "Actors": self.actors,
            "Plot": self.plot,
            "Language": self.language,
            "Country": self.country,
            "Awards": self.awards,
            "Poster": self.poster,
            "Metascore": self.metascore,
            "imdbRating": self.imdb_rating,
            "imdbVotes": self.imdb_votes,
            "imdbID": self.imdb_id,
            "Ratings": [rating.to_dict() for rating in self.ratings],
            "Type": self.type,
            "DVD": self.dvd,
            "BoxOffice": self.box_office,
            "Production": self.production,
            "Website": self.website,
            "Response": self.response,
            "Error": self.error,
        }
        data.update(self.extra)
        return data

    def __str__(self) -> str:
        return f"#{self.imdb_id}: {self.title} ({self.year})"
