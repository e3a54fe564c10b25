"""Decodes OMDb JSON bodies into result models and applies the success flag."""

import json
from typing import Any, Dict, List, Tuple, TypeVar, Union

from ..models.movie_result import MovieResult, Rating
from ..models.search_result import SearchResponse, SearchResult
from ..utils.error_handler import ApplicationError, DecodeError


# Upstream key -> model attribute. Keys match case-insensitively.
SEARCH_ITEM_FIELDS = {
    "Title": "title",
    "Year": "year",
    "imdbID": "imdb_id",
    "Type": "type",
}

SEARCH_RESPONSE_FIELDS = {
    "Response": "response",
    "Error": "error",
    "totalResults": "total_results",
}

RATING_FIELDS = {
    "Source": "source",
    "Value": "value",
}

MOVIE_FIELDS = {
    "Title": "title",
    "Year": "year",
    "Rated": "rated",
    "Released": "released",
    "Runtime": "runtime",
    "Genre": "genre",
    "Director": "director",
    "Writer": "writer",
    "Actors": "actors",
    "Plot": "plot",
    "Language": "language",
    "Country": "country",
    "Awards": "awards",
    "Poster": "poster",
    "Metascore": "metascore",
    "imdbRating": "imdb_rating",
    "imdbVotes": "imdb_votes",
    "imdbID": "imdb_id",
    "Type": "type",
    "DVD": "dvd",
    "BoxOffice": "box_office",
    "Production": "production",
    "Website": "website",
    "Response": "response",
    "Error": "error",
}

Result = TypeVar("Result", SearchResponse, MovieResult)


def _load_object(content: Union[bytes, str]) -> Dict[str, Any]:
    """Parse the body and require a top-level JSON object."""
    try:
        data = json.loads(content)
    except ValueError as e:
        raise DecodeError(f"Malformed JSON body: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _lower_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key.lower(): value for key, value in data.items()}


def _text(value: Any, key: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def _map_fields(data: Dict[str, Any], fields: Dict[str, str]) -> Dict[str, str]:
    """Pick the mapped string fields out of a decoded object."""
    lowered = _lower_keys(data)
    return {
        attribute: _text(lowered.get(key.lower()), key)
        for key, attribute in fields.items()
    }


def _objects(value: Any, key: str) -> List[Dict[str, Any]]:
    """Validate a JSON array of objects; null counts as empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"Field '{key}' must be an array, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, dict):
            raise DecodeError(f"Items of '{key}' must be objects, got {type(item).__name__}")
    return value


def decode_search_response(content: Union[bytes, str]) -> SearchResponse:
    """
    Decode a search body.

    Args:
        content: Raw response body

    Returns:
        SearchResponse, whatever the value of its success flag

    Raises:
        DecodeError: If the body is not JSON or has the wrong shape
    """
    data = _load_object(content)
    items: Tuple[SearchResult, ...] = tuple(
        SearchResult(**_map_fields(item, SEARCH_ITEM_FIELDS))
        for item in _objects(_lower_keys(data).get("search"), "Search")
    )
    return SearchResponse(search=items, **_map_fields(data, SEARCH_RESPONSE_FIELDS))


def decode_movie_result(content: Union[bytes, str]) -> MovieResult:
    """
    Decode a title or id lookup body.

    Keys outside the known field set are kept in ``MovieResult.extra``.

    Raises:
        DecodeError: If the body is not JSON or has the wrong shape
    """
    data = _load_object(content)
    ratings = tuple(
        Rating(**_map_fields(item, RATING_FIELDS))
        for item in _objects(_lower_keys(data).get("ratings"), "Ratings")
    )

    known = {key.lower() for key in MOVIE_FIELDS} | {"ratings"}
    extra = {key: value for key, value in data.items() if key.lower() not in known}

    return MovieResult(ratings=ratings, extra=extra, **_map_fields(data, MOVIE_FIELDS))


def ensure_success(result: Result) -> Result:
    """
    Apply the upstream success flag.

    Raises:
        ApplicationError: Carrying upstream's ``Error`` text and the decoded
            result when ``Response`` is ``"False"``
    """
    if not result.success:
        message = result.error or "Request failed without an error message"
        raise ApplicationError(message, result=result)
    return result
