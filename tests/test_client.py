"""Tests for the blocking OMDb client."""

from unittest.mock import patch

import pytest

from pyomdb.api import client as client_module
from pyomdb.api.client import OmdbClient
from pyomdb.models.movie_result import MovieResult
from pyomdb.models.query import QueryData, SearchKind
from pyomdb.models.search_result import SearchResult
from pyomdb.utils.error_handler import (
    ApplicationError, DecodeError, ErrorCategory, InvalidCategoryError,
    TransportError, UpstreamStatusError,
)
from tests.fixtures.mock_data import MockDataGenerator, make_requests_response


class TestSearch:
    """Test cases for OmdbClient.search."""

    def test_single_result(self, client, mock_http_client):
        response = client.search(QueryData(title="Rush", year="2013", search_type="movie"))

        assert response.success
        assert list(response) == [
            SearchResult(title="Rush", year="2013", imdb_id="tt2135158", type="movie")
        ]

        mock_http_client.get.assert_called_once_with(
            "http://www.omdbapi.com/",
            params={"s": "Rush", "y": "2013", "type": "movie", "page": "", "apikey": "test-key"},
        )

    def test_page_is_sent(self, client, mock_http_client):
        client.search(QueryData(title="Star Trek", page=3))

        assert mock_http_client.get.call_args.kwargs["params"]["page"] == "3"

    def test_application_failure(self, client, mock_http_client):
        mock_http_client.get.return_value = MockDataGenerator.http_response(
            {"Response": "False", "Error": "Too many results."}
        )

        with pytest.raises(ApplicationError) as exc_info:
            client.search(QueryData(title="a"))

        assert str(exc_info.value) == "Too many results."
        assert exc_info.value.result.error == "Too many results."


class TestLookupByTitle:
    """Test cases for OmdbClient.lookup_by_title."""

    def test_success(self, client, mock_http_client):
        mock_http_client.get.return_value = MockDataGenerator.http_response(
            MockDataGenerator.generate_movie_payload()
        )

        result = client.lookup_by_title(QueryData(title="Some Title", year="2010"))

        assert isinstance(result, MovieResult)
        assert str(result) == "#tt2015381: Some Title (2010)"
        params = mock_http_client.get.call_args.kwargs["params"]
        assert params["t"] == "Some Title"
        assert params["plot"] == "full"
        assert params["tomatoes"] == "true"

    def test_status_failure_skips_decode(self, client, mock_http_client):
        mock_http_client.get.return_value = MockDataGenerator.http_response(status=404, content=b"<html>")

        with patch.object(client_module, "decode_movie_result") as mock_decode:
            with pytest.raises(UpstreamStatusError) as exc_info:
                client.lookup_by_title(QueryData(title="Some Title"))

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "Status Code 404 received from IMDB"
        mock_decode.assert_not_called()

    def test_invalid_kind_makes_no_request(self, client, mock_http_client):
        with pytest.raises(InvalidCategoryError):
            client.lookup_by_title(QueryData(title="Some Title", search_type="game"))

        mock_http_client.get.assert_not_called()


class TestLookupByImdbId:
    """Test cases for OmdbClient.lookup_by_imdb_id."""

    def test_not_found(self, client, mock_http_client):
        mock_http_client.get.return_value = MockDataGenerator.http_response(MockDataGenerator.NOT_FOUND)

        with pytest.raises(ApplicationError) as exc_info:
            client.lookup_by_imdb_id("tt0000000")

        assert str(exc_info.value) == "Movie not found!"
        assert isinstance(exc_info.value.result, MovieResult)
        assert exc_info.value.result.success is False

    def test_body_without_response_flag(self, client, mock_http_client):
        mock_http_client.get.return_value = MockDataGenerator.http_response(
            {"Title": "X", "Year": "2010", "imdbID": "tt1"}
        )

        assert str(client.lookup_by_imdb_id("tt1")) == "#tt1: X (2010)"

    def test_malformed_json(self, client, mock_http_client):
        mock_http_client.get.return_value = MockDataGenerator.http_response(content=b'{"Title": ')

        with pytest.raises(DecodeError) as exc_info:
            client.lookup_by_imdb_id("tt2015381")

        assert not hasattr(exc_info.value, "result")

    def test_transport_failure_propagates(self, client, mock_http_client):
        mock_http_client.get.side_effect = TransportError("connection refused")

        with pytest.raises(TransportError):
            client.lookup_by_imdb_id("tt2015381")

        assert mock_http_client.get.call_count == 1


class TestInvalidCategory:
    """Unknown search types fail before any request."""

    @pytest.mark.parametrize("kind", ["game", "MOVIE", "tv", "Series"])
    def test_every_builder_operation(self, client, mock_http_client, kind):
        with pytest.raises(InvalidCategoryError):
            client.search(QueryData(title="x", search_type=kind))
        with pytest.raises(InvalidCategoryError):
            client.lookup_by_title(QueryData(title="x", search_type=kind))

        mock_http_client.get.assert_not_called()

    def test_enum_kind_is_accepted(self, client, mock_http_client):
        client.search(QueryData(title="x", search_type=SearchKind.EPISODE))

        assert mock_http_client.get.call_args.kwargs["params"]["type"] == "episode"


class TestErrorReporting:
    """Failures are reported to the error handler and still raised."""

    def test_failure_is_recorded(self, client, mock_http_client, error_handler):
        mock_http_client.get.return_value = MockDataGenerator.http_response(status=503)

        with pytest.raises(UpstreamStatusError):
            client.lookup_by_imdb_id("tt2015381")

        assert error_handler.total_errors == 1
        info = error_handler.error_history[0]
        assert info.category == ErrorCategory.HTTP_STATUS
        assert info.context == {'operation': 'id', 'imdb_id': 'tt2015381'}

    def test_success_records_nothing(self, client, error_handler):
        client.search(QueryData(title="Rush"))

        assert error_handler.total_errors == 0


class TestModuleFunctions:
    """Module-level helpers use a short-lived client over requests."""

    def test_search(self, disable_network_requests):
        mock_get = disable_network_requests['requests_get']
        mock_get.side_effect = None
        mock_get.return_value = make_requests_response(
            content=MockDataGenerator.to_body(MockDataGenerator.RUSH_SEARCH)
        )

        response = client_module.search(QueryData(title="Rush"))

        assert response.search[0].title == "Rush"
        assert mock_get.call_args.args[0] == "http://www.omdbapi.com/"
        mock_get.return_value.__exit__.assert_called_once()

    def test_lookup_by_imdb_id_status_failure(self, disable_network_requests):
        mock_get = disable_network_requests['requests_get']
        mock_get.side_effect = None
        mock_get.return_value = make_requests_response(status=401, reason="Unauthorized")

        with pytest.raises(UpstreamStatusError) as exc_info:
            client_module.lookup_by_imdb_id("tt2015381")

        assert exc_info.value.status_code == 401
        mock_get.return_value.__exit__.assert_called_once()

    def test_lookup_by_title(self, disable_network_requests):
        mock_get = disable_network_requests['requests_get']
        mock_get.side_effect = None
        mock_get.return_value = make_requests_response(
            content=MockDataGenerator.to_body(MockDataGenerator.generate_movie_payload())
        )

        result = client_module.lookup_by_title(QueryData(title="Some Title"))

        assert result.imdb_id == "tt2015381"

    def test_context_manager_closes_transport(self, mock_http_client):
        with OmdbClient(http_client=mock_http_client):
            pass

        mock_http_client.close.assert_called_once()
