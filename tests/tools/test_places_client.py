"""Tests for the places search client."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from pickwise.app.errors import PlacesError
from pickwise.app.settings import settings
from pickwise.tools import places_client
from pickwise.tools.places_client import get_place_details, search_local_businesses, search_places


def _place(place_id: str, name: str, **extra):
    return {"place_id": place_id, "name": name, "types": ["cafe"], **extra}


class TestSearchPlaces:
    def test_builds_text_query(self):
        with patch.object(places_client, "_get", return_value={"status": "OK", "results": []}) as mock_get:
            assert search_places("coffee shops", "Portland, OR") == []

        path, params = mock_get.call_args.args
        assert path == "textsearch/json"
        assert params["query"] == "coffee shops in Portland, OR"
        assert params["key"] == settings.google_places_api_key

    def test_zero_results_is_not_an_error(self):
        with patch.object(places_client, "_get", return_value={"status": "ZERO_RESULTS"}):
            assert search_places("yurt rentals", "Boston") == []

    def test_request_denied_explains_setup(self):
        with patch.object(places_client, "_get", return_value={"status": "REQUEST_DENIED"}):
            with pytest.raises(PlacesError, match="access denied"):
                search_places("coffee", "Boston")

    def test_other_status_raises(self):
        with patch.object(places_client, "_get", return_value={"status": "OVER_QUERY_LIMIT"}):
            with pytest.raises(PlacesError, match="OVER_QUERY_LIMIT"):
                search_places("coffee", "Boston")

    def test_missing_key(self):
        with patch.object(settings, "google_places_api_key", None):
            with pytest.raises(PlacesError, match="key not available"):
                search_places("coffee", "Boston")


class TestPlaceDetails:
    def test_returns_result(self):
        payload = {"status": "OK", "result": _place("p1", "Stumptown")}
        with patch.object(places_client, "_get", return_value=payload) as mock_get:
            assert get_place_details("p1")["name"] == "Stumptown"
        path, params = mock_get.call_args.args
        assert path == "details/json"
        assert "formatted_phone_number" in params["fields"]

    def test_bad_status_raises(self):
        with patch.object(places_client, "_get", return_value={"status": "NOT_FOUND"}):
            with pytest.raises(PlacesError, match="NOT_FOUND"):
                get_place_details("missing")


class TestSearchLocalBusinesses:
    def test_top_three_with_details_fallback(self):
        search_results = [_place(f"p{i}", f"Cafe {i}") for i in range(5)]

        def fake_get(path, params):
            if path == "textsearch/json":
                return {"status": "OK", "results": search_results}
            if params["place_id"] == "p1":
                return {"status": "UNKNOWN_ERROR"}
            detail = _place(params["place_id"], f"Cafe {params['place_id'][1]} (details)", rating=4.8)
            return {"status": "OK", "result": detail}

        with patch.object(places_client, "_get", side_effect=fake_get):
            results = search_local_businesses("coffee", "Seattle")

        assert [r.name for r in results] == ["Cafe 0 (details)", "Cafe 1", "Cafe 2 (details)"]
        assert results[0].badge == "Highly Rated"
        # search record has no rating, so no rating badge
        assert results[1].badge == "Local Business"
        assert all(r.rating is None for r in results)


class TestGet:
    def test_http_errors_become_places_errors(self):
        client = MagicMock()
        client.__enter__.return_value = client
        client.get.side_effect = httpx.ConnectTimeout("timed out")
        with patch.object(places_client.httpx, "Client", return_value=client):
            with pytest.raises(PlacesError, match="ConnectTimeout"):
                places_client._get("textsearch/json", {"query": "x", "key": "secret"})
