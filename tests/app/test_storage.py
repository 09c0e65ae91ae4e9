"""Tests for the in-memory search store."""

from datetime import datetime

from pickwise.app.storage import MemStorage


class TestMemStorage:
    def test_ids_increment_from_one(self, compare_request):
        store = MemStorage()
        first = store.create_search_request(compare_request("laptops"))
        second = store.create_search_request(compare_request("tablets"))

        assert (first.id, second.id) == (1, 2)
        assert first.search_query == "laptops"
        assert first.results is None
        assert datetime.fromisoformat(first.created_at).tzinfo is not None

    def test_update_results(self, compare_request, place_card):
        store = MemStorage()
        created = store.create_search_request(compare_request("coffee in Oakland"))

        updated = store.update_search_request_results(created.id, [place_card])

        assert updated.results == [place_card]
        assert store.get_search_request(created.id).results == [place_card]
        assert updated.created_at == created.created_at
        # the original snapshot is not mutated
        assert created.results is None

    def test_update_unknown_id(self, place_card):
        assert MemStorage().update_search_request_results(42, [place_card]) is None

    def test_get_unknown_id(self):
        assert MemStorage().get_search_request(7) is None

    def test_serializes_with_camel_case_keys(self, compare_request):
        store = MemStorage()
        created = store.create_search_request(compare_request("laptops"))

        payload = created.model_dump(by_alias=True)

        assert set(payload) == {"id", "searchQuery", "results", "createdAt"}
