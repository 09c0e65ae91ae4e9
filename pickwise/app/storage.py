"""In-memory store for submitted comparison searches."""
import itertools
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pickwise.app.schemas import CompareRequest, ComparisonResult, SearchRequest


class MemStorage:
    """Keeps every search request for the life of the process; nothing is evicted."""

    def __init__(self) -> None:
        self._requests: Dict[int, SearchRequest] = {}
        self._ids = itertools.count(1)

    def create_search_request(self, request: CompareRequest) -> SearchRequest:
        search = SearchRequest(
            id=next(self._ids),
            search_query=request.search_query,
            results=None,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._requests[search.id] = search
        return search

    def update_search_request_results(
        self, request_id: int, results: List[ComparisonResult]
    ) -> Optional[SearchRequest]:
        current = self._requests.get(request_id)
        if current is None:
            return None
        updated = current.model_copy(update={"results": list(results)})
        self._requests[request_id] = updated
        return updated

    def get_search_request(self, request_id: int) -> Optional[SearchRequest]:
        return self._requests.get(request_id)


storage = MemStorage()
