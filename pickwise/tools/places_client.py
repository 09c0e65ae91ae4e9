import logging
from typing import Any, Dict, List

import httpx

from pickwise.app.errors import PlacesError
from pickwise.app.schemas import ComparisonResult
from pickwise.app.settings import settings
from pickwise.orchestration.normalize import format_place

logger = logging.getLogger(__name__)

DETAIL_FIELDS = ",".join(
    [
        "place_id",
        "name",
        "formatted_address",
        "rating",
        "price_level",
        "opening_hours",
        "website",
        "formatted_phone_number",
        "types",
        "business_status",
    ]
)


def _api_key() -> str:
    if not settings.google_places_api_key:
        raise PlacesError("Google Places API key not available")
    return settings.google_places_api_key


def _get(path: str, params: Dict[str, Any]) -> Dict[str, Any]:
    url = f"{settings.places_base_url}/{path}"
    try:
        with httpx.Client(timeout=settings.request_timeout) as client:
            resp = client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
    except httpx.HTTPError as exc:
        # never log the request URL, it carries the key
        logger.error("Places call failed for %s: %s", path, type(exc).__name__)
        raise PlacesError(f"Google Places API request failed: {type(exc).__name__}") from exc


def search_places(query: str, location: str) -> List[Dict[str, Any]]:
    """Text search for ``"<query> in <location>"``; returns raw place records."""
    data = _get("textsearch/json", {"query": f"{query} in {location}", "key": _api_key()})
    status = data.get("status")
    if status == "REQUEST_DENIED":
        raise PlacesError(
            "Google Places API access denied. Please ensure the API key has Places API "
            "enabled and proper billing configured in Google Cloud Console."
        )
    if status not in ("OK", "ZERO_RESULTS"):
        raise PlacesError(f"Google Places API error: {status}")
    return data.get("results") or []


def get_place_details(place_id: str) -> Dict[str, Any]:
    data = _get(
        "details/json",
        {"place_id": place_id, "fields": DETAIL_FIELDS, "key": _api_key()},
    )
    if data.get("status") != "OK":
        raise PlacesError(f"Place details error: {data.get('status')}")
    return data.get("result") or {}


def search_local_businesses(business_type: str, location: str, limit: int = 3) -> List[ComparisonResult]:
    places = search_places(business_type, location)
    results: List[ComparisonResult] = []
    for place in places[:limit]:
        try:
            details = get_place_details(place["place_id"])
        except (PlacesError, KeyError) as exc:
            logger.info("Using search record for %s, details unavailable: %s", place.get("place_id"), exc)
            details = place
        results.append(format_place(details))
    logger.info("Places lookup for %r in %r returned %d results", business_type, location, len(results))
    return results
