"""Pytest configuration."""

import os

import pytest

# Settings load at import time; give them harmless values so nothing reaches a real API.
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("GOOGLE_PLACES_API_KEY", "test-places-key")
os.environ["LANGCHAIN_TRACING_V2"] = "false"

from pickwise.app.schemas import CompareRequest, ComparisonResult, IntentPrediction  # noqa: E402


@pytest.fixture
def compare_request():
    def _make(query: str = "wireless headphones under $150") -> CompareRequest:
        return CompareRequest(searchQuery=query)

    return _make


@pytest.fixture
def intent():
    def _make(value: str, confidence: float = 0.9) -> IntentPrediction:
        return IntentPrediction(intent=value, confidence=confidence)

    return _make


@pytest.fixture
def sample_product_payload():
    return {
        "products": [
            {
                "name": "Sony WH-CH720N",
                "description": "Lightweight noise cancelling headphones",
                "pricing": "$149",
                "rating": 4.6,
                "website": "https://www.sony.com",
                "features": {"batteryLife": "35 hours", "noiseCancellation": True, "weightGrams": 192},
                "badge": "Best Value",
                "badgeColor": "green",
            },
            {
                "name": "Anker Soundcore Space Q45",
                "description": "Adaptive ANC with long battery",
                "pricing": "$99",
                "rating": None,
                "website": "https://www.soundcore.com",
                "features": {"batteryLife": "50 hours", "noiseCancellation": True},
                "badge": "Most Affordable",
                "badgeColor": "red",
            },
        ],
        "features": ["batteryLife", "noiseCancellation", "weightGrams"],
        "message": None,
    }


@pytest.fixture
def place_card():
    return ComparisonResult(
        name="Blue Bottle Coffee",
        description="Located at 1 Main St, Oakland, CA",
        pricing="$$",
        website="https://bluebottlecoffee.com",
        features={"Address": "1 Main St, Oakland, CA", "Price Range": "$$"},
        badge="Highly Rated",
        badge_color="green",
    )
