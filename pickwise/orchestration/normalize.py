"""Reshape LLM and places payloads into ComparisonResult records.

Everything here is deterministic: no network calls, so the workflow nodes can
stay thin and this module carries the tests.
"""
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pickwise.app.errors import MalformedResponseError
from pickwise.app.schemas import ComparisonResult, FeatureValue

logger = logging.getLogger(__name__)

PRICE_LEVELS = {1: "$", 2: "$$", 3: "$$$", 4: "$$$$"}
DEFAULT_PRICE_LEVEL = 2
BADGE_COLORS = ("green", "blue", "orange", "purple")

COMMON_LOCAL_FEATURES = ["Address", "Price Range", "Currently Open", "Phone Number", "Business Status"]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def pricing_for_level(price_level: Optional[int]) -> str:
    return PRICE_LEVELS.get(price_level or DEFAULT_PRICE_LEVEL, PRICE_LEVELS[DEFAULT_PRICE_LEVEL])


def choose_badge(rating: Optional[float], price_level: Optional[int]) -> Tuple[str, str]:
    """Pick a marketing badge for a place. Rating wins over price."""
    level = price_level or DEFAULT_PRICE_LEVEL
    if rating and rating >= 4.5:
        return "Highly Rated", "green"
    if rating and rating >= 4.0:
        return "Well Rated", "blue"
    if level == 1:
        return "Budget Friendly", "orange"
    if level == 4:
        return "Premium", "purple"
    return "Local Business", "blue"


def _is_coffee_shop(name: str, types: Iterable[str]) -> bool:
    lowered = name.lower()
    return "cafe" in types or "coffee" in lowered or "cafe" in lowered


def format_place(place: Mapping[str, Any]) -> ComparisonResult:
    """Turn a places search or details record into a comparison card."""
    name = place.get("name") or "Unknown business"
    types = place.get("types") or []
    address = place.get("formatted_address")
    price_range = pricing_for_level(place.get("price_level"))
    opening_hours = place.get("opening_hours") or {}

    features: Dict[str, FeatureValue] = {
        "Address": address or "Address not available",
        "Price Range": price_range,
        "Currently Open": "Yes" if opening_hours.get("open_now") else "No",
        "Phone Number": place.get("formatted_phone_number") or "Not available",
        "Business Status": "Open" if place.get("business_status") == "OPERATIONAL" else "Status unknown",
    }
    if _is_coffee_shop(name, types):
        features["Specialties"] = "Coffee & beverages"
        features["Atmosphere"] = "Cafe environment"
    elif "restaurant" in types or "food" in types:
        features["Cuisine"] = "Various dishes"
        features["Dining Experience"] = "Restaurant experience"

    weekday_text = opening_hours.get("weekday_text")
    if weekday_text:
        features["Operating Hours"] = weekday_text[0] or "Hours not available"

    badge, badge_color = choose_badge(place.get("rating"), place.get("price_level"))
    website = place.get("website") or f"https://www.google.com/maps/place/?q=place_id:{place.get('place_id', '')}"

    return ComparisonResult(
        name=name,
        description=f"Located at {address}" if address else "No data available",
        pricing=price_range,
        website=website,
        features=features,
        badge=badge,
        badge_color=badge_color,
    )


def local_business_features(business_type: str) -> List[str]:
    lowered = business_type.lower()
    if "coffee" in lowered or "cafe" in lowered:
        return COMMON_LOCAL_FEATURES + ["Specialties", "Atmosphere", "Operating Hours"]
    if "restaurant" in lowered:
        return COMMON_LOCAL_FEATURES + ["Cuisine", "Dining Experience", "Operating Hours"]
    return COMMON_LOCAL_FEATURES + ["Operating Hours", "Services"]


def coerce_feature_value(value: Any) -> FeatureValue:
    if isinstance(value, bool) or isinstance(value, str):
        return value
    if value is None:
        return "No data available"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def normalize_product(raw: Any) -> Optional[ComparisonResult]:
    """Coerce one model-produced product into a ComparisonResult.

    Returns None for entries without a usable name. Ratings are dropped no
    matter what the model sent.
    """
    if not isinstance(raw, Mapping):
        return None
    name = _text(raw.get("name"), "")
    if not name:
        return None

    raw_features = raw.get("features")
    features: Dict[str, FeatureValue] = {}
    if isinstance(raw_features, Mapping):
        features = {str(k): coerce_feature_value(v) for k, v in raw_features.items()}

    badge_color = raw.get("badgeColor") or raw.get("badge_color")
    if badge_color not in BADGE_COLORS:
        badge_color = "blue" if raw.get("badge") else None

    return ComparisonResult(
        name=name,
        description=_text(raw.get("description"), "No data available"),
        pricing=_text(raw.get("pricing"), "Contact for pricing"),
        website=_text(raw.get("website"), ""),
        features=features,
        badge=_text(raw.get("badge"), "") or None,
        badge_color=badge_color,
    )


def normalize_products(raw_products: Any, limit: int) -> List[ComparisonResult]:
    if raw_products is None:
        return []
    if not isinstance(raw_products, list):
        raise MalformedResponseError("Invalid response format from OpenAI: products must be a list")
    products = [p for p in (normalize_product(item) for item in raw_products) if p is not None]
    if len(products) > limit:
        logger.info("Model returned %d products, keeping the first %d", len(products), limit)
    return products[:limit]


def collect_features(declared: Any, products: List[ComparisonResult]) -> List[str]:
    """Feature names for the comparison table.

    Uses the model's list when it sent one, otherwise the union of product
    feature keys in first-seen order.
    """
    names: List[str] = []
    if isinstance(declared, list):
        names = [str(f).strip() for f in declared if str(f).strip()]
    if not names:
        for product in products:
            names.extend(product.features.keys())
    return list(dict.fromkeys(names))


def humanize_label(label: str) -> str:
    """``batteryLife`` / ``battery_life`` -> ``Battery Life``. Already-readable labels pass through."""
    if " " in label.strip():
        return label.strip()
    spaced = _CAMEL_BOUNDARY.sub(" ", label.replace("_", " ").replace("-", " "))
    words = [w for w in spaced.split(" ") if w]
    return " ".join(w if w.isupper() and len(w) > 1 else w.capitalize() for w in words)


def apply_feature_labels(
    features: List[str], products: List[ComparisonResult], labels: Mapping[str, str]
) -> Tuple[List[str], List[ComparisonResult]]:
    """Rename features in the table list and in every product's feature map."""

    def rename(name: str) -> str:
        label = labels.get(name)
        return label.strip() if isinstance(label, str) and label.strip() else name

    renamed_features = list(dict.fromkeys(rename(f) for f in features))
    renamed_products = []
    for product in products:
        renamed: Dict[str, FeatureValue] = {}
        for key, value in product.features.items():
            label = rename(key)
            if label in renamed:
                # first value wins
                logger.warning(
                    "Feature %r on %s collides with label %r, keeping first value", key, product.name, label
                )
                continue
            renamed[label] = value
        renamed_products.append(product.model_copy(update={"features": renamed}))
    return renamed_features, renamed_products
