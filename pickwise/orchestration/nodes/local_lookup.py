import logging
from typing import Any, Dict

from pickwise.app.errors import MalformedResponseError
from pickwise.app.schemas import LocalSearchTerms
from pickwise.app.settings import settings
from pickwise.orchestration.normalize import local_business_features
from pickwise.orchestration.state import CompareState
from pickwise.prompts.intent_prompt import LOCAL_TERMS_SYSTEM, LOCAL_TERMS_USER_TEMPLATE
from pickwise.tools.llm import complete_json
from pickwise.tools.places_client import search_local_businesses

logger = logging.getLogger(__name__)

_NULLISH = {"", "null", "none", "n/a", "unknown"}


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return None if text.lower() in _NULLISH else text


def extract_search_terms(query: str) -> LocalSearchTerms:
    data: Dict[str, Any] = complete_json(
        LOCAL_TERMS_SYSTEM,
        LOCAL_TERMS_USER_TEMPLATE,
        max_tokens=settings.local_terms_max_tokens,
        temperature=0,
        query=query,
    )
    return LocalSearchTerms(
        business_type=_clean(data.get("business_type")) or query,
        location=_clean(data.get("location")),
    )


def local_lookup_node(state: CompareState) -> CompareState:
    query = state["request"].search_query
    tool_calls = state.setdefault("tool_calls", [])
    try:
        terms = extract_search_terms(query)
        state["search_terms"] = terms
        if not terms.location:
            logger.info("No location in %r, skipping places lookup", query)
            tool_calls.append({"tool_name": "places.search", "status": "skipped", "error": "no location"})
            state["message"] = (
                f"Add a city or neighborhood to find {terms.business_type} near you, "
                "for example \"coffee shops in Seattle\"."
            )
            return state
        products = search_local_businesses(terms.business_type, terms.location, limit=settings.max_results)
        tool_calls.append({"tool_name": "places.search", "status": "ok"})
    except MalformedResponseError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.error("Local business lookup failed: %s", exc)
        tool_calls.append({"tool_name": "places.search", "status": "error", "error": str(exc)})
        state["service_error"] = str(exc)
        state["message"] = "We couldn't search local businesses right now. Please try again in a moment."
        return state

    if not products:
        state["message"] = (
            f"No {terms.business_type} found in {terms.location}. "
            "Try a nearby area or a different type of business."
        )
        return state

    state["products"] = products
    state["features"] = local_business_features(terms.business_type)
    state["message"] = None
    return state
