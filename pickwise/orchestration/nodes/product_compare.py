import logging
from typing import Any, Dict

from pickwise.app.errors import MalformedResponseError
from pickwise.app.settings import settings
from pickwise.orchestration.normalize import collect_features, normalize_products
from pickwise.orchestration.state import CompareState
from pickwise.prompts.product_prompt import BROADER_USER_TEMPLATE, PRODUCT_SYSTEM, PRODUCT_USER_TEMPLATE
from pickwise.tools.llm import complete_json

logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE_MESSAGE = "We couldn't reach the comparison service right now. Please try again in a moment."


def _compare(state: CompareState, user_template: str, tool_name: str) -> CompareState:
    query = state["request"].search_query
    tool_calls = state.setdefault("tool_calls", [])
    state["service_error"] = None
    try:
        data: Dict[str, Any] = complete_json(
            PRODUCT_SYSTEM,
            user_template,
            max_tokens=settings.compare_max_tokens,
            query=query,
            current_date=state.get("current_date", ""),
            max_results=settings.max_results,
        )
    except MalformedResponseError:
        tool_calls.append({"tool_name": tool_name, "status": "error", "error": "malformed JSON"})
        raise
    except Exception as exc:  # noqa: BLE001
        logger.error("Product comparison call failed: %s", exc, exc_info=True)
        tool_calls.append({"tool_name": tool_name, "status": "error", "error": str(exc)})
        state["service_error"] = str(exc)
        state["products"] = []
        state["features"] = []
        state["message"] = SERVICE_UNAVAILABLE_MESSAGE
        return state

    products = normalize_products(data.get("products"), settings.max_results)
    state["products"] = products
    state["features"] = collect_features(data.get("features"), products) if products else []
    message = data.get("message")
    state["message"] = str(message) if message else None
    tool_calls.append({"tool_name": tool_name, "status": "ok"})
    logger.info("%s returned %d products for %r", tool_name, len(products), query)
    return state


def product_compare_node(state: CompareState) -> CompareState:
    return _compare(state, PRODUCT_USER_TEMPLATE, "llm.product_compare")


def broaden_node(state: CompareState) -> CompareState:
    """Single retry with a broader reading of the query."""
    state["broadened"] = True
    logger.info("No products for %r, retrying with a broader interpretation", state["request"].search_query)
    return _compare(state, BROADER_USER_TEMPLATE, "llm.product_compare_broad")
