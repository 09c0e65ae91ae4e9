import logging
import time

from pickwise.orchestration.state import CompareState

logger = logging.getLogger(__name__)

NOTHING_FOUND_MESSAGE = "No products found matching your search criteria. Please try a different search term."


def trace_node(state: CompareState) -> CompareState:
    if not state.get("products") and not state.get("message"):
        state["message"] = NOTHING_FOUND_MESSAGE

    start = state.get("meta", {}).get("start_time_ms")
    latency = int(time.time() * 1000 - start) if start else 0
    state.setdefault("meta", {})["latency_ms"] = latency

    intent = state.get("intent")
    logger.info(
        "compare intent=%s results=%d broadened=%s latency_ms=%d tool_calls=%d",
        intent.intent if intent else None,
        len(state.get("products") or []),
        state.get("broadened", False),
        latency,
        len(state.get("tool_calls") or []),
        extra={"query": state["request"].search_query},
    )
    return state
