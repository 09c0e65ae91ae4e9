from langgraph.graph import END, StateGraph

from pickwise.orchestration.nodes.humanize import humanize_features_node
from pickwise.orchestration.nodes.intake import intake_node
from pickwise.orchestration.nodes.intent import intent_node
from pickwise.orchestration.nodes.local_lookup import local_lookup_node
from pickwise.orchestration.nodes.product_compare import broaden_node, product_compare_node
from pickwise.orchestration.nodes.trace import trace_node
from pickwise.orchestration.state import CompareState


def route_after_intent(state: CompareState) -> str:
    intent = state.get("intent")
    if intent and intent.intent in ("local_only", "local_first"):
        return "local_lookup"
    return "product_compare"


def route_after_local(state: CompareState) -> str:
    if state.get("products"):
        return "humanize_features"
    intent = state.get("intent")
    if intent and intent.intent == "local_first":
        return "product_compare"
    return "trace"


def route_after_products(state: CompareState) -> str:
    if state.get("products"):
        return "humanize_features"
    if not state.get("broadened") and not state.get("service_error"):
        return "broaden"
    return "trace"


def build_workflow():
    graph = StateGraph(CompareState)

    graph.add_node("intake", intake_node)
    graph.add_node("classify_intent", intent_node)
    graph.add_node("local_lookup", local_lookup_node)
    graph.add_node("product_compare", product_compare_node)
    graph.add_node("broaden", broaden_node)
    graph.add_node("humanize_features", humanize_features_node)
    graph.add_node("trace", trace_node)

    graph.set_entry_point("intake")
    graph.add_edge("intake", "classify_intent")

    graph.add_conditional_edges(
        "classify_intent",
        route_after_intent,
        {"local_lookup": "local_lookup", "product_compare": "product_compare"},
    )
    graph.add_conditional_edges(
        "local_lookup",
        route_after_local,
        {"humanize_features": "humanize_features", "product_compare": "product_compare", "trace": "trace"},
    )
    graph.add_conditional_edges(
        "product_compare",
        route_after_products,
        {"humanize_features": "humanize_features", "broaden": "broaden", "trace": "trace"},
    )
    # broaden never loops back, so there is at most one broader retry
    graph.add_conditional_edges(
        "broaden",
        lambda state: "humanize_features" if state.get("products") else "trace",
        {"humanize_features": "humanize_features", "trace": "trace"},
    )
    graph.add_edge("humanize_features", "trace")
    graph.add_edge("trace", END)

    return graph.compile()
