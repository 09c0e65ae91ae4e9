import logging
from typing import Dict

from pickwise.app.settings import settings
from pickwise.orchestration.normalize import apply_feature_labels, humanize_label
from pickwise.orchestration.state import CompareState
from pickwise.prompts.feature_prompt import FEATURE_SYSTEM, FEATURE_USER_TEMPLATE
from pickwise.tools.llm import complete_json

logger = logging.getLogger(__name__)


def _llm_labels(features: list[str]) -> Dict[str, str]:
    data = complete_json(
        FEATURE_SYSTEM,
        FEATURE_USER_TEMPLATE,
        max_tokens=settings.feature_max_tokens,
        temperature=0,
        features="\n".join(features),
    )
    labels = data.get("labels")
    if not isinstance(labels, dict):
        return {}
    return {str(k): str(v) for k, v in labels.items() if isinstance(v, str)}


def humanize_features_node(state: CompareState) -> CompareState:
    features = state.get("features") or []
    products = state.get("products") or []
    # product feature keys can differ from the declared list
    names = list(dict.fromkeys(features + [k for p in products for k in p.features]))
    if not names:
        return state

    labels: Dict[str, str] = {}
    if any(humanize_label(name) != name for name in names):
        tool_calls = state.setdefault("tool_calls", [])
        try:
            labels = _llm_labels(names)
            tool_calls.append({"tool_name": "llm.humanize_features", "status": "ok"})
        except Exception as exc:  # noqa: BLE001
            logger.warning("Feature label rewrite failed, using local humanizer: %s", exc)
            tool_calls.append({"tool_name": "llm.humanize_features", "status": "fallback", "error": str(exc)})

    merged = {name: labels.get(name) or humanize_label(name) for name in names}
    state["features"], state["products"] = apply_feature_labels(features, products, merged)
    return state
