import logging
import re
from typing import Any, Dict

from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import ChatPromptTemplate
from openai import RateLimitError

from pickwise.app.schemas import IntentPrediction
from pickwise.app.settings import settings
from pickwise.orchestration.state import CompareState
from pickwise.prompts.intent_prompt import INTENT_SYSTEM, INTENT_USER_TEMPLATE
from pickwise.tools.llm import build_llm
from pickwise.tools.openai_retry import retry_with_backoff

logger = logging.getLogger(__name__)

LOCAL_KEYWORDS = [
    "near me",
    "nearby",
    "coffee shop",
    "cafe",
    "restaurant",
    "bakery",
    "brunch",
    "pizza",
    "sushi",
    "gym",
    "salon",
    "barber",
    "dentist",
    "hotel",
    "spa ",
    "bar ",
    "bookstore",
    "florist",
    "mechanic",
    "plumber",
]

# "in Portland", "near Brooklyn": a capitalized place after a locative preposition
_PLACE_PATTERN = re.compile(r"\b(?:in|near|around)\s+[A-Z][a-zA-Z]+")


def _build_chain():
    parser = PydanticOutputParser(pydantic_object=IntentPrediction)
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", INTENT_SYSTEM),
            ("user", INTENT_USER_TEMPLATE + "\nReturn JSON only.\n{format_instructions}"),
        ]
    ).partial(format_instructions=parser.get_format_instructions())
    llm = build_llm(max_tokens=settings.intent_max_tokens, temperature=0)
    return prompt | llm | parser


@retry_with_backoff()
def _invoke_with_retry(chain, inputs: Dict[str, Any]) -> IntentPrediction:
    return chain.invoke(inputs)


def fallback_intent(query: str) -> IntentPrediction:
    lower = f"{query.lower()} "
    has_local_keyword = any(k in lower for k in LOCAL_KEYWORDS)
    has_place = bool(_PLACE_PATTERN.search(query))
    if has_local_keyword and has_place:
        intent = "local_only"
    elif has_local_keyword or has_place:
        intent = "local_first"
    else:
        intent = "product_only"
    return IntentPrediction(intent=intent, confidence=0.4, reasoning="keyword heuristic")


def intent_node(state: CompareState) -> CompareState:
    query = state["request"].search_query
    try:
        prediction: IntentPrediction = _invoke_with_retry(_build_chain(), {"query": query})
        status = "ok"
    except RateLimitError as exc:
        logger.error("OpenAI rate limit during intent classification: %s", exc)
        logger.info("Falling back to heuristic intent classifier")
        prediction = fallback_intent(query)
        status = "fallback"
    except Exception as exc:  # noqa: BLE001
        logger.warning("Intent chain failed, using fallback: %s", exc)
        prediction = fallback_intent(query)
        status = "fallback"

    logger.info("Query %r classified as %s (%.2f)", query, prediction.intent, prediction.confidence)
    state["intent"] = prediction
    state.setdefault("tool_calls", []).append({"tool_name": "intent_classifier", "status": status})
    return state
