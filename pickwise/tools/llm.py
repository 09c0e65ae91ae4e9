import json
import logging
from typing import Any, Dict, List

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI

from pickwise.app.errors import MalformedResponseError
from pickwise.app.settings import settings
from pickwise.tools.openai_retry import retry_with_backoff

logger = logging.getLogger(__name__)


def build_llm(max_tokens: int, temperature: float = 0.2, json_mode: bool = True) -> Runnable:
    # IMPORTANT: only pass api_key if it is set, otherwise let langchain-openai
    # resolve OPENAI_API_KEY from the environment.
    kwargs: Dict[str, Any] = {
        "model": settings.model_name,
        "temperature": temperature,
        "timeout": settings.request_timeout,
        "max_tokens": max_tokens,
        # rate limits are handled by retry_with_backoff
        "max_retries": 0,
    }
    if settings.openai_api_key:
        kwargs["api_key"] = settings.openai_api_key
    llm = ChatOpenAI(**kwargs)
    if json_mode:
        return llm.bind(response_format={"type": "json_object"})
    return llm


@retry_with_backoff()
def _invoke_with_retry(llm: Runnable, messages: List[BaseMessage]) -> str:
    response = llm.invoke(messages)
    return response.content or ""


def parse_json_object(content: str) -> Dict[str, Any]:
    """Parse a model reply that should be a single JSON object."""
    text = content.strip()
    if text.startswith("```"):
        # tolerate ```json fences even in JSON mode
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    if not text:
        return {}
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Model returned invalid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise MalformedResponseError("Invalid response format from OpenAI: expected a JSON object")
    return parsed


def complete_json(
    system: str,
    user: str,
    max_tokens: int,
    temperature: float = 0.2,
    **variables: Any,
) -> Dict[str, Any]:
    """Render a system/user prompt pair, call the model in JSON mode and parse the reply.

    ``system`` and ``user`` are ChatPromptTemplate strings, so literal braces
    must be doubled.
    """
    prompt = ChatPromptTemplate.from_messages([("system", system), ("user", user)])
    messages = prompt.format_messages(**variables)
    llm = build_llm(max_tokens=max_tokens, temperature=temperature)
    content = _invoke_with_retry(llm, messages)
    logger.debug("LLM reply (%d chars)", len(content))
    return parse_json_object(content)
