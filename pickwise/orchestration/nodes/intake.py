import time
from datetime import date

from pickwise.orchestration.state import CompareState


def format_prompt_date(day: date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


def intake_node(state: CompareState) -> CompareState:
    state.setdefault("meta", {}).setdefault("start_time_ms", int(time.time() * 1000))
    state["current_date"] = format_prompt_date(date.today())
    state["products"] = []
    state["features"] = []
    state["message"] = None
    state["broadened"] = False
    state["service_error"] = None
    state.setdefault("tool_calls", [])
    return state
