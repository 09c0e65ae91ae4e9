from typing import List

from pickwise.app.errors import MalformedResponseError
from pickwise.app.settings import settings
from pickwise.prompts.placeholder_prompt import PLACEHOLDER_SYSTEM, PLACEHOLDER_USER
from pickwise.tools.llm import complete_json

EXAMPLE_COUNT = 3


def generate_placeholder_examples() -> List[str]:
    """Ask the model for three search-box examples; raises if it sends anything else."""
    data = complete_json(
        PLACEHOLDER_SYSTEM,
        PLACEHOLDER_USER,
        max_tokens=settings.placeholder_max_tokens,
        temperature=0.9,
    )
    examples = data.get("examples")
    if (
        isinstance(examples, list)
        and len(examples) == EXAMPLE_COUNT
        and all(isinstance(e, str) and e.strip() for e in examples)
    ):
        return [e.strip() for e in examples]
    raise MalformedResponseError("Invalid response format from OpenAI for placeholder examples")
