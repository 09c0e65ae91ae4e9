import os

from pickwise.app.settings import settings


def configure_tracing() -> None:
    """
    Configure LangSmith tracing via environment variables.

    LangChain picks these up on its own, so every prompt sent by the
    comparison workflow shows up as a run once a LangSmith key is present.
    """
    if settings.langchain_tracing_v2 and settings.langsmith_api_key:
        os.environ["LANGCHAIN_TRACING_V2"] = "true"
    if settings.langsmith_api_key:
        os.environ["LANGSMITH_API_KEY"] = settings.langsmith_api_key
    if settings.langsmith_project:
        os.environ["LANGSMITH_PROJECT"] = settings.langsmith_project
