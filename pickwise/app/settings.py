from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Keys must be provided via env / .env (never hardcode secrets in code)
    openai_api_key: str | None = None
    google_places_api_key: str | None = None
    langsmith_api_key: str | None = None
    langsmith_project: str | None = None
    langchain_tracing_v2: bool = False
    model_name: str = "gpt-4o"

    places_base_url: str = "https://maps.googleapis.com/maps/api/place"
    request_timeout: float = 30.0
    openai_rate_limit_retries: int = 2

    # Token budgets per prompt
    compare_max_tokens: int = 1500
    intent_max_tokens: int = 200
    local_terms_max_tokens: int = 150
    feature_max_tokens: int = 500
    placeholder_max_tokens: int = 300

    max_results: int = 3

    host: str = "0.0.0.0"
    port: int = 5000


settings = Settings()  # load once at import
