from pathlib import Path

from pydantic_settings import BaseSettings

_DEFAULT_DATASET = Path(__file__).resolve().parent / "data" / "fatwas.json"


class Settings(BaseSettings):
    # Static fatwa dataset (read once at startup)
    dataset_path: str = str(_DEFAULT_DATASET)

    # OpenRouter (remote semantic fallback)
    openrouter_api_key: str = ""
    openrouter_model: str = "google/gemini-2.5-flash"
    semantic_fallback_enabled: bool = False
    semantic_fallback_timeout: float = 10.0

    # Frontend URL (for CORS)
    frontend_url: str = "http://localhost:3000"

    # Chat sessions (in-process; oldest evicted past the cap)
    max_sessions: int = 1000

    # Rate limits
    chat_rate_limit: str = "30/minute"
    session_rate_limit: str = "20/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
