from typing import Annotated, Any, Literal

from pydantic import BeforeValidator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def parse_csv(value: Any) -> list[str] | Any:
    if isinstance(value, str):
        return [item.strip().lower() for item in value.split(",") if item.strip()]
    return value


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "MGQs"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Any OpenAI-compatible endpoint works; Gemini is the default provider.
    LLM_API_KEY: str = ""
    GEMINI_API_KEY: str = ""
    LLM_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    LLM_TIMEOUT_SECONDS: float = 60.0
    LLM_MAX_RETRIES: int = 0

    MODEL_DEFAULT: str = "gemini-2.0-flash"
    MODEL_IMAGE: str = "imagen-3.0-generate-002"
    MODEL_TTS: str = "gpt-4o-mini-tts"
    TTS_VOICE: str = "alloy"

    RESERVED_USERNAMES: Annotated[list[str], NoDecode, BeforeValidator(parse_csv)] = [
        "admin",
        "administrator",
        "root",
        "support",
        "moderator",
        "mgqs",
        "teacher",
    ]


settings = Settings()  # type: ignore
