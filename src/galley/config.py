"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/galley.db"),
        description="SQLite database location.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for authenticated endpoints.",
    )
    default_user_id: int = Field(
        default=1,
        description="User id assumed by the API and CLI when none is supplied.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )
    advisor_llm_base_url: Optional[str] = Field(
        default=None,
        description="Advisor LLM base URL (OpenAI-compatible runtime or Ollama).",
    )
    advisor_llm_model: str = Field(
        default="Qwen/Qwen1.5-0.5B-Chat",
        description="Model identifier passed to the advisor LLM endpoint.",
    )
    advisor_llm_provider: str = Field(
        default="openai",
        description="Advisor LLM provider (openai or ollama).",
    )
    advisor_llm_api_key: Optional[str] = Field(
        default=None,
        description="Optional bearer key sent to the advisor LLM endpoint.",
    )
    advisor_llm_temperature: float = Field(
        default=0.2,
        description="Sampling temperature for advisor requests.",
    )
    advisor_llm_max_tokens: int = Field(
        default=1200,
        description="Maximum tokens to request from the advisor LLM.",
    )
    advisor_llm_timeout: float = Field(
        default=30.0,
        description="Seconds before an advisor request is abandoned.",
    )
    cooking_preferences: list[str] = Field(
        default_factory=lambda: ["Italian", "Healthy Cooking"],
        description="Cooking preferences passed to the advisor when the caller gives none.",
    )
    recommendation_budget: Optional[float] = Field(
        default=None,
        description="Default purchase budget for equipment recommendations.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (db_path := _env("GALLEY_DATABASE_PATH")):
        payload["database_path"] = Path(db_path)
    if (api_token := _env("GALLEY_API_TOKEN")):
        payload["api_token"] = api_token
    if (default_user := _env("GALLEY_DEFAULT_USER_ID")):
        try:
            payload["default_user_id"] = int(default_user)
        except ValueError:
            pass
    if (log_level := _env("GALLEY_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("GALLEY_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("GALLEY_LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    if (llm_base_url := _env("GALLEY_LLM_BASE_URL")):
        payload["advisor_llm_base_url"] = llm_base_url
    if (llm_model := _env("GALLEY_LLM_MODEL")):
        payload["advisor_llm_model"] = llm_model
    if (llm_provider := _env("GALLEY_LLM_PROVIDER")):
        payload["advisor_llm_provider"] = llm_provider
    if (llm_api_key := _env("GALLEY_LLM_API_KEY")):
        payload["advisor_llm_api_key"] = llm_api_key
    if (llm_temperature := _env("GALLEY_LLM_TEMPERATURE")):
        try:
            payload["advisor_llm_temperature"] = float(llm_temperature)
        except ValueError:
            pass
    if (llm_max_tokens := _env("GALLEY_LLM_MAX_TOKENS")):
        try:
            payload["advisor_llm_max_tokens"] = int(llm_max_tokens)
        except ValueError:
            pass
    if (llm_timeout := _env("GALLEY_LLM_TIMEOUT")):
        try:
            payload["advisor_llm_timeout"] = float(llm_timeout)
        except ValueError:
            pass
    if (preferences := _env("GALLEY_COOKING_PREFERENCES")):
        payload["cooking_preferences"] = [
            entry.strip() for entry in preferences.split(",") if entry.strip()
        ]
    if (budget := _env("GALLEY_RECOMMENDATION_BUDGET")):
        try:
            payload["recommendation_budget"] = float(budget)
        except ValueError:
            pass
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
