"""Runtime configuration for the documentation assistant.

Values come from environment variables and may be overridden by CLI flags.
Inference-engine settings (context size, threads, GPU layers) are carried
only so they can be reported; the engine itself runs out of process.
"""

import os
import logging
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_GENERATION_URL = "http://localhost:8081"
DEFAULT_SEARCH_INDEX = "IQM API Docs"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer value for {name}: {value!r}")
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric value for {name}: {value!r}")
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _generation_url_from_env() -> str:
    url = os.getenv("LLAMA_URL")
    if url:
        return url
    # MODEL_PATH doubles as the generation service URL when it is one
    model_path = os.getenv("MODEL_PATH", "")
    if model_path.startswith("http"):
        return model_path
    return DEFAULT_GENERATION_URL


class AssistantConfig(BaseModel):
    """Documentation assistant configuration."""
    model_config = ConfigDict(protected_namespaces=())

    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=8080, ge=1, le=65535, description="Listen port")
    server_threads: int = Field(default=4, ge=1, description="Worker threads servicing requests")

    # Generation service
    generation_url: str = Field(default=DEFAULT_GENERATION_URL, description="Base URL of the completion service")
    model_name: str = Field(default="mistral-7b-local", description="Model identifier reported to callers")
    max_tokens: int = Field(default=512, ge=1, description="Maximum tokens to generate per reply")
    request_timeout: float = Field(default=60.0, gt=0, description="Outbound request timeout in seconds")

    # Search service
    search_app_id: Optional[str] = Field(default=None, description="Search application ID")
    search_api_key: Optional[str] = Field(default=None, description="Search API key")
    search_index_name: str = Field(default=DEFAULT_SEARCH_INDEX, description="Search index name")
    search_host: Optional[str] = Field(default=None, description="Override for the search host URL")

    # Inference engine settings, reported only
    n_ctx: int = Field(default=4096, description="Model context size")
    n_threads: int = Field(default=4, description="Inference CPU threads")
    n_gpu_layers: int = Field(default=0, description="Layers offloaded to GPU")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> str:
        """Upper-case the level name; unknown names fall back to INFO."""
        name = str(value or "INFO").strip().upper()
        name = LOG_LEVEL_ALIASES.get(name, name)
        if name not in LOG_LEVELS:
            logger.warning(f"Unknown log level {value!r}, using INFO")
            return "INFO"
        return name

    @property
    def search_enabled(self) -> bool:
        return bool(self.search_app_id) and bool(self.search_api_key)

    @classmethod
    def from_env(cls, **overrides: Any) -> 'AssistantConfig':
        """Create configuration from environment variables.

        Non-None overrides replace the environment values before validation,
        so a flag can stand in for an invalid variable.
        """
        values = dict(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", 8080),
            server_threads=_env_int("SERVER_THREADS", 4),
            generation_url=_generation_url_from_env(),
            model_name=os.getenv("MODEL_NAME", "mistral-7b-local"),
            max_tokens=_env_int("N_PREDICT", 512),
            request_timeout=_env_float("REQUEST_TIMEOUT", 60.0),
            search_app_id=os.getenv("ALGOLIA_APP_ID") or None,
            search_api_key=os.getenv("ALGOLIA_API_KEY") or None,
            search_index_name=os.getenv("ALGOLIA_INDEX_NAME", DEFAULT_SEARCH_INDEX),
            search_host=os.getenv("ALGOLIA_HOST") or None,
            n_ctx=_env_int("N_CTX", 4096),
            n_threads=_env_int("N_THREADS", 4),
            n_gpu_layers=_env_int("N_GPU_LAYERS", 0),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=_env_bool("LOG_JSON"),
        )
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> 'AssistantConfig':
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return self.model_validate({**self.model_dump(), **changes})

    def describe(self) -> Dict[str, Any]:
        """Configuration summary with secrets masked, for the startup banner."""
        summary = self.model_dump()
        if summary.get("search_api_key"):
            summary["search_api_key"] = "****"
        summary["search_enabled"] = self.search_enabled
        return summary
