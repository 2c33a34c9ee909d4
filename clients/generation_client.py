"""Client for the out-of-process text-generation service.

The service exposes a llama-server compatible ``POST /completion`` endpoint
that takes a prompt plus sampling parameters and replies with JSON whose
``content`` field holds the generated text.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from observability.logging import log_slow_call

logger = logging.getLogger(__name__)


@dataclass
class GenerationParams:
    """Sampling parameters forwarded verbatim to the generation service."""
    max_tokens: int = 512
    temperature: float = 0.7
    top_p: float = 0.9
    stop: List[str] = field(default_factory=lambda: ["</s>", "[INST]"])

    def to_payload(self) -> Dict[str, Any]:
        return {
            "n_predict": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "stop": list(self.stop),
        }


@dataclass
class GenerationResult:
    text: str = ""
    model: str = ""
    success: bool = False
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str, model: str = "") -> "GenerationResult":
        return cls(text="", model=model, success=False, error=message)


class GenerationClient:
    """Issues one blocking completion request per call; never retries."""

    def __init__(self, base_url: str, model_name: str = "mistral-7b-local", timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.model_name = model_name
        self.timeout = timeout

    @log_slow_call("generation", threshold_ms=30000.0)
    def complete(self, prompt: str, params: Optional[GenerationParams] = None) -> GenerationResult:
        """Run a completion; failures come back as a result, not an exception."""
        params = params or GenerationParams()
        body = {"prompt": prompt, **params.to_payload()}

        try:
            response = requests.post(f"{self.base_url}/completion", json=body, timeout=self.timeout)
        except requests.Timeout:
            logger.error(f"Generation service timed out after {self.timeout}s")
            return GenerationResult.failure(
                f"Generation service did not respond within {self.timeout:g} seconds",
                self.model_name,
            )
        except requests.RequestException as e:
            logger.error(f"Generation service unreachable at {self.base_url}: {e}")
            return GenerationResult.failure(f"Generation service unavailable: {e}", self.model_name)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Error parsing generation response (HTTP {response.status_code}): {e}")
            return GenerationResult.failure(f"Error generating response: {e}", self.model_name)

        if not isinstance(payload, dict):
            return GenerationResult.failure("Error generating response: unexpected reply shape", self.model_name)

        if "error" in payload or response.status_code >= 400:
            error = payload.get("error")
            if isinstance(error, dict):
                error = error.get("message") or str(error)
            message = error or f"HTTP {response.status_code}"
            logger.error(f"Generation service reported an error: {message}")
            return GenerationResult.failure(f"Error generating response: {message}", self.model_name)

        content = payload.get("content")
        if not isinstance(content, str):
            return GenerationResult.failure("Error generating response: reply has no content", self.model_name)

        return GenerationResult(
            text=content,
            model=str(payload.get("model") or self.model_name),
            success=True,
        )

    def is_available(self, timeout: float = 2.0) -> bool:
        """Probe the service's health endpoint."""
        try:
            response = requests.get(f"{self.base_url}/health", timeout=timeout)
        except requests.RequestException as e:
            logger.debug(f"Generation service health probe failed: {e}")
            return False
        return response.status_code == 200
