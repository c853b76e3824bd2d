"""LLM route configuration for the answer grader."""
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field

from .settings import Settings, settings as default_settings


class LlmConfigError(RuntimeError):  # Missing or invalid grading-service configuration
    pass


class LlmRoute(BaseModel):  # LLM endpoint configuration
    name: str
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(ge=0.1)
    api_key: Optional[str] = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)


def grader_route(cfg: Optional[Settings] = None) -> LlmRoute:  # Build the grading route from settings
    cfg = cfg or default_settings
    api_key = (cfg.OPENAI_API_KEY or "").strip()
    if not api_key:
        raise LlmConfigError("OPENAI_API_KEY not set")
    return LlmRoute(
        name="grader",
        base_url=cfg.GRADER_BASE_URL.rstrip("/"),
        endpoint=cfg.GRADER_ENDPOINT,
        model=cfg.GRADER_MODEL,
        timeout_s=cfg.GRADER_TIMEOUT_S,
        api_key=api_key,
    )
