"""Configuration package for the practice interview service."""
from .registry import GRADER_KEY, bind_model, get_model
from .routes import LlmConfigError, LlmRoute, grader_route
from .settings import Settings, settings

__all__ = [
    "GRADER_KEY",
    "bind_model",
    "get_model",
    "LlmConfigError",
    "LlmRoute",
    "grader_route",
    "Settings",
    "settings",
]
