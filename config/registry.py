"""Process-wide bindings from model keys to grading callables.

The grader looks its model up here on every call, so tests can swap in a
fake with :func:`bind_model` without touching the HTTP gateway.
"""
from typing import Any, Callable, Dict

GRADER_KEY = "models.answer_grader"

_BINDINGS: Dict[str, Callable[..., Any]] = {}


def bind_model(key: str, fn: Callable[..., Any]) -> None:
    _BINDINGS[key] = fn


def get_model(key: str) -> Callable[..., Any]:
    """Return the callable bound to ``key``; KeyError when nothing is bound."""

    try:
        return _BINDINGS[key]
    except KeyError:
        raise KeyError(f"Model not bound in registry: {key}") from None
