"""Observability utilities for the practice interview service."""
from .logger import log_event

__all__ = ["log_event"]
