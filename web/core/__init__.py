"""Shared web-layer helpers."""

from .context import get_engine, status_code_for

__all__ = ["get_engine", "status_code_for"]
