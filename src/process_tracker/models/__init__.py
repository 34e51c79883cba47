"""Pydantic models for process tracking."""

from .options import ProcessLoggerOptions

__all__ = ["ProcessLoggerOptions"]
