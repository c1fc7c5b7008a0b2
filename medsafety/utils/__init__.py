"""Shared utility functions for the medication safety backend."""

from .sanitization import sanitize_identifier

__all__ = ["sanitize_identifier"]
