"""Input sanitization utilities."""

import re


def sanitize_identifier(value: str | None, max_length: int = 128) -> str:
    """Sanitize a user-provided identifier for safe logging and audit storage.

    Prevents:
    - Log injection (newlines, control characters)
    - Excessively long identifiers

    Args:
        value: The raw identifier from a request path or body
        max_length: Maximum allowed identifier length

    Returns:
        A safe identifier string
    """
    if not value:
        return "unknown"

    # Remove control characters and newlines (prevent log injection)
    safe_value = re.sub(r"[\x00-\x1f\x7f-\x9f\n\r]", "", value)

    if len(safe_value) > max_length:
        safe_value = safe_value[:max_length]

    return safe_value or "unknown"
