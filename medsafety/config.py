"""Shared configuration for the medication safety backend.

This module centralizes environment variable access and default values
to prevent drift between modules.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from medsafety.validation.models import Severity

logger = logging.getLogger(__name__)

# Database configuration
DB_PATH = os.getenv("DB_PATH", "./data/pharmacy.db")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Optional JSON file of per-alert-type overrides:
# {"beers-criteria": {"enabled": false}, "polypharmacy": {"severity": "major"}}
RULE_OVERRIDES_PATH = os.getenv("RULE_OVERRIDES_PATH")

# Audit listing cap
AUDIT_MAX_LIST_ROWS = int(os.getenv("AUDIT_MAX_LIST_ROWS", "1000"))

# Rate limit for validation requests
VALIDATION_RATE_LIMIT = os.getenv("VALIDATION_RATE_LIMIT", "120/minute")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]


def get_db_path() -> str:
    """Resolve the database path at call time so tests can repoint it."""
    return os.environ.get("DB_PATH", DB_PATH)


def load_rule_overrides(path: str | None = None) -> dict[str, dict[str, Any]]:
    """Load per-alert-type overrides, dropping entries that cannot be applied."""
    path = path or RULE_OVERRIDES_PATH
    if not path:
        return {}

    try:
        with open(path) as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring rule overrides from {path}: {e}")
        return {}

    if not isinstance(raw, dict):
        logger.warning(f"Ignoring rule overrides from {path}: expected a JSON object")
        return {}

    valid_severities = {s.value for s in Severity}
    overrides: dict[str, dict[str, Any]] = {}
    for alert_type, override in raw.items():
        if not isinstance(override, dict):
            logger.warning(f"Skipping override for {alert_type}: not an object")
            continue
        if "severity" in override and override["severity"] not in valid_severities:
            logger.warning(
                f"Skipping override for {alert_type}: unknown severity {override['severity']!r}"
            )
            continue
        if "enabled" in override and not isinstance(override["enabled"], bool):
            logger.warning(
                f"Skipping override for {alert_type}: enabled must be true or false, "
                f"got {override['enabled']!r}"
            )
            continue
        overrides[alert_type] = override

    logger.info(f"Loaded {len(overrides)} rule overrides from {path}")
    return overrides
