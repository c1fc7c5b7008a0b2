"""Severity escalation predicates for organ-function rules."""
from __future__ import annotations

from .models import Severity

RENAL_ESCALATION_LEVELS = frozenset({"severe", "dialysis"})
HEPATIC_ESCALATION_LEVELS = frozenset({"severe"})


def is_impaired(function_level: str | None) -> bool:
    """True when an organ function level is given and is not normal."""
    return bool(function_level) and function_level != "normal"


def renal_escalates(renal_function: str | None) -> bool:
    return renal_function in RENAL_ESCALATION_LEVELS


def hepatic_escalates(hepatic_function: str | None) -> bool:
    return hepatic_function in HEPATIC_ESCALATION_LEVELS


def renal_adjustment_severity(renal_function: str | None) -> Severity:
    return Severity.CRITICAL if renal_escalates(renal_function) else Severity.MAJOR


def hepatic_adjustment_severity(hepatic_function: str | None) -> Severity:
    return Severity.CRITICAL if hepatic_escalates(hepatic_function) else Severity.MAJOR
