"""Core prescription safety evaluation engine."""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from . import ruleset
from .models import (
    Alert,
    ItemContext,
    PatientFactors,
    Prescription,
    PrescriptionContext,
    Severity,
    ValidationResult,
)
from .registry import RuleRegistry, default_registry
from .thresholds import ClinicalThresholds

logger = logging.getLogger(__name__)

PrescriptionLookup = Callable[[str], Prescription | None]


def not_found_result() -> ValidationResult:
    """Result returned when the prescription id does not resolve."""
    result = ValidationResult()
    result.add_alert(
        Alert(
            type="prescription-not-found",
            severity=Severity.CRITICAL,
            message="Prescription not found",
            recommendation="Verify prescription ID",
        )
    )
    return result


def _apply_override(alert: Alert, overrides: dict[str, dict[str, Any]]) -> Alert | None:
    override = overrides.get(alert.type)
    if not override:
        return alert
    if not override.get("enabled", True):
        return None
    if "severity" in override:
        return replace(alert, severity=Severity(override["severity"]))
    return alert


def evaluate_prescription(
    prescription: Prescription,
    patient: PatientFactors,
    config: dict[str, Any] | None = None,
    thresholds: ClinicalThresholds | None = None,
    registry: RuleRegistry | None = None,
) -> ValidationResult:
    """Evaluate every line item, then the whole prescription, against the ruleset."""

    config = config or {}
    thresholds = thresholds or ClinicalThresholds()

    if registry is None:
        registry = default_registry
        # ensure default registry is populated
        ruleset.register_default_rules(registry)

    rule_overrides: dict[str, dict[str, Any]] = config.get("rule_overrides", {})
    result = ValidationResult()

    def collect(alerts: list[Alert]) -> None:
        for alert in alerts:
            adjusted = _apply_override(alert, rule_overrides)
            if adjusted is not None:
                result.add_alert(adjusted)

    item_rules = registry.item_rules()
    for line_index, item in enumerate(prescription.items):
        context = ItemContext(
            item=item, patient=patient, thresholds=thresholds, line_index=line_index
        )
        for rule in item_rules:
            collect(rule(context))

    prescription_context = PrescriptionContext(
        prescription=prescription, patient=patient, thresholds=thresholds
    )
    for rule in registry.prescription_rules():
        collect(rule(prescription_context))

    logger.debug(
        f"Prescription {prescription.id}: {len(result.alerts)} alerts, valid={result.is_valid}"
    )
    return result


class PrescriptionValidationService:
    """Validates stored prescriptions by id against patient clinical factors.

    The lookup is the only I/O; the service keeps no state between calls and
    is safe to share across requests.
    """

    def __init__(
        self,
        lookup: PrescriptionLookup,
        config: dict[str, Any] | None = None,
        thresholds: ClinicalThresholds | None = None,
    ) -> None:
        self._lookup = lookup
        self._config = config or {}
        self._thresholds = thresholds or ClinicalThresholds()

    def validate(self, prescription_id: str, patient: PatientFactors) -> ValidationResult:
        prescription = self._lookup(prescription_id)
        if prescription is None:
            logger.info(f"Prescription {prescription_id} not found for validation")
            return not_found_result()

        return evaluate_prescription(
            prescription,
            patient,
            config=self._config,
            thresholds=self._thresholds,
        )
