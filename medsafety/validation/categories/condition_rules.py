"""Comorbidity contraindication rules.

Conditions are free text entered per patient. Each condition is checked in
order against every comorbidity below, so alerts follow the order of the
patient's condition list and a drug can be flagged once per matching
condition.
"""

from __future__ import annotations

from collections.abc import Callable

from medsafety.validation.models import Alert, Drug, ItemContext, Severity
from medsafety.validation.tables import (
    DIABETES_CONDITIONS,
    GLUCOSE_RAISING,
    HEART_FAILURE_CONDITIONS,
    HEART_FAILURE_WORSENING,
    RESPIRATORY_CONDITIONS,
    RESPIRATORY_WORSENING,
    matches_any,
)

ConditionCheck = Callable[[str, Drug, int], list[Alert]]


def _heart_failure_check(condition: str, drug: Drug, line_index: int) -> list[Alert]:
    if not matches_any(condition, HEART_FAILURE_CONDITIONS):
        return []
    if not matches_any(drug.generic_name, HEART_FAILURE_WORSENING):
        return []
    return [
        Alert(
            type="heart-failure-contraindication",
            severity=Severity.MAJOR,
            message=f"{drug.generic_name} may worsen heart failure",
            recommendation="Consider alternative therapy",
            metadata={"category": "condition", "line_index": line_index, "condition": condition},
        )
    ]


def _respiratory_check(condition: str, drug: Drug, line_index: int) -> list[Alert]:
    if not matches_any(condition, RESPIRATORY_CONDITIONS):
        return []
    if not matches_any(drug.generic_name, RESPIRATORY_WORSENING):
        return []
    return [
        Alert(
            type="respiratory-contraindication",
            severity=Severity.MAJOR,
            message=f"{drug.generic_name} may worsen respiratory condition",
            recommendation="Verify appropriateness with prescriber",
            metadata={"category": "condition", "line_index": line_index, "condition": condition},
        )
    ]


def _diabetes_check(condition: str, drug: Drug, line_index: int) -> list[Alert]:
    if not matches_any(condition, DIABETES_CONDITIONS):
        return []
    if not matches_any(drug.generic_name, GLUCOSE_RAISING):
        return []
    return [
        Alert(
            type="diabetes-monitoring",
            severity=Severity.MODERATE,
            message=f"{drug.generic_name} may affect blood glucose control",
            recommendation="Counsel patient to monitor blood glucose closely",
            metadata={"category": "condition", "line_index": line_index, "condition": condition},
        )
    ]


CONDITION_CHECKS: tuple[ConditionCheck, ...] = (
    _heart_failure_check,
    _respiratory_check,
    _diabetes_check,
)


def medical_condition_rule(context: ItemContext) -> list[Alert]:
    """Check the drug against the patient's documented medical conditions."""
    alerts: list[Alert] = []
    for condition in context.patient.medical_conditions:
        for check in CONDITION_CHECKS:
            alerts.extend(check(condition, context.drug, context.line_index))
    return alerts
