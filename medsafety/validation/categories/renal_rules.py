"""Renal function dosing rules."""

from __future__ import annotations

from medsafety.validation.escalation import (
    is_impaired,
    renal_adjustment_severity,
    renal_escalates,
)
from medsafety.validation.models import Alert, ItemContext, Severity
from medsafety.validation.tables import METFORMIN, RENAL_ADJUSTMENT, matches_any


def renal_dose_adjustment_rule(context: ItemContext) -> list[Alert]:
    """Flag renally cleared drugs when renal function is impaired."""
    renal_function = context.patient.renal_function
    if not is_impaired(renal_function):
        return []

    drug = context.drug
    if not matches_any(drug.generic_name, RENAL_ADJUSTMENT):
        return []

    return [
        Alert(
            type="renal-dose-adjustment",
            severity=renal_adjustment_severity(renal_function),
            message=(
                f"{drug.generic_name} requires dose adjustment in "
                f"{renal_function} renal impairment"
            ),
            recommendation="Verify dose is appropriate for renal function",
            metadata={
                "category": "renal",
                "line_index": context.line_index,
                "renal_function": renal_function,
            },
        )
    ]


def renal_contraindication_rule(context: ItemContext) -> list[Alert]:
    """Flag metformin in severe renal impairment or dialysis."""
    renal_function = context.patient.renal_function
    if not renal_escalates(renal_function):
        return []
    if not matches_any(context.drug.generic_name, METFORMIN):
        return []

    return [
        Alert(
            type="renal-contraindication",
            severity=Severity.CRITICAL,
            message="Metformin is contraindicated in severe renal impairment",
            recommendation="Do not dispense. Contact prescriber for alternative.",
            metadata={
                "category": "renal",
                "line_index": context.line_index,
                "renal_function": renal_function,
            },
        )
    ]
