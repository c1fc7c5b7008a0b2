"""Hepatic function dosing rules."""

from __future__ import annotations

from medsafety.validation.dosage import format_amount, parse_dosage
from medsafety.validation.escalation import hepatic_adjustment_severity, is_impaired
from medsafety.validation.models import Alert, ItemContext, Severity
from medsafety.validation.tables import ACETAMINOPHEN, HEPATIC_ADJUSTMENT, matches_any


def hepatic_dose_adjustment_rule(context: ItemContext) -> list[Alert]:
    """Flag hepatically metabolized drugs when hepatic function is impaired."""
    hepatic_function = context.patient.hepatic_function
    if not is_impaired(hepatic_function):
        return []

    drug = context.drug
    if not matches_any(drug.generic_name, HEPATIC_ADJUSTMENT):
        return []

    return [
        Alert(
            type="hepatic-dose-adjustment",
            severity=hepatic_adjustment_severity(hepatic_function),
            message=(
                f"{drug.generic_name} requires dose adjustment in "
                f"{hepatic_function} hepatic impairment"
            ),
            recommendation="Verify dose is appropriate for hepatic function",
            metadata={
                "category": "hepatic",
                "line_index": context.line_index,
                "hepatic_function": hepatic_function,
            },
        )
    ]


def hepatic_dose_limit_rule(context: ItemContext) -> list[Alert]:
    """Check acetaminophen total daily dose against the hepatic ceiling."""
    if not is_impaired(context.patient.hepatic_function):
        return []
    if not matches_any(context.drug.generic_name, ACETAMINOPHEN):
        return []

    limit = context.thresholds.hepatic_acetaminophen_max_daily_mg
    daily_dose = parse_dosage(context.item.dosage_instructions).daily_dose_mg
    if daily_dose <= limit:
        return []

    return [
        Alert(
            type="hepatic-dose-limit",
            severity=Severity.CRITICAL,
            message=(
                f"Acetaminophen daily dose ({format_amount(daily_dose)}mg) exceeds safe limit "
                f"for hepatic impairment ({format_amount(limit)}mg)"
            ),
            recommendation="Reduce dose or contact prescriber",
            metadata={
                "category": "hepatic",
                "line_index": context.line_index,
                "daily_dose_mg": daily_dose,
                "limit_mg": limit,
            },
        )
    ]
