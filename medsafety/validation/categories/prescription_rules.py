"""Prescription-level rules evaluated once over all line items."""

from __future__ import annotations

from medsafety.validation.models import Alert, PrescriptionContext, Severity


def polypharmacy_rule(context: PrescriptionContext) -> list[Alert]:
    """Flag elderly patients on more medications than the polypharmacy threshold."""
    thresholds = context.thresholds
    item_count = len(context.prescription.items)

    if not thresholds.is_geriatric(context.patient.age):
        return []
    if item_count <= thresholds.polypharmacy_item_count:
        return []

    return [
        Alert(
            type="polypharmacy",
            severity=Severity.MODERATE,
            message=f"Multiple medications ({item_count}) in elderly patient",
            recommendation="Review for potential drug interactions and medication optimization",
            metadata={"category": "prescription", "item_count": item_count},
        )
    ]
