"""Weight-based dosing rules."""

from __future__ import annotations

from medsafety.validation.dosage import extract_dose_amount, format_amount
from medsafety.validation.models import Alert, ItemContext, Severity
from medsafety.validation.tables import ENOXAPARIN, matches_any


def weight_based_dosing_rule(context: ItemContext) -> list[Alert]:
    """Compare enoxaparin dose against the 1 mg/kg treatment dose.

    An unparseable dose reads as 0 mg and therefore always deviates.
    """
    weight = context.patient.weight
    if not weight:
        return []

    drug = context.drug
    if not matches_any(drug.generic_name, ENOXAPARIN):
        return []

    thresholds = context.thresholds
    dose = extract_dose_amount(context.item.dosage_instructions)
    expected_dose = weight * thresholds.enoxaparin_mg_per_kg
    if abs(dose - expected_dose) <= expected_dose * thresholds.weight_dose_tolerance:
        return []

    return [
        Alert(
            type="weight-based-dosing",
            severity=Severity.MAJOR,
            message=(
                f"Enoxaparin dose ({format_amount(dose)}mg) may not be appropriate for weight "
                f"({format_amount(weight)}kg, expected ~{format_amount(expected_dose)}mg)"
            ),
            recommendation="Verify weight-based dosing calculation",
            metadata={
                "category": "weight",
                "line_index": context.line_index,
                "dose_mg": dose,
                "expected_dose_mg": expected_dose,
            },
        )
    ]
