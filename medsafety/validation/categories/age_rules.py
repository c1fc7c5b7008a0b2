"""Age-appropriateness rules (pediatric and geriatric)."""

from __future__ import annotations

from medsafety.validation.dosage import extract_dose_amount
from medsafety.validation.models import Alert, ItemContext, Severity
from medsafety.validation.tables import (
    ASPIRIN,
    BEERS_CRITERIA,
    MORPHINE,
    PEDIATRIC_CONTRAINDICATION_TERMS,
    matches_any,
)


def pediatric_contraindication_rule(context: ItemContext) -> list[Alert]:
    """Flag drugs whose contraindications exclude pediatric patients."""
    if not context.thresholds.is_pediatric(context.patient.age):
        return []

    drug = context.drug
    if not any(
        matches_any(ci, PEDIATRIC_CONTRAINDICATION_TERMS) for ci in drug.contraindications
    ):
        return []

    return [
        Alert(
            type="pediatric-contraindication",
            severity=Severity.CRITICAL,
            message=f"{drug.generic_name} is contraindicated in pediatric patients",
            recommendation="Contact prescriber for alternative therapy",
            metadata={"category": "age", "line_index": context.line_index},
        )
    ]


def reye_syndrome_rule(context: ItemContext) -> list[Alert]:
    """Flag aspirin in children under two (Reye syndrome)."""
    age = context.patient.age
    if not context.thresholds.is_pediatric(age) or age >= context.thresholds.infant_age:
        return []
    if not matches_any(context.drug.generic_name, ASPIRIN):
        return []

    return [
        Alert(
            type="reye-syndrome-risk",
            severity=Severity.CRITICAL,
            message="Aspirin use in children under 2 years increases Reye syndrome risk",
            recommendation="Do not dispense. Contact prescriber immediately.",
            metadata={"category": "age", "line_index": context.line_index},
        )
    ]


def beers_criteria_rule(context: ItemContext) -> list[Alert]:
    """Flag Beers Criteria medications for elderly patients."""
    if not context.thresholds.is_geriatric(context.patient.age):
        return []

    drug = context.drug
    if not matches_any(drug.generic_name, BEERS_CRITERIA):
        return []

    return [
        Alert(
            type="beers-criteria",
            severity=Severity.MAJOR,
            message=(
                f"{drug.generic_name} is potentially inappropriate for elderly "
                "patients (Beers Criteria)"
            ),
            recommendation="Consider alternative therapy or reduced dosing",
            metadata={"category": "age", "line_index": context.line_index},
        )
    ]


def geriatric_high_dose_rule(context: ItemContext) -> list[Alert]:
    """Flag high-dose morphine for elderly patients."""
    thresholds = context.thresholds
    if not thresholds.is_geriatric(context.patient.age):
        return []
    if not matches_any(context.drug.generic_name, MORPHINE):
        return []

    dose = extract_dose_amount(context.item.dosage_instructions)
    if dose <= thresholds.geriatric_opioid_max_mg:
        return []

    return [
        Alert(
            type="geriatric-high-dose",
            severity=Severity.MAJOR,
            message="High-dose opioid in elderly patient",
            recommendation="Verify dose appropriateness with prescriber",
            metadata={
                "category": "age",
                "line_index": context.line_index,
                "dose_mg": dose,
                "limit_mg": thresholds.geriatric_opioid_max_mg,
            },
        )
    ]
