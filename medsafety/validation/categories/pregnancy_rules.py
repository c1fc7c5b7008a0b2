"""Pregnancy and lactation safety rules."""

from __future__ import annotations

from medsafety.validation.models import Alert, ItemContext, Severity
from medsafety.validation.tables import (
    LACTATION_CONTRAINDICATED,
    PREGNANCY_CATEGORY_D,
    PREGNANCY_CATEGORY_X,
    matches_any,
)


def pregnancy_contraindicated_rule(context: ItemContext) -> list[Alert]:
    """Flag pregnancy category X drugs."""
    if not context.patient.pregnancy:
        return []

    drug = context.drug
    if not matches_any(drug.generic_name, PREGNANCY_CATEGORY_X):
        return []

    return [
        Alert(
            type="pregnancy-contraindicated",
            severity=Severity.CRITICAL,
            message=f"{drug.generic_name} is contraindicated in pregnancy",
            recommendation="Do not dispense. Contact prescriber immediately for alternative.",
            metadata={"category": "pregnancy", "line_index": context.line_index},
        )
    ]


def pregnancy_risk_rule(context: ItemContext) -> list[Alert]:
    """Flag pregnancy category D drugs."""
    if not context.patient.pregnancy:
        return []

    drug = context.drug
    if not matches_any(drug.generic_name, PREGNANCY_CATEGORY_D):
        return []

    return [
        Alert(
            type="pregnancy-risk",
            severity=Severity.MAJOR,
            message=f"{drug.generic_name} has known pregnancy risks",
            recommendation="Verify risk/benefit assessment with prescriber",
            metadata={"category": "pregnancy", "line_index": context.line_index},
        )
    ]


def breastfeeding_rule(context: ItemContext) -> list[Alert]:
    """Flag drugs not recommended during breastfeeding."""
    if not context.patient.breastfeeding:
        return []

    drug = context.drug
    if not matches_any(drug.generic_name, LACTATION_CONTRAINDICATED):
        return []

    return [
        Alert(
            type="breastfeeding-contraindicated",
            severity=Severity.MAJOR,
            message=f"{drug.generic_name} is not recommended during breastfeeding",
            recommendation=(
                "Discuss alternatives with prescriber or temporary cessation "
                "of breastfeeding"
            ),
            metadata={"category": "breastfeeding", "line_index": context.line_index},
        )
    ]
