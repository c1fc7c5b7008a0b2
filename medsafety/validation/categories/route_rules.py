"""Dosage form and route rules."""

from __future__ import annotations

from medsafety.validation.models import Alert, ItemContext, Severity

INTRAVENOUS_ROUTE = "IV"
ORAL_TERM = "oral"


def route_mismatch_rule(context: ItemContext) -> list[Alert]:
    """Flag IV-only drugs whose instructions call for oral administration."""
    drug = context.drug
    route = (drug.route or "").strip()
    if route.upper() != INTRAVENOUS_ROUTE:
        return []

    instructions = (context.item.dosage_instructions or "").lower()
    if ORAL_TERM not in instructions:
        return []

    return [
        Alert(
            type="route-mismatch",
            severity=Severity.CRITICAL,
            message=(
                f"Route mismatch: {drug.generic_name} is formulated for {route} "
                "but prescribed for oral use"
            ),
            recommendation="Verify intended route with prescriber",
            metadata={"category": "route", "line_index": context.line_index},
        )
    ]
