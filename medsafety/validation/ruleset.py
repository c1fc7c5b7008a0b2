"""Default prescription safety ruleset."""

from __future__ import annotations

from .categories import (
    beers_criteria_rule,
    breastfeeding_rule,
    geriatric_high_dose_rule,
    hepatic_dose_adjustment_rule,
    hepatic_dose_limit_rule,
    medical_condition_rule,
    pediatric_contraindication_rule,
    polypharmacy_rule,
    pregnancy_contraindicated_rule,
    pregnancy_risk_rule,
    renal_contraindication_rule,
    renal_dose_adjustment_rule,
    reye_syndrome_rule,
    route_mismatch_rule,
    weight_based_dosing_rule,
)
from .registry import RuleRegistry


def register_default_rules(registry: RuleRegistry) -> None:
    """Register all default safety rules.

    Line-item rules run for every item in this order:
    1. Age (pediatric, then geriatric)
    2. Renal and hepatic function
    3. Pregnancy and breastfeeding
    4. Weight-based dosing
    5. Medical conditions
    6. Route and dosage form

    Prescription-level rules run once after all items.
    """
    registry.extend(
        [
            # Age
            pediatric_contraindication_rule,
            reye_syndrome_rule,
            beers_criteria_rule,
            geriatric_high_dose_rule,

            # Renal function
            renal_dose_adjustment_rule,
            renal_contraindication_rule,

            # Hepatic function
            hepatic_dose_adjustment_rule,
            hepatic_dose_limit_rule,

            # Pregnancy & lactation
            pregnancy_contraindicated_rule,
            pregnancy_risk_rule,
            breastfeeding_rule,

            # Weight-based dosing
            weight_based_dosing_rule,

            # Comorbidities
            medical_condition_rule,

            # Route & form
            route_mismatch_rule,
        ]
    )

    registry.register_prescription_rule(polypharmacy_rule)


__all__ = ["register_default_rules"]
