"""Prescription safety rules organized by category."""

from __future__ import annotations

from .age_rules import (
    beers_criteria_rule,
    geriatric_high_dose_rule,
    pediatric_contraindication_rule,
    reye_syndrome_rule,
)
from .condition_rules import medical_condition_rule
from .hepatic_rules import hepatic_dose_adjustment_rule, hepatic_dose_limit_rule
from .pregnancy_rules import (
    breastfeeding_rule,
    pregnancy_contraindicated_rule,
    pregnancy_risk_rule,
)
from .prescription_rules import polypharmacy_rule
from .renal_rules import renal_contraindication_rule, renal_dose_adjustment_rule
from .route_rules import route_mismatch_rule
from .weight_rules import weight_based_dosing_rule

__all__ = [
    # Age rules
    "pediatric_contraindication_rule",
    "reye_syndrome_rule",
    "beers_criteria_rule",
    "geriatric_high_dose_rule",
    # Renal rules
    "renal_dose_adjustment_rule",
    "renal_contraindication_rule",
    # Hepatic rules
    "hepatic_dose_adjustment_rule",
    "hepatic_dose_limit_rule",
    # Pregnancy and lactation rules
    "pregnancy_contraindicated_rule",
    "pregnancy_risk_rule",
    "breastfeeding_rule",
    # Weight rules
    "weight_based_dosing_rule",
    # Condition rules
    "medical_condition_rule",
    # Route rules
    "route_mismatch_rule",
    # Prescription-level rules
    "polypharmacy_rule",
]
