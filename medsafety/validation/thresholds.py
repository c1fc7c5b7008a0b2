"""Clinical threshold configuration for safety rules."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClinicalThresholds:
    pediatric_age: float = 18
    infant_age: float = 2
    geriatric_age: float = 65
    geriatric_opioid_max_mg: float = 30
    hepatic_acetaminophen_max_daily_mg: float = 2000
    enoxaparin_mg_per_kg: float = 1.0
    weight_dose_tolerance: float = 0.2
    polypharmacy_item_count: int = 5

    def is_pediatric(self, age: float) -> bool:
        return age < self.pediatric_age

    def is_geriatric(self, age: float) -> bool:
        return age >= self.geriatric_age
