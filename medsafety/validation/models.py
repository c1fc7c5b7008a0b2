"""Data models for the prescription safety validator."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from .thresholds import ClinicalThresholds


class Severity(str, Enum):
    """Alert severity grades, ordered from least to most severe."""

    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.MINOR: 0,
    Severity.MODERATE: 1,
    Severity.MAJOR: 2,
    Severity.CRITICAL: 3,
}

RenalFunction = Literal["normal", "mild", "moderate", "severe", "dialysis"]
HepaticFunction = Literal["normal", "mild", "moderate", "severe"]


@dataclass(frozen=True)
class Drug:
    """Reference data for a single drug product."""

    id: str
    generic_name: str
    brand_name: str | None = None
    route: str = "oral"
    contraindications: tuple[str, ...] = ()
    side_effects: str | None = None
    controlled_substance_schedule: str = "non-controlled"
    is_refrigerated: bool = False
    is_hazardous: bool = False

    @property
    def is_controlled(self) -> bool:
        return self.controlled_substance_schedule != "non-controlled"


@dataclass(frozen=True)
class PrescriptionItem:
    drug: Drug
    dosage_instructions: str = ""
    day_supply: int | None = None
    quantity: float | None = None


@dataclass(frozen=True)
class Prescription:
    id: str
    items: tuple[PrescriptionItem, ...] = ()
    prescription_number: str | None = None
    patient_id: str | None = None
    requires_counseling: bool = False


@dataclass(frozen=True)
class PatientFactors:
    """Clinical profile of the patient a prescription is validated against."""

    age: float
    weight: float | None = None  # kg
    height: float | None = None  # cm
    renal_function: RenalFunction | None = None
    hepatic_function: HepaticFunction | None = None
    pregnancy: bool = False
    breastfeeding: bool = False
    allergies: tuple[str, ...] = ()
    medical_conditions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Alert:
    """A single graded finding produced by a rule."""

    type: str
    severity: Severity
    message: str
    recommendation: str
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type,
            "severity": self.severity.value,
            "message": self.message,
            "recommendation": self.recommendation,
        }


@dataclass
class ValidationResult:
    """Ordered alerts for one prescription plus the derived validity."""

    alerts: list[Alert] = field(default_factory=list)

    def add_alert(self, alert: Alert) -> None:
        self.alerts.append(alert)

    @property
    def is_valid(self) -> bool:
        return not any(alert.severity is Severity.CRITICAL for alert in self.alerts)

    @property
    def highest_severity(self) -> Severity | None:
        if not self.alerts:
            return None
        return max((alert.severity for alert in self.alerts), key=lambda s: s.rank)

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "alerts": [alert.to_dict() for alert in self.alerts],
        }


@dataclass(frozen=True)
class ItemContext:
    """Inputs required to evaluate line-item rules."""

    item: PrescriptionItem
    patient: PatientFactors
    thresholds: ClinicalThresholds
    line_index: int = 0

    @property
    def drug(self) -> Drug:
        return self.item.drug


@dataclass(frozen=True)
class PrescriptionContext:
    """Inputs required to evaluate prescription-level rules."""

    prescription: Prescription
    patient: PatientFactors
    thresholds: ClinicalThresholds
