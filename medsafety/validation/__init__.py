"""Prescription safety validation engine."""

from .engine import PrescriptionValidationService, evaluate_prescription, not_found_result
from .models import (
    Alert,
    Drug,
    PatientFactors,
    Prescription,
    PrescriptionItem,
    Severity,
    ValidationResult,
)
from .thresholds import ClinicalThresholds

__all__ = [
    "evaluate_prescription",
    "not_found_result",
    "PrescriptionValidationService",
    "Alert",
    "Drug",
    "PatientFactors",
    "Prescription",
    "PrescriptionItem",
    "Severity",
    "ValidationResult",
    "ClinicalThresholds",
]
