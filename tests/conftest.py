"""Pytest configuration and fixtures."""

from __future__ import annotations

import atexit
import os
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Set test database path before importing app
_temp_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_temp_db_path = _temp_db.name
_temp_db.close()
os.environ["DB_PATH"] = _temp_db_path

from medsafety.validation.models import (  # noqa: E402
    Drug,
    ItemContext,
    PatientFactors,
    Prescription,
    PrescriptionContext,
    PrescriptionItem,
)
from medsafety.validation.thresholds import ClinicalThresholds  # noqa: E402


def _cleanup_test_db() -> None:
    """Clean up temporary test database file."""
    if os.path.exists(_temp_db_path):
        try:
            os.unlink(_temp_db_path)
        except OSError:
            pass  # File may already be deleted or locked


atexit.register(_cleanup_test_db)


@pytest.fixture(scope="session", autouse=True)
def cleanup_test_db():
    """Pytest fixture to ensure test database cleanup after session."""
    yield
    _cleanup_test_db()


@pytest.fixture
def test_db_path() -> str:
    return _temp_db_path


def make_drug(generic_name: str, **kwargs) -> Drug:
    drug_id = kwargs.pop("id", f"drug-{generic_name.replace(' ', '-')}")
    return Drug(id=drug_id, generic_name=generic_name, **kwargs)


def make_item(generic_name: str, instructions: str = "", **drug_kwargs) -> PrescriptionItem:
    return PrescriptionItem(drug=make_drug(generic_name, **drug_kwargs), dosage_instructions=instructions)


def make_context(
    generic_name: str,
    instructions: str = "",
    patient: PatientFactors | None = None,
    **drug_kwargs,
) -> ItemContext:
    return ItemContext(
        item=make_item(generic_name, instructions, **drug_kwargs),
        patient=patient or PatientFactors(age=40),
        thresholds=ClinicalThresholds(),
    )


def make_prescription_context(
    item_count: int, patient: PatientFactors
) -> PrescriptionContext:
    items = tuple(make_item(f"drug {i}") for i in range(item_count))
    return PrescriptionContext(
        prescription=Prescription(id="rx-ctx", items=items),
        patient=patient,
        thresholds=ClinicalThresholds(),
    )


@pytest.fixture
def item_context() -> Callable[..., ItemContext]:
    """Factory for single line-item rule contexts."""
    return make_context


@pytest.fixture
def adult() -> PatientFactors:
    """A healthy adult with no flagged clinical factors."""
    return PatientFactors(age=40)


@pytest.fixture
def elderly_prescription() -> Prescription:
    """Six-item prescription for exercising geriatric and polypharmacy rules."""
    return Prescription(
        id="rx-elderly",
        prescription_number="RX-0001",
        patient_id="patient-1",
        items=(
            make_item("zolpidem tartrate", "5 mg at bedtime", controlled_substance_schedule="CIV"),
            make_item("morphine sulfate", "60 mg every 12 hours"),
            make_item("lisinopril", "10 mg once daily"),
            make_item("atorvastatin calcium", "20 mg once daily"),
            make_item("omeprazole", "20 mg once daily"),
            make_item("sertraline", "50 mg once daily"),
        ),
    )


@pytest.fixture
def acetaminophen_prescription() -> Prescription:
    return Prescription(
        id="rx-apap",
        items=(make_item("acetaminophen", "650 mg every 6 hours"),),
    )
