#!/usr/bin/env python3
"""
Pharmacy Demo Data Seeder

Loads a small drug catalog and a few prescriptions that exercise the
safety rules (elderly polypharmacy, renal impairment, hepatic acetaminophen
ceiling, IV route mismatch).

Usage:
    python scripts/seed_pharmacy.py [--db-path ./data/pharmacy.db]
"""

import argparse
import logging
from contextlib import closing

from medsafety.config import get_db_path
from medsafety.repository import get_connection, init_db, save_prescription
from medsafety.validation.models import Drug, Prescription, PrescriptionItem

logger = logging.getLogger(__name__)

DRUGS = {
    "atorvastatin": Drug(
        id="drug-atorvastatin",
        generic_name="atorvastatin calcium",
        brand_name="Lipitor",
        route="oral",
        contraindications=("active liver disease", "pregnancy"),
        side_effects="Muscle pain, liver enzyme elevation",
    ),
    "metformin": Drug(
        id="drug-metformin",
        generic_name="metformin hydrochloride",
        brand_name="Glucophage",
        side_effects="Nausea, diarrhea",
    ),
    "acetaminophen": Drug(
        id="drug-acetaminophen",
        generic_name="acetaminophen",
        brand_name="Tylenol",
    ),
    "morphine": Drug(
        id="drug-morphine",
        generic_name="morphine sulfate",
        controlled_substance_schedule="CII",
        side_effects="Constipation, drowsiness, respiratory depression",
    ),
    "vancomycin": Drug(
        id="drug-vancomycin",
        generic_name="vancomycin",
        route="IV",
        is_refrigerated=True,
    ),
    "zolpidem": Drug(
        id="drug-zolpidem",
        generic_name="zolpidem tartrate",
        brand_name="Ambien",
        controlled_substance_schedule="CIV",
    ),
    "lisinopril": Drug(id="drug-lisinopril", generic_name="lisinopril"),
    "ibuprofen": Drug(id="drug-ibuprofen", generic_name="ibuprofen"),
}


def build_prescriptions() -> list[Prescription]:
    return [
        Prescription(
            id="rx-demo-elderly",
            prescription_number="RX-2024-000001",
            patient_id="patient-elderly",
            requires_counseling=True,
            items=(
                PrescriptionItem(DRUGS["zolpidem"], "5 mg by mouth at bedtime", 30),
                PrescriptionItem(DRUGS["morphine"], "60 mg by mouth every 12 hours", 14),
                PrescriptionItem(DRUGS["metformin"], "500 mg by mouth 2 times per day", 30),
                PrescriptionItem(DRUGS["lisinopril"], "10 mg by mouth once daily", 30),
                PrescriptionItem(DRUGS["atorvastatin"], "20 mg by mouth once daily", 30),
                PrescriptionItem(DRUGS["ibuprofen"], "400 mg by mouth every 8 hours", 7),
            ),
        ),
        Prescription(
            id="rx-demo-hepatic",
            prescription_number="RX-2024-000002",
            patient_id="patient-hepatic",
            items=(
                PrescriptionItem(DRUGS["acetaminophen"], "650 mg every 6 hours", 10),
            ),
        ),
        Prescription(
            id="rx-demo-route",
            prescription_number="RX-2024-000003",
            patient_id="patient-inpatient",
            items=(
                PrescriptionItem(DRUGS["vancomycin"], "125 mg oral every 6 hours", 10),
            ),
        ),
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo pharmacy data")
    parser.add_argument("--db-path", default=get_db_path(), help="SQLite database path")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    init_db(args.db_path)
    prescriptions = build_prescriptions()
    with closing(get_connection(args.db_path)) as conn:
        for prescription in prescriptions:
            save_prescription(conn, prescription)

    logger.info(f"Seeded {len(prescriptions)} prescriptions into {args.db_path}")


if __name__ == "__main__":
    main()
