"""SQLite persistence for drugs and prescriptions.

Only what the safety endpoints need is stored: drug reference data, the
prescription header and its ordered line items.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

from medsafety.validation.models import Drug, Prescription, PrescriptionItem

logger = logging.getLogger(__name__)


def get_connection(db_path: str) -> sqlite3.Connection:
    return sqlite3.connect(db_path, check_same_thread=False)


def init_db(db_path: str) -> None:
    """Initialize SQLite database."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS drugs (
                id TEXT PRIMARY KEY,
                generic_name TEXT NOT NULL,
                brand_name TEXT,
                route TEXT DEFAULT 'oral',
                contraindications TEXT,
                side_effects TEXT,
                controlled_substance_schedule TEXT DEFAULT 'non-controlled',
                is_refrigerated INTEGER DEFAULT 0,
                is_hazardous INTEGER DEFAULT 0
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS prescriptions (
                id TEXT PRIMARY KEY,
                prescription_number TEXT,
                patient_id TEXT,
                requires_counseling INTEGER DEFAULT 0,
                created_at TEXT
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS prescription_items (
                id TEXT PRIMARY KEY,
                prescription_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                drug_id TEXT NOT NULL,
                dosage_instructions TEXT,
                day_supply INTEGER,
                quantity REAL,
                FOREIGN KEY (prescription_id) REFERENCES prescriptions(id),
                FOREIGN KEY (drug_id) REFERENCES drugs(id)
            )
        """)

        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_items_prescription "
            "ON prescription_items(prescription_id, position)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_prescriptions_patient ON prescriptions(patient_id)"
        )

        conn.commit()


def save_drug(conn: sqlite3.Connection, drug: Drug) -> None:
    conn.execute(
        """
        INSERT OR REPLACE INTO drugs (
            id, generic_name, brand_name, route, contraindications,
            side_effects, controlled_substance_schedule, is_refrigerated, is_hazardous
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            drug.id,
            drug.generic_name,
            drug.brand_name,
            drug.route,
            json.dumps(list(drug.contraindications)),
            drug.side_effects,
            drug.controlled_substance_schedule,
            int(drug.is_refrigerated),
            int(drug.is_hazardous),
        ),
    )
    conn.commit()


def save_prescription(conn: sqlite3.Connection, prescription: Prescription) -> None:
    """Store a prescription and replace its line items, saving referenced drugs."""
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT OR REPLACE INTO prescriptions (
            id, prescription_number, patient_id, requires_counseling, created_at
        ) VALUES (?, ?, ?, ?, ?)
        """,
        (
            prescription.id,
            prescription.prescription_number,
            prescription.patient_id,
            int(prescription.requires_counseling),
            datetime.now(timezone.utc).isoformat(),
        ),
    )
    cursor.execute(
        "DELETE FROM prescription_items WHERE prescription_id = ?", (prescription.id,)
    )

    for position, item in enumerate(prescription.items):
        save_drug(conn, item.drug)
        cursor.execute(
            """
            INSERT INTO prescription_items (
                id, prescription_id, position, drug_id,
                dosage_instructions, day_supply, quantity
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                str(uuid.uuid4()),
                prescription.id,
                position,
                item.drug.id,
                item.dosage_instructions,
                item.day_supply,
                item.quantity,
            ),
        )

    conn.commit()


def _load_contraindications(data: str | None) -> tuple[str, ...]:
    if not data:
        return ()
    try:
        values = json.loads(data)
    except json.JSONDecodeError:
        logger.warning(f"Failed to parse contraindications: {data[:100]}...")
        return ()
    return tuple(str(v) for v in values) if isinstance(values, list) else ()


def get_prescription(conn: sqlite3.Connection, prescription_id: str) -> Prescription | None:
    """Load a prescription with its items and each item's drug, or None."""
    cursor = conn.cursor()
    cursor.execute(
        """
        SELECT id, prescription_number, patient_id, requires_counseling
        FROM prescriptions WHERE id = ?
        """,
        (prescription_id,),
    )
    row = cursor.fetchone()
    if not row:
        return None

    cursor.execute(
        """
        SELECT i.dosage_instructions, i.day_supply, i.quantity,
               d.id, d.generic_name, d.brand_name, d.route, d.contraindications,
               d.side_effects, d.controlled_substance_schedule,
               d.is_refrigerated, d.is_hazardous
        FROM prescription_items i
        JOIN drugs d ON d.id = i.drug_id
        WHERE i.prescription_id = ?
        ORDER BY i.position
        """,
        (prescription_id,),
    )

    items = []
    for item_row in cursor.fetchall():
        drug = Drug(
            id=item_row[3],
            generic_name=item_row[4],
            brand_name=item_row[5],
            route=item_row[6] or "oral",
            contraindications=_load_contraindications(item_row[7]),
            side_effects=item_row[8],
            controlled_substance_schedule=item_row[9] or "non-controlled",
            is_refrigerated=bool(item_row[10]),
            is_hazardous=bool(item_row[11]),
        )
        items.append(
            PrescriptionItem(
                drug=drug,
                dosage_instructions=item_row[0] or "",
                day_supply=item_row[1],
                quantity=item_row[2],
            )
        )

    return Prescription(
        id=row[0],
        prescription_number=row[1],
        patient_id=row[2],
        requires_counseling=bool(row[3]),
        items=tuple(items),
    )
