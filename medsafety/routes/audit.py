"""Audit logging for pharmacy safety checks.

Every prescription validation and counseling lookup is recorded with the
prescription id and outcome. The router exposes a filtered, paginated
listing of the entries.

Access to audit logs should be restricted to authorized pharmacy staff.
"""

from __future__ import annotations

import json
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from medsafety.config import AUDIT_MAX_LIST_ROWS, get_db_path

router = APIRouter(prefix="/api/audit", tags=["audit"])

# Thread-safe initialization flag with lock
_audit_table_initialized = False
_audit_table_lock = threading.Lock()


class AuditAction(str, Enum):
    """Types of auditable actions."""

    PRESCRIPTION_VALIDATE = "prescription.validate"
    COUNSELING_TOPICS_VIEW = "counseling.topics_view"


class AuditLogEntry(BaseModel):
    """Single audit log entry."""

    id: str
    timestamp: str
    action: str
    user_id: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    details: dict[str, Any] | None = None
    ip_address: str | None = None
    status: str = "success"
    error_message: str | None = None


class AuditLogListResponse(BaseModel):
    """Response for audit log listing."""

    entries: list[AuditLogEntry]
    total: int
    limit: int
    offset: int
    filters_applied: dict[str, Any]


def get_db() -> sqlite3.Connection:
    """Get database connection."""
    return sqlite3.connect(get_db_path(), check_same_thread=False)


def init_audit_table(conn: sqlite3.Connection) -> None:
    """Initialize the audit_logs table if it doesn't exist.

    Uses a module-level flag with thread lock to skip the schema check after
    the first successful initialization.
    """
    global _audit_table_initialized

    if _audit_table_initialized:
        return

    with _audit_table_lock:
        if _audit_table_initialized:
            return

        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS audit_logs (
                id TEXT PRIMARY KEY,
                timestamp TEXT NOT NULL,
                action TEXT NOT NULL,
                user_id TEXT,
                resource_type TEXT,
                resource_id TEXT,
                details TEXT,
                ip_address TEXT,
                status TEXT DEFAULT 'success',
                error_message TEXT
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_audit_timestamp ON audit_logs(timestamp)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_audit_action_time ON audit_logs(action, timestamp)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_audit_resource ON audit_logs(resource_type, resource_id)"
        )

        conn.commit()
        _audit_table_initialized = True


def log_audit_event(
    conn: sqlite3.Connection,
    action: str,
    user_id: str | None = None,
    resource_type: str | None = None,
    resource_id: str | None = None,
    details: dict[str, Any] | None = None,
    ip_address: str | None = None,
    status: str = "success",
    error_message: str | None = None,
) -> str:
    """Log an audit event to the database.

    Returns the audit log entry ID.
    """
    init_audit_table(conn)

    audit_id = str(uuid.uuid4())
    timestamp = datetime.now(timezone.utc).isoformat()

    conn.execute(
        """
        INSERT INTO audit_logs (
            id, timestamp, action, user_id, resource_type, resource_id,
            details, ip_address, status, error_message
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            audit_id,
            timestamp,
            action,
            user_id,
            resource_type,
            resource_id,
            json.dumps(details) if details else None,
            ip_address,
            status,
            error_message,
        ),
    )
    conn.commit()

    return audit_id


@router.get("", response_model=AuditLogListResponse)
async def list_audit_logs(
    limit: int = Query(default=50, ge=1, le=AUDIT_MAX_LIST_ROWS),
    offset: int = Query(default=0, ge=0),
    action: str | None = Query(default=None, description="Filter by action type"),
    resource_id: str | None = Query(default=None, description="Filter by resource ID"),
    status: str | None = Query(default=None, description="Filter by status (success/error)"),
    start_date: str | None = Query(default=None, description="Start date (ISO format)"),
    end_date: str | None = Query(default=None, description="End date (ISO format)"),
) -> AuditLogListResponse:
    """List audit log entries with filtering and pagination."""
    conn = get_db()
    try:
        init_audit_table(conn)
        cursor = conn.cursor()

        conditions = []
        params: list[Any] = []

        if action:
            conditions.append("action = ?")
            params.append(action)

        if resource_id:
            conditions.append("resource_id = ?")
            params.append(resource_id)

        if status:
            conditions.append("status = ?")
            params.append(status)

        if start_date:
            conditions.append("timestamp >= ?")
            params.append(start_date)

        if end_date:
            conditions.append("timestamp <= ?")
            params.append(end_date)

        # Column names are hardcoded; user input only flows through parameters.
        where_clause = " AND ".join(conditions) if conditions else "1=1"

        cursor.execute(f"SELECT COUNT(*) FROM audit_logs WHERE {where_clause}", params)
        total = cursor.fetchone()[0]

        cursor.execute(
            f"""
            SELECT id, timestamp, action, user_id, resource_type, resource_id,
                   details, ip_address, status, error_message
            FROM audit_logs
            WHERE {where_clause}
            ORDER BY timestamp DESC
            LIMIT ? OFFSET ?
            """,
            params + [limit, offset],
        )

        entries = []
        for row in cursor.fetchall():
            details = None
            if row[6]:
                try:
                    details = json.loads(row[6])
                except json.JSONDecodeError:
                    details = {"raw": row[6]}

            entries.append(
                AuditLogEntry(
                    id=row[0],
                    timestamp=row[1],
                    action=row[2],
                    user_id=row[3],
                    resource_type=row[4],
                    resource_id=row[5],
                    details=details,
                    ip_address=row[7],
                    status=row[8] or "success",
                    error_message=row[9],
                )
            )
    finally:
        conn.close()

    return AuditLogListResponse(
        entries=entries,
        total=total,
        limit=limit,
        offset=offset,
        filters_applied={
            "action": action,
            "resource_id": resource_id,
            "status": status,
            "start_date": start_date,
            "end_date": end_date,
        },
    )
