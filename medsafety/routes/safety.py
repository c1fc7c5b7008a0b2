"""Medication safety routes.

Endpoints for validating a stored prescription against a patient's clinical
factors, deriving required counseling topics, and listing the active rules.
"""

import logging
import sqlite3
from contextlib import closing

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field, field_validator

from medsafety.config import VALIDATION_RATE_LIMIT, get_db_path
from medsafety.counseling import required_counseling_topics
from medsafety.ratelimit import limiter
from medsafety.repository import get_connection, get_prescription
from medsafety.routes.audit import AuditAction, log_audit_event
from medsafety.utils import sanitize_identifier
from medsafety.validation import PatientFactors, PrescriptionValidationService
from medsafety.validation.models import HepaticFunction, RenalFunction
from medsafety.validation.registry import default_registry
from medsafety.validation.ruleset import register_default_rules

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pharmacy/safety", tags=["safety"])


class PatientFactorsRequest(BaseModel):
    """Patient clinical factors; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(populate_by_name=True)

    age: float = Field(ge=0)
    weight: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)
    renal_function: RenalFunction | None = Field(default=None, alias="renalFunction")
    hepatic_function: HepaticFunction | None = Field(default=None, alias="hepaticFunction")
    pregnancy: bool = False
    breastfeeding: bool = False
    allergies: list[str] = Field(default_factory=list)
    medical_conditions: list[str] = Field(default_factory=list, alias="medicalConditions")

    @field_validator("allergies", "medical_conditions")
    @classmethod
    def strip_blank_entries(cls, v: list[str]) -> list[str]:
        return [entry.strip() for entry in v if entry and entry.strip()]

    def to_patient_factors(self) -> PatientFactors:
        return PatientFactors(
            age=self.age,
            weight=self.weight,
            height=self.height,
            renal_function=self.renal_function,
            hepatic_function=self.hepatic_function,
            pregnancy=self.pregnancy,
            breastfeeding=self.breastfeeding,
            allergies=tuple(self.allergies),
            medical_conditions=tuple(self.medical_conditions),
        )


class AlertResponse(BaseModel):
    type: str
    severity: str
    message: str
    recommendation: str


class ValidationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    alerts: list[AlertResponse]


class CounselingTopicsResponse(BaseModel):
    prescription_id: str
    required_topics: list[str]


@router.post(
    "/validation/prescription/{prescription_id}",
    response_model=ValidationResponse,
    response_model_by_alias=True,
)
@limiter.limit(VALIDATION_RATE_LIMIT)
async def validate_prescription(
    request: Request, prescription_id: str, factors: PatientFactorsRequest
) -> ValidationResponse:
    """Validate a prescription against the patient's clinical factors.

    An unknown prescription id still returns 200 with a single critical
    ``prescription-not-found`` alert.
    """
    safe_id = sanitize_identifier(prescription_id)
    rule_overrides = getattr(request.app.state, "rule_overrides", {})

    try:
        with closing(get_connection(get_db_path())) as conn:
            service = PrescriptionValidationService(
                lookup=lambda pid: get_prescription(conn, pid),
                config={"rule_overrides": rule_overrides},
            )
            result = service.validate(prescription_id, factors.to_patient_factors())

            highest = result.highest_severity
            log_audit_event(
                conn,
                action=AuditAction.PRESCRIPTION_VALIDATE.value,
                resource_type="prescription",
                resource_id=safe_id,
                details={
                    "is_valid": result.is_valid,
                    "alert_count": len(result.alerts),
                    "highest_severity": highest.value if highest else None,
                },
                ip_address=request.client.host if request.client else None,
            )
    except sqlite3.Error as e:
        logger.error(f"Failed to validate prescription {safe_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Failed to validate prescription: {str(e)[:200]}"
        )

    logger.info(
        f"Validated prescription {safe_id}: valid={result.is_valid}, alerts={len(result.alerts)}"
    )
    return ValidationResponse(**result.to_dict())


@router.get(
    "/counseling/prescription/{prescription_id}/required-topics",
    response_model=CounselingTopicsResponse,
)
async def get_required_counseling_topics(
    request: Request, prescription_id: str
) -> CounselingTopicsResponse:
    """List the counseling topics the pharmacist must cover for a prescription."""
    safe_id = sanitize_identifier(prescription_id)

    try:
        with closing(get_connection(get_db_path())) as conn:
            prescription = get_prescription(conn, prescription_id)
            if prescription is None:
                raise HTTPException(
                    status_code=404, detail=f"Prescription {safe_id} not found"
                )

            topics = required_counseling_topics(prescription)
            log_audit_event(
                conn,
                action=AuditAction.COUNSELING_TOPICS_VIEW.value,
                resource_type="prescription",
                resource_id=safe_id,
                details={"topic_count": len(topics)},
                ip_address=request.client.host if request.client else None,
            )
    except sqlite3.Error as e:
        logger.error(f"Failed to load counseling topics for {safe_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Failed to load counseling topics: {str(e)[:200]}"
        )

    return CounselingTopicsResponse(prescription_id=prescription_id, required_topics=topics)


@router.get("/rules/catalog")
async def get_rule_catalog():
    """Get a catalog of all registered safety rules.

    Returns each rule's ID, display name and one-line description, in
    evaluation order.
    """
    register_default_rules(default_registry)

    rules = []
    for rule_func in default_registry.active_rules():
        rule_name = rule_func.__name__
        rule_doc = rule_func.__doc__ or ""
        rules.append(
            {
                "rule_id": rule_name.upper(),
                "name": rule_name.replace("_", " ").title(),
                "description": rule_doc.strip().split("\n")[0] if rule_doc else "",
            }
        )

    return {
        "rules": rules,
        "total_rules": len(rules),
    }
