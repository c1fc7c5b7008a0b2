"""Pharmacy Medication Safety Backend Package.

This package provides the FastAPI backend for pharmacy prescription safety
checks, including:

- Prescription safety validation against patient clinical factors
- Required patient-counseling topics per prescription
- SQLite persistence for drugs and prescriptions
- HIPAA-style audit logging of safety checks

Usage:
    # Development:
    uvicorn medsafety.app:app --reload --port 8080

Modules:
    app: FastAPI application entry point
    validation: Safety rules engine (rule tables, dosage parsing, categories)
    counseling: Counseling topic derivation
    repository: SQLite prescription store
    routes: API routers
"""

__version__ = "0.1.0"
