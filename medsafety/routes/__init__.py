"""API route modules for the medication safety service.

Routers:
- safety: prescription validation, counseling topics and the rule catalog
- audit: audit log listing and statistics
"""

from .audit import router as audit_router
from .safety import router as safety_router

__all__ = ["safety_router", "audit_router"]
