"""API V1 Router"""

from fastapi import APIRouter

# Import endpoint routers
from app.api.v1.endpoints import audit, billings, catalog, payments, reports, students

# Create API v1 router
api_router = APIRouter()

# Include endpoint routers with prefixes and tags
api_router.include_router(students.router, prefix="/students", tags=["Student Ledger"])
api_router.include_router(billings.router, prefix="/billings", tags=["Billings"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
api_router.include_router(audit.router, prefix="/audit", tags=["Audit Log"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])
