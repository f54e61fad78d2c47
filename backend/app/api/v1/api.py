from fastapi import APIRouter

from backend.app.api.v1.endpoints import reports

api_router = APIRouter(prefix="/api")

api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
