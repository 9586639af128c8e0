from fastapi import APIRouter

from payroll_api.api.routes import employees

api_router = APIRouter()
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
