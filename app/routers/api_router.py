from fastapi import APIRouter
from app.routers import vacations, compensation, statements

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(vacations.router, tags=["Vacations"])
api_router.include_router(compensation.router, tags=["Compensation"])
api_router.include_router(statements.router, tags=["Statements"])
