from fastapi import APIRouter
from hrleave.routers import admin, debug, leave

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(leave.router, tags=["Leave"])
api_router.include_router(admin.router, tags=["Administration"])
api_router.include_router(debug.router, tags=["Diagnostics"])
