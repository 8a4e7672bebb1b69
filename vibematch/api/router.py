"""Main API router."""

from fastapi import APIRouter

from vibematch.api.recommendations import router as recommendations_router

api_router = APIRouter(prefix="/api")

api_router.include_router(recommendations_router, prefix="/recommendations", tags=["recommendations"])
