"""API router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, config, exercises, health, workouts

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(config.router, prefix="/api", tags=["config"])
