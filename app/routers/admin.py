from fastapi import APIRouter, HTTPException, Request
from typing import Dict, Any
import time
from app.core.config import config
from app.core.logging import SERVICE_NAME

router = APIRouter(tags=["admin"])


@router.get("/healthz")
async def health_check() -> Dict[str, Any]:
    """Basic application health check"""
    try:
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "service": SERVICE_NAME,
            "version": config.version
        }
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")


@router.get("/readyz")
async def readiness_check(request: Request) -> Dict[str, Any]:
    """Dependency readiness check"""
    dependencies = {
        "api": True,  # API is running if we get here
        "completion_client": getattr(request.app.state, "completion_client", None) is not None,
    }

    return {
        "status": "ready" if all(dependencies.values()) else "not_ready",
        "timestamp": time.time(),
        "dependencies": dependencies
    }
