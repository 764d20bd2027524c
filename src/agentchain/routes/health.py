"""
Health Check Routes

Endpoints for service health monitoring.
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from ..services.engine_service import get_engine_service

router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "agentchain-engine",
        "timestamp": _now()
    }


@router.get("/ready")
async def readiness_check():
    """
    Readiness check - the registry has been bootstrapped.
    Used by orchestrators for readiness probes.
    """
    engine = get_engine_service()
    return {
        "ready": engine.is_initialized,
        "agents": len(engine.registry.get_all_agents()),
        "chains": len(engine.registry.get_all_chains()),
        "timestamp": _now()
    }


@router.get("/live")
async def liveness_check():
    """
    Liveness check - indicates if service is running.
    Used by orchestrators for liveness probes.
    """
    return {
        "alive": True,
        "timestamp": _now()
    }
