"""
Profile Routes

Export and import of the portable profile document.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from ..services.engine_service import get_engine_service
from ..services.profile_service import ProfileFormatError

logger = logging.getLogger("agentchain.routes.profile")
router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/export")
async def export_profile():
    """Export credentials, agents and chains"""
    return await get_engine_service().profile_service.build_profile()


@router.post("/import")
async def import_profile(profile: Dict[str, Any] = Body(...)):
    """Import a profile document (upserts agents and chains)"""
    try:
        result = await get_engine_service().profile_service.import_profile(profile)
    except ProfileFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "success": True,
        "agents": result.agents,
        "chains": result.chains,
        "secrets": result.secrets,
    }
