"""
Agents Routes

Endpoints for agent registration, lookup and preset management.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..models.agent import Agent
from ..presets.source import PresetFetchError
from ..services.engine_service import get_engine_service
from ..services.registry_service import AgentRegistry

logger = logging.getLogger("agentchain.routes.agents")
router = APIRouter(prefix="/agents", tags=["agents"])


# ============================================
# Request/Response Models
# ============================================

class AgentRequest(BaseModel):
    """Full agent record for upsert"""
    id: str
    name: str
    systemPrompt: str
    description: str = ""
    role: str = "analyst"
    preferredProvider: Optional[str] = None
    version: str = "1.0.0"
    createdAt: Optional[int] = None


class AgentResponse(BaseModel):
    """Agent response"""
    id: str
    name: str
    description: str
    role: str
    systemPrompt: str
    preferredProvider: Optional[str] = None
    version: str
    createdAt: int


class ImportSummaryResponse(BaseModel):
    imported: int
    skipped: int


# ============================================
# Helper
# ============================================

def _get_registry() -> AgentRegistry:
    return get_engine_service().registry


def _to_agent(request: AgentRequest) -> Agent:
    try:
        return Agent.from_dict(request.model_dump(exclude_none=True)).validate()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ============================================
# Routes
# ============================================

@router.get("", response_model=List[AgentResponse])
@router.get("/", response_model=List[AgentResponse])
async def list_agents(role: Optional[str] = None):
    """List agents, optionally filtered by role"""
    registry = _get_registry()
    if role is None:
        agents = registry.get_all_agents()
    else:
        try:
            agents = registry.get_agents_by_role(role)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown role: {role}")
    return [AgentResponse(**agent.to_dict()) for agent in agents]


@router.get("/{agent_id}", response_model=AgentResponse)
async def get_agent(agent_id: str):
    """Get agent by ID"""
    agent = _get_registry().get_agent(agent_id)
    if not agent:
        raise HTTPException(status_code=404, detail="Agent not found")
    return AgentResponse(**agent.to_dict())


@router.post("", response_model=AgentResponse)
@router.post("/", response_model=AgentResponse)
async def register_agent(request: AgentRequest):
    """Create or replace an agent (upsert by id)"""
    registry = _get_registry()
    existing = registry.get_agent(request.id)
    agent = _to_agent(request)
    if existing is not None:
        # createdAt is set once
        agent.created_at = existing.created_at

    await registry.register_agent(agent)
    return AgentResponse(**agent.to_dict())


@router.delete("/{agent_id}")
async def remove_agent(agent_id: str):
    """Delete an agent"""
    removed = await _get_registry().remove_agent(agent_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Agent not found")
    return {"success": True, "id": agent_id}


@router.post("/reset", response_model=List[AgentResponse])
async def reset_agents():
    """Replace all agents with the built-in presets"""
    registry = _get_registry()
    await registry.reset_to_defaults()
    return [AgentResponse(**agent.to_dict()) for agent in registry.get_all_agents()]


@router.post("/import-presets", response_model=ImportSummaryResponse)
async def import_presets():
    """Import unknown agents from the preset manifest"""
    try:
        summary = await _get_registry().import_presets()
    except PresetFetchError as e:
        logger.error(f"Preset import failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return ImportSummaryResponse(imported=summary.imported, skipped=summary.skipped)
