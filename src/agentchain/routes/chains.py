"""
Chains Routes

Endpoints for chain management and chain execution.
"""
import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..models.chain import AgentChain
from ..models.output import AgentInput
from ..services.engine_service import get_engine_service

logger = logging.getLogger("agentchain.routes.chains")
router = APIRouter(prefix="/chains", tags=["chains"])


# ============================================
# Request/Response Models
# ============================================

class ChainStepModel(BaseModel):
    agentId: str
    inputMapping: Optional[Dict[str, str]] = None
    config: Optional[Dict[str, Any]] = None


class ChainRequest(BaseModel):
    """Full chain record for upsert"""
    id: str
    name: str
    description: str = ""
    agents: List[ChainStepModel] = Field(default_factory=list)
    createdAt: Optional[int] = None


class ChainResponse(BaseModel):
    """Chain response"""
    id: str
    name: str
    description: str
    agents: List[ChainStepModel]
    createdAt: int


class CustomChainRequest(BaseModel):
    name: str
    agentIds: List[str]
    description: Optional[str] = None
    id: Optional[str] = None


class ExecuteChainRequest(BaseModel):
    task: str
    context: Dict[str, Any] = Field(default_factory=dict)
    apiKey: Optional[str] = None


class AgentOutputResponse(BaseModel):
    agentId: str
    agentName: str
    content: str
    success: bool
    error: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    timestamp: int


class ChainExecutionResponse(BaseModel):
    chainId: str
    chainName: str
    executions: List[AgentOutputResponse]
    totalDurationMs: int


# ============================================
# Routes
# ============================================

@router.get("", response_model=List[ChainResponse])
@router.get("/", response_model=List[ChainResponse])
async def list_chains():
    """List all chains"""
    registry = get_engine_service().registry
    return [ChainResponse(**chain.to_dict()) for chain in registry.get_all_chains()]


@router.get("/{chain_id}", response_model=ChainResponse)
async def get_chain(chain_id: str):
    """Get chain by ID"""
    chain = get_engine_service().registry.get_chain(chain_id)
    if not chain:
        raise HTTPException(status_code=404, detail="Chain not found")
    return ChainResponse(**chain.to_dict())


@router.post("", response_model=ChainResponse)
@router.post("/", response_model=ChainResponse)
async def register_chain(request: ChainRequest):
    """Create or replace a chain (upsert by id)"""
    registry = get_engine_service().registry
    try:
        chain = AgentChain.from_dict(request.model_dump(exclude_none=True)).validate()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    existing = registry.get_chain(chain.id)
    if existing is not None:
        chain.created_at = existing.created_at

    await registry.register_chain(chain)
    return ChainResponse(**chain.to_dict())


@router.post("/custom", response_model=ChainResponse)
async def create_custom_chain(request: CustomChainRequest):
    """Create a chain from an ordered list of agent ids"""
    if not request.agentIds:
        raise HTTPException(status_code=400, detail="agentIds must not be empty")

    registry = get_engine_service().registry
    try:
        chain = await registry.create_custom_chain(
            request.name,
            request.agentIds,
            description=request.description,
            chain_id=request.id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ChainResponse(**chain.to_dict())


@router.delete("/{chain_id}")
async def remove_chain(chain_id: str):
    """Delete a chain"""
    removed = await get_engine_service().registry.remove_chain(chain_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Chain not found")
    return {"success": True, "id": chain_id}


@router.post("/{chain_id}/execute", response_model=ChainExecutionResponse)
async def execute_chain(chain_id: str, request: ExecuteChainRequest):
    """
    Execute a chain against a task.

    Always returns the full transcript; per-step failures are reported
    in each execution's success/error fields.
    """
    engine = get_engine_service()
    chain = engine.registry.get_chain(chain_id)
    if not chain:
        raise HTTPException(status_code=404, detail="Chain not found")
    if not chain.agents:
        raise HTTPException(status_code=400, detail="Chain has no steps")

    started = time.monotonic()
    outputs = await engine.orchestrator.execute_chain(
        chain,
        AgentInput(task=request.task, context=request.context),
        credentials=request.apiKey,
    )
    duration_ms = int((time.monotonic() - started) * 1000)

    return ChainExecutionResponse(
        chainId=chain.id,
        chainName=chain.name,
        executions=[AgentOutputResponse(**output.to_dict()) for output in outputs],
        totalDurationMs=duration_ms,
    )
