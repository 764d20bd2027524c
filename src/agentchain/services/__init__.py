"""
Agent Chain Services

Registry, orchestration and profile services.
"""
from .registry_service import AgentRegistry, ImportSummary
from .orchestrator import ChainOrchestrator, apply_input_mapping, build_user_prompt
from .profile_service import ProfileService, ProfileFormatError, ProfileImportResult
from .engine_service import EngineService, get_engine_service, set_engine_service, init_engine_service

__all__ = [
    'AgentRegistry',
    'ImportSummary',
    'ChainOrchestrator',
    'apply_input_mapping',
    'build_user_prompt',
    'ProfileService',
    'ProfileFormatError',
    'ProfileImportResult',
    'EngineService',
    'get_engine_service',
    'set_engine_service',
    'init_engine_service',
]
