"""
Agent Chain API Routes

FastAPI route handlers for the agent chain engine.
"""
from .health import router as health_router
from .agents import router as agents_router
from .chains import router as chains_router
from .profile import router as profile_router

__all__ = [
    'health_router',
    'agents_router',
    'chains_router',
    'profile_router',
]
