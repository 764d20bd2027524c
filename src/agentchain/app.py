"""
Agent Chain Engine Application

FastAPI application exposing the agent registry and chain orchestrator.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Config
from .services.engine_service import get_engine_service, init_engine_service
from .routes import (
    health_router,
    agents_router,
    chains_router,
    profile_router,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("agentchain.app")

# Suppress noisy loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("asyncpg").setLevel(logging.WARNING)

# Create FastAPI application
app = FastAPI(
    title="Agent Chain Engine API",
    description="Agent registry and sequential chain orchestration",
    version="0.1.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup"""
    logger.info("Starting Agent Chain Engine...")

    try:
        await init_engine_service()
        logger.info("Agent Chain Engine started successfully")
    except Exception as e:
        logger.error(f"Failed to start Agent Chain Engine: {e}")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Agent Chain Engine...")

    try:
        engine = get_engine_service()
        await engine.close()
        logger.info("Agent Chain Engine shutdown complete")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


# Include routers
app.include_router(health_router, prefix="/api/v1", tags=["health"])
app.include_router(agents_router, prefix="/api/v1", tags=["agents"])
app.include_router(chains_router, prefix="/api/v1", tags=["chains"])
app.include_router(profile_router, prefix="/api/v1", tags=["profile"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Agent Chain Engine",
        "version": "0.1.0",
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=Config.API_HOST,
        port=Config.API_PORT
    )
