"""
Agent Chain Engine Runner

Entry point for running the agent chain engine.
"""
import logging

import uvicorn

from .config import Config

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("agentchain")


def run():
    """Run the agent chain engine"""
    logger.info(f"Starting Agent Chain Engine on {Config.API_HOST}:{Config.API_PORT}")

    uvicorn.run(
        "agentchain.app:app",
        host=Config.API_HOST,
        port=Config.API_PORT,
        reload=Config.DEBUG
    )


if __name__ == "__main__":
    run()
