"""
FastAPI Application Entry Point for dealerbrain.

This module creates and configures the FastAPI application with:
- HTTP routes for hand evaluation and equity
- Session routes for the dealer decision engine
- CORS middleware for the table front-end
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dealerbrain import __version__
from dealerbrain.config import EngineConfig
from dealerbrain.server.routes import router
from dealerbrain.server.sessions import session_manager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(config_path: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config_path: JSON settings file for new sessions. Defaults to the
            DEALERBRAIN_CONFIG environment variable, then built-in defaults.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="dealerbrain",
        description="Heads-up Texas Hold'em dealer AI",
        version=__version__,
    )

    config_path = config_path or os.environ.get("DEALERBRAIN_CONFIG")
    if config_path:
        session_manager.config = EngineConfig.from_json_file(config_path)
        logger.info(f"Loaded engine config from {config_path}")

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.on_event("startup")
    async def startup_event():
        logger.info("dealerbrain server starting up...")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("dealerbrain server shutting down...")

    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "dealerbrain.server.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
