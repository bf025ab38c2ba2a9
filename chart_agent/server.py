from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from pathlib import Path
import logging

from .api import chat_router, upload_router
from .config import get_config, setup_logging
from .security import setup_security_middleware

# Configure logging
logger = logging.getLogger(__name__)
setup_logging()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_config = get_config()
    app = FastAPI(
        title="Chart Agent API",
        description="Conversational bar and line charts in FD and BNR house colors",
        version="0.1.0",
        docs_url="/docs" if app_config.DEBUG_MODE else None,
        redoc_url="/redoc" if app_config.DEBUG_MODE else None,
    )

    setup_security_middleware(app)
    app_config.log_configuration()

    return app


def register_routers(app: FastAPI) -> None:
    """Register all routers with the application."""

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(chat_router)
    app.include_router(upload_router)

    # Saved charts are served from the output directory
    output_dir = Path(get_config().CHART_OUTPUT_DIR)
    output_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/charts", StaticFiles(directory=str(output_dir)), name="charts")


# Create the FastAPI application instance
app = create_app()
register_routers(app)


def main():
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("chart_agent.server:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
