"""FastAPI application entrypoint and configuration.

This module provides the main FastAPI application factory that sets up
logging, CORS middleware, the layer metadata router, and a health check
endpoint for monitoring.

Example:
    The application can be run with uvicorn:
        $ uvicorn featureserver.main:app --reload

    Or imported and used programmatically:
        >>> from featureserver.main import app
        >>> # Use app in ASGI server
"""

import fastapi
from fastapi.middleware import cors

from featureserver.api import layers
from featureserver.core import config, logs


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application.

    Configures logging from settings, includes the layer metadata router
    and adds a health check endpoint. CORS origins are configured from
    settings, allowing cross-origin requests from specified domains.

    Returns:
        Configured FastAPI application instance ready for ASGI server.
    """
    settings = config.get_settings()
    logs.configure_logging(settings)
    app = fastapi.FastAPI(title="Feature Server", version="0.1.0")

    app.include_router(layers.router)

    app.add_middleware(
        cors.CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:  # type: ignore[misc]
        """Health check endpoint for monitoring and load balancers.

        Returns:
            Dictionary with status "ok" if the service is running.
        """
        return {"status": "ok"}

    return app


app = create_app()
