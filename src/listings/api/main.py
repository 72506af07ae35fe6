"""FastAPI application for the property listing REST API.

Provides REST endpoints for:
- Health checks
- Owner accounts (Cognito)
- The listing wizard
- The owner's property dashboard
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from listings import __version__
from listings.api.dependencies import ServiceContainer
from listings.api.exceptions import register_exception_handlers
from listings.api.middleware.correlation import CORRELATION_ID_HEADER, CorrelationIdMiddleware
from listings.api.routes import auth_router, health_router, properties_router, wizard_router

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """Build the API application.

    Args:
        container: Services to use. Defaults to a container built from
            environment settings; tests pass one with their own services.
    """
    container = container or ServiceContainer()

    app = FastAPI(
        title="Property Listing API",
        description="REST API for creating and managing property listings",
        version=__version__,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=container.settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_ID_HEADER],
    )
    app.add_middleware(CorrelationIdMiddleware)

    register_exception_handlers(app)

    # Include routers under /api prefix
    # This matches CloudFront routing: /api/* → API Gateway
    app.include_router(health_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(wizard_router, prefix="/api")
    app.include_router(properties_router, prefix="/api")

    @app.get("/api/ping")
    async def ping() -> dict[str, Any]:
        """Root health check endpoint at /api/ping."""
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "service": "listings-api",
        }

    return app


app = create_app()

# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run(
            "listings.api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
