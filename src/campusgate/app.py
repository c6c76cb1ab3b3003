"""
Campus Gateway application entry point.

Builds the FastAPI application: loads settings, composes the GraphQL schema
from the configured resources, and wires CORS, request logging context and
the health routes.

Run with ``campus-gateway`` or ``uvicorn campusgate.app:create_app --factory``.
"""

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from campusgate.api.routes import health_router
from campusgate.connectors.requester import BackendRequester
from campusgate.core.config import Settings, get_settings
from campusgate.core.logging import LogContext, get_logger, setup_logging
from campusgate.graphql import GraphQLGateway, compose
from campusgate.resources import RESOURCES

logger = get_logger(__name__)


def build_gateway(settings: Settings, requester: BackendRequester) -> GraphQLGateway:
    """Compose the schema from every configured resource."""
    descriptors = [
        build_descriptor(settings.resource(name), requester)
        for name, build_descriptor in RESOURCES.items()
    ]
    return GraphQLGateway(compose(descriptors))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and release the backend HTTP client at shutdown."""
    logger.info(
        "Starting Campus gateway",
        resources=[r["name"] for r in app.state.gateway.get_health_info()["resources"]],
    )

    yield

    logger.info("Shutting down Campus gateway")
    try:
        await app.state.requester.aclose()
    except Exception as e:
        logger.error(f"Shutdown error: {e}")


async def bind_request_context(request: Request, call_next):
    """Tag every log line of a request with its request id."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    request.state.request_id = request_id
    with LogContext(request_id=request_id, path=request.url.path):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def create_app(
    settings: Optional[Settings] = None,
    requester: Optional[BackendRequester] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Args:
        settings: Gateway settings, read from the environment when omitted
        requester: Backend requester, built from ``settings`` when omitted

    Returns:
        FastAPI: Configured application

    Raises:
        pydantic.ValidationError: If required resource settings are missing
        SchemaCompositionError: If the resource fragments cannot be merged
    """
    settings = settings or get_settings()
    setup_logging(settings)

    requester = requester or BackendRequester(
        timeout_seconds=settings.request_timeout_seconds,
        show_urls=settings.show_urls,
    )
    gateway = build_gateway(settings, requester)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="GraphQL gateway for the courses and students services",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.requester = requester
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(bind_request_context)

    app.include_router(health_router)
    app.include_router(gateway.get_router())

    return app


def main() -> None:
    """Development server entry point."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
