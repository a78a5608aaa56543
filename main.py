# Standard library imports
from contextlib import asynccontextmanager

# Third-party imports
from fastapi import FastAPI
from fastapi.routing import APIRoute
from sqlalchemy import text

# Local application imports
from votetrack.api.internal.routes.v1.routes import router as v1_router
from votetrack.api.internal.utils.exceptions import register_exception_handlers
from votetrack.core.db import AsyncSessionLocal, async_engine, create_all_tables
from votetrack.core.monitoring import get_logger, setup_sentry
from votetrack.settings import settings

# Set up the main application logger
logger = get_logger("app")


# ---- FASTAPI APP CREATION ----
def custom_generate_unique_id(route: APIRoute) -> str:
    # Handle routes without tags
    if route.tags and len(route.tags) > 0:
        return f"{route.tags[0]}-{route.name}"
    else:
        return route.name or "unnamed_route"


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Startup
    logger.info(f"Starting up {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
    if setup_sentry():
        logger.info("Sentry monitoring enabled")

    if settings.CREATE_TABLES_ON_STARTUP:
        await create_all_tables(async_engine)

    yield

    # Shutdown
    logger.info("Shutting down, disposing database connections")
    await async_engine.dispose()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Voting record aggregation and bulk import API",
        openapi_url=f"{settings.API_V1_STR}/openapi.json" if settings.ENVIRONMENT != "production" else None,
        docs_url=f"{settings.API_V1_STR}/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url=f"{settings.API_V1_STR}/redoc" if settings.ENVIRONMENT != "production" else None,
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        try:
            async with AsyncSessionLocal() as db:
                await db.execute(text("SELECT 1"))
            database = "connected"
        except Exception as e:  # noqa: BLE001
            logger.error(f"Health check could not reach the database: {e}")
            database = "unavailable"
        return {"status": "healthy" if database == "connected" else "degraded", "version": "1.0.0", "database": database}

    # Include voting record routes
    app.include_router(v1_router, prefix=settings.API_V1_STR)

    return app


# Create the app instance
app = create_app()
