from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from traitmatch.core.config import settings
from traitmatch.core.mongodb import mongodb
from traitmatch.log.logging import logger
from traitmatch.metrics import initialize_metrics, setup_all_middleware
from traitmatch.routers.auth_router import router as auth_router
from traitmatch.routers.companies_router import router as companies_router
from traitmatch.routers.health_router import router as health_router
from traitmatch.routers.jobs_router import router as jobs_router
from traitmatch.routers.match_router import router as match_router
from traitmatch.routers.messages_router import router as messages_router
from traitmatch.routers.traits_router import router as traits_router
from traitmatch.routers.users_router import router as users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown.

    Args:
        app: FastAPI application instance
    """
    try:
        logger.info(
            "Starting application",
            service=settings.service_name,
            environment=settings.environment,
        )

        initialize_metrics()

        await mongodb.initialize()

        logger.info("Application started successfully")

        yield

        logger.info("Shutting down application")
        await mongodb.close()
        logger.info("Application shut down successfully")

    except Exception as e:
        logger.exception("Application lifecycle error: {error}", error=str(e))
        raise


app = FastAPI(
    lifespan=lifespan,
    title="Trait Matching API",
    description="API for matching candidate trait profiles with jobs.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_origin_regex=settings.cors_origin_regex or None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_all_middleware(app)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Welcome to the Trait Matching API!"


app.include_router(health_router)
app.include_router(jobs_router)
app.include_router(companies_router)
app.include_router(users_router)
app.include_router(auth_router)
app.include_router(match_router)
app.include_router(messages_router)
app.include_router(traits_router)
