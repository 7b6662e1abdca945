from fastapi import APIRouter, HTTPException, status

from traitmatch.core.mongodb import mongodb
from traitmatch.log.logging import logger
from traitmatch.schemas.common import HealthStatus

router = APIRouter(tags=["healthcheck"])


@router.api_route(
    "/health",
    methods=["GET", "HEAD"],
    response_model=HealthStatus,
    description="Liveness probe, never touches the database",
)
async def health() -> HealthStatus:
    return HealthStatus(status="UP")


@router.get(
    "/healthcheck",
    response_model=HealthStatus,
    description="Health check endpoint",
    responses={
        200: {"description": "Health check passed"},
        500: {"description": "Health check failed"},
    },
)
async def health_check(withlog: bool = False) -> HealthStatus:
    if withlog:
        logger.debug("healthcheck debug log")
        logger.info("healthcheck info log")
        logger.warning("healthcheck warning log")

    try:
        reachable = await mongodb.ping()
    except Exception as e:
        logger.exception("Health check failed", error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if not reachable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="MongoDB is unreachable",
        )
    return HealthStatus(status="UP")
