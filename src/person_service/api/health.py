"""Health check endpoint."""

from fastapi import APIRouter, Depends

from ..core import error_codes
from ..core.exceptions import InternalError
from ..core.logging import get_logger
from ..core.response import ServiceResponse
from ..services.queries import STORE_ERRORS, Queries
from .dependencies import get_queries

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Health check", description="Verify the database answers a trivial query.")
async def health_check(queries: Queries = Depends(get_queries)):
    try:
        await queries.health_check()
    except STORE_ERRORS as e:
        logger.error("Database health check failed", extra={"error": str(e)})
        raise InternalError(str(e), error_codes.HC_HEALTH_CHECK_FAILED) from e
    return ServiceResponse.success({"status": "healthy"})
