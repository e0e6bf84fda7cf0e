import logging

from fastapi import APIRouter, Request

from tracker_api.context import TrackerContext

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns status of the API, the table store and the blob sink along with
    the deployment mode.
    """
    context: TrackerContext = request.app.state.context

    health_status = {
        "status": "ok",
        "deployment_mode": context.settings.deployment_mode,
        "components": {
            "api": "ready",
            "tables": "initializing",
            "blobs": "initializing"
        },
        "ready": False
    }

    # Check table store
    try:
        health_status["tables"] = context.tables.list_tables()
        health_status["components"]["tables"] = "ready"
    except Exception as e:
        logger.error(f"Table store health check failed: {e}")
        health_status["components"]["tables"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    # Check blob sink
    try:
        context.blobs.check()
        health_status["components"]["blobs"] = "ready"
    except Exception as e:
        logger.error(f"Blob sink health check failed: {e}")
        health_status["components"]["blobs"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )

    return health_status
