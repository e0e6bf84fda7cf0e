from textwrap import dedent
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.routing import APIRoute

from tracker_api.config.settings import Settings
from tracker_api.context import TrackerContext, build_context
from tracker_api.errors import handle_broad_exceptions
from tracker_api.middleware import apply_cors_headers
from tracker_api.routers.health import router as health_router
from tracker_api.routers.media import router as media_router
from tracker_api.routers.records import router as records_router

# Set up logging
logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None, context: Optional[TrackerContext] = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or (context.settings if context else Settings())
    configure_logging(settings)

    app = FastAPI(
        title="Tracker API",
        summary="Record meetings, action items, weekly status and media",
        version="v1",
        description=dedent(
            """\
        Every write goes through `POST /` with an `action` field:

        | Action | Table |
        | --- | --- |
        | `add_meeting`, `edit_meeting`, `delete_meeting` | Meetings |
        | `add_action`, `edit_action`, `delete_action` | Action Items |
        | `add_status`, `edit_status`, `delete_status` | Weekly Status |
        | `upload_media` | Media |

        Reads use `GET /?sheet=<table name>`. Errors are returned as `{"error": ...}` with status 200.
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
    )

    logger.info("creating table store and blob sink")
    app.state.settings = settings
    app.state.context = context or build_context(settings)

    app.include_router(records_router, tags=["records"])
    app.include_router(media_router, tags=["media"])
    app.include_router(health_router, tags=["health"])

    # Registered last so it wraps error responses too.
    app.middleware("http")(handle_broad_exceptions)
    app.middleware("http")(apply_cors_headers)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
