"""The collaborators a request needs, built once per app and passed explicitly."""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from tracker_api.adapters.storage import BaseBlobSink, BlobSinkFactory
from tracker_api.config.settings import Settings
from tracker_api.database.table_store import TableStore, get_table_store
from tracker_api.services import (
    MediaService,
    MeetingService,
    RecordService,
    get_action_item_service,
    get_weekly_status_service,
)
from tracker_api.services.media import utc_now

logger = logging.getLogger(__name__)


@dataclass
class TrackerContext:
    settings: Settings
    tables: TableStore
    blobs: BaseBlobSink
    clock: Callable[[], datetime] = field(default=utc_now)

    @property
    def meetings(self) -> MeetingService:
        return MeetingService(
            self.tables,
            id_prefix=self.settings.meeting_id_prefix,
            id_width=self.settings.meeting_id_width,
        )

    @property
    def action_items(self) -> RecordService:
        return get_action_item_service(self.tables)

    @property
    def weekly_status(self) -> RecordService:
        return get_weekly_status_service(self.tables)

    @property
    def media(self) -> MediaService:
        return MediaService(self.tables, self.blobs, clock=self.clock)


def build_context(settings: Settings) -> TrackerContext:
    """Wire the table store and blob sink selected by the settings."""
    logger.info(f"Building tracker context for mode {settings.deployment_mode}")
    return TrackerContext(
        settings=settings,
        tables=get_table_store(settings.database_path),
        blobs=BlobSinkFactory.get_blob_sink(settings),
    )
