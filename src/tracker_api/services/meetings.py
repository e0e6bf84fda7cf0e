"""Meetings: the only table with a generated identifier."""
import logging
from typing import Dict, List, Tuple

from tracker_api.database.table_store import TableStore
from tracker_api.ids import DEFAULT_ID_WIDTH, next_id
from tracker_api.services.records import RecordService
from tracker_api.tables import MEETINGS

logger = logging.getLogger(__name__)

MEETING_ID_COLUMN = 0


class MeetingService(RecordService):
    """Meeting rows keyed by a generated `<prefix><number>` Meeting ID."""

    def __init__(self, tables: TableStore, id_prefix: str = "BCIEINM", id_width: int = DEFAULT_ID_WIDTH):
        super().__init__(tables, MEETINGS, "Meeting")
        self.id_prefix = id_prefix
        self.id_width = id_width

    def prepare_new_row(self, params: Dict[str, str]) -> Tuple[List[str], Dict[str, str]]:
        existing = self.tables.get_column(self.spec.name, MEETING_ID_COLUMN)
        meeting_id = next_id(existing, self.id_prefix, self.id_width)
        logger.info(f"Issued meeting id {meeting_id}")
        return self.spec.build_row(params, meetingId=meeting_id), {"id": meeting_id}

    def prepare_edited_row(self, params: Dict[str, str], current: List[str]) -> List[str]:
        # The stored Meeting ID is the record's identity; an edit never changes it.
        meeting_id = current[MEETING_ID_COLUMN] if current else params.get("meetingId", "")
        return self.spec.build_row(params, meetingId=meeting_id)
