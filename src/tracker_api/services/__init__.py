"""
Tracker API entity services

One service per record table: meetings, action items and weekly status share
the add / edit / delete pattern of RecordService; media uploads go through
MediaService.
"""

from .records import RecordService, parse_row_index, read_table
from .meetings import MeetingService
from .media import MediaService
from tracker_api.database.table_store import TableStore
from tracker_api.tables import ACTION_ITEMS, WEEKLY_STATUS


def get_action_item_service(tables: TableStore) -> RecordService:
    return RecordService(tables, ACTION_ITEMS, "Action item")


def get_weekly_status_service(tables: TableStore) -> RecordService:
    return RecordService(tables, WEEKLY_STATUS, "Weekly status")


__all__ = [
    'RecordService', 'parse_row_index', 'read_table',
    'MeetingService', 'MediaService',
    'get_action_item_service', 'get_weekly_status_service',
]
