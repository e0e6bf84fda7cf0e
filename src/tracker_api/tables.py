"""Layout of the four record tables: header text and the request field feeding each column."""
from typing import Dict, List, NamedTuple, Tuple


class TableSpec(NamedTuple):
    name: str
    columns: Tuple[Tuple[str, str], ...]

    @property
    def header(self) -> List[str]:
        return [title for title, _ in self.columns]

    @property
    def fields(self) -> List[str]:
        return [field for _, field in self.columns]

    def build_row(self, params: Dict[str, str], **overrides: str) -> List[str]:
        """Order named parameters by column; missing ones become empty strings."""
        values = dict(params, **overrides)
        return [values.get(field, "") for field in self.fields]


MEETINGS = TableSpec(
    name="Meetings",
    columns=(
        ("Meeting ID", "meetingId"),
        ("Meeting Date", "meetingDate"),
        ("Zone", "zone"),
        ("District", "district"),
        ("Cold Room", "coldRoom"),
        ("Meeting Title", "meetingTitle"),
        ("Conducted By", "conductedBy"),
        ("Attendees", "attendees"),
        ("Meeting Agenda", "meetingAgenda"),
        ("Meeting Discussion", "meetingDiscussion"),
        ("Photo URL", "photoUrl"),
    ),
)

ACTION_ITEMS = TableSpec(
    name="Action Items",
    columns=(
        ("Meeting ID", "meetingId"),
        ("Action Item", "actionItem"),
        ("Assigned To", "assignedTo"),
        ("Deadline", "deadline"),
        ("Status", "status"),
    ),
)

WEEKLY_STATUS = TableSpec(
    name="Weekly Status",
    columns=(
        ("Week", "week"),
        ("Zone", "zone"),
        ("District", "district"),
        ("Summary of This Week Activities", "summary"),
        ("Activities Planned for Next Week", "nextWeekPlan"),
    ),
)

MEDIA = TableSpec(
    name="Media",
    columns=(
        ("Week", "week"),
        ("Zone", "zone"),
        ("District", "district"),
        ("File Name", "fileName"),
        ("File URL", "fileUrl"),
        ("File Type", "mimeType"),
        ("Uploaded On", "uploadedOn"),
    ),
)

ALL_TABLES = (MEETINGS, ACTION_ITEMS, WEEKLY_STATUS, MEDIA)
