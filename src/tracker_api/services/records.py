"""
Add / edit / delete for a row-addressed record table.

Rows are addressed by their 1-based position as sent in the `row` parameter.
Row 1 is the header and can never be edited or deleted.
"""

import functools
import logging
from typing import Any, Callable, Dict, List, Tuple, TypeVar, Union, cast

from tracker_api.database.table_store import TableStore
from tracker_api.errors import ErrorKind, StorageError
from tracker_api.schemas import Err, HandlerResult, Ok
from tracker_api.tables import TableSpec
from tracker_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])

HEADER_ROW = 1
FIRST_DATA_ROW = 2


def storage_errors_as_results(func: F) -> F:
    """Turn a StorageError raised inside a handler into an Err result."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except StorageError as e:
            logger.error(f"{func.__qualname__} hit a storage failure: {e}")
            return Err(kind=ErrorKind.STORAGE_ERROR, error=str(e))
    return cast(F, wrapper)


def parse_row_index(value: str, last_row: int) -> Union[int, Err]:
    """Validate the `row` parameter against the table's current bounds."""
    value = (value or "").strip()
    if not value:
        return Err(kind=ErrorKind.INVALID_ROW, error="Missing row parameter")
    try:
        row = int(value)
    except ValueError:
        return Err(kind=ErrorKind.INVALID_ROW, error=f"Invalid row number: {value}")
    if row == HEADER_ROW:
        return Err(kind=ErrorKind.INVALID_ROW, error="Row 1 is the header row and cannot be modified")
    if last_row < FIRST_DATA_ROW:
        return Err(kind=ErrorKind.INVALID_ROW, error=f"Row {row} is out of range (table has no data rows)")
    if row < FIRST_DATA_ROW or row > last_row:
        return Err(
            kind=ErrorKind.INVALID_ROW,
            error=f"Row {row} is out of range (data rows are {FIRST_DATA_ROW}-{last_row})"
        )
    return row


def read_table(tables: TableStore, name: str) -> List[List[str]]:
    """All rows of a table, header first; empty when the table does not exist."""
    if not tables.table_exists(name):
        return []
    return tables.get_rows(name)


class RecordService:
    """CRUD triple for one record table."""

    def __init__(self, tables: TableStore, spec: TableSpec, label: str):
        self.tables = tables
        self.spec = spec
        self.label = label

    def prepare_new_row(self, params: Dict[str, str]) -> Tuple[List[str], Dict[str, str]]:
        """Row to append and any extra response fields. Runs under the table lock."""
        return self.spec.build_row(params), {}

    def prepare_edited_row(self, params: Dict[str, str], current: List[str]) -> List[str]:
        """Replacement for an existing row. Runs under the table lock."""
        return self.spec.build_row(params)

    def _missing_table(self) -> Err:
        return Err(kind=ErrorKind.TABLE_NOT_FOUND, error=f"Table not found: {self.spec.name}")

    @log_execution_time
    @storage_errors_as_results
    def add(self, params: Dict[str, str]) -> HandlerResult:
        name = self.spec.name
        with self.tables.lock(name):
            self.tables.ensure_table(name, self.spec.header)
            row, extra = self.prepare_new_row(params)
            position = self.tables.append_row(name, row)
        logger.info(f"Appended {self.label.lower()} to '{name}' at row {position}")
        return Ok(message=f"{self.label} added successfully", data=extra)

    @log_execution_time
    @storage_errors_as_results
    def edit(self, params: Dict[str, str]) -> HandlerResult:
        name = self.spec.name
        if not self.tables.table_exists(name):
            return self._missing_table()
        with self.tables.lock(name):
            row = parse_row_index(params.get("row", ""), self.tables.last_row(name))
            if isinstance(row, Err):
                return row
            current = self.tables.get_row(name, row) or []
            self.tables.update_row(name, row, self.prepare_edited_row(params, current))
        logger.info(f"Overwrote row {row} of '{name}'")
        return Ok(message=f"{self.label} updated successfully")

    @log_execution_time
    @storage_errors_as_results
    def delete(self, params: Dict[str, str]) -> HandlerResult:
        name = self.spec.name
        if not self.tables.table_exists(name):
            return self._missing_table()
        with self.tables.lock(name):
            row = parse_row_index(params.get("row", ""), self.tables.last_row(name))
            if isinstance(row, Err):
                return row
            self.tables.delete_row(name, row)
        logger.info(f"Deleted row {row} of '{name}'")
        return Ok(message=f"{self.label} deleted successfully")
