"""
Tracker API table storage.

Row-addressed tables on SQLite, standing in for a spreadsheet: a header row
followed by data rows, addressed by 1-based position.
"""

from .table_store import TableStore, get_table_store

__all__ = ['TableStore', 'get_table_store']
