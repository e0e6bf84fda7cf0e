import pytest

from tracker_api.database.table_store import TableStore
from tracker_api.errors import StorageError

HEADER = ["Week", "Zone"]


def test_init_tables(table_store):
    assert table_store.list_tables() == []


def test_ensure_table_writes_header_once(table_store):
    table_store.ensure_table("Weekly Status", HEADER)
    table_store.ensure_table("Weekly Status", HEADER)

    assert table_store.table_exists("Weekly Status")
    assert table_store.get_rows("Weekly Status") == [HEADER]
    assert table_store.last_row("Weekly Status") == 1


def test_missing_table_reads_empty(table_store):
    assert not table_store.table_exists("Nope")
    assert table_store.get_rows("Nope") == []
    assert table_store.last_row("Nope") == 0


def test_append_returns_position(table_store):
    table_store.ensure_table("Weekly Status", HEADER)

    assert table_store.append_row("Weekly Status", ["W1", "North"]) == 2
    assert table_store.append_row("Weekly Status", ["W2", "South"]) == 3
    assert table_store.get_row("Weekly Status", 3) == ["W2", "South"]


def test_update_row_in_place(table_store):
    table_store.ensure_table("Weekly Status", HEADER)
    table_store.append_row("Weekly Status", ["W1", "North"])
    table_store.append_row("Weekly Status", ["W2", "South"])

    assert table_store.update_row("Weekly Status", 2, ["W1", "East"]) is True

    assert table_store.get_rows("Weekly Status") == [HEADER, ["W1", "East"], ["W2", "South"]]


def test_delete_row_shifts_later_rows(table_store):
    table_store.ensure_table("Weekly Status", HEADER)
    for week in ("W1", "W2", "W3"):
        table_store.append_row("Weekly Status", [week, "North"])

    assert table_store.delete_row("Weekly Status", 3) is True

    assert table_store.get_row("Weekly Status", 3) == ["W3", "North"]
    assert table_store.last_row("Weekly Status") == 3


def test_out_of_range_rows(table_store):
    table_store.ensure_table("Weekly Status", HEADER)

    assert table_store.get_row("Weekly Status", 2) is None
    assert table_store.get_row("Weekly Status", 0) is None
    assert table_store.update_row("Weekly Status", 5, ["x", "y"]) is False
    assert table_store.delete_row("Weekly Status", 5) is False


def test_get_column_skips_header(table_store):
    table_store.ensure_table("Weekly Status", HEADER)
    table_store.append_row("Weekly Status", ["W1", "North"])
    table_store.append_row("Weekly Status", ["W2"])

    assert table_store.get_column("Weekly Status", 1) == ["North", ""]


def test_tables_are_independent(table_store):
    table_store.ensure_table("A", ["a"])
    table_store.ensure_table("B", ["b"])
    table_store.append_row("A", ["1"])
    table_store.append_row("B", ["2"])
    table_store.delete_row("A", 2)

    assert table_store.get_rows("A") == [["a"]]
    assert table_store.get_rows("B") == [["b"], ["2"]]
    assert table_store.list_tables() == ["A", "B"]


def test_lock_is_reentrant(table_store):
    with table_store.lock("A"):
        with table_store.lock("A"):
            table_store.ensure_table("A", ["a"])

    assert table_store.last_row("A") == 1


def test_unreachable_database_raises_storage_error(tmp_path):
    store = TableStore(str(tmp_path))

    with pytest.raises(StorageError):
        store.init_tables()
