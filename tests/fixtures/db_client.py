"""Table store fixtures for tests."""
import pytest

from tests.consts import TEST_DB
from tracker_api.database.table_store import get_table_store


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / TEST_DB)


@pytest.fixture
def table_store(db_path):
    return get_table_store(db_path)
