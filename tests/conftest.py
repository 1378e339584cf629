import sqlite3
import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from repositories.student_repo import StudentRepository  # noqa: E402

# Store dates as ISO text without relying on sqlite3's deprecated default adapter
sqlite3.register_adapter(date, date.isoformat)


@pytest.fixture()
def conn():
    connection = sqlite3.connect(":memory:")
    try:
        yield connection
    finally:
        connection.close()


@pytest.fixture()
def repo(conn):
    repository = StudentRepository(conn, paramstyle="qmark")
    assert repository.create_table()
    return repository
