import psycopg2
import pytest

from db import connection


class _FakeConn:
    def __init__(self):
        self.closed = 0

    def close(self):
        self.closed = 1


def test_connect_uses_dsn(monkeypatch):
    seen = {}

    def fake_connect(dsn):
        seen["dsn"] = dsn
        return _FakeConn()

    monkeypatch.setattr(connection.psycopg2, "connect", fake_connect)
    conn = connection.connect("postgresql://u:p@db:5432/school")
    assert isinstance(conn, _FakeConn)
    assert seen["dsn"] == "postgresql://u:p@db:5432/school"


def test_connect_reraises_operational_error(monkeypatch):
    def fake_connect(dsn):
        raise psycopg2.OperationalError("could not connect to server")

    monkeypatch.setattr(connection.psycopg2, "connect", fake_connect)
    with pytest.raises(psycopg2.OperationalError):
        connection.connect("postgresql://nowhere/none")


def test_close_connection():
    conn = _FakeConn()
    connection.close_connection(conn)
    assert conn.closed == 1
    connection.close_connection(None)
