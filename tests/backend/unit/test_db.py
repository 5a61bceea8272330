"""
Unit tests for core.db helpers.
"""
import pytest

from noticeboard.core.db import DEFAULT_DB_NAME, database_name


@pytest.mark.parametrize(
    "uri, expected",
    [
        ("mongodb://127.0.0.1:27017/digital_notice_board", "digital_notice_board"),
        ("mongodb://user:pw@db1:27017,db2:27017/board?replicaSet=rs0", "board"),
        ("mongodb://127.0.0.1:27017", DEFAULT_DB_NAME),
        ("mongodb://127.0.0.1:27017/", DEFAULT_DB_NAME),
    ],
)
def test_database_name_from_uri(uri, expected):
    assert database_name(uri) == expected
