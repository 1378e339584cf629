import logging

import pytest

from utils.logger import get_logger, set_level


@pytest.fixture()
def restore_level():
    root = logging.getLogger()
    previous = root.level
    yield
    root.setLevel(previous)


def test_set_level_by_name(restore_level):
    assert set_level("debug") == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back_to_info(restore_level):
    assert set_level("chatty") == logging.INFO


def test_get_logger_is_named():
    assert get_logger("repositories.student_repo").name == "repositories.student_repo"
