import json
import logging

import pytest

from instagram_client.log import LOG, bound_logging_vars, get_logger, get_logging_contextvars


@pytest.fixture(autouse=True)
def reset_logger():
    handlers = list(LOG.handlers)
    level = LOG.level
    yield
    LOG.handlers = handlers
    LOG.setLevel(level)


def test_get_logger_does_not_stack_handlers() -> None:
    get_logger()
    get_logger("json")
    ours = [h for h in LOG.handlers if getattr(h, "_instagram_client_handler", False)]
    assert len(ours) == 1
    assert LOG.level == logging.INFO


def test_json_logger_carries_bound_vars(capsys) -> None:
    get_logger("json")
    with bound_logging_vars(verb="GET", path="users/:id"):
        assert get_logging_contextvars() == {"verb": "GET", "path": "users/:id"}
        LOG.info("request sent")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "request sent"
    assert record["verb"] == "GET"
    assert record["path"] == "users/:id"
    assert record["level"] == "info"
