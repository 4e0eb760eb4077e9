"""日志配置测试"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator

import pytest

from prdeps.core.exceptions import ResolutionError
from prdeps.utils.logger import JSONFormatter, setup_logging


@pytest.fixture()
def restore_root() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter() -> None:
    record = logging.LogRecord("prdeps.x", logging.WARNING, __file__, 1, "hello %s", ("包",), None)
    entry = json.loads(JSONFormatter().format(record))
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "prdeps.x"
    assert entry["message"] == "hello 包"
    assert "exception" not in entry
    assert "import_path" not in entry


def test_json_formatter_carries_import_path() -> None:
    logger = logging.getLogger("prdeps.test.json")
    record = logger.makeRecord(
        logger.name, logging.DEBUG, __file__, 1, "已解析: %s", ("pkg.sub",), None,
        extra={"import_path": "pkg.sub"},
    )
    entry = json.loads(JSONFormatter().format(record))
    assert entry["import_path"] == "pkg.sub"
    assert entry["message"] == "已解析: pkg.sub"


def test_json_formatter_error_code() -> None:
    try:
        raise ResolutionError("pkg.missing", "not found")
    except ResolutionError:
        exc_info = sys.exc_info()
    record = logging.LogRecord("prdeps.cli", logging.DEBUG, __file__, 1, "遍历中止", (), exc_info)
    entry = json.loads(JSONFormatter().format(record))
    assert entry["error_code"] == "RESOLUTION_ERROR"
    assert "could not locate 'pkg.missing'" in entry["exception"]


@pytest.mark.usefixtures("restore_root")
class TestSetupLogging:
    def test_single_handler(self) -> None:
        setup_logging("DEBUG")
        setup_logging("DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_json_output(self) -> None:
        setup_logging("INFO", json_output=True)
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_unknown_level_falls_back(self) -> None:
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING
