"""日志配置测试"""

from __future__ import annotations

import json
import logging

from sspmod.utils.logger import JSONFormatter, reset_logging, setup_logging


class TestSetupLogging:
    def teardown_method(self) -> None:
        reset_logging()

    def test_single_handler_after_repeated_setup(self) -> None:
        setup_logging("DEBUG")
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_unknown_level_falls_back(self) -> None:
        setup_logging("chatty")
        assert logging.getLogger().level == logging.WARNING

    def test_json_formatter_selected(self) -> None:
        setup_logging("INFO", json_output=True)
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)


class TestJSONFormatter:
    def test_includes_package_extra(self) -> None:
        record = logging.LogRecord("sspmod.x", logging.INFO, __file__, 10, "复制 %s", ("foo",), None)
        record.package = "acme/simplesamlphp-module-foo"
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "复制 foo"
        assert data["level"] == "INFO"
        assert data["package"] == "acme/simplesamlphp-module-foo"

    def test_without_package(self) -> None:
        record = logging.LogRecord("sspmod.x", logging.WARNING, __file__, 1, "msg", None, None)
        data = json.loads(JSONFormatter().format(record))
        assert "package" not in data
