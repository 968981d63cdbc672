import json
import logging
import sys
from logging.handlers import RotatingFileHandler

from google_forms_mcp.logging_config import JSONFormatter, configure_logging


def _record(msg: str, level: int = logging.INFO, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="google_forms_mcp.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestJSONFormatter:
    def test_basic_format(self):
        data = json.loads(JSONFormatter().format(_record("hello world")))

        assert data["level"] == "INFO"
        assert data["logger"] == "google_forms_mcp.test"
        assert data["message"] == "hello world"
        assert "timestamp" in data

    def test_extra_fields_included(self):
        record = _record("dispatching")
        record.tool_name = "create_form"
        record.form_id = "form-1"

        data = json.loads(JSONFormatter().format(record))

        assert data["tool_name"] == "create_form"
        assert data["form_id"] == "form-1"

    def test_error_code_included(self):
        record = _record("Tool failed")
        record.error_code = -32602

        data = json.loads(JSONFormatter().format(record))

        assert data["error_code"] == -32602

    def test_extra_fields_absent_when_not_set(self):
        data = json.loads(JSONFormatter().format(_record("no extras")))

        assert "tool_name" not in data
        assert "form_id" not in data

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record("error occurred", logging.ERROR, sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError" in data["exception"]
        assert "boom" in data["exception"]

    def test_unicode_message(self):
        data = json.loads(JSONFormatter().format(_record("Formulär: Åsa Öberg")))
        assert data["message"] == "Formulär: Åsa Öberg"


class TestConfigureLogging:
    def test_json_format(self):
        configure_logging(level="DEBUG", json_format=True)
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_human_readable_format(self):
        configure_logging(level="WARNING", json_format=False)
        root = logging.getLogger()

        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_stream_handler_uses_stderr(self):
        configure_logging(level="INFO", json_format=True)
        assert logging.getLogger().handlers[0].stream is sys.stderr

    def test_clears_existing_handlers(self):
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())

        configure_logging(level="INFO", json_format=True)

        assert len(root.handlers) == 1

    def test_file_handler_added(self, tmp_path):
        log_file = str(tmp_path / "test.log")
        configure_logging(level="INFO", json_format=True, log_file=log_file)
        root = logging.getLogger()

        assert len(root.handlers) == 2
        assert isinstance(root.handlers[1], RotatingFileHandler)
        assert isinstance(root.handlers[1].formatter, JSONFormatter)

    def test_file_handler_writes(self, tmp_path):
        log_file = str(tmp_path / "test.log")
        configure_logging(level="INFO", json_format=True, log_file=log_file)

        logging.getLogger("google_forms_mcp.test_file").info("file handler test")

        data = json.loads((tmp_path / "test.log").read_text().strip())
        assert data["message"] == "file handler test"

    def test_file_handler_creates_parent_dirs(self, tmp_path):
        log_file = str(tmp_path / "subdir" / "nested" / "test.log")
        configure_logging(level="INFO", json_format=True, log_file=log_file)

        assert (tmp_path / "subdir" / "nested").is_dir()

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(level="chatty", json_format=True)
        assert logging.getLogger().level == logging.INFO
