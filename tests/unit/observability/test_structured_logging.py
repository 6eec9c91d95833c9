import json
import logging

import pytest

from spotie.observability.logging import JsonFormatter, RequestContextFilter


def _record(message="hello"):
    return logging.LogRecord("spotie.test", logging.INFO, __file__, 1, message, None, None)


@pytest.mark.unit
def test_filter_outside_request_sets_empty_context():
    record = _record()
    assert RequestContextFilter().filter(record) is True
    assert record.request_id is None
    assert record.path is None
    assert record.user is None


@pytest.mark.unit
def test_filter_inside_request_reads_request_id(app):
    from flask import g

    with app.test_request_context('/search?q=x', headers={'X-Forwarded-For': '10.0.0.1'}):
        g.request_id = 'req-1'
        record = _record()
        RequestContextFilter().filter(record)
    assert record.request_id == 'req-1'
    assert record.path == '/search'
    assert record.method == 'GET'
    assert record.remote_addr == '10.0.0.1'


@pytest.mark.unit
def test_json_formatter_emits_one_object_per_record():
    record = _record("artist %s")
    record.args = ("a1",)
    RequestContextFilter().filter(record)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "artist a1"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "spotie.test"
    assert payload["request_id"] is None


@pytest.mark.unit
def test_file_logging_replaces_previous_file_handler(tmp_path):
    from spotie.observability.logging import configure_file_logging

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        first = configure_file_logging(str(tmp_path / "log"))
        second = configure_file_logging(str(tmp_path / "log"))
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == second
        logging.getLogger("spotie.test").info("written to file")
        file_handlers[0].flush()
        with open(second, encoding="utf-8") as fh:
            assert "written to file" in fh.read()
        assert first.startswith(str(tmp_path / "log"))
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
