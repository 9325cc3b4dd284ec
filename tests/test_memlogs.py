import json
import logging

from ddnsutil.memlogs import MemoryLogs


def test_write_returns_length_and_stores():
    logs = MemoryLogs()
    assert logs.write("hello") == 5
    assert logs.logs == ["hello"]


def test_keeps_only_most_recent():
    logs = MemoryLogs()
    for n in range(60):
        logs.write(f"line {n}")
    assert len(logs.logs) == 50
    assert logs.logs[0] == "line 10"
    assert logs.logs[-1] == "line 59"


def test_custom_limit():
    logs = MemoryLogs(max_num=2)
    for text in ("a", "b", "c"):
        logs.write(text)
    assert logs.logs == ["b", "c"]


def test_to_json_round_trip():
    logs = MemoryLogs()
    logs.write("first\n")
    logs.write("第二")
    assert json.loads(logs.to_json()) == ["first\n", "第二"]


def test_to_json_escapes_html():
    logs = MemoryLogs()
    logs.write("<a>")
    assert logs.to_json() == '["\\u003ca\\u003e"]'


def test_clear():
    logs = MemoryLogs()
    logs.write("x")
    logs.clear()
    assert logs.logs == []
    assert logs.to_json() == "[]"


def test_works_as_logging_stream():
    sink = MemoryLogs()
    logger = logging.getLogger("test_memlogs_stream")
    logger.propagate = False
    handler = logging.StreamHandler(sink)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        logger.info("hello")
    finally:
        logger.removeHandler(handler)
    assert sink.logs == ["hello\n"]