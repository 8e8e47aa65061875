import json
import logging
from types import SimpleNamespace
from datuum.utils.log import get_logger, JsonFormatter, logger_from_cfg

def test_json_formatter_merges_extra_fields():
    formatter = JsonFormatter()
    record = logging.LogRecord("t-json", logging.INFO, __file__, 1, "applied %s", ("bar",), None)
    record.archetype = "bar"
    record.issues = ["a", "b"]

    payload = json.loads(formatter.format(record))
    assert payload["message"] == "applied bar"
    assert payload["level"] == "INFO"
    assert payload["archetype"] == "bar"
    assert payload["issues"] == ["a", "b"]
    assert "time" in payload
    # plumbing attributes stay out
    assert "lineno" not in payload and "args" not in payload

def test_json_formatter_handles_unserializable_extra():
    record = logging.LogRecord("t-json", logging.INFO, __file__, 1, "x", (), None)
    record.when = object()
    payload = json.loads(JsonFormatter().format(record))
    assert isinstance(payload["when"], str)

def test_get_logger_idempotent_and_plain_mode():
    lg1 = get_logger("datuum-test", level="DEBUG", structured_json=True)
    lg2 = get_logger("datuum-test", level="INFO", structured_json=True)
    assert lg1 is lg2
    assert lg1.propagate is False
    lg3 = get_logger("datuum-plain", level="INFO", structured_json=False)
    assert not isinstance(lg3.handlers[0].formatter, JsonFormatter)

def test_logger_from_cfg_uses_logging_section():
    cfg = SimpleNamespace(logging=SimpleNamespace(level="WARNING", structured_json=False))
    lg = logger_from_cfg("datuum-cfg-test", cfg)
    assert lg.level == logging.WARNING
    assert logger_from_cfg("datuum-cfg-none") is get_logger("datuum-cfg-none")
