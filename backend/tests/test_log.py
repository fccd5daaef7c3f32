import json
import logging

from newsletter.log import StructuredFormatter


def _record(**extra):
    record = logging.LogRecord(
        name="newsletter.email_resend",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Email accepted by provider",
        args=(),
        exc_info=None,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_extra_fields_become_top_level_keys():
    out = json.loads(StructuredFormatter().format(_record(message_id="abc", to="user@example.com")))

    assert out["level"] == "INFO"
    assert out["logger"] == "newsletter.email_resend"
    assert out["message"] == "Email accepted by provider"
    assert out["message_id"] == "abc"
    assert out["to"] == "user@example.com"


def test_extra_fields_do_not_overwrite_base_keys():
    out = json.loads(StructuredFormatter().format(_record(level="custom")))

    assert out["level"] == "INFO"
    assert out["extra_level"] == "custom"
