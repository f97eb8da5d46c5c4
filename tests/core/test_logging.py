"""
Logging tests
"""
import json
import logging

import pytest

from examgen.core.logging import JsonFormatter, redact


def _record(msg, **extra) -> logging.LogRecord:
    record = logging.LogRecord("examgen.test", logging.INFO, __file__, 1, msg, None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


class TestJsonFormatter:

    def test_payload(self):
        out = json.loads(JsonFormatter().format(_record("exam_generate_done", trace_id="t-1", questions=3)))
        assert out["msg"] == "exam_generate_done"
        assert out["level"] == "INFO"
        assert out["logger"] == "examgen.test"
        assert out["req_id"] == "t-1"
        assert out["questions"] == 3
        assert out["ts"].endswith("Z")

    def test_non_serializable_extra(self):
        out = json.loads(JsonFormatter().format(_record("x", obj=object())))
        assert out["obj"].startswith("<object")

    def test_unicode_kept(self):
        line = JsonFormatter().format(_record("Questão difícil"))
        assert "Questão difícil" in line


class TestRedact:

    @pytest.mark.parametrize("text", [
        "GET https://generativelanguage.googleapis.com/v1beta/models?key=AIzaSyA1234567890abcdefghijklmnopqrs",
        "invalid key AIzaSyA1234567890abcdefghijklmnopqrs",
        "Authorization: Bearer abc.def.ghi",
        "Incorrect API key provided: sk-proj-abcdefghijklmnop1234",
    ])
    def test_secrets_removed(self, text):
        out = redact(text)
        assert "AIzaSyA1234567890" not in out
        assert "abc.def.ghi" not in out
        assert "sk-proj-abcdefghijklmnop" not in out
        assert "REDACTED" in out

    def test_extra_fields_redacted(self):
        line = JsonFormatter().format(_record("llm_attempt_failed", error="bad key=AIzaSyA1234567890abcdefghijklmnopqrs"))
        assert "AIzaSyA1234567890" not in line

    def test_plain_text_untouched(self):
        assert redact("Direito Administrativo") == "Direito Administrativo"
