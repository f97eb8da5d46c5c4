# examgen/core/logging.py
import logging
import json
import sys
import re
from datetime import datetime, timezone
from typing import Any, Dict

logger = logging.getLogger("examgen")
logger.setLevel(logging.INFO)

# Secrets must never reach the log stream (SDK errors echo request URLs).
REDACT_PATTERNS = [
    (re.compile(r"(Authorization:\s*)(Basic|Bearer)\s+[A-Za-z0-9\-\._~\+\/]+=*", re.IGNORECASE), r"\1***REDACTED***"),
    (re.compile(r"([?&]key=)[A-Za-z0-9\-_]+"), r"\1***REDACTED***"),
    (re.compile(r"AIza[0-9A-Za-z\-_]{20,}"), "***REDACTED***"),
    (re.compile(r"sk-[A-Za-z0-9\-_]{16,}"), "***REDACTED***"),
]


def redact(text: str) -> str:
    if not isinstance(text, str):
        return text
    out = text
    for pat, repl in REDACT_PATTERNS:
        out = pat.sub(repl, out)
    return out


SAFE_ATTR_BLOCKLIST = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module", "msecs",
    "message", "msg", "name", "pathname", "process", "processName",
    "relativeCreated", "stack_info", "thread", "threadName", "taskName",
}


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line:
    {
      "ts": "2026-10-16T01:23:45.678Z",
      "ts_ms": 1792114225678,
      "level": "INFO",
      "logger": "examgen.pipeline",
      "msg": "exam_generate_done",
      "req_id": "...",
      "questions": 10,
      ... (extra)
    }
    """
    def format(self, record: logging.LogRecord) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "ts": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "ts_ms": int(now.timestamp() * 1000),
            "level": record.levelname,
            "logger": record.name,
        }

        payload["msg"] = redact(record.getMessage())

        for k, v in record.__dict__.items():
            if k in SAFE_ATTR_BLOCKLIST:
                continue
            if k == "trace_id" and "req_id" not in payload:
                payload["req_id"] = v
            else:
                payload[k] = redact(v) if isinstance(v, str) else v

        if record.exc_info:
            payload["exc_info"] = redact(self.formatException(record.exc_info))

        try:
            return json.dumps(payload, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            safe = {k: (str(v) if not isinstance(v, (str, int, float, bool, type(None), dict, list)) else v)
                    for k, v in payload.items()}
            return json.dumps(safe, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO") -> None:
    """
    - root and uvicorn loggers switched to the JSON formatter
    - output to stdout
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.addHandler(handler)
        lg.propagate = False
        lg.setLevel(level.upper())

    logger.setLevel(level.upper())
