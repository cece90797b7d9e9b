import json
import logging
import os
import re
from typing import Any

from .settings import Settings

# Secrets carry tls.key next to tls.crt; none of it may reach a log line.
_SECRET_KV = re.compile(r"(pass(word|phrase)?|token|tls\.key|api[_-]?key)\s*[=:]\s*([^\s,;]+)", re.IGNORECASE)
_PEM_PRIV = re.compile(
    r"-----BEGIN (?:RSA |EC |ED25519 |ENCRYPTED )?PRIVATE KEY-----.*?-----END (?:RSA |EC |ED25519 |ENCRYPTED )?PRIVATE KEY-----",
    re.DOTALL | re.IGNORECASE,
)
_B64_BLOB = re.compile(r"[A-Za-z0-9+/]{200,}={0,2}")


def redact(msg: str) -> str:
    msg = _PEM_PRIV.sub("[REDACTED-PRIVATE-KEY]", msg)
    msg = _SECRET_KV.sub(lambda m: f"{m.group(1)}=[REDACTED]", msg)
    return _B64_BLOB.sub("[REDACTED-DATA]", msg)


class _Redact(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(redact(a) if isinstance(a, str) else a for a in record.args)
        return True


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _json_mode_from_env() -> bool:
    return os.getenv("CERTSTATUS_LOG_JSON", "false").lower() in ("1", "true", "yes")


def setup_logging(settings: Settings, json_mode: bool | None = None) -> None:
    """Install one stderr handler on the root logger; later calls are no-ops."""
    root = logging.getLogger()
    if getattr(root, "_certstatus_configured", False):
        return

    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)
    root.setLevel(level)

    if json_mode is None:
        json_mode = _json_mode_from_env()

    # stdout carries the MCP stdio transport
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(_Redact())
    handler.setFormatter(_JsonFormatter() if json_mode else logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    setattr(root, "_certstatus_configured", True)
