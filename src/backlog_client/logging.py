import logging
import re
from typing import Any

# Extras emitted by BacklogClient, in output order.
LOG_EXTRA_FIELDS = (
    "operation",
    "method",
    "path",
    "status",
    "duration_ms",
    "error_codes",
    "content_type",
    "size",
)

_API_KEY_RE = re.compile(r"(apiKey=)[^&\s\"]+")


def mask_api_key(text: str) -> str:
    """'...?apiKey=abc&count=5' -> '...?apiKey=***&count=5'"""
    return _API_KEY_RE.sub(r"\1***", text)


class LogfmtFormatter(logging.Formatter):
    """
    logfmt lines for client events, e.g.

        level=debug logger=backlog_client.client event=api.error
        operation=GetProjectParams method=GET path=/api/v2/projects/X
        status=404 error_codes=6

    Missing extras are skipped. An api key that slips into a message or
    value is masked.
    """

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info and record.exc_info[0] is not None:
            kv.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(kv)

    @classmethod
    def _fmt_val(cls, val: Any) -> str:
        if isinstance(val, bool):
            return "true" if val else "false"
        if isinstance(val, (int, float)):
            return str(val)
        if isinstance(val, (list, tuple)):
            return cls._fmt_val(",".join(str(v) for v in val))
        s = mask_api_key(str(val))
        if not s or any(c in s for c in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO") -> None:
    """Route root logging through the logfmt formatter."""

    root = logging.getLogger()
    # Avoid duplicate handlers if called twice
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS", "mask_api_key"]
