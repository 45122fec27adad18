import copy
import logging
from logging.config import dictConfig
from typing import Any, Mapping


class KeyValueFormatter(logging.Formatter):
    """
    Formatter that renders any 'extra' context added to the record
    as key=value pairs at the end of the log line.
    """
    # Attributes every LogRecord already carries
    _RESERVED = {
        'args', 'asctime', 'created', 'exc_info', 'exc_text', 'filename',
        'funcName', 'levelname', 'levelno', 'lineno', 'message', 'module',
        'msecs', 'msg', 'name', 'pathname', 'process', 'processName',
        'relativeCreated', 'stack_info', 'thread', 'threadName', 'taskName'
    }

    def format(self, record: logging.LogRecord) -> str:
        s = super().format(record)

        extras = {k: v for k, v in record.__dict__.items() if k not in self._RESERVED}
        if extras:
            # Sorted so log lines are stable
            context_str = " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
            s = f"{s} | {context_str}"

        return s


_DEFAULT_LOGGING_CONF = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "kv": {
            "()": KeyValueFormatter,
            "format": "%(asctime)s [%(levelname).1s] %(name)s | %(funcName)s | %(message)s"
        }
    },
    "handlers": {
        "stderr": {
            "class": "logging.StreamHandler",
            "formatter": "kv",
        }
    },
    "loggers": {
        "fluenthttp": {"level": "INFO", "handlers": ["stderr"]},
    },
}


def configure_logging(level: str | int = "INFO", **overrides) -> None:
    """
    Configure fluenthttp's logger.

    The library never calls this itself. Call it once from an application
    entry-point to get key=value formatted request logs on stderr.

    Args:
        level (str | int): Logging level to configure. Defaults to "INFO".
        **overrides: Top-level dictConfig keys to replace.
    """
    conf = copy.deepcopy({**_DEFAULT_LOGGING_CONF, **overrides})
    pkg = conf.setdefault("loggers", {}).setdefault("fluenthttp", {})
    pkg["level"] = level
    dictConfig(conf)


class RequestAdapter(logging.LoggerAdapter):
    """
    Inject request context (method, url) so the formatter never needs
    to know about request internals.
    """
    def process(self, msg: str, kwargs: Mapping[str, Any]):
        extra = self.extra.copy()
        extra.update(kwargs.pop("extra", {}))
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str, **ctx) -> RequestAdapter:
    base = logging.getLogger(name)
    # placeholders so the formatter always has something to print
    defaults = {"method": "-", "url": "-"}
    defaults.update(ctx)
    return RequestAdapter(base, defaults)
