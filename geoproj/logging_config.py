import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional

# Context fields promoted to top-level keys in structured logs
CONTEXT_FIELDS = ('crs', 'srid', 'phase', 'geometry_type', 'coordinate_count')

_RESERVED = ('name', 'msg', 'args', 'levelname', 'levelno',
             'pathname', 'filename', 'module', 'exc_info',
             'exc_text', 'stack_info', 'lineno', 'funcName',
             'created', 'msecs', 'relativeCreated', 'thread',
             'threadName', 'processName', 'process', 'getMessage',
             'taskName', 'message', 'asctime') + CONTEXT_FIELDS


class StructuredJSONFormatter(logging.Formatter):
    """Formatter emitting one JSON object per log record"""

    def __init__(self, service_name: str = "geoproj"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        # Add exception details if present
        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        # Add extra fields from record
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith('_'):
                log_entry.setdefault("extra", {})[key] = value

        return json.dumps(log_entry, default=str, separators=(',', ':'))


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter for development"""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s | %(levelname)8s | %(name)28s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def setup_logging(
    level: Optional[str] = None,
    use_json: Optional[bool] = None,
    service_name: str = "geoproj"
) -> None:
    """Setup logging for an application using geoproj.

    The library itself never calls this; level and format default to the
    LOG_LEVEL and LOG_FORMAT settings.
    """
    from .config import get_settings

    settings = get_settings()
    if level is None:
        level = settings.LOG_LEVEL
    if use_json is None:
        use_json = settings.LOG_FORMAT == "json"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    if use_json:
        formatter = StructuredJSONFormatter(service_name)
    else:
        formatter = DevelopmentFormatter()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    configure_geoproj_loggers(level)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured",
        extra={
            "log_format": "json" if use_json else "development",
            "log_level": level,
            "service": service_name
        }
    )


def configure_geoproj_loggers(level: str) -> None:
    """Configure geoproj loggers and quieten third-party ones"""
    loggers = [
        'geoproj.services.crs_resolver',
        'geoproj.services.crs_service',
        'geoproj.services.transform_service',
        'geoproj.config',
    ]

    for logger_name in loggers:
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))

    # Suppress noisy third-party loggers
    logging.getLogger('pyproj').setLevel(logging.WARNING)
    logging.getLogger('shapely').setLevel(logging.WARNING)


class TransformContextAdapter(logging.LoggerAdapter):
    """Merges the adapter's crs/srid context into each call's extra"""

    def process(self, msg, kwargs):
        kwargs['extra'] = {**kwargs.get('extra', {}), **self.extra}
        return msg, kwargs


def get_transform_logger(crs1, crs2, srid: Optional[int] = None) -> TransformContextAdapter:
    """Get logger with transformation context"""
    context = {'crs': {'source': crs1, 'target': crs2}}
    if srid is not None:
        context['srid'] = srid
    return TransformContextAdapter(logging.getLogger('geoproj.services.transform_service'), context)
