import json
import sys

from loguru import logger as loguru_logger

from designsight.core.config import settings

# Remove default logger
loguru_logger.remove()


class CloudLoggingAdapter:
    """
    Sink that converts Loguru records to Cloud Logging compatible JSON lines
    """
    def __init__(self, stream=None):
        self.env = settings.ENV
        self.service_name = settings.PROJECT_NAME
        self.stream = stream or sys.stderr

    def write(self, message):
        record = message.record

        # Basic structure required by Cloud Logging
        cloud_log = {
            "severity": record["level"].name,
            "time": record["time"].isoformat(),
            "message": record["message"],
            "logger": record["name"],
            "logging.googleapis.com/labels": {
                "environment": self.env,
                "service": self.service_name
            }
        }

        # Fields attached with logger.bind()
        for k, v in record["extra"].items():
            cloud_log[k] = v

        if record["exception"] is not None:
            exc_type, exc_value, _ = record["exception"]
            cloud_log["exception"] = f"{exc_type.__name__ if exc_type else 'Exception'}: {exc_value}"

        print(json.dumps(cloud_log, default=str), file=self.stream)


def configure_logging(json_logs: bool = None, level: str = None) -> None:
    json_logs = settings.JSON_LOGS if json_logs is None else json_logs
    level = level or settings.LOG_LEVEL

    if json_logs:
        handler = {"sink": CloudLoggingAdapter().write, "level": level}
    else:
        handler = {
            "sink": sys.stderr,
            "level": level,
            "format": "{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {message}",
        }
    loguru_logger.configure(handlers=[handler])


configure_logging()

# Export the logger
logger = loguru_logger
