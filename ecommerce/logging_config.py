import os
import logging
import pytz
from datetime import datetime

DEFAULT_TIMEZONE = 'Asia/Kolkata'

class TimezoneFormatter(logging.Formatter):
    def __init__(self, fmt=None, datefmt=None, timezone=DEFAULT_TIMEZONE):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.timezone = pytz.timezone(timezone)

    def formatTime(self, record, datefmt=None):
        # Render the timestamp in the configured zone rather than server local time
        record_time = datetime.fromtimestamp(record.created, self.timezone)
        return record_time.strftime(datefmt) if datefmt else record_time.isoformat()

def log_timezone():
    return os.getenv('LOG_TIMEZONE') or DEFAULT_TIMEZONE

def setup_logging():
    logger = logging.getLogger()
    if not logger.handlers:
        formatter = TimezoneFormatter(
            fmt='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
            timezone=log_timezone()
        )

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        logger.setLevel(logging.INFO)
        logger.addHandler(handler)

    return logger
