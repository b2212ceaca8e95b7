"""
CRM Timestamps
Formats envelope timestamps and parses timestamps returned by CRM
"""

import calendar
import os
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog

from .errors import TimestampMismatch, UnsupportedTimeFormat

logger = structlog.get_logger()

# How long an outgoing request stays valid
EXPIRY_WINDOW = timedelta(minutes=int(os.getenv("CRM_EXPIRY_MINUTES", "5")))

# CRM wants whole seconds with a literal ".00" and no offset
CRM_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
CRM_TIME_SUFFIX = ".00"

# strptime reports these for problems in the format string itself
_FORMAT_ERRORS = re.compile(r"bad directive|stray % in format")


def _utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def format_time(moment: datetime) -> str:
    """Format a datetime as a CRM envelope timestamp"""
    return _utc(moment).strftime(CRM_TIME_FORMAT) + CRM_TIME_SUFFIX


def get_current_time(now: Optional[datetime] = None) -> str:
    """Current UTC time, e.g. '2025-01-15T10:30:00.00'"""
    return format_time(_utc(now))


def get_expiry_time(now: Optional[datetime] = None) -> str:
    """Expiry time for a request created now"""
    return format_time(_utc(now) + EXPIRY_WINDOW)


def parse_time(timestamp: str, format_string: str) -> int:
    """
    Parse a timestamp into Unix seconds.

    Timestamps without an offset are taken as UTC.

    Args:
        timestamp: Timestamp text, e.g. '2025-01-15T10:30:00Z'
        format_string: strptime format, e.g. '%Y-%m-%dT%H:%M:%SZ'

    Raises:
        UnsupportedTimeFormat: if the format string is invalid
        TimestampMismatch: if the timestamp does not match the format
    """
    try:
        parsed = datetime.strptime(timestamp, format_string)
    except re.error as e:
        # Repeated directives such as '%Y %Y' fail while compiling the pattern
        raise UnsupportedTimeFormat(format_string, str(e)) from e
    except ValueError as e:
        if _FORMAT_ERRORS.search(str(e)):
            raise UnsupportedTimeFormat(format_string, str(e)) from e
        logger.debug("Timestamp did not match format", timestamp=timestamp, format=format_string)
        raise TimestampMismatch(timestamp, format_string) from e

    if parsed.tzinfo is not None:
        return int(parsed.timestamp())
    return calendar.timegm(parsed.timetuple())
