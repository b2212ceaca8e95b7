"""
CRM SDK Errors
Exception types raised by the SDK utility layer
"""

from typing import Optional


class CRMSDKError(Exception):
    """Base class for all SDK errors"""


class MalformedNode(CRMSDKError, ValueError):
    """A key/value node is missing its key or value child"""

    def __init__(self, missing: str, key: Optional[str] = None):
        self.missing = missing
        self.key = key
        if key is None:
            message = f"Key/value node has no '{missing}' element"
        else:
            message = f"Key/value node '{key}' has no '{missing}' element"
        super().__init__(message)


class UnsupportedTimeFormat(CRMSDKError, ValueError):
    """The format string cannot be used to parse timestamps"""

    def __init__(self, format_string: str, reason: str = ""):
        self.format_string = format_string
        message = f"Unsupported time format: {format_string!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class TimestampMismatch(CRMSDKError, ValueError):
    """The timestamp does not match the format string"""

    def __init__(self, timestamp: str, format_string: str):
        self.timestamp = timestamp
        self.format_string = format_string
        super().__init__(f"Timestamp {timestamp!r} does not match format {format_string!r}")


class UnknownEntity(CRMSDKError, LookupError):
    """No class is registered for an entity logical name"""

    def __init__(self, logical_name: str, class_name: str):
        self.logical_name = logical_name
        self.class_name = class_name
        super().__init__(f"No class registered for entity '{logical_name}' ({class_name})")
