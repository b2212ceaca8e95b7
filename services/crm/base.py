"""
CRM SDK Base Class
Common settings and helpers shared by SDK classes
"""

import os
from datetime import datetime
from typing import Any, ClassVar, Iterable, Optional, Sequence
from xml.etree.ElementTree import Element

import structlog

from shared.schemas.attribute import AttributeMap

from . import guid, naming, normalizer, timeutil
from .constants import EMPTY_GUID, MAX_CRM_RECORDS, SOAP_FAULT_ACTIONS, is_soap_fault

logger = structlog.get_logger()

# Configuration from environment
CRM_DEBUG = os.getenv("CRM_DEBUG", "").lower() in {"1", "true", "yes", "on"}
CRM_TIME_LIMIT = int(os.getenv("CRM_TIME_LIMIT", "240"))


class CRMBase:
    """
    Base class for SDK classes.

    Holds the SDK-wide debug and time limit settings and exposes the
    utility helpers (names, timestamps, GUIDs, attribute merging) to
    subclasses.
    """

    EMPTY_GUID: ClassVar[str] = EMPTY_GUID
    MAX_CRM_RECORDS: ClassVar[int] = MAX_CRM_RECORDS
    SOAP_FAULT_ACTIONS: ClassVar[tuple[str, ...]] = SOAP_FAULT_ACTIONS

    debug_mode: ClassVar[bool] = CRM_DEBUG
    time_limit: ClassVar[int] = CRM_TIME_LIMIT

    @classmethod
    def set_debug(cls, debug_mode: bool) -> None:
        """Enable or disable debug output for all SDK classes"""
        CRMBase.debug_mode = bool(debug_mode)
        logger.info("CRM SDK debug mode changed", debug=CRMBase.debug_mode)

    @classmethod
    def set_time_limit(cls, time_limit: int) -> None:
        """Set the maximum execution time in seconds"""
        if time_limit < 0:
            raise ValueError(f"Time limit must not be negative, got {time_limit}")
        CRMBase.time_limit = time_limit

    @classmethod
    def dump(cls, value: Any, label: str = "value") -> None:
        """Log a value for inspection when debug mode is on"""
        if CRMBase.debug_mode:
            logger.debug("CRM SDK dump", label=label, value=repr(value), type=type(value).__name__)

    @staticmethod
    def get_class_name(logical_name: str) -> str:
        return naming.get_class_name(logical_name)

    @staticmethod
    def strip_ns(value: str) -> str:
        return naming.strip_ns(value)

    @staticmethod
    def get_current_time(now: Optional[datetime] = None) -> str:
        return timeutil.get_current_time(now)

    @staticmethod
    def get_expiry_time(now: Optional[datetime] = None) -> str:
        return timeutil.get_expiry_time(now)

    @staticmethod
    def parse_time(timestamp: str, format_string: str) -> int:
        return timeutil.parse_time(timestamp, format_string)

    @staticmethod
    def get_uuid(namespace: str = "") -> str:
        return guid.get_uuid(namespace)

    @staticmethod
    def is_soap_fault(action: str) -> bool:
        return is_soap_fault(action)

    @staticmethod
    def add_formatted_values(
        target: AttributeMap,
        nodes: Iterable[Element],
        sub_keys: Optional[Sequence[str]] = None,
        active_sub_key: Optional[str] = None,
    ) -> None:
        normalizer.add_formatted_values(target, nodes, sub_keys, active_sub_key)
