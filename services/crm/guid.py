"""
Message ID Generator
Produces GUIDs for SOAP message correlation headers
"""

import hashlib
import itertools
import os
import threading
import time
import uuid
from typing import Optional

import structlog
from pydantic import BaseModel

logger = structlog.get_logger()

# Client details mixed into every GUID
CRM_USER_AGENT = os.getenv("CRM_USER_AGENT", "dynamics-crm-sdk")
CRM_REMOTE_ADDR = os.getenv("CRM_REMOTE_ADDR", "")
CRM_REMOTE_PORT = os.getenv("CRM_REMOTE_PORT", "")


class RequestContext(BaseModel):
    """Details of the request a GUID is generated for"""
    # None stamps each GUID with the time it is generated
    request_time: Optional[int] = None
    user_agent: str = CRM_USER_AGENT
    remote_addr: str = ""
    remote_port: str = ""

    @classmethod
    def from_environment(cls) -> "RequestContext":
        return cls(
            user_agent=CRM_USER_AGENT,
            remote_addr=CRM_REMOTE_ADDR,
            remote_port=CRM_REMOTE_PORT,
        )

    def fingerprint(self) -> str:
        request_time = self.request_time if self.request_time is not None else int(time.time())
        return f"{request_time}{self.user_agent}{self.remote_addr}{self.remote_port}"


class GuidGenerator:
    """
    Generates 8-4-4-4-12 upper-case hex GUIDs.

    Each GUID hashes a process-unique ID, a counter, the current time,
    the request context and the previously generated GUID, so consecutive
    calls never repeat. Not suitable where unpredictability matters.
    """

    def __init__(self, context: Optional[RequestContext] = None):
        self.context = context or RequestContext.from_environment()
        self._process_id = f"{os.getpid()}.{uuid.uuid4().hex}"
        self._counter = itertools.count()
        self._previous = ""
        self._lock = threading.Lock()

    @property
    def previous(self) -> str:
        """Last generated GUID (empty before the first call)"""
        return self._previous

    def generate(self, namespace: str = "") -> str:
        """
        Generate the next GUID.

        Args:
            namespace: Extra seed text mixed into the hash

        Returns:
            GUID string such as 'A1B2C3D4-E5F6-0718-293A-4B5C6D7E8F90'
        """
        context_hash = hashlib.md5(
            (namespace + self.context.fingerprint()).encode()
        ).hexdigest()

        with self._lock:
            unique = f"{self._process_id}.{next(self._counter)}.{time.time_ns()}"
            digest = hashlib.sha256(
                (unique + self._previous + context_hash).encode()
            ).hexdigest().upper()
            guid = "-".join(
                (digest[0:8], digest[8:12], digest[12:16], digest[16:20], digest[20:32])
            )
            self._previous = guid

        logger.debug("Generated message GUID", guid=guid)
        return guid


# Default generator instance (created on first use)
default_generator: Optional[GuidGenerator] = None
_default_lock = threading.Lock()


def get_generator() -> GuidGenerator:
    """Get or create the default generator"""
    global default_generator
    with _default_lock:
        if default_generator is None:
            default_generator = GuidGenerator()
    return default_generator


def get_uuid(namespace: str = "") -> str:
    """Convenience function to generate a GUID with the default generator"""
    return get_generator().generate(namespace)
