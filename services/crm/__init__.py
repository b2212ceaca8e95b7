"""
Dynamics CRM SDK Core
Utility layer shared by the organization service SDK classes

Components:
- normalizer.py: AttributeNormalizer for merging formatted values into attribute maps
- guid.py: GuidGenerator for SOAP message IDs
- timeutil.py: Envelope timestamps and timestamp parsing
- naming.py: Entity class names, namespace stripping and EntityRegistry
- base.py: CRMBase with SDK-wide settings
- cli.py: Command-line interface over the utilities
"""

from .base import CRMBase
from .constants import EMPTY_GUID, MAX_CRM_RECORDS, SOAP_FAULT_ACTIONS, is_soap_fault
from .errors import (
    CRMSDKError,
    MalformedNode,
    TimestampMismatch,
    UnknownEntity,
    UnsupportedTimeFormat,
)
from .guid import GuidGenerator, RequestContext, get_uuid
from .naming import (
    EntityRegistry,
    capitalise_entity_name,
    default_registry,
    get_class_name,
    register_entity,
    strip_ns,
)
from .normalizer import (
    AttributeNormalizer,
    add_formatted_values,
    attributes_to_dict,
    find_key_value_nodes,
    parse_key_value_node,
)
from .timeutil import get_current_time, get_expiry_time, parse_time

__all__ = [
    # Base class
    "CRMBase",
    # Constants
    "EMPTY_GUID",
    "MAX_CRM_RECORDS",
    "SOAP_FAULT_ACTIONS",
    "is_soap_fault",
    # Errors
    "CRMSDKError",
    "MalformedNode",
    "TimestampMismatch",
    "UnknownEntity",
    "UnsupportedTimeFormat",
    # GUIDs
    "GuidGenerator",
    "RequestContext",
    "get_uuid",
    # Naming
    "EntityRegistry",
    "capitalise_entity_name",
    "default_registry",
    "get_class_name",
    "register_entity",
    "strip_ns",
    # Attribute normalizer
    "AttributeNormalizer",
    "add_formatted_values",
    "attributes_to_dict",
    "find_key_value_nodes",
    "parse_key_value_node",
    # Timestamps
    "get_current_time",
    "get_expiry_time",
    "parse_time",
]
