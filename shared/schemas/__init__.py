"""Dynamics CRM SDK Shared Schemas"""

from .attribute import (
    AttributeMap,
    AttributeValue,
    FormattedAttribute,
    KeyValueNode,
    SubKeyRecord,
)

__all__ = [
    # Attribute schemas
    "AttributeMap",
    "AttributeValue",
    "FormattedAttribute",
    "KeyValueNode",
    "SubKeyRecord",
]
