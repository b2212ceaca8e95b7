"""
Entity Naming
Class names for CRM entities, namespace stripping and the entity registry
"""

import os
import re
from typing import Callable, Optional, TypeVar

import structlog

from .errors import UnknownEntity

logger = structlog.get_logger()

CLASS_PREFIX = os.getenv("CRM_CLASS_PREFIX", "CrmSDK")
CLASS_SUFFIX = "Entity"

# Namespace prefix on an XML attribute value, e.g. 'a:Incident'
NAMESPACE_PATTERN = re.compile(r"[a-zA-Z]+:([a-zA-Z]+)")

# First letter of each whitespace-separated word
_WORD_START = re.compile(r"(^|\s)(\S)")

T = TypeVar("T", bound=type)


def strip_ns(value: str) -> str:
    """Remove namespace prefixes from an XML attribute value"""
    return NAMESPACE_PATTERN.sub(r"\1", value)


def capitalise_entity_name(logical_name: str) -> str:
    """
    Capitalise each underscore-separated word of an entity logical name.

    e.g. 'mycompany_special_item' -> 'Mycompany_Special_Item'
    """
    words = logical_name.split("_")
    return "_".join(
        _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), word.lower())
        for word in words
    )


def get_class_name(logical_name: str) -> str:
    """
    SDK class name for an entity, e.g. 'incident' -> 'CrmSDK_Incident_Entity'.

    The class need not exist; see EntityRegistry.
    """
    return f"{CLASS_PREFIX}_{capitalise_entity_name(logical_name)}_{CLASS_SUFFIX}"


class EntityRegistry:
    """
    Maps entity logical names to the classes that handle them.

    Classes are registered explicitly at import time, either with
    register() or the entity() decorator.
    """

    def __init__(self):
        self._classes: dict[str, type] = {}

    def register(self, logical_name: str, cls: type) -> type:
        class_name = get_class_name(logical_name)
        existing = self._classes.get(class_name)
        if existing is not None and existing is not cls:
            logger.warning(
                "Replacing registered entity class",
                entity=logical_name,
                previous=existing.__name__,
                current=cls.__name__,
            )
        self._classes[class_name] = cls
        logger.debug("Registered entity class", entity=logical_name, class_name=class_name)
        return cls

    def entity(self, logical_name: str) -> Callable[[T], T]:
        """Class decorator registering the class for logical_name"""
        def decorator(cls: T) -> T:
            return self.register(logical_name, cls)
        return decorator

    def load_class(self, class_name: str) -> Optional[type]:
        """Registered class for an SDK class name, or None"""
        if not class_name.startswith(CLASS_PREFIX):
            return None
        return self._classes.get(class_name)

    def resolve(self, logical_name: str) -> type:
        """
        Class registered for an entity logical name.

        Raises:
            UnknownEntity: if nothing is registered for it
        """
        class_name = get_class_name(logical_name)
        cls = self.load_class(class_name)
        if cls is None:
            raise UnknownEntity(logical_name, class_name)
        return cls

    def __contains__(self, logical_name: str) -> bool:
        return get_class_name(logical_name) in self._classes

    def __len__(self) -> int:
        return len(self._classes)


# Default registry instance
default_registry = EntityRegistry()


def register_entity(logical_name: str) -> Callable[[T], T]:
    """Convenience decorator registering with the default registry"""
    return default_registry.entity(logical_name)
