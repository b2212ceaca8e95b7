"""
Attribute Normalizer
Merges key/value pairs from CRM responses into attribute maps
"""

from typing import Any, Iterable, Iterator, Optional, Sequence
from xml.etree.ElementTree import Element

import structlog

from shared.schemas.attribute import (
    AttributeMap,
    AttributeValue,
    FormattedAttribute,
    KeyValueNode,
    SubKeyRecord,
)

from .errors import MalformedNode

logger = structlog.get_logger()


def local_name(tag: Any) -> str:
    """Tag name without its '{namespace}' or 'prefix:' qualifier"""
    if not isinstance(tag, str):
        return ""
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    return tag.rsplit(":", 1)[-1]


def _first_descendant(element: Element, name: str) -> Optional[Element]:
    for child in element.iter():
        if child is not element and local_name(child.tag) == name:
            return child
    return None


def parse_key_value_node(element: Element) -> KeyValueNode:
    """
    Read the key and value children of a key/value pair element.

    Raises:
        MalformedNode: if either child is missing
    """
    key_element = _first_descendant(element, "key")
    if key_element is None:
        raise MalformedNode("key")
    key = "".join(key_element.itertext())

    value_element = _first_descendant(element, "value")
    if value_element is None:
        raise MalformedNode("value", key=key)

    return KeyValueNode(key=key, value="".join(value_element.itertext()))


def find_key_value_nodes(
    root: Element,
    local_name_prefix: str = "KeyValuePairOf",
) -> Iterator[Element]:
    """
    Yield key/value pair elements below root in document order.

    Pairs nested inside another pair's value (e.g. the KeyAttributes of an
    EntityReference) belong to that value and are not yielded.
    """
    for child in root:
        if local_name(child.tag).startswith(local_name_prefix):
            yield child
        else:
            yield from find_key_value_nodes(child, local_name_prefix)


def _with_formatted(existing: AttributeValue, formatted: str) -> FormattedAttribute:
    """Attach a formatted value, keeping the raw value already stored"""
    if isinstance(existing, FormattedAttribute):
        return FormattedAttribute(value=existing.value, formatted_value=formatted)
    return FormattedAttribute(value=existing, formatted_value=formatted)


class AttributeNormalizer:
    """
    Merges CRM key/value pairs into a caller-owned attribute map.

    A raw value and its formatted counterpart arrive as two pairs sharing
    the same key, raw first. The second pair for a key is therefore stored
    as the formatted value of the first.

    Optionally, values are stored per sub-key (e.g. New/Old values of an
    audit detail); only the active sub-key is written by one merge call.
    """

    def merge(
        self,
        target: AttributeMap,
        nodes: Iterable[Element],
        sub_keys: Optional[Sequence[str]] = None,
        active_sub_key: Optional[str] = None,
    ) -> None:
        """
        Merge key/value nodes into target in place.

        Args:
            target: Attribute map to update
            nodes: Key/value pair elements
            sub_keys: Sub-key names to create on new records (e.g. New, Old)
            active_sub_key: Sub-key to write; required with sub_keys

        Raises:
            MalformedNode: if a node has no key or value child
            ValueError: if active_sub_key is not one of sub_keys
        """
        # An empty sub-key list means simple mode
        sub_keys = list(sub_keys) if sub_keys else None
        if sub_keys is not None and active_sub_key not in sub_keys:
            raise ValueError(
                f"Active sub-key {active_sub_key!r} is not one of {list(sub_keys)!r}"
            )

        merged = 0
        for element in nodes:
            node = parse_key_value_node(element)
            if sub_keys is None:
                self._merge_value(target, node)
            else:
                self._merge_sub_key_value(target, node, sub_keys, active_sub_key)
            merged += 1

        logger.debug(
            "Merged attribute values",
            nodes=merged,
            attributes=len(target),
            sub_key=active_sub_key,
        )

    def _merge_value(self, target: AttributeMap, node: KeyValueNode) -> None:
        if node.key not in target:
            target[node.key] = node.value
            return

        existing = target[node.key]
        if isinstance(existing, SubKeyRecord):
            raise TypeError(f"Attribute '{node.key}' holds sub-key values")
        target[node.key] = _with_formatted(existing, node.value)

    def _merge_sub_key_value(
        self,
        target: AttributeMap,
        node: KeyValueNode,
        sub_keys: Sequence[str],
        active_sub_key: str,
    ) -> None:
        if node.key not in target:
            record = SubKeyRecord.for_sub_keys(sub_keys)
            record[active_sub_key] = node.value
            target[node.key] = record
            return

        record = target[node.key]
        if not isinstance(record, SubKeyRecord):
            raise TypeError(f"Attribute '{node.key}' does not hold sub-key values")
        if active_sub_key not in record.slots:
            # Records created by an earlier merge with a narrower sub-key set
            record.slots[active_sub_key] = None

        if record.is_set(active_sub_key):
            record[active_sub_key] = _with_formatted(record[active_sub_key], node.value)
        else:
            record[active_sub_key] = node.value


def attributes_to_dict(target: AttributeMap) -> dict[str, Any]:
    """Render an attribute map as plain JSON-ready data"""
    result = {}
    for key, value in target.items():
        if isinstance(value, (FormattedAttribute, SubKeyRecord)):
            result[key] = value.to_crm()
        else:
            result[key] = value
    return result


# Default normalizer instance
default_normalizer = AttributeNormalizer()


def add_formatted_values(
    target: AttributeMap,
    nodes: Iterable[Element],
    sub_keys: Optional[Sequence[str]] = None,
    active_sub_key: Optional[str] = None,
) -> None:
    """Convenience function to merge key/value nodes into an attribute map"""
    default_normalizer.merge(target, nodes, sub_keys=sub_keys, active_sub_key=active_sub_key)
