#!/usr/bin/env python3
"""
CRM SDK CLI
Command-line access to the SDK utilities
"""

import argparse
import json
import logging
import sys
from typing import Optional
from xml.etree import ElementTree

import structlog

from services.crm.errors import CRMSDKError
from services.crm.guid import GuidGenerator
from services.crm.naming import get_class_name, strip_ns
from services.crm.normalizer import (
    AttributeNormalizer,
    attributes_to_dict,
    find_key_value_nodes,
)
from services.crm.timeutil import get_current_time, get_expiry_time, parse_time

logger = structlog.get_logger()


def configure_logging(debug: bool = False):
    """Filter log output to INFO, or DEBUG when requested"""
    level = logging.DEBUG if debug else logging.INFO
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


def generate_uuids(count: int, namespace: str = "") -> list[str]:
    """Generate a run of message GUIDs"""
    generator = GuidGenerator()
    return [generator.generate(namespace) for _ in range(count)]


def envelope_times() -> dict[str, str]:
    """Created/expires pair for a request envelope"""
    return {"created": get_current_time(), "expires": get_expiry_time()}


def attributes_from_file(
    input_file: str,
    prefix: str = "KeyValuePairOf",
    output_file: Optional[str] = None,
) -> dict:
    """Merge the key/value pairs of a CRM response file into an attribute map"""
    print(f"Reading key/value pairs from {input_file}...", file=sys.stderr)

    root = ElementTree.parse(input_file).getroot()
    nodes = list(find_key_value_nodes(root, prefix))

    attributes = {}
    AttributeNormalizer().merge(attributes, nodes)
    result = attributes_to_dict(attributes)

    print(f"✅ Merged {len(nodes)} pairs into {len(result)} attributes", file=sys.stderr)

    if output_file:
        with open(output_file, "w") as f:
            json.dump(result, f, indent=2)
        print(f"   Saved to {output_file}", file=sys.stderr)

    return result


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Dynamics CRM SDK utilities")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # UUID command
    uuid_parser = subparsers.add_parser("uuid", help="Generate message GUIDs")
    uuid_parser.add_argument("--count", "-n", type=int, default=1, help="Number of GUIDs")
    uuid_parser.add_argument("--namespace", default="", help="Extra seed text")

    # Time command
    subparsers.add_parser("time", help="Print envelope created/expires timestamps")

    # Class name command
    class_parser = subparsers.add_parser("class-name", help="SDK class names for entities")
    class_parser.add_argument("names", nargs="+", help="Entity logical names")

    # Namespace command
    ns_parser = subparsers.add_parser("strip-ns", help="Strip XML namespace prefixes")
    ns_parser.add_argument("values", nargs="+", help="Attribute values")

    # Parse time command
    parse_parser = subparsers.add_parser("parse-time", help="Parse a timestamp to Unix seconds")
    parse_parser.add_argument("timestamp", help="Timestamp text")
    parse_parser.add_argument("format", help="strptime format string")

    # Attributes command
    attr_parser = subparsers.add_parser("attributes", help="Merge key/value pairs from a response")
    attr_parser.add_argument("input", help="CRM response XML file")
    attr_parser.add_argument("--prefix", default="KeyValuePairOf", help="Pair element name prefix")
    attr_parser.add_argument("--output", "-o", help="Output JSON file")

    args = parser.parse_args(argv)
    configure_logging(args.debug)

    try:
        if args.command == "uuid":
            for value in generate_uuids(args.count, args.namespace):
                print(value)

        elif args.command == "time":
            print(json.dumps(envelope_times(), indent=2))

        elif args.command == "class-name":
            for name in args.names:
                print(get_class_name(name))

        elif args.command == "strip-ns":
            for value in args.values:
                print(strip_ns(value))

        elif args.command == "parse-time":
            print(parse_time(args.timestamp, args.format))

        elif args.command == "attributes":
            result = attributes_from_file(args.input, args.prefix, args.output)
            if not args.output:
                print(json.dumps(result, indent=2))

    except CRMSDKError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        return 1
    except (OSError, ElementTree.ParseError) as e:
        logger.error("Could not read input", command=args.command, error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
