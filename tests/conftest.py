# tests/conftest.py
from xml.etree import ElementTree

import pytest
import structlog

from services.crm.base import CRMBase

CONTRACTS_NS = "http://schemas.microsoft.com/xrm/2011/Contracts"
GENERIC_NS = "http://schemas.datacontract.org/2004/07/System.Collections.Generic"


def pair_xml(key, value, kind="KeyValuePairOfstringanyType"):
    """One namespaced key/value pair as CRM sends it"""
    parts = []
    if key is not None:
        parts.append(f"<b:key>{key}</b:key>")
    if value is not None:
        parts.append(f"<b:value>{value}</b:value>")
    return f"<a:{kind}>{''.join(parts)}</a:{kind}>"


def wrap(body: str) -> str:
    return (
        f'<a:Entity xmlns:a="{CONTRACTS_NS}" xmlns:b="{GENERIC_NS}">'
        f"{body}"
        f"</a:Entity>"
    )


@pytest.fixture
def make_nodes():
    """Build key/value pair elements from (key, value) tuples"""
    def _make(*pairs):
        root = ElementTree.fromstring(wrap("".join(pair_xml(k, v) for k, v in pairs)))
        return list(root)
    return _make


@pytest.fixture
def response_xml():
    """Entity with raw attributes followed by their formatted values"""
    attributes = "".join([
        pair_xml("title", "Printer jammed"),
        pair_xml("statecode", "0"),
        pair_xml(
            "customerid",
            "<a:Id>5f1c0b6e-1b7a-4c1e-9d2e-0a1b2c3d4e5f</a:Id>"
            "<a:LogicalName>account</a:LogicalName>",
        ),
    ])
    formatted = "".join([
        pair_xml("statecode", "Active", kind="KeyValuePairOfstringstring"),
    ])
    return wrap(
        f"<a:Attributes>{attributes}</a:Attributes>"
        f"<a:FormattedValues>{formatted}</a:FormattedValues>"
    )


@pytest.fixture(autouse=True)
def reset_sdk_state():
    debug_mode = CRMBase.debug_mode
    time_limit = CRMBase.time_limit
    yield
    CRMBase.debug_mode = debug_mode
    CRMBase.time_limit = time_limit
    structlog.reset_defaults()
