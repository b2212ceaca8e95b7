import pytest
from structlog.testing import capture_logs

from services.crm import CRMBase, EMPTY_GUID, MAX_CRM_RECORDS
from services.crm.constants import SOAP_FAULT_ACTIONS, is_soap_fault
from shared.schemas.attribute import FormattedAttribute


class Incident(CRMBase):
    pass


def test_constants():
    assert CRMBase.EMPTY_GUID == EMPTY_GUID == "00000000-0000-0000-0000-000000000000"
    assert CRMBase.MAX_CRM_RECORDS == MAX_CRM_RECORDS == 5000
    assert len(CRMBase.SOAP_FAULT_ACTIONS) == 8


def test_soap_fault_actions():
    assert is_soap_fault("http://www.w3.org/2005/08/addressing/soap/fault")
    assert CRMBase.is_soap_fault(SOAP_FAULT_ACTIONS[-1] + " ")
    assert not is_soap_fault(
        "http://schemas.microsoft.com/xrm/2011/Contracts/Services/IOrganizationService/RetrieveResponse"
    )
    assert not is_soap_fault("")


def test_set_debug_applies_to_subclasses():
    Incident.set_debug(True)
    assert CRMBase.debug_mode is True
    assert Incident.debug_mode is True
    CRMBase.set_debug(False)
    assert Incident.debug_mode is False


def test_set_time_limit():
    Incident.set_time_limit(60)
    assert CRMBase.time_limit == 60
    with pytest.raises(ValueError):
        CRMBase.set_time_limit(-1)


def test_dump_only_logs_in_debug_mode():
    CRMBase.set_debug(False)
    with capture_logs() as logs:
        Incident.dump({"a": 1}, label="attrs")
    assert not [log for log in logs if log["event"] == "CRM SDK dump"]

    CRMBase.set_debug(True)
    with capture_logs() as logs:
        Incident.dump({"a": 1}, label="attrs")
    dumps = [log for log in logs if log["event"] == "CRM SDK dump"]
    assert dumps[0]["label"] == "attrs"
    assert dumps[0]["value"] == "{'a': 1}"
    assert dumps[0]["type"] == "dict"


def test_helpers_are_available_on_subclasses(make_nodes):
    assert Incident.get_class_name("incident").endswith("_Incident_Entity")
    assert Incident.strip_ns("a:Incident") == "Incident"
    assert Incident.get_current_time().endswith(".00")
    assert Incident.get_expiry_time().endswith(".00")
    assert Incident.parse_time("1970-01-01 00:01:00", "%Y-%m-%d %H:%M:%S") == 60
    assert Incident.get_uuid() != Incident.get_uuid()

    target = {}
    Incident.add_formatted_values(target, make_nodes(("prioritycode", "1"), ("prioritycode", "High")))
    assert target["prioritycode"] == FormattedAttribute(value="1", formatted_value="High")
