"""
CRM SDK Constants
Values shared by all SDK classes
"""

# Default GUID for new or unknown entity records
EMPTY_GUID = "00000000-0000-0000-0000-000000000000"

# Maximum number of records in a single RetrieveMultiple
MAX_CRM_RECORDS = 5000

_ORGANIZATION_SERVICE = "http://schemas.microsoft.com/xrm/2011/Contracts/Services/IOrganizationService"

# SOAP fault actions that Dynamics CRM can return
SOAP_FAULT_ACTIONS = (
    "http://www.w3.org/2005/08/addressing/soap/fault",
    "http://schemas.microsoft.com/net/2005/12/windowscommunicationfoundation/dispatcher/fault",
    f"{_ORGANIZATION_SERVICE}/ExecuteOrganizationServiceFaultFault",
    f"{_ORGANIZATION_SERVICE}/CreateOrganizationServiceFaultFault",
    f"{_ORGANIZATION_SERVICE}/RetrieveOrganizationServiceFaultFault",
    f"{_ORGANIZATION_SERVICE}/UpdateOrganizationServiceFaultFault",
    f"{_ORGANIZATION_SERVICE}/DeleteOrganizationServiceFaultFault",
    f"{_ORGANIZATION_SERVICE}/RetrieveMultipleOrganizationServiceFaultFault",
)


def is_soap_fault(action: str) -> bool:
    """Check whether a response action URI is a known SOAP fault"""
    if not action:
        return False
    return action.strip() in SOAP_FAULT_ACTIONS
