"""
Dynamics CRM SDK - Attribute Schemas

Models for attribute values parsed from CRM organization service responses
"""

from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, Field


class FormattedAttribute(BaseModel):
    """
    Raw attribute value paired with its human-readable rendering.

    CRM delivers the display form (e.g. a lookup's name instead of its GUID)
    as a second key/value pair sharing the attribute's key.
    """
    value: str = Field(..., alias="Value")
    formatted_value: str = Field(..., alias="FormattedValue")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "Value": "1",
                "FormattedValue": "Active",
            }
        }

    def to_crm(self) -> dict[str, str]:
        """Render with CRM field names"""
        return self.model_dump(by_alias=True)


# A raw value or a raw value with its formatted counterpart
AttributeValue = Union[str, FormattedAttribute]


class KeyValueNode(BaseModel):
    """One key/value pair read from a CRM response"""
    key: str
    value: str


class SubKeyRecord(BaseModel):
    """
    Attribute slots keyed by sub-key, e.g. the New and Old values of an
    audit detail. Every declared sub-key exists; unset slots hold None.
    """
    slots: dict[str, Optional[AttributeValue]] = Field(default_factory=dict)

    @classmethod
    def for_sub_keys(cls, sub_keys: Iterable[str]) -> "SubKeyRecord":
        return cls(slots={sub_key: None for sub_key in sub_keys})

    @property
    def sub_keys(self) -> list[str]:
        return list(self.slots)

    def is_set(self, sub_key: str) -> bool:
        return self.slots.get(sub_key) is not None

    def __getitem__(self, sub_key: str) -> Optional[AttributeValue]:
        return self.slots[sub_key]

    def __setitem__(self, sub_key: str, value: Optional[AttributeValue]) -> None:
        if sub_key not in self.slots:
            raise KeyError(sub_key)
        self.slots[sub_key] = value

    def to_crm(self) -> dict[str, Any]:
        """Render slots with CRM field names"""
        return {
            sub_key: value.to_crm() if isinstance(value, FormattedAttribute) else value
            for sub_key, value in self.slots.items()
        }


# Attribute logical name -> value, as filled in by the attribute normalizer
AttributeMap = dict[str, Union[AttributeValue, SubKeyRecord]]
