from pydantic import Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from concierge.schemas.base import CamelModel, Money, strip_string


class SiteBase(CamelModel):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    property_nickname: Optional[str] = None
    property_description: Optional[str] = None
    property_date_acquired: Optional[date] = None
    property_value_assessed: Optional[Money] = None
    property_value_mortgage_total: Optional[Money] = None
    mortgage_payment_principal: Optional[Money] = None
    mortgage_payment_interest: Optional[Money] = None

    @field_validator('name', 'address', mode='before')
    @classmethod
    def strip_strings(cls, v):
        return strip_string(v)


class SiteCreate(SiteBase):
    pass


class SiteUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = Field(None, min_length=1)
    property_nickname: Optional[str] = None
    property_description: Optional[str] = None
    property_date_acquired: Optional[date] = None
    property_value_assessed: Optional[Money] = None
    property_value_mortgage_total: Optional[Money] = None
    mortgage_payment_principal: Optional[Money] = None
    mortgage_payment_interest: Optional[Money] = None


class SiteOut(SiteBase):
    id: str
    property_value_assessed: Optional[Decimal] = None
    property_value_mortgage_total: Optional[Decimal] = None
    mortgage_payment_principal: Optional[Decimal] = None
    mortgage_payment_interest: Optional[Decimal] = None
    created_at: datetime
