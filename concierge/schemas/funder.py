from pydantic import Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from concierge.schemas.base import CamelModel, strip_string


class FunderCreate(CamelModel):
    name: str = Field(min_length=1)   # "City Housing Voucher", "Guarantor", ...
    description: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return strip_string(v)


class FunderUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class FunderOut(CamelModel):
    id: str
    name: str
    description: Optional[str]
    created_at: datetime


class LeaseFunderOut(CamelModel):
    id: str
    lease_id: str
    funder_id: str
    amount: Decimal
    created_at: datetime


class RevenueEventOut(CamelModel):
    id: str
    lease_id: str
    funder_id: str
    amount: Decimal
    event_date: date   # always the 1st of the month
    month: str         # "YYYY-MM"
    created_at: datetime
