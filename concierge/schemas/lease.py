from pydantic import Field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from concierge.schemas.base import CamelModel, Money


class LeaseCreate(CamelModel):
    resident_id: str = Field(min_length=1)
    space_id: str = Field(min_length=1)
    rental_amount: Money
    market_value: Money
    # start_date <= end_date is expected; a reversed range is accepted and yields no revenue events
    start_date: date
    end_date: date


class LeaseUpdate(CamelModel):
    # Updating a lease never regenerates its revenue events; see PUT /leases/{id}/funding
    rental_amount: Optional[Money] = None
    market_value: Optional[Money] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class LeaseOut(CamelModel):
    id: str
    resident_id: str
    space_id: str
    rental_amount: Decimal
    market_value: Decimal
    start_date: date
    end_date: date
    created_at: datetime


class FunderEntry(CamelModel):
    """One funder's committed monthly contribution to a lease."""
    funder_id: str = Field(min_length=1)
    amount: Money


class LeaseWithFundingCreate(CamelModel):
    lease: LeaseCreate
    funders: List[FunderEntry] = []


class LeaseFundingUpdate(CamelModel):
    funders: List[FunderEntry] = []


class LeaseWithFundingOut(CamelModel):
    lease: LeaseOut
    message: str
