from decimal import Decimal
from typing import List, Optional

from concierge.schemas.base import CamelModel


class RevenueMonthPoint(CamelModel):
    """Expected revenue for one calendar month."""
    month: str
    amount: Decimal = Decimal("0.00")
    event_count: int = 0


class RevenueFunderItem(CamelModel):
    """Expected revenue contributed by one funder over the range."""
    funder_id: str
    funder_name: Optional[str] = None
    amount: Decimal = Decimal("0.00")


class RevenueReportOut(CamelModel):
    """Full revenue report response."""
    total: Decimal = Decimal("0.00")
    months: List[RevenueMonthPoint] = []
    funders: List[RevenueFunderItem] = []
