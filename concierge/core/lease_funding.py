"""
Lease funding and revenue recognition.

A lease is funded by one or more funders, each committing a monthly amount.
Creating a funded lease writes the lease, one LeaseFunder row per funder
entry, and one RevenueEvent per (month of the lease term) x (funder entry).
All of it is committed together or not at all.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from concierge.core.config import settings
from concierge.models.funder import LeaseFunder, RevenueEvent
from concierge.models.lease import Lease
from concierge.schemas.lease import FunderEntry, LeaseCreate

logger = logging.getLogger(__name__)


class LeaseFundingError(Exception):
    """The funded lease could not be written; nothing was persisted."""


class FundingMismatchError(LeaseFundingError):
    def __init__(self, gap: Decimal):
        self.gap = gap
        super().__init__(f"Funding total differs from market value by {gap}")


def first_of_month(d: date) -> date:
    return d.replace(day=1)


def _next_month_start(d: date) -> date:
    """1st of the following month. Dec -> Jan of next year."""
    if d.month == 12:
        return date(d.year + 1, 1, 1)
    return date(d.year, d.month + 1, 1)


def month_starts(start_date: date, end_date: date) -> List[date]:
    """
    First day of every calendar month touched by [start_date, end_date].

    Both boundary months count in full, so 2025-01-15..2025-03-02 gives
    Jan, Feb and Mar. A reversed range gives no months.
    """
    current = first_of_month(start_date)
    last = first_of_month(end_date)
    months = []
    while current <= last:
        months.append(current)
        if current == last:
            break  # no step past the final month (9999-12 has no successor)
        current = _next_month_start(current)
    return months


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def funding_gap(market_value: Decimal, funders: Iterable[FunderEntry]) -> Decimal:
    """market value minus the sum of the funder amounts (negative when over-funded)."""
    total = sum((f.amount for f in funders), Decimal("0"))
    return Decimal(market_value) - total


def _check_funding(market_value: Decimal, funders: Sequence[FunderEntry], lease_label: str) -> None:
    gap = funding_gap(market_value, funders)
    if gap == 0:
        return
    logger.warning("Lease %s funding differs from market value by %s", lease_label, gap)
    if settings.ENFORCE_FUNDING_BALANCE:
        raise FundingMismatchError(gap)


def _add_funding_rows(db: Session, lease: Lease, funders: Sequence[FunderEntry]) -> int:
    """
    Insert LeaseFunder and RevenueEvent rows for `lease`. Caller owns the transaction.

    Funder entries are inserted in the order given, duplicates included. The
    amount is a monthly rate, so every month gets it unchanged.
    Returns the number of revenue events added.
    """
    for entry in funders:
        db.add(LeaseFunder(lease_id=lease.id, funder_id=entry.funder_id, amount=entry.amount))
    db.flush()

    months = month_starts(lease.start_date, lease.end_date)
    if not months:
        logger.warning(
            "Lease %s ends (%s) before it starts (%s); no revenue events generated",
            lease.id, lease.end_date, lease.start_date,
        )

    count = 0
    for month_start in months:
        for entry in funders:
            db.add(
                RevenueEvent(
                    lease_id=lease.id,
                    funder_id=entry.funder_id,
                    amount=entry.amount,
                    event_date=month_start,
                    month=month_key(month_start),
                )
            )
            count += 1
    db.flush()
    return count


def create_lease_with_funding(
    db: Session,
    lease_in: LeaseCreate,
    funders: Sequence[FunderEntry],
) -> Lease:
    """
    Persist a lease, its funders and its monthly revenue events in one transaction.

    Raises:
        FundingMismatchError: funders don't cover market value and the balance is enforced
        LeaseFundingError: any database failure; the session is rolled back
    """
    _check_funding(lease_in.market_value, funders, lease_label="(new)")

    try:
        lease = Lease(**lease_in.model_dump())
        db.add(lease)
        db.flush()  # assigns lease.id for the child rows

        event_count = _add_funding_rows(db, lease, funders)
        db.commit()
    except (SQLAlchemyError, ValueError, OverflowError) as e:
        db.rollback()
        logger.error("Lease funding rolled back: %s", e)
        raise LeaseFundingError("Failed to create lease with funding") from e

    db.refresh(lease)
    logger.info(
        "Created lease %s with %d funder(s) and %d revenue event(s)",
        lease.id, len(funders), event_count,
    )
    return lease


def delete_lease_funding(db: Session, lease_id: str) -> None:
    """Bulk-delete a lease's revenue events and funder rows. Caller owns the transaction."""
    db.query(RevenueEvent).filter(RevenueEvent.lease_id == lease_id).delete(synchronize_session=False)
    db.query(LeaseFunder).filter(LeaseFunder.lease_id == lease_id).delete(synchronize_session=False)


def replace_lease_funding(db: Session, lease: Lease, funders: Sequence[FunderEntry]) -> Lease:
    """
    Recompute funding for an existing lease from its current dates.

    Existing LeaseFunder and RevenueEvent rows are dropped and regenerated
    atomically; the lease row itself is untouched.
    """
    _check_funding(lease.market_value, funders, lease_label=lease.id)

    try:
        delete_lease_funding(db, lease.id)
        event_count = _add_funding_rows(db, lease, funders)
        db.commit()
    except (SQLAlchemyError, ValueError, OverflowError) as e:
        db.rollback()
        logger.error("Funding recompute for lease %s rolled back: %s", lease.id, e)
        raise LeaseFundingError("Failed to update lease funding") from e

    db.refresh(lease)
    logger.info(
        "Recomputed funding for lease %s: %d funder(s), %d revenue event(s)",
        lease.id, len(funders), event_count,
    )
    return lease
