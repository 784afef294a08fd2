"""
Unit tests for month enumeration, funding balance and the funded-lease service.
"""

from datetime import date
from decimal import Decimal

import pytest

from concierge.core import lease_funding
from concierge.core.lease_funding import (
    FundingMismatchError,
    LeaseFundingError,
    create_lease_with_funding,
    funding_gap,
    month_key,
    month_starts,
    replace_lease_funding,
)
from concierge.models.funder import LeaseFunder, RevenueEvent
from concierge.models.lease import Lease
from concierge.schemas.lease import FunderEntry, LeaseCreate


# =============================================================================
# month_starts / month_key
# =============================================================================

class TestMonthStarts:
    def test_partial_boundary_months_count_in_full(self):
        assert month_starts(date(2025, 1, 15), date(2025, 3, 2)) == [
            date(2025, 1, 1),
            date(2025, 2, 1),
            date(2025, 3, 1),
        ]

    def test_same_month(self):
        assert month_starts(date(2025, 6, 10), date(2025, 6, 20)) == [date(2025, 6, 1)]

    def test_crosses_year_end(self):
        months = month_starts(date(2024, 11, 30), date(2025, 2, 1))
        assert [month_key(m) for m in months] == ["2024-11", "2024-12", "2025-01", "2025-02"]

    def test_reversed_range_is_empty(self):
        assert month_starts(date(2025, 5, 1), date(2025, 4, 30)) == []

    def test_full_year(self):
        assert len(month_starts(date(2025, 1, 1), date(2025, 12, 31))) == 12

    def test_month_key_is_zero_padded(self):
        assert month_key(date(2025, 3, 1)) == "2025-03"

    def test_last_representable_month(self):
        months = month_starts(date(9999, 11, 15), date(9999, 12, 31))

        assert [month_key(m) for m in months] == ["9999-11", "9999-12"]


# =============================================================================
# funding_gap
# =============================================================================

class TestFundingGap:
    def test_balanced(self):
        entries = [
            FunderEntry(funder_id="a", amount=Decimal("850.00")),
            FunderEntry(funder_id="b", amount=Decimal("350.00")),
        ]
        assert funding_gap(Decimal("1200.00"), entries) == 0

    def test_under_funded_is_positive(self):
        entries = [FunderEntry(funder_id="a", amount=Decimal("1000.00"))]
        assert funding_gap(Decimal("1200.00"), entries) == Decimal("200.00")

    def test_over_funded_is_negative(self):
        entries = [FunderEntry(funder_id="a", amount=Decimal("1300.00"))]
        assert funding_gap(Decimal("1200.00"), entries) == Decimal("-100.00")

    def test_no_funders(self):
        assert funding_gap(Decimal("1200.00"), []) == Decimal("1200.00")


# =============================================================================
# create_lease_with_funding / replace_lease_funding
# =============================================================================

@pytest.fixture
def lease_in(resident, space):
    return LeaseCreate(
        resident_id=resident.id,
        space_id=space.id,
        rental_amount=Decimal("350.00"),
        market_value=Decimal("1200.00"),
        start_date=date(2025, 1, 15),
        end_date=date(2025, 3, 2),
    )


class TestCreateLeaseWithFunding:
    def test_writes_lease_funders_and_events(self, db, lease_in, funders):
        entries = [
            FunderEntry(funder_id=funders[0].id, amount=Decimal("850.00")),
            FunderEntry(funder_id=funders[1].id, amount=Decimal("350.00")),
        ]

        lease = create_lease_with_funding(db, lease_in, entries)

        assert db.query(LeaseFunder).filter(LeaseFunder.lease_id == lease.id).count() == 2
        events = db.query(RevenueEvent).filter(RevenueEvent.lease_id == lease.id).all()
        assert len(events) == 6
        assert {e.month for e in events} == {"2025-01", "2025-02", "2025-03"}
        assert all(e.event_date.day == 1 for e in events)

    def test_unknown_funder_rolls_everything_back(self, db, lease_in, funders):
        entries = [
            FunderEntry(funder_id=funders[0].id, amount=Decimal("400.00")),
            FunderEntry(funder_id="no-such-funder", amount=Decimal("400.00")),
            FunderEntry(funder_id=funders[2].id, amount=Decimal("400.00")),
        ]

        with pytest.raises(LeaseFundingError):
            create_lease_with_funding(db, lease_in, entries)

        assert db.query(Lease).count() == 0
        assert db.query(LeaseFunder).count() == 0
        assert db.query(RevenueEvent).count() == 0

    def test_imbalance_is_tolerated_by_default(self, db, lease_in, funders):
        entries = [FunderEntry(funder_id=funders[0].id, amount=Decimal("100.00"))]

        lease = create_lease_with_funding(db, lease_in, entries)

        assert lease.id is not None

    def test_imbalance_rejected_when_enforced(self, db, lease_in, funders, monkeypatch):
        monkeypatch.setattr(lease_funding.settings, "ENFORCE_FUNDING_BALANCE", True)
        entries = [FunderEntry(funder_id=funders[0].id, amount=Decimal("100.00"))]

        with pytest.raises(FundingMismatchError) as exc_info:
            create_lease_with_funding(db, lease_in, entries)

        assert exc_info.value.gap == Decimal("1100.00")
        assert db.query(Lease).count() == 0


class TestReplaceLeaseFunding:
    def test_regenerates_events_from_current_dates(self, db, lease_in, funders):
        lease = create_lease_with_funding(
            db, lease_in, [FunderEntry(funder_id=funders[0].id, amount=Decimal("1200.00"))]
        )
        lease.end_date = date(2025, 6, 30)
        db.commit()

        replace_lease_funding(
            db,
            lease,
            [
                FunderEntry(funder_id=funders[1].id, amount=Decimal("600.00")),
                FunderEntry(funder_id=funders[2].id, amount=Decimal("600.00")),
            ],
        )

        rows = db.query(LeaseFunder).filter(LeaseFunder.lease_id == lease.id).all()
        assert {r.funder_id for r in rows} == {funders[1].id, funders[2].id}
        events = db.query(RevenueEvent).filter(RevenueEvent.lease_id == lease.id).all()
        assert len(events) == 12
        assert funders[0].id not in {e.funder_id for e in events}

    def test_failure_keeps_previous_funding(self, db, lease_in, funders):
        lease = create_lease_with_funding(
            db, lease_in, [FunderEntry(funder_id=funders[0].id, amount=Decimal("1200.00"))]
        )

        with pytest.raises(LeaseFundingError):
            replace_lease_funding(
                db, lease, [FunderEntry(funder_id="no-such-funder", amount=Decimal("1200.00"))]
            )

        assert db.query(LeaseFunder).filter(LeaseFunder.lease_id == lease.id).count() == 1
        assert db.query(RevenueEvent).filter(RevenueEvent.lease_id == lease.id).count() == 3
