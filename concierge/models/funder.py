from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from concierge.core.database import Base, generate_id


class Funder(Base):
    __tablename__ = "funders"

    id = Column(String, primary_key=True, index=True, default=generate_id)
    name = Column(String, nullable=False)  # subsidy program / guarantor / resident
    description = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class LeaseFunder(Base):
    __tablename__ = "lease_funders"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    lease_id = Column(String, ForeignKey("leases.id"), nullable=False, index=True)
    lease = relationship("Lease", back_populates="lease_funders")

    funder_id = Column(String, ForeignKey("funders.id"), nullable=False, index=True)
    funder = relationship("Funder")

    # committed monthly contribution
    amount = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class RevenueEvent(Base):
    __tablename__ = "revenue_events"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    lease_id = Column(String, ForeignKey("leases.id"), nullable=False, index=True)
    lease = relationship("Lease", back_populates="revenue_events")

    funder_id = Column(String, ForeignKey("funders.id"), nullable=False, index=True)
    funder = relationship("Funder")

    amount = Column(Numeric(10, 2), nullable=False)

    # First day of the month this event recognises (ex: 2025-02-01)
    event_date = Column(Date, nullable=False, index=True)
    month = Column(String(7), nullable=False, index=True)  # "YYYY-MM"

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
