from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from concierge.core.database import Base, generate_id


class Lease(Base):
    __tablename__ = "leases"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    resident_id = Column(String, ForeignKey("residents.id"), nullable=False, index=True)
    resident = relationship("Resident", back_populates="leases")

    space_id = Column(String, ForeignKey("spaces.id"), nullable=False, index=True)
    space = relationship("Space", back_populates="leases")

    rental_amount = Column(Numeric(10, 2), nullable=False)  # what the resident pays monthly
    market_value = Column(Numeric(10, 2), nullable=False)   # what the funders cover monthly

    # start_date <= end_date is expected but not enforced
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    lease_funders = relationship("LeaseFunder", back_populates="lease")
    revenue_events = relationship("RevenueEvent", back_populates="lease")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
