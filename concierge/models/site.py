from sqlalchemy import Column, String, Date, DateTime, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from concierge.core.database import Base, generate_id


class Site(Base):
    __tablename__ = "sites"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    name = Column(String, nullable=False)
    address = Column(String, nullable=False)

    property_nickname = Column(String, nullable=True)
    property_description = Column(String, nullable=True)
    property_date_acquired = Column(Date, nullable=True)

    # valuation / mortgage figures shown on the site record
    property_value_assessed = Column(Numeric(10, 2), nullable=True)
    property_value_mortgage_total = Column(Numeric(10, 2), nullable=True)
    mortgage_payment_principal = Column(Numeric(10, 2), nullable=True)
    mortgage_payment_interest = Column(Numeric(10, 2), nullable=True)

    # ONE site has MANY spaces
    spaces = relationship("Space", back_populates="site")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
