from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from concierge.core.database import Base, generate_id
from concierge.enums import ResidentType, ResidentRole


class Resident(Base):
    __tablename__ = "residents"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)

    type = Column(Enum(ResidentType, name="resident_type"), nullable=False)
    role = Column(Enum(ResidentRole, name="resident_role"), nullable=False)

    # subject claim of the resident's login, when they have one
    user_id = Column(String, nullable=True, index=True)

    leases = relationship("Lease", back_populates="resident")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
