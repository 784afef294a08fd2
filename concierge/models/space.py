from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from concierge.core.database import Base, generate_id


class SpaceType(Base):
    __tablename__ = "space_types"

    id = Column(String, primary_key=True, index=True, default=generate_id)
    name = Column(String, nullable=False, unique=True)  # studio / 1_bedroom / common_area ...
    description = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Space(Base):
    __tablename__ = "spaces"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    identifier = Column(String, nullable=False)  # unit number or name, e.g. "2B"

    site_id = Column(String, ForeignKey("sites.id"), nullable=False, index=True)
    site = relationship("Site", back_populates="spaces")

    space_type_id = Column(String, ForeignKey("space_types.id"), nullable=False, index=True)
    space_type = relationship("SpaceType")

    leases = relationship("Lease", back_populates="space")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
