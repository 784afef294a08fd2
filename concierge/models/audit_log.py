from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.sql import func
from concierge.core.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(String, nullable=False, index=True)
    actor_email = Column(String, nullable=True, index=True)
    actor_role = Column(String, nullable=True)
    action = Column(String, nullable=False, index=True)  # created/updated/deleted/linked
    entity_type = Column(String, nullable=False, index=True)  # lease/site/service_request/etc
    entity_id = Column(String, nullable=False, index=True)
    source = Column(String, nullable=True, index=True)  # api/system
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
