from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional

from concierge.enums import ResidentRole, ResidentType
from concierge.schemas.base import CamelModel, strip_string


class ResidentCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: Optional[str] = None
    type: ResidentType
    role: ResidentRole
    user_id: Optional[str] = None

    @field_validator('name', 'email', 'phone', mode='before')
    @classmethod
    def strip_strings(cls, v):
        return strip_string(v)


class ResidentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)
    phone: Optional[str] = None
    type: Optional[ResidentType] = None
    role: Optional[ResidentRole] = None
    user_id: Optional[str] = None


class ResidentOut(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str]
    type: ResidentType
    role: ResidentRole
    user_id: Optional[str]
    created_at: datetime
