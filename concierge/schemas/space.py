from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional

from concierge.schemas.base import CamelModel, strip_string


class SpaceTypeCreate(CamelModel):
    name: str = Field(min_length=1)   # studio / 1_bedroom / common_area
    description: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return strip_string(v)


class SpaceTypeOut(CamelModel):
    id: str
    name: str
    description: Optional[str]
    created_at: datetime


class SpaceCreate(CamelModel):
    identifier: str = Field(min_length=1)
    site_id: str        # REQUIRED - every space belongs to a site
    space_type_id: str

    @field_validator('identifier', mode='before')
    @classmethod
    def strip_identifier(cls, v):
        return strip_string(v)


class SpaceUpdate(CamelModel):
    identifier: Optional[str] = Field(None, min_length=1)
    site_id: Optional[str] = None
    space_type_id: Optional[str] = None


class SpaceOut(CamelModel):
    id: str
    identifier: str
    site_id: str
    space_type_id: str
    created_at: datetime
