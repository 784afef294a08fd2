from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# decimal(10,2) columns; accepts "1200.00" or 1200
Money = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def strip_string(v):
    if isinstance(v, str):
        return v.strip()
    return v
