'''
Pydantic models for flats: commands coming in, read models going out.
'''
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..common.formatters import format_amount


class FlatBase(BaseModel):
    """
    Base Pydantic model with common fields for a Flat.
    """
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=200)


class FlatCreate(FlatBase):
    """
    Validates the payload when CREATING a flat.
    'user_id' is excluded and will be added by the service.
    """
    model_config = ConfigDict(str_strip_whitespace=True)


class FlatUpdate(BaseModel):
    """
    Validates the payload when UPDATING a flat.
    All fields are optional to allow for partial updates.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, min_length=1, max_length=200)

    model_config = ConfigDict(str_strip_whitespace=True)


class FlatRead(FlatBase):
    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DashboardFlat(BaseModel):
    """
    A flat as shown on the dashboard, with its outstanding debt.
    'debt' stays an exact Decimal and is rounded only when serialized.
    """
    id: UUID
    name: str
    address: str
    debt: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('debt', when_used='json')
    def serialize_debt(self, debt: Decimal) -> str:
        return format_amount(debt)


class DashboardRead(BaseModel):
    flats: list[DashboardFlat]
