'''
Pydantic models for payment types (recurring charge templates).
'''
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PaymentTypeCreate(BaseModel):
    """
    Validates the payload when CREATING a payment type.
    'flat_id' comes from the path and is added by the service.
    """
    name: str = Field(..., min_length=1, max_length=100)
    base_amount: Decimal = Field(..., ge=0, le=Decimal("999999.99"), max_digits=8, decimal_places=2)

    model_config = ConfigDict(str_strip_whitespace=True)


class PaymentTypeUpdate(BaseModel):
    """
    Validates the payload when UPDATING a payment type.
    All fields are optional to allow for partial updates.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    base_amount: Optional[Decimal] = Field(None, ge=0, le=Decimal("999999.99"), max_digits=8, decimal_places=2)

    model_config = ConfigDict(str_strip_whitespace=True)


class PaymentTypeRead(BaseModel):
    id: UUID
    flat_id: UUID
    name: str
    base_amount: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
