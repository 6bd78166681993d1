'''
Pydantic models for payments: generation command, list filters and
read models.
'''
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# --- 1. API Input Models ---

class GeneratePayments(BaseModel):
    """
    Validates the request body for generating a month of payments.
    """
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1900, le=2100)


class PaymentFilters(BaseModel):
    """
    Optional filters for listing the payments of a flat.
    """
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    is_paid: Optional[bool] = None


# --- 2. API Output Models ---

class PaymentRead(BaseModel):
    """
    A payment row as stored. Also the result of marking a payment paid.
    """
    id: UUID
    payment_type_id: UUID
    amount: Decimal
    month: int
    year: int
    is_paid: bool
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentWithTypeName(PaymentRead):
    """
    A payment joined with the display name of its payment type.
    """
    payment_type_name: str


class SkippedPayment(BaseModel):
    """
    A payment type whose payment for the requested period already existed.
    """
    payment_type_id: UUID
    payment_type_name: str
    existing_payment_id: UUID


class GeneratePaymentsResult(BaseModel):
    message: str
    generated_count: int
    month: int
    year: int
    payments: list[PaymentWithTypeName]
    skipped: list[SkippedPayment] = []
