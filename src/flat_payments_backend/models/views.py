'''
View models: presentation-ready shapes produced by core.transformers.
'''
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel

from .flat import FlatRead

PaymentStatus = Literal["paid", "overdue", "pending"]
BadgeVariant = Literal["success", "destructive", "warning"]


class PaymentTypeView(BaseModel):
    id: UUID
    name: str
    base_amount: Decimal
    created_at: datetime
    updated_at: datetime


class PaymentView(BaseModel):
    id: UUID
    payment_type_id: UUID
    payment_type_name: str
    amount: Decimal
    formatted_amount: str
    due_date: datetime
    period_label: str
    is_paid: bool
    paid_at: Optional[datetime] = None
    month: int
    year: int
    can_edit: bool
    is_overdue: bool
    status: PaymentStatus


class FlatStatsView(BaseModel):
    total_debt: Decimal
    formatted_total_debt: str
    payment_types_count: int
    pending_payments_count: int


class FlatDetailView(BaseModel):
    flat: FlatRead
    stats: FlatStatsView
    payment_types: list[PaymentTypeView]
    payments: list[PaymentView]


class FlatCardView(BaseModel):
    """
    A flat in the flats list. The list endpoint does not aggregate debt,
    so 'debt' is always zero here; the dashboard carries the real figure.
    """
    id: UUID
    name: str
    address: str
    debt: Decimal
    formatted_debt: str
    payment_types_count: Optional[int] = None
    pending_payments_count: Optional[int] = None
    has_overdue_payments: bool
    status: Literal["ok", "overdue"]
    details_url: str
    created_at: datetime
    updated_at: datetime


class FlatsListView(BaseModel):
    flats: list[FlatCardView]
    total_count: int
    is_empty: bool
