'''
Pure functions that shape flats, payment types and payments into
presentation-ready view models. No I/O happens here.
'''
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from ..common.formatters import format_currency, format_month_year
from ..models.flat import FlatRead
from ..models.payment import PaymentWithTypeName
from ..models.payment_type import PaymentTypeRead
from ..models import views as view_models


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes (e.g. read back from SQLite) are treated as UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def payment_due_date(month: int, year: int) -> datetime:
    """A payment is due on the first day of its period, midnight UTC."""
    return datetime(year, month, 1, tzinfo=timezone.utc)


# --- Payment status ---

def _status_for(is_paid: bool, is_overdue: bool) -> view_models.PaymentStatus:
    if is_paid:
        return "paid"
    if is_overdue:
        return "overdue"
    return "pending"


def get_payment_status(payment: view_models.PaymentView) -> view_models.PaymentStatus:
    return _status_for(payment.is_paid, payment.is_overdue)


def get_payment_badge_variant(payment: view_models.PaymentView) -> view_models.BadgeVariant:
    return {
        "paid": "success",
        "overdue": "destructive",
        "pending": "warning",
    }[get_payment_status(payment)]


def get_payment_badge_label(payment: view_models.PaymentView) -> str:
    return get_payment_status(payment).capitalize()


# --- Payments & payment types ---

def to_payment_view(payment: PaymentWithTypeName, now: datetime) -> view_models.PaymentView:
    """
    Derives the overdue and editability flags.
    A paid payment is never overdue, however late it was paid.
    """
    due_date = payment_due_date(payment.month, payment.year)
    is_overdue = not payment.is_paid and due_date < _as_utc(now)

    return view_models.PaymentView(
        id=payment.id,
        payment_type_id=payment.payment_type_id,
        payment_type_name=payment.payment_type_name,
        amount=payment.amount,
        formatted_amount=format_currency(payment.amount),
        due_date=due_date,
        period_label=format_month_year(payment.month, payment.year),
        is_paid=payment.is_paid,
        paid_at=payment.paid_at,
        month=payment.month,
        year=payment.year,
        can_edit=not payment.is_paid,
        is_overdue=is_overdue,
        status=_status_for(payment.is_paid, is_overdue),
    )


def to_payment_type_view(payment_type: PaymentTypeRead) -> view_models.PaymentTypeView:
    return view_models.PaymentTypeView(
        id=payment_type.id,
        name=payment_type.name,
        base_amount=payment_type.base_amount,
        created_at=payment_type.created_at,
        updated_at=payment_type.updated_at,
    )


def to_flat_stats_view(
    payments: Iterable[PaymentWithTypeName],
    payment_types: Iterable[PaymentTypeRead]
) -> view_models.FlatStatsView:
    unpaid = [p for p in payments if not p.is_paid]
    total_debt = sum((p.amount for p in unpaid), Decimal("0"))

    return view_models.FlatStatsView(
        total_debt=total_debt,
        formatted_total_debt=format_currency(total_debt),
        payment_types_count=len(list(payment_types)),
        pending_payments_count=len(unpaid),
    )


def to_flat_detail_view(
    flat: FlatRead,
    payment_types: list[PaymentTypeRead],
    payments: list[PaymentWithTypeName],
    now: datetime
) -> view_models.FlatDetailView:
    return view_models.FlatDetailView(
        flat=flat,
        stats=to_flat_stats_view(payments, payment_types),
        payment_types=[to_payment_type_view(pt) for pt in payment_types],
        payments=[to_payment_view(p, now) for p in payments],
    )


# --- Flats list ---

def to_flat_card_view(flat: FlatRead) -> view_models.FlatCardView:
    """
    The flats list does not aggregate payments, so every card shows zero
    debt and an 'ok' status. Real debt is only on the dashboard.
    """
    debt = Decimal("0")

    return view_models.FlatCardView(
        id=flat.id,
        name=flat.name,
        address=flat.address,
        debt=debt,
        formatted_debt=format_currency(debt),
        payment_types_count=None,
        pending_payments_count=None,
        has_overdue_payments=debt > 0,
        status="overdue" if debt > 0 else "ok",
        details_url=f"/flats/{flat.id}",
        created_at=flat.created_at,
        updated_at=flat.updated_at,
    )


def to_flats_list_view(flats: list[FlatRead]) -> view_models.FlatsListView:
    cards = [to_flat_card_view(flat) for flat in flats]
    return view_models.FlatsListView(
        flats=cards,
        total_count=len(cards),
        is_empty=not cards,
    )
