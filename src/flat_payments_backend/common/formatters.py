'''
Formatting helpers for amounts, currency and billing periods.
Amounts are Decimals all the way through and get rounded only here.
'''
import calendar
from decimal import Decimal, ROUND_HALF_UP

from .config import settings

CENT = Decimal("0.01")
NBSP = "\u00a0"


def quantize_amount(amount: Decimal | int | str) -> Decimal:
    """Rounds a monetary value to exactly two decimal places (half-up)."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal | int | str) -> str:
    """'0.1' + '0.2' style sums come out as '0.30'."""
    return f"{quantize_amount(amount):.2f}"


def format_currency(amount: Decimal | int | str, currency: str | None = None) -> str:
    """
    Formats an amount the way pl-PL locales print currency:
    comma as decimal separator, non-breaking spaces as thousands separator
    (only from five integer digits up) and the currency symbol as suffix.
    """
    currency = currency or settings.CURRENCY_CODE
    value = quantize_amount(amount)
    sign = "-" if value < 0 else ""
    integer_part, fraction_part = f"{abs(value):.2f}".split(".")

    if len(integer_part) >= 5:
        groups = []
        while integer_part:
            groups.insert(0, integer_part[-3:])
            integer_part = integer_part[:-3]
        integer_part = NBSP.join(groups)

    symbol = "zł" if currency == "PLN" else currency
    return f"{sign}{integer_part},{fraction_part}{NBSP}{symbol}"


def get_month_name(month: int) -> str:
    """Returns the English month name for 1-12, empty string otherwise."""
    if 1 <= month <= 12:
        return calendar.month_name[month]
    return ""


def format_month_year(month: int, year: int) -> str:
    return f"{get_month_name(month)} {year}"
