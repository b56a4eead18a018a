from datetime import date, datetime
from dateutil.relativedelta import relativedelta


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format currency amount, e.g. $1,234.56 / -$12.50"""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_number(num: float) -> str:
    """Thousands separators, up to two decimals, no trailing zeros"""
    text = f"{num:,.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_percent(rate: float) -> str:
    return f"{format_number(rate)}%"


def format_date(d: date) -> str:
    """Format date in Panamanian style"""
    return d.strftime("%d/%m/%Y")


def age_on(birth_date: date, today: date = None) -> int:
    if today is None:
        today = date.today()
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()
    return relativedelta(today, birth_date).years
