import datetime
from typing import Union


def month_name(m: int) -> str:
    """
    Returns the full name of a month.
    Example: 1 -> 'January', 2 -> 'February'.
    """
    # 1900 is an arbitrary valid year used just to format the month name
    return datetime.date(1900, m, 1).strftime("%B")


def month_number(name: str) -> int:
    """
    Inverse of month_name. Accepts full or three-letter names in any casing.
    Raises ValueError for anything else.
    """
    clean = name.strip().lower()
    for m in range(1, 13):
        full = month_name(m).lower()
        if clean == full or clean == full[:3]:
            return m
    raise ValueError(f"Unknown month: {name}")


def format_date(day: int, month: Union[int, str], year: int) -> str:
    """
    Formats a day/month/year triple the way dates are stored, e.g. '5-March-1998'.
    The month may be given as a number (1-12) or a month name.

    Raises:
        ValueError: If the triple is not a real calendar date.
    """
    m = month_number(month) if isinstance(month, str) else int(month)
    # Validate the combination (e.g. 31-February is rejected)
    d = datetime.date(int(year), m, int(day))
    return f"{d.day}-{month_name(d.month)}-{d.year}"


def format_amount(value: float) -> str:
    """Two-decimal display used for every money value shown to people."""
    return f"{value:.2f}"


def is_numeric_id(member_id: str) -> bool:
    """Member IDs are non-empty strings of decimal digits."""
    return bool(member_id) and member_id.isdigit() and member_id.isascii()


def parse_date(text: str) -> str:
    """
    Reads a stored 'D-Month-YYYY' date and returns it in canonical form,
    e.g. '05-march-1998' -> '5-March-1998'.

    Raises:
        ValueError: If the text is not a real calendar date in that form.
    """
    parts = str(text).strip().split("-")
    if len(parts) != 3:
        raise ValueError(f"Not a D-Month-YYYY date: {text!r}")
    day, month, year = parts
    return format_date(int(day), month, int(year))
