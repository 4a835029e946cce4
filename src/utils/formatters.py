"""
Display formatting helpers.
"""
from datetime import date, datetime
from typing import Any


def format_date_ddmmyyyy(value: Any) -> str:
    """
    Format a date, datetime or ISO date string as 'dd-MM-yyyy'.

    Returns '-' for empty values. Strings that do not parse as dates are
    returned unchanged.
    """
    if value is None or value == "":
        return "-"
    if isinstance(value, (date, datetime)):
        return value.strftime("%d-%m-%Y")
    try:
        return datetime.fromisoformat(str(value)).strftime("%d-%m-%Y")
    except ValueError:
        return str(value)
