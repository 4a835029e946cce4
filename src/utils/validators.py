"""
Field validators for the guest registration form.
"""
from datetime import date
from typing import Optional

import phonenumbers


def years_between(earlier: date, later: date) -> int:
    """Whole years elapsed from ``earlier`` to ``later``."""
    years = later.year - earlier.year
    if (later.month, later.day) < (earlier.month, earlier.day):
        years -= 1
    return years


def validate_min_age(birth_date: date, min_age: int = 14, today: Optional[date] = None) -> bool:
    """True when a person born on ``birth_date`` is at least ``min_age`` years old."""
    today = today or date.today()
    if birth_date > today:
        return False
    return years_between(birth_date, today) >= min_age


def validate_visit_date(visit_date: date, today: Optional[date] = None) -> bool:
    """True when ``visit_date`` is today or later."""
    today = today or date.today()
    return visit_date >= today


def validate_phone(phone: str, region: Optional[str] = None) -> bool:
    """
    True when ``phone`` is a valid number for its country.

    Without ``region`` the number must be in international format (leading '+'
    and country code), which is what the registration form sends.
    """
    if not phone or not isinstance(phone, str):
        return False
    try:
        parsed = phonenumbers.parse(phone, region)
    except phonenumbers.NumberParseException:
        return False
    return phonenumbers.is_possible_number(parsed) and phonenumbers.is_valid_number(parsed)
