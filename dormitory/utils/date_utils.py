"""
Helpers for billing-period month keys ("YYYY-MM").
"""

import re
from datetime import date
from typing import Optional

MONTH_KEY_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

THAI_MONTHS = [
    "มกราคม",
    "กุมภาพันธ์",
    "มีนาคม",
    "เมษายน",
    "พฤษภาคม",
    "มิถุนายน",
    "กรกฎาคม",
    "สิงหาคม",
    "กันยายน",
    "ตุลาคม",
    "พฤศจิกายน",
    "ธันวาคม",
]

# Offset between the Gregorian and the Thai Buddhist calendar year
BUDDHIST_ERA_OFFSET = 543


def current_month(today: Optional[date] = None) -> str:
    """
    Month key for the billing period containing today.

    Args:
        today: Date to use instead of the system date

    Returns:
        str: Month key (e.g., 2024-01)
    """
    today = today or date.today()
    return f"{today.year}-{today.month:02d}"


def is_month_key(value: str) -> bool:
    return bool(value) and MONTH_KEY_PATTERN.match(value) is not None


def validate_month_key(value: str) -> str:
    if not is_month_key(value):
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM")
    return value


def format_thai_month(month: str) -> str:
    """
    Human-readable label for a month key in Thai with a Buddhist-era year.

    Args:
        month: Month key (e.g., 2024-01)

    Returns:
        str: Label (e.g., มกราคม 2567), empty for an empty key
    """
    if not month:
        return ""
    year, month_number = month.split("-")
    return f"{THAI_MONTHS[int(month_number) - 1]} {int(year) + BUDDHIST_ERA_OFFSET}"
