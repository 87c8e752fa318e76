"""
Utility functions for generating ids of records created by the application.
"""

import random
import re
import string
import time


def generate_record_id(prefix: str = "") -> str:
    """
    Generate a unique record id from the current time and a random suffix.

    Args:
        prefix (str): Optional prefix (e.g., "new-")

    Returns:
        str: Record id (e.g., new-1718000000000-X7K9M2)
    """
    characters = string.ascii_uppercase + string.digits
    suffix = "".join(random.choices(characters, k=6))
    return f"{prefix}{int(time.time() * 1000)}-{suffix}"


def id_digits(record_id: str) -> str:
    """Digits of an id, used as the building part of generated room numbers (b12 -> 12)."""
    return re.sub(r"\D", "", record_id or "")
