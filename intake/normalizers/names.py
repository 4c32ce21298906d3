"""
Contact name synthesis
"""

from typing import Optional


def compose_full_name(first_name: Optional[str], last_name: Optional[str]) -> Optional[str]:
    """
    Join the non-empty name parts with a single space.

    Examples:
        >>> compose_full_name("Jane", "Doe")
        'Jane Doe'
        >>> compose_full_name(None, "Doe")
        'Doe'
    """
    parts = [part.strip() for part in (first_name, last_name) if part and part.strip()]
    return ' '.join(parts) or None
