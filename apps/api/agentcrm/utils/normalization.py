"""Data normalization utilities for consistent data quality."""

from typing import Optional


def normalize_email(email: Optional[str]) -> Optional[str]:
    """
    Normalize email to lowercase.

    Args:
        email: Raw email input

    Returns:
        Lowercased email or None if empty
    """
    if not email:
        return None
    return email.strip().lower()


def normalize_name(name: Optional[str]) -> Optional[str]:
    """Collapse internal whitespace; None if nothing is left."""
    if not name:
        return None
    collapsed = " ".join(name.split())
    return collapsed or None
