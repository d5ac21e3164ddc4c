"""
Text utilities for field labels and name comparison.
"""

import re
import unicodedata
from typing import Optional


def humanize_field_name(field: str) -> str:
    """
    Turn a record field name into a display label.

    - "length_inches" -> "Length Inches"
    - "flavorNotes"   -> "Flavor Notes"
    - "brand"         -> "Brand"
    """
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", field.replace("_", " "))
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split())


def normalize_lookup_name(name: Optional[str]) -> Optional[str]:
    """
    Normalize a cigar name for comparing lookup requests.

    Accents and case are ignored and whitespace collapsed:
    - "Padrón 1964  Anniversary" -> "PADRON 1964 ANNIVERSARY"

    Returns:
        Normalized string, or None if input is empty
    """
    if not name:
        return None

    name = " ".join(name.split())

    if not name:
        return None

    # NFD separates base chars from accents
    normalized = unicodedata.normalize('NFD', name)
    ascii_name = ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )

    return ascii_name.upper()
