"""
Auto-fill merge for cigar drafts.

A candidate value only fills a draft field that is empty; anything the
user already typed is kept. Neither input is modified.

Emptiness is decided by type rather than truthiness:
    - absent key or None     -> empty
    - ""                     -> empty
    - list/tuple of length 0 -> empty
    - any number, incl. 0    -> present
"""

from collections.abc import Mapping
from typing import Any

import structlog

from models.autofill import MergeResult
from utils.text_utils import humanize_field_name

logger = structlog.get_logger(__name__)

_MISSING = object()


def is_empty(value: Any) -> bool:
    """True when a field holds no user-visible value."""
    if value is _MISSING or value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def field_is_empty(record: Mapping[str, Any], field: str) -> bool:
    return is_empty(record.get(field, _MISSING))


def _copy_value(value: Any) -> Any:
    # Lists are copied so the merged draft never shares them with the candidate
    if isinstance(value, (list, tuple)):
        return list(value)
    return value


def merge(draft: Mapping[str, Any], candidate: Mapping[str, Any]) -> MergeResult:
    """
    Fill the draft's empty fields from the candidate.

    Args:
        draft: The user's in-progress record
        candidate: Record suggested by a lookup

    Returns:
        MergeResult with a new draft and the filled field names, in the
        order the candidate lists them
    """
    updated = dict(draft)
    changed_fields: list[str] = []

    for field, value in candidate.items():
        if field_is_empty(draft, field) and not is_empty(value):
            updated[field] = _copy_value(value)
            changed_fields.append(field)

    logger.debug(
        "draft_merged",
        candidate_fields=len(candidate),
        changed_fields=changed_fields
    )

    return MergeResult(updated_draft=updated, changed_fields=changed_fields)


def format_change_summary(changed_fields: list[str]) -> str:
    """
    Bullet list of filled fields for the status modal.

    Example:
        ["brand", "length_inches"] -> "- Brand\\n- Length Inches"
    """
    return "\n".join(f"- {humanize_field_name(field)}" for field in changed_fields)
