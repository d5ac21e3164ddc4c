"""
Auto-fill orchestration: look up a draft's name, then merge.

Distinguishes four outcomes for the status modal: no name to look up,
lookup failed, nothing new to fill, and fields filled.

Only the latest lookup for a draft may be merged. Each lookup takes a
ticket; when a newer ticket exists for the same draft (the user edited
the name and asked again), the older result is discarded.
"""

import itertools
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

import structlog

from models.autofill import AutoFillResponse, AutoFillStatus, LookupResult
from services.lookup_service import CigarLookupService, get_lookup_service, validate_candidate
from services.merge_service import format_change_summary, merge
from utils.text_utils import normalize_lookup_name

logger = structlog.get_logger(__name__)

MISSING_NAME_MESSAGE = "Please enter a cigar name to auto-fill."
NOTHING_NEW_MESSAGE = "Looked it up, but all your details seem to be filled in already."
NOT_FOUND_MESSAGE = "Couldn't fetch details. Try a different name or fill manually."
STALE_MESSAGE = "A newer lookup replaced this one; nothing was changed."


@dataclass(frozen=True)
class LookupTicket:
    """Identifies one lookup request for one draft."""

    draft_id: Optional[str]
    name: Optional[str]
    sequence: int


class AutoFillService:
    """
    Auto-fill business logic.

    Ticket bookkeeping is shared between requests and guarded by a lock;
    the merge itself is pure.
    """

    def __init__(self, lookup_service: Optional[CigarLookupService] = None):
        self.lookup_service = lookup_service or get_lookup_service()
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._latest: dict[str, int] = {}

    # ===================
    # TICKETS
    # ===================

    def begin_lookup(self, draft_id: Optional[str], name: str) -> LookupTicket:
        """Register a lookup; it supersedes any earlier one for the same draft."""
        with self._lock:
            sequence = next(self._sequence)
            if draft_id is not None:
                self._latest[draft_id] = sequence
        return LookupTicket(draft_id=draft_id, name=normalize_lookup_name(name), sequence=sequence)

    def is_current(self, ticket: LookupTicket, draft: Mapping[str, Any]) -> bool:
        """
        True if the ticket is still the latest for its draft and the
        draft's name has not changed since the lookup started.

        The name check only catches renames when the caller passes the
        draft as it is now. autofill() passes the draft the lookup began
        with, so for HTTP requests only the ticket sequence decides;
        a rename there arrives as a newer request for the same draft_id.
        """
        draft_name = draft.get("name")
        if not isinstance(draft_name, str) or normalize_lookup_name(draft_name) != ticket.name:
            return False
        if ticket.draft_id is None:
            return True
        with self._lock:
            return self._latest.get(ticket.draft_id) == ticket.sequence

    def end_lookup(self, ticket: LookupTicket) -> None:
        """Forget the ticket once it is no longer needed."""
        if ticket.draft_id is None:
            return
        with self._lock:
            if self._latest.get(ticket.draft_id) == ticket.sequence:
                del self._latest[ticket.draft_id]

    # ===================
    # AUTO-FILL
    # ===================

    def apply_result(
        self,
        ticket: LookupTicket,
        draft: Mapping[str, Any],
        result: LookupResult
    ) -> AutoFillResponse:
        """
        Merge a finished lookup into the draft, unless it was superseded.
        """
        if not self.is_current(ticket, draft):
            logger.warning(
                "stale_lookup_discarded",
                draft_id=ticket.draft_id,
                sequence=ticket.sequence
            )
            return AutoFillResponse(
                status=AutoFillStatus.STALE,
                updated_draft=dict(draft),
                message=STALE_MESSAGE,
            )
        return self.respond(draft, result)

    def respond(self, draft: Mapping[str, Any], result: LookupResult) -> AutoFillResponse:
        """Turn a lookup result into the response shown to the user."""
        if not result.ok:
            return AutoFillResponse(
                status=AutoFillStatus.NOT_FOUND,
                updated_draft=dict(draft),
                message=f"{NOT_FOUND_MESSAGE} Error: {result.error}",
            )

        merged = merge(draft, result.candidate)

        if not merged.changed:
            return AutoFillResponse(
                status=AutoFillStatus.NOTHING_NEW,
                updated_draft=merged.updated_draft,
                message=NOTHING_NEW_MESSAGE,
            )

        logger.info("draft_autofilled", changed_fields=merged.changed_fields)

        return AutoFillResponse(
            status=AutoFillStatus.FILLED,
            updated_draft=merged.updated_draft,
            changed_fields=merged.changed_fields,
            message="Found some details and updated the following:\n\n"
                    + format_change_summary(merged.changed_fields),
        )

    def merge_candidate(self, draft: Mapping[str, Any], candidate: Any) -> AutoFillResponse:
        """Validate a candidate the caller already has, then merge it."""
        return self.respond(draft, validate_candidate(candidate))

    def autofill(self, draft: Mapping[str, Any], draft_id: Optional[str] = None) -> AutoFillResponse:
        """
        Look up the draft's name and fill its empty fields.

        Args:
            draft: The user's in-progress record
            draft_id: Identity of the record being edited, if any

        Returns:
            AutoFillResponse with status, new draft and message

        Raises:
            LookupNotConfiguredError: If the lookup has no API key
        """
        name = draft.get("name")
        if not isinstance(name, str) or not name.strip():
            return AutoFillResponse(
                status=AutoFillStatus.MISSING_NAME,
                updated_draft=dict(draft),
                message=MISSING_NAME_MESSAGE,
            )

        ticket = self.begin_lookup(draft_id, name)
        try:
            result = self.lookup_service.lookup(name.strip())
            return self.apply_result(ticket, draft, result)
        finally:
            self.end_lookup(ticket)


# Singleton instance
_autofill_service: Optional[AutoFillService] = None


def get_autofill_service() -> AutoFillService:
    """Get or create AutoFillService instance."""
    global _autofill_service
    if _autofill_service is None:
        _autofill_service = AutoFillService()
    return _autofill_service
