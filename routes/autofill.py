"""
Auto-fill API routes.

Fill empty draft fields from a cigar lookup without touching what the
user already entered.
"""

from fastapi import APIRouter
import structlog

from models.autofill import AutoFillRequest, AutoFillResponse, MergeRequest
from services.autofill_service import get_autofill_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("", response_model=AutoFillResponse)
def autofill_draft(request: AutoFillRequest):
    """
    Look up the draft's name and fill its empty fields.

    Declared sync so the blocking lookup runs in the threadpool.

    Returns:
        AutoFillResponse; status tells "filled", "nothing_new",
        "not_found", "missing_name" and "stale" apart
    """
    try:
        service = get_autofill_service()
        return service.autofill(request.draft, draft_id=request.draft_id)
    except Exception as e:
        return handle_error(e)


@router.post("/merge", response_model=AutoFillResponse)
async def merge_candidate(request: MergeRequest):
    """
    Merge a candidate record the caller already has.

    A candidate that is not an object counts as a failed lookup.
    """
    try:
        service = get_autofill_service()
        return service.merge_candidate(request.draft, request.candidate)
    except Exception as e:
        return handle_error(e)
