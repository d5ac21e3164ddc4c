"""
Auto-fill schemas.

CandidateCigar is the fixed output schema sent to the field lookup.
Lookup output is validated against it field by field before any merge.
"""

from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import ConfigDict, Field

from models.base import BaseSchema, FrozenSchema


StrengthValue = Literal["Mild", "Mild-Medium", "Medium", "Medium-Full", "Full", ""]


class CandidateCigar(BaseSchema):
    """Cigar details a lookup may suggest."""

    model_config = ConfigDict(extra="ignore")

    brand: str = ""
    shape: str = ""
    size: str = ""
    country: str = ""
    wrapper: str = ""
    binder: str = ""
    filler: str = ""
    strength: StrengthValue = ""
    flavorNotes: List[str] = Field(default_factory=list)
    shortDescription: str = ""
    description: str = ""
    image: str = ""
    rating: float = 0
    price: float = 0
    length_inches: float = 0
    ring_gauge: float = 0


class AutoFillStatus(str, Enum):
    """Outcome of an auto-fill attempt."""

    FILLED = "filled"              # at least one field filled
    NOTHING_NEW = "nothing_new"    # lookup worked, draft already complete
    NOT_FOUND = "not_found"        # lookup failed or returned no record
    MISSING_NAME = "missing_name"  # draft has no name to look up
    STALE = "stale"                # superseded by a newer lookup


# ===================
# RESULTS
# ===================

class MergeResult(FrozenSchema):
    """Draft after merge plus the fields that were filled."""

    updated_draft: dict[str, Any]
    changed_fields: List[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changed_fields)


class LookupResult(FrozenSchema):
    """Either a validated candidate or the reason there is none."""

    candidate: Optional[dict[str, Any]] = None
    error: Optional[str] = None
    rejected_fields: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.candidate is not None

    @classmethod
    def found(cls, candidate: dict[str, Any], rejected_fields: Optional[List[str]] = None) -> "LookupResult":
        return cls(candidate=candidate, rejected_fields=rejected_fields or [])

    @classmethod
    def failed(cls, error: str) -> "LookupResult":
        return cls(error=error)


# ===================
# REQUESTS / RESPONSES
# ===================

class MergeRequest(BaseSchema):
    """Merge a candidate the caller already has."""

    draft: dict[str, Any] = Field(default_factory=dict)
    candidate: Any = Field(None, description="Candidate record; non-objects are treated as a failed lookup")


class AutoFillRequest(BaseSchema):
    """Look up the draft's name and fill its empty fields."""

    draft_id: Optional[str] = Field(None, description="Identity of the record being edited")
    draft: dict[str, Any] = Field(default_factory=dict)


class AutoFillResponse(BaseSchema):
    """Result shown in the auto-fill status modal."""

    status: AutoFillStatus
    updated_draft: dict[str, Any]
    changed_fields: List[str] = Field(default_factory=list)
    message: str
