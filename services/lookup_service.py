"""
Cigar field lookup using the Anthropic Messages API.

Given a cigar name, asks Claude for the cigar's details as JSON matching
CandidateCigar. The result is validated field by field: unknown keys and
values of the wrong type are dropped before anything is merged.

Failures (API errors, unparsable or non-object replies) come back as a
failed LookupResult rather than an exception, so the caller can tell
"nothing found" apart from "nothing new to fill".
"""

import json
import re
from collections.abc import Mapping
from typing import Any, Optional

import anthropic
import structlog
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from config import settings
from exceptions import LookupNotConfiguredError
from models.autofill import CandidateCigar, LookupResult

logger = structlog.get_logger(__name__)

# One strict validator per schema field
_FIELD_ADAPTERS: dict[str, TypeAdapter] = {
    name: TypeAdapter(field.annotation)
    for name, field in CandidateCigar.model_fields.items()
}

# Numeric fields where 0 means the lookup did not know the value
_NUMERIC_FIELDS = frozenset(
    name for name, field in CandidateCigar.model_fields.items() if field.annotation is float
)


def validate_candidate(raw: Any) -> LookupResult:
    """
    Check a raw lookup reply against the candidate schema.

    Args:
        raw: Decoded JSON from the lookup

    Returns:
        LookupResult.found with only the valid, known fields (in reply
        order; null and numeric 0 are treated as unknown and left out),
        or LookupResult.failed if the reply is not an object
    """
    if not isinstance(raw, Mapping):
        return LookupResult.failed(f"Lookup returned {type(raw).__name__}, expected an object")

    candidate: dict[str, Any] = {}
    rejected: list[str] = []

    for key, value in raw.items():
        adapter = _FIELD_ADAPTERS.get(key)
        if adapter is None:
            rejected.append(str(key))
            continue
        if value is None:
            continue
        try:
            validated = adapter.validate_python(value, strict=True)
        except PydanticValidationError:
            rejected.append(str(key))
            continue
        if key in _NUMERIC_FIELDS and validated == 0:
            continue
        candidate[key] = validated

    if rejected:
        logger.warning("candidate_fields_rejected", fields=rejected)

    return LookupResult.found(candidate, rejected)


class CigarLookupService:
    """
    Suggest cigar details from a name.

    Wraps the Anthropic client; pass a client in tests.
    """

    SYSTEM_PROMPT = """You are a cigar database. Given a cigar name, provide its details.

IMPORTANT: Return ONLY a JSON object, no markdown, no explanation, no code blocks.

The object MUST use exactly this schema:
{
  "brand": "string",
  "shape": "string",
  "size": "string",
  "country": "string",
  "wrapper": "string",
  "binder": "string",
  "filler": "string",
  "strength": "Mild" | "Mild-Medium" | "Medium" | "Medium-Full" | "Full",
  "flavorNotes": ["string", "string", "string", "string"],
  "shortDescription": "string",
  "description": "string",
  "image": "string",
  "rating": number,
  "price": number,
  "length_inches": number,
  "ring_gauge": number
}

If you cannot determine a value, use null. Never guess a number: use null rather than 0."""

    def __init__(self, client: Optional[Any] = None):
        """
        Args:
            client: Anthropic client; built from settings when omitted
        """
        if client is not None:
            self.client = client
        elif settings.lookup_configured:
            self.client = anthropic.Anthropic(api_key=settings.anthropic_api_key)
        else:
            self.client = None

    @property
    def configured(self) -> bool:
        return self.client is not None

    def lookup(self, name: str) -> LookupResult:
        """
        Look up a cigar by name.

        Args:
            name: Cigar name as typed by the user

        Returns:
            LookupResult with a validated candidate, or a failure reason

        Raises:
            LookupNotConfiguredError: If no API key is configured
        """
        if not self.configured:
            raise LookupNotConfiguredError()

        logger.info("cigar_lookup_started", name=name)

        try:
            response = self.client.messages.create(
                model=settings.lookup_model,
                max_tokens=settings.lookup_max_tokens,
                system=self.SYSTEM_PROMPT,
                messages=[{
                    "role": "user",
                    "content": f'Cigar name: "{name}"'
                }]
            )
        except anthropic.APIError as e:
            logger.error("cigar_lookup_api_error", name=name, error=str(e))
            return LookupResult.failed(f"Lookup service error: {e}")

        response_text = "".join(
            getattr(block, "text", "")
            for block in response.content
            if getattr(block, "type", None) == "text"
        )
        logger.debug("cigar_lookup_response_received", response_length=len(response_text))

        result = self._parse_response(response_text)

        if result.ok:
            logger.info(
                "cigar_lookup_completed",
                name=name,
                field_count=len(result.candidate),
                rejected_fields=result.rejected_fields
            )
        else:
            logger.warning("cigar_lookup_failed", name=name, error=result.error)

        return result

    def _parse_response(self, response_text: str) -> LookupResult:
        """Decode the reply, tolerating a markdown code fence around it."""
        cleaned = response_text.strip()
        if cleaned.startswith("```"):
            cleaned = re.sub(r'^```(?:json)?\s*', '', cleaned)
            cleaned = re.sub(r'\s*```$', '', cleaned)

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error("lookup_json_parse_failed", response_preview=response_text[:500], error=str(e))
            return LookupResult.failed("Lookup reply was not valid JSON")

        return validate_candidate(data)


# Singleton instance
_lookup_service: Optional[CigarLookupService] = None


def get_lookup_service() -> CigarLookupService:
    """Get or create CigarLookupService instance."""
    global _lookup_service
    if _lookup_service is None:
        _lookup_service = CigarLookupService()
    return _lookup_service
