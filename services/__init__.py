"""
Business logic services.

Each service handles one domain area.
"""

from services.autofill_service import AutoFillService, get_autofill_service
from services.lookup_service import CigarLookupService, get_lookup_service

__all__ = [
    "AutoFillService",
    "get_autofill_service",
    "CigarLookupService",
    "get_lookup_service",
]
