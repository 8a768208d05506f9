"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import AvailabilityEngine
from .booking import BookingRequest
from .models import (
    AvailabilityResult,
    CandidateWindow,
    FreeBusyResponse,
    FreeGap,
    TimeInterval,
)

__all__ = [
    "AvailabilityEngine",
    "AvailabilityResult",
    "BookingRequest",
    "CandidateWindow",
    "FreeBusyResponse",
    "FreeGap",
    "TimeInterval",
]
