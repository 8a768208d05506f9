"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .room_booking import FreeBusyClientProtocol, RoomBookingService

__all__ = ["FreeBusyClientProtocol", "RoomBookingService"]
