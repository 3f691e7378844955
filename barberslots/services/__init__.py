"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking import BookingService

__all__ = ["BookingService"]
