"""
Adapters layer - Storage and clock implementations.
"""

from .clock import SystemClock
from .memory_book import InMemoryAppointmentBook

__all__ = ["InMemoryAppointmentBook", "SystemClock"]
