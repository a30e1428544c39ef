"""
Core package - Shared building blocks.
Contains snapshot publishing, the stateful service base class and utilities.
"""

from core.events import EventChannel
from core.base.base_service import BaseService

__all__ = [
    "EventChannel",
    "BaseService",
]
