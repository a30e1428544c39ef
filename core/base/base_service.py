"""
Base class for stateful services.
Services hold session state, publish immutable snapshots and log with
structured key=value context.
"""

from typing import Generic, TypeVar
from abc import ABC, abstractmethod
import logging

from core.events import EventChannel

SnapshotType = TypeVar("SnapshotType")


class BaseService(Generic[SnapshotType], ABC):
    """
    Base service providing logging helpers and a snapshot channel.
    Subclasses implement snapshot() and call publish() after each transition.
    """

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)
        self.events: EventChannel[SnapshotType] = EventChannel(logger_name)

    @abstractmethod
    def snapshot(self) -> SnapshotType:
        """Current immutable state"""

    def subscribe(self, listener):
        """Register a snapshot listener; returns an unsubscribe callable"""
        return self.events.subscribe(listener)

    def publish(self) -> SnapshotType:
        snap = self.snapshot()
        self.events.publish(snap)
        return snap

    def log_info(self, message: str, **kwargs):
        """Log info message with structured data"""
        extra_data = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        self.logger.info(f"{message} {extra_data}".strip())

    def log_debug(self, message: str, **kwargs):
        """Log debug message with structured data"""
        extra_data = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        self.logger.debug(f"{message} {extra_data}".strip())

    def log_warning(self, message: str, **kwargs):
        """Log warning message with structured data"""
        extra_data = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        self.logger.warning(f"{message} {extra_data}".strip())
