"""NotificationChannel protocol — interface for all notification delivery channels."""

from enum import StrEnum
from typing import Protocol, runtime_checkable


class Severity(StrEnum):
    """How serious a notice is. Channels may style or route on it."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@runtime_checkable
class NotificationChannel(Protocol):
    """Protocol that all notification channels must satisfy."""

    @property
    def name(self) -> str:
        """Unique channel identifier (e.g. 'telegram', 'log')."""
        ...

    async def notify(self, title: str, message: str, severity: Severity) -> bool:
        """Deliver a titled notice. Returns True on success."""
        ...
