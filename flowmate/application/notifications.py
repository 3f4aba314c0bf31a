"""User-facing notifications.

The core never renders anything; it hands ``Notification`` values to a
sink. The default sink writes them to the log. Front ends (the CLI,
tests) plug in their own.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Notification:
    level: NotificationLevel
    title: str
    description: str = ""

    def __str__(self) -> str:
        return f"{self.title}: {self.description}" if self.description else self.title


class NotificationSink(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LoggingNotificationSink:
    """Writes notifications to the log; errors at ERROR level."""

    def notify(self, notification: Notification) -> None:
        if notification.level is NotificationLevel.ERROR:
            logger.error(str(notification))
        else:
            logger.info(str(notification))


def success(title: str, description: str = "") -> Notification:
    return Notification(NotificationLevel.SUCCESS, title, description)


def error(title: str, description: str = "") -> Notification:
    return Notification(NotificationLevel.ERROR, title, description)
