"""User-visible notifications raised by editor and session operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE


@dataclass
class Notifier:
    """Collects notifications in the order they were raised."""
    notifications: list[Notification] = field(default_factory=list)

    def success(self, description: str, title: str = "Sucesso") -> Notification:
        note = Notification(title=title, description=description)
        self.notifications.append(note)
        logger.info("%s: %s", title, description)
        return note

    def error(self, description: str, title: str = "Erro") -> Notification:
        note = Notification(
            title=title,
            description=description,
            variant=NotificationVariant.DESTRUCTIVE,
        )
        self.notifications.append(note)
        logger.warning("%s: %s", title, description)
        return note

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None

    def errors(self) -> list[Notification]:
        return [n for n in self.notifications if n.is_error]

    def clear(self) -> None:
        self.notifications.clear()
