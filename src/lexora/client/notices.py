"""User-visible notifications raised by the client state managers."""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str


@dataclass
class NoticeBoard:
    """Ordered feed of notices for the UI to display and dismiss."""

    notices: list[Notice] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.notices.append(Notice(NoticeLevel.SUCCESS, message))

    def error(self, message: str) -> None:
        logger.error(message)
        self.notices.append(Notice(NoticeLevel.ERROR, message))

    @property
    def last(self) -> Notice | None:
        return self.notices[-1] if self.notices else None

    def errors(self) -> list[Notice]:
        return [n for n in self.notices if n.level is NoticeLevel.ERROR]

    def clear(self) -> None:
        self.notices.clear()
