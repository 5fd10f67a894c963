"""Notification Service - toast messages shown after user-triggered updates."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

from marketplace.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)

TOAST_SUCCESS = "success"
TOAST_ERROR = "error"


@dataclass
class Toast:
    """Single toast notification."""
    type: str
    text: str
    created_at: str = ""

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()


@dataclass
class NotificationService:
    """
    Collects toasts for the UI layer.

    The renderer registers a `sink`; without one, toasts are only kept in
    `history` and logged.
    """
    sink: Optional[Callable[[Toast], None]] = None
    history: List[Toast] = field(default_factory=list)

    def show(self, toast_type: str, text: str) -> Toast:
        toast = Toast(type=toast_type, text=text)
        self.history.append(toast)

        safe_text = sanitize_string_for_logging(text)
        if toast_type == TOAST_ERROR:
            logger.warning(f"Toast [{toast_type}]: {safe_text}")
        else:
            logger.info(f"Toast [{toast_type}]: {safe_text}")

        if self.sink is not None:
            self.sink(toast)
        return toast

    def success(self, text: str) -> Toast:
        return self.show(TOAST_SUCCESS, text)

    def error(self, text: str) -> Toast:
        return self.show(TOAST_ERROR, text)

    @property
    def last(self) -> Optional[Toast]:
        return self.history[-1] if self.history else None
