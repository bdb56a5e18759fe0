"""Notification errors and the parameters handed to notifiers."""

from __future__ import annotations

from dataclasses import dataclass

from kaiki.report import ComparisonResult


class NotifyError(Exception):
    """Raised when a notification cannot be delivered."""

    prefix = "notification error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class NotifyHttpError(NotifyError):
    """Raised when the HTTP request itself fails."""

    prefix = "HTTP request failed"


class NotifyFailedError(NotifyError):
    """Raised when the remote service rejects the notification."""

    prefix = "notification failed"


class NotifyConfigError(NotifyError):
    """Raised when the notifier is misconfigured."""

    prefix = "configuration error"


@dataclass(kw_only=True)
class NotifyParams:
    """Everything a notifier needs to report on a comparison."""

    comparison: ComparisonResult
    current_sha: str
    report_url: str | None = None
    pr_number: int | None = None