"""Slack webhook notifications for comparison results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from kaiki.notify import NotifyHttpError, NotifyParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlackNotifyConfig:
    """Configuration of the Slack notifier."""

    webhook_url: str


def diff_image_url(report_url: str, diff_dir: str, image_name: str) -> str:
    """Build a diff image URL next to the report, dropping a trailing index.html."""
    base = report_url.removesuffix("index.html")
    return f"{base}{diff_dir}/{image_name}"


def build_slack_payload(params: NotifyParams) -> dict[str, Any]:
    """Build the webhook payload describing the comparison."""
    comp = params.comparison
    if comp.has_failures():
        color = "danger"
    elif comp.has_changes():
        color = "warning"
    else:
        color = "good"

    text = (
        f"Changed: {len(comp.failed_items)}, New: {len(comp.new_items)}, "
        f"Deleted: {len(comp.deleted_items)}, Passed: {len(comp.passed_items)}"
    )

    fields: list[dict[str, Any]] = [{"title": "Result", "value": text, "short": False}]
    if params.report_url is not None:
        fields.append({"title": "Report", "value": params.report_url, "short": False})

    attachment: dict[str, Any] = {
        "color": color,
        "title": "Visual Regression Report",
        "fields": fields,
    }
    if params.report_url is not None and comp.failed_items:
        attachment["image_url"] = diff_image_url(
            params.report_url, comp.diff_dir, comp.failed_items[0]
        )

    return {"attachments": [attachment]}


class SlackNotifier:
    """Posts comparison summaries to a Slack incoming webhook."""

    def __init__(
        self, config: SlackNotifyConfig, *, client: httpx.AsyncClient | None = None
    ) -> None:
        self.config = config
        self._client = client

    async def notify(self, params: NotifyParams) -> None:
        """Send the summary; a rejected webhook is logged, not raised."""
        payload = build_slack_payload(params)
        try:
            if self._client is not None:
                resp = await self._client.post(self.config.webhook_url, json=payload)
            else:
                async with httpx.AsyncClient() as client:
                    resp = await client.post(self.config.webhook_url, json=payload)
        except httpx.HTTPError as exc:
            raise NotifyHttpError(str(exc)) from exc

        if not resp.is_success:
            status = f"{resp.status_code} {resp.reason_phrase}".strip()
            logger.warning("Slack notification failed (%s): %s", status, resp.text)