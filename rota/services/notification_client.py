# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Notification client — tells members about new assignments.
HTTP calls to the notification-service with timeout & fault tolerance.
"""

import httpx

from rota.core.config import settings
from rota.core.logging import get_logger
from rota.metrics.prometheus import NOTIFICATIONS_SENT

logger = get_logger(__name__)


class NotificationClient:
    """Fire-and-forget notification sender; disabled when no URL is set."""

    def __init__(self, base_url: str | None = None) -> None:
        self._base_url = settings.NOTIFICATION_SERVICE_URL if base_url is None else base_url

    @property
    def enabled(self) -> bool:
        return bool(self._base_url)

    def send(
        self,
        recipient: str,
        message: str,
        assignment_id: int,
        channel: str = "email",
    ) -> None:
        """Send a notification. Failures are logged but never raised."""
        if not self.enabled:
            return
        try:
            with httpx.Client(timeout=settings.NOTIFICATION_TIMEOUT) as client:
                resp = client.post(
                    f"{self._base_url}/api/v1/notify",
                    json={
                        "channel": channel,
                        "recipient": recipient,
                        "message": message,
                        # the notification service keys every message by this field
                        "incident_id": f"rota-assignment-{assignment_id}",
                    },
                )
            NOTIFICATIONS_SENT.labels(channel=channel).inc()
            logger.info(
                "Notification sent: recipient=%s, channel=%s, status=%d",
                recipient,
                channel,
                resp.status_code,
            )
        except Exception as exc:
            logger.warning("Notification failed: %s", exc)

    def notify_assignment(
        self,
        assignment_id: int,
        member: dict,
        region: str,
        start_date,
        end_date,
    ) -> None:
        span = (
            start_date.isoformat()
            if start_date == end_date
            else f"{start_date.isoformat()} to {end_date.isoformat()}"
        )
        self.send(
            recipient=member["email"],
            message=f"You are on {region.upper()} support on {span}",
            assignment_id=assignment_id,
        )
