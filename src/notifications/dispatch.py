"""Best-effort notification dispatch.

``notify`` never raises: a failed render or delivery is logged and reported
through the return value, so the caller's state change always stands.
"""

import structlog

from notifications.channel import EMAIL, get_channel
from notifications.templates import get_template

logger = structlog.get_logger(__name__)


def notify(to: str | None, notification_type: str, context: dict, channel_type: str = EMAIL) -> bool:
    if not to:
        logger.warning("Notification skipped, no recipient", notification_type=notification_type)
        return False

    try:
        content = get_template(notification_type).render(context)
        result = get_channel(channel_type).send(to=to, subject=content["subject"], body=content["body"])
    except Exception:
        logger.exception("Notification failed", notification_type=notification_type, to=to)
        return False

    if result.get("status") != "sent":
        logger.warning(
            "Notification not delivered",
            notification_type=notification_type,
            to=to,
            error=result.get("error"),
        )
        return False

    logger.info("Notification sent", notification_type=notification_type, to=to)
    return True
