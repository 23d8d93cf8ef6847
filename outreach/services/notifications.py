"""
Notifications — Slack webhook integration for outreach events.

Notification failure never blocks the action that triggered it.
"""
import logging
import requests

from outreach.config import SLACK_WEBHOOK_URL
from outreach.services.circuit_breaker import get_breaker

logger = logging.getLogger('services.notifications')


def _post(blocks):
    get_breaker('slack').call(
        requests.post, SLACK_WEBHOOK_URL, json={"blocks": blocks}, timeout=10,
    )


def notify_signup_pending(email, name):
    """Tell admins a new team member is waiting for approval."""
    if not SLACK_WEBHOOK_URL:
        return

    try:
        blocks = [
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"*New sign-up awaiting approval:* {name or email} ({email})",
                },
            },
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": "Approve or reject it under Settings → Team."}],
            },
        ]
        _post(blocks)
        logger.info("Sign-up notification sent for %s", email)
    except Exception:
        logger.error("Failed to send sign-up notification for %s", email, exc_info=True)


def notify_message_sent(page_name, platform, sent_by_name):
    """Post a short note when a draft is marked as sent."""
    if not SLACK_WEBHOOK_URL:
        return

    try:
        blocks = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": f"Outreach sent — {page_name}"},
            },
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Platform:* {platform}"},
                    {"type": "mrkdwn", "text": f"*Sent by:* {sent_by_name or 'unknown'}"},
                ],
            },
        ]
        _post(blocks)
        logger.info("Message-sent notification posted for %s", page_name)
    except Exception:
        logger.error("Failed to send message notification for %s", page_name, exc_info=True)
