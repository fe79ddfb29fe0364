import asyncio
import logging

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)


async def send_slack_notification_async(message: str, blocks: list = None):
    """
    Send a message to Slack via webhook.

    Args:
        message: Plain text message to send
        blocks: Optional list of Slack Block Kit blocks for rich formatting

    Returns:
        True if message sent successfully, False otherwise
    """
    if not settings.SLACK_WEBHOOK_URL:
        logger.info(f"No Slack webhook configured. Message: {message}")
        return False

    payload = {"text": message}

    if blocks:
        payload["blocks"] = blocks

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                settings.SLACK_WEBHOOK_URL,
                headers={"Content-type": "application/json"},
                json=payload,
                timeout=10.0
            )
            response.raise_for_status()
            return True
    except httpx.HTTPError as e:
        logger.warning(f"Failed to send Slack notification: {e}")
        return False


def send_slack_notification(message: str, blocks: list = None):
    """
    Synchronous wrapper for send_slack_notification_async.

    Use this in views, management commands and transaction.on_commit hooks.

    Example:
        >>> from config.notifications import send_slack_notification
        >>> send_slack_notification("Hello from Django!")
    """
    return asyncio.run(send_slack_notification_async(message, blocks))


def send_valuation_notification(report, race):
    """
    Send Slack notification summarising a completed valuation pass.

    Args:
        report: ValuationReport returned by the valuation pass
        race: Race that was valued

    Returns:
        True if notification sent successfully, False otherwise
    """
    summary = report.summary()

    biggest_movers = sorted(report.drivers, key=lambda r: abs(r.amount), reverse=True)[:3]
    movers_text = "\n".join(
        f"• Driver {r.asset_id}: {r.old_value} → {r.new_value} ({r.percent}%)"
        for r in biggest_movers
    ) or "• No driver values changed"

    blocks = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"Valuations applied: {race.name}",
                "emoji": True
            }
        },
        {
            "type": "section",
            "fields": [
                {
                    "type": "mrkdwn",
                    "text": f"*Round:*\n{race.round_number}"
                },
                {
                    "type": "mrkdwn",
                    "text": f"*Rosters updated:*\n{summary['rosters_updated']}"
                }
            ]
        },
        {
            "type": "divider"
        },
        {
            "type": "section",
            "fields": [
                {
                    "type": "mrkdwn",
                    "text": f"*Assets valued:*\n{summary['drivers_valued']} drivers, "
                            f"{summary['engines_valued']} engines, {summary['chassis_valued']} chassis"
                },
                {
                    "type": "mrkdwn",
                    "text": f"*Credits distributed:*\n{summary['credits_distributed']:+d}"
                }
            ]
        },
        {
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": f"*Biggest movers:*\n{movers_text}"
            }
        }
    ]

    return send_slack_notification(
        message=f"Valuations applied for {race.name} (round {race.round_number})",
        blocks=blocks
    )
