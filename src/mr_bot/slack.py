"""
Slack reaction client on top of slack_sdk's WebClient.
"""

from __future__ import annotations

import logging

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from .errors import ReactionError

logger = logging.getLogger(__name__)

# Returned when the marker is already on the message (several links in one message).
ALREADY_REACTED = "already_reacted"


class SlackReactions:
    def __init__(self, web_client: WebClient) -> None:
        self.web_client = web_client

    def add(self, channel_id: str, timestamp: str, name: str) -> None:
        try:
            self.web_client.reactions_add(channel=channel_id, name=name, timestamp=timestamp)
        except SlackApiError as e:
            error = (e.response.get("error") if e.response is not None else None) or "unknown_error"
            if error == ALREADY_REACTED:
                logger.debug("reaction %s already on %s/%s", name, channel_id, timestamp)
                return
            raise ReactionError(channel_id, timestamp, error) from e
        except (SlackClientError, OSError) as e:
            raise ReactionError(channel_id, timestamp, str(e) or type(e).__name__) from e
