"""
Message handler: Slack message -> merge request references -> reaction + GitLab lookup.
"""

from __future__ import annotations

import time
from typing import Any, Protocol

from .events import EventsApiEvent, InboundMessage, plain_message
from .logutil import log_event
from .references import extract_references, looks_like_reference

REACTION_NAME = "one"


class ReactionClient(Protocol):
    def add(self, channel_id: str, timestamp: str, name: str) -> None: ...


class MergeRequestClient(Protocol):
    def get_merge_request(self, project_path: str, iid: int) -> dict[str, Any]: ...


class MessageHandler:
    """Dispatch every merge request link in a message, in order.

    The first failure (malformed link, reaction, lookup) aborts the rest of
    the message and propagates to the caller.
    """

    def __init__(
        self,
        reactions: ReactionClient,
        gitlab: MergeRequestClient,
        reaction_name: str = REACTION_NAME,
    ) -> None:
        self.reactions = reactions
        self.gitlab = gitlab
        self.reaction_name = reaction_name

    def handle(self, event: EventsApiEvent) -> list[dict[str, Any]]:
        return self.handle_message(plain_message(event))

    def handle_message(self, message: InboundMessage) -> list[dict[str, Any]]:
        if not looks_like_reference(message.text):
            return []
        refs = extract_references(message.text)
        fetched: list[dict[str, Any]] = []
        for ref in refs:
            self.reactions.add(message.channel_id, message.timestamp, self.reaction_name)
            t0 = time.time()
            mr = self.gitlab.get_merge_request(ref.project_path, ref.number)
            log_event(
                "merge_request_fetched",
                channel=message.channel_id,
                ts=message.timestamp,
                project=ref.project_path,
                iid=ref.number,
                title=mr.get("title"),
                state=mr.get("state"),
                author=(mr.get("author") or {}).get("username"),
                ms=int((time.time() - t0) * 1000),
            )
            fetched.append(mr)
        return fetched
