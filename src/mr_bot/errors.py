"""
Error taxonomy for the bot.

Everything raised by the core derives from MrBotError so the event worker
can tell expected failures from bugs.
"""

from __future__ import annotations


class MrBotError(Exception):
    pass


class MalformedReferenceError(MrBotError, ValueError):
    """A link looked like a merge request URL but could not be decomposed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"malformed merge request link {url!r}: {reason}")
        self.url = url
        self.reason = reason


class UnsupportedEventError(MrBotError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"unsupported event type: {kind}")
        self.kind = kind


class ReactionError(MrBotError):
    def __init__(self, channel_id: str, timestamp: str, error: str) -> None:
        super().__init__(f"failed to react to {channel_id}/{timestamp}: {error}")
        self.channel_id = channel_id
        self.timestamp = timestamp
        self.error = error


class MergeRequestLookupError(MrBotError):
    def __init__(self, project_path: str, iid: int, error: str, status: int | None = None) -> None:
        super().__init__(f"failed to fetch {project_path}!{iid}: {error}")
        self.project_path = project_path
        self.iid = iid
        self.error = error
        self.status = status
