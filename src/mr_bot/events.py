"""
Typed view of Slack Events API payloads delivered over Socket Mode.

Only ``event_callback`` envelopes wrapping a plain ``message`` are handled;
every other shape maps to an Other* variant instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import UnsupportedEventError

CALLBACK_EVENT = "event_callback"
MESSAGE_EVENT = "message"

# Message subtypes without a user-authored body.
HIDDEN_MESSAGE_SUBTYPES = frozenset(
    {"message_changed", "message_deleted", "message_replied", "channel_join", "channel_leave"}
)


@dataclass(frozen=True)
class InboundMessage:
    text: str
    channel_id: str
    timestamp: str
    user: str | None = None


@dataclass(frozen=True)
class OtherInner:
    type: str
    subtype: str | None = None


@dataclass(frozen=True)
class CallbackEvent:
    event_id: str | None
    inner: InboundMessage | OtherInner


@dataclass(frozen=True)
class OtherEvent:
    type: str


EventsApiEvent = CallbackEvent | OtherEvent


def _str(v: Any) -> str | None:
    return v if isinstance(v, str) else None


def _parse_inner(event: Any) -> InboundMessage | OtherInner:
    if not isinstance(event, Mapping):
        return OtherInner(type="unknown")
    kind = _str(event.get("type")) or "unknown"
    subtype = _str(event.get("subtype"))
    if kind != MESSAGE_EVENT or subtype in HIDDEN_MESSAGE_SUBTYPES:
        return OtherInner(type=kind, subtype=subtype)
    text = _str(event.get("text"))
    channel = _str(event.get("channel"))
    ts = _str(event.get("ts"))
    if text is None or not channel or not ts:
        return OtherInner(type=kind, subtype=subtype)
    return InboundMessage(text=text, channel_id=channel, timestamp=ts, user=_str(event.get("user")))


def parse_events_api(payload: Mapping[str, Any] | None) -> EventsApiEvent:
    """Map a raw ``events_api`` payload onto the event variants."""
    if not isinstance(payload, Mapping):
        return OtherEvent(type="unknown")
    kind = _str(payload.get("type")) or "unknown"
    if kind != CALLBACK_EVENT:
        return OtherEvent(type=kind)
    return CallbackEvent(
        event_id=_str(payload.get("event_id")),
        inner=_parse_inner(payload.get("event")),
    )


def plain_message(event: EventsApiEvent) -> InboundMessage:
    if isinstance(event, OtherEvent):
        raise UnsupportedEventError(event.type)
    if isinstance(event.inner, OtherInner):
        kind = event.inner.type
        if event.inner.subtype:
            kind = f"{kind}/{event.inner.subtype}"
        raise UnsupportedEventError(kind)
    return event.inner
