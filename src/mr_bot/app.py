"""
Socket Mode entry point: ack Slack envelopes and feed a single worker thread.
"""

from __future__ import annotations

import logging
import queue
import signal
import threading
from collections.abc import Callable, Mapping
from typing import Any

from slack_sdk import WebClient
from slack_sdk.socket_mode import SocketModeClient
from slack_sdk.socket_mode.request import SocketModeRequest
from slack_sdk.socket_mode.response import SocketModeResponse

from .config import Settings, load_settings
from .errors import MrBotError, UnsupportedEventError
from .events import CallbackEvent, parse_events_api
from .gitlab import GitLabClient
from .handler import MessageHandler
from .idempotency import RecentEventIds
from .logutil import configure_logging, log_event
from .slack import SlackReactions

logger = logging.getLogger(__name__)

EVENTS_API = "events_api"


class EventWorker:
    """Consumes Events API payloads one at a time on a dedicated thread."""

    def __init__(
        self,
        handler: MessageHandler,
        seen: RecentEventIds | None = None,
        poll_interval: float = 0.5,
    ) -> None:
        self.handler = handler
        self.seen = seen if seen is not None else RecentEventIds()
        self.poll_interval = poll_interval
        self._queue: queue.Queue[Mapping[str, Any]] = queue.Queue()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def submit(self, payload: Mapping[str, Any]) -> None:
        self._queue.put(payload)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self.run, name="mr-bot-worker", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def run(self) -> None:
        while not self._stop.is_set():
            try:
                payload = self._queue.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            if self._stop.is_set():
                break
            try:
                self.process(payload)
            finally:
                self._queue.task_done()
        log_event("worker_stopped", pending=self._queue.qsize())

    def process(self, payload: Mapping[str, Any]) -> None:
        event = parse_events_api(payload)
        event_id = event.event_id if isinstance(event, CallbackEvent) else None
        if event_id and not self.seen.record_if_new(event_id):
            log_event("duplicate_event", level=logging.DEBUG, eventId=event_id)
            return
        try:
            fetched = self.handler.handle(event)
        except UnsupportedEventError as e:
            log_event("unsupported_event", level=logging.DEBUG, eventId=event_id, kind=e.kind)
            return
        except MrBotError as e:
            log_event(
                "message_failed",
                level=logging.WARNING,
                eventId=event_id,
                errorType=type(e).__name__,
                error=str(e),
            )
            return
        except Exception:
            logger.exception("Unexpected error while handling event %s", event_id)
            return
        if fetched:
            log_event("message_ok", eventId=event_id, mergeRequests=len(fetched))


def make_listener(worker: EventWorker) -> Callable[[SocketModeClient, SocketModeRequest], None]:
    def _on_request(client: SocketModeClient, req: SocketModeRequest) -> None:
        if req.type != EVENTS_API:
            logger.debug("Ignoring socket mode request of type %s", req.type)
            return
        # Ack first: core failures must not trigger redelivery.
        client.send_socket_mode_response(SocketModeResponse(envelope_id=req.envelope_id))
        if worker.stopped:
            return
        worker.submit(req.payload or {})

    return _on_request


def build_clients(settings: Settings) -> tuple[SocketModeClient, MessageHandler]:
    gitlab = GitLabClient(
        settings.gitlab_base_url,
        settings.gitlab_access_token,
        timeout=settings.gitlab_timeout_seconds,
    )
    web_client = WebClient(token=settings.slack_auth_token, timeout=settings.slack_timeout_seconds)
    socket_client = SocketModeClient(
        app_token=settings.slack_app_token,
        web_client=web_client,
        logger=logging.getLogger("mr_bot.socket_mode"),
        # One listener thread keeps submissions in delivery order.
        concurrency=1,
    )
    return socket_client, MessageHandler(SlackReactions(web_client), gitlab)


def main() -> int:
    settings = load_settings()
    configure_logging(settings.slack_debug)

    missing = settings.missing_required()
    if missing:
        log_event("config_error", level=logging.ERROR, missing=missing)
        return 1

    try:
        socket_client, handler = build_clients(settings)
    except (ValueError, TypeError) as e:
        log_event("client_init_failed", level=logging.ERROR, error=str(e))
        return 1

    worker = EventWorker(handler, RecentEventIds(settings.event_dedupe_capacity))
    socket_client.socket_mode_request_listeners.append(make_listener(worker))

    shutdown = threading.Event()

    def _on_signal(signum: int, _frame: Any) -> None:
        log_event("signal_received", signal=signum)
        shutdown.set()

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    worker.start()
    try:
        socket_client.connect()
    except Exception as e:
        logger.exception("Failed to connect to Slack")
        log_event("connect_failed", level=logging.ERROR, error=str(e))
        worker.stop()
        socket_client.close()
        return 1
    log_event("listening", gitlab=settings.gitlab_base_url)

    shutdown.wait()
    log_event("shutting_down")
    worker.stop(timeout=5)
    socket_client.close()
    return 0
