"""Realtime event emitters.

Services never hold a process-wide socket handle. Views own an emitter
(``EventEmitterMixin.event_emitter``, overridable through
``View.as_view(event_emitter=...)``) and pass it to service functions,
which emit after the surrounding transaction commits.
"""
import json
import logging
from typing import Any, Optional

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class EventEmitter:
    """Interface: broadcast ``event`` to everyone, or to ``room`` only."""

    def emit(self, event: str, payload: dict, room: Optional[str] = None) -> None:
        raise NotImplementedError


class LoggingEventEmitter(EventEmitter):
    def emit(self, event: str, payload: dict, room: Optional[str] = None) -> None:
        logger.info("event=%s room=%s payload=%s", event, room or "*", payload)


class RedisEventEmitter(EventEmitter):
    """Publish events on a Redis channel for the socket gateway to fan out."""

    def __init__(self, channel: Optional[str] = None, client: Any = None):
        self.channel = channel or settings.EVENT_CHANNEL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            from django_redis import get_redis_connection

            self._client = get_redis_connection("default")
        return self._client

    def emit(self, event: str, payload: dict, room: Optional[str] = None) -> None:
        message = json.dumps(
            {"event": event, "room": room, "payload": payload},
            cls=DjangoJSONEncoder,
        )
        self.client.publish(self.channel, message)


def build_event_emitter() -> EventEmitter:
    return import_string(settings.EVENT_EMITTER)()


def user_room(user_id) -> str:
    return f"user:{user_id}"


def emit_on_commit(
    emitter: Optional[EventEmitter],
    event: str,
    payload: dict,
    room: Optional[str] = None,
) -> None:
    """Emit once the current transaction commits; broadcast failures are logged only."""
    if emitter is None:
        return

    def _send():
        try:
            emitter.emit(event, payload, room=room)
        except Exception:
            logger.exception("failed to emit event=%s room=%s", event, room)

    transaction.on_commit(_send)


class EventEmitterMixin:
    event_emitter: Optional[EventEmitter] = None

    def get_event_emitter(self) -> EventEmitter:
        if self.event_emitter is None:
            self.event_emitter = build_event_emitter()
        return self.event_emitter


__all__ = [
    "EventEmitter",
    "LoggingEventEmitter",
    "RedisEventEmitter",
    "EventEmitterMixin",
    "build_event_emitter",
    "emit_on_commit",
    "user_room",
]
