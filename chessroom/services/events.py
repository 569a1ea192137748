"""
Typed event dataclasses, published by the service after a room changed.

Delivery is fire-and-forget: the service does not wait for, or depend on, any subscriber.
All events are frozen, so a subscriber can keep them around or serialize them via dataclasses.asdict().
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Protocol, Union
from uuid import UUID

_LOGGER = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PlayerJoined:
    room_id: UUID
    identity: str
    color: str
    timestamp: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class GameStarted:
    room_id: UUID
    white: str
    black: str
    fen: str
    timestamp: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class MoveMade:
    room_id: UUID
    identity: str
    move_uci: str
    fen_after: str
    is_check: bool
    status: str
    timestamp: datetime = field(default_factory=utc_now)


RoomEvent = Union[PlayerJoined, GameStarted, MoveMade]
Subscriber = Callable[[RoomEvent], None]


class Notifier(Protocol):
    def publish(self, event: RoomEvent) -> None: ...


class EventBus:
    """In-process notifier. A subscriber that fails is logged and skipped, the others still get the event."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def publish(self, event: RoomEvent) -> None:
        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception:
                _LOGGER.warning(
                    "Subscriber %r failed on %s", subscriber, type(event).__name__, exc_info=True
                )
