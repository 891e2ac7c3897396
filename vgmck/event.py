"""Timed chip and raw events and a time-ordered queue for them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union


@dataclass
class ChipEvent:
    """A chip-specific event with two parameters."""

    event_type: int
    value1: int
    value2: int


EventData = Union[ChipEvent, int]


@dataclass
class Event:
    """An event at a sample time; ``data`` is a ChipEvent or a raw VGM byte."""

    time: int
    channel: int
    data: EventData

    @classmethod
    def chip(cls, time: int, channel: int, event_type: int, value1: int, value2: int) -> Event:
        return cls(time, channel, ChipEvent(event_type, value1, value2))

    @classmethod
    def raw(cls, time: int, value: int) -> Event:
        return cls(time, -1, value & 0xFF)

    @property
    def is_raw(self) -> bool:
        return not isinstance(self.data, ChipEvent)


class EventQueue:
    """Events grouped by time; iteration is in time order, then insertion order."""

    def __init__(self) -> None:
        self._events: dict[int, list[Event]] = {}

    def insert(self, event: Event) -> None:
        self._events.setdefault(event.time, []).append(event)

    def __iter__(self) -> Iterator[Event]:
        for time in sorted(self._events):
            yield from self._events[time]

    def __len__(self) -> int:
        return sum(len(group) for group in self._events.values())

    def at_time(self, time: int) -> list[Event] | None:
        return self._events.get(time)

    def clear(self) -> None:
        self._events.clear()

    def is_empty(self) -> bool:
        return not self._events

    def last_time(self) -> int | None:
        return max(self._events, default=None)