"""Side-channel event recording for recovered failures.

Gateways and the engine absorb remote failures instead of raising them. They
report what happened through an ``EventRecorder`` so the failure stays
observable (logs in production, assertions in tests) without affecting
control flow.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from vibematch.utils.logging import get_logger


@dataclass(frozen=True)
class Event:
    """A single recorded event."""

    component: str
    name: str
    level: int = logging.INFO
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.level >= logging.WARNING


class EventRecorder(Protocol):
    """Anything that can receive component events."""

    def record(self, component: str, name: str, level: int = logging.INFO, **fields: Any) -> None:
        ...


class LoggingEventRecorder:
    """Forwards events to the standard logging system."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("vibematch.events")

    def record(self, component: str, name: str, level: int = logging.INFO, **fields: Any) -> None:
        details = " ".join(f"{k}={v}" for k, v in fields.items())
        self.logger.log(level, f"[{component}] {name} {details}".rstrip())


class MemoryEventRecorder:
    """Keeps events in memory, optionally forwarding them to another recorder."""

    def __init__(self, forward_to: EventRecorder | None = None) -> None:
        self.events: list[Event] = []
        self._forward_to = forward_to

    def record(self, component: str, name: str, level: int = logging.INFO, **fields: Any) -> None:
        self.events.append(Event(component=component, name=name, level=level, fields=fields))
        if self._forward_to is not None:
            self._forward_to.record(component, name, level, **fields)

    @property
    def errors(self) -> list[Event]:
        return [e for e in self.events if e.is_error]

    def named(self, name: str) -> list[Event]:
        return [e for e in self.events if e.name == name]

    def clear(self) -> None:
        self.events.clear()


default_recorder = LoggingEventRecorder()
