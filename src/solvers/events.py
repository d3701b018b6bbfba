"""
Structured events emitted by solvers and the hint service.

Solvers describe what they decided through an EventEmitter instead of
printing. Every event is logged at DEBUG level and handed to any
subscribed sink, so tests and tools can inspect decisions directly.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Decisions and conditions reported during a turn."""

    MINES_PLACED = auto()
    OPEN = auto()
    FLAG = auto()
    UNFLAG = auto()
    GUESS = auto()
    MINE_HIT = auto()
    UNEXPECTED_MINE = auto()
    WON = auto()
    HINT = auto()
    GUARD_FAILURE = auto()
    DEADLOCK = auto()
    EXHAUSTED = auto()


@dataclass(frozen=True)
class SolverEvent:
    """
    One reported decision.

    Attributes:
        kind: What happened.
        source: Name of the solver tier or service emitting it.
        position: Cell concerned, if any.
        detail: Rule name or free-form context.
    """

    kind: EventKind
    source: str
    position: Optional[Tuple[int, int]] = None
    detail: str = ""


EventSink = Callable[[SolverEvent], None]


class EventEmitter:
    """Fan-out of solver events to logging and subscribed sinks."""

    def __init__(self, *sinks: EventSink) -> None:
        self._sinks: List[EventSink] = list(sinks)

    def subscribe(self, sink: EventSink) -> None:
        """Register a sink that receives every subsequent event."""
        self._sinks.append(sink)

    def unsubscribe(self, sink: EventSink) -> None:
        """Stop forwarding events to a sink."""
        if sink in self._sinks:
            self._sinks.remove(sink)

    def emit(
        self,
        kind: EventKind,
        source: str,
        position: Optional[Tuple[int, int]] = None,
        detail: str = "",
    ) -> SolverEvent:
        """Build an event, log it and forward it to every sink."""
        event = SolverEvent(kind, source, position, detail)
        level = logging.WARNING if kind == EventKind.GUARD_FAILURE else logging.DEBUG
        logger.log(level, "%s %s at %s %s", source, kind.name, position, detail)
        for sink in self._sinks:
            sink(event)
        return event


class EventRecorder:
    """Sink keeping every event it receives, in order."""

    def __init__(self) -> None:
        self.events: List[SolverEvent] = []

    def __call__(self, event: SolverEvent) -> None:
        self.events.append(event)

    def kinds(self) -> List[EventKind]:
        return [event.kind for event in self.events]

    def count(self, kind: EventKind) -> int:
        return sum(1 for event in self.events if event.kind == kind)

    def clear(self) -> None:
        self.events.clear()
