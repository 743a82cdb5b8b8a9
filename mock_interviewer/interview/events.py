"""
Event-driven notifications for the interview engine.
"""
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Callable, Sequence

logger = logging.getLogger("events")


class EventType(str, Enum):
    """Types of interview events."""
    SESSION_STARTED = "session_started"
    QUESTIONS_GENERATED = "questions_generated"
    ANSWER_RECORDED = "answer_recorded"
    TAB_SWITCH_DETECTED = "tab_switch_detected"
    DEVICE_WARNING_RAISED = "device_warning_raised"
    SUBMISSION_FAILED = "submission_failed"
    SESSION_COMPLETED = "session_completed"
    ERROR_OCCURRED = "error_occurred"


@dataclass
class InterviewEvent:
    """Base class for all interview events."""
    event_type: EventType
    session_id: str
    timestamp: float
    data: Dict[str, Any] = field(default_factory=dict)


def questions_generated(session_id: str, timestamp: float, role: str, questions: Sequence[str]) -> InterviewEvent:
    return InterviewEvent(EventType.QUESTIONS_GENERATED, session_id, timestamp,
                          {"role": role, "count": len(questions)})


def session_started(session_id: str, timestamp: float, role: str, proctored: bool) -> InterviewEvent:
    return InterviewEvent(EventType.SESSION_STARTED, session_id, timestamp,
                          {"role": role, "proctored": proctored})


def answer_recorded(session_id: str, timestamp: float, index: int, length: int) -> InterviewEvent:
    return InterviewEvent(EventType.ANSWER_RECORDED, session_id, timestamp,
                          {"index": index, "answer_length": length})


def tab_switch_detected(session_id: str, timestamp: float, count: int, total_penalty: int) -> InterviewEvent:
    return InterviewEvent(EventType.TAB_SWITCH_DETECTED, session_id, timestamp,
                          {"tab_switch_count": count, "total_penalty": total_penalty})


def device_warning_raised(session_id: str, timestamp: float, labels: Sequence[str],
                          count: int, total_penalty: int) -> InterviewEvent:
    return InterviewEvent(EventType.DEVICE_WARNING_RAISED, session_id, timestamp,
                          {"labels": list(labels), "device_warning_count": count,
                           "total_penalty": total_penalty})


def submission_failed(session_id: str, timestamp: float, error_type: str, error_message: str) -> InterviewEvent:
    return InterviewEvent(EventType.SUBMISSION_FAILED, session_id, timestamp,
                          {"error_type": error_type, "error_message": error_message})


def session_completed(session_id: str, timestamp: float, overall_score: float, penalty: int) -> InterviewEvent:
    return InterviewEvent(EventType.SESSION_COMPLETED, session_id, timestamp,
                          {"overall_score": overall_score, "penalty": penalty})


def error_occurred(session_id: str, timestamp: float, error_type: str,
                   error_message: str, component: str) -> InterviewEvent:
    return InterviewEvent(EventType.ERROR_OCCURRED, session_id, timestamp,
                          {"error_type": error_type, "error_message": error_message,
                           "component": component})


EventHandler = Callable[[InterviewEvent], None]


class InterviewEventBus:
    """Event bus for interview engine communication."""

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []
        self._lock = threading.Lock()

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """
        Subscribe to specific event type.

        Args:
            event_type: Type of event to listen for
            handler: Function to call when event occurs
        """
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscribed handler to {event_type}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to all events."""
        with self._lock:
            self._global_handlers.append(handler)
        logger.debug("Subscribed global handler")

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Unsubscribed handler from {event_type}")
            else:
                logger.warning(f"Handler not found for {event_type}")

    def emit(self, event: InterviewEvent) -> None:
        """
        Emit an event to all subscribers.
        A failing handler is logged and does not stop the others.
        """
        logger.debug(f"Emitting event: {event.event_type} for session {event.session_id}")

        with self._lock:
            handlers = list(self._handlers.get(event.event_type, [])) + list(self._global_handlers)

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.event_type}: {e}")

    def clear_handlers(self) -> None:
        with self._lock:
            self._handlers.clear()
            self._global_handlers.clear()
        logger.debug("Cleared all event handlers")


class EventLogger:
    """Logs all events for debugging and analysis."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger("event_logger")
        self.log_level = log_level

    def handle_event(self, event: InterviewEvent) -> None:
        self.logger.log(self.log_level, f"Event: {event.event_type.value} | Session: {event.session_id} | Data: {event.data}")


class InterviewMetrics:
    """Counts interview events."""

    def __init__(self):
        self.counts: Dict[EventType, int] = {t: 0 for t in EventType}

    def handle_event(self, event: InterviewEvent) -> None:
        self.counts[event.event_type] += 1

    def get_metrics(self) -> Dict[str, int]:
        return {t.value: n for t, n in self.counts.items()}

    def reset(self) -> None:
        for t in self.counts:
            self.counts[t] = 0
