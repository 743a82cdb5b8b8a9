import logging

from mock_interviewer.interview import InterviewEventBus, EventLogger, InterviewMetrics, EventType
from mock_interviewer.interview.events import tab_switch_detected, session_completed, device_warning_raised


def test_subscribers_receive_matching_events():
    bus = InterviewEventBus()
    tabs, everything = [], []
    bus.subscribe(EventType.TAB_SWITCH_DETECTED, tabs.append)
    bus.subscribe_all(everything.append)

    bus.emit(tab_switch_detected("s1", 1.0, 1, 5))
    bus.emit(session_completed("s1", 2.0, 75.0, 5))

    assert [e.data["total_penalty"] for e in tabs] == [5]
    assert [e.event_type for e in everything] == [EventType.TAB_SWITCH_DETECTED, EventType.SESSION_COMPLETED]


def test_failing_handler_is_isolated():
    bus = InterviewEventBus()
    received = []

    def broken(event):
        raise ValueError("bad handler")

    bus.subscribe(EventType.SESSION_COMPLETED, broken)
    bus.subscribe(EventType.SESSION_COMPLETED, received.append)
    bus.emit(session_completed("s1", 1.0, 50.0, 0))

    assert len(received) == 1


def test_unsubscribe_and_clear():
    bus = InterviewEventBus()
    received = []
    bus.subscribe(EventType.TAB_SWITCH_DETECTED, received.append)
    bus.unsubscribe(EventType.TAB_SWITCH_DETECTED, received.append)
    bus.emit(tab_switch_detected("s1", 1.0, 1, 5))
    assert received == []

    bus.subscribe_all(received.append)
    bus.clear_handlers()
    bus.emit(tab_switch_detected("s1", 1.0, 2, 10))
    assert received == []


def test_metrics_count_events():
    bus = InterviewEventBus()
    metrics = InterviewMetrics()
    bus.subscribe_all(metrics.handle_event)

    bus.emit(tab_switch_detected("s1", 1.0, 1, 5))
    bus.emit(tab_switch_detected("s1", 2.0, 2, 10))
    bus.emit(device_warning_raised("s1", 3.0, ["book"], 1, 20))

    counts = metrics.get_metrics()
    assert counts[EventType.TAB_SWITCH_DETECTED.value] == 2
    assert counts[EventType.DEVICE_WARNING_RAISED.value] == 1
    assert counts[EventType.SESSION_COMPLETED.value] == 0

    metrics.reset()
    assert sum(metrics.get_metrics().values()) == 0


def test_event_logger(caplog):
    with caplog.at_level(logging.INFO, logger="event_logger"):
        EventLogger().handle_event(session_completed("s1", 1.0, 88.0, 0))
    assert "Session: s1" in caplog.text
