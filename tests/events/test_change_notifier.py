from __future__ import annotations

from src.lecture_tracker.lecture_tracker.core.enums import ChangeType
from src.lecture_tracker.lecture_tracker.events.notifier import ChangeNotifier


def test_every_subscriber_gets_every_event():
    notifier = ChangeNotifier()
    a = notifier.subscribe()
    b = notifier.subscribe()

    notifier.publish(ChangeType.SUBJECTS, ChangeType.TASKS)

    assert a.drain() == [ChangeType.SUBJECTS, ChangeType.TASKS]
    assert b.drain() == [ChangeType.SUBJECTS, ChangeType.TASKS]


def test_full_queue_drops_oldest():
    notifier = ChangeNotifier(queue_size=2)
    sub = notifier.subscribe()

    notifier.publish(ChangeType.SUBJECTS, ChangeType.LECTURES, ChangeType.TASKS)

    assert sub.drain() == [ChangeType.LECTURES, ChangeType.TASKS]


def test_closed_subscription_stops_receiving():
    notifier = ChangeNotifier()
    sub = notifier.subscribe()
    sub.close()

    notifier.publish(ChangeType.LECTURES)

    assert notifier.subscriber_count == 0
    assert sub.drain() == []


def test_stream_yields_none_as_heartbeat():
    notifier = ChangeNotifier()
    sub = notifier.subscribe()
    stream = notifier.stream(sub, heartbeat_seconds=0.01)

    assert next(stream) is None

    notifier.publish(ChangeType.WEEKLY_SCHEDULES)
    assert next(stream) is ChangeType.WEEKLY_SCHEDULES
    assert ChangeType.WEEKLY_SCHEDULES.value == "weekly-schedules"
