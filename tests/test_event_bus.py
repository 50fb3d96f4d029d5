"""Tests for the synchronous EventBus."""

from chartkit.services.event_bus import ChartEvent, EventBus


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []

    def h1(e):
        order.append(("h1", e.name))

    def h2(e):
        order.append(("h2", e.name))

    bus.subscribe(ChartEvent.INTERACTION_CHANGED, h1)
    bus.subscribe(ChartEvent.INTERACTION_CHANGED, h2)
    bus.publish(ChartEvent.INTERACTION_CHANGED, {"index": 1})
    assert order == [
        ("h1", ChartEvent.INTERACTION_CHANGED.value),
        ("h2", ChartEvent.INTERACTION_CHANGED.value),
    ]


def test_once_subscription():
    bus = EventBus()
    calls = []
    bus.subscribe(ChartEvent.DATA_CHANGED, lambda e: calls.append(e.name), once=True)
    bus.publish(ChartEvent.DATA_CHANGED)
    bus.publish(ChartEvent.DATA_CHANGED)
    assert calls == [ChartEvent.DATA_CHANGED.value]
    assert bus.subscriber_count(ChartEvent.DATA_CHANGED) == 0


def test_unsubscribe():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(ChartEvent.INTERACTION_ENDED, lambda e: calls.append(1))
    bus.publish(ChartEvent.INTERACTION_ENDED)
    bus.unsubscribe(sub)
    bus.publish(ChartEvent.INTERACTION_ENDED)
    assert calls == [1]
    assert sub.active is False


def test_cancelled_subscription_is_skipped():
    bus = EventBus()
    calls = []
    sub = bus.subscribe("custom", lambda e: calls.append(e.payload))
    sub.cancel()
    bus.publish("custom", 5)
    assert calls == []


def test_error_isolation():
    bus = EventBus()
    calls = []

    def bad(e):
        raise RuntimeError("boom")

    def good(e):
        calls.append("ok")

    bus.subscribe(ChartEvent.DATA_CHANGED, bad)
    bus.subscribe(ChartEvent.DATA_CHANGED, good)
    bus.publish(ChartEvent.DATA_CHANGED)
    assert calls == ["ok"]
    assert len(bus.errors) == 1
    failure = bus.errors[0]
    assert isinstance(failure.error, RuntimeError)
    assert failure.handler is bad
    assert failure.event.name == ChartEvent.DATA_CHANGED.value


def test_handler_may_subscribe_during_dispatch():
    bus = EventBus()
    calls = []

    def first(e):
        bus.subscribe(ChartEvent.DATA_CHANGED, lambda e2: calls.append("late"))

    bus.subscribe(ChartEvent.DATA_CHANGED, first, once=True)
    bus.publish(ChartEvent.DATA_CHANGED)
    assert calls == []
    bus.publish(ChartEvent.DATA_CHANGED)
    assert calls == ["late"]


def test_tracing_ring_buffer():
    bus = EventBus()
    bus.publish(ChartEvent.DATA_CHANGED, 0)
    assert bus.recent_traces() == []
    bus.enable_tracing(capacity=3)
    for i in range(6):
        bus.publish(ChartEvent.INTERACTION_CHANGED, i)
    traces = bus.recent_traces()
    assert [t.summary for t in traces] == ["3", "4", "5"]
    ts = [t.timestamp for t in traces]
    assert ts == sorted(ts)
    bus.publish(ChartEvent.INTERACTION_ENDED)
    assert bus.recent_traces()[-1].summary == "-"
    bus.clear_traces()
    assert bus.recent_traces() == []


def test_long_payload_summary_truncated():
    bus = EventBus()
    bus.enable_tracing()
    bus.publish("custom", "x" * 100)
    summary = bus.recent_traces()[0].summary
    assert len(summary) == 40 and summary.endswith("...")


def test_failing_once_handler_stays_subscribed():
    bus = EventBus()

    def flaky(e):
        raise ValueError("not yet")

    bus.subscribe(ChartEvent.DATA_CHANGED, flaky, once=True)
    bus.publish(ChartEvent.DATA_CHANGED)
    assert bus.subscriber_count(ChartEvent.DATA_CHANGED) == 1


def test_handler_may_cancel_later_subscriber():
    bus = EventBus()
    calls = []
    later = None

    def first(e):
        later.cancel()

    bus.subscribe(ChartEvent.INTERACTION_CHANGED, first)
    later = bus.subscribe(ChartEvent.INTERACTION_CHANGED, lambda e: calls.append("later"))
    bus.publish(ChartEvent.INTERACTION_CHANGED)
    assert calls == []
    assert bus.subscriber_count(ChartEvent.INTERACTION_CHANGED) == 1


def test_trace_records_delivery_counts():
    bus = EventBus()
    bus.enable_tracing()
    assert bus.tracing_enabled

    def bad(e):
        raise RuntimeError("boom")

    bus.subscribe(ChartEvent.DATA_CHANGED, bad)
    bus.subscribe(ChartEvent.DATA_CHANGED, lambda e: None)
    bus.publish(ChartEvent.DATA_CHANGED, {"count": 2})
    bus.publish("nobody_listens")
    first, second = bus.recent_traces()
    assert (first.delivered, first.failed) == (1, 1)
    assert (second.delivered, second.failed) == (0, 0)
    bus.enable_tracing(False)
    assert not bus.tracing_enabled
    assert bus.recent_traces() == []
