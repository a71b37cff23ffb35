from salesreport.services.event_bus import EventBus, ReportEvent


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []
    bus.subscribe(ReportEvent.RANGE_CHANGED, lambda e: order.append(("h1", e.name)))
    bus.subscribe(ReportEvent.RANGE_CHANGED, lambda e: order.append(("h2", e.name)))
    bus.publish(ReportEvent.RANGE_CHANGED, {"id": 1})
    assert order == [
        ("h1", ReportEvent.RANGE_CHANGED.value),
        ("h2", ReportEvent.RANGE_CHANGED.value),
    ]


def test_once_subscription():
    bus = EventBus()
    calls = []
    bus.subscribe(ReportEvent.FETCH_COMPLETED, lambda e: calls.append(e.name), once=True)
    bus.publish(ReportEvent.FETCH_COMPLETED)
    bus.publish(ReportEvent.FETCH_COMPLETED)
    assert calls == [ReportEvent.FETCH_COMPLETED.value]
    assert bus.subscriber_count(ReportEvent.FETCH_COMPLETED) == 0


def test_unsubscribe():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(ReportEvent.SORT_CHANGED, lambda e: calls.append(1))
    bus.publish(ReportEvent.SORT_CHANGED)
    bus.unsubscribe(sub)
    bus.publish(ReportEvent.SORT_CHANGED)
    assert calls == [1]
    assert not sub.active
    assert bus.list_events() == []


def test_error_isolation():
    bus = EventBus()
    calls = []

    def bad(e):
        raise RuntimeError("boom")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", lambda e: calls.append("ok"))
    bus.publish("custom", 123)
    assert calls == ["ok"]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_reentrant_publish():
    bus = EventBus()
    seen = []
    relay = lambda e: bus.publish(ReportEvent.FETCH_COMPLETED, 1)  # noqa: E731
    bus.subscribe(ReportEvent.RANGE_CHANGED, relay)
    bus.subscribe(ReportEvent.FETCH_COMPLETED, lambda e: seen.append(e.payload))
    bus.publish(ReportEvent.RANGE_CHANGED)
    assert seen == [1]
