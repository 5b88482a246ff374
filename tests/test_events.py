import asyncio

from spacebreak.core.events import Event, EventBus, EventType, pointer_move_event, tick_event


def test_emit_reaches_subscriber(event_bus):
    received = []
    event_bus.subscribe(EventType.CONFIRM, received.append)

    event_bus.emit(Event(EventType.CONFIRM, source="test"))
    event_bus.emit(Event(EventType.CANCEL))

    assert [e.type for e in received] == [EventType.CONFIRM]
    assert received[0].source == "test"


def test_unsubscribe_stops_delivery(event_bus):
    received = []
    unsubscribe = event_bus.subscribe(EventType.TICK, received.append)

    event_bus.emit(tick_event(0.016, 0))
    unsubscribe()
    unsubscribe()  # second call is harmless
    event_bus.emit(tick_event(0.016, 1))

    assert len(received) == 1


def test_failing_handler_does_not_block_others(event_bus):
    received = []

    def broken(event):
        raise RuntimeError("boom")

    event_bus.subscribe(EventType.SCORE_CHANGED, broken)
    event_bus.subscribe(EventType.SCORE_CHANGED, received.append)

    event_bus.emit(Event(EventType.SCORE_CHANGED, data={"score": 1}))

    assert received[0].data == {"score": 1}


def test_emit_skips_async_handlers(event_bus):
    called = []

    async def handler(event):
        called.append(event)

    event_bus.subscribe(EventType.SHUTDOWN, handler)
    event_bus.emit(Event(EventType.SHUTDOWN))

    assert called == []


def test_queued_events_reach_sync_and_async_handlers():
    bus = EventBus()
    sync_seen = []
    async_seen = []

    async def async_handler(event):
        async_seen.append(event.type)

    bus.subscribe(EventType.GAME_RESTART, sync_seen.append)
    bus.subscribe(EventType.GAME_RESTART, async_handler)

    async def scenario():
        bus.queue_event(Event(EventType.GAME_RESTART))
        bus.queue_event(Event(EventType.GAME_RESTART))
        await bus.process_queue()

    asyncio.run(scenario())

    assert len(sync_seen) == 2
    assert async_seen == [EventType.GAME_RESTART, EventType.GAME_RESTART]


def test_history_is_bounded_and_filterable(event_bus):
    for frame in range(150):
        event_bus.emit(tick_event(0.016, frame))
    event_bus.emit(Event(EventType.GAME_LOST))

    assert len(event_bus.get_history(limit=1000)) == 100
    lost = event_bus.get_history(EventType.GAME_LOST)
    assert len(lost) == 1


def test_event_helpers():
    move = pointer_move_event(12.5, 40)
    assert move.type == EventType.POINTER_MOVE
    assert move.data == {"x": 12.5, "y": 40}

    tick = tick_event(0.02, 7)
    assert tick.type == EventType.TICK
    assert tick.data == {"delta": 0.02, "frame": 7}


def test_pending_counts_queued_events(event_bus):
    event_bus.queue_event(Event(EventType.CONFIRM))
    event_bus.queue_event(Event(EventType.SHUTDOWN))

    assert event_bus.pending == 2
    assert event_bus.get_history() == []

    asyncio.run(event_bus.process_queue())

    assert event_bus.pending == 0
    assert [e.type for e in event_bus.get_history()] == [EventType.CONFIRM, EventType.SHUTDOWN]
