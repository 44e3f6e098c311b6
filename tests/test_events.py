import queue
import threading

import pytest

from kocha import events
from kocha.events import (
    DEFAULT_EVENT,
    Event,
    EventError,
    HandlerNotExist,
    Queue,
    QueueDone,
    decode_payload,
    encode_payload,
)

QUEUE_NAME = "fakeQueue"


class FakeQueue(Queue):
    def __init__(self):
        self.items = queue.Queue()
        self.done = threading.Event()
        self.stop_count = 0

    def new(self, n):
        return self

    def enqueue(self, data):
        self.items.put(data)

    def dequeue(self):
        while True:
            if self.done.is_set():
                raise QueueDone()
            try:
                return self.items.get(timeout=0.01)
            except queue.Empty:
                continue

    def stop(self):
        self.stop_count += 1
        self.done.set()


@pytest.fixture
def running():
    e = Event()
    fake = FakeQueue()
    e.register_queue(QUEUE_NAME, fake)
    e.start()
    yield e, fake
    e.stop()


def test_default_event():
    fresh = Event()
    assert DEFAULT_EVENT.workers_per_queue == fresh.workers_per_queue == 1
    assert DEFAULT_EVENT.error_handler is None


def test_add_handler():
    e = Event()
    e.register_queue(QUEUE_NAME, FakeQueue())
    with pytest.raises(EventError) as info:
        e.add_handler("testAddHandler", "unknownQueue", lambda *a: None)
    assert str(info.value) == "kocha: event: queue `unknownQueue' isn't registered"
    e.add_handler("testAddHandler", QUEUE_NAME, lambda *a: None)
    e.add_handler("testAddHandler", QUEUE_NAME, lambda *a: None)
    with pytest.raises(EventError):
        e.add_handler("other", "unknownQueue", lambda *a: None)


def test_trigger_unknown_handler(running):
    e, _ = running
    with pytest.raises(EventError) as info:
        e.trigger("unknownHandler")
    assert str(info.value) == "kocha: event: handler `unknownHandler' isn't added"


def test_trigger_without_args(running):
    e, _ = running
    calls = queue.Queue()
    e.add_handler("testTrigger", QUEUE_NAME, lambda *args: calls.put(list(args)))
    seen = []
    for _ in range(2):
        e.trigger("testTrigger")
        seen.append(calls.get(timeout=3))
    assert seen == [[], []]


def test_trigger_with_args(running):
    e, _ = running
    calls = queue.Queue()
    e.add_handler("testTriggerWithArgs", QUEUE_NAME, lambda *args: calls.put(list(args)))
    seen = []
    for _ in range(2):
        e.trigger("testTriggerWithArgs", 1, True, "arg")
        seen.append(calls.get(timeout=3))
    assert seen == [[1, True, "arg"], [1, True, "arg"]]


def test_trigger_with_multiple_handlers(running):
    e, _ = running
    first = queue.Queue()
    second = queue.Queue()
    name = "testTriggerWithMultipleHandlers"
    e.add_handler(name, QUEUE_NAME, lambda *args: first.put("call1"))
    e.add_handler(name, QUEUE_NAME, lambda *args: second.put("call2"))
    got1, got2 = [], []
    for _ in range(2):
        e.trigger(name)
        got1.append(first.get(timeout=3))
        got2.append(second.get(timeout=3))
    assert got1 == ["call1", "call1"]
    assert got2 == ["call2", "call2"]


def test_register_queue():
    e = Event()
    with pytest.raises(EventError) as info:
        e.register_queue("test_queue", None)
    assert str(info.value) == "kocha: event: Register queue is nil"
    fake = FakeQueue()
    e.register_queue("test_queue", fake)
    assert e.queues == {"test_queue": fake}
    with pytest.raises(EventError) as info:
        e.register_queue("test_queue", FakeQueue())
    assert (
        str(info.value)
        == "kocha: event: Register queue `test_queue' is already registered"
    )


def test_stop():
    e = Event()
    fake = FakeQueue()
    e.register_queue(QUEUE_NAME, fake)
    e.start()
    assert fake.stop_count == 0
    e.stop()
    assert fake.stop_count == 1
    e.stop()
    assert fake.stop_count == 1


def test_error_handler(running):
    e, _ = running
    expected = ValueError("testErrorHandlerError")

    def failing(*args):
        raise expected

    e.add_handler("testErrorHandler", QUEUE_NAME, failing)
    reported = queue.Queue()
    e.error_handler = reported.put
    e.trigger("testErrorHandler")
    assert reported.get(timeout=3) is expected


def test_error_handler_gets_handler_not_exist(running):
    e, fake = running
    reported = queue.Queue()
    e.error_handler = reported.put
    fake.enqueue(encode_payload("nobody", ()))
    error = reported.get(timeout=3)
    assert isinstance(error, HandlerNotExist)
    calls = queue.Queue()
    e.add_handler("afterwards", QUEUE_NAME, lambda *args: calls.put(args))
    e.trigger("afterwards", "still running")
    assert calls.get(timeout=3) == ("still running",)


def test_set_workers_per_queue_clamps_to_one():
    e = Event()
    e.set_workers_per_queue(0)
    assert e.workers_per_queue == 1
    e.set_workers_per_queue(4)
    assert e.workers_per_queue == 4


def test_encode_payload_wire_format():
    assert encode_payload("x", (1, True, "arg")) == '{"name":"x","args":[1,true,"arg"]}'
    assert encode_payload("x", ()) == '{"name":"x","args":null}'


def test_payload_round_trip():
    data = encode_payload("log.error", ["a", 2, None, {"k": [1]}])
    assert decode_payload(data) == ("log.error", ["a", 2, None, {"k": [1]}])
    assert decode_payload(encode_payload("empty", [])) == ("empty", [])


def test_decode_payload_rejects_non_object():
    with pytest.raises(ValueError):
        decode_payload("[1, 2]")
    with pytest.raises(ValueError):
        decode_payload("not json")


def test_module_level_functions():
    fake = FakeQueue()
    events.register_queue("module-level-queue", fake)
    with pytest.raises(EventError):
        events.register_queue("module-level-queue", FakeQueue())
    calls = queue.Queue()
    events.add_handler("module-level-event", "module-level-queue", lambda *a: calls.put(a))
    events.start()
    try:
        events.trigger("module-level-event", "hello")
        assert calls.get(timeout=3) == ("hello",)
        with pytest.raises(EventError):
            events.trigger("module-level-missing")
    finally:
        events.stop()
    assert fake.stop_count == 1