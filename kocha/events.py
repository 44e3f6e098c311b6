"""Event dispatch: handlers run by background workers fed through queues."""

from __future__ import annotations

import abc
import json
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

Handler = Callable[..., Any]
ErrorHandler = Callable[[BaseException], Any]


class EventError(Exception):
    """Raised when an event, handler or queue is used incorrectly."""


class QueueDone(Exception):
    """Raised by :meth:`Queue.dequeue` once the queue has been stopped."""

    def __init__(self, message: str = "queue is done") -> None:
        super().__init__(message)


class HandlerNotExist(Exception):
    """Passed to the error handler when a dequeued event has no handlers."""

    def __init__(self, message: str = "handler not exist") -> None:
        super().__init__(message)


class Queue(abc.ABC):
    """A background queue that carries encoded events to workers."""

    @abc.abstractmethod
    def new(self, n: int) -> "Queue":
        """Return a queue for one worker; ``n`` is the number of workers."""

    @abc.abstractmethod
    def enqueue(self, data: str) -> None:
        """Add ``data`` to the queue."""

    @abc.abstractmethod
    def dequeue(self) -> str:
        """Return the next item; raise :class:`QueueDone` once stopped."""

    @abc.abstractmethod
    def stop(self) -> None:
        """Wait for pending work, then stop the queue."""


def encode_payload(name: str, args) -> str:
    """Encode an event name and its arguments as compact JSON."""
    args = list(args)
    return json.dumps(
        {"name": name, "args": args if args else None}, separators=(",", ":")
    )


def decode_payload(data: str) -> tuple[str, list]:
    """Decode JSON made by :func:`encode_payload` into ``(name, args)``."""
    obj = json.loads(data)
    if not isinstance(obj, dict):
        raise ValueError("payload must be a JSON object")
    name = obj.get("name") or ""
    args = obj.get("args") or []
    if not isinstance(args, list):
        raise ValueError("payload args must be a JSON array")
    return name, args


class _WaitGroup:
    """Counter that can be waited on until it drops to zero."""

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    def add(self, n: int = 1) -> None:
        with self._cond:
            self._count += n
            if self._count <= 0:
                self._count = 0
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self) -> None:
        with self._cond:
            self._cond.wait_for(lambda: self._count == 0)


@dataclass
class _Worker:
    queue_name: str
    queue: Queue
    thread: threading.Thread


class Event:
    """Routes triggered events to handlers through registered queues."""

    def __init__(self) -> None:
        self.error_handler: Optional[ErrorHandler] = None
        self._workers_per_queue = 1
        self._queues: dict[str, Queue] = {}
        self._handler_queues: dict[str, dict[str, list[Handler]]] = {}
        self._workers: list[_Worker] = []
        self._enqueueing = _WaitGroup()
        self._dequeueing = _WaitGroup()

    @property
    def workers_per_queue(self) -> int:
        return self._workers_per_queue

    @property
    def queues(self) -> dict[str, Queue]:
        """A copy of the registered queues by name."""
        return dict(self._queues)

    def add_handler(self, name: str, queue_name: str, handler: Handler) -> None:
        """Attach ``handler`` to event ``name`` on a registered queue.

        Adding to a name that already has handlers appends another one.
        """
        if queue_name not in self._queues:
            raise EventError(f"kocha: event: queue `{queue_name}' isn't registered")
        by_queue = self._handler_queues.setdefault(name, {})
        by_queue.setdefault(queue_name, []).append(handler)

    def trigger(self, name: str, *args: Any) -> None:
        """Emit event ``name``; ``args`` are passed on to its handlers."""
        by_queue = self._handler_queues.get(name)
        if by_queue is None:
            raise EventError(f"kocha: event: handler `{name}' isn't added")
        self._trigger_all(by_queue, name, args)

    def register_queue(self, name: str, queue: Optional[Queue]) -> None:
        """Make ``queue`` available under ``name``."""
        if queue is None:
            raise EventError("kocha: event: Register queue is nil")
        if name in self._queues:
            raise EventError(
                f"kocha: event: Register queue `{name}' is already registered"
            )
        self._queues[name] = queue

    def start(self) -> None:
        """Start the background workers for every registered queue."""
        n = self._workers_per_queue
        for queue_name, queue in list(self._queues.items()):
            for _ in range(n):
                worker_queue = queue.new(n)
                thread = threading.Thread(
                    target=self._work, args=(queue_name, worker_queue), daemon=True
                )
                self._workers.append(_Worker(queue_name, worker_queue, thread))
                thread.start()

    def set_workers_per_queue(self, n: int) -> None:
        """Set the number of workers per queue; call before :meth:`start`."""
        self._workers_per_queue = max(n, 1)

    def stop(self) -> None:
        """Wait for pending events, stop every worker and wait for them."""
        self._enqueueing.wait()
        try:
            for worker in self._workers:
                worker.queue.stop()
        finally:
            self._dequeueing.wait()
            self._workers = []

    def _report(self, err: BaseException) -> None:
        handler = self.error_handler
        if handler is not None:
            handler(err)

    def _trigger_all(self, by_queue: dict[str, list[Handler]], name: str, args) -> None:
        queue_names = list(by_queue)
        self._enqueueing.add(len(queue_names))
        for queue_name in queue_names:
            queue = self._queues[queue_name]
            threading.Thread(
                target=self._enqueue_one, args=(queue, name, args), daemon=True
            ).start()

    def _enqueue_one(self, queue: Queue, name: str, args) -> None:
        try:
            queue.enqueue(encode_payload(name, args))
        except Exception as exc:
            self._report(exc)
        finally:
            self._enqueueing.done()

    def _work(self, queue_name: str, queue: Queue) -> None:
        while True:
            try:
                self._run_once(queue_name, queue)
            except QueueDone:
                return
            except Exception as exc:
                self._report(exc)

    def _run_once(self, queue_name: str, queue: Queue) -> None:
        self._dequeueing.add(1)
        try:
            name, args = decode_payload(queue.dequeue())
            by_queue = self._handler_queues.get(name)
            if by_queue is None:
                raise HandlerNotExist()
            handlers = list(by_queue.get(queue_name, ()))
            self._dequeueing.add(len(handlers))
            for handler in handlers:
                threading.Thread(
                    target=self._call_handler, args=(handler, args), daemon=True
                ).start()
        finally:
            self._dequeueing.done()

    def _call_handler(self, handler: Handler, args: list) -> None:
        try:
            handler(*args)
        except Exception as exc:
            self._report(exc)
        finally:
            self._dequeueing.done()


DEFAULT_EVENT = Event()


def add_handler(name: str, queue_name: str, handler: Handler) -> None:
    """Shorthand for ``DEFAULT_EVENT.add_handler``."""
    DEFAULT_EVENT.add_handler(name, queue_name, handler)


def trigger(name: str, *args: Any) -> None:
    """Shorthand for ``DEFAULT_EVENT.trigger``."""
    DEFAULT_EVENT.trigger(name, *args)


def register_queue(name: str, queue: Optional[Queue]) -> None:
    """Shorthand for ``DEFAULT_EVENT.register_queue``."""
    DEFAULT_EVENT.register_queue(name, queue)


def start() -> None:
    """Shorthand for ``DEFAULT_EVENT.start``."""
    DEFAULT_EVENT.start()


def stop() -> None:
    """Shorthand for ``DEFAULT_EVENT.stop``."""
    DEFAULT_EVENT.stop()