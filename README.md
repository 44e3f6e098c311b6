# kocha

A small set of pieces for building web applications.

- `kocha.flash`: `Flash` holds one-time messages between requests, for the
  Post/Redirect/Get pattern. A message that has been read is removed by
  `delete_loaded()`.
- `kocha.events`: `Event` is a background event system. You register named
  queues, add handlers to event names, then `trigger` events. Worker threads
  take the payloads off the queues and call the handlers. `Queue` is the
  abstract base class a queue implements.
- `kocha.application`: `UnitInvoker` runs new code for a unit with a fallback
  to default code. `getenv` reads an environment variable and stores a
  default when it is not set. It also holds the defaults
  `DEFAULT_HTTP_ADDR`, `DEFAULT_MAX_CLIENT_BODY_SIZE` and `STATIC_DIR`.
- `kocha.formats`: `MimeTypeFormats` maps MIME types to template file
  extensions; `MIME_TYPE_FORMATS` is a shared instance with the built-in
  pairs.
- `kocha.model_types`: the table of field types used when generating models.
- `kocha.cli`: the `kocha` and `kocha-generate` launchers.

## Installing

```
pip install .
```

## Events

The package ships the `Queue` interface but no queue implementation, so you
provide one. A queue's `dequeue` must raise `QueueDone` once it has been
stopped; `Event.stop()` calls `stop()` on the queue of each worker.

```python
import queue

from kocha.events import Event, Queue, QueueDone


class SimpleQueue(Queue):
    def __init__(self):
        self._items = queue.Queue()

    def new(self, n):
        return self

    def enqueue(self, data):
        self._items.put(data)

    def dequeue(self):
        item = self._items.get()
        if item is None:
            raise QueueDone()
        return item

    def stop(self):
        self._items.put(None)


events = Event()
events.register_queue("simple", SimpleQueue())
events.add_handler("user.created", "simple", lambda *args: print("created", args))
events.start()
events.trigger("user.created", 42)
events.stop()
```

- `trigger` raises `EventError` when no handler has been added for the name.
- `add_handler` raises `EventError` when the queue has not been registered.
- `register_queue` raises `EventError` for `None` or a name already in use.
- Arguments travel as JSON (`encode_payload` / `decode_payload`), so they
  must be JSON-serialisable.
- Exceptions raised by handlers, and events with no handlers
  (`HandlerNotExist`), are passed to `events.error_handler` if one is set.
- `set_workers_per_queue(n)` sets the number of workers started per queue
  (at least 1); call it before `start()`.

Module-level `add_handler`, `trigger`, `register_queue`, `start` and `stop`
act on the shared `DEFAULT_EVENT`.

## Flash messages

```python
from kocha.flash import Flash

flash = Flash()
flash.set("notice", "Saved")
flash.get("notice")   # "Saved"; the message is now marked as loaded
flash.get("missing")  # ""
flash.delete_loaded()
len(flash)            # 0
```

## Units with a fallback

```python
from kocha.application import UnitInvoker


class NewSearch:
    def active_if(self):
        return True


invoker = UnitInvoker()
invoker.invoke(NewSearch(), lambda: print("new search"), lambda: print("old search"))
```

If the unit's `active_if()` returns false, the default function runs. If the
new function raises, the error is logged, the unit's type is recorded in
`failed_units`, and the default function runs; from then on every unit of
that type goes straight to the default function. An exception raised by the
default function reaches the caller.

## MIME type formats

```python
from kocha.formats import MIME_TYPE_FORMATS

MIME_TYPE_FORMATS.get("application/json")  # "json"
MIME_TYPE_FORMATS.get("image/png")         # ""
MIME_TYPE_FORMATS.set("text/csv", "csv")
MIME_TYPE_FORMATS.delete("text/csv")
```

## Model field types

`genmai_field_type_map()` returns the supported field types keyed by the
name a user gives (`"int"`, `"text"`, `"datetime"`, ...), each a
`ModelFieldType` with a type `name` and `option_tags`.
`lookup_field_type(name)` returns one of them and raises `ValueError` for an
unsupported name.

## Commands

`kocha COMMAND [argument...]` finds a program called `kocha-COMMAND` on the
`PATH` and runs it with the remaining arguments, returning its exit status.
`g` is an alias for `generate` and `b` is an alias for `build`. The
directories of the running interpreter's scripts are put in front of `PATH`
first.

`kocha-generate GENERATOR [argument...]` finds and runs
`kocha-generate-GENERATOR` in the same way.

```
kocha generate controller user
kocha-generate model post
```

`-h` or `--help` prints the usage. A missing or unknown command prints the
usage and an error and exits with status 1.

## What this package does not do

- It has no HTTP server, request routing, controllers or template rendering.
- It has no queue implementation for `Event`; you supply one.
- It has no database layer or schema migrations.
- It installs only the two launchers above. The subcommands they run
  (`kocha-new`, `kocha-build`, `kocha-generate-controller` and so on) are
  not part of it and must be on `PATH` from elsewhere.

## Running the tests

```
pip install .[test]
pytest
```