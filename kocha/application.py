"""Application-wide defaults, environment lookup and fallback invocation of units."""

from __future__ import annotations

import logging
import os
import threading
from typing import Callable, Optional, Protocol

DEFAULT_HTTP_ADDR = "127.0.0.1:9100"
DEFAULT_MAX_CLIENT_BODY_SIZE = 1024 * 1024 * 10
STATIC_DIR = "public"


class InvokeDefault(Exception):
    """Raised internally to switch an invocation over to its default function."""


class Unit(Protocol):
    """A feature switch: the new behaviour runs only while ``active_if`` holds."""

    def active_if(self) -> bool: ...


def _unit_name(unit: object) -> str:
    cls = type(unit)
    return f"{cls.__module__}.{cls.__qualname__}"


class UnitInvoker:
    """Runs new code for a unit and falls back to default code on failure.

    Once the new code of a unit type has failed, every later invocation of
    that unit type goes straight to the default code.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger("kocha")
        self._failed_units: set[str] = set()
        self._lock = threading.Lock()

    @property
    def failed_units(self) -> frozenset[str]:
        """Names of the unit types whose new code has failed."""
        with self._lock:
            return frozenset(self._failed_units)

    def invoke(
        self,
        unit: Unit,
        new_func: Callable[[], object],
        default_func: Optional[Callable[[], object]],
    ) -> None:
        """Call ``new_func``, or ``default_func`` when the unit is off or fails.

        An exception raised by ``default_func`` propagates to the caller.
        """
        name = _unit_name(unit)
        try:
            with self._lock:
                failed = name in self._failed_units
            if failed or not unit.active_if():
                raise InvokeDefault()
            new_func()
        except InvokeDefault:
            pass
        except Exception as exc:
            self.logger.error("%s", exc, exc_info=exc)
            with self._lock:
                self._failed_units.add(name)
        else:
            return
        if default_func is not None:
            default_func()


def getenv(key: str, default: str) -> str:
    """Return the environment variable ``key``.

    When it is unset or empty, ``default`` is stored in the environment and
    returned.
    """
    value = os.environ.get(key, "")
    if value:
        return value
    os.environ[key] = default
    return default