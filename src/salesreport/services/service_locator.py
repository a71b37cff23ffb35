"""Basic service locator / dependency container.

Holds the application-wide singletons created at bootstrap (event bus,
logging service, report provider, notification sink) so views can look them
up without threading constructor arguments through every layer.

Usage pattern:
    from salesreport.services.service_locator import services
    services.register('event_bus', EventBus())
    bus = services.get('event_bus')

In tests:
    with services.override_context(report_provider=FakeProvider()):
        ...
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, Generator, Iterable, Type, TypeVar

T = TypeVar("T")

__all__ = ["ServiceLocator", "services", "ServiceAlreadyRegisteredError", "ServiceNotFoundError"]

_MISSING = object()


class ServiceAlreadyRegisteredError(RuntimeError):
    """Raised when attempting to register an existing key without allow_override."""


class ServiceNotFoundError(KeyError):
    """Raised when a requested service key is not present."""


class ServiceLocator:
    """Thread-safe service registry keyed by semantic names."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._services: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, allow_override: bool = False) -> None:
        with self._lock:
            if key in self._services and not allow_override:
                raise ServiceAlreadyRegisteredError(f"Service '{key}' already registered")
            self._services[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            value = self._services.get(key, _MISSING)
        if value is _MISSING:
            raise ServiceNotFoundError(key)
        return value

    def get_typed(self, key: str, expected_type: Type[T]) -> T:
        """Retrieve a service and assert it matches expected_type."""
        value = self.get(key)
        if not isinstance(value, expected_type):
            raise TypeError(
                f"Service '{key}' expected type {expected_type!r} but got {type(value)!r}"
            )
        return value

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._services.get(key, default)

    @contextmanager
    def override_context(self, **overrides: Any) -> Generator[None, None, None]:
        """Temporarily replace (or add) services; previous values restored on exit."""
        with self._lock:
            previous = {key: self._services.get(key, _MISSING) for key in overrides}
            self._services.update(overrides)
        try:
            yield
        finally:
            with self._lock:
                for key, prior in previous.items():
                    if prior is _MISSING:
                        self._services.pop(key, None)
                    else:
                        self._services[key] = prior

    def unregister(self, key: str) -> None:
        with self._lock:
            self._services.pop(key, None)

    def list_keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._services.keys())

    def clear(self) -> None:
        with self._lock:
            self._services.clear()


services = ServiceLocator()
