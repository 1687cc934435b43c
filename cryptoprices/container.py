"""A thread-safe lazy-singleton Dependency Injection container.

Services are registered under a ``ServiceKey`` with a factory that receives
the container itself, so factories can resolve their own dependencies.
Each key resolves to at most one instance per container, built on first
resolution.

Usage:
    container = Container()
    container.register(FLAGS, lambda c: FeatureFlagProvider())
    flags = container.resolve(FLAGS)  # None if unregistered
"""

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, cast

from .exceptions import DependencyMissingError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceKey(Generic[T]):
    """Identifier for one abstract service contract.

    Two keys are equal iff their names and contracts are equal. When
    ``contract`` is given, resolved instances are checked against it.
    """

    name: str
    contract: Optional[type] = None

    def __str__(self) -> str:
        return self.name


Factory = Callable[["Container"], Any]


class Container:
    """Registry of factories and memoized instances keyed by ServiceKey.

    The map lock is held only for dictionary access. Factory invocation is
    serialized per key by a dedicated guard, so a factory runs at most once
    per key even under concurrent first resolution, and factories that
    resolve other keys cannot deadlock on the map lock.
    """

    def __init__(
        self,
        factories: Optional[Mapping[ServiceKey[Any], Factory]] = None,
        instances: Optional[Mapping[ServiceKey[Any], Any]] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._factories: dict[ServiceKey[Any], Factory] = dict(factories or {})
        self._instances: dict[ServiceKey[Any], Any] = dict(instances or {})
        self._guards: dict[ServiceKey[Any], threading.Lock] = {}
        self._local = threading.local()

    def register(self, key: ServiceKey[T], factory: Callable[["Container"], T]) -> None:
        """Register (or replace) the factory for a key. Never calls it."""
        with self._lock:
            self._factories[key] = factory

    def resolve(self, key: ServiceKey[T]) -> Optional[T]:
        """Resolve the singleton for a key, building it on first use.

        Returns None when nothing is registered, when the built instance
        does not satisfy the key's contract, when the factory fails, or
        when the key is already being built on this thread (a cycle).
        """
        with self._lock:
            if key in self._instances:
                return self._checked(key, self._instances[key])
            if key not in self._factories:
                logger.debug(f"No registration found for {key}")
                return None
            guard = self._guards.setdefault(key, threading.Lock())

        building = self._building()
        if key in building:
            logger.warning(f"Circular dependency while resolving {key}")
            return None

        with guard:
            with self._lock:
                if key in self._instances:
                    return self._checked(key, self._instances[key])
                factory = self._factories.get(key)
            if factory is None:
                return None

            building.add(key)
            try:
                instance = factory(self)
            except Exception:
                logger.exception(f"Factory for {key} failed")
                return None
            finally:
                building.discard(key)

            if self._checked(key, instance) is None:
                return None

            with self._lock:
                stored = self._instances.setdefault(key, instance)
        return cast(T, stored)

    def require(self, key: ServiceKey[T]) -> T:
        """Resolve a mandatory service or raise DependencyMissingError."""
        instance = self.resolve(key)
        if instance is None:
            raise DependencyMissingError(str(key), self.is_registered(key))
        return instance

    def is_registered(self, key: ServiceKey[Any]) -> bool:
        with self._lock:
            return key in self._factories or key in self._instances

    def __contains__(self, key: object) -> bool:
        return isinstance(key, ServiceKey) and self.is_registered(key)

    def reset(self, key: Optional[ServiceKey[Any]] = None) -> None:
        """Drop memoized instances (all, or one key). Registrations stay."""
        with self._lock:
            if key is None:
                self._instances.clear()
            else:
                self._instances.pop(key, None)

    def keys(self) -> Iterator[ServiceKey[Any]]:
        with self._lock:
            snapshot = set(self._factories) | set(self._instances)
        return iter(sorted(snapshot, key=lambda k: k.name))

    def _building(self) -> set[ServiceKey[Any]]:
        building = getattr(self._local, "building", None)
        if building is None:
            building = self._local.building = set()
        return building

    @staticmethod
    def _checked(key: ServiceKey[T], instance: Any) -> Optional[T]:
        if key.contract is not None and not isinstance(instance, key.contract):
            logger.warning(
                f"{key} resolved to {type(instance).__name__}, "
                f"expected {key.contract.__name__}"
            )
            return None
        return cast(T, instance)
