"""Observable-value primitive for in-process change notification.

A ``BehaviorRelay`` holds one current value. ``observe()`` returns a lazy
``Observable`` that, once subscribed, delivers the current value right away
and then every later value, in write order.

The relay keeps only weak references to its subscriptions. A subscriber
owns its ``Subscription`` handle; dropping the handle or calling
``cancel()`` ends delivery.
"""

import asyncio
import logging
import threading
import weakref
from collections import deque
from collections.abc import AsyncIterator, Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

_NOTHING: Any = object()

Stage = Callable[[Any], Any]
StageFactory = Callable[[], Stage]


def _map_stage(fn: Callable[[Any], Any]) -> StageFactory:
    def factory() -> Stage:
        return fn

    return factory


def _distinct_stage() -> StageFactory:
    def factory() -> Stage:
        last = _NOTHING

        def stage(value: Any) -> Any:
            nonlocal last
            if last is not _NOTHING and value == last:
                return _NOTHING
            last = value
            return value

        return stage

    return factory


class Subscription:
    """Handle for one observer of a relay.

    Values are queued by the relay and drained by whichever thread finds the
    queue idle, so a single subscriber never sees two callbacks at once and
    always sees values in write order. No lock is held while ``on_next`` runs.
    """

    def __init__(
        self,
        relay: "BehaviorRelay[Any]",
        on_next: Callable[[Any], None],
        stages: list[Stage],
    ) -> None:
        self._relay = relay
        self._on_next = on_next
        self._stages = stages
        self._pending: deque[Any] = deque()
        self._state_lock = threading.Lock()
        self._draining = False
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop delivery. Safe to call more than once."""
        with self._state_lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._pending.clear()
        self._relay._detach(self)

    dispose = cancel

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def _enqueue(self, value: Any) -> None:
        with self._state_lock:
            if not self._cancelled:
                self._pending.append(value)

    def _drain(self) -> None:
        with self._state_lock:
            if self._draining:
                return
            self._draining = True

        while True:
            with self._state_lock:
                if self._cancelled or not self._pending:
                    self._draining = False
                    return
                value = self._pending.popleft()

            try:
                for stage in self._stages:
                    value = stage(value)
                    if value is _NOTHING:
                        break
                else:
                    self._on_next(value)
            except Exception:
                logger.exception("Subscriber callback failed")


class Observable(Generic[T]):
    """Lazy stream over a relay. Nothing happens until ``subscribe``.

    Operators return new observables; their state (for example the last
    value seen by ``distinct_until_changed``) is created per subscription.
    """

    def __init__(self, relay: "BehaviorRelay[Any]", stages: tuple[StageFactory, ...] = ()):
        self._relay = relay
        self._stages = stages

    def map(self, fn: Callable[[T], R]) -> "Observable[R]":
        return Observable(self._relay, self._stages + (_map_stage(fn),))

    def distinct_until_changed(self) -> "Observable[T]":
        return Observable(self._relay, self._stages + (_distinct_stage(),))

    def subscribe(self, on_next: Callable[[T], None]) -> Subscription:
        """Deliver the current value, then every later one, to ``on_next``.

        Keep the returned handle for as long as values are wanted.
        """
        subscription = Subscription(
            self._relay, on_next, [factory() for factory in self._stages]
        )
        self._relay._attach(subscription)
        return subscription

    async def values(self) -> AsyncIterator[T]:
        """Iterate the stream from asyncio.

        Values produced on any thread are handed to the running loop. The
        subscription is cancelled when iteration stops.
        """
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[T] = asyncio.Queue()

        def push(value: T) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, value)

        subscription = self.subscribe(push)
        try:
            while True:
                yield await queue.get()
        finally:
            subscription.cancel()


class BehaviorRelay(Generic[T]):
    """Thread-safe holder of a current value that broadcasts replacements."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()
        self._subscriptions: "weakref.WeakSet[Subscription]" = weakref.WeakSet()

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    def accept(self, value: T) -> None:
        """Replace the current value and notify subscribers."""
        self.update(lambda _: value)

    def update(self, fn: Callable[[T], T]) -> T:
        """Atomically replace the value with ``fn(current)``.

        ``fn`` runs under the relay lock and must not touch the relay.
        Returns the new value.
        """
        with self._lock:
            self._value = fn(self._value)
            value = self._value
            subscriptions = list(self._subscriptions)
            for subscription in subscriptions:
                subscription._enqueue(value)
        for subscription in subscriptions:
            subscription._drain()
        return value

    def observe(self) -> Observable[T]:
        return Observable(self)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def _attach(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscriptions.add(subscription)
            subscription._enqueue(self._value)
        subscription._drain()

    def _detach(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscriptions.discard(subscription)
