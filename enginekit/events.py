"""Producers that deliver events to weakly held consumers."""

from __future__ import annotations

import abc
import weakref
from typing import Any, Callable, Generic, List, TypeVar

E = TypeVar("E")
C = TypeVar("C", bound="Consumer")


class Consumer(abc.ABC, Generic[E]):
    """Receives events from producers it is registered with."""

    @abc.abstractmethod
    def consume(self, event: E, producer: "Producer[E]") -> None:
        """Handle one event sent by ``producer``."""


class Producer(Generic[E]):
    """Sends events to registered consumers.

    Consumers are held weakly; those that have been collected are dropped
    the next time an event is produced.
    """

    def __init__(self) -> None:
        self._consumers: List[weakref.ReferenceType] = []

    def register_consumer(self, consumer: Consumer[E]) -> None:
        self._consumers.append(weakref.ref(consumer))

    def create_consumer(self, factory: Callable[..., C], *args: Any, **kwargs: Any) -> C:
        """Build a consumer, register it and return the strong reference."""
        consumer = factory(*args, **kwargs)
        self.register_consumer(consumer)
        return consumer

    def produce(self, event: E) -> None:
        alive = []
        for ref in self._consumers:
            consumer = ref()
            if consumer is None:
                continue
            alive.append(ref)
            consumer.consume(event, self)
        self._consumers = alive