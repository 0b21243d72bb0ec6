"""Dispatch events and the ordered observer container."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Literal, Protocol, Union, runtime_checkable

from wpxmlrpc.config.schema import AuthConfig, ProxyConfig


@dataclass(frozen=True)
class SendingEvent:
    """Snapshot handed to ``sending`` observers before transport."""
    endpoint: str
    username: str | None
    password: str | None
    method: str
    params: tuple[Any, ...]
    request: bytes
    proxy: ProxyConfig | Literal[False]
    auth: AuthConfig | Literal[False]
    event: str = field(default="sending", init=False)


@dataclass(frozen=True)
class ErrorEvent:
    """Snapshot handed to ``error`` observers; ``message`` equals the last-error."""
    endpoint: str | None
    request: bytes | None
    proxy: ProxyConfig | Literal[False]
    auth: AuthConfig | Literal[False]
    message: str
    event: str = field(default="error", init=False)


DispatchEvent = Union[SendingEvent, ErrorEvent]


@runtime_checkable
class Observer(Protocol):
    def notify(self, event: Any) -> None: ...


ObserverLike = Union[Observer, Callable[[Any], None]]


class _CallableObserver:
    def __init__(self, fn: Callable[[Any], None]):
        self._fn = fn

    def notify(self, event: Any) -> None:
        self._fn(event)

    def __repr__(self) -> str:
        return f"<observer {getattr(self._fn, '__qualname__', self._fn)!r}>"


class ObserverList:
    """Observers for one event, notified synchronously in registration order.

    Exceptions raised by an observer are not caught: they abort the
    remaining notifications and propagate to the caller.
    """

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def add(self, observer: ObserverLike) -> None:
        if isinstance(observer, type):
            raise TypeError(f"observer must be an instance, got class {observer.__name__}")
        if isinstance(observer, Observer):
            self._observers.append(observer)
        elif callable(observer):
            self._observers.append(_CallableObserver(observer))
        else:
            raise TypeError(f"observer must be callable or implement notify(), got {type(observer).__name__}")

    def notify(self, event: DispatchEvent) -> None:
        for observer in list(self._observers):
            observer.notify(event)

    def __len__(self) -> int:
        return len(self._observers)

    def __iter__(self) -> Iterator[Observer]:
        return iter(list(self._observers))


def freeze_params(params: list[Any] | tuple[Any, ...]) -> tuple[Any, ...]:
    """Deep copy params so observers cannot reach the caller's containers."""
    return tuple(copy.deepcopy(list(params)))
