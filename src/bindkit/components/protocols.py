from typing import Any, Coroutine, Mapping, Optional, Protocol, Sequence, runtime_checkable

from ..context.binding import Binding


@runtime_checkable
class Provider(Protocol):
    """
    Protocol for classes that compute a bound value.

    ``value`` may return the value directly or an awaitable of it.
    """

    def value(self) -> Any:
        ...


@runtime_checkable
class Server(Protocol):
    """
    Protocol for servers driven by the application lifecycle.

    Required:
        listening: Whether the server is currently accepting work.
        start: Async method called by ``Application.start``.
        stop: Async method called by ``Application.stop``.
    """
    listening: bool

    def start(self) -> Coroutine[Any, Any, None]:
        ...

    def stop(self) -> Coroutine[Any, Any, None]:
        ...


class Component(Protocol):
    """
    Shape of a component. Every attribute is optional; attributes not listed
    here are ignored when the component is mounted.
    """
    controllers: Optional[Sequence[type]]
    providers: Optional[Mapping[str, type]]
    classes: Optional[Mapping[str, type]]
    servers: Optional[Mapping[str, type]]
    bindings: Optional[Sequence[Binding]]
