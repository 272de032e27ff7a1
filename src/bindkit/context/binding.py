import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from dependency_injector import providers

from .inject import ResolutionSession, resolve_injected_arguments
from .value import SharedAwaitable, ValueOrAwaitable, is_awaitable, then
from ..errors import BindingResolutionError

if TYPE_CHECKING:
    from .context import Context

logger = logging.getLogger(__name__)


class BindingScope(Enum):
    TRANSIENT = "transient"
    SINGLETON = "singleton"


class BindingType(Enum):
    CONSTANT = "constant"
    CLASS = "class"
    PROVIDER = "provider"
    DYNAMIC_VALUE = "dynamic_value"


class Binding:
    """
    Association of a key with a strategy for producing its value.

    The strategy is chosen fluently::

        Binding("services.greeter").to_class(Greeter).tag("service")

    Producing the value is deferred until the binding is resolved, so a binding
    to something that cannot be constructed only fails at resolution time.
    """

    def __init__(self, key: str, *, tags: Iterable[str] = ()) -> None:
        self.key = key
        self.tag_names: set[str] = set(tags)
        self.scope = BindingScope.TRANSIENT
        self.type: Optional[BindingType] = None

        self.value_constructor: Optional[type] = None
        self.provider_constructor: Optional[type] = None

        self._source: Any = None
        self._provider: Optional[providers.Provider] = None
        self._singleton: Optional[providers.Singleton] = None

    @classmethod
    def bind(cls, key: str) -> "Binding":
        return cls(key)

    def __repr__(self) -> str:
        kind = self.type.value if self.type else "unbound"
        return f"<Binding {self.key!r} ({kind}, {self.scope.value}) tags={sorted(self.tag_names)}>"

    def tag(self, *names: str) -> "Binding":
        self.tag_names.update(names)
        return self

    def in_scope(self, scope: BindingScope) -> "Binding":
        self.scope = scope
        self._singleton = None
        return self

    def to(self, value: Any) -> "Binding":
        return self._bind(BindingType.CONSTANT, value)

    def to_class(self, cls: type) -> "Binding":
        self._bind(BindingType.CLASS, cls)
        self.value_constructor = cls
        return self

    def to_provider(self, provider_cls: type) -> "Binding":
        self._bind(BindingType.PROVIDER, provider_cls)
        self.provider_constructor = provider_cls
        return self

    def to_dynamic_value(self, factory: Callable[[], Any]) -> "Binding":
        return self._bind(BindingType.DYNAMIC_VALUE, factory)

    def _bind(self, type_: BindingType, source: Any) -> "Binding":
        if self.type is not None:
            logger.debug("Rebinding '%s' from %s to %s", self.key, self.type.value, type_.value)
        self.type = type_
        self.value_constructor = None
        self.provider_constructor = None
        self._source = source
        self._provider = None
        self._singleton = None
        return self

    def _get_provider(self) -> providers.Provider:
        if self._provider is not None:
            return self._provider

        if self.type is BindingType.CONSTANT:
            provider = providers.Object(self._source)
        else:
            if not callable(self._source):
                raise BindingResolutionError(
                    self.key, f"{self._source!r} is not constructible"
                )
            if self.type is BindingType.DYNAMIC_VALUE:
                provider = providers.Callable(self._source)
            else:
                provider = providers.Factory(self._source)

        self._provider = provider
        return provider

    def _get_singleton(self) -> providers.Singleton:
        if self._singleton is None:
            self._singleton = providers.Singleton(self._first_value)
        return self._singleton

    def _first_value(self, ctx: "Context", session: Optional[ResolutionSession]) -> Any:
        singleton = self._singleton
        value = self._resolve(ctx, session)
        if is_awaitable(value):
            return SharedAwaitable(value, release=singleton.reset)
        return value

    def get_value(
            self,
            ctx: "Context",
            session: Optional[ResolutionSession] = None
    ) -> ValueOrAwaitable[Any]:
        """
        Produce the bound value.

        A singleton is resolved once per binding. While its first resolution
        is still pending, every caller waits on that same resolution.

        :param ctx: The context resolving the binding; injected dependencies
                    are looked up there.
        :param session: The current resolution session.
        :return: The value, or an awaitable of it when the value is asynchronous.
        """
        if self.type is None:
            raise BindingResolutionError(self.key, "the binding is not bound to a value")

        if self.scope is not BindingScope.SINGLETON:
            return self._resolve(ctx, session)

        value = self._get_singleton()(ctx, session)
        if isinstance(value, SharedAwaitable) and value.resolved:
            return value.result()
        return value

    def _resolve(self, ctx: "Context", session: Optional[ResolutionSession]) -> ValueOrAwaitable[Any]:
        provider = self._get_provider()

        if self.type in (BindingType.CONSTANT, BindingType.DYNAMIC_VALUE):
            return provider()

        kwargs = resolve_injected_arguments(ctx, self._source, session)

        if self.type is BindingType.CLASS:
            return then(kwargs, lambda kw: provider(**kw))

        return then(kwargs, lambda kw: self._provided_value(provider(**kw)))

    def _provided_value(self, provider_inst: Any) -> ValueOrAwaitable[Any]:
        value = getattr(provider_inst, "value", None)
        if not callable(value):
            raise BindingResolutionError(
                self.key, f"provider {type(provider_inst).__qualname__} has no value() method"
            )
        return value()
