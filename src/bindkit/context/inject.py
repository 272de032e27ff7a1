"""
Constructor injection.

Dependencies are declared as parameter defaults::

    class GreetingController:
        def __init__(self, greeter=inject("services.greeter")):
            self.greeter = greeter

and resolved from the context that constructs the class.
"""
import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from .value import ValueOrAwaitable, all_of, discard, is_awaitable, then
from ..errors import CircularDependencyError

if TYPE_CHECKING:
    from .context import Context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Injection:
    """Marker for a constructor parameter resolved from the context."""
    key: str
    optional: bool = False


def inject(key: str, *, optional: bool = False) -> Any:
    """
    Declare a constructor dependency on a binding key.

    :param key: The binding key to resolve.
    :param optional: Inject None instead of failing when the key is not bound.
    """
    return Injection(key=key, optional=optional)


@dataclass(frozen=True)
class ResolutionSession:
    """The chain of binding keys being resolved, outermost first."""
    path: tuple[str, ...] = ()

    @classmethod
    def enter(cls, session: Optional["ResolutionSession"], key: str) -> "ResolutionSession":
        current = session.path if session is not None else ()
        if key in current:
            raise CircularDependencyError(current + (key,))
        return cls(path=current + (key,))


def injections_of(target: Any) -> dict[str, Injection]:
    """Get the injected parameters of a class or callable, by parameter name."""
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        # builtins without an introspectable signature
        return {}

    return {
        name: param.default
        for name, param in signature.parameters.items()
        if isinstance(param.default, Injection)
    }


def resolve_injected_arguments(
        ctx: "Context",
        target: Any,
        session: Optional[ResolutionSession] = None
) -> ValueOrAwaitable[dict[str, Any]]:
    """
    Resolve the injected constructor arguments of ``target``.

    :param ctx: The context to resolve dependencies from.
    :param target: The class or callable being constructed.
    :param session: The current resolution session.
    :return: Keyword arguments, or an awaitable of them if any dependency is asynchronous.
    """
    injections = injections_of(target)
    if not injections:
        return {}

    logger.debug("Resolving %d injected argument(s) for %s",
                 len(injections), getattr(target, "__qualname__", target))

    resolved: dict[str, Any] = {}
    pending: dict[str, Any] = {}

    try:
        for name, injection in injections.items():
            value = ctx.get_value_or_awaitable(
                injection.key,
                session=session,
                optional=injection.optional
            )
            if is_awaitable(value):
                pending[name] = value
            else:
                resolved[name] = value
    except BaseException:
        for value in pending.values():
            discard(value)
        raise

    if not pending:
        return resolved

    def _merge(values: list) -> dict[str, Any]:
        resolved.update(zip(pending.keys(), values))
        return resolved

    return then(all_of(pending.values()), _merge)
